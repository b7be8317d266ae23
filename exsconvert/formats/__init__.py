"""Format handlers for EXS24 instruments and MPC programs."""

from exsconvert.formats.exs import EXSReader, EXSDecoder
from exsconvert.formats.xpm import XPMReader, XPMWriter

__all__ = ["EXSReader", "EXSDecoder", "XPMReader", "XPMWriter"]
