"""Logic EXS24 instrument format."""

from exsconvert.formats.exs.reader import EXSReader
from exsconvert.formats.exs.decoder import EXSDecoder

__all__ = ["EXSReader", "EXSDecoder"]
