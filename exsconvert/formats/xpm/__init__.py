"""Akai MPC XPM program format."""

from exsconvert.formats.xpm.reader import XPMReader
from exsconvert.formats.xpm.writer import XPMWriter
from exsconvert.formats.xpm.templates import (
    create_drum_program,
    create_keygroup_program,
    create_program,
)

__all__ = [
    "XPMReader",
    "XPMWriter",
    "create_drum_program",
    "create_keygroup_program",
    "create_program",
]
