"""
exsconvert - Convert Logic EXS24 instruments to Akai MPC programs.

This library provides tools to:
- Decode EXS24 instrument files (.exs), both byte orders
- Group zones into MPC keygroup or drum program instruments
- Write MPC XPM programs and copy the samples they use

Example usage:
    from exsconvert import EXSReader, ProgramType
    from exsconvert.converters import EXSToXPMConverter, SampleIndex

    # Read EXS instrument
    instrument = EXSReader.read("Piano.exs")

    # Project onto a keygroup program and write it
    converter = EXSToXPMConverter(sample_index=SampleIndex.build("Samples"))
    converter.convert(instrument, ProgramType.KEYGROUP, "out/Piano")
"""

__version__ = "0.1.0"
__author__ = "exsconvert Contributors"

from exsconvert.formats.exs.reader import EXSReader
from exsconvert.formats.xpm.reader import XPMReader
from exsconvert.formats.xpm.writer import XPMWriter
from exsconvert.models.instrument import EXSInstrument, Group, Sample, Zone
from exsconvert.models.program import Program, ProgramType

__all__ = [
    "EXSReader",
    "XPMReader",
    "XPMWriter",
    "EXSInstrument",
    "Group",
    "Sample",
    "Zone",
    "Program",
    "ProgramType",
]
