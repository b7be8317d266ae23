"""
EXS24 to MPC XPM conversion.

Example:
    from exsconvert.converters import ConvertOptions, convert_directory

    options = ConvertOptions.create("Instruments", "Programs")
    batch = convert_directory(options)
    print(f"{len(batch.converted)} converted, {len(batch.failed)} failed")
"""

from exsconvert.converters.batch import (
    BatchResult,
    FileResult,
    convert_directory,
    convert_file,
    find_exs_files,
)
from exsconvert.converters.exs_to_xpm import EXSToXPMConverter, project_instrument
from exsconvert.converters.options import DEFAULT_LAYERS_PER_INSTRUMENT, ConvertOptions
from exsconvert.converters.samples import SampleIndex

__all__ = [
    "BatchResult",
    "FileResult",
    "convert_directory",
    "convert_file",
    "find_exs_files",
    "EXSToXPMConverter",
    "project_instrument",
    "DEFAULT_LAYERS_PER_INSTRUMENT",
    "ConvertOptions",
    "SampleIndex",
]
