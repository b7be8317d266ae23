"""
Batch conversion of EXS instrument folders.

Each .exs file found under the search path becomes one output folder
holding the program and the samples it uses:

    <output>/<name>/<name>.xpm
    <output>/<name>/<sample>.WAV
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Union

from exsconvert.analysis.program_type import ProgramClassifier, classify_program
from exsconvert.converters.exs_to_xpm import EXSToXPMConverter
from exsconvert.converters.options import ConvertOptions
from exsconvert.converters.samples import SampleIndex, walk_files
from exsconvert.formats.exs.reader import EXS_SUFFIXES, EXSReader
from exsconvert.formats.xpm.writer import XPMWriter
from exsconvert.models.program import ProgramType
from exsconvert.utils.validation import ConversionError, EXSConvertError

logger = logging.getLogger(__name__)


@dataclass
class FileResult:
    """Outcome of converting a single .exs file."""

    source: Path
    success: bool = False
    program_type: Optional[ProgramType] = None
    output_dir: Optional[Path] = None
    xpm_path: Optional[Path] = None
    instruments: int = 0
    layers: int = 0
    error: Optional[str] = None


@dataclass
class BatchResult:
    """Outcome of a batch run, in discovery order."""

    results: List[FileResult] = field(default_factory=list)

    @property
    def converted(self) -> List[FileResult]:
        return [result for result in self.results if result.success]

    @property
    def failed(self) -> List[FileResult]:
        return [result for result in self.results if not result.success]

    def __len__(self) -> int:
        return len(self.results)


def find_exs_files(search_path: Union[str, Path]) -> List[Path]:
    """
    Find EXS instruments under a directory, recursively, in name order.

    A path naming a single file is returned as is.

    Raises:
        FileNotFoundError: If search_path does not exist
    """
    search_path = Path(search_path)
    if not search_path.exists():
        raise FileNotFoundError(f"Search path not found: {search_path}")
    if search_path.is_file():
        return [search_path]

    return [path for path in walk_files(search_path) if path.suffix in EXS_SUFFIXES]


def convert_file(
    path: Union[str, Path],
    options: ConvertOptions,
    sample_index: Optional[SampleIndex] = None,
    classifier: Optional[ProgramClassifier] = None,
) -> FileResult:
    """
    Convert one .exs file into <output>/<name>/<name>.xpm.

    When conversion fails after the instrument folder was created by this
    call, the folder is removed again.

    Args:
        path: EXS instrument file
        options: Conversion options
        sample_index: Shared sample index (built from options when omitted)
        classifier: Program type classifier used when no type is forced

    Returns:
        FileResult describing the outcome

    Raises:
        EXSConvertError: On conversion errors when options.skip_errors is off
        OSError: On I/O errors when options.skip_errors is off
    """
    path = Path(path)
    result = FileResult(source=path)

    if sample_index is None:
        sample_index = SampleIndex.build(options.samples_root)

    output_dir: Optional[Path] = None
    created = False
    try:
        instrument = EXSReader.read(path)
        program_type = options.program_type or classify_program(instrument, classifier)
        result.program_type = program_type
        logger.info("Converting %s as %s program", path.name, program_type.value)

        output_dir = options.output_path / instrument.name
        created = not output_dir.exists()
        output_dir.mkdir(parents=True, exist_ok=True)

        converter = EXSToXPMConverter(options.layers_per_instrument, options.skip_errors, sample_index)
        program = converter.project(instrument, program_type, output_dir)
        if program is None:
            _rollback(output_dir, created)
            result.error = "skipped: too many instruments"
            return result

        xpm_path = XPMWriter.write(program, output_dir / f"{instrument.name}.xpm")
        result.success = True
        result.output_dir = output_dir
        result.xpm_path = xpm_path
        result.instruments = len(program.instruments)
        result.layers = program.layer_count
        return result

    except (EXSConvertError, OSError) as e:
        if output_dir is not None:
            _rollback(output_dir, created)
        if not options.skip_errors:
            raise
        logger.warning("Skipping %s: %s", path, e)
        result.error = str(e)
        return result


def convert_directory(
    options: ConvertOptions,
    classifier: Optional[ProgramClassifier] = None,
    progress: Optional[Callable[[Path], None]] = None,
) -> BatchResult:
    """
    Convert every .exs file found under options.search_path.

    The sample index is built once and shared by all files.

    Args:
        options: Conversion options
        classifier: Program type classifier used when no type is forced
        progress: Called with each file path before it is converted

    Returns:
        BatchResult with one entry per file

    Raises:
        ConversionError: If no .exs files are found
    """
    files = find_exs_files(options.search_path)
    if not files:
        raise ConversionError(f"no exs files found in {options.search_path}")

    sample_index = SampleIndex.build(options.samples_root)
    logger.info("Found %d instruments, %d sample files", len(files), len(sample_index))

    batch = BatchResult()
    for path in files:
        if progress is not None:
            progress(path)
        batch.results.append(convert_file(path, options, sample_index, classifier))
    return batch


def _rollback(output_dir: Path, created: bool) -> None:
    """Remove an instrument folder created by a failed conversion."""
    if created and output_dir.exists():
        logger.debug("Removing partial output %s", output_dir)
        shutil.rmtree(output_dir)
