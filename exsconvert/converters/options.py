"""
Conversion options.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from exsconvert.models.program import ProgramType
from exsconvert.utils.validation import ValidationError, validate_layers_per_instrument

DEFAULT_LAYERS_PER_INSTRUMENT = 4


@dataclass
class ConvertOptions:
    """
    Settings for a conversion run.

    Attributes:
        search_path: Directory (or single file) holding .exs instruments
        output_path: Directory receiving one sub-directory per instrument
        layers_per_instrument: Maximum zones packed into one program instrument
        skip_errors: Log and continue on per-file errors instead of aborting
        program_type: Forced program type, None to auto-detect per file
        samples_path: Where to look for samples (defaults to search_path)
    """

    search_path: Path
    output_path: Path
    layers_per_instrument: int = DEFAULT_LAYERS_PER_INSTRUMENT
    skip_errors: bool = True
    program_type: Optional[ProgramType] = None
    samples_path: Optional[Path] = None

    def __post_init__(self):
        self.search_path = Path(self.search_path)
        self.output_path = Path(self.output_path)
        if self.samples_path is not None:
            self.samples_path = Path(self.samples_path)

        validate_layers_per_instrument(self.layers_per_instrument)
        try:
            self.program_type = ProgramType.parse(self.program_type)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    @property
    def samples_root(self) -> Path:
        """Directory to index samples from."""
        if self.samples_path is not None:
            return self.samples_path
        if self.search_path.is_file():
            return self.search_path.parent
        return self.search_path

    @classmethod
    def create(
        cls,
        search_path: Union[str, Path],
        output_path: Union[str, Path],
        layers_per_instrument: int = DEFAULT_LAYERS_PER_INSTRUMENT,
        skip_errors: bool = True,
        program_type: Optional[Union[str, ProgramType]] = None,
        samples_path: Optional[Union[str, Path]] = None,
    ) -> "ConvertOptions":
        """Build options from loosely typed values (strings from the CLI or env)."""
        return cls(
            search_path=Path(search_path),
            output_path=Path(output_path),
            layers_per_instrument=layers_per_instrument,
            skip_errors=skip_errors,
            program_type=program_type,
            samples_path=Path(samples_path) if samples_path else None,
        )
