"""
Error types and validation helpers for EXS conversion.
"""

from typing import Optional


class EXSConvertError(Exception):
    """Base class for all conversion errors."""

    pass


class EXSFormatError(EXSConvertError):
    """Raised when an EXS file is structurally invalid (magic, chunk size, short read)."""

    pass


class ConversionError(EXSConvertError):
    """Raised when a decoded instrument cannot be projected to a program."""

    pass


class NoInstrumentsError(ConversionError):
    """Raised when an instrument yields no playable zone clusters."""

    pass


class NoGroupsError(ConversionError):
    """Raised when an instrument yields no groups."""

    pass


class TooManyInstrumentsError(ConversionError):
    """Raised when an instrument needs more program slots than the target holds."""

    def __init__(self, name: str, count: int):
        super().__init__(f"{name}: too many instruments ({count})")
        self.name = name
        self.count = count


class SampleNotFoundError(EXSConvertError):
    """Raised when a referenced sample file is not in the sample index."""

    pass


class ValidationError(EXSConvertError):
    """Raised when conversion options fail validation."""

    pass


VALID_MAGICS = {
    b"SOBT": True,
    b"SOBJ": True,
    b"TBOS": False,
    b"JBOS": False,
}


def validate_exs_magic(magic: bytes) -> bool:
    """
    Validate an EXS header magic and return its byte order.

    Args:
        magic: Four magic bytes from the file header

    Returns:
        True for big-endian files, False for little-endian

    Raises:
        EXSFormatError: If the magic is not a known EXS marker
    """
    big_endian = VALID_MAGICS.get(bytes(magic))
    if big_endian is None:
        raise EXSFormatError(f"not an EXS file (magic {bytes(magic)!r})")
    return big_endian


def validate_midi_value(value: int, name: str = "value") -> None:
    """
    Validate that a value is in MIDI range (0-127).

    Args:
        value: The value to validate
        name: Name of the value for error messages

    Raises:
        ValidationError: If value is out of range
    """
    if not 0 <= value <= 127:
        raise ValidationError(f"{name} must be 0-127, got {value}")


def validate_layers_per_instrument(layers: int, maximum: Optional[int] = None) -> None:
    """
    Validate the number of zones packed into one program instrument.

    Raises:
        ValidationError: If layers is not a positive integer (or exceeds maximum)
    """
    if layers < 1:
        raise ValidationError(f"layers per instrument must be at least 1, got {layers}")
    if maximum is not None and layers > maximum:
        raise ValidationError(f"layers per instrument must be at most {maximum}, got {layers}")
