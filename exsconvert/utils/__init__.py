"""Utility functions for exsconvert."""

from exsconvert.utils.binary import decode_fixed_string, twos_complement
from exsconvert.utils.units import (
    convert_gain,
    volume_db_to_linear,
    pan_to_normalized,
    scale_to_key_track,
    output_to_audio_route,
    env_time_to_normalized,
    env_level_to_normalized,
    filter_to_normalized,
    envelope_curve_to_normalized,
    format_decimal,
)
from exsconvert.utils.validation import (
    EXSConvertError,
    EXSFormatError,
    ConversionError,
    NoInstrumentsError,
    NoGroupsError,
    TooManyInstrumentsError,
    SampleNotFoundError,
    ValidationError,
)

__all__ = [
    "decode_fixed_string",
    "twos_complement",
    "convert_gain",
    "volume_db_to_linear",
    "pan_to_normalized",
    "scale_to_key_track",
    "output_to_audio_route",
    "env_time_to_normalized",
    "env_level_to_normalized",
    "filter_to_normalized",
    "envelope_curve_to_normalized",
    "format_decimal",
    "EXSConvertError",
    "EXSFormatError",
    "ConversionError",
    "NoInstrumentsError",
    "NoGroupsError",
    "TooManyInstrumentsError",
    "SampleNotFoundError",
    "ValidationError",
]
