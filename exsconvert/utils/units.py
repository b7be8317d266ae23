"""
Value and unit converters between EXS parameter ranges and MPC program values.

Every converter clamps its input to the documented domain first, so all of
them are total functions. Floats are rendered for XPM output with
format_decimal() which gives the fixed 6-decimal strings the MPC expects.

EXS ranges:
    Group volume:   -12..+6 dB (legacy gain curve)
    Zone volume:    -60..+12 dB
    Pan:            -64..+63 (0 = center)
    Scale:          0..100 (% key tracking)
    Output:         0..15
    Envelope time:  0..127 (0..10 seconds)
    Envelope level: 0..127
    Filter:         0..127
    Curves:         -99..+99 (negatives may arrive as 0xFF00 + n)
"""

import math

# Gain curve reference points
MINUS_12_DB = 0.353
PLUS_6_DB = 1.0

# Envelope time limits in seconds
MIN_ENV_TIME = 0.001
MAX_ENV_TIME = 10.0
DEFAULT_ATTACK_TIME = 0.001
DEFAULT_HOLD_TIME = 0.001
DEFAULT_DECAY_TIME = 0.001
DEFAULT_RELEASE_TIME = 0.63
DEFAULT_SUSTAIN_LEVEL = 1.0

DEFAULT_ENVELOPE_CURVE = 0.5

# Two semitones expressed as a fraction of an octave
DEFAULT_PITCH_BEND_RANGE = 2 / 12


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp value to [minimum, maximum]."""
    return max(minimum, min(value, maximum))


def format_decimal(value: float) -> str:
    """Format a float the way XPM files store it."""
    return f"{value:.6f}"


def normalize_value(value: float, minimum: float, maximum: float) -> float:
    """Clamp value to [minimum, maximum] and divide by maximum."""
    return clamp(value, minimum, maximum) / maximum


def convert_gain(volume_db: float) -> float:
    """
    Convert a group volume in dB to the MPC instrument volume.

    Linear interpolation between -12 dB (0.353) and +6 dB (1.0).
    """
    volume_db = clamp(volume_db, -12, 6)
    return MINUS_12_DB + (PLUS_6_DB - MINUS_12_DB) * (12 + volume_db) / 18


def volume_db_to_linear(volume_db: float) -> float:
    """Convert a zone volume in dB (-60..+12) to a linear gain."""
    volume_db = clamp(volume_db, -60, 12)
    return math.pow(10.0, volume_db / 20.0)


def pan_to_normalized(pan: int) -> float:
    """Convert EXS pan (-64..+63) to 0.0..1.0, center at 64/127."""
    pan = clamp(pan, -64, 63)
    return (pan + 64.0) / 127.0


def scale_to_key_track(scale: int) -> float:
    """Convert EXS zone scale (0..100 %) to KeyTrack (0.0..1.0)."""
    scale = clamp(scale, 0, 100)
    return scale / 100.0


def output_to_audio_route(output: int) -> int:
    """Map an EXS output number to an MPC audio route (0 = main, 1..15)."""
    return int(clamp(output, 0, 15))


def normalize_log_env_time(
    seconds: float, minimum: float = MIN_ENV_TIME, maximum: float = MAX_ENV_TIME
) -> float:
    """
    Normalize an envelope duration on the MPC logarithmic taper.

    The MPC envelope time follows duration = a * e^(b * control), so the
    control value for a duration is ln(t/min) / ln(max/min).
    """
    seconds = clamp(seconds, minimum, maximum)
    return math.log(seconds / minimum) / math.log(maximum / minimum)


def env_time_to_normalized(raw: float) -> float:
    """
    Convert an EXS envelope time (0..127, 0..10 s) to a normalized value.

    Negative values fall back to the default attack time.
    """
    if raw < 0:
        return normalize_log_env_time(DEFAULT_ATTACK_TIME)
    seconds = (raw / 127.0) * 10.0
    return normalize_log_env_time(seconds)


def env_level_to_normalized(raw: float) -> float:
    """Convert an EXS envelope level (0..127) to 0.0..1.0."""
    return clamp(raw, 0, 127) / 127.0


def filter_to_normalized(raw: float) -> float:
    """Convert an EXS filter cutoff or resonance (0..127) to 0.0..1.0."""
    return clamp(raw, 0, 127) / 127.0


def envelope_curve_to_normalized(raw: int) -> float:
    """
    Convert an EXS envelope curve to an MPC curve (0.0..1.0, 0.5 = linear).

    Values at or above 0xFF00 carry a negative curve in wrapped form.
    """
    if raw >= 0xFF00:
        raw = raw - 0xFF00 - 0x100
    slope = clamp(raw / 99.0, -1.0, 1.0)
    return clamp((slope + 1.0) / 2.0, 0.0, 1.0)
