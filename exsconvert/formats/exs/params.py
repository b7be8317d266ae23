"""
Decoder for the EXS parameter ("options") chunk.

The chunk stores up to 100 sparse (key, value) pairs: 100 u8 keys at
offset 88 followed by 100 i16 values at offset 188. Keys are looked up in
PARAM_KEYS; unknown keys are logged and ignored.
"""

import logging
from typing import Dict, NamedTuple, Optional, Sequence

from exsconvert.models.params import MODULATION_SLOTS, Params
from exsconvert.utils.binary import decode_fixed_string, require_bytes, unpack_at

logger = logging.getLogger(__name__)

PARAMS_RECORD_SIZE = 388
PARAM_COUNT = 100
KEYS_OFFSET = 88
VALUES_OFFSET = 188


class ParamKey(NamedTuple):
    """Target of a parameter key: a Params field, or a modulation slot field."""

    field: str
    slot: Optional[int] = None
    is_bool: bool = False


PARAM_KEYS: Dict[int, ParamKey] = {
    3: ParamKey("pitch_bend_up"),
    4: ParamKey("pitch_bend_down"),
    5: ParamKey("voices"),
    7: ParamKey("output_volume"),
    8: ParamKey("key_scale"),
    10: ParamKey("mono_mode"),
    14: ParamKey("coarse_tune"),
    15: ParamKey("fine_tune"),
    20: ParamKey("glide_time"),
    44: ParamKey("filter_on", is_bool=True),
    45: ParamKey("transpose"),
    46: ParamKey("filter_via_key"),
    60: ParamKey("lfo1_decay_delay"),
    61: ParamKey("lfo1_rate"),
    62: ParamKey("lfo1_waveform"),
    63: ParamKey("lfo2_rate"),
    64: ParamKey("lfo2_waveform"),
    72: ParamKey("pitcher"),
    73: ParamKey("pitcher_via_vel"),
    75: ParamKey("filter_drive"),
    76: ParamKey("env1_attack"),
    77: ParamKey("env1_attack_via_vel"),
    78: ParamKey("env1_decay"),
    79: ParamKey("env1_sustain"),
    80: ParamKey("env1_release"),
    81: ParamKey("env2_sustain"),
    82: ParamKey("env2_attack"),
    83: ParamKey("env2_attack_via_vel"),
    84: ParamKey("env2_decay"),
    85: ParamKey("env2_release"),
    89: ParamKey("level_via_vel"),
    90: ParamKey("level_fixed"),
    91: ParamKey("time_curve"),
    92: ParamKey("time_via"),
    95: ParamKey("velocity_offset"),
    97: ParamKey("velocity_xfade"),
    98: ParamKey("random_detune"),
    163: ParamKey("sample_select_random"),
    164: ParamKey("velocity_random"),
    165: ParamKey("velocity_xfade_type"),
    166: ParamKey("coarse_tune_remote"),
    167: ParamKey("lfo3_rate"),
    170: ParamKey("filter_fat", is_bool=True),
    171: ParamKey("unison", is_bool=True),
    172: ParamKey("hold_via"),
    243: ParamKey("filter_type"),
}

# Modulation matrix: six consecutive keys per slot starting at 173
MODULATION_BASE = 173
MODULATION_FIELDS = (
    ParamKey("destination"),
    ParamKey("source"),
    ParamKey("via"),
    ParamKey("amount"),
    ParamKey("amount_via"),
    ParamKey("invert_via", is_bool=True),
)
MODULATION_INVERT_BASE = 233
MODULATION_BYPASS_BASE = 244


def _modulation_keys() -> Dict[int, ParamKey]:
    keys = {}
    for slot in range(MODULATION_SLOTS):
        for index, target in enumerate(MODULATION_FIELDS):
            keys[MODULATION_BASE + 6 * slot + index] = target._replace(slot=slot)
        keys[MODULATION_INVERT_BASE + slot] = ParamKey("invert", slot, True)
        keys[MODULATION_BYPASS_BASE + slot] = ParamKey("bypass", slot, True)
    return keys


PARAM_KEYS.update(_modulation_keys())


def decode_params(keys: Sequence[int], values: Sequence[int]) -> Params:
    """
    Build Params from parallel key/value arrays.

    Args:
        keys: Parameter keys (u8)
        values: Parameter values (i16)

    Returns:
        Params with every known key applied; later duplicates win
    """
    params = Params()
    for key, value in zip(keys, values):
        target = PARAM_KEYS.get(key)
        if target is None:
            if key:
                logger.debug("Unknown parameter key %d (value %d)", key, value)
            continue

        decoded = value != 0 if target.is_bool else value
        if target.slot is None:
            setattr(params, target.field, decoded)
        else:
            setattr(params.modulation[target.slot], target.field, decoded)
    return params


def read_params(data: bytes, offset: int, big_endian: bool) -> Params:
    """
    Decode a parameter chunk starting at offset.

    Raises:
        EXSFormatError: If the record is cut short
    """
    require_bytes(data, offset, PARAMS_RECORD_SIZE, "params record")
    name = decode_fixed_string(data[offset + 20 : offset + 84])
    keys = unpack_at(data, offset + KEYS_OFFSET, f"{PARAM_COUNT}B", big_endian)
    values = unpack_at(data, offset + VALUES_OFFSET, f"{PARAM_COUNT}h", big_endian)
    logger.debug("Params chunk %r at 0x%X", name, offset)
    return decode_params(keys, values)
