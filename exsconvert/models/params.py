"""
Global instrument parameters (EXS "options" chunk).
"""

from dataclasses import dataclass, field
from typing import List

MODULATION_SLOTS = 10


@dataclass
class ModulationSlot:
    """One routing of the EXS modulation matrix."""

    destination: int = 0
    source: int = 0
    via: int = 0
    amount: int = 0
    amount_via: int = 0
    invert_via: bool = False
    invert: bool = False
    bypass: bool = False

    @property
    def is_active(self) -> bool:
        return not self.bypass and (self.destination != 0 or self.source != 0)


def create_modulation_matrix() -> List[ModulationSlot]:
    """Create an empty 10-slot modulation matrix."""
    return [ModulationSlot() for _ in range(MODULATION_SLOTS)]


@dataclass
class Params:
    """
    Synth-wide defaults decoded from the sparse key/value table.

    Envelope 1 drives the filter, envelope 2 drives the amplifier.
    All values are raw EXS integers; unset keys stay at zero.
    """

    # Output
    output_volume: int = 0
    key_scale: int = 0
    pitch_bend_up: int = 0
    pitch_bend_down: int = 0
    mono_mode: int = 0
    voices: int = 0
    unison: bool = False

    # Tuning
    transpose: int = 0
    coarse_tune: int = 0
    coarse_tune_remote: int = 0
    fine_tune: int = 0
    glide_time: int = 0
    random_detune: int = 0

    # Filter
    filter_on: bool = False
    filter_type: int = 0
    filter_via_key: int = 0
    filter_drive: int = 0
    filter_fat: bool = False

    # LFOs
    lfo1_decay_delay: int = 0
    lfo1_rate: int = 0
    lfo1_waveform: int = 0
    lfo2_rate: int = 0
    lfo2_waveform: int = 0
    lfo3_rate: int = 0

    # Pitch
    pitcher: int = 0
    pitcher_via_vel: int = 0

    # Envelope 1 (filter)
    env1_attack: int = 0
    env1_attack_via_vel: int = 0
    env1_decay: int = 0
    env1_sustain: int = 0
    env1_release: int = 0

    # Envelope 2 (amplifier)
    env2_attack: int = 0
    env2_attack_via_vel: int = 0
    env2_decay: int = 0
    env2_sustain: int = 0
    env2_release: int = 0

    # Level and velocity
    level_via_vel: int = 0
    level_fixed: int = 0
    time_curve: int = 0
    time_via: int = 0
    hold_via: int = 0
    velocity_offset: int = 0
    velocity_xfade: int = 0
    velocity_xfade_type: int = 0
    velocity_random: int = 0
    sample_select_random: int = 0

    modulation: List[ModulationSlot] = field(default_factory=create_modulation_matrix)

    @property
    def active_modulations(self) -> List[ModulationSlot]:
        return [slot for slot in self.modulation if slot.is_active]
