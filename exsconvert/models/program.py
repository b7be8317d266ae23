"""
MPC program data model (XPM).

A program holds a fixed number of instrument slots. Keygroup programs
give every instrument a key window; drum programs map one pad to one
note through the pad note map.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional, Union

from exsconvert.utils.units import DEFAULT_ENVELOPE_CURVE

PROGRAM_SLOTS = 128


class ProgramType(Enum):
    """
    MPC program types.

    Keygroup programs spread samples over key ranges, drum programs
    assign each sample to a single pad.
    """

    KEYGROUP = "Keygroup"
    DRUM = "Drum"

    @classmethod
    def parse(cls, value: Optional[Union[str, "ProgramType"]]) -> Optional["ProgramType"]:
        """
        Parse a program type name (case-insensitive).

        Args:
            value: "keygroup", "drum", a ProgramType, or empty/None for auto-detect

        Returns:
            Matching ProgramType, or None for auto-detect
        """
        if value is None or isinstance(value, ProgramType):
            return value
        text = value.strip().lower()
        if not text or text == "auto":
            return None
        for member in cls:
            if member.value.lower() == text:
                return member
        raise ValueError(f"Invalid program type: {value!r} (expected keygroup or drum)")


class ZonePlay(IntEnum):
    """How an instrument chooses between its layers."""

    CYCLE = 0
    VELOCITY = 1
    RANDOM = 2


class TriggerMode(IntEnum):
    ONE_SHOT = 0
    RELEASE = 1
    ATTACK = 2


@dataclass
class Version:
    file_version: str = "2.1"
    application: str = "MPC-V"
    application_version: str = "2.11.3.5"
    platform: str = "Linux"


@dataclass
class AudioRoute:
    route: int = 0
    sub_index: int = 0
    channel_bitmap: int = 3
    inserts_enabled: bool = True


@dataclass
class LFO:
    type: str = "Triangle"
    rate: float = 0.0
    sync: int = 0
    reset: bool = False
    pitch_amount: float = 0.0
    cutoff_amount: float = 0.0
    volume_amount: float = 0.0
    pan_amount: float = 0.0


@dataclass
class Layer:
    """One sample assignment inside an instrument."""

    number: int = 1
    active: bool = True
    volume: float = 1.0
    pan: float = 0.5
    pitch: float = 0.0
    tune_coarse: int = 0
    tune_fine: int = 0
    vel_start: int = 0
    vel_end: int = 127
    sample_start: int = 0
    sample_end: int = 0
    loop: bool = False
    loop_start: int = 0
    loop_end: int = 0
    loop_crossfade_length: int = 0
    loop_tune: int = 0
    mute: bool = False
    root_note: int = 0
    key_track: float = 0.0
    sample_name: str = ""
    sample_file: str = ""
    slice_index: int = 129
    direction: int = 0
    offset: int = 0
    slice_start: int = 0
    slice_end: int = 0
    slice_loop_start: int = 0
    slice_loop: int = 0
    slice_loop_crossfade_length: int = 0


def create_default_layers(count: int = 4) -> List[Layer]:
    """Create inert, numbered template layers."""
    return [Layer(number=i + 1) for i in range(count)]


@dataclass
class Instrument:
    """
    A program instrument slot (a keygroup, or a pad in drum programs).

    Defaults are those of an empty keygroup slot.
    """

    number: int = 1
    cue_bus_enable: bool = False
    audio_route: AudioRoute = field(default_factory=AudioRoute)
    send1: float = 0.0
    send2: float = 0.0
    send3: float = 0.0
    send4: float = 0.0
    volume: float = 0.707946
    mute: bool = False
    solo: bool = False
    pan: float = 0.5
    automation_filter: int = 1
    tune_coarse: int = 0
    tune_fine: int = 0
    mono: bool = False
    polyphony: int = 0
    filter_keytrack: float = 0.0
    low_note: int = 0
    high_note: int = 127
    ignore_base_note: bool = False
    zone_play: int = ZonePlay.VELOCITY
    trigger_mode: int = TriggerMode.ATTACK
    mute_group: int = 0
    lfo_pitch: float = 0.0
    lfo_cutoff: float = 0.0
    lfo_volume: float = 0.0
    lfo_pan: float = 0.0
    one_shot: bool = False
    filter_type: int = 3
    cutoff: float = 0.24
    resonance: float = 0.03
    filter_env_amt: float = 0.33
    after_touch_to_filter: float = 0.0
    velocity_to_start: float = 0.0
    velocity_to_filter_attack: float = 0.0
    velocity_to_filter: float = 0.0
    velocity_to_filter_envelope: float = 0.25
    filter_attack: float = 0.0
    filter_decay: float = 0.64
    filter_sustain: float = 0.0078
    filter_release: float = 0.0
    filter_hold: float = 0.0
    filter_attack_curve: float = DEFAULT_ENVELOPE_CURVE
    filter_decay_curve: float = DEFAULT_ENVELOPE_CURVE
    filter_release_curve: float = DEFAULT_ENVELOPE_CURVE
    filter_decay_type: bool = True
    filter_ad_envelope: bool = True
    volume_hold: float = 0.0
    volume_decay_type: bool = True
    volume_ad_envelope: bool = True
    volume_attack: float = 0.0
    volume_decay: float = 0.04
    volume_sustain: float = 1.0
    volume_release: float = 0.0
    volume_attack_curve: float = DEFAULT_ENVELOPE_CURVE
    volume_decay_curve: float = DEFAULT_ENVELOPE_CURVE
    volume_release_curve: float = DEFAULT_ENVELOPE_CURVE
    pitch_attack: float = 0.0
    pitch_hold: float = 0.0
    pitch_decay: float = 0.0
    pitch_sustain: float = 0.0
    pitch_release: float = 0.0
    pitch_attack_curve: float = DEFAULT_ENVELOPE_CURVE
    pitch_decay_curve: float = DEFAULT_ENVELOPE_CURVE
    pitch_release_curve: float = DEFAULT_ENVELOPE_CURVE
    pitch_env_amount: float = 0.0
    velocity_to_pitch: float = 0.0
    velocity_to_volume_attack: float = 0.0
    velocity_sensitivity: float = 0.31
    velocity_to_pan: float = 0.0
    lfo: LFO = field(default_factory=LFO)
    warp_tempo: float = 97.272003
    bpm_lock: bool = True
    warp_enable: bool = False
    stretch_percentage: int = 100
    layers: List[Layer] = field(default_factory=list)


@dataclass
class PadNote:
    number: int
    note: int


@dataclass
class PadGroup:
    number: int
    group: int = 0


@dataclass
class Program:
    """
    A complete MPC program.

    pad_note_map/pad_group_map are only present on drum programs.
    """

    program_type: ProgramType = ProgramType.KEYGROUP
    name: str = ""
    version: Version = field(default_factory=Version)
    cue_bus_enable: bool = False
    audio_route: AudioRoute = field(default_factory=lambda: AudioRoute(route=2))
    send1: float = 0.0
    send2: float = 0.0
    send3: float = 0.0
    send4: float = 0.0
    volume: float = 0.707946
    mute: bool = False
    solo: bool = False
    pan: float = 0.5
    automation_filter: int = 1
    pitch: float = 0.0
    tune_coarse: int = 0
    tune_fine: int = 0
    mono: bool = False
    polyphony: int = 0
    portamento_time: float = 0.0
    portamento_legato: bool = False
    portamento_quantized: bool = False
    xfader_route: int = 0
    instruments: List[Instrument] = field(default_factory=list)
    pad_note_map: Optional[List[PadNote]] = None
    pad_group_map: Optional[List[PadGroup]] = None
    keygroup_master_transpose: float = 0.5
    keygroup_num_keygroups: int = 0
    keygroup_pitch_bend_range: float = 0.34
    keygroup_wheel_to_lfo: float = 0.94
    keygroup_aftertouch_to_filter: float = 0.41

    @property
    def is_drum(self) -> bool:
        return self.program_type == ProgramType.DRUM

    @property
    def layer_count(self) -> int:
        return sum(len(instrument.layers) for instrument in self.instruments)

    def sample_files(self) -> List[str]:
        """Sample files referenced by the program's layers, in order."""
        files: List[str] = []
        for instrument in self.instruments:
            for layer in instrument.layers:
                if layer.sample_file and layer.sample_file not in files:
                    files.append(layer.sample_file)
        return files
