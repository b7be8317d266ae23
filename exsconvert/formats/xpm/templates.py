"""
Empty MPC program templates.

Both templates pre-number all 128 instrument slots with inert defaults.
Drum programs additionally carry the 128-entry pad to note map.
"""

from exsconvert.models.program import (
    LFO,
    PROGRAM_SLOTS,
    Instrument,
    PadNote,
    Program,
    ProgramType,
    TriggerMode,
    ZonePlay,
    create_default_layers,
)


def create_keygroup_instrument(number: int, layers: int = 4) -> Instrument:
    """Create an empty keygroup slot spanning the whole keyboard."""
    return Instrument(
        number=number,
        low_note=0,
        high_note=127,
        zone_play=ZonePlay.CYCLE,
        lfo=LFO(type="sine", rate=0.5),
        layers=create_default_layers(layers),
    )


def create_drum_instrument(number: int) -> Instrument:
    """Create an empty, monophonic one-shot drum pad."""
    return Instrument(
        number=number,
        polyphony=1,
        low_note=0,
        high_note=0,
        zone_play=ZonePlay.CYCLE,
        trigger_mode=TriggerMode.ONE_SHOT,
        filter_type=0,
        cutoff=1.0,
        resonance=0.0,
        filter_env_amt=0.5,
        velocity_to_filter_envelope=0.0,
        filter_decay=0.0,
        filter_sustain=1.0,
        volume_decay=0.0,
        volume_release=0.005,
        pitch_sustain=0.5,
        pitch_env_amount=0.5,
        velocity_sensitivity=0.5,
        lfo=LFO(type="Sine", rate=0.25),
        warp_tempo=0.0,
        bpm_lock=False,
    )


def create_keygroup_program(layers: int = 4) -> Program:
    """
    Create an empty keygroup program.

    Args:
        layers: Template layers per instrument slot

    Returns:
        Program with 128 numbered keygroup slots
    """
    return Program(
        program_type=ProgramType.KEYGROUP,
        instruments=[create_keygroup_instrument(i + 1, layers) for i in range(PROGRAM_SLOTS)],
    )


def create_drum_program() -> Program:
    """Create an empty drum program with pad n mapped to note n-1."""
    return Program(
        program_type=ProgramType.DRUM,
        instruments=[create_drum_instrument(i + 1) for i in range(PROGRAM_SLOTS)],
        pad_note_map=[PadNote(number=i + 1, note=i) for i in range(PROGRAM_SLOTS)],
        pad_group_map=[],
        keygroup_pitch_bend_range=0.0,
        keygroup_wheel_to_lfo=0.0,
        keygroup_aftertouch_to_filter=0.0,
    )


def create_program(program_type: ProgramType, layers: int = 4) -> Program:
    """Create the template for a program type."""
    if program_type == ProgramType.DRUM:
        return create_drum_program()
    return create_keygroup_program(layers)
