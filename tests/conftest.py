"""Test configuration and fixtures."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from exs_builder import EXSBuilder


@pytest.fixture
def builder():
    """Return a fresh little-endian EXS builder."""
    return EXSBuilder()


@pytest.fixture
def keygroup_data():
    """
    Return bytes of a small pitched instrument.

    Two key ranges (C1-B2 with two velocity layers, C3-C4 with one),
    all in a single group, one sample per zone.
    """
    return (
        EXSBuilder()
        .add_group("Main", id=0)
        .add_zone("Low Soft", key=48, key_low=36, key_high=59, vel_low=0, vel_high=63, sample_index=0)
        .add_zone("Low Hard", key=48, key_low=36, key_high=59, vel_low=64, vel_high=127, sample_index=1)
        .add_zone("High", key=66, key_low=60, key_high=72, sample_index=2)
        .add_sample("piano_low_p", file_name="piano_low_p.wav")
        .add_sample("piano_low_f", file_name="piano_low_f.wav")
        .add_sample("piano_high", file_name="piano_high.wav")
        .build()
    )


@pytest.fixture
def drum_data():
    """Return bytes of a four-pad drum kit (single-note, one-shot zones)."""
    builder = EXSBuilder().add_group("Kit", id=0)
    for index, (name, note) in enumerate([("Kick", 36), ("Snare", 38), ("Hat", 42), ("Tom", 45)]):
        builder.add_zone(name, key=note, key_low=note, key_high=note, options=0x01, sample_index=index)
    for name in ("kick", "snare", "hat", "tom"):
        builder.add_sample(name, file_name=f"{name}.wav")
    return builder.build()


@pytest.fixture
def samples_dir(tmp_path):
    """Return a folder holding every sample file the fixtures reference."""
    folder = tmp_path / "Samples"
    (folder / "Piano").mkdir(parents=True)
    (folder / "Drums").mkdir(parents=True)
    for name in ("piano_low_p", "piano_low_f", "piano_high"):
        (folder / "Piano" / f"{name}.wav").write_bytes(b"RIFF" + name.encode())
    for name in ("kick", "snare", "hat", "tom"):
        (folder / "Drums" / f"{name}.wav").write_bytes(b"RIFF" + name.encode())
    return folder


@pytest.fixture
def instrument_dir(tmp_path, keygroup_data, drum_data):
    """Return a folder of .exs files: Piano.exs and Drums/Kit.exs."""
    folder = tmp_path / "Instruments"
    (folder / "Drums").mkdir(parents=True)
    (folder / "Piano.exs").write_bytes(keygroup_data)
    (folder / "Drums" / "Kit.exs").write_bytes(drum_data)
    return folder
