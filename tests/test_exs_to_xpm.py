"""Tests for the EXS to XPM projection."""

import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from exs_builder import EXSBuilder
from exsconvert.converters.exs_to_xpm import EXSToXPMConverter, project_instrument
from exsconvert.converters.samples import SampleIndex
from exsconvert.formats.exs.decoder import EXSDecoder
from exsconvert.models.program import ProgramType, TriggerMode, ZonePlay
from exsconvert.utils.units import format_decimal
from exsconvert.utils.validation import NoInstrumentsError, TooManyInstrumentsError


@pytest.fixture
def sample_index(samples_dir):
    return SampleIndex.build(samples_dir)


@pytest.fixture
def dest_dir(tmp_path):
    folder = tmp_path / "out"
    folder.mkdir()
    return folder


def single_zone(group=None, zone=None, sample="kick.wav", params=None):
    """Build an instrument with one group, one zone and one sample."""
    builder = EXSBuilder().add_group("Main", **(group or {}))
    builder.add_zone("Zone", **{"key": 60, "key_low": 36, "key_high": 72, **(zone or {})})
    builder.add_sample("kick", file_name=sample)
    if params:
        builder.add_params(params)
    return EXSDecoder().decode(builder.build(), "Single")


class TestKeygroupProjection:
    """Test cases for keygroup programs."""

    def test_instruments_and_layers(self, keygroup_data, sample_index, dest_dir):
        """Test the two-range piano: two instruments, three layers."""
        instrument = EXSDecoder().decode(keygroup_data, "Piano")
        program = EXSToXPMConverter(sample_index=sample_index).project(instrument, ProgramType.KEYGROUP, dest_dir)

        assert program.name == "Piano"
        assert program.program_type == ProgramType.KEYGROUP
        assert [i.number for i in program.instruments] == [1, 2]
        assert program.keygroup_num_keygroups == 2

        low, high = program.instruments
        assert (low.low_note, low.high_note) == (36, 59)
        assert (high.low_note, high.high_note) == (60, 72)
        assert [(l.vel_start, l.vel_end) for l in low.layers] == [(0, 63), (64, 127)]
        assert [l.number for l in low.layers] == [1, 2]
        assert [l.root_note for l in low.layers] == [49, 49]
        assert high.layers[0].root_note == 67

    def test_samples_copied(self, keygroup_data, sample_index, dest_dir):
        """Test that samples are copied with an upper-case extension."""
        instrument = EXSDecoder().decode(keygroup_data, "Piano")
        program = EXSToXPMConverter(sample_index=sample_index).project(instrument, ProgramType.KEYGROUP, dest_dir)
        layer = program.instruments[0].layers[0]

        assert layer.sample_name == "piano_low_p"
        assert layer.sample_file == "piano_low_p.WAV"
        assert (dest_dir / "piano_low_p.WAV").read_bytes() == b"RIFFpiano_low_p"
        assert sorted(p.name for p in dest_dir.iterdir()) == [
            "piano_high.WAV",
            "piano_low_f.WAV",
            "piano_low_p.WAV",
        ]

    def test_program_defaults(self, keygroup_data, sample_index, dest_dir):
        """Test program-level fields of keygroup programs."""
        instrument = EXSDecoder().decode(keygroup_data, "Piano")
        program = EXSToXPMConverter(sample_index=sample_index).project(instrument, ProgramType.KEYGROUP, dest_dir)

        assert format_decimal(program.keygroup_pitch_bend_range) == "0.166667"
        assert program.keygroup_master_transpose == 0.0
        assert program.pad_note_map is None
        assert program.instruments[0].zone_play == ZonePlay.VELOCITY
        assert program.instruments[0].trigger_mode == TriggerMode.ATTACK
        assert format_decimal(program.instruments[0].volume) == "0.784333"

    def test_zone_values(self, sample_index, dest_dir):
        """Test per-layer value conversion."""
        instrument = single_zone(
            zone={
                "pan": -64,
                "volume": -6,
                "scale": 50,
                "fine_tuning": -10,
                "coarse_tuning": 2,
                "sample_start": 10,
                "sample_end": 5000,
                "loop_start": 100,
                "loop_end": 4000,
                "loop_crossfade": 20,
                "loop_options": 0x01,
                "offset": 8,
            }
        )
        program = project_instrument(instrument, ProgramType.KEYGROUP, dest_dir, sample_index)
        layer = program.instruments[0].layers[0]

        assert layer.pan == 0.0
        assert format_decimal(layer.volume) == "0.501187"
        assert layer.key_track == 0.5
        assert (layer.tune_coarse, layer.tune_fine) == (2, -10)
        assert (layer.sample_start, layer.sample_end) == (10, 5000)
        assert (layer.slice_start, layer.slice_end) == (10, 5000)
        assert layer.loop is True
        assert layer.slice_loop == 1
        assert (layer.loop_start, layer.loop_end, layer.slice_loop_start) == (100, 4000, 100)
        assert layer.loop_crossfade_length == layer.slice_loop_crossfade_length == 20
        assert layer.offset == 8

    def test_velocity_clamped_to_group(self, sample_index, dest_dir):
        """Test that layer velocity windows are narrowed to the group."""
        instrument = single_zone(group={"vel_low": 1, "vel_high": 100})
        program = project_instrument(instrument, ProgramType.KEYGROUP, dest_dir, sample_index)

        layer = program.instruments[0].layers[0]
        assert (layer.vel_start, layer.vel_end) == (1, 100)

    def test_key_range_clamped_to_group(self, sample_index, dest_dir):
        """Test that instrument key windows are narrowed to the group."""
        instrument = single_zone(group={"key_low": 48, "key_high": 60})
        program = project_instrument(instrument, ProgramType.KEYGROUP, dest_dir, sample_index)

        assert (program.instruments[0].low_note, program.instruments[0].high_note) == (48, 60)

    def test_zone_outside_group_keys(self, sample_index, dest_dir):
        """Test that a cluster outside its group's keys is dropped."""
        instrument = single_zone(group={"key_low": 80, "key_high": 90})

        with pytest.raises(NoInstrumentsError):
            project_instrument(instrument, ProgramType.KEYGROUP, dest_dir, sample_index)

    def test_layer_outside_group_velocity(self, sample_index, dest_dir):
        """Test that a layer outside its group's velocities is dropped."""
        data = (
            EXSBuilder()
            .add_group("Main", vel_low=1, vel_high=100)
            .add_zone("In", key_low=36, key_high=72, vel_low=0, vel_high=90)
            .add_zone("Out", key_low=36, key_high=72, vel_low=110, vel_high=127)
            .add_sample("kick", file_name="kick.wav")
            .build()
        )
        program = project_instrument(EXSDecoder().decode(data), ProgramType.KEYGROUP, dest_dir, sample_index)

        assert len(program.instruments[0].layers) == 1
        assert program.instruments[0].layers[0].vel_end == 90

    def test_missing_sample_drops_layer(self, sample_index, dest_dir, caplog):
        """Test that unresolved samples drop their layer with a warning."""
        data = (
            EXSBuilder()
            .add_group("Main")
            .add_zone("Found", key_low=36, key_high=72, vel_high=63, sample_index=0)
            .add_zone("Lost", key_low=36, key_high=72, vel_low=64, sample_index=1)
            .add_sample("kick", file_name="kick.wav")
            .add_sample("gone", file_name="gone.wav")
            .build()
        )
        with caplog.at_level(logging.WARNING, logger="exsconvert"):
            program = project_instrument(EXSDecoder().decode(data), ProgramType.KEYGROUP, dest_dir, sample_index)

        assert [l.sample_name for l in program.instruments[0].layers] == ["kick"]
        assert "gone.wav" in caplog.text

    def test_all_samples_missing(self, sample_index, dest_dir):
        """Test that an instrument without any resolvable sample fails."""
        instrument = single_zone(sample="gone.wav")

        with pytest.raises(NoInstrumentsError):
            project_instrument(instrument, ProgramType.KEYGROUP, dest_dir, sample_index)

    def test_dropped_instrument_renumbers(self, sample_index, dest_dir):
        """Test that surviving instruments are numbered contiguously."""
        data = (
            EXSBuilder()
            .add_group("Main")
            .add_zone("Lost", key_low=0, key_high=10, sample_index=1)
            .add_zone("Found", key_low=20, key_high=30, sample_index=0)
            .add_sample("kick", file_name="kick.wav")
            .add_sample("gone", file_name="gone.wav")
            .build()
        )
        program = project_instrument(EXSDecoder().decode(data), ProgramType.KEYGROUP, dest_dir, sample_index)

        assert len(program.instruments) == 1
        assert program.instruments[0].number == 1
        assert program.instruments[0].low_note == 20
        assert program.keygroup_num_keygroups == 1

    def test_no_playable_zones(self, sample_index, dest_dir):
        """Test that an instrument without zones fails."""
        instrument = EXSDecoder().decode(EXSBuilder().add_group().build(), "Empty")

        with pytest.raises(NoInstrumentsError, match="no instruments found"):
            project_instrument(instrument, ProgramType.KEYGROUP, dest_dir, sample_index)

    def test_key_range_outside_midi_skipped(self, sample_index, dest_dir, caplog):
        """Test that a cluster with negative key numbers is dropped on its own."""
        data = (
            EXSBuilder()
            .add_group("Main")
            .add_zone("Bad", key=0, key_low=-5, key_high=40)
            .add_zone("Good", key=60, key_low=50, key_high=70)
            .add_sample("kick", file_name="kick.wav")
            .build()
        )
        with caplog.at_level(logging.DEBUG, logger="exsconvert"):
            program = project_instrument(EXSDecoder().decode(data), ProgramType.KEYGROUP, dest_dir, sample_index)

        assert [(i.low_note, i.high_note) for i in program.instruments] == [(50, 70)]
        assert program.instruments[0].number == 1
        assert "low note must be 0-127" in caplog.text

    def test_only_out_of_range_cluster(self, sample_index, dest_dir):
        """Test that nothing survives when the only cluster is out of range."""
        instrument = single_zone(zone={"key": 0, "key_low": -5, "key_high": 40})

        with pytest.raises(NoInstrumentsError):
            project_instrument(instrument, ProgramType.KEYGROUP, dest_dir, sample_index)


class TestDrumProjection:
    """Test cases for drum programs."""

    def test_kit(self, drum_data, sample_index, dest_dir):
        """Test that each pad becomes a single-note instrument."""
        instrument = EXSDecoder().decode(drum_data, "Kit")
        program = EXSToXPMConverter(sample_index=sample_index).project(instrument, ProgramType.DRUM, dest_dir)

        assert program.program_type == ProgramType.DRUM
        assert [(i.low_note, i.high_note) for i in program.instruments] == [(36, 36), (38, 38), (42, 42), (45, 45)]
        assert [i.layers[0].root_note for i in program.instruments] == [37, 39, 43, 46]
        assert all(i.one_shot for i in program.instruments)
        assert program.keygroup_num_keygroups == 4

    def test_pad_maps(self, drum_data, sample_index, dest_dir):
        """Test the drum pad maps and program defaults."""
        instrument = EXSDecoder().decode(drum_data, "Kit")
        program = project_instrument(instrument, ProgramType.DRUM, dest_dir, sample_index)

        assert len(program.pad_note_map) == 128
        assert (program.pad_note_map[0].number, program.pad_note_map[0].note) == (1, 0)
        assert program.pad_group_map == []
        assert program.keygroup_pitch_bend_range == 0.0

    def test_ranged_zone_collapses(self, sample_index, dest_dir):
        """Test that drum programs collapse key ranges to their low note."""
        instrument = single_zone(zone={"key_low": 36, "key_high": 40})
        program = project_instrument(instrument, ProgramType.DRUM, dest_dir, sample_index)

        assert (program.instruments[0].low_note, program.instruments[0].high_note) == (36, 36)


class TestGroupMapping:
    """Test cases for group-derived instrument settings."""

    def test_round_robin_cycles(self, sample_index, dest_dir):
        """Test that round-robin groups switch the instrument to cycle."""
        data = (
            EXSBuilder()
            .add_group("RR1", id=0, select_group=1)
            .add_group("RR2", id=1, select_group=0)
            .add_zone("A", key_low=36, key_high=36, group_index=0)
            .add_zone("B", key_low=36, key_high=36, group_index=1)
            .add_sample("kick", file_name="kick.wav")
            .build()
        )
        program = project_instrument(EXSDecoder().decode(data), ProgramType.KEYGROUP, dest_dir, sample_index)

        assert program.instruments[0].zone_play == ZonePlay.CYCLE
        assert len(program.instruments[0].layers) == 2

    def test_release_trigger(self, sample_index, dest_dir):
        """Test that release-triggered groups map to release trigger mode."""
        program = project_instrument(single_zone(group={"trigger": 1}), ProgramType.KEYGROUP, dest_dir, sample_index)

        assert program.instruments[0].trigger_mode == TriggerMode.RELEASE

    def test_audio_route(self, sample_index, dest_dir):
        """Test that zones with an output set route the instrument."""
        instrument = single_zone(zone={"options": 0x40, "output": 3})
        program = project_instrument(instrument, ProgramType.KEYGROUP, dest_dir, sample_index)

        assert program.instruments[0].audio_route.route == 3

    def test_filter(self, sample_index, dest_dir):
        """Test filter cutoff and resonance mapping."""
        instrument = single_zone(group={"cutoff": 127, "resonance": 64})
        slot = project_instrument(instrument, ProgramType.KEYGROUP, dest_dir, sample_index).instruments[0]

        assert slot.cutoff == 1.0
        assert format_decimal(slot.resonance) == "0.503937"

    def test_group_envelopes(self, sample_index, dest_dir):
        """Test envelopes taken from the group when there are no parameters."""
        instrument = single_zone(group={"attack2": 127, "sustain2": 127, "hold2": 127, "decay1": 127})
        slot = project_instrument(instrument, ProgramType.KEYGROUP, dest_dir, sample_index).instruments[0]

        assert slot.volume_attack == pytest.approx(1.0)
        assert slot.volume_sustain == 1.0
        assert slot.volume_hold == pytest.approx(1.0)
        assert slot.filter_decay == pytest.approx(1.0)
        assert slot.pitch_decay == pytest.approx(1.0)
        assert slot.pitch_hold == pytest.approx(1.0)
        assert slot.pitch_env_amount == 0.0
        assert slot.volume_attack_curve == 0.5

    def test_params_envelopes(self, sample_index, dest_dir):
        """Test that global parameters take precedence over group envelopes."""
        instrument = single_zone(group={"attack2": 127}, params={82: 0, 79: 127, 91: 99})
        slot = project_instrument(instrument, ProgramType.KEYGROUP, dest_dir, sample_index).instruments[0]

        assert slot.volume_attack == 0.0
        assert slot.filter_sustain == 1.0
        assert slot.volume_attack_curve == 1.0
        assert slot.filter_attack_curve == 1.0
        assert slot.volume_decay_curve == 0.5

    def test_dangling_group_reference(self, sample_index, dest_dir, caplog):
        """Test that zones naming an unknown group fall back to the first active group."""
        instrument = single_zone(zone={"group_index": 9})

        with caplog.at_level(logging.WARNING, logger="exsconvert"):
            program = project_instrument(instrument, ProgramType.KEYGROUP, dest_dir, sample_index)

        assert len(program.instruments) == 1
        assert "group 9 not found" in caplog.text


class TestInstrumentLimit:
    """Test cases for the 127 instrument limit."""

    @pytest.fixture
    def crowded(self):
        builder = EXSBuilder().add_group("Main")
        for note in range(128):
            builder.add_zone(f"N{note}", key=note, key_low=note, key_high=note)
        builder.add_sample("kick", file_name="kick.wav")
        return EXSDecoder().decode(builder.build(), "Crowded")

    def test_skipped_when_skipping_errors(self, crowded, sample_index, dest_dir):
        """Test that oversized instruments are skipped."""
        converter = EXSToXPMConverter(skip_errors=True, sample_index=sample_index)

        assert converter.project(crowded, ProgramType.DRUM, dest_dir) is None
        assert converter.convert(crowded, ProgramType.DRUM, dest_dir) is None
        assert list(dest_dir.iterdir()) == []

    def test_raised_when_strict(self, crowded, sample_index, dest_dir):
        """Test that oversized instruments raise in strict mode."""
        converter = EXSToXPMConverter(skip_errors=False, sample_index=sample_index)

        with pytest.raises(TooManyInstrumentsError):
            converter.project(crowded, ProgramType.DRUM, dest_dir)


class TestConvert:
    """Test cases for writing projected programs."""

    def test_writes_named_program(self, keygroup_data, sample_index, dest_dir):
        """Test that convert writes <name>.xpm into the destination."""
        instrument = EXSDecoder().decode(keygroup_data, "Piano")
        path = EXSToXPMConverter(sample_index=sample_index).convert(instrument, ProgramType.KEYGROUP, dest_dir)

        assert path == dest_dir / "Piano.xpm"
        assert path.exists()
