"""
EXS24 to MPC XPM converter.

Projects a decoded EXS instrument onto an MPC program:

1. Cluster playable zones by exact key range (one cluster per program instrument)
2. Resolve each cluster's governing group and narrow its key window to the group
3. Map filter, envelopes, trigger and round-robin settings per instrument
4. Narrow each zone's velocity window, copy its sample and build a layer
5. Drop instruments without layers and trim the program to what was produced

Keygroup programs keep each cluster's key range; drum programs collapse it
to a single note so every cluster lands on one pad.
"""

import logging
from pathlib import Path
from typing import Dict, NamedTuple, Optional, Tuple, Union

from exsconvert.converters.samples import SampleIndex
from exsconvert.formats.xpm.templates import create_drum_instrument, create_keygroup_instrument, create_program
from exsconvert.formats.xpm.writer import XPMWriter
from exsconvert.models.instrument import EXSInstrument, Group, Zone, ZoneCluster
from exsconvert.models.program import LFO, Instrument, Layer, Program, ProgramType, TriggerMode, ZonePlay
from exsconvert.utils.units import (
    DEFAULT_ENVELOPE_CURVE,
    DEFAULT_PITCH_BEND_RANGE,
    convert_gain,
    env_level_to_normalized,
    env_time_to_normalized,
    envelope_curve_to_normalized,
    filter_to_normalized,
    output_to_audio_route,
    pan_to_normalized,
    scale_to_key_track,
    volume_db_to_linear,
)
from exsconvert.utils.validation import (
    NoGroupsError,
    NoInstrumentsError,
    SampleNotFoundError,
    TooManyInstrumentsError,
    ValidationError,
    validate_midi_value,
)

logger = logging.getLogger(__name__)


class Envelope(NamedTuple):
    """Raw EXS envelope stages."""

    attack: int = 0
    decay: int = 0
    sustain: int = 0
    release: int = 0
    hold: int = 0


class EXSToXPMConverter:
    """
    Converter from EXS24 instruments to MPC programs.

    Attributes:
        layers_per_instrument: Maximum zones per program instrument
        skip_errors: Log and skip instruments with too many key ranges instead of raising
        sample_index: Read-only sample name to path index
    """

    def __init__(
        self,
        layers_per_instrument: int = 4,
        skip_errors: bool = True,
        sample_index: Optional[SampleIndex] = None,
    ):
        self.sample_index = sample_index if sample_index is not None else SampleIndex()
        self.layers_per_instrument = layers_per_instrument
        self.skip_errors = skip_errors

    def convert(
        self,
        instrument: EXSInstrument,
        program_type: ProgramType,
        dest_dir: Union[str, Path],
    ) -> Optional[Path]:
        """
        Project an instrument and write <dest_dir>/<name>.xpm.

        Returns:
            Path of the written program, or None if the instrument was skipped
        """
        dest_dir = Path(dest_dir)
        program = self.project(instrument, program_type, dest_dir)
        if program is None:
            return None
        return XPMWriter.write(program, dest_dir / f"{instrument.name}.xpm")

    def project(
        self,
        instrument: EXSInstrument,
        program_type: ProgramType,
        dest_dir: Union[str, Path],
    ) -> Optional[Program]:
        """
        Build a program from an instrument, copying samples into dest_dir.

        Args:
            instrument: Decoded EXS instrument
            program_type: Keygroup or drum layout
            dest_dir: Directory receiving the copied samples

        Returns:
            Populated program, or None when skipped for having too many instruments

        Raises:
            NoInstrumentsError: If no instrument could be produced
            NoGroupsError: If the instrument has no usable group
            TooManyInstrumentsError: If more than 127 instruments result and skip_errors is off
        """
        program = create_program(program_type, self.layers_per_instrument)
        program.name = instrument.name

        try:
            clusters = instrument.cluster_zones_by_key_range(self.layers_per_instrument)
        except TooManyInstrumentsError as e:
            if not self.skip_errors:
                raise
            logger.warning("Skipping %s due to too many instruments (%d)", instrument.name, e.count)
            return None

        if not clusters:
            raise NoInstrumentsError(f"{instrument.name}: no instruments found")

        groups = instrument.get_active_groups()
        if not groups:
            raise NoGroupsError(f"{instrument.name}: no groups found")

        groups_by_id: Dict[int, Group] = {}
        for group in groups:
            groups_by_id.setdefault(group.id, group)
        round_robin = any(group.has_round_robin for group in groups)

        produced = 0
        for cluster in clusters:
            group = groups_by_id.get(cluster.group_index)
            if group is None:
                logger.warning(
                    "%s: group %d not found for zone %r, using %r",
                    instrument.name,
                    cluster.group_index,
                    cluster.first_zone.name,
                    groups[0].name,
                )
                group = groups[0]

            projected = self._project_cluster(
                instrument, cluster, group, program_type, produced + 1, round_robin, Path(dest_dir)
            )
            if projected is None:
                continue
            program.instruments[produced] = projected
            produced += 1

        program.instruments = program.instruments[:produced]
        if not produced:
            raise NoInstrumentsError(f"{instrument.name}: no instruments found")

        program.keygroup_num_keygroups = produced
        program.keygroup_master_transpose = 0.0
        if program_type == ProgramType.KEYGROUP:
            program.keygroup_pitch_bend_range = DEFAULT_PITCH_BEND_RANGE

        logger.debug(
            "%s: %d instruments, %d layers (%s)",
            instrument.name,
            produced,
            program.layer_count,
            program_type.value,
        )
        return program

    def _project_cluster(
        self,
        instrument: EXSInstrument,
        cluster: ZoneCluster,
        group: Group,
        program_type: ProgramType,
        number: int,
        round_robin: bool,
        dest_dir: Path,
    ) -> Optional[Instrument]:
        """Build one program instrument, or None if nothing of it survives."""
        window = group.clamp_key_range(cluster.key_low, cluster.key_high)
        if window is None:
            logger.debug(
                "Skipping zone outside group key range: zone[%d-%d] group[%d-%d]",
                cluster.key_low,
                cluster.key_high,
                group.key_low,
                group.key_high,
            )
            return None

        low, high = window
        try:
            validate_midi_value(low, "low note")
            validate_midi_value(high, "high note")
        except ValidationError as e:
            logger.debug("Skipping zone outside MIDI note range: %s", e)
            return None

        if program_type == ProgramType.DRUM:
            slot = create_drum_instrument(number)
            high = low
        else:
            slot = create_keygroup_instrument(number, 0)
        slot.low_note = low
        slot.high_note = high

        self._apply_group(slot, instrument, group, round_robin)

        first = cluster.first_zone
        slot.one_shot = first.one_shot
        if first.has_output:
            slot.audio_route.route = output_to_audio_route(first.output)

        for zone in cluster.zones:
            layer = self._project_zone(instrument, zone, group, len(slot.layers) + 1, dest_dir)
            if layer is not None:
                slot.layers.append(layer)

        if not slot.layers:
            logger.debug("Skipping instrument %d: no valid layers", number)
            return None
        return slot

    def _apply_group(self, slot: Instrument, instrument: EXSInstrument, group: Group, round_robin: bool) -> None:
        """Map filter, envelope, trigger and volume settings onto an instrument."""
        slot.cutoff = filter_to_normalized(group.cutoff)
        slot.resonance = filter_to_normalized(group.resonance)

        volume_env, filter_env = self._envelopes(instrument, group)
        attack_curve = DEFAULT_ENVELOPE_CURVE
        if instrument.params is not None and instrument.params.time_curve != 0:
            attack_curve = envelope_curve_to_normalized(instrument.params.time_curve)

        slot.volume_attack = env_time_to_normalized(volume_env.attack)
        slot.volume_decay = env_time_to_normalized(volume_env.decay)
        slot.volume_sustain = env_level_to_normalized(volume_env.sustain)
        slot.volume_release = env_time_to_normalized(volume_env.release)
        slot.volume_hold = env_time_to_normalized(volume_env.hold)
        slot.volume_attack_curve = attack_curve
        slot.volume_decay_curve = DEFAULT_ENVELOPE_CURVE
        slot.volume_release_curve = DEFAULT_ENVELOPE_CURVE

        # MPC has no negative filter modulation
        if slot.filter_env_amt != 0:
            slot.filter_attack = env_time_to_normalized(filter_env.attack)
            slot.filter_decay = env_time_to_normalized(filter_env.decay)
            slot.filter_sustain = env_level_to_normalized(filter_env.sustain)
            slot.filter_release = env_time_to_normalized(filter_env.release)
            slot.filter_hold = env_time_to_normalized(filter_env.hold)
            slot.filter_attack_curve = attack_curve
            slot.filter_decay_curve = DEFAULT_ENVELOPE_CURVE
            slot.filter_release_curve = DEFAULT_ENVELOPE_CURVE

        # No dedicated pitch envelope in EXS: mirror the filter envelope, amount off
        slot.pitch_attack = env_time_to_normalized(filter_env.attack)
        slot.pitch_decay = env_time_to_normalized(filter_env.decay)
        slot.pitch_sustain = env_level_to_normalized(filter_env.sustain)
        slot.pitch_release = env_time_to_normalized(filter_env.release)
        slot.pitch_hold = env_time_to_normalized(volume_env.hold)
        slot.pitch_attack_curve = attack_curve
        slot.pitch_decay_curve = DEFAULT_ENVELOPE_CURVE
        slot.pitch_release_curve = DEFAULT_ENVELOPE_CURVE
        slot.pitch_env_amount = 0.0

        slot.trigger_mode = TriggerMode.RELEASE if group.is_release_trigger else TriggerMode.ATTACK
        if round_robin and group.has_round_robin:
            slot.zone_play = ZonePlay.CYCLE
        else:
            slot.zone_play = ZonePlay.VELOCITY

        slot.lfo = LFO(type="Triangle", rate=0.0)
        slot.volume = convert_gain(group.volume)

    @staticmethod
    def _envelopes(instrument: EXSInstrument, group: Group) -> Tuple[Envelope, Envelope]:
        """Volume and filter envelopes: global params when present, else the group's."""
        params = instrument.params
        if params is not None:
            return (
                Envelope(params.env2_attack, params.env2_decay, params.env2_sustain, params.env2_release),
                Envelope(params.env1_attack, params.env1_decay, params.env1_sustain, params.env1_release),
            )
        return (
            Envelope(group.attack2, group.decay2, group.sustain2, group.release2, group.hold2),
            Envelope(group.attack1, group.decay1, group.sustain1, group.release1),
        )

    def _project_zone(
        self, instrument: EXSInstrument, zone: Zone, group: Group, number: int, dest_dir: Path
    ) -> Optional[Layer]:
        """Build a layer for a zone, or None if it is filtered out or its sample is missing."""
        window = group.clamp_velocity_range(zone.vel_low, zone.vel_high)
        if window is None:
            logger.debug(
                "Skipping layer outside group velocity range: layer[%d-%d] group[%d-%d]",
                zone.vel_low,
                zone.vel_high,
                group.vel_low,
                group.vel_high,
            )
            return None

        file_name = instrument.sample_for(zone).resolved_file_name
        try:
            sample_name, sample_file = self.sample_index.copy_sample(file_name, dest_dir)
        except SampleNotFoundError as e:
            logger.warning("Failed to copy sample %r: %s", file_name, e)
            return None

        vel_start, vel_end = window
        return Layer(
            number=number,
            active=True,
            volume=volume_db_to_linear(zone.volume),
            pan=pan_to_normalized(zone.pan),
            pitch=0.0,
            tune_coarse=zone.coarse_tuning,
            tune_fine=zone.fine_tuning,
            vel_start=vel_start,
            vel_end=vel_end,
            sample_start=zone.sample_start,
            sample_end=zone.sample_end,
            loop=zone.loop_on,
            loop_start=zone.loop_start,
            loop_end=zone.loop_end,
            loop_crossfade_length=zone.loop_crossfade,
            loop_tune=zone.loop_tune,
            mute=False,
            # MPC stores the root as MIDI note + 1
            root_note=zone.root_note + 1,
            key_track=scale_to_key_track(zone.scale),
            sample_name=sample_name,
            sample_file=sample_file,
            offset=zone.offset,
            slice_start=zone.sample_start,
            slice_end=zone.sample_end,
            slice_loop_start=zone.loop_start,
            slice_loop=int(zone.loop_on),
            slice_loop_crossfade_length=zone.loop_crossfade,
        )


def project_instrument(
    instrument: EXSInstrument,
    program_type: ProgramType,
    dest_dir: Union[str, Path],
    sample_index: SampleIndex,
    layers_per_instrument: int = 4,
    skip_errors: bool = True,
) -> Optional[Program]:
    """
    Convenience function to project an instrument without writing it.

    Returns:
        Projected program, or None if skipped
    """
    converter = EXSToXPMConverter(layers_per_instrument, skip_errors, sample_index)
    return converter.project(instrument, program_type, dest_dir)
