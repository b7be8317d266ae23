"""
EXS24 instrument data model.

An instrument owns zones (key/velocity windows mapped to one sample),
groups (shared envelope, filter and round-robin settings), sample
metadata, optional global parameters and the resolved round-robin
sequences.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from exsconvert.models.params import Params
from exsconvert.utils.validation import TooManyInstrumentsError

logger = logging.getLogger(__name__)

# Program slots available on the MPC, one kept free by the trimming logic
MAX_INSTRUMENTS = 127


@dataclass
class Zone:
    """
    A key/velocity range mapped to a single sample.

    Attributes:
        key: Root key of the sample
        key_low/key_high: Key window (signed MIDI-like values)
        vel_low/vel_high: Velocity window
        group_index: ID of the owning group
        sample_index: Index into the instrument's samples, -1 when unset
    """

    id: int = 0
    name: str = ""
    options: int = 0
    key: int = 60
    fine_tuning: int = 0
    pan: int = 0
    volume: int = 0
    scale: int = 0
    key_low: int = 0
    key_high: int = 127
    vel_low: int = 0
    vel_high: int = 127
    sample_start: int = 0
    sample_end: int = 0
    loop_start: int = 0
    loop_end: int = 0
    loop_crossfade: int = 0
    loop_tune: int = 0
    loop_options: int = 0
    play_mode: int = 0
    coarse_tuning: int = 0
    output: int = 0
    group_index: int = 0
    sample_index: int = -1
    sample_fade: int = 0
    offset: int = 0

    @property
    def one_shot(self) -> bool:
        return bool(self.options & 0x01)

    @property
    def pitch(self) -> bool:
        """True when the zone tracks the keyboard (bit 1 clear)."""
        return not self.options & 0x02

    @property
    def reverse(self) -> bool:
        return bool(self.options & 0x04)

    @property
    def velocity_range_on(self) -> bool:
        return bool(self.options & 0x08)

    @property
    def has_output(self) -> bool:
        return bool(self.options & 0x40)

    @property
    def loop_on(self) -> bool:
        return bool(self.loop_options & 0x01)

    @property
    def loop_equal_power(self) -> bool:
        return bool(self.loop_options & 0x02)

    @property
    def is_single_note(self) -> bool:
        return self.key_low == self.key_high

    @property
    def key_range(self) -> Tuple[int, int]:
        return (self.key_low, self.key_high)

    @property
    def root_note(self) -> int:
        """MIDI note at which the sample plays at its recorded pitch."""
        if self.key_low != self.key_high and self.key != 0:
            return self.key
        return self.key_low


@dataclass
class Group:
    """
    Shared settings for a set of zones.

    A zero key or velocity bound means "unconstrained". select_group
    names the next group of its round-robin cycle, -1 when unlinked.
    """

    id: int = 0
    name: str = ""
    volume: int = 0
    pan: int = 0
    polyphony: int = 0
    decay_flags: int = 0
    exclusive: int = 0
    vel_low: int = 0
    vel_high: int = 0
    decay_time: int = 0
    cutoff: int = 0
    resonance: int = 0
    # Envelope 2 (amplifier)
    attack2: int = 0
    decay2: int = 0
    sustain2: int = 0
    release2: int = 0
    hold2: int = 0
    trigger: int = 0
    output: int = 0
    select_group: int = -1
    select_type: int = 0
    select_number: int = 0
    select_high: int = 0
    select_low: int = 0
    key_low: int = 0
    key_high: int = 0
    # Envelope 1 (filter)
    attack1: int = 0
    decay1: int = 0
    sustain1: int = 0
    release1: int = 0

    @property
    def decay(self) -> bool:
        return bool(self.decay_flags & 0x40)

    @property
    def is_release_trigger(self) -> bool:
        return self.trigger == 1

    @property
    def has_round_robin(self) -> bool:
        return self.select_group >= 0

    def clamp_range(self, low: int, high: int, limit_low: int, limit_high: int) -> Optional[Tuple[int, int]]:
        """
        Narrow a window to this group's bounds.

        Returns:
            The clamped (low, high) window, or None if it lies entirely outside
        """
        if limit_low != 0 and low < limit_low:
            low = limit_low
        if limit_high != 0 and high > limit_high:
            high = limit_high
        if high < limit_low or (limit_high != 0 and low > limit_high):
            return None
        return (low, high)

    def clamp_key_range(self, low: int, high: int) -> Optional[Tuple[int, int]]:
        return self.clamp_range(low, high, self.key_low, self.key_high)

    def clamp_velocity_range(self, low: int, high: int) -> Optional[Tuple[int, int]]:
        return self.clamp_range(low, high, self.vel_low, self.vel_high)


def create_default_group(name: str) -> Group:
    """Create the full-range, non round-robin group used when none is active."""
    return Group(id=0, name=name, select_group=-1)


@dataclass
class Sample:
    """Sample metadata. Audio data is never read, only copied."""

    id: int = 0
    name: str = ""
    length: int = 0
    rate: int = 0
    bit_depth: int = 0
    type: int = 0
    path: str = ""
    file_name: str = ""

    @property
    def resolved_file_name(self) -> str:
        """File name used to look the sample up on disk."""
        return self.file_name.strip() or self.name.strip()


@dataclass
class ZoneCluster:
    """Zones sharing one exact key range, sorted by velocity."""

    key_low: int
    key_high: int
    zones: List[Zone] = field(default_factory=list)

    @property
    def first_zone(self) -> Zone:
        return self.zones[0]

    @property
    def group_index(self) -> int:
        return self.zones[0].group_index


@dataclass
class EXSInstrument:
    """
    A decoded EXS24 instrument.

    Attributes:
        name: Instrument name (file stem)
        big_endian: Byte order detected from the header magic
        size_expanded: Header reports the size-expanded layout
        size: Raw file size in bytes
        sequences: Round-robin chains as lists of group indices
    """

    name: str = ""
    big_endian: bool = False
    size_expanded: bool = False
    size: int = 0
    zones: List[Zone] = field(default_factory=list)
    groups: List[Group] = field(default_factory=list)
    samples: List[Sample] = field(default_factory=list)
    params: Optional[Params] = None
    sequences: List[List[int]] = field(default_factory=list)

    def has_sample(self, zone: Zone) -> bool:
        return 0 <= zone.sample_index < len(self.samples)

    def sample_for(self, zone: Zone) -> Sample:
        return self.samples[zone.sample_index]

    def playable_zones(self) -> List[Zone]:
        """Zones that reference an existing sample."""
        return [zone for zone in self.zones if self.has_sample(zone)]

    def cluster_zones_by_key_range(self, zones_per_layer: int) -> List[ZoneCluster]:
        """
        Partition playable zones into program instruments.

        Zones are bucketed by their exact (key_low, key_high) pair, buckets
        are ordered by that pair, each bucket is sorted by vel_low (stable)
        and split into chunks of at most zones_per_layer.

        Args:
            zones_per_layer: Maximum zones per instrument

        Returns:
            List of clusters in output order

        Raises:
            TooManyInstrumentsError: If more than 127 clusters result
        """
        if zones_per_layer < 1:
            raise ValueError(f"zones_per_layer must be at least 1, got {zones_per_layer}")

        buckets: Dict[Tuple[int, int], List[Zone]] = {}
        for zone in self.playable_zones():
            buckets.setdefault(zone.key_range, []).append(zone)

        clusters: List[ZoneCluster] = []
        for key_low, key_high in sorted(buckets):
            zones = sorted(buckets[(key_low, key_high)], key=lambda z: z.vel_low)
            for start in range(0, len(zones), zones_per_layer):
                clusters.append(
                    ZoneCluster(key_low, key_high, zones[start : start + zones_per_layer])
                )

        if len(clusters) > MAX_INSTRUMENTS:
            raise TooManyInstrumentsError(self.name, len(clusters))

        logger.debug("%s: %d zones in %d clusters", self.name, len(self.zones), len(clusters))
        return clusters

    def get_active_groups(self) -> List[Group]:
        """
        Groups referenced by at least one playable zone.

        Falls back to a single default group so projection always has one.
        """
        referenced = {zone.group_index for zone in self.playable_zones()}
        active = [group for group in self.groups if group.id in referenced]
        if not active:
            logger.debug("%s: no active groups, using default group", self.name)
            return [create_default_group(self.name)]
        return active

    def find_group(self, group_id: int) -> Optional[Group]:
        """Find a group by its ID (not its position)."""
        for group in self.groups:
            if group.id == group_id:
                return group
        return None

    @property
    def has_round_robin(self) -> bool:
        return any(group.has_round_robin for group in self.groups)

    def get_summary(self) -> Dict:
        """Get a summary dict of the instrument."""
        return {
            "name": self.name,
            "byte_order": "big-endian" if self.big_endian else "little-endian",
            "size": self.size,
            "size_expanded": self.size_expanded,
            "zones": len(self.zones),
            "playable_zones": len(self.playable_zones()),
            "groups": len(self.groups),
            "samples": len(self.samples),
            "sequences": len(self.sequences),
            "has_params": self.params is not None,
        }
