"""
Program type detection.

Decides whether an EXS instrument is a drum kit (one sample per note,
mapped to pads) or a pitched instrument (samples stretched over key
ranges). The rule is a heuristic, so it lives behind the
ProgramClassifier interface and every threshold is tunable.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from exsconvert.models.instrument import EXSInstrument
from exsconvert.models.program import ProgramType

logger = logging.getLogger(__name__)


def midi_note_to_name(midi_note: int) -> str:
    """Convert MIDI note number to note name (e.g., 60 -> C3, Logic convention)."""
    if midi_note < 0 or midi_note > 127:
        return f"?{midi_note}"
    notes = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
    octave = (midi_note // 12) - 2
    return f"{notes[midi_note % 12]}{octave}"


@dataclass
class ZoneStatistics:
    """Structural signals used for program type detection."""

    playable_zones: int = 0
    single_note_zones: int = 0
    one_shot_zones: int = 0
    distinct_notes: int = 0
    key_ranges: int = 0

    @property
    def single_note_ratio(self) -> float:
        if not self.playable_zones:
            return 0.0
        return self.single_note_zones / self.playable_zones

    @property
    def one_shot_ratio(self) -> float:
        if not self.playable_zones:
            return 0.0
        return self.one_shot_zones / self.playable_zones


def collect_zone_statistics(instrument: EXSInstrument) -> ZoneStatistics:
    """Gather zone statistics over the playable zones of an instrument."""
    zones = instrument.playable_zones()
    single_notes = [zone for zone in zones if zone.is_single_note]
    return ZoneStatistics(
        playable_zones=len(zones),
        single_note_zones=len(single_notes),
        one_shot_zones=sum(1 for zone in zones if zone.one_shot),
        distinct_notes=len({zone.key_low for zone in single_notes}),
        key_ranges=len({zone.key_range for zone in zones}),
    )


class ProgramClassifier:
    """Strategy deciding the program type of an instrument."""

    def classify(self, instrument: EXSInstrument) -> ProgramType:
        raise NotImplementedError


class SingleNoteDrumClassifier(ProgramClassifier):
    """
    Classify as drum kit when zones predominantly cover a single note.

    An instrument is a drum kit when at least `single_note_ratio` of its
    playable zones span exactly one key, and either the zones cover at
    least `min_pads` distinct notes or at least `one_shot_ratio` of them
    play as one-shots. Everything else is a keygroup program.

    Args:
        single_note_ratio: Minimum share of single-note zones
        min_pads: Minimum number of distinct single notes
        one_shot_ratio: Share of one-shot zones that also marks a kit
    """

    def __init__(self, single_note_ratio: float = 0.8, min_pads: int = 4, one_shot_ratio: float = 0.5):
        self.single_note_ratio = single_note_ratio
        self.min_pads = min_pads
        self.one_shot_ratio = one_shot_ratio

    def classify(self, instrument: EXSInstrument) -> ProgramType:
        stats = collect_zone_statistics(instrument)
        if not stats.playable_zones:
            return ProgramType.KEYGROUP

        is_drum = stats.single_note_ratio >= self.single_note_ratio and (
            stats.distinct_notes >= self.min_pads or stats.one_shot_ratio >= self.one_shot_ratio
        )
        result = ProgramType.DRUM if is_drum else ProgramType.KEYGROUP
        logger.debug(
            "%s: %d zones, %.0f%% single-note, %d notes, %.0f%% one-shot -> %s",
            instrument.name,
            stats.playable_zones,
            stats.single_note_ratio * 100,
            stats.distinct_notes,
            stats.one_shot_ratio * 100,
            result.value,
        )
        return result


def classify_program(
    instrument: EXSInstrument, classifier: Optional[ProgramClassifier] = None
) -> ProgramType:
    """Classify an instrument with the given (or the default) classifier."""
    return (classifier or SingleNoteDrumClassifier()).classify(instrument)
