"""Instrument analysis tools."""

from exsconvert.analysis.program_type import (
    ProgramClassifier,
    SingleNoteDrumClassifier,
    ZoneStatistics,
    classify_program,
    collect_zone_statistics,
)

__all__ = [
    "ProgramClassifier",
    "SingleNoteDrumClassifier",
    "ZoneStatistics",
    "classify_program",
    "collect_zone_statistics",
]
