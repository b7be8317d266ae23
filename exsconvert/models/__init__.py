"""Data models for EXS instruments and MPC programs."""

from exsconvert.models.instrument import (
    EXSInstrument,
    Zone,
    Group,
    Sample,
    ZoneCluster,
    create_default_group,
)
from exsconvert.models.params import Params, ModulationSlot
from exsconvert.models.program import (
    Program,
    ProgramType,
    Instrument,
    Layer,
    AudioRoute,
    LFO,
    PadNote,
    PadGroup,
    Version,
    ZonePlay,
    TriggerMode,
)

__all__ = [
    "EXSInstrument",
    "Zone",
    "Group",
    "Sample",
    "ZoneCluster",
    "create_default_group",
    "Params",
    "ModulationSlot",
    "Program",
    "ProgramType",
    "Instrument",
    "Layer",
    "AudioRoute",
    "LFO",
    "PadNote",
    "PadGroup",
    "Version",
    "ZonePlay",
    "TriggerMode",
]
