"""
XPM element names and their model attributes, in document order.
"""

from typing import List, Tuple

TagTable = List[Tuple[str, str]]

ROOT = "MPCVObject"
VERSION = "Version"
PROGRAM = "Program"
PROGRAM_PADS = "ProgramPads"
INSTRUMENTS = "Instruments"
INSTRUMENT = "Instrument"
AUDIO_ROUTE = "AudioRoute"
LFO = "LFO"
LAYERS = "Layers"
LAYER = "Layer"
PAD_NOTE_MAP = "PadNoteMap"
PAD_NOTE = "PadNote"
PAD_GROUP_MAP = "PadGroupMap"
PAD_GROUP = "PadGroup"

TYPE_ATTRIBUTE = "type"
NUMBER_ATTRIBUTE = "number"

VERSION_TAGS: TagTable = [
    ("File_Version", "file_version"),
    ("Application", "application"),
    ("Application_Version", "application_version"),
    ("Platform", "platform"),
]

AUDIO_ROUTE_TAGS: TagTable = [
    ("AudioRoute", "route"),
    ("AudioRouteSubIndex", "sub_index"),
    ("AudioRouteChannelBitmap", "channel_bitmap"),
    ("InsertsEnabled", "inserts_enabled"),
]

LFO_TAGS: TagTable = [
    ("Type", "type"),
    ("Rate", "rate"),
    ("Sync", "sync"),
    ("Reset", "reset"),
    ("PitchAmount", "pitch_amount"),
    ("CutoffAmount", "cutoff_amount"),
    ("VolumeAmount", "volume_amount"),
    ("PanAmount", "pan_amount"),
]

PROGRAM_NAME = "ProgramName"

# Program fields written between ProgramPads and the Instruments list
PROGRAM_HEAD_TAGS: TagTable = [
    ("CueBusEnable", "cue_bus_enable"),
    (AUDIO_ROUTE, "audio_route"),
    ("Send1", "send1"),
    ("Send2", "send2"),
    ("Send3", "send3"),
    ("Send4", "send4"),
    ("Volume", "volume"),
    ("Mute", "mute"),
    ("Solo", "solo"),
    ("Pan", "pan"),
    ("AutomationFilter", "automation_filter"),
    ("Pitch", "pitch"),
    ("TuneCoarse", "tune_coarse"),
    ("TuneFine", "tune_fine"),
    ("Mono", "mono"),
    ("Program_Polyphony", "polyphony"),
    ("PortamentoTime", "portamento_time"),
    ("PortamentoLegato", "portamento_legato"),
    ("PortamentoQuantized", "portamento_quantized"),
    ("Program.Xfader.Route", "xfader_route"),
]

# Program fields written after the Instruments list (and drum pad maps)
PROGRAM_TAIL_TAGS: TagTable = [
    ("KeygroupMasterTranspose", "keygroup_master_transpose"),
    ("KeygroupNumKeygroups", "keygroup_num_keygroups"),
    ("KeygroupPitchBendRange", "keygroup_pitch_bend_range"),
    ("KeygroupWheelToLfo", "keygroup_wheel_to_lfo"),
    ("KeygroupAftertouchToFilter", "keygroup_aftertouch_to_filter"),
]

INSTRUMENT_TAGS: TagTable = [
    ("CueBusEnable", "cue_bus_enable"),
    (AUDIO_ROUTE, "audio_route"),
    ("Send1", "send1"),
    ("Send2", "send2"),
    ("Send3", "send3"),
    ("Send4", "send4"),
    ("Volume", "volume"),
    ("Mute", "mute"),
    ("Solo", "solo"),
    ("Pan", "pan"),
    ("AutomationFilter", "automation_filter"),
    ("TuneCoarse", "tune_coarse"),
    ("TuneFine", "tune_fine"),
    ("Mono", "mono"),
    ("Polyphony", "polyphony"),
    ("FilterKeytrack", "filter_keytrack"),
    ("LowNote", "low_note"),
    ("HighNote", "high_note"),
    ("IgnoreBaseNote", "ignore_base_note"),
    ("ZonePlay", "zone_play"),
    ("TriggerMode", "trigger_mode"),
    ("MuteGroup", "mute_group"),
    ("LfoPitch", "lfo_pitch"),
    ("LfoCutoff", "lfo_cutoff"),
    ("LfoVolume", "lfo_volume"),
    ("LfoPan", "lfo_pan"),
    ("OneShot", "one_shot"),
    ("FilterType", "filter_type"),
    ("Cutoff", "cutoff"),
    ("Resonance", "resonance"),
    ("FilterEnvAmt", "filter_env_amt"),
    ("AfterTouchToFilter", "after_touch_to_filter"),
    ("VelocityToStart", "velocity_to_start"),
    ("VelocityToFilterAttack", "velocity_to_filter_attack"),
    ("VelocityToFilter", "velocity_to_filter"),
    ("VelocityToFilterEnvelope", "velocity_to_filter_envelope"),
    ("FilterAttack", "filter_attack"),
    ("FilterDecay", "filter_decay"),
    ("FilterSustain", "filter_sustain"),
    ("FilterRelease", "filter_release"),
    ("FilterHold", "filter_hold"),
    ("FilterAttackCurve", "filter_attack_curve"),
    ("FilterDecayCurve", "filter_decay_curve"),
    ("FilterReleaseCurve", "filter_release_curve"),
    ("FilterDecayType", "filter_decay_type"),
    ("FilterADEnvelope", "filter_ad_envelope"),
    ("VolumeHold", "volume_hold"),
    ("VolumeDecayType", "volume_decay_type"),
    ("VolumeADEnvelope", "volume_ad_envelope"),
    ("VolumeAttack", "volume_attack"),
    ("VolumeDecay", "volume_decay"),
    ("VolumeSustain", "volume_sustain"),
    ("VolumeRelease", "volume_release"),
    ("VolumeAttackCurve", "volume_attack_curve"),
    ("VolumeDecayCurve", "volume_decay_curve"),
    ("VolumeReleaseCurve", "volume_release_curve"),
    ("PitchAttack", "pitch_attack"),
    ("PitchHold", "pitch_hold"),
    ("PitchDecay", "pitch_decay"),
    ("PitchSustain", "pitch_sustain"),
    ("PitchRelease", "pitch_release"),
    ("PitchAttackCurve", "pitch_attack_curve"),
    ("PitchDecayCurve", "pitch_decay_curve"),
    ("PitchReleaseCurve", "pitch_release_curve"),
    ("PitchEnvAmount", "pitch_env_amount"),
    ("VelocityToPitch", "velocity_to_pitch"),
    ("VelocityToVolumeAttack", "velocity_to_volume_attack"),
    ("VelocitySensitivity", "velocity_sensitivity"),
    ("VelocityToPan", "velocity_to_pan"),
    (LFO, "lfo"),
    ("WarpTempo", "warp_tempo"),
    ("BpmLock", "bpm_lock"),
    ("WarpEnable", "warp_enable"),
    ("StretchPercentage", "stretch_percentage"),
]

LAYER_TAGS: TagTable = [
    ("Active", "active"),
    ("Volume", "volume"),
    ("Pan", "pan"),
    ("Pitch", "pitch"),
    ("TuneCoarse", "tune_coarse"),
    ("TuneFine", "tune_fine"),
    ("VelStart", "vel_start"),
    ("VelEnd", "vel_end"),
    ("SampleStart", "sample_start"),
    ("SampleEnd", "sample_end"),
    ("Loop", "loop"),
    ("LoopStart", "loop_start"),
    ("LoopEnd", "loop_end"),
    ("LoopCrossfadeLength", "loop_crossfade_length"),
    ("LoopTune", "loop_tune"),
    ("Mute", "mute"),
    ("RootNote", "root_note"),
    ("KeyTrack", "key_track"),
    ("SampleName", "sample_name"),
    ("SampleFile", "sample_file"),
    ("SliceIndex", "slice_index"),
    ("Direction", "direction"),
    ("Offset", "offset"),
    ("SliceStart", "slice_start"),
    ("SliceEnd", "slice_end"),
    ("SliceLoopStart", "slice_loop_start"),
    ("SliceLoop", "slice_loop"),
    ("SliceLoopCrossFadeLength", "slice_loop_crossfade_length"),
]
