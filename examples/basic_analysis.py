#!/usr/bin/env python3
"""
Example: Basic instrument analysis

Shows how to decode an EXS24 instrument and inspect its zones.
"""

import sys

sys.path.insert(0, "..")

from exsconvert.analysis.program_type import classify_program, collect_zone_statistics, midi_note_to_name
from exsconvert.formats.exs.reader import EXSReader


def main():
    if len(sys.argv) < 2:
        print("usage: basic_analysis.py INSTRUMENT.exs")
        sys.exit(1)

    # Decode an EXS file
    instrument = EXSReader.read(sys.argv[1])

    # Basic info
    print(f"Instrument: {instrument.name}")
    print(f"Byte order: {'big' if instrument.big_endian else 'little'}-endian")
    print(f"Size: {instrument.size} bytes")
    print(f"Program type: {classify_program(instrument).value}")
    print()

    # Zones
    print("Zones:")
    for zone in instrument.zones:
        if instrument.has_sample(zone):
            sample_name = instrument.sample_for(zone).resolved_file_name
        else:
            sample_name = "(no sample)"
        print(
            f"  {zone.name}: {midi_note_to_name(zone.key_low)}-{midi_note_to_name(zone.key_high)}"
            f" vel {zone.vel_low}-{zone.vel_high} -> {sample_name}"
        )
    print()

    # Round-robin sequences
    print("Sequences:")
    for sequence in instrument.sequences:
        print("  " + " -> ".join(instrument.groups[i].name for i in sequence))
    print()

    # Zone statistics
    stats = collect_zone_statistics(instrument)
    print(f"Single-note zones: {stats.single_note_ratio:.0%}")
    print(f"One-shot zones: {stats.one_shot_ratio:.0%}")


if __name__ == "__main__":
    main()
