#!/usr/bin/env python3
"""
Example: Convert a folder of EXS24 instruments to MPC programs

Demonstrates batch conversion and converting a single instrument with a
forced program type.
"""

import sys

sys.path.insert(0, "..")

from pathlib import Path
from exsconvert.converters import ConvertOptions, convert_directory, convert_file


def main():
    # Paths
    instruments = Path("Instruments")
    samples = Path("Samples")
    output = Path("Programs")

    # Convert every .exs under Instruments/ (program type auto-detected)
    print("Converting instruments...")
    options = ConvertOptions.create(instruments, output, samples_path=samples)
    batch = convert_directory(options)

    for result in batch.results:
        if result.success:
            print(f"  Created: {result.xpm_path} ({result.program_type.value}, {result.layers} layers)")
        else:
            print(f"  Skipped: {result.source.name} ({result.error})")

    # Force a single kit to a drum program, stopping on the first error
    kit = instruments / "Kit.exs"
    if kit.exists():
        print("\nConverting Kit.exs as a drum program...")
        options = ConvertOptions.create(kit, output, program_type="drum", skip_errors=False, samples_path=samples)
        result = convert_file(kit, options)
        print(f"  Created: {result.xpm_path}")

    print(f"\nDone! {len(batch.converted)} of {len(batch)} programs ready to copy to the MPC.")


if __name__ == "__main__":
    main()
