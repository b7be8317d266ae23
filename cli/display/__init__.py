"""
CLI display modules.
"""

from cli.display.tables import (
    display_batch_result,
    display_groups_table,
    display_instrument_info,
    display_params,
    display_samples_table,
    display_sequences,
    display_zones_table,
)

__all__ = [
    "display_batch_result",
    "display_groups_table",
    "display_instrument_info",
    "display_params",
    "display_samples_table",
    "display_sequences",
    "display_zones_table",
]
