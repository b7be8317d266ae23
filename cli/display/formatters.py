"""
Display formatting utilities for CLI output.

Provides bar graphics, note names and other formatting helpers.
"""

from typing import Optional

from exsconvert.analysis.program_type import midi_note_to_name


def value_bar(
    value: int,
    max_value: int = 127,
    width: int = 10,
    filled_char: str = "█",
    empty_char: str = "░",
    show_value: bool = True,
    show_percent: bool = True,
) -> str:
    """
    Create a text-based bar graphic with value and percentage.

    Args:
        value: Current value
        max_value: Maximum value (default 127 for MIDI)
        width: Bar width in characters
        filled_char: Character for filled portion
        empty_char: Character for empty portion
        show_value: Show numeric value
        show_percent: Show percentage

    Returns:
        Formatted string like "91 [████████░░] 71%"
    """
    if max_value <= 0:
        max_value = 1

    clamped = max(0, min(value, max_value))

    fill_count = int((clamped / max_value) * width)
    empty_count = width - fill_count

    bar = filled_char * fill_count + empty_char * empty_count
    percent = int((clamped / max_value) * 100)

    parts = []
    if show_value:
        parts.append(f"{value:3d}")
    parts.append(f"[{bar}]")
    if show_percent:
        parts.append(f"{percent:3d}%")

    return " ".join(parts)


def range_bar(
    low: int,
    high: int,
    max_value: int = 127,
    width: int = 16,
    filled_char: str = "█",
    empty_char: str = "░",
) -> str:
    """
    Create a bar showing which part of 0..max_value a window covers.

    Returns:
        Formatted string like "[░░░░████████░░░░]"
    """
    if max_value <= 0:
        max_value = 1
    low = max(0, min(low, max_value))
    high = max(low, min(high, max_value))

    start = int((low / (max_value + 1)) * width)
    end = max(start + 1, int(((high + 1) / (max_value + 1)) * width))

    bar = empty_char * start + filled_char * (end - start) + empty_char * (width - end)
    return f"[{bar}]"


def pan_bar(
    pan: int,
    width: int = 11,
    left_char: str = "◀",
    right_char: str = "▶",
    center_char: str = "●",
    empty_char: str = "─",
) -> str:
    """
    Create a centered pan bar graphic.

    Pan encoding (EXS, signed):
    - -64 = Hard left
    - 0 = Center
    - 63 = Hard right

    Returns:
        Formatted string like "L32 [◀◀◀◀◀●─────]"
    """
    center = width // 2

    bar = list(empty_char * width)
    bar[center] = center_char

    if pan == 0:
        position_str = "  C"
    elif pan < 0:
        left_amount = min(-pan, 64)
        pos = center - int((left_amount / 64) * center)
        bar[max(pos, 0)] = left_char
        position_str = f"L{left_amount:2d}"
    else:
        right_amount = min(pan, 63)
        pos = center + int((right_amount / 63) * (width - center - 1))
        bar[min(pos, width - 1)] = right_char
        position_str = f"R{right_amount:2d}"

    return f"{position_str} [{''.join(bar)}]"


def key_range_str(low: int, high: int) -> str:
    """
    Format a key range with note names.

    Returns:
        "C3" for single notes, "C1-B2 (36-59)" for ranges
    """
    if low == high:
        return f"{midi_note_to_name(low)} ({low})"
    return f"{midi_note_to_name(low)}-{midi_note_to_name(high)} ({low}-{high})"


def group_limit_str(low: int, high: int) -> str:
    """
    Format a group key/velocity limit, where 0 means unconstrained.

    Returns:
        "36-96", "-96", "36-" or "any"
    """
    if low == 0 and high == 0:
        return "any"
    return f"{low or ''}-{high or ''}"


def select_group_str(select_group: int, names: Optional[dict] = None) -> str:
    """Format a round-robin next-group reference."""
    if select_group < 0:
        return "[dim]-[/dim]"
    if names and select_group in names:
        return f"{select_group} ({names[select_group]})"
    return str(select_group)


def yes_no(flag: bool) -> str:
    return "[green]Yes[/green]" if flag else "[dim]No[/dim]"
