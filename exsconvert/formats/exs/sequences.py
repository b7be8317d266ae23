"""
Round-robin sequence resolution.

A group's select_group names the next group of its round robin (-1 when
the group is not part of one). These pairwise links are turned into
ordered chains of group indices.
"""

import logging
from typing import List, Sequence, Set

from exsconvert.models.instrument import Group

logger = logging.getLogger(__name__)


def _find_linking_group(groups: Sequence[Group], current: int, claimed: Set[int]) -> int:
    """Index of the first unclaimed group whose select_group is `current`, or -1."""
    for index, group in enumerate(groups):
        if group.select_group == current and index != group.select_group and index not in claimed:
            return index
    return -1


def resolve_sequences(groups: Sequence[Group]) -> List[List[int]]:
    """
    Reconstruct round-robin chains from select_group links.

    Starting from every linked group not yet placed, the walk first moves
    through the groups linking to the current one until none is left or
    a node repeats; the nodes passed are collected in that order. From
    where it stopped, select_group links are then followed and each node
    is prepended, stopping at -1, outside the group list, at an unlinked
    group or at a node already placed. Neither walk revisits a node, so
    cycles terminate.

    Args:
        groups: Groups in decode order

    Returns:
        Chains of group indices; single-group chains are dropped
    """
    sequences: List[List[int]] = []
    claimed: Set[int] = set()

    for index, group in enumerate(groups):
        if group.select_group == -1 or index in claimed:
            continue

        chain: List[int] = []
        current = index
        while current not in chain:
            linking = _find_linking_group(groups, current, claimed)
            if linking == -1:
                break
            chain.append(current)
            current = linking

        while (
            0 <= current < len(groups)
            and current not in chain
            and current not in claimed
            and groups[current].select_group != -1
        ):
            chain.insert(0, current)
            current = groups[current].select_group

        if len(chain) > 1:
            sequences.append(chain)
            claimed.update(chain)
            logger.debug("Round-robin sequence: %s", chain)

    return sequences


def assign_sequence_numbers(groups: Sequence[Group], sequences: Sequence[Sequence[int]]) -> None:
    """Set select_number to each group's 1-based position in its chain (0 if none)."""
    positions = {}
    for chain in sequences:
        for position, index in enumerate(chain):
            positions[index] = position + 1

    for index, group in enumerate(groups):
        group.select_number = positions.get(index, 0)
