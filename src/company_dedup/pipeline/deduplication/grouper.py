"""Greedy grouping of names within blocks.

Grouping is similarity-to-first-representative, not transitive closure.
Within a block the first unconsumed name opens a group and every later
unconsumed name whose token overlap with that representative reaches the
threshold joins it.  A name is judged only against the representative, never
against other members, and a name consumed by an earlier group is never
reconsidered, even when a later representative would be a closer match.  The
result therefore depends on input order.
"""

from __future__ import annotations

import math
from typing import FrozenSet, List, Mapping, MutableMapping, Sequence

from company_dedup.entities.core import DuplicateGroup
from company_dedup.utils.logging import get_logger

from .similarity import jaccard


_LOGGER = get_logger(module=__name__)


def validate_threshold(threshold: float) -> float:
    """Return *threshold* as a float, rejecting values outside ``(0, 1]``."""

    value = float(threshold)
    if math.isnan(value) or not 0.0 < value <= 1.0:
        raise ValueError(f"threshold must be within (0, 1], got {threshold!r}")
    return value


def _group_block(
    key: str,
    members: Sequence[str],
    token_cache: Mapping[str, FrozenSet[str]],
    threshold: float,
    stats: MutableMapping[str, object],
) -> List[DuplicateGroup]:
    consumed = [False] * len(members)
    groups: List[DuplicateGroup] = []
    comparisons = 0

    for i, name_a in enumerate(members):
        if consumed[i]:
            continue
        consumed[i] = True
        tokens_a = token_cache[name_a]
        current = [name_a]

        for j in range(i + 1, len(members)):
            if consumed[j]:
                continue
            name_b = members[j]
            comparisons += 1
            if jaccard(tokens_a, token_cache[name_b]) >= threshold:
                current.append(name_b)
                consumed[j] = True

        if len(current) > 1:
            groups.append(DuplicateGroup(members=current, block_key=key))

    stats["comparisons"] = int(stats.get("comparisons", 0)) + comparisons
    stats["grouped_names"] = int(stats.get("grouped_names", 0)) + sum(
        group.size for group in groups
    )
    if groups:
        _LOGGER.debug(
            "Grouped block",
            block=key,
            block_size=len(members),
            groups=len(groups),
            comparisons=comparisons,
        )
    return groups


def group(
    blocks: Mapping[str, Sequence[str]],
    token_cache: Mapping[str, FrozenSet[str]],
    threshold: float,
    *,
    stats: MutableMapping[str, object] | None = None,
) -> List[DuplicateGroup]:
    """Greedily cluster names block by block.

    Blocks are processed in the mapping's iteration order and each block's
    groups are appended in discovery order.  Only groups with two or more
    members are returned.  When *stats* is given, ``comparisons`` and
    ``grouped_names`` counters are accumulated into it.
    """

    threshold = validate_threshold(threshold)
    counters: MutableMapping[str, object] = stats if stats is not None else {}
    results: List[DuplicateGroup] = []
    for key, members in blocks.items():
        if len(members) < 2:
            continue
        results.extend(_group_block(key, members, token_cache, threshold, counters))
    return results


__all__ = ["group", "validate_threshold"]
