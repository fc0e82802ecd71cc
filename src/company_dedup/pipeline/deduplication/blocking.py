"""Single-token blocking for company name deduplication.

Every name is filed under exactly one key: the lexicographically smallest
token of its normalized form.  Only names sharing a key are ever compared, so
the pairwise cost is quadratic in the largest block rather than in the whole
input.  Near-duplicates whose smallest tokens differ land in different blocks
and are never compared (``"Zeta Games"`` is keyed ``games`` while
``"Alpha Zeta Games"`` is keyed ``alpha``); that loss of recall is accepted.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, FrozenSet, Iterable, List

from company_dedup.utils.logging import get_logger

from .normalizer import tokenize


EMPTY_BLOCK_KEY = ""

_LOGGER = get_logger(module=__name__)


@dataclass
class BlockingMetrics:
    """Aggregate statistics describing block creation."""

    total_names: int = 0
    total_blocks: int = 0
    max_block_size: int = 0
    average_block_size: float = 0.0
    empty_key_names: int = 0
    candidate_pairs: int = 0
    block_size_distribution: Dict[int, int] = field(default_factory=dict)


@dataclass
class BlockIndex:
    """Blocks in first-populated order plus the per-name token cache."""

    blocks: Dict[str, List[str]]
    token_cache: Dict[str, FrozenSet[str]]
    metrics: BlockingMetrics


def block_key(tokens: AbstractSet[str]) -> str:
    """Return the smallest token, or :data:`EMPTY_BLOCK_KEY` for an empty set."""

    if not tokens:
        return EMPTY_BLOCK_KEY
    return min(tokens)


def _compute_metrics(blocks: Dict[str, List[str]], total_names: int) -> BlockingMetrics:
    sizes = [len(members) for members in blocks.values()]
    metrics = BlockingMetrics(total_names=total_names, total_blocks=len(blocks))
    if not sizes:
        return metrics
    metrics.max_block_size = max(sizes)
    metrics.average_block_size = sum(sizes) / len(sizes)
    metrics.empty_key_names = len(blocks.get(EMPTY_BLOCK_KEY, []))
    metrics.candidate_pairs = sum(size * (size - 1) // 2 for size in sizes)
    distribution: Dict[int, int] = defaultdict(int)
    for size in sizes:
        distribution[size] += 1
    metrics.block_size_distribution = dict(sorted(distribution.items()))
    return metrics


def build_blocks(
    names: Iterable[str],
    noise_words: AbstractSet[str] | None = None,
) -> BlockIndex:
    """Tokenize every name once and file it under its block key.

    Names keep their input order inside each block, and blocks keep the order
    in which they were first populated.
    """

    blocks: Dict[str, List[str]] = {}
    token_cache: Dict[str, FrozenSet[str]] = {}
    total = 0
    for name in names:
        total += 1
        tokens = token_cache.get(name)
        if tokens is None:
            tokens = tokenize(name, noise_words)
            token_cache[name] = tokens
        blocks.setdefault(block_key(tokens), []).append(name)

    metrics = _compute_metrics(blocks, total)
    _LOGGER.debug(
        "Constructed blocks",
        total_names=total,
        total_blocks=metrics.total_blocks,
        max_block_size=metrics.max_block_size,
        candidate_pairs=metrics.candidate_pairs,
    )
    return BlockIndex(blocks=blocks, token_cache=token_cache, metrics=metrics)


__all__ = [
    "EMPTY_BLOCK_KEY",
    "BlockIndex",
    "BlockingMetrics",
    "block_key",
    "build_blocks",
]
