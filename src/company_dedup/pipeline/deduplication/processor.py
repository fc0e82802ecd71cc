"""Deduplication processor orchestrating blocking and greedy grouping."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from time import perf_counter
from typing import AbstractSet, Dict, Iterable, List

from company_dedup.config.policies import DEFAULT_THRESHOLD, GroupingPolicy
from company_dedup.entities.core import DuplicateGroup
from company_dedup.utils.logging import get_logger

from .blocking import build_blocks
from .grouper import group, validate_threshold


_LOGGER = get_logger(module=__name__)


def find_duplicate_groups(
    names: Iterable[str],
    threshold: float = DEFAULT_THRESHOLD,
    *,
    noise_words: AbstractSet[str] | None = None,
) -> List[DuplicateGroup]:
    """Cluster near-duplicate company names.

    Blocks and the token cache are built in one pass over *names*, then each
    block is grouped greedily.  Groups come back block by block in the order
    blocks were first populated, and in discovery order within a block.

    Raises:
        ValueError: if *threshold* is outside ``(0, 1]``.
    """

    threshold = validate_threshold(threshold)
    index = build_blocks(names, noise_words)
    return group(index.blocks, index.token_cache, threshold)


@dataclass
class DeduplicationResult:
    """Groups found in one run together with run statistics."""

    groups: List[DuplicateGroup]
    stats: Dict[str, object] = field(default_factory=dict)


class DeduplicationProcessor:
    """Run the grouping pipeline under a :class:`GroupingPolicy`.

    The processor holds no per-run state, so one instance can be reused for
    any number of inputs.
    """

    def __init__(self, policy: GroupingPolicy | None = None) -> None:
        self.policy = policy or GroupingPolicy()
        self.noise_words = self.policy.effective_noise_words

    def process(self, names: Iterable[str]) -> DeduplicationResult:
        """Group *names* and collect blocking and comparison statistics."""

        start_time = perf_counter()
        threshold = validate_threshold(self.policy.threshold)
        names = list(names)
        _LOGGER.info("Deduplication run started", total_names=len(names), threshold=threshold)

        index = build_blocks(names, self.noise_words)
        counters: Dict[str, object] = {"comparisons": 0, "grouped_names": 0}
        groups = group(index.blocks, index.token_cache, threshold, stats=counters)

        elapsed_seconds = perf_counter() - start_time
        stats: Dict[str, object] = {
            "input": {
                "total_names": len(names),
                "distinct_names": len(index.token_cache),
            },
            "threshold": threshold,
            "blocking": asdict(index.metrics),
            "comparisons": counters["comparisons"],
            "groups": len(groups),
            "grouped_names": counters["grouped_names"],
            "timing": {"elapsed_seconds": elapsed_seconds},
        }
        _LOGGER.info(
            "Deduplication run finished",
            total_names=len(names),
            total_blocks=index.metrics.total_blocks,
            comparisons=counters["comparisons"],
            groups=len(groups),
            elapsed_seconds=elapsed_seconds,
        )
        return DeduplicationResult(groups=groups, stats=stats)


__all__ = ["DeduplicationProcessor", "DeduplicationResult", "find_duplicate_groups"]
