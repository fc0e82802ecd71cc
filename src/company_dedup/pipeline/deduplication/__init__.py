"""Deduplication pipeline entry points and public interfaces."""

from .blocking import EMPTY_BLOCK_KEY, BlockIndex, BlockingMetrics, block_key, build_blocks
from .grouper import group, validate_threshold
from .main import deduplicate_names
from .normalizer import NOISE_WORDS, normalize, tokenize
from .processor import DeduplicationProcessor, DeduplicationResult, find_duplicate_groups
from .similarity import jaccard

__all__ = [
    "deduplicate_names",
    "find_duplicate_groups",
    "DeduplicationProcessor",
    "DeduplicationResult",
    "NOISE_WORDS",
    "normalize",
    "tokenize",
    "jaccard",
    "EMPTY_BLOCK_KEY",
    "BlockIndex",
    "BlockingMetrics",
    "block_key",
    "build_blocks",
    "group",
    "validate_threshold",
]
