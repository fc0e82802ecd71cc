"""Near-duplicate detection for free-text company names."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("company-dedup")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.1.0"

from .config.settings import Settings, get_settings
from .entities import DuplicateGroup
from .pipeline.deduplication import (
    DeduplicationProcessor,
    DeduplicationResult,
    find_duplicate_groups,
    jaccard,
    normalize,
    tokenize,
)

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "DuplicateGroup",
    "DeduplicationProcessor",
    "DeduplicationResult",
    "find_duplicate_groups",
    "jaccard",
    "normalize",
    "tokenize",
]
