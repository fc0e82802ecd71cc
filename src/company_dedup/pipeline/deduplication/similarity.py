"""Token-set similarity used to compare company names."""

from __future__ import annotations

from typing import AbstractSet


def jaccard(tokens_a: AbstractSet[str], tokens_b: AbstractSet[str]) -> float:
    """Return ``|a & b| / |a | b|``, or ``0.0`` when both sets are empty."""

    union = len(tokens_a | tokens_b)
    if union == 0:
        return 0.0
    return len(tokens_a & tokens_b) / union


__all__ = ["jaccard"]
