"""Company name normalization and tokenization.

A raw name is reduced to a canonical form that only keeps distinguishing
words: ``"Ubisoft Inc."`` and ``"UBISOFT"`` both become ``"ubisoft"``.  The
steps run in a fixed order:

1. case-fold the full string;
2. canonically decompose accented characters and drop the combining marks;
3. delete every character that is neither a word character nor whitespace;
4. split on whitespace runs;
5. drop noise words (legal suffixes, generic business terms, stop-words);
6. join the surviving tokens with single spaces.

Both functions are total over strings and idempotent.
"""

from __future__ import annotations

from typing import AbstractSet, FrozenSet

from company_dedup.config.policies import DEFAULT_NOISE_WORDS
from company_dedup.utils.helpers import fold_name_text

NOISE_WORDS: FrozenSet[str] = DEFAULT_NOISE_WORDS


def normalize(raw: str, noise_words: AbstractSet[str] | None = None) -> str:
    """Return the canonical, noise-free form of a raw company name."""

    stopwords = NOISE_WORDS if noise_words is None else noise_words
    return " ".join(token for token in fold_name_text(raw).split() if token not in stopwords)


def tokenize(raw: str, noise_words: AbstractSet[str] | None = None) -> FrozenSet[str]:
    """Return the set of unique tokens of the normalized name.

    A name made only of noise words yields the empty set.
    """

    normalized = normalize(raw, noise_words)
    if not normalized:
        return frozenset()
    return frozenset(normalized.split(" "))


__all__ = ["NOISE_WORDS", "normalize", "tokenize"]
