"""Small text and filesystem helpers shared across modules."""

from __future__ import annotations

import re
import unicodedata
from pathlib import Path

_NON_WORD_PATTERN = re.compile(r"[^\w\s]+")


def fold_diacritics(text: str) -> str:
    """Remove diacritics by canonically decomposing unicode characters."""

    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def strip_non_word(text: str) -> str:
    """Delete every character that is neither a word character nor whitespace."""

    return _NON_WORD_PATTERN.sub("", text)


def fold_name_text(text: str) -> str:
    """Case-fold, drop diacritics and delete punctuation, keeping whitespace."""

    return strip_non_word(fold_diacritics(text.casefold()))


def ensure_directory(path: Path | str) -> Path:
    """Ensure that a directory exists and return the resolved Path."""

    target = Path(path)
    target.mkdir(parents=True, exist_ok=True)
    return target.resolve()


__all__ = ["fold_diacritics", "fold_name_text", "strip_non_word", "ensure_directory"]
