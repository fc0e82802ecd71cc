"""Domain entities for company name deduplication."""

from .core import DuplicateGroup

__all__ = ["DuplicateGroup"]
