"""Utility helpers shared across company_dedup modules."""

from .helpers import ensure_directory, fold_diacritics, fold_name_text, strip_non_word
from .logging import configure_logging, get_logger, log_timing, logging_context

__all__ = [
    "configure_logging",
    "get_logger",
    "log_timing",
    "logging_context",
    "ensure_directory",
    "fold_diacritics",
    "fold_name_text",
    "strip_non_word",
]
