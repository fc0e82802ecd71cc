"""Configuration utilities for the company deduplication tool."""

from .policies import (
    DEFAULT_NOISE_WORDS,
    DEFAULT_THRESHOLD,
    GroupingPolicy,
    Policies,
    load_policies,
)
from .settings import LoggingConfig, PathsConfig, Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "PathsConfig",
    "LoggingConfig",
    "Policies",
    "load_policies",
    "GroupingPolicy",
    "DEFAULT_NOISE_WORDS",
    "DEFAULT_THRESHOLD",
]
