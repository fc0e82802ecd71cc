"""Policy configuration primitives for company name deduplication."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, FrozenSet, List, Mapping, MutableMapping, Sequence

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from company_dedup.utils.helpers import fold_name_text


# Generic legal suffixes, business descriptors and stop-words that carry no
# distinguishing signal between company names.  Stored lower case.
DEFAULT_NOISE_WORDS: FrozenSet[str] = frozenset(
    {
        # legal forms
        "inc",
        "llc",
        "ltd",
        "corp",
        "co",
        "plc",
        "gmbh",
        "sa",
        "ag",
        "bv",
        "oy",
        "pty",
        "limited",
        # business descriptors
        "software",
        "technologies",
        "solutions",
        "systems",
        "services",
        "studios",
        "studio",
        "interactive",
        "entertainment",
        "digital",
        "media",
        "group",
        "network",
        "global",
        "international",
        "holding",
        "partners",
        "enterprises",
        "development",
        "team",
        # stop-words
        "the",
        "and",
        "of",
        "for",
        "with",
        "by",
        "at",
        "from",
        "to",
        "in",
        "on",
        "an",
        "a",
    }
)

DEFAULT_THRESHOLD = 0.5


def _clean_words(words: Sequence[str]) -> List[str]:
    # Folded exactly like name tokens: "S.A." -> "sa", "Société" -> "societe".
    cleaned = (fold_name_text(str(word)).strip() for word in words)
    return list(dict.fromkeys(word for word in cleaned if word))


class GroupingPolicy(BaseModel):
    """Controls for normalization and greedy grouping."""

    threshold: float = Field(
        default=DEFAULT_THRESHOLD,
        gt=0.0,
        le=1.0,
        description="Minimum Jaccard similarity for a name to join a representative's group.",
    )
    noise_words: List[str] = Field(
        default_factory=lambda: sorted(DEFAULT_NOISE_WORDS),
        description="Tokens dropped during normalization.",
    )
    extra_noise_words: List[str] = Field(
        default_factory=list,
        description="Deployment-specific tokens appended to the noise word set.",
    )

    @field_validator("noise_words", "extra_noise_words")
    @classmethod
    def _normalize_words(cls, value: List[str]) -> List[str]:
        return _clean_words(value)

    @property
    def effective_noise_words(self) -> FrozenSet[str]:
        return frozenset(self.noise_words) | frozenset(self.extra_noise_words)


class Policies(BaseModel):
    """Root policy container."""

    policy_version: str = Field(default="2026-10-18")
    grouping: GroupingPolicy = Field(default_factory=GroupingPolicy)

    @model_validator(mode="after")
    def _validate_policy_version(self) -> "Policies":
        if not self.policy_version:
            raise ValueError("policy_version must be provided")
        return self


def _ensure_nested_mapping(
    cursor: MutableMapping[str, Any], part: str, full_path: Sequence[str]
) -> MutableMapping[str, Any]:
    existing = cursor.get(part)
    if existing is None:
        next_cursor: MutableMapping[str, Any] = {}
        cursor[part] = next_cursor
        return next_cursor
    if not isinstance(existing, MutableMapping):
        raise ValueError(
            "Cannot override policy path '"
            f"{'/'.join(full_path)}"
            "' because segment '"
            f"{part}"
            "' resolves to a non-mapping value"
        )
    return existing


def _resolve_env_overrides(raw: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Apply COMPANY_DEDUP_POLICY__ environment variable overrides.

    Variable names are split on double underscores into a lowercased path,
    e.g. ``COMPANY_DEDUP_POLICY__GROUPING__THRESHOLD=0.7``.  Values are
    JSON-decoded when possible and kept as raw strings otherwise.
    """

    prefix = "COMPANY_DEDUP_POLICY__"
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        parts = [segment.lower() for segment in key[len(prefix) :].split("__") if segment]
        if not parts:
            continue
        cursor: MutableMapping[str, Any] = raw
        for index, part in enumerate(parts[:-1], start=1):
            cursor = _ensure_nested_mapping(cursor, part, parts[: index + 1])
        try:
            parsed = json.loads(value)
        except (TypeError, json.JSONDecodeError):
            parsed = value
        cursor[parts[-1]] = parsed
    return raw


def load_policies(source: os.PathLike[str] | str | Mapping[str, Any] | None = None) -> Policies:
    """Load policies from a mapping or YAML file with environment overrides."""

    if source is None:
        raw: MutableMapping[str, Any] = {}
    elif isinstance(source, Mapping):
        raw = copy.deepcopy(dict(source))
    else:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Policy file not found: {path}")
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, MutableMapping):
            raise ValueError(
                f"Policy file '{path}' must contain a mapping at the top level"
            )
        raw = dict(loaded)
    hydrated = _resolve_env_overrides(raw)
    return Policies.model_validate(hydrated)


__all__ = [
    "DEFAULT_NOISE_WORDS",
    "DEFAULT_THRESHOLD",
    "GroupingPolicy",
    "Policies",
    "load_policies",
]
