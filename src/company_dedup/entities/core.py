"""Core domain entities produced by the deduplication pipeline."""

from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DuplicateGroup(BaseModel):
    """Raw company names judged to be duplicates of one another.

    Members keep their original casing and punctuation and are ordered by
    discovery: the first member is the representative every other member was
    compared against.
    """

    model_config = ConfigDict(frozen=True)

    members: Tuple[str, ...] = Field(..., description="Raw names in discovery order.")
    block_key: str = Field(
        default="",
        description="Blocking key (smallest normalized token) shared by every member.",
    )

    @field_validator("members")
    @classmethod
    def _require_multiple_members(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        if len(value) < 2:
            raise ValueError("a duplicate group needs at least two members")
        return value

    @property
    def representative(self) -> str:
        return self.members[0]

    @property
    def size(self) -> int:
        return len(self.members)


__all__ = ["DuplicateGroup"]
