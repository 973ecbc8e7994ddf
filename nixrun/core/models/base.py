"""Shared pydantic base for nixrun value objects."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ImmutableModel(BaseModel):
    """Frozen, strictly typed value.

    Commands and exit statuses are built once and never change, so
    assignment raises and unknown keyword arguments are rejected.
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")
