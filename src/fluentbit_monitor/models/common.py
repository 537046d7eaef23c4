"""Shared base model for API payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class APIModel(BaseModel):
    """Read-only payload that tolerates fields added by newer agents."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


def null_as_empty(value: Any) -> Any:
    """Agents report a plugin map with no entries as ``null``."""
    return {} if value is None else value
