"""Storage layer metrics returned by ``GET /api/v1/storage``.

Only populated when the agent runs with ``storage.metrics On``.
"""

from __future__ import annotations

from typing import Any

from pydantic import NonNegativeInt, field_validator

from fluentbit_monitor.models.common import APIModel, null_as_empty


class StorageChunks(APIModel):
    """Aggregate chunk counters across all inputs."""

    total_chunks: NonNegativeInt
    mem_chunks: NonNegativeInt
    fs_chunks: NonNegativeInt
    fs_chunks_up: NonNegativeInt
    fs_chunks_down: NonNegativeInt


class StorageLayer(APIModel):
    chunks: StorageChunks


class PluginStatus(APIModel):
    """Memory status of one input plugin; sizes are display strings like ``"0b"``."""

    overlimit: bool
    mem_size: str
    mem_limit: str


class PluginChunks(APIModel):
    total: NonNegativeInt
    up: NonNegativeInt
    down: NonNegativeInt
    busy: NonNegativeInt
    busy_size: str


class PluginStorage(APIModel):
    status: PluginStatus
    chunks: PluginChunks


class StorageMetricsResult(APIModel):
    storage_layer: StorageLayer
    input_chunks: dict[str, PluginStorage]

    @field_validator("input_chunks", mode="before")
    @classmethod
    def null_maps(cls, value: Any) -> Any:
        return null_as_empty(value)
