"""Processing metrics returned by ``GET /api/v1/metrics``.

Both maps are keyed by plugin instance name (``cpu.0``, ``stdout.0``, ...).
"""

from __future__ import annotations

from typing import Any

from pydantic import NonNegativeInt, field_validator

from fluentbit_monitor.models.common import APIModel, null_as_empty


class InputMetrics(APIModel):
    records: NonNegativeInt
    bytes: NonNegativeInt


class OutputMetrics(APIModel):
    proc_records: NonNegativeInt
    proc_bytes: NonNegativeInt
    errors: NonNegativeInt
    retries: NonNegativeInt
    retries_failed: NonNegativeInt


class MetricsResult(APIModel):
    input: dict[str, InputMetrics]
    output: dict[str, OutputMetrics]

    @field_validator("input", "output", mode="before")
    @classmethod
    def null_maps(cls, value: Any) -> Any:
        return null_as_empty(value)
