"""Uptime payload returned by ``GET /api/v1/uptime``."""

from __future__ import annotations

from pydantic import NonNegativeInt

from fluentbit_monitor.models.common import APIModel


class UpTimeResult(APIModel):
    uptime_sec: NonNegativeInt
    # Human readable form, e.g. "Fluent Bit has been running: 0 day, 0 hour, 0 minute and 5 seconds"
    uptime_hr: str
