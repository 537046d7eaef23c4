"""Pydantic data models for the Fluent Bit monitoring API."""

from fluentbit_monitor.models.build import BuildInfoResult, FluentBitInfo
from fluentbit_monitor.models.metrics import InputMetrics, MetricsResult, OutputMetrics
from fluentbit_monitor.models.storage import (
    PluginChunks,
    PluginStatus,
    PluginStorage,
    StorageChunks,
    StorageLayer,
    StorageMetricsResult,
)
from fluentbit_monitor.models.uptime import UpTimeResult

__all__ = [
    "BuildInfoResult",
    "FluentBitInfo",
    "InputMetrics",
    "MetricsResult",
    "OutputMetrics",
    "PluginChunks",
    "PluginStatus",
    "PluginStorage",
    "StorageChunks",
    "StorageLayer",
    "StorageMetricsResult",
    "UpTimeResult",
]
