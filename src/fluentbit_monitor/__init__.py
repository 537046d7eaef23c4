"""Client and CLI for the Fluent Bit monitoring HTTP API."""

from fluentbit_monitor.client.errors import (
    DecodeFailedError,
    FetchTimeoutError,
    FluentBitMonitorError,
    RequestConstructionError,
    RequestFailedError,
)
from fluentbit_monitor.client.fetcher import AsyncRetryingFetcher, RetryingFetcher
from fluentbit_monitor.client.monitor import AsyncMonitorClient, MonitorClient

__version__ = "0.1.0"

__all__ = [
    "AsyncMonitorClient",
    "AsyncRetryingFetcher",
    "DecodeFailedError",
    "FetchTimeoutError",
    "FluentBitMonitorError",
    "MonitorClient",
    "RequestConstructionError",
    "RequestFailedError",
    "RetryingFetcher",
]
