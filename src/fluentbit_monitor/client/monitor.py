"""Typed clients for the Fluent Bit monitoring HTTP API."""

from __future__ import annotations

import asyncio
import threading
from typing import Any

import httpx

from fluentbit_monitor.client.errors import RequestConstructionError
from fluentbit_monitor.client.fetcher import AsyncRetryingFetcher, RetryingFetcher
from fluentbit_monitor.config.constants import (
    BUILD_INFO_PATH,
    DEFAULT_HTTP_RETRY_BACKOFF,
    DEFAULT_HTTP_RETRY_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
    METRICS_PATH,
    STORAGE_PATH,
    UPTIME_PATH,
)
from fluentbit_monitor.config.models import AgentProfile
from fluentbit_monitor.models import (
    BuildInfoResult,
    MetricsResult,
    StorageMetricsResult,
    UpTimeResult,
)

_HEADERS = {"Accept": "application/json"}


def _check_base_url(base_url: str) -> str:
    base_url = base_url.rstrip("/")
    if not base_url:
        raise RequestConstructionError("Agent base URL must not be empty")
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as exc:
        raise RequestConstructionError(f"Invalid agent URL {base_url!r}: {exc}") from exc
    if url.scheme not in ("http", "https"):
        raise RequestConstructionError(f"Agent URL must use http or https: {base_url!r}")
    if not url.host or any(c.isspace() for c in url.host):
        raise RequestConstructionError(f"Agent URL has no valid host: {base_url!r}")
    return base_url


def _storage_timeout(timeout: float | None) -> float:
    """Storage metrics are never polled longer than the default retry timeout."""
    if timeout is None:
        return DEFAULT_HTTP_RETRY_TIMEOUT
    return min(timeout, DEFAULT_HTTP_RETRY_TIMEOUT)


class MonitorClient:
    """Synchronous client for one agent.

    ``timeout`` arguments bound the polling loop of a single call, not an
    individual HTTP request. Apart from ``storage_metrics`` there is no
    default bound: pass ``timeout`` or a ``cancel`` event.
    """

    def __init__(
        self,
        base_url: str,
        *,
        http_client: httpx.Client | None = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        poll_interval: float = DEFAULT_HTTP_RETRY_BACKOFF,
        verify_ssl: bool = True,
    ) -> None:
        self.base_url = _check_base_url(base_url)
        self._owns_client = http_client is None
        try:
            self._client = http_client or httpx.Client(
                base_url=self.base_url,
                timeout=request_timeout,
                verify=verify_ssl,
                headers=_HEADERS,
            )
        except httpx.InvalidURL as exc:
            raise RequestConstructionError(f"Invalid agent URL {base_url!r}: {exc}") from exc
        self._fetcher = RetryingFetcher(self._client, poll_interval=poll_interval)

    @classmethod
    def from_profile(cls, profile: AgentProfile) -> MonitorClient:
        return cls(
            profile.url,
            request_timeout=profile.timeout,
            poll_interval=profile.poll_interval,
            verify_ssl=profile.verify_ssl,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> MonitorClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def build_info(
        self, *, timeout: float | None = None, cancel: threading.Event | None = None,
    ) -> BuildInfoResult:
        return self._fetcher.fetch(BUILD_INFO_PATH, BuildInfoResult, timeout=timeout, cancel=cancel)

    def uptime(
        self, *, timeout: float | None = None, cancel: threading.Event | None = None,
    ) -> UpTimeResult:
        return self._fetcher.fetch(UPTIME_PATH, UpTimeResult, timeout=timeout, cancel=cancel)

    def metrics(
        self, *, timeout: float | None = None, cancel: threading.Event | None = None,
    ) -> MetricsResult:
        return self._fetcher.fetch(METRICS_PATH, MetricsResult, timeout=timeout, cancel=cancel)

    def storage_metrics(
        self, *, timeout: float | None = None, cancel: threading.Event | None = None,
    ) -> StorageMetricsResult:
        return self._fetcher.fetch(
            STORAGE_PATH, StorageMetricsResult,
            timeout=_storage_timeout(timeout), cancel=cancel,
        )

    def ping(self) -> bool:
        """Check once, without polling, that the agent answers on ``/``."""
        return self._fetcher.ping(BUILD_INFO_PATH)


class AsyncMonitorClient:
    """Asyncio client for one agent; same contract as :class:`MonitorClient`."""

    def __init__(
        self,
        base_url: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        poll_interval: float = DEFAULT_HTTP_RETRY_BACKOFF,
        verify_ssl: bool = True,
    ) -> None:
        self.base_url = _check_base_url(base_url)
        self._owns_client = http_client is None
        try:
            self._client = http_client or httpx.AsyncClient(
                base_url=self.base_url,
                timeout=request_timeout,
                verify=verify_ssl,
                headers=_HEADERS,
            )
        except httpx.InvalidURL as exc:
            raise RequestConstructionError(f"Invalid agent URL {base_url!r}: {exc}") from exc
        self._fetcher = AsyncRetryingFetcher(self._client, poll_interval=poll_interval)

    @classmethod
    def from_profile(cls, profile: AgentProfile) -> AsyncMonitorClient:
        return cls(
            profile.url,
            request_timeout=profile.timeout,
            poll_interval=profile.poll_interval,
            verify_ssl=profile.verify_ssl,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> AsyncMonitorClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def build_info(
        self, *, timeout: float | None = None, cancel: asyncio.Event | None = None,
    ) -> BuildInfoResult:
        return await self._fetcher.fetch(
            BUILD_INFO_PATH, BuildInfoResult, timeout=timeout, cancel=cancel,
        )

    async def uptime(
        self, *, timeout: float | None = None, cancel: asyncio.Event | None = None,
    ) -> UpTimeResult:
        return await self._fetcher.fetch(UPTIME_PATH, UpTimeResult, timeout=timeout, cancel=cancel)

    async def metrics(
        self, *, timeout: float | None = None, cancel: asyncio.Event | None = None,
    ) -> MetricsResult:
        return await self._fetcher.fetch(
            METRICS_PATH, MetricsResult, timeout=timeout, cancel=cancel,
        )

    async def storage_metrics(
        self, *, timeout: float | None = None, cancel: asyncio.Event | None = None,
    ) -> StorageMetricsResult:
        return await self._fetcher.fetch(
            STORAGE_PATH, StorageMetricsResult,
            timeout=_storage_timeout(timeout), cancel=cancel,
        )

    async def ping(self) -> bool:
        return await self._fetcher.ping(BUILD_INFO_PATH)
