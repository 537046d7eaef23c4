"""Polling GET primitive shared by every monitoring endpoint.

The agent can open its HTTP listener before all routes are registered, so a
404 (or a refused connection) is retried at a fixed interval until the
deadline passes. Any other response is final: error statuses are raised as
``RequestFailedError`` and the body of a successful one is decoded into a
pydantic model.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from fluentbit_monitor.client.errors import (
    DecodeFailedError,
    FetchTimeoutError,
    RequestConstructionError,
    RequestFailedError,
)
from fluentbit_monitor.config.constants import DEFAULT_HTTP_RETRY_BACKOFF

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class _FetcherBase:
    """Request construction, scheduling and decoding common to both fetchers."""

    def __init__(self, poll_interval: float = DEFAULT_HTTP_RETRY_BACKOFF) -> None:
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self.poll_interval = poll_interval

    def _build_request(
        self, client: httpx.Client | httpx.AsyncClient, path: str,
    ) -> httpx.Request:
        if not path.startswith("/"):
            raise RequestConstructionError(f"Endpoint path must start with '/': {path!r}")
        try:
            return client.build_request("GET", path)
        except httpx.InvalidURL as exc:
            raise RequestConstructionError(f"Could not create request for {path}: {exc}") from exc

    @staticmethod
    def _deadline(timeout: float | None) -> float | None:
        if timeout is None:
            return None
        return time.monotonic() + timeout

    def _next_attempt(self, previous: float) -> float:
        # Fixed cadence; ticks missed while a request was in flight are dropped.
        return max(previous + self.poll_interval, time.monotonic())

    @staticmethod
    def _wait_for(next_attempt: float, deadline: float | None) -> float:
        wake = next_attempt if deadline is None else min(next_attempt, deadline)
        return max(wake - time.monotonic(), 0.0)

    @staticmethod
    def _is_final(response: httpx.Response, path: str, attempt: int) -> bool:
        if response.status_code == httpx.codes.NOT_FOUND:
            logger.debug("Attempt %d: %s returned 404, retrying", attempt, path)
            return False
        return True

    @staticmethod
    def _decode(response: httpx.Response, model: type[M], path: str) -> M:
        if response.status_code >= httpx.codes.BAD_REQUEST:
            raise RequestFailedError(response.status_code, path)
        try:
            return model.model_validate_json(response.content)
        except ValidationError as exc:
            raise DecodeFailedError(exc, path) from exc


class RetryingFetcher(_FetcherBase):
    """Blocking fetcher driven by an ``httpx.Client``.

    The client's ``base_url`` is the agent address; paths passed to
    :meth:`fetch` are appended to it.
    """

    def __init__(
        self,
        client: httpx.Client,
        *,
        poll_interval: float = DEFAULT_HTTP_RETRY_BACKOFF,
    ) -> None:
        super().__init__(poll_interval)
        self._client = client

    def fetch(
        self,
        path: str,
        model: type[M],
        *,
        timeout: float | None = None,
        cancel: threading.Event | None = None,
    ) -> M:
        """GET *path* until a final response arrives and decode it as *model*.

        *timeout* bounds the whole polling loop in seconds (``None`` polls
        until *cancel* is set). Raises ``FetchTimeoutError`` when either fires
        first.
        """
        request = self._build_request(self._client, path)
        deadline = self._deadline(timeout)
        next_attempt = time.monotonic()
        attempt = 0
        while True:
            if _expired(deadline, cancel):
                raise FetchTimeoutError(path)
            if time.monotonic() < next_attempt:
                self._sleep(self._wait_for(next_attempt, deadline), cancel)
                continue
            attempt += 1
            response = self._send(request, path, attempt)
            if response is not None and self._is_final(response, path, attempt):
                return self._decode(response, model, path)
            next_attempt = self._next_attempt(next_attempt)

    def ping(self, path: str = "/") -> bool:
        """Single GET without retry; True when the agent answers below 400."""
        request = self._build_request(self._client, path)
        try:
            response = self._client.send(request)
        except httpx.UnsupportedProtocol as exc:
            raise RequestConstructionError(f"Could not create request for {path}: {exc}") from exc
        except httpx.TransportError as exc:
            logger.debug("Ping %s failed: %s", path, exc)
            return False
        return response.status_code < httpx.codes.BAD_REQUEST

    def _send(self, request: httpx.Request, path: str, attempt: int) -> httpx.Response | None:
        try:
            # Non-streaming send reads the whole body, so discarded 404s
            # leave the connection reusable.
            return self._client.send(request)
        except httpx.UnsupportedProtocol as exc:
            raise RequestConstructionError(f"Could not create request for {path}: {exc}") from exc
        except httpx.TransportError as exc:
            logger.debug("Attempt %d: %s failed: %s", attempt, path, exc)
            return None

    @staticmethod
    def _sleep(seconds: float, cancel: threading.Event | None) -> None:
        if cancel is not None:
            cancel.wait(seconds)
        else:
            time.sleep(seconds)


class AsyncRetryingFetcher(_FetcherBase):
    """Cooperative counterpart of :class:`RetryingFetcher` for ``httpx.AsyncClient``."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        poll_interval: float = DEFAULT_HTTP_RETRY_BACKOFF,
    ) -> None:
        super().__init__(poll_interval)
        self._client = client

    async def fetch(
        self,
        path: str,
        model: type[M],
        *,
        timeout: float | None = None,
        cancel: asyncio.Event | None = None,
    ) -> M:
        request = self._build_request(self._client, path)
        deadline = self._deadline(timeout)
        next_attempt = time.monotonic()
        attempt = 0
        while True:
            if _expired(deadline, cancel):
                raise FetchTimeoutError(path)
            if time.monotonic() < next_attempt:
                await self._sleep(self._wait_for(next_attempt, deadline), cancel)
                continue
            attempt += 1
            response = await self._send(request, path, attempt)
            if response is not None and self._is_final(response, path, attempt):
                return self._decode(response, model, path)
            next_attempt = self._next_attempt(next_attempt)

    async def ping(self, path: str = "/") -> bool:
        request = self._build_request(self._client, path)
        try:
            response = await self._client.send(request)
        except httpx.UnsupportedProtocol as exc:
            raise RequestConstructionError(f"Could not create request for {path}: {exc}") from exc
        except httpx.TransportError as exc:
            logger.debug("Ping %s failed: %s", path, exc)
            return False
        return response.status_code < httpx.codes.BAD_REQUEST

    async def _send(
        self, request: httpx.Request, path: str, attempt: int,
    ) -> httpx.Response | None:
        try:
            return await self._client.send(request)
        except httpx.UnsupportedProtocol as exc:
            raise RequestConstructionError(f"Could not create request for {path}: {exc}") from exc
        except httpx.TransportError as exc:
            logger.debug("Attempt %d: %s failed: %s", attempt, path, exc)
            return None

    @staticmethod
    async def _sleep(seconds: float, cancel: asyncio.Event | None) -> None:
        if cancel is None:
            await asyncio.sleep(seconds)
            return
        try:
            await asyncio.wait_for(cancel.wait(), seconds)
        except asyncio.TimeoutError:
            pass


def _expired(
    deadline: float | None, cancel: threading.Event | asyncio.Event | None,
) -> bool:
    if cancel is not None and cancel.is_set():
        return True
    return deadline is not None and time.monotonic() >= deadline
