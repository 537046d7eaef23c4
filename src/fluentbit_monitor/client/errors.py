"""Typed exceptions and error handling decorator."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from rich.console import Console

F = TypeVar("F", bound=Callable[..., Any])

err_console = Console(stderr=True)


class FluentBitMonitorError(Exception):
    """Base exception for fluentbit-monitor."""

    exit_code: int = 1


class RequestConstructionError(FluentBitMonitorError):
    """The request could not be built (malformed base URL or path)."""

    exit_code = 2


class FetchTimeoutError(FluentBitMonitorError):
    """The deadline elapsed before the endpoint gave a final response."""

    exit_code = 3

    def __init__(self, endpoint: str) -> None:
        self.endpoint = endpoint
        super().__init__(f"Timeout while trying to reach: {endpoint}")


class RequestFailedError(FluentBitMonitorError):
    """The agent answered with a non-retryable error status (>= 400, not 404)."""

    exit_code = 4

    def __init__(self, status_code: int, endpoint: str = "") -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        msg = f"Failed with status code {status_code}"
        if endpoint:
            msg += f" ({endpoint})"
        super().__init__(msg)


class DecodeFailedError(FluentBitMonitorError):
    """The response body did not decode into the expected shape."""

    exit_code = 5

    def __init__(self, cause: Exception, endpoint: str = "") -> None:
        self.cause = cause
        self.endpoint = endpoint
        where = f" from {endpoint}" if endpoint else ""
        super().__init__(f"Could not decode response{where}: {cause}")


class ConfigurationError(FluentBitMonitorError):
    """Missing or invalid configuration."""

    exit_code = 6


def error_handler(func: F) -> F:
    """Decorator that catches FluentBitMonitorError and prints user-friendly messages."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except FluentBitMonitorError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(exc.exit_code)
        except ValueError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(1)

    return wrapper  # type: ignore[return-value]
