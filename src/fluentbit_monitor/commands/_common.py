"""Shared helpers for CLI commands: client factory and options."""

from __future__ import annotations

from typing import Annotated

import typer

from fluentbit_monitor.client.monitor import MonitorClient
from fluentbit_monitor.config.constants import DEFAULT_PORT
from fluentbit_monitor.config.manager import ConfigManager
from fluentbit_monitor.config.models import AgentProfile

# Shared Typer option type aliases
AgentOpt = Annotated[
    str | None,
    typer.Option("--agent", "-a", help="Agent profile"),
]
UrlOpt = Annotated[
    str | None,
    typer.Option("--url", help=f"Agent URL override, e.g. http://localhost:{DEFAULT_PORT}"),
]
TimeoutOpt = Annotated[
    float | None,
    typer.Option("--timeout", "-t", help="Seconds to keep polling before giving up"),
]
FormatOpt = Annotated[
    str,
    typer.Option("--format", "-f", help="Output format (table, json, yaml, csv)"),
]


def resolve_profile(
    agent: str | None,
    url: str | None,
    timeout: float | None,
) -> AgentProfile:
    """Resolve the agent profile from CLI options, env vars, or config."""
    return ConfigManager().resolve_agent(profile_name=agent, url=url, retry_timeout=timeout)


def make_client(profile: AgentProfile) -> MonitorClient:
    return MonitorClient.from_profile(profile)
