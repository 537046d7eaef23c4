"""Config commands: manage agent profiles."""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.prompt import Confirm

from fluentbit_monitor.client.errors import error_handler
from fluentbit_monitor.client.monitor import MonitorClient
from fluentbit_monitor.config.constants import (
    DEFAULT_HTTP_RETRY_BACKOFF,
    DEFAULT_HTTP_RETRY_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
)
from fluentbit_monitor.config.manager import ConfigManager
from fluentbit_monitor.config.models import AgentProfile
from fluentbit_monitor.output.formatter import output

app = typer.Typer(name="config", help="Manage agent profiles and CLI configuration.")
console = Console()


def _get_manager() -> ConfigManager:
    return ConfigManager()


@app.command()
@error_handler
def add(
    name: Annotated[str, typer.Argument(help="Profile name")],
    url: Annotated[str, typer.Option("--url", "-u", help="Agent URL")],
    request_timeout: Annotated[
        float, typer.Option("--request-timeout", help="Per-request timeout in seconds"),
    ] = DEFAULT_REQUEST_TIMEOUT,
    retry_timeout: Annotated[
        float, typer.Option("--retry-timeout", help="Seconds to keep polling an endpoint"),
    ] = DEFAULT_HTTP_RETRY_TIMEOUT,
    poll_interval: Annotated[
        float, typer.Option("--poll-interval", help="Seconds between polling attempts"),
    ] = DEFAULT_HTTP_RETRY_BACKOFF,
    no_verify_ssl: Annotated[bool, typer.Option("--no-verify-ssl", help="Disable SSL verification")] = False,
    set_default: Annotated[bool, typer.Option("--default", help="Set as default profile")] = False,
) -> None:
    """Add an agent profile."""
    mgr = _get_manager()
    profile = AgentProfile(
        name=name,
        url=url,
        timeout=request_timeout,
        retry_timeout=retry_timeout,
        poll_interval=poll_interval,
        verify_ssl=not no_verify_ssl,
    )
    mgr.add_profile(profile)
    if set_default:
        mgr.set_default(name)
    console.print(f"[green]Profile '{name}' added.[/]")


@app.command("list")
@error_handler
def list_profiles(
    fmt: Annotated[str, typer.Option("--format", "-f", help="Output format")] = "table",
) -> None:
    """List all configured profiles."""
    mgr = _get_manager()
    profiles = mgr.config.profiles
    if not profiles:
        console.print("[yellow]No profiles configured. Run 'fluentbit-monitor config add' to get started.[/]")
        return

    default = mgr.config.default_profile
    columns = ["Name", "URL", "Retry Timeout", "Default"]
    rows = [
        [name, p.url, p.retry_timeout, "*" if name == default else ""]
        for name, p in profiles.items()
    ]
    output(
        {"profiles": [p.model_dump() for p in profiles.values()]},
        fmt,
        columns=columns,
        rows=rows,
        title="Agent Profiles",
    )


@app.command()
@error_handler
def show(
    name: Annotated[str, typer.Argument(help="Profile name")],
    fmt: Annotated[str, typer.Option("--format", "-f", help="Output format")] = "table",
) -> None:
    """Show profile details."""
    profile = _get_manager().get_profile(name)
    if not profile:
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)
    output(profile.model_dump(), fmt, kv=True, title=f"Profile: {name}")


@app.command("set-default")
@error_handler
def set_default(
    name: Annotated[str, typer.Argument(help="Profile name to set as default")],
) -> None:
    """Set the default agent profile."""
    mgr = _get_manager()
    if mgr.set_default(name):
        console.print(f"[green]Default profile set to '{name}'.[/]")
    else:
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)


@app.command()
@error_handler
def test(
    name: Annotated[Optional[str], typer.Argument(help="Profile name (uses default if omitted)")] = None,
) -> None:
    """Test connectivity to an agent."""
    profile = _get_manager().resolve_agent(profile_name=name)
    console.print(f"Testing connection to [bold]{profile.url}[/]...")

    with MonitorClient.from_profile(profile) as client:
        info = client.build_info(timeout=profile.retry_timeout)
    console.print(f"[green]Connected![/] Fluent Bit v{info.version} ({info.edition})")


@app.command()
@error_handler
def remove(
    name: Annotated[str, typer.Argument(help="Profile name to remove")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation")] = False,
) -> None:
    """Remove an agent profile."""
    mgr = _get_manager()
    if not mgr.get_profile(name):
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)

    if not force:
        if not Confirm.ask(f"Remove profile '{name}'?"):
            console.print("Cancelled.")
            return

    mgr.remove_profile(name)
    console.print(f"[green]Profile '{name}' removed.[/]")
