"""Root Typer app: global options and command group registration."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.logging import RichHandler

from fluentbit_monitor import __version__
from fluentbit_monitor.client.errors import err_console
from fluentbit_monitor.commands import agent, config_cmd

app = typer.Typer(
    name="fluentbit-monitor",
    help="Query the Fluent Bit monitoring HTTP API.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        print(f"fluentbit-monitor {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every polling attempt to stderr."),
) -> None:
    """Fluent Bit monitor: build info, uptime, metrics and storage."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
            force=True,
        )
        logging.getLogger("httpcore").setLevel(logging.INFO)


app.add_typer(agent.app, name="agent")
app.add_typer(config_cmd.app, name="config")


def main() -> None:
    app()
