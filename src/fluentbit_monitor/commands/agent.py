"""Agent commands: build info, uptime, metrics, storage, health."""

from __future__ import annotations

import typer
from rich.console import Console

from fluentbit_monitor.client.errors import error_handler
from fluentbit_monitor.commands._common import (
    AgentOpt,
    FormatOpt,
    TimeoutOpt,
    UrlOpt,
    make_client,
    resolve_profile,
)
from fluentbit_monitor.models import MetricsResult, StorageMetricsResult
from fluentbit_monitor.output.formatter import output
from fluentbit_monitor.output.tables import kv_table, make_table

app = typer.Typer(name="agent", help="Query a running Fluent Bit agent.")
console = Console()

_METRIC_COLUMNS = ["Plugin", "Kind", "Records", "Bytes", "Errors", "Retries", "Retries Failed"]
_STORAGE_COLUMNS = ["Plugin", "Overlimit", "Mem Size", "Mem Limit", "Total", "Up", "Down", "Busy", "Busy Size"]


def _metric_rows(result: MetricsResult) -> list[list[object]]:
    rows: list[list[object]] = []
    for name, m in sorted(result.input.items()):
        rows.append([name, "input", m.records, m.bytes, None, None, None])
    for name, o in sorted(result.output.items()):
        rows.append([
            name, "output", o.proc_records, o.proc_bytes,
            o.errors, o.retries, o.retries_failed,
        ])
    return rows


def _storage_rows(result: StorageMetricsResult) -> list[list[object]]:
    return [
        [
            name, p.status.overlimit, p.status.mem_size, p.status.mem_limit,
            p.chunks.total, p.chunks.up, p.chunks.down, p.chunks.busy, p.chunks.busy_size,
        ]
        for name, p in sorted(result.input_chunks.items())
    ]


@app.command("build-info")
@error_handler
def build_info(
    agent: AgentOpt = None,
    url: UrlOpt = None,
    timeout: TimeoutOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show agent version, edition and build flags."""
    profile = resolve_profile(agent, url, timeout)
    with make_client(profile) as client:
        info = client.build_info(timeout=profile.retry_timeout)
    if fmt == "table":
        summary = {"version": info.version, "edition": info.edition, "flags": info.flags}
        output(summary, fmt, kv=True, title="Fluent Bit")
    else:
        output(info, fmt)


@app.command()
@error_handler
def uptime(
    agent: AgentOpt = None,
    url: UrlOpt = None,
    timeout: TimeoutOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show how long the agent has been running."""
    profile = resolve_profile(agent, url, timeout)
    with make_client(profile) as client:
        up = client.uptime(timeout=profile.retry_timeout)
    output(up, fmt, kv=True, title="Uptime")


@app.command()
@error_handler
def metrics(
    agent: AgentOpt = None,
    url: UrlOpt = None,
    timeout: TimeoutOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show records and bytes processed per input and output plugin."""
    profile = resolve_profile(agent, url, timeout)
    with make_client(profile) as client:
        result = client.metrics(timeout=profile.retry_timeout)
    output(result, fmt, columns=_METRIC_COLUMNS, rows=_metric_rows(result), title="Plugin Metrics")


@app.command()
@error_handler
def storage(
    agent: AgentOpt = None,
    url: UrlOpt = None,
    timeout: TimeoutOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show storage layer chunk counters (requires storage.metrics On)."""
    profile = resolve_profile(agent, url, timeout)
    with make_client(profile) as client:
        result = client.storage_metrics(timeout=profile.retry_timeout)
    rows = _storage_rows(result)
    if fmt == "table":
        chunks = result.storage_layer.chunks.model_dump()
        console.print(kv_table(chunks, title="Storage Layer"))
        console.print(make_table("Input Chunks", _STORAGE_COLUMNS, rows))
    else:
        output(result, fmt, columns=_STORAGE_COLUMNS, rows=rows)


@app.command()
@error_handler
def health(
    agent: AgentOpt = None,
    url: UrlOpt = None,
    timeout: TimeoutOpt = None,
) -> None:
    """Check that the agent is reachable and serving its API."""
    profile = resolve_profile(agent, url, timeout)
    with make_client(profile) as client:
        if not client.ping():
            console.print(f"[red]Agent at {profile.url} is not reachable.[/]")
            raise typer.Exit(1)
        up = client.uptime(timeout=profile.retry_timeout)
    console.print(f"[green]Healthy[/] {profile.url} (up {up.uptime_sec}s)")
