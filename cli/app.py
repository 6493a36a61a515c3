from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from cli.client import ApiClient, QueryRejected
from cli.config import CLIConfig, load_config
from cli.render import render_query


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the telemetry power service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _report_ingest(success: bool) -> None:
    if success:
        typer.secho("Readings accepted.", fg=typer.colors.GREEN)
        return
    typer.secho(
        "Service rejected the batch: every line needs '<timestamp> <name> <value>'.",
        fg=typer.colors.RED,
        err=True,
    )
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Service base URL (defaults to API_BASE_URL env or http://localhost:3000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="HTTP timeout in seconds.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("send")
def send_command(
    ctx: typer.Context,
    file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Text file of reading lines."
    ),
) -> None:
    """Send a file of '<timestamp> <name> <value>' lines."""
    state = _get_state(ctx)
    body = file.read_text(encoding="utf-8").strip("\n")
    typer.echo(f"Sending {file} to {state.config.base_url} ...")
    _report_ingest(state.client.send_lines(body))


@app.command("send-line")
def send_line_command(
    ctx: typer.Context,
    timestamp: str = typer.Argument(..., help="Unix timestamp in seconds."),
    name: str = typer.Argument(..., help="Metric name, e.g. Voltage or Current."),
    value: str = typer.Argument(..., help="Measured value."),
) -> None:
    """Send a single reading."""
    state = _get_state(ctx)
    _report_ingest(state.client.send_lines(f"{timestamp} {name} {value}"))


@app.command("query")
def query_command(
    ctx: typer.Context,
    date_from: str = typer.Option(..., "--from", help="Inclusive lower bound (ISO-8601)."),
    date_to: str = typer.Option(..., "--to", help="Inclusive upper bound (ISO-8601)."),
) -> None:
    """Fetch readings and daily average power within a range."""
    state = _get_state(ctx)
    try:
        payload = state.client.query(date_from, date_to)
    except QueryRejected as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    render_query(payload)
