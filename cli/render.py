from __future__ import annotations

from typing import Any, Dict, Iterable, List

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def _split_payload(
    payload: Iterable[Dict[str, Any]],
) -> tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    readings: List[Dict[str, Any]] = []
    power: List[Dict[str, Any]] = []
    for item in payload:
        if "timestamp" in item:
            readings.append(item)
        else:
            power.append(item)
    return readings, power


def render_query(payload: List[Dict[str, Any]]) -> None:
    readings, power = _split_payload(payload)

    echo_heading("Readings")
    if readings:
        for reading in readings:
            typer.echo(
                f"  - {reading.get('timestamp')} {reading.get('name')}: {reading.get('value')}"
            )
    else:
        typer.echo("No readings in range.")

    typer.echo()
    echo_heading("Daily Power")
    if power:
        for sample in power:
            value = sample.get("value")
            typer.echo(f"  - {sample.get('time')}: {'n/a' if value is None else value}")
    else:
        typer.echo("No power samples in range.")
