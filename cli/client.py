from __future__ import annotations

from typing import Any, Dict, List, NoReturn

import httpx
import typer

from cli.config import CLIConfig


class QueryRejected(Exception):
    """The service answered a range query with ``success: false``."""


class ApiClient:
    """Minimal HTTP client for the telemetry service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def send_lines(self, body: str) -> bool:
        """Post raw reading lines and return the service's success flag."""
        try:
            response = self._client.post(
                "/data",
                content=body.encode("utf-8"),
                headers={"Content-Type": "text/plain"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        payload = response.json()
        success = payload.get("success") if isinstance(payload, dict) else None
        if not isinstance(success, bool):
            raise typer.BadParameter("Unexpected response payload when sending readings.")
        return success

    def query(self, date_from: str, date_to: str) -> List[Dict[str, Any]]:
        try:
            response = self._client.get("/data", params={"from": date_from, "to": date_to})
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        payload = response.json()
        if isinstance(payload, dict):
            raise QueryRejected(f"Service rejected range {date_from!r} to {date_to!r}.")
        return payload

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> NoReturn:
        detail: str | None = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except (ValueError, AttributeError):
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
