"""Ingestion and query orchestration for telemetry readings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from typing import List, Optional, Tuple

from datastore.memory_store import ReadingStore, build_default_store
from models.records import PowerSample, Reading
from services.aggregator import Aggregator
from services.parser import MalformedLineError, parse_body

logger = logging.getLogger(__name__)


class InvalidRangeError(ValueError):
    """Raised when a query bound is missing or cannot be parsed as a date."""


@dataclass(frozen=True)
class IngestOutcome:
    stored: int
    skipped: int


def parse_range_bound(value: Optional[str]) -> datetime:
    """Parse a ``from``/``to`` query value into an aware datetime.

    Bounds are normalised to UTC unless the conversion would leave the range
    ``datetime`` can represent, in which case the parsed offset is kept.
    """
    candidate = (value or "").strip()
    if not candidate:
        raise InvalidRangeError("Range bound is missing.")

    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError as exc:
        raise InvalidRangeError(f"Invalid range bound {value!r}") from exc

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        return parsed


class TelemetryService:
    """Coordinates parsing, storage, and aggregation of readings."""

    def __init__(self, store: ReadingStore, aggregator: Aggregator) -> None:
        self.store = store
        self.aggregator = aggregator

    def ingest(self, body: str) -> IngestOutcome:
        """Store every numeric line of ``body``.

        Raises ``MalformedLineError`` without touching the store when any line
        is structurally invalid.
        """
        try:
            batch = parse_body(body)
        except MalformedLineError as exc:
            logger.warning(
                "Rejecting ingest batch",
                extra={"line_number": exc.line_number, "reason": str(exc)},
            )
            raise

        for skipped in batch.skipped:
            logger.warning(
                "Skipping line",
                extra={"line_number": skipped.line_number, "reason": skipped.reason},
            )

        for reading in batch.readings:
            self.store.add_reading(reading.key, reading)
            logger.debug("Stored reading", extra={"reading_key": reading.key})

        outcome = IngestOutcome(stored=len(batch.readings), skipped=len(batch.skipped))
        logger.info(
            "Ingested readings",
            extra={"stored": outcome.stored, "skipped": outcome.skipped},
        )
        return outcome

    def query(
        self, start: datetime, end: datetime
    ) -> Tuple[List[Reading], List[PowerSample]]:
        snapshot = self.store.values()
        readings = self.aggregator.readings_in_range(snapshot, start, end)
        power = self.aggregator.average_power(snapshot, start, end)
        logger.debug(
            "Answered range query",
            extra={
                "range_from": start.isoformat(),
                "range_to": end.isoformat(),
                "reading_count": len(readings),
                "power_count": len(power),
            },
        )
        return readings, power


@lru_cache
def build_default_service() -> TelemetryService:
    """Factory that wires the service with the process-wide store."""
    return TelemetryService(store=build_default_store(), aggregator=Aggregator())
