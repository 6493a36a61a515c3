"""Parsing of plain-text ingest bodies into readings."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List

from models.records import Reading, Timestamp

_TOKENS_PER_LINE = 3


class MalformedLineError(ValueError):
    """Raised when a line does not hold exactly three space-separated tokens."""

    def __init__(self, line_number: int, token_count: int) -> None:
        super().__init__(
            f"Line {line_number} has {token_count} tokens, expected {_TOKENS_PER_LINE}."
        )
        self.line_number = line_number
        self.token_count = token_count


@dataclass(frozen=True)
class SkippedLine:
    line_number: int
    reason: str


@dataclass
class ParsedBatch:
    readings: List[Reading] = field(default_factory=list)
    skipped: List[SkippedLine] = field(default_factory=list)


def _to_number(token: str) -> float:
    parsed = float(token)
    if not math.isfinite(parsed):
        raise ValueError(f"{token!r} is not a finite number")
    return parsed


def _to_timestamp(token: str) -> Timestamp:
    parsed = _to_number(token)
    if parsed.is_integer():
        return int(parsed)
    return parsed


def split_lines(body: str) -> list[list[str]]:
    """Split a body into per-line token lists, rejecting the batch on bad structure."""
    rows: list[list[str]] = []
    for line_number, line in enumerate(body.split("\n"), start=1):
        tokens = line.strip().split(" ")
        if len(tokens) != _TOKENS_PER_LINE:
            raise MalformedLineError(line_number, len(tokens))
        rows.append(tokens)
    return rows


def parse_body(body: str) -> ParsedBatch:
    """Parse ``<timestamp> <name> <value>`` lines.

    Structure is checked for every line before any reading is produced, so a
    single malformed line rejects the whole body. Lines whose timestamp or
    value are not numeric are skipped and reported in ``ParsedBatch.skipped``.
    """
    batch = ParsedBatch()
    for line_number, (timestamp_raw, name, value_raw) in enumerate(
        split_lines(body), start=1
    ):
        try:
            timestamp = _to_timestamp(timestamp_raw)
        except ValueError:
            batch.skipped.append(SkippedLine(line_number, "invalid timestamp"))
            continue

        try:
            value = _to_number(value_raw)
        except ValueError:
            batch.skipped.append(SkippedLine(line_number, "invalid numeric value"))
            continue

        batch.readings.append(Reading(timestamp=timestamp, name=name, value=value))
    return batch
