"""Range filtering and daily power aggregation for telemetry readings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Dict, Iterable, List, Optional

from models.records import PowerSample, Reading

CURRENT_METRIC = "Current"
VOLTAGE_METRIC = "Voltage"
_POWER_INPUTS = frozenset((CURRENT_METRIC, VOLTAGE_METRIC))


@dataclass
class DailyAccumulator:
    """Running totals for one UTC calendar day."""

    total_current: float = 0.0
    current_count: int = 0
    total_voltage: float = 0.0
    voltage_count: int = 0

    def add(self, reading: Reading) -> None:
        if reading.name == CURRENT_METRIC:
            self.total_current += reading.value
            self.current_count += 1
        elif reading.name == VOLTAGE_METRIC:
            self.total_voltage += reading.value
            self.voltage_count += 1

    def average_power(self) -> Optional[float]:
        if not self.current_count or not self.voltage_count:
            return None
        average_current = self.total_current / self.current_count
        average_voltage = self.total_voltage / self.voltage_count
        return average_current * average_voltage


def _epoch_seconds(moment: datetime) -> float:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp()


def _in_range(reading: Reading, start: float, end: float) -> bool:
    return start <= reading.timestamp <= end


def _utc_day(reading: Reading) -> date:
    return datetime.fromtimestamp(reading.timestamp, tz=timezone.utc).date()


class Aggregator:
    """Pure aggregation component that can be unit tested in isolation."""

    def readings_in_range(
        self, readings: Iterable[Reading], start: datetime, end: datetime
    ) -> List[Reading]:
        """Return readings whose instant lies within ``[start, end]``, in input order."""
        lower = _epoch_seconds(start)
        upper = _epoch_seconds(end)
        return [reading for reading in readings if _in_range(reading, lower, upper)]

    def average_power(
        self, readings: Iterable[Reading], start: datetime, end: datetime
    ) -> List[PowerSample]:
        """Compute one power sample per UTC day seen within ``[start, end]``.

        Days are emitted in the order they are first encountered. Readings
        other than Current and Voltage are ignored.
        """
        lower = _epoch_seconds(start)
        upper = _epoch_seconds(end)
        days: Dict[date, DailyAccumulator] = {}

        for reading in readings:
            if reading.name not in _POWER_INPUTS:
                continue
            if not _in_range(reading, lower, upper):
                continue
            day = _utc_day(reading)
            accumulator = days.get(day)
            if accumulator is None:
                accumulator = days[day] = DailyAccumulator()
            accumulator.add(reading)

        return [
            PowerSample(day=day, value=accumulator.average_power())
            for day, accumulator in days.items()
        ]
