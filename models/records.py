"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional, Union

Timestamp = Union[int, float]

POWER_METRIC = "Power"


def format_timestamp(timestamp: Timestamp) -> str:
    """Render a timestamp in shortest round-trip form with JavaScript number notation.

    Whole seconds carry no fractional part. Exponent notation is used only
    below 1e-6 or from 1e21 upwards, with an unpadded signed exponent
    (``1e-7``, ``1.5e+21``).
    """
    number = float(timestamp)
    if number == 0:
        return "0"
    sign = "-" if number < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(number))).normalize().as_tuple()
    digits = "".join(str(digit) for digit in digit_tuple)
    point = exponent + len(digits)

    if len(digits) <= point <= 21:
        text = digits + "0" * (point - len(digits))
    elif 0 < point <= 21:
        text = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        power = point - 1
        mantissa = digits if len(digits) == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{'+' if power >= 0 else '-'}{abs(power)}"
    return sign + text


def build_reading_key(timestamp: Timestamp, name: str) -> str:
    return f"{format_timestamp(timestamp)}-{name}"


@dataclass(frozen=True, slots=True)
class Reading:
    """A single telemetry measurement parsed from an ingest line."""

    timestamp: Timestamp
    name: str
    value: float

    @property
    def key(self) -> str:
        return build_reading_key(self.timestamp, self.name)

    def to_dict(self) -> dict[str, Any]:
        return {"timestamp": self.timestamp, "name": self.name, "value": self.value}


@dataclass(frozen=True, slots=True)
class PowerSample:
    """Daily average power derived from Voltage and Current readings.

    ``value`` is ``None`` when the day is missing one of the two series.
    """

    day: date
    value: Optional[float]
    name: str = POWER_METRIC

    @property
    def time(self) -> str:
        return f"{self.day.isoformat()}T00:00:00.000Z"

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "time": self.time, "value": self.value}
