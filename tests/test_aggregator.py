"""Unit tests for range filtering and power aggregation."""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone

import pytest

from models.records import PowerSample, Reading
from services.aggregator import Aggregator

APRIL_14 = datetime(2022, 4, 14, tzinfo=timezone.utc)
APRIL_15 = datetime(2022, 4, 15, tzinfo=timezone.utc)
APRIL_14_MIDNIGHT = 1649894400
APRIL_15_MIDNIGHT = 1649980800


def _reading(timestamp: int, name: str, value: float) -> Reading:
    """Helper to build deterministic readings."""

    return Reading(timestamp=timestamp, name=name, value=value)


def test_readings_in_range_keeps_input_order() -> None:
    readings = [
        _reading(1649941819, "Voltage", 1.35),
        _reading(1649941817, "Voltage", 1.34),
        _reading(1649941818, "Current", 12.0),
    ]

    result = Aggregator().readings_in_range(readings, APRIL_14, APRIL_15)

    assert result == readings


def test_readings_in_range_includes_both_bounds() -> None:
    readings = [
        _reading(APRIL_14_MIDNIGHT - 1, "Voltage", 1.0),
        _reading(APRIL_14_MIDNIGHT, "Voltage", 2.0),
        _reading(APRIL_15_MIDNIGHT, "Voltage", 3.0),
        _reading(APRIL_15_MIDNIGHT + 1, "Voltage", 4.0),
    ]

    result = Aggregator().readings_in_range(readings, APRIL_14, APRIL_15)

    assert [reading.value for reading in result] == [2.0, 3.0]


def test_readings_in_range_treats_naive_bounds_as_utc() -> None:
    readings = [_reading(APRIL_14_MIDNIGHT, "Current", 1.0)]

    result = Aggregator().readings_in_range(
        readings, datetime(2022, 4, 14), datetime(2022, 4, 14)
    )

    assert result == readings


def test_readings_in_range_honours_offsets() -> None:
    readings = [_reading(APRIL_14_MIDNIGHT, "Current", 1.0)]
    plus_two = timezone(timedelta(hours=2))

    result = Aggregator().readings_in_range(
        readings,
        datetime(2022, 4, 14, 2, tzinfo=plus_two),
        datetime(2022, 4, 14, 3, tzinfo=plus_two),
    )

    assert result == readings


def test_average_power_for_single_day() -> None:
    readings = [
        _reading(1649941817, "Voltage", 1.34),
        _reading(1649941818, "Current", 12.0),
        _reading(1649941819, "Voltage", 1.35),
        _reading(1649941820, "Current", 14.0),
    ]

    result = Aggregator().average_power(readings, APRIL_14, APRIL_15)

    assert len(result) == 1
    sample = result[0]
    assert sample.name == "Power"
    assert sample.time == "2022-04-14T00:00:00.000Z"
    assert sample.value == pytest.approx(((1.34 + 1.35) / 2) * ((12.0 + 14.0) / 2))


def test_average_power_buckets_by_utc_day_in_encounter_order() -> None:
    readings = [
        _reading(APRIL_15_MIDNIGHT, "Voltage", 2.0),
        _reading(APRIL_15_MIDNIGHT + 60, "Current", 3.0),
        _reading(APRIL_14_MIDNIGHT, "Voltage", 1.0),
        _reading(APRIL_15_MIDNIGHT - 1, "Current", 4.0),
    ]

    result = Aggregator().average_power(readings, APRIL_14, APRIL_15 + timedelta(days=1))

    assert result == [
        PowerSample(day=date(2022, 4, 15), value=6.0),
        PowerSample(day=date(2022, 4, 14), value=4.0),
    ]


def test_average_power_includes_bound_readings() -> None:
    readings = [
        _reading(APRIL_15_MIDNIGHT, "Voltage", 2.0),
        _reading(APRIL_15_MIDNIGHT, "Current", 5.0),
    ]

    result = Aggregator().average_power(readings, APRIL_14, APRIL_15)

    assert [sample.to_dict() for sample in result] == [
        {"name": "Power", "time": "2022-04-15T00:00:00.000Z", "value": 10.0}
    ]


def test_average_power_ignores_other_metrics() -> None:
    readings = [
        _reading(1649941817, "Temperature", 21.0),
        _reading(APRIL_15_MIDNIGHT + 10, "Temperature", 22.0),
        _reading(1649941818, "Voltage", 2.0),
        _reading(1649941819, "Current", 3.0),
    ]

    result = Aggregator().average_power(readings, APRIL_14, APRIL_15 + timedelta(days=1))

    assert result == [PowerSample(day=date(2022, 4, 14), value=6.0)]


def test_average_power_is_undefined_when_a_series_is_missing() -> None:
    readings = [_reading(1649941817, "Current", 12.0)]

    result = Aggregator().average_power(readings, APRIL_14, APRIL_15)

    assert len(result) == 1
    assert result[0].value is None


def test_average_power_empty_input() -> None:
    assert Aggregator().average_power([], APRIL_14, APRIL_15) == []


def test_average_power_matches_range_membership() -> None:
    readings = [
        _reading(APRIL_14_MIDNIGHT - 1, "Voltage", 100.0),
        _reading(APRIL_14_MIDNIGHT - 1, "Current", 100.0),
        _reading(APRIL_14_MIDNIGHT, "Voltage", 2.0),
        _reading(APRIL_14_MIDNIGHT, "Current", 2.0),
    ]
    aggregator = Aggregator()

    in_range = aggregator.readings_in_range(readings, APRIL_14, APRIL_15)
    power = aggregator.average_power(readings, APRIL_14, APRIL_15)

    assert len(in_range) == 2
    assert len(power) == 1
    assert math.isclose(power[0].value or 0.0, 4.0)
