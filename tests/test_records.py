"""Unit tests for reading keys and value objects."""

from __future__ import annotations

from datetime import date

import pytest

from models.records import PowerSample, Reading, build_reading_key, format_timestamp


@pytest.mark.parametrize(
    "timestamp, expected",
    [
        (1649941817, "1649941817"),
        (1649941817.0, "1649941817"),
        (1649941817.25, "1649941817.25"),
        (0, "0"),
        (-0.0, "0"),
        (-12, "-12"),
        (0.5, "0.5"),
        (0.000001, "0.000001"),
        (1e-7, "1e-7"),
        (1.5e-7, "1.5e-7"),
        (1e16, "10000000000000000"),
        (1e20, "100000000000000000000"),
        (1e21, "1e+21"),
        (int(1e21), "1e+21"),
        (1.5e21, "1.5e+21"),
    ],
)
def test_format_timestamp_matches_javascript_notation(timestamp, expected: str) -> None:
    assert format_timestamp(timestamp) == expected


def test_reading_key_combines_timestamp_and_name() -> None:
    reading = Reading(timestamp=1649941817, name="Voltage", value=1.34)

    assert reading.key == build_reading_key(1649941817, "Voltage") == "1649941817-Voltage"
    assert reading.to_dict() == {"timestamp": 1649941817, "name": "Voltage", "value": 1.34}


def test_power_sample_time_is_utc_midnight_with_milliseconds() -> None:
    sample = PowerSample(day=date(2022, 4, 14), value=None)

    assert sample.to_dict() == {
        "name": "Power",
        "time": "2022-04-14T00:00:00.000Z",
        "value": None,
    }
