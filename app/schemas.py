"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

from models.records import PowerSample, Reading


class SuccessResponse(BaseModel):
    """Outcome flag returned by ingest and by rejected queries."""

    success: bool


class ReadingSchema(BaseModel):
    """A raw reading as stored by the service."""

    timestamp: Union[int, float] = Field(..., description="Unix timestamp in seconds.")
    name: str
    value: float

    @classmethod
    def from_reading(cls, reading: Reading) -> "ReadingSchema":
        return cls(timestamp=reading.timestamp, name=reading.name, value=reading.value)


class PowerSampleSchema(BaseModel):
    """Daily average power derived from Voltage and Current readings."""

    name: Literal["Power"] = "Power"
    time: str = Field(..., description="UTC midnight of the day, ISO-8601 with milliseconds.")
    value: Optional[float] = Field(
        default=None, description="Null when the day lacks Voltage or Current readings."
    )

    @classmethod
    def from_sample(cls, sample: PowerSample) -> "PowerSampleSchema":
        return cls(time=sample.time, value=sample.value)


QueryResult = List[Union[ReadingSchema, PowerSampleSchema]]
