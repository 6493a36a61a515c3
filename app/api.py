"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, Request, status

from app.schemas import PowerSampleSchema, QueryResult, ReadingSchema, SuccessResponse
from services.parser import MalformedLineError
from services.telemetry import (
    InvalidRangeError,
    TelemetryService,
    build_default_service,
    parse_range_bound,
)

router = APIRouter()


def get_service() -> TelemetryService:
    return build_default_service()


@router.post(
    "/data",
    response_model=SuccessResponse,
    summary="Ingest newline-separated '<timestamp> <name> <value>' readings.",
)
async def ingest_data(
    request: Request,
    service: TelemetryService = Depends(get_service),
) -> SuccessResponse:
    body = (await request.body()).decode("utf-8", errors="replace")
    try:
        service.ingest(body)
    except MalformedLineError:
        return SuccessResponse(success=False)
    return SuccessResponse(success=True)


@router.get(
    "/data",
    response_model=Union[QueryResult, SuccessResponse],
    summary="Fetch readings and daily average power within an inclusive range.",
)
async def query_data(
    from_: Optional[str] = Query(default=None, alias="from"),
    to: Optional[str] = Query(default=None),
    service: TelemetryService = Depends(get_service),
) -> Union[QueryResult, SuccessResponse]:
    try:
        start = parse_range_bound(from_)
        end = parse_range_bound(to)
    except InvalidRangeError:
        return SuccessResponse(success=False)

    readings, power = service.query(start, end)
    return [ReadingSchema.from_reading(reading) for reading in readings] + [
        PowerSampleSchema.from_sample(sample) for sample in power
    ]


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
