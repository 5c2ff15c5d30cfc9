"""Forecast report API router."""

import logging
from typing import Any

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from forecast_relay.common.exceptions import RelayError
from forecast_relay.common.schemas import MessageResponse
from forecast_relay.reports.schemas import ReportRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_service():
    from forecast_relay.deps import get_report_service
    return get_report_service()


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


@router.post(
    "/send-forecast-report",
    response_model=MessageResponse,
    responses={400: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
async def send_forecast_report(body: Any = Body(None)):
    # Parsed by hand so an empty or malformed body is a 400, not a 422.
    if not isinstance(body, dict):
        return _message(400, "Missing report data or user email.")
    try:
        report = ReportRequest.model_validate(body)
    except ValidationError:
        return _message(400, "Missing report data or user email.")
    if report.recipient is None:
        return _message(400, "Missing report data or user email.")

    try:
        await _get_service().send(report)
    except RelayError as e:
        logger.error("Brevo email error for %s: %s", report.recipient, e.message)
        return _message(500, "There was an error sending your report.")

    return MessageResponse(message="Report emailed successfully!")
