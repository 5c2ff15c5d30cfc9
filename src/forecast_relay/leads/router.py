"""Usage logging API router."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Response

from forecast_relay.leads.schemas import LogUsageResponse, UsageEvent

logger = logging.getLogger(__name__)

router = APIRouter()

LOGGED_MESSAGE = "Data logged successfully"


def _get_service():
    from forecast_relay.deps import get_lead_service
    return get_lead_service()


def _get_settings():
    from forecast_relay.deps import get_relay_settings
    return get_relay_settings()


@router.post(
    "/log-forecast-usage",
    response_model=LogUsageResponse,
    response_model_exclude_none=True,
)
async def log_forecast_usage(response: Response, body: Any = Body(None)):
    # Parsed by hand so a missing or non-object body is still logged, not a 422.
    event = UsageEvent.model_validate(body if isinstance(body, dict) else {})
    logger.info("Received data for logging: %s", event.userEmail)
    outcome = await _get_service().log_usage(event)

    if outcome.partial_failure and _get_settings().surface_partial_failure:
        response.status_code = 207
        return LogUsageResponse(
            message="Data logged with errors",
            outcomes=[outcome.crm, outcome.sheet],
        )
    return LogUsageResponse(message=LOGGED_MESSAGE)
