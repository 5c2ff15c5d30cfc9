"""Completion proxy API router."""

import logging
from typing import Any

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from forecast_relay.common.schemas import ErrorResponse
from forecast_relay.completions.client import build_payload
from forecast_relay.completions.schemas import CompletionRequest, TransportFailure

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_client():
    from forecast_relay.deps import get_gemini_client
    return get_gemini_client()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse.of(message).model_dump())


@router.post(
    "/gemini-proxy",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def gemini_proxy(body: Any = Body(None)):
    request = CompletionRequest.model_validate(body if isinstance(body, dict) else {})
    if not request.prompt:
        return _error(400, "Prompt is required.")

    client = _get_client()
    outcome = await client.generate(
        build_payload(request.prompt, request.isJsonOutput, request.response_schema),
        structured=request.structured,
    )

    if isinstance(outcome, TransportFailure):
        logger.error("Gemini proxy error: %s", outcome.reason)
        return _error(500, "Error contacting AI service.")
    return JSONResponse(status_code=outcome.status_code, content=outcome.body)
