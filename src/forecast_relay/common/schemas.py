"""Shared Pydantic schemas for Forecast-Relay."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    service: str = "forecast-relay"


class MessageResponse(BaseModel):
    message: str


class ErrorDetail(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Error envelope matching the upstream model API's shape."""

    error: ErrorDetail

    @classmethod
    def of(cls, message: str) -> "ErrorResponse":
        return cls(error=ErrorDetail(message=message))
