"""Pydantic schemas for forecast report requests."""

from typing import Any

from forecast_relay.leads.schemas import ServiceInputs, UsageEvent


class ReportRequest(UsageEvent):
    """A usage event plus the computed profit figure shown in the email."""

    profitFromOneSale: Any = None

    def services(self) -> ServiceInputs:
        return self.serviceInputs or ServiceInputs()

    @property
    def recipient(self) -> str | None:
        if isinstance(self.userEmail, str) and self.userEmail.strip():
            return self.userEmail.strip()
        return None
