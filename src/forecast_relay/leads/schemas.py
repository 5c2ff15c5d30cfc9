"""Pydantic schemas for forecast usage events.

Field names mirror the widget's camelCase JSON. Values are forwarded to the
CRM and spreadsheet as received, so nothing here is type-checked beyond
being JSON.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class ServiceInputs(BaseModel):
    """Services the user selected in the forecaster."""

    model_config = ConfigDict(extra="allow")

    emailSends: Any = None
    selectedSocialChannelsText: Any = None
    websiteMaintenanceSelected: Any = None
    seoEnhancementsSelected: Any = None
    googleAdsDailySpend: Any = None


class UsageEvent(BaseModel):
    """A forecast run submitted by the widget."""

    model_config = ConfigDict(extra="allow")

    userName: Any = None
    userEmail: Any = None
    userCompany: Any = None
    equipmentTypes: Any = None
    avgSaleValue: Any = None
    avgProfitMargin: Any = None
    totalMonthlyMarketingSpend: Any = None
    netGainFromOneSale: Any = None
    serviceInputs: Optional[ServiceInputs] = None

    @field_validator("serviceInputs", mode="before")
    @classmethod
    def _drop_non_object_inputs(cls, value: Any) -> Any:
        # The widget may send null, a string or a list here; treat all as absent.
        return value if isinstance(value, (dict, ServiceInputs)) else None


class SinkOutcome(BaseModel):
    """Result of one best-effort write."""

    sink: str
    ok: bool
    error: Optional[str] = None


class LogOutcome(BaseModel):
    """Results of both writes for one usage event."""

    crm: SinkOutcome
    sheet: SinkOutcome

    @property
    def partial_failure(self) -> bool:
        return not (self.crm.ok and self.sheet.ok)


class LogUsageResponse(BaseModel):
    message: str
    outcomes: Optional[list[SinkOutcome]] = None
