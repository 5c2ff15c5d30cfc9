"""Lead logging — best-effort writes to the CRM and the spreadsheet."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Optional

from forecast_relay.common.config import RelaySettings
from forecast_relay.leads.crm import BrevoContactsClient
from forecast_relay.leads.schemas import LogOutcome, SinkOutcome, UsageEvent
from forecast_relay.leads.sheets import SheetAppender

logger = logging.getLogger(__name__)

# Column headers of the provisioned lead sheet, in order.
SHEET_COLUMNS = (
    "Timestamp",
    "Name",
    "Email",
    "Company",
    "Equipment Types",
    "Avg Sale Value",
    "Profit Margin (%)",
    "Total Spend",
    "Net Gain",
)


def build_contact_attributes(event: UsageEvent) -> dict[str, Any]:
    """Map a usage event onto Brevo contact attribute keys."""
    attributes = {
        "FIRSTNAME": event.userName,
        "COMPANY": event.userCompany,
    }
    if event.equipmentTypes is not None:
        types = event.equipmentTypes
        if isinstance(types, (list, tuple)):
            types = ", ".join(str(t) for t in types)
        attributes["EQUIPMENT_TYPES"] = types
    return {k: v for k, v in attributes.items() if v is not None}


def build_sheet_row(event: UsageEvent, now: Optional[datetime] = None) -> dict[str, Any]:
    """Map a usage event onto the lead sheet's column headers."""
    now = now or datetime.now(timezone.utc)
    values = (
        now.isoformat().replace("+00:00", "Z"),
        event.userName,
        event.userEmail,
        event.userCompany,
        event.equipmentTypes,
        event.avgSaleValue,
        event.avgProfitMargin,
        event.totalMonthlyMarketingSpend,
        event.netGainFromOneSale,
    )
    return dict(zip(SHEET_COLUMNS, values))


class LeadService:
    """Replicates usage events to two independent sinks.

    Neither sink is required for the other to be attempted, and a failure
    in one never raises out of ``log_usage``.
    """

    def __init__(
        self,
        settings: RelaySettings,
        crm_client: BrevoContactsClient,
        sheet_appender: SheetAppender,
    ):
        self.settings = settings
        self.crm_client = crm_client
        self.sheet_appender = sheet_appender

    async def _attempt(self, sink: str, email: Any, call: Awaitable[None]) -> SinkOutcome:
        try:
            await call
        except Exception as exc:
            logger.error(
                "%s write failed for %s: %s", sink, email, exc,
                extra={"sink": sink, "ok": False},
            )
            return SinkOutcome(sink=sink, ok=False, error=str(exc))
        logger.info("%s write ok for %s", sink, email, extra={"sink": sink, "ok": True})
        return SinkOutcome(sink=sink, ok=True)

    async def log_usage(self, event: UsageEvent) -> LogOutcome:
        email = event.userEmail
        list_ids = [self.settings.brevo_lead_list_id] if self.settings.brevo_lead_list_id else []

        crm, sheet = await asyncio.gather(
            self._attempt(
                "crm",
                email,
                self.crm_client.upsert_contact(
                    email, build_contact_attributes(event), list_ids,
                ),
            ),
            self._attempt(
                "sheet",
                email,
                self.sheet_appender.append_row(build_sheet_row(event)),
            ),
        )
        return LogOutcome(crm=crm, sheet=sheet)
