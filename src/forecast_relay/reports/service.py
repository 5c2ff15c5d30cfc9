"""Report service — render and email a forecast report."""

import logging

from forecast_relay.common.config import RelaySettings
from forecast_relay.reports.email_delivery import BrevoEmailSender
from forecast_relay.reports.rendering import render_report_html
from forecast_relay.reports.schemas import ReportRequest

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(self, settings: RelaySettings, email_sender: BrevoEmailSender):
        self.settings = settings
        self.email_sender = email_sender

    def render(self, report: ReportRequest) -> str:
        return render_report_html(report, self.settings.marketing_team_email)

    async def send(self, report: ReportRequest) -> str | None:
        """Email the rendered report to the user. Provider errors propagate."""
        name = report.userName if isinstance(report.userName, str) else None
        return await self.email_sender.send_report(
            report.recipient, name, self.render(report),
        )
