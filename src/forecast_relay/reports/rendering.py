"""HTML rendering for the forecast report email."""

import html
import math
from typing import Any

from forecast_relay.reports.schemas import ReportRequest


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def format_currency(value: Any) -> str:
    """Round to whole dollars (halves round up) and add thousands separators.

    >>> format_currency(1234.6)
    '$1,235'

    Numeric strings are accepted; anything non-numeric renders as ``$0``.
    """
    number = _to_number(value)
    if number is None:
        return "$0"
    return f"${math.floor(number + 0.5):,}"


def text(value: Any) -> str:
    """Render a loosely-typed JSON value as escaped HTML text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, (list, tuple)):
        return ", ".join(text(v) for v in value)
    return html.escape(str(value))


def format_percent(value: Any) -> str:
    return f"{text(value)}%"


def yes_no(flag: Any) -> str:
    return "Yes" if flag else "No"


def render_report_html(report: ReportRequest, marketing_email: str) -> str:
    """Build the report email body from a submitted forecast."""
    services = report.services()
    return (
        "<h1>Your Marketing Investment Forecast</h1>"
        f"<p>Hi {text(report.userName)},</p>"
        "<p>Thank you for using the ConAg Marketing Investment Forecaster. "
        "Here is a summary of your report.</p>"
        "<h3>📈 Forecast Results</h3><ul>"
        f"<li>Total Selected Monthly Marketing Spend: <strong>{format_currency(report.totalMonthlyMarketingSpend)}</strong></li>"
        f"<li>Estimated Profit from ONE Additional Sale: <strong>{format_currency(report.profitFromOneSale)}</strong></li>"
        f'<li style="font-size: 1.2em;">Estimated Net Gain: <strong>{format_currency(report.netGainFromOneSale)}</strong></li>'
        "</ul>"
        "<h3>📋 Your Selections</h3><ul>"
        f"<li>Company: {text(report.userCompany)}</li>"
        f"<li>Equipment Types: {text(report.equipmentTypes)}</li>"
        f"<li>Average Sale Value: {format_currency(report.avgSaleValue)}</li>"
        f"<li>Average Profit Margin: {format_percent(report.avgProfitMargin)}</li>"
        "</ul>"
        "<h3>🛠️ Selected Services</h3><ul>"
        f"<li>Email Blasts: {text(services.emailSends)} per month</li>"
        f"<li>Social Media Channels: {text(services.selectedSocialChannelsText)}</li>"
        f"<li>Website Maintenance: {yes_no(services.websiteMaintenanceSelected)}</li>"
        f"<li>Website SEO &amp; AI Enhancements: {yes_no(services.seoEnhancementsSelected)}</li>"
        f"<li>Google Ads Daily Spend: {format_currency(services.googleAdsDailySpend)}</li>"
        "</ul><hr>"
        "<p><strong>Next Steps:</strong> Want to discuss this plan in more detail? "
        f"Reply to this email or contact us at {html.escape(marketing_email)}.</p>"
    )
