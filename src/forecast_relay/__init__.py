"""Forecast-Relay: lead logging, report email and AI proxy for the forecast widget."""

from forecast_relay.completions.client import GeminiClient, build_payload
from forecast_relay.reports.rendering import format_currency, render_report_html

__all__ = [
    "GeminiClient",
    "build_payload",
    "format_currency",
    "render_report_html",
]
__version__ = "0.1.0"
