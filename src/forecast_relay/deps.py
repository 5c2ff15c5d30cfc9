"""Dependency injection singletons for Forecast-Relay."""

import httpx

from forecast_relay.common.config import RelaySettings, get_settings
from forecast_relay.completions.client import GeminiClient
from forecast_relay.leads.crm import BrevoContactsClient
from forecast_relay.leads.service import LeadService
from forecast_relay.leads.sheets import SheetAppender
from forecast_relay.reports.email_delivery import BrevoEmailSender
from forecast_relay.reports.service import ReportService

_settings: RelaySettings | None = None
_http: httpx.AsyncClient | None = None
_crm: BrevoContactsClient | None = None
_sheets: SheetAppender | None = None
_email: BrevoEmailSender | None = None
_gemini: GeminiClient | None = None
_leads: LeadService | None = None
_reports: ReportService | None = None


def configure(settings: RelaySettings) -> None:
    """Pin the settings every singleton is built from."""
    global _settings
    _settings = settings


def get_relay_settings() -> RelaySettings:
    global _settings
    if _settings is None:
        _settings = get_settings()
    return _settings


def get_http_client() -> httpx.AsyncClient:
    global _http
    if _http is None:
        _http = httpx.AsyncClient(timeout=get_relay_settings().outbound_timeout)
    return _http


def get_crm_client() -> BrevoContactsClient:
    global _crm
    if _crm is None:
        settings = get_relay_settings()
        _crm = BrevoContactsClient(
            api_key=settings.brevo_api_key,
            base_url=settings.brevo_base_url,
            http_client=get_http_client(),
            timeout=settings.outbound_timeout,
        )
    return _crm


def get_sheet_appender() -> SheetAppender:
    global _sheets
    if _sheets is None:
        settings = get_relay_settings()
        _sheets = SheetAppender(
            sheet_id=settings.google_sheet_id,
            service_account_email=settings.google_service_account_email,
            private_key=settings.google_private_key_pem,
            token_uri=settings.google_token_uri,
            timeout=settings.outbound_timeout,
        )
    return _sheets


def get_email_sender() -> BrevoEmailSender:
    global _email
    if _email is None:
        settings = get_relay_settings()
        _email = BrevoEmailSender(
            api_key=settings.brevo_api_key,
            from_email=settings.brevo_sender_email,
            from_name=settings.sender_name,
            bcc_email=settings.marketing_team_email,
            bcc_name=settings.marketing_team_name,
            subject=settings.report_subject,
            base_url=settings.brevo_base_url,
            http_client=get_http_client(),
            timeout=settings.outbound_timeout,
        )
    return _email


def get_gemini_client() -> GeminiClient:
    global _gemini
    if _gemini is None:
        settings = get_relay_settings()
        _gemini = GeminiClient(
            api_key=settings.gemini_api_key,
            base_url=settings.gemini_base_url,
            model=settings.gemini_model,
            json_model=settings.gemini_json_model,
            http_client=get_http_client(),
            timeout=settings.outbound_timeout,
        )
    return _gemini


def get_lead_service() -> LeadService:
    global _leads
    if _leads is None:
        _leads = LeadService(
            get_relay_settings(),
            crm_client=get_crm_client(),
            sheet_appender=get_sheet_appender(),
        )
    return _leads


def get_report_service() -> ReportService:
    global _reports
    if _reports is None:
        _reports = ReportService(get_relay_settings(), email_sender=get_email_sender())
    return _reports


async def close_http_client() -> None:
    """Close the shared client and drop every singleton holding it."""
    global _http, _crm, _email, _gemini, _leads, _reports
    if _http is not None:
        await _http.aclose()
    _http = None
    _crm = None
    _email = None
    _gemini = None
    _leads = None
    _reports = None


def reset_singletons() -> None:
    """Reset all singletons (for testing)."""
    global _settings, _http, _crm, _sheets, _email, _gemini, _leads, _reports
    _settings = None
    _http = None
    _crm = None
    _sheets = None
    _email = None
    _gemini = None
    _leads = None
    _reports = None
