"""Email delivery for forecast reports — Brevo transactional API."""

import logging

import httpx

from forecast_relay.common.exceptions import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)


class BrevoEmailSender:
    """Sends forecast report emails through Brevo's SMTP API.

    Every report is blind-copied to the marketing team.
    """

    provider = "brevo-email"

    def __init__(
        self,
        api_key: str,
        from_email: str,
        from_name: str = "ConAg Marketing Forecaster",
        bcc_email: str = "",
        bcc_name: str = "ConAg Marketing Team",
        subject: str = "Your Marketing Forecast from ConAg Marketing",
        base_url: str = "https://api.brevo.com/v3",
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 8.0,
    ):
        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name
        self.bcc_email = bcc_email
        self.bcc_name = bcc_name
        self.subject = subject
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    def _get_http_client(self) -> httpx.AsyncClient:
        """Lazy-init httpx.AsyncClient."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    def build_message(self, to_email: str, to_name: str | None, html_content: str) -> dict:
        recipient = {"email": to_email}
        if to_name:
            recipient["name"] = to_name
        message = {
            "sender": {"email": self.from_email, "name": self.from_name},
            "to": [recipient],
            "subject": self.subject,
            "htmlContent": html_content,
        }
        if self.bcc_email:
            message["bcc"] = [{"email": self.bcc_email, "name": self.bcc_name}]
        return message

    async def send_report(self, to_email: str, to_name: str | None, html_content: str) -> str | None:
        """Send a report email and return Brevo's message id.

        Raises ProviderError when the send is rejected or Brevo is unreachable.
        """
        if not self.api_key:
            raise ConfigurationError("BREVO_API_KEY is not set")

        try:
            resp = await self._get_http_client().post(
                f"{self.base_url}/smtp/email",
                headers={"api-key": self.api_key, "accept": "application/json"},
                json=self.build_message(to_email, to_name, html_content),
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise ProviderError(self.provider, f"request failed: {exc}") from exc

        if resp.status_code not in (200, 201, 202):
            logger.warning("Brevo email error: %s %s", resp.status_code, resp.text)
            raise ProviderError(
                self.provider, resp.text or "rejected", status_code=resp.status_code
            )
        logger.info("Brevo email sent to %s", to_email)
        try:
            return resp.json().get("messageId")
        except ValueError:
            return None
