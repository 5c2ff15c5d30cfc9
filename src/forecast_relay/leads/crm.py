"""HTTP client for Brevo's contacts API."""

import logging
from typing import Any

import httpx

from forecast_relay.common.exceptions import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)


class BrevoContactsClient:
    """Creates or updates contacts and attaches them to lead lists."""

    provider = "brevo-contacts"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.brevo.com/v3",
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 8.0,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    def _get_http_client(self) -> httpx.AsyncClient:
        """Lazy-init httpx.AsyncClient."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    async def upsert_contact(
        self,
        email: str,
        attributes: dict[str, Any],
        list_ids: list[int],
    ) -> None:
        """Create the contact, or update it if the email already exists.

        Raises ProviderError when Brevo rejects the call or is unreachable.
        """
        if not self.api_key:
            raise ConfigurationError("BREVO_API_KEY is not set")

        payload = {
            "email": email,
            "attributes": attributes,
            "listIds": list_ids,
            "updateEnabled": True,
        }
        try:
            resp = await self._get_http_client().post(
                f"{self.base_url}/contacts",
                json=payload,
                headers={"api-key": self.api_key, "accept": "application/json"},
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise ProviderError(self.provider, f"request failed: {exc}") from exc

        # 201 on create, 204 on update
        if resp.status_code not in (200, 201, 204):
            raise ProviderError(
                self.provider, resp.text or "rejected", status_code=resp.status_code
            )
        logger.info("Brevo contact for %s created/updated", email)
