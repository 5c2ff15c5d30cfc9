"""Gemini generateContent client for the completion proxy."""

import logging
from typing import Any

import httpx

from forecast_relay.completions.schemas import RelayOutcome, TransportFailure, UpstreamResponse

logger = logging.getLogger(__name__)


def build_payload(prompt: str, is_json_output: Any = False, schema: Any = None) -> dict[str, Any]:
    """Build a generateContent request with the prompt as a single user turn.

    Output is constrained to ``schema`` only when JSON output was requested
    and a schema was supplied.
    """
    payload: dict[str, Any] = {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
    }
    if is_json_output and schema:
        payload["generationConfig"] = {
            "responseMimeType": "application/json",
            "responseSchema": schema,
        }
    return payload


class GeminiClient:
    """Forwards payloads to the model API without interpreting the reply."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        model: str = "gemini-2.0-flash",
        json_model: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 8.0,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.json_model = json_model or model
        self.timeout = timeout
        self._http_client = http_client

    def _get_http_client(self) -> httpx.AsyncClient:
        """Lazy-init httpx.AsyncClient."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    def select_model(self, structured: bool) -> str:
        return self.json_model if structured else self.model

    def endpoint(self, model: str) -> str:
        return f"{self.base_url}/models/{model}:generateContent"

    async def generate(self, payload: dict[str, Any], structured: bool = False) -> RelayOutcome:
        """POST the payload upstream.

        Any HTTP response, success or error, becomes an UpstreamResponse.
        Only failures before a response arrives become TransportFailure.
        """
        model = self.select_model(structured)
        try:
            resp = await self._get_http_client().post(
                self.endpoint(model),
                json=payload,
                # Header rather than ?key= so the key stays out of URLs in logs.
                headers={"x-goog-api-key": self.api_key},
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            logger.error("Gemini request to %s failed: %s", model, type(exc).__name__)
            return TransportFailure(reason=type(exc).__name__)

        try:
            body = resp.json()
        except ValueError:
            body = {"error": {"message": resp.text or resp.reason_phrase}}

        if resp.is_error:
            logger.warning(
                "Gemini returned %s for %s", resp.status_code, model,
                extra={"status_code": resp.status_code},
            )
        return UpstreamResponse(status_code=resp.status_code, body=body)
