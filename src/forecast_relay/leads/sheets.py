"""Google Sheets row appends via gspread and a service account."""

import asyncio
import logging
from typing import Any, Callable

import gspread

from forecast_relay.common.exceptions import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

# Leading characters Sheets evaluates as a formula under USER_ENTERED.
_FORMULA_PREFIXES = ("=", "+", "-", "@")


def neutralize_formula(value: Any) -> Any:
    """Quote user text that would otherwise be parsed as a formula.

    Only strings are touched, so numbers (negative ones included) still land
    as numbers.
    """
    if isinstance(value, str) and value.startswith(_FORMULA_PREFIXES):
        return "'" + value
    return value


def order_by_headers(headers: list[str], row: dict[str, Any]) -> list[Any]:
    """Lay out a header-keyed row as a list matching the sheet's columns.

    Headers with no value in ``row`` are written blank; keys that do not
    match a header are dropped.
    """
    values = []
    for header in headers:
        value = row.get(header)
        if value is None:
            values.append("")
        elif isinstance(value, (list, tuple)):
            values.append(neutralize_formula(", ".join(str(v) for v in value)))
        else:
            values.append(neutralize_formula(value))
    return values


class SheetAppender:
    """Appends rows to the first worksheet of a spreadsheet.

    gspread is synchronous, so each append runs in a worker thread.
    """

    provider = "google-sheets"

    def __init__(
        self,
        sheet_id: str,
        service_account_email: str,
        private_key: str,
        token_uri: str = "https://oauth2.googleapis.com/token",
        client_factory: Callable[[dict[str, str]], gspread.Client] | None = None,
        timeout: float = 8.0,
    ):
        self.sheet_id = sheet_id
        self.service_account_email = service_account_email
        self.private_key = private_key
        self.token_uri = token_uri
        self.timeout = timeout
        self._client_factory = client_factory or self._default_client

    def _default_client(self, info: dict[str, str]) -> gspread.Client:
        client = gspread.service_account_from_dict(info, scopes=SCOPES)
        client.set_timeout(self.timeout)
        return client

    def _service_account_info(self) -> dict[str, str]:
        return {
            "type": "service_account",
            "client_email": self.service_account_email,
            "private_key": self.private_key,
            "token_uri": self.token_uri,
        }

    def _append_sync(self, row: dict[str, Any]) -> None:
        client = self._client_factory(self._service_account_info())
        worksheet = client.open_by_key(self.sheet_id).get_worksheet(0)
        headers = worksheet.row_values(1)
        if not headers:
            raise ProviderError(self.provider, "first worksheet has no header row")
        worksheet.append_row(
            order_by_headers(headers, row),
            value_input_option="USER_ENTERED",
        )

    async def append_row(self, row: dict[str, Any]) -> None:
        """Append one header-keyed row. Raises ProviderError on failure."""
        if not (self.sheet_id and self.service_account_email and self.private_key):
            raise ConfigurationError("Google Sheets credentials are not set")
        try:
            await asyncio.to_thread(self._append_sync, row)
        except ProviderError:
            raise
        except Exception as exc:
            raise ProviderError(self.provider, str(exc) or type(exc).__name__) from exc
        logger.info("Google Sheet updated for %s", row.get("Email"))
