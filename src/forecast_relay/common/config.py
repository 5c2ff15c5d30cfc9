"""Forecast-Relay configuration via pydantic-settings."""

import warnings
from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Fields that must be set outside development, keyed to the env var operators set.
_REQUIRED_SECRETS = {
    "brevo_api_key": "BREVO_API_KEY",
    "gemini_api_key": "GEMINI_API_KEY",
    "google_sheet_id": "GOOGLE_SHEET_ID",
    "google_service_account_email": "GOOGLE_SERVICE_ACCOUNT_EMAIL",
    "google_private_key": "GOOGLE_PRIVATE_KEY",
}


def _env(name: str) -> AliasChoices:
    """Accept both RELAY_<NAME> and the bare deployment variable."""
    return AliasChoices(f"RELAY_{name}", name)


class RelaySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RELAY_",
        populate_by_name=True,
        frozen=True,
    )

    environment: str = "development"
    log_level: str = "INFO"

    # API
    api_title: str = "Forecast-Relay"
    api_version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = Field(default=3001, validation_alias=_env("PORT"))
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Return 207 with per-sink outcomes when one lead write fails.
    surface_partial_failure: bool = False

    # Outbound HTTP
    outbound_timeout: float = 8.0  # seconds

    # Brevo (CRM + transactional email)
    brevo_api_key: str = Field(default="", validation_alias=_env("BREVO_API_KEY"))
    brevo_base_url: str = "https://api.brevo.com/v3"
    brevo_lead_list_id: int = Field(default=0, validation_alias=_env("BREVO_LEAD_LIST_ID"))
    brevo_sender_email: str = Field(
        default="forecaster@example.com", validation_alias=_env("BREVO_SENDER_EMAIL")
    )
    sender_name: str = "ConAg Marketing Forecaster"
    marketing_team_email: str = Field(
        default="marketing@example.com", validation_alias=_env("MARKETING_TEAM_EMAIL")
    )
    marketing_team_name: str = "ConAg Marketing Team"
    report_subject: str = "Your Marketing Forecast from ConAg Marketing"

    # Google Sheets
    google_sheet_id: str = Field(default="", validation_alias=_env("GOOGLE_SHEET_ID"))
    google_service_account_email: str = Field(
        default="", validation_alias=_env("GOOGLE_SERVICE_ACCOUNT_EMAIL")
    )
    google_private_key: str = Field(default="", validation_alias=_env("GOOGLE_PRIVATE_KEY"))
    google_token_uri: str = "https://oauth2.googleapis.com/token"

    # Gemini
    gemini_api_key: str = Field(default="", validation_alias=_env("GEMINI_API_KEY"))
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-2.0-flash"
    gemini_json_model: str = "gemini-2.0-flash"

    @property
    def google_private_key_pem(self) -> str:
        """Return the private key with escaped newlines expanded.

        Hosting dashboards usually store the PEM on one line with literal
        ``\\n`` sequences.
        """
        return self.google_private_key.replace("\\n", "\n")

    @property
    def sheets_enabled(self) -> bool:
        return bool(
            self.google_sheet_id
            and self.google_service_account_email
            and self.google_private_key
        )

    def validate_for_production(self) -> None:
        """Raise if provider credentials are missing in non-development environments."""
        missing = [
            env_var
            for field, env_var in _REQUIRED_SECRETS.items()
            if not getattr(self, field)
        ]

        if self.environment != "development" and missing:
            raise RuntimeError(
                f"Missing provider credentials in '{self.environment}' environment. "
                f"Set these environment variables: {', '.join(missing)}."
            )

        if missing:
            warnings.warn(
                f"Provider credentials not configured ({', '.join(missing)}); "
                "the matching endpoints will fail until they are set",
                UserWarning,
                stacklevel=2,
            )


@lru_cache
def get_settings() -> RelaySettings:
    settings = RelaySettings()
    settings.validate_for_production()
    return settings
