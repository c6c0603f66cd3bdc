"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. The Appwrite endpoint and project id are validated
at load time; the API key is only required by the provisioning scripts.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except appwrite_endpoint and
    appwrite_project_id, which are checked in validate_appwrite.
    """

    # App
    app_name: str = "restaurant-backend"
    debug: bool = False

    # Appwrite: endpoint includes the /v1 prefix, e.g. https://cloud.appwrite.io/v1
    appwrite_endpoint: str = ""
    appwrite_project_id: str = ""
    # Server API key (databases.write, collections.write, buckets.write, ...).
    appwrite_api_key: SecretStr | None = None
    appwrite_database_id: str = "restaurant-db"
    appwrite_self_signed: bool = False

    # HTTP
    request_timeout_seconds: float = 30.0

    # Schema provisioning: attributes are created asynchronously by Appwrite.
    attribute_wait_timeout_seconds: float = 60.0
    attribute_poll_interval_seconds: float = 1.0

    # Auth state watcher
    auth_poll_interval_seconds: float = 30.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_appwrite(self) -> "Settings":
        """Validate the Appwrite connection settings and timings."""
        if not self.appwrite_endpoint:
            raise ValueError(
                "APPWRITE_ENDPOINT is required (e.g. https://cloud.appwrite.io/v1). "
                "Set in environment or .env file."
            )
        if not self.appwrite_endpoint.startswith(("http://", "https://")):
            raise ValueError(
                f"APPWRITE_ENDPOINT must start with http:// or https://, got: {self.appwrite_endpoint!r}"
            )
        if not self.appwrite_project_id:
            raise ValueError(
                "APPWRITE_PROJECT_ID is required. Set in environment or .env file."
            )
        if not self.appwrite_database_id:
            raise ValueError("APPWRITE_DATABASE_ID must not be empty")
        for name in (
            "request_timeout_seconds",
            "attribute_wait_timeout_seconds",
            "attribute_poll_interval_seconds",
            "auth_poll_interval_seconds",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be greater than zero")
        self.appwrite_endpoint = self.appwrite_endpoint.rstrip("/")
        return self

    def api_key_value(self) -> str | None:
        """Return the plain API key, or None when not configured."""
        if self.appwrite_api_key is None:
            return None
        return self.appwrite_api_key.get_secret_value() or None


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
