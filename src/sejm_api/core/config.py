"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Sejm API
    sejm_api_base_url: str = Field(
        default="https://api.sejm.gov.pl/sejm",
        description="Base URL of the Sejm open-data REST API",
    )
    sejm_term: int = Field(
        default=10,
        description="Sejm term (kadencja) whose roster and votes are served",
        gt=0,
    )
    sejm_web_base_url: str = Field(
        default="https://www.sejm.gov.pl",
        description="Base URL of the public Sejm website (voting detail pages)",
    )
    sejm_request_timeout: float = Field(
        default=15.0,
        description="Wall-clock timeout in seconds for a single Sejm API request",
        gt=0,
    )

    @field_validator("sejm_api_base_url", "sejm_web_base_url")
    @classmethod
    def validate_https_url(cls, v: str) -> str:
        if not v.startswith("https://"):
            msg = "Sejm URLs must use HTTPS"
            raise ValueError(msg)
        return v.rstrip("/")

    # Geocoding: Nominatim (OpenStreetMap)
    geocoder_nominatim_url: str = Field(
        default="https://nominatim.openstreetmap.org/search",
        description="Nominatim search endpoint used for postal-code lookups",
    )
    geocoder_user_agent: str = Field(
        default="InfoApp/1.0 (contact@example.com)",
        description="User-Agent header required by the Nominatim usage policy",
    )
    geocoder_country: str = Field(
        default="Poland",
        description="Country that scopes every postal-code query",
    )
    geocoder_timeout: float = Field(
        default=10.0,
        description="Nominatim request timeout in seconds",
        gt=0,
    )

    # Voting records
    votes_initial_window_days: int = Field(
        default=90,
        description="Day window scanned on the first vote load for a representative",
        gt=0,
    )
    votes_window_step_days: int = Field(
        default=90,
        description="Days added to the window on each 'load more'",
        gt=0,
    )
    votes_max_window_days: int = Field(
        default=400,
        description="Ceiling for the vote day window",
        gt=0,
    )
    votes_page_size: int = Field(
        default=12,
        description="Maximum number of new vote records returned per load",
        gt=0,
    )

    @model_validator(mode="after")
    def validate_vote_window(self) -> "Settings":
        if self.votes_max_window_days < self.votes_initial_window_days:
            msg = "votes_max_window_days must not be smaller than votes_initial_window_days"
            raise ValueError(msg)
        return self

    # District data
    district_table_path: str | None = Field(
        default=None,
        description="Optional path to an official district table overriding the packaged one",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON-serialized log records on stderr",
    )

    # CORS
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins (must be explicitly configured)",
    )
    cors_origin_regex: str = Field(
        default="",
        description="Regex pattern for allowed CORS origins",
    )

    # API
    api_v1_prefix: str = Field(
        default="/api/v1",
        description="API version prefix",
    )
    rate_limit_per_minute: int = Field(
        default=200,
        description="Maximum API requests per minute per IP address",
        gt=0,
    )
    trusted_proxy_headers: str = Field(
        default="CF-Connecting-IP,X-Forwarded-For,X-Real-IP",
        description="Comma-separated list of HTTP headers to check for real client IP, in priority order",
    )

    @property
    def trusted_proxy_header_list(self) -> list[str]:
        """Parse trusted proxy headers string into a list."""
        if not self.trusted_proxy_headers.strip():
            return []
        return [h.strip() for h in self.trusted_proxy_headers.split(",") if h.strip()]

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        if not self.cors_origins.strip():
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
