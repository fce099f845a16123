"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=3000, description="Port to run the server on")
    log_level: str = Field(default="INFO", description="Logging level")

    # Upstream Configuration
    upstream_timeout: float = Field(
        default=15.0, gt=0, description="Hard timeout in seconds for each upstream call"
    )
    upstream_user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent sent upstream (some APIs reject non-browser agents)",
    )
    lyrics_api_base: str = Field(
        default="https://api.lyrics.ovh/v1", description="Base URL of the lyrics API"
    )
    audiodb_api_base: str = Field(
        default="https://theaudiodb.com/api/v1/json", description="Base URL of TheAudioDB API"
    )
    audiodb_api_key: str = Field(default="1", description="TheAudioDB API key (1 = public key)")

    # Static Asset Configuration
    static_root: Path = Field(default=Path("public"), description="Directory of static assets")
    index_document: str = Field(default="index.html", description="Document served for /")

    @property
    def resolved_static_root(self) -> Path:
        """Get the static asset root, handling empty env var case."""
        if not str(self.static_root) or str(self.static_root) == ".":
            return Path("public")
        return self.static_root

    # Feature Flags
    enable_telemetry: bool = Field(default=True, description="Enable PostHog telemetry")

    # PostHog Configuration
    posthog_api_key: str | None = Field(None, description="PostHog API key for telemetry")
    posthog_host: str = Field(default="https://us.i.posthog.com", description="PostHog host URL")

    # Sentry Configuration
    sentry_dsn: str | None = Field(None, description="Sentry DSN for error tracking")

    # Application Metadata
    app_name: str = Field(default="Music-Explorer-Gateway", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
