"""Configuration settings using Pydantic."""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SnapshotDefaults(BaseModel):
    """Defaults applied by the snapshot assembler when a caller omits options."""

    model_config = {"frozen": True}

    geo: str = Field(default="US", description="Default two-letter region code")
    limit: int = Field(default=15, ge=0, description="Default keyword depth")
    max_limit: int = Field(default=30, ge=0, description="Hard cap on keyword depth")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TREND_PULSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Snapshot defaults
    default_geo: str = Field(default="US", description="Region used when none is requested")
    default_limit: int = Field(default=15, description="Depth used when none is requested")
    max_limit: int = Field(default=30, description="Maximum depth a caller may request")

    # Upstream feeds
    daily_trends_url: str = Field(
        default="https://trends.google.com/trends/api/dailytrends",
        description="Google daily trends endpoint",
    )
    realtime_trends_url: str = Field(
        default="https://trends.google.com/trends/api/realtimetrends",
        description="Google realtime trends endpoint",
    )
    youtube_trending_url: str = Field(
        default="https://www.youtube.com/feed/trending",
        description="YouTube trending page",
    )
    language: str = Field(default="en-US", description="hl parameter sent upstream")
    timezone_offset: int = Field(default=-480, description="tz parameter for Google Trends (minutes)")
    request_timeout: float = Field(default=10.0, description="Per-request timeout in seconds")
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        ),
        description="User-Agent header for upstream requests",
    )

    # HTTP server
    host: str = Field(default="0.0.0.0", description="API bind address")
    port: int = Field(default=8080, description="API server port")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")

    @property
    def snapshot_defaults(self) -> SnapshotDefaults:
        """Snapshot defaults derived from these settings."""
        return SnapshotDefaults(
            geo=self.default_geo.strip().upper(),
            limit=max(self.default_limit, 0),
            max_limit=max(self.max_limit, 0),
        )

    @property
    def accept_language(self) -> str:
        return f"{self.language},{self.language.split('-')[0]};q=0.9"


# Global settings instance
settings = Settings()
