import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, HttpUrl, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = ["DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Source Configuration
    standings_url: HttpUrl = Field(
        "https://api-web.nhle.com/v1/standings/now",
        description="Endpoint serving the current league standings snapshot.",
    )
    request_timeout_seconds: float = Field(
        30.0, gt=0, description="Per-request HTTP timeout in seconds."
    )

    # Retry Configuration
    max_attempts: int = Field(3, ge=1, description="Maximum fetch attempts.")
    initial_delay_ms: int = Field(
        1000, ge=0, description="Wait before the first retry, in milliseconds."
    )
    backoff_factor: float = Field(
        2, ge=1, description="Multiplier applied to the wait after each failure."
    )
    acquisition_deadline_seconds: Optional[float] = Field(
        None,
        gt=0,
        description="Overall deadline for the fetch/retry loop (None = no deadline).",
    )

    # Cache / Output Configuration
    cache_dir: Path = Field(Path(".cache"), description="Directory for cache entries.")
    cache_key: str = Field("nhl-standings", description="Cache slot for the snapshot.")
    output_path: Path = Field(
        Path("dist/standings.json"),
        description="Where the processed standings document is published.",
    )

    # League Shape
    expected_team_count: int = Field(32, ge=1)
    teams_per_division: int = Field(8, ge=1)
    teams_per_conference: int = Field(16, ge=1)
    season_games: int = Field(82, ge=1)
    points_per_win: int = Field(2, ge=1)

    # Projector Boundary
    threshold_min: int = Field(80, ge=0, description="Lowest accepted threshold.")
    threshold_max: int = Field(120, ge=0, description="Highest accepted threshold.")

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )
    log_file: Optional[Path] = Field(
        None, description="Optional path for a rotating log file sink."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        # Invalid levels fall back to INFO rather than aborting startup
        level = str(value).upper()
        if level not in VALID_LOG_LEVELS:
            logging.warning(f"Invalid LOG_LEVEL '{value}' found in .env or default. Using INFO.")
            return "INFO"
        return level

    @property
    def max_points(self) -> int:
        """Most points a team can hold over a full season."""
        return self.season_games * self.points_per_win


def load_settings(**overrides) -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings(**overrides)
    except ValidationError as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")
    if settings.threshold_min > settings.threshold_max:
        logging.error(
            f"threshold_min ({settings.threshold_min}) exceeds threshold_max ({settings.threshold_max})"
        )
        raise SystemExit("Failed to load application settings. Exiting.")
    return settings
