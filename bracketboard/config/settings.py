import logging
from typing import Optional

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

from bracketboard.models.enums import DataSource


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Data Source Configuration
    data_source: DataSource = Field(
        DataSource.FILE, description="Where teams and matches are loaded from."
    )
    teams_location: str = Field(
        "teams.json", description="Path or URL of the teams dataset."
    )
    matches_location: str = Field(
        "matches.json", description="Path or URL of the matches dataset."
    )
    request_timeout_seconds: float = Field(
        30.0, gt=0, description="Timeout for HTTP dataset requests."
    )

    # Supabase Configuration (only used when data_source is 'supabase')
    supabase_url: Optional[HttpUrl] = Field(
        None, description="URL for the Supabase project."
    )
    supabase_key: Optional[str] = Field(
        None, description="Anon key for the Supabase project."
    )
    teams_table: str = Field("teams", description="Supabase table holding teams.")
    matches_table: str = Field(
        "matches", description="Supabase table holding matches."
    )

    # Bracket Settings
    winners_max_rank: int = Field(
        4,
        ge=1,
        description="Highest rank that still qualifies for the winners bracket.",
    )
    losers_max_rank: int = Field(
        6,
        ge=1,
        description="Highest rank that still qualifies for the losers bracket.",
    )

    # CLI Behaviour
    interactive: bool = Field(
        True, description="Prompt for predictions after the first render."
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        if settings.losers_max_rank < settings.winners_max_rank:
            raise ValueError(
                f"LOSERS_MAX_RANK ({settings.losers_max_rank}) must not be lower "
                f"than WINNERS_MAX_RANK ({settings.winners_max_rank})"
            )
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
