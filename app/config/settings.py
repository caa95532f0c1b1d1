import os
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_database_url() -> str:
    """Get database URL, using absolute path for SQLite to avoid path resolution issues.

    SQLite is for local development only. Set DATABASE_URL to a PostgreSQL
    connection string for anything shared: the regeneration lock relies on the
    store's row-level atomicity, which SQLite only provides per file.
    """
    db_url = os.getenv("DATABASE_URL", "")
    if db_url:
        logger.info(f"Using DATABASE_URL from environment: {db_url}")
        return db_url

    db_path = Path(__file__).parent.parent.parent / "trips.db"
    abs_path = db_path.resolve()
    db_url = f"sqlite:///{abs_path}"
    logger.warning(f"Using SQLite database (LOCAL DEV ONLY): {db_url}")
    return db_url


class Settings(BaseSettings):
    database_url: str = Field(
        default_factory=get_database_url,
        validation_alias="DATABASE_URL",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    log_json: bool = Field(
        default=False,
        validation_alias="LOG_JSON",
        description="Write the LOG_FILE sink as JSON lines",
    )
    dev_user_id: str = Field(
        default="",
        validation_alias="DEV_USER_ID",
        description="Caller identity used when no X-User-Id header is sent (local development)",
    )
    regen_lock_ttl_seconds: int = Field(
        default=120,
        validation_alias="REGEN_LOCK_TTL_SECONDS",
        description="Time-to-live of a trip regeneration lock",
    )
    max_trip_days: int = Field(
        default=30,
        validation_alias="MAX_TRIP_DAYS",
        description="Upper bound for a trip's requested day count",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("regen_lock_ttl_seconds", "max_trip_days")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
