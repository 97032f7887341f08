"""
Application configuration using Pydantic settings.
"""
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field


DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "catalog.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Catalog Source
    catalog_path: Path = Field(
        default=DEFAULT_CATALOG_PATH,
        description="Path to the bundled plant catalog JSON file"
    )
    catalog_url: Optional[str] = Field(
        default=None,
        description="Optional remote catalog URL; overrides catalog_path when set"
    )
    catalog_api_key: str = Field(
        default="",
        description="API key for the remote catalog service"
    )

    # Retry Configuration
    max_retry_attempts: int = Field(
        default=3,
        description="Maximum number of retry attempts for catalog fetches"
    )
    retry_backoff_multiplier: int = Field(
        default=1,
        description="Multiplier for exponential backoff"
    )
    retry_min_wait: int = Field(
        default=1,
        description="Minimum wait time in seconds between retries"
    )
    retry_max_wait: int = Field(
        default=10,
        description="Maximum wait time in seconds between retries"
    )

    # Scoring Parameters
    overlap_tolerance: float = Field(
        default=0.15,
        description="Fraction of summed plant footprint discounted as overlap"
    )
    coverage_target: float = Field(
        default=95.0,
        description="Coverage percentage that earns full coverage credit"
    )
    bundle_jitter_inches: float = Field(
        default=6.0,
        description="Maximum random offset applied to bundle placements"
    )
    default_bed_width: float = Field(
        default=120.0,
        description="Default bed width in inches"
    )
    default_bed_height: float = Field(
        default=72.0,
        description="Default bed depth in inches"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=120,
        description="Maximum requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="Landscape Studio Design Engine",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
