"""
Application settings using Pydantic Settings.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Prefer local overrides while keeping .env as the default source
        env_file=(".env.local", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["dev", "staging", "prod"] = "dev"

    # Generation defaults
    default_symbology: str = Field("CODE128", description="Symbology preselected in the UI")
    output_dir: str = Field("barcodes", description="Directory used by the CLI exporter")

    # Batch Configuration
    batch_row_delay_ms: int = Field(50, ge=0, description="Pause between batch rows")
    max_upload_bytes: int = Field(5_000_000, description="Largest accepted batch file")

    # Raster encoding
    jpeg_quality: int = Field(90, ge=1, le=100, description="JPEG quality for jpg exports")

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "text"

    # Generator UI
    generator_ui_host: str = "127.0.0.1"
    generator_ui_port: int = 8000

    @property
    def batch_row_delay_seconds(self) -> float:
        """Get the batch row delay in seconds."""
        return self.batch_row_delay_ms / 1000


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
