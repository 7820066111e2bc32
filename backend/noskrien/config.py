"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator

# Project root: repository checkout
PROJECT_ROOT = Path(__file__).parent.parent.parent
# Scraped results: <root>/data/<season>/<distance>/results_*.json
DATA_DIR = PROJECT_ROOT / "data"


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === Database ===
    database_url: str = Field(
        default="sqlite:///./noskrien.db",
        description="Database connection URL"
    )

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # === Data ===
    data_dir: Path = Field(default=DATA_DIR, description="Scraped results directory")

    # === Comparison ===
    default_category: str = Field(default="Tautas")
    distance_tolerance_km: float = Field(default=0.5, gt=0)
    search_limit: int = Field(default=10, ge=1, le=100)

    # === Gender repair ===
    # Names found in both gender files are moved from source to target
    gender_repair_enabled: bool = Field(default=True)
    gender_repair_source: str = Field(default="V")
    gender_repair_target: str = Field(default="S")

    @field_validator('database_url')
    @classmethod
    def fix_postgres_url(cls, v: str) -> str:
        """Fix Render/Railway postgres:// URL to postgresql://"""
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
