"""Configuration management."""

import os
from pathlib import Path

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.terrain_generator import TerrainConfig

# Load .env for local/dev environments only for values missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    for key, value in file_env.items():
        if key not in os.environ and value is not None:
            os.environ[key] = value


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    debug: bool = Field(default=False, description="Enable debug mode")
    allowed_origins: str = Field(default="*", description="Comma-separated CORS allowed origins")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (json or console)")

    # Garden Generation Configuration
    terrain_size: float = Field(default=200.0, gt=0, description="World size of the terrain plane")
    terrain_segments: int = Field(default=128, ge=1, le=512, description="Terrain cells per axis")
    ocean_segments: int = Field(default=32, ge=1, le=256, description="Ocean cells per axis")
    noise_source: str = Field(default="simplex", description="Noise source: simplex or random")
    include_field_by_default: bool = Field(
        default=False, description="Embed the full height/color field in API responses"
    )

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    def terrain_config(self) -> TerrainConfig:
        return TerrainConfig(size=self.terrain_size, segments=self.terrain_segments)


settings = Settings()
