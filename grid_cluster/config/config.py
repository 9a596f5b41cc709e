from pathlib import Path
from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

import os

# Load .env for local/dev environments only where values are missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    for k, v in file_env.items():
        if k not in os.environ and v is not None:
            os.environ[k] = v


class Settings(BaseSettings):
    """Application settings pulled from GRID_CLUSTER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GRID_CLUSTER_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Grid Configuration
    base_side_width: float = Field(default=1000.0, gt=0, description="Finest cell side in projection units")
    min_side_pixels: float = Field(default=30.0, ge=0, description="Minimal on-screen cell side in pixels")
    origin_x: float = Field(default=0.0, description="Grid origin x")
    origin_y: float = Field(default=0.0, description="Grid origin y")

    # Source Behaviour
    buffer_factor: float = Field(default=0.5, ge=0, description="Extent buffer relative to its longer side")
    ignore_feature_changes: bool = Field(default=False, description="Skip per-cluster change notifications")

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (console or json)")


# Instantiate singleton settings object
settings = Settings()
