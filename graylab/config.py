"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    graylab_env: str = "development"
    graylab_log_level: str = "info"

    # Largest raster accepted by the codec and the grid model
    graylab_max_width: int = 4096
    graylab_max_height: int = 4096

    # Flood-fill work queue bound; None keeps the worklist unbounded
    graylab_queue_capacity: int | None = None

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
