"""Local notes configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "LOCAL_NOTES_",
    }

    # Storage
    data_dir: Path = Path.home() / ".local_notes"
    storage_backend: Literal["file", "memory"] = "file"
    storage_key: str = "simple_notes__v1"
    max_blob_bytes: int | None = None

    # Logging
    log_level: str = "INFO"


settings = Settings()
