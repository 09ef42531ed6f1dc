"""
Application configuration from environment variables.
"""
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

# The served document ships next to the package modules
DEFAULT_README_PATH = str(Path(__file__).resolve().parent / "readme.md")


class AppConfig(BaseSettings):
    port: int = 3000
    host: str = "0.0.0.0"
    readme_path: str = DEFAULT_README_PATH
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache
def get_config() -> AppConfig:
    return AppConfig()
