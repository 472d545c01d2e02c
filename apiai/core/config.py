"""
core/config.py
SDK-wide defaults in one place.
Every value can be overridden with an APIAI_* environment variable or .env entry.
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="APIAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ─── SDK ───────────────────────────────────────────────
    SDK_NAME: str = "apiai-python"
    SDK_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # ─── Service endpoint ──────────────────────────────────
    CLIENT_ACCESS_TOKEN: str = ""
    LANGUAGE: str = "en"
    BASE_URL: str = "https://api.api.ai/v1/"
    PROTOCOL_VERSION: str = "20150910"
    REQUEST_TIMEOUT: float = 10.0     # seconds, handed to httpx as-is
    DEBUG_LOG: bool = False           # dump raw request/response JSON

    # ─── Session id persistence ────────────────────────────
    # Options: "memory" | "file" | "redis"
    SETTINGS_STORE: Literal["memory", "file", "redis"] = "memory"
    SETTINGS_FILE: str = "~/.apiai/settings.json"
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_KEY_PREFIX: str = "apiai:settings:"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
