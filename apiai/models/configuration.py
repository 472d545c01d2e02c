"""
models/configuration.py
Per-client configuration.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from apiai.core.config import Settings, settings as default_settings


class SupportedLanguage(str, Enum):
    """Language codes the query endpoint accepts."""

    ENGLISH = "en"
    RUSSIAN = "ru"
    GERMAN = "de"
    PORTUGUESE = "pt"
    PORTUGUESE_BRAZIL = "pt-BR"
    SPANISH = "es"
    FRENCH = "fr"
    ITALIAN = "it"
    JAPANESE = "ja"
    KOREAN = "ko"
    CHINESE_CHINA = "zh-CN"
    CHINESE_HONGKONG = "zh-HK"
    CHINESE_TAIWAN = "zh-TW"


class AIConfiguration(BaseModel):
    model_config = ConfigDict(frozen=True)

    client_access_token: str = Field(..., description="Bearer token sent with every request")
    language: SupportedLanguage = SupportedLanguage.ENGLISH
    session_id: Optional[str] = Field(None, description="Generated by the client when empty")
    debug_log: bool = False

    base_url: str = "https://api.api.ai/v1/"
    protocol_version: str = "20150910"
    request_url_override: Optional[str] = Field(None, description="Full endpoint URL, bypasses base_url")
    timeout: float = 10.0

    @property
    def request_url(self) -> str:
        if self.request_url_override:
            return self.request_url_override
        base = self.base_url if self.base_url.endswith("/") else self.base_url + "/"
        return f"{base}query?v={self.protocol_version}"

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **overrides) -> "AIConfiguration":
        s = settings or default_settings
        values = {
            "client_access_token": s.CLIENT_ACCESS_TOKEN,
            "language": s.LANGUAGE,
            "debug_log": s.DEBUG_LOG,
            "base_url": s.BASE_URL,
            "protocol_version": s.PROTOCOL_VERSION,
            "timeout": s.REQUEST_TIMEOUT,
        }
        values.update(overrides)
        return cls(**values)
