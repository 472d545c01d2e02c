"""
models/request.py
Outgoing request envelope and the pieces it carries.
Serialized with camelCase keys; unset (None) fields never reach the wire.
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class AIContext(BaseModel):
    """Named fragment of conversational state."""

    name: str
    parameters: Optional[dict[str, Any]] = None
    lifespan: Optional[int] = None


class EntityEntry(BaseModel):
    value: str
    synonyms: list[str] = Field(default_factory=list)


class Entity(BaseModel):
    """Custom vocabulary definition sent along with a query."""

    name: str
    entries: list[EntityEntry] = Field(default_factory=list)


class AIRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: Optional[list[str]] = None
    confidence: Optional[list[float]] = None
    lang: Optional[str] = None
    timezone: Optional[str] = None
    session_id: Optional[str] = Field(None, alias="sessionId")
    contexts: Optional[list[AIContext]] = None
    entities: Optional[list[Entity]] = None
    reset_contexts: Optional[bool] = Field(None, alias="resetContexts")

    @classmethod
    def from_text(cls, text: str) -> "AIRequest":
        return cls(query=[text], confidence=[1.0])

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


class RequestExtras(BaseModel):
    """Contexts and entities merged into a voice request."""

    contexts: Optional[list[AIContext]] = None
    entities: Optional[list[Entity]] = None

    @property
    def has_contexts(self) -> bool:
        return bool(self.contexts)

    @property
    def has_entities(self) -> bool:
        return bool(self.entities)
