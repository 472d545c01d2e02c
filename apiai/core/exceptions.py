"""
core/exceptions.py
Errors raised by the client when the service or the transport fails.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from apiai.models.response import AIResponse


class AIServiceError(Exception):
    """
    Any failure that originates from the remote service or the HTTP layer.

    `response` is set when the service answered with an error-flagged body,
    `status_code` when it answered with a non-2xx HTTP status.
    The underlying exception (if any) is kept in `__cause__`.
    """

    def __init__(
        self,
        message: str,
        response: Optional["AIResponse"] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.response = response
        self.status_code = status_code

    @classmethod
    def from_response(cls, response: "AIResponse") -> "AIServiceError":
        status = response.status
        code = status.code if status else None
        detail = response.error_message or "no details provided"
        return cls(
            f"API.AI service returned error {code}: {detail}",
            response=response,
            status_code=code,
        )

    @classmethod
    def wrap(cls, exc: Exception) -> "AIServiceError":
        return cls(f"API.AI request failed: {type(exc).__name__}: {exc}")
