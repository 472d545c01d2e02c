"""
services/data_service.py

Async client for the API.AI query endpoint.
Flow for every call:
  1. Stamp language / timezone / session id onto the request envelope
  2. Serialize it (None fields dropped)
  3. POST as JSON (text) or multipart (voice)
  4. Parse the JSON reply into AIResponse, raise AIServiceError on failure

Cancellation is plain asyncio task cancellation on both paths;
CancelledError is never wrapped.
"""

import json
import time
import uuid
from typing import BinaryIO, Optional, Union

import httpx

from apiai.core.config import settings
from apiai.core.exceptions import AIServiceError
from apiai.core.logger import get_logger
from apiai.models.configuration import AIConfiguration
from apiai.models.request import AIRequest, RequestExtras
from apiai.models.response import AIResponse, ContextResetResult
from apiai.services.settings_store import SettingsStore, get_settings_store

logger = get_logger(__name__)

SESSION_ID_SETTING = "api_ai_SessionId"
RESET_CONTEXTS_QUERY = "empty_query_for_resetting_contexts"
MIN_SESSION_ID_LENGTH = 30  # session ids must be strictly longer

VoiceData = Union[bytes, BinaryIO]


def _local_timezone_name() -> str:
    return time.tzname[0]


class AIDataService:
    def __init__(
        self,
        config: AIConfiguration,
        settings_store: Optional[SettingsStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._session_id = config.session_id or str(uuid.uuid4())
        # stores passed in by the caller are closed by the caller
        self._owns_store = settings_store is None
        self.settings_store = settings_store if settings_store is not None else get_settings_store()

        self._http = httpx.AsyncClient(
            transport=transport,
            timeout=config.timeout,
            headers={
                "Authorization": f"Bearer {config.client_access_token}",
                "Accept": "application/json",
                "User-Agent": f"{settings.SDK_NAME}/{settings.SDK_VERSION}",
            },
        )

    # ── Session id ─────────────────────────────────────────────────────────

    @property
    def session_id(self) -> str:
        """Unique session id. Normally should not be changed."""
        return self._session_id

    @session_id.setter
    def session_id(self, value: str) -> None:
        if not value:
            raise ValueError("session_id must not be empty")
        if len(value) <= MIN_SESSION_ID_LENGTH:
            raise ValueError(
                f"session_id must be longer than {MIN_SESSION_ID_LENGTH} characters. "
                "It is recommended to use str(uuid.uuid4())"
            )
        self._session_id = value

    async def persist_session_id(self) -> None:
        """Save the session id; restore it later with restore_session_id()."""
        await self.settings_store.set(SESSION_ID_SETTING, self._session_id)

    async def restore_session_id(self) -> None:
        restored = await self.settings_store.get(SESSION_ID_SETTING)
        if restored and len(restored) > MIN_SESSION_ID_LENGTH:
            self.session_id = restored
        else:
            logger.debug("No usable persisted session id, keeping the current one")

    # ── Requests ───────────────────────────────────────────────────────────

    def _stamp(self, request: AIRequest) -> None:
        request.lang = self.config.language.value
        request.timezone = _local_timezone_name()
        request.session_id = self._session_id

    def _debug(self, label: str, payload: str) -> None:
        if self.config.debug_log:
            logger.info(f"{label}: {payload}")

    async def request(self, request: AIRequest) -> AIResponse:
        """Send a text query. The request object is updated in place."""
        self._stamp(request)

        try:
            json_request = request.to_json()
            self._debug("Request", json_request)

            response = await self._http.post(
                self.config.request_url,
                content=json_request.encode("utf-8"),
                headers={"Content-Type": "application/json"},
            )
            return await self._process_response(response)

        except AIServiceError:
            raise
        except Exception as e:
            raise AIServiceError.wrap(e) from e

    async def voice_request(
        self,
        voice_data: VoiceData,
        extras: Optional[RequestExtras] = None,
    ) -> AIResponse:
        """Send recorded audio (WAV) together with a fresh request envelope."""
        request = AIRequest()
        self._stamp(request)

        if extras is not None:
            if extras.has_contexts:
                request.contexts = extras.contexts
            if extras.has_entities:
                request.entities = extras.entities

        try:
            json_request = request.to_json()
            self._debug("Request", json_request)

            files = {
                "request": (None, json_request.encode("utf-8"), "application/json"),
                "voiceData": ("voice.wav", voice_data, "audio/wav"),
            }
            response = await self._http.post(self.config.request_url, files=files)
            return await self._process_response(response)

        except AIServiceError:
            raise
        except Exception as e:
            raise AIServiceError.wrap(e) from e

    async def reset_contexts(self) -> ContextResetResult:
        """Drop all conversational contexts held by the service for this session."""
        clean_request = AIRequest.from_text(RESET_CONTEXTS_QUERY)
        clean_request.reset_contexts = True

        try:
            response = await self.request(clean_request)
        except AIServiceError as e:
            logger.error(f"Exception while resetting contexts: {e}")
            return ContextResetResult(success=False, error=e)

        return ContextResetResult(success=not response.is_error)

    # ── Response handling ──────────────────────────────────────────────────

    async def _process_response(self, response: httpx.Response) -> AIResponse:
        if not response.is_success:
            raise AIServiceError(
                f"Request to the API.AI service failed with code {response.status_code} "
                f"and message '{response.reason_phrase}'",
                status_code=response.status_code,
            )

        await response.aread()
        body = response.text
        self._debug("Response", body)

        ai_response = self._parse(body)
        self._check_for_errors(ai_response)
        return ai_response

    @staticmethod
    def _parse(body: str) -> Optional[AIResponse]:
        if not body.strip():
            return None
        data = json.loads(body)
        if data is None:
            return None
        return AIResponse.model_validate(data)

    @staticmethod
    def _check_for_errors(ai_response: Optional[AIResponse]) -> None:
        if ai_response is None:
            raise AIServiceError("API.AI response parsed as null. Check debug log for details.")
        if ai_response.is_error:
            raise AIServiceError.from_response(ai_response)

    # ── Lifecycle ──────────────────────────────────────────────────────────

    async def aclose(self) -> None:
        await self._http.aclose()
        if self._owns_store and hasattr(self.settings_store, "aclose"):
            await self.settings_store.aclose()

    async def __aenter__(self) -> "AIDataService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
