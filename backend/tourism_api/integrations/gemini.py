from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any
from urllib.parse import quote

import httpx

from tourism_api.core.config import settings
from tourism_api.integrations.http_utils import request_with_retry, safe_json

logger = logging.getLogger(__name__)

GENERATE_TIMEOUT = httpx.Timeout(30.0)
EMPTY_RESPONSE_TEXT = "No response from Gemini"


class TextGenerationError(RuntimeError):
    def __init__(self, status_code: int, detail: Any) -> None:
        super().__init__(f"Text generation failed ({status_code}): {detail}")
        self.status_code = status_code
        self.detail = detail


class GeminiClient:
    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: str,
        timeout: httpx.Timeout | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout or GENERATE_TIMEOUT

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    def generate(self, prompt: str) -> str:
        url = (
            f"{self._base_url}/models/{self._model}:generateContent"
            f"?key={quote(self._api_key, safe='')}"
        )
        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        try:
            response = request_with_retry(
                "POST",
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
                max_retries=0,
            )
        except httpx.RequestError as exc:
            raise TextGenerationError(500, str(exc) or type(exc).__name__) from exc

        if response.status_code >= 400:
            raise TextGenerationError(response.status_code, _error_detail(response))

        body = safe_json(response)
        if not isinstance(body, dict):
            logger.error("Gemini returned a non-JSON body (%s)", response.status_code)
            raise TextGenerationError(502, "Invalid response from text-generation service")
        return _first_candidate_text(body)


def _error_detail(response: httpx.Response) -> Any:
    body = safe_json(response)
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
    return body or response.reason_phrase


def _first_candidate_text(payload: Any) -> str:
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return EMPTY_RESPONSE_TEXT
    return text if isinstance(text, str) and text else EMPTY_RESPONSE_TEXT


@lru_cache
def get_gemini_client() -> GeminiClient:
    return GeminiClient(
        api_key=settings.google_api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
    )
