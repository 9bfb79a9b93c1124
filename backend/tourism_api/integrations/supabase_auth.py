from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

import httpx

from tourism_api.core.auth import AuthError, Identity
from tourism_api.core.config import settings
from tourism_api.integrations.http_utils import DEFAULT_TIMEOUT, request_with_retry, safe_json

logger = logging.getLogger(__name__)


class SupabaseAuthClient:
    """Verifies access tokens against the Supabase Auth ``/user`` endpoint."""

    def __init__(
        self,
        *,
        url: str,
        anon_key: str,
        timeout: httpx.Timeout | None = None,
        max_retries: int = 2,
        backoff_base: float = 0.5,
    ) -> None:
        self._base_url = url.rstrip("/")
        self._anon_key = anon_key
        self._timeout = timeout or DEFAULT_TIMEOUT
        self._max_retries = max_retries
        self._backoff_base = backoff_base

    @property
    def enabled(self) -> bool:
        return bool(self._base_url and self._anon_key)

    def authenticate(self, token: str) -> Identity:
        if not self.enabled:
            raise AuthError("Identity provider is not configured.")

        try:
            response = request_with_retry(
                "GET",
                f"{self._base_url}/auth/v1/user",
                headers={
                    "apikey": self._anon_key,
                    "Authorization": f"Bearer {token}",
                },
                timeout=self._timeout,
                max_retries=self._max_retries,
                backoff_base=self._backoff_base,
            )
        except httpx.RequestError as exc:
            logger.error("Identity provider unreachable: %s", exc)
            raise AuthError("Identity provider unreachable.") from exc

        if response.status_code in (401, 403):
            raise AuthError("Invalid or expired token.")
        if response.status_code >= 400:
            logger.error("Identity provider returned %s", response.status_code)
            raise AuthError(f"Identity provider error ({response.status_code}).")

        return _identity_from_user(safe_json(response))


def _identity_from_user(payload: Any) -> Identity:
    if not isinstance(payload, dict) or not payload.get("id"):
        raise AuthError("Identity provider returned no user.")

    metadata = payload.get("user_metadata") or {}
    if not isinstance(metadata, dict):
        metadata = {}
    return Identity(
        id=str(payload["id"]),
        email=payload.get("email"),
        username=metadata.get("username"),
        full_name=metadata.get("full_name") or metadata.get("name"),
    )


@lru_cache
def get_supabase_auth_client() -> SupabaseAuthClient:
    return SupabaseAuthClient(
        url=settings.supabase_url,
        anon_key=settings.supabase_anon_key,
    )
