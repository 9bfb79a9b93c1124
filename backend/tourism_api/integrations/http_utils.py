from __future__ import annotations

import time
from typing import Any

import httpx

from tourism_api.core.config import settings


DEFAULT_TIMEOUT = httpx.Timeout(10.0, connect=10.0, read=10.0)
RETRY_STATUSES = frozenset({429, 500, 502, 503, 504})


def request_with_retry(
    method: str,
    url: str,
    *,
    params: dict[str, Any] | None = None,
    json: Any | None = None,
    headers: dict[str, str] | None = None,
    timeout: httpx.Timeout | None = None,
    max_retries: int = 0,
    backoff_base: float = 0.5,
) -> httpx.Response:
    """Send one request, retrying transport errors and ``RETRY_STATUSES``.

    Retries wait ``backoff_base * 2**attempt`` seconds. The last response is
    returned as-is; the last transport error is re-raised.
    """
    attempt = 0
    while True:
        try:
            with httpx.Client(
                timeout=timeout or DEFAULT_TIMEOUT, trust_env=settings.http_trust_env
            ) as client:
                response = client.request(method, url, params=params, json=json, headers=headers)
        except httpx.TransportError:
            if attempt >= max_retries:
                raise
        else:
            if response.status_code not in RETRY_STATUSES or attempt >= max_retries:
                return response

        time.sleep(backoff_base * (2**attempt))
        attempt += 1


def safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
