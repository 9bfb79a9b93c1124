from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

import httpx

from tourism_api.core.config import settings
from tourism_api.integrations.http_utils import request_with_retry

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
GEOCODE_TIMEOUT = httpx.Timeout(10.0)


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float


class GeocodingError(RuntimeError):
    pass


class GeocodingClient:
    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = GEOCODE_URL,
        timeout: httpx.Timeout | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout or GEOCODE_TIMEOUT

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    def geocode(self, address: str, *, country_code: str | None = None) -> Coordinates | None:
        """Return the first candidate for ``address`` or ``None`` when there is none.

        Transport failures and non-OK statuses raise ``GeocodingError``; an
        empty result set is not an error.
        """
        params: dict[str, Any] = {"address": address, "key": self._api_key}
        if country_code:
            params["components"] = f"country:{country_code}"

        try:
            response = request_with_retry(
                "GET",
                self._base_url,
                params=params,
                timeout=self._timeout,
                max_retries=0,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise GeocodingError(f"Geocoding request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise GeocodingError("Geocoding response is not JSON.") from exc
        status = payload.get("status") if isinstance(payload, dict) else None
        if status == "ZERO_RESULTS":
            return None
        if status != "OK":
            message = payload.get("error_message") if isinstance(payload, dict) else None
            raise GeocodingError(f"Geocoding status {status}: {message or 'no details'}")

        return _first_coordinates(payload.get("results"))


def _first_coordinates(results: Any) -> Coordinates | None:
    if not isinstance(results, list) or not results:
        return None
    first = results[0] if isinstance(results[0], dict) else {}
    location = (first.get("geometry") or {}).get("location") or {}
    try:
        return Coordinates(lat=float(location["lat"]), lng=float(location["lng"]))
    except (KeyError, TypeError, ValueError):
        return None


@lru_cache
def get_geocoding_client() -> GeocodingClient:
    return GeocodingClient(api_key=settings.google_maps_api_key)
