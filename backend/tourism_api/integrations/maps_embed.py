"""Google Maps embed URL builders.

With an Embed API key the official ``/maps/embed/v1`` endpoints are used;
without one, the keyless ``output=embed`` URLs are returned instead.
"""

from __future__ import annotations

from urllib.parse import urlencode

EMBED_BASE_URL = "https://www.google.com/maps/embed/v1"
KEYLESS_EMBED_URL = "https://maps.google.com/maps"


def coordinate_embed_url(lat: float, lng: float, *, zoom: int, embed_key: str | None) -> str:
    if embed_key:
        params = {"key": embed_key, "center": f"{lat},{lng}", "zoom": zoom}
        return f"{EMBED_BASE_URL}/view?{urlencode(params)}"
    params = {"q": f"{lat},{lng}", "z": zoom, "output": "embed"}
    return f"{KEYLESS_EMBED_URL}?{urlencode(params)}"


def query_embed_url(query: str, *, zoom: int, embed_key: str | None) -> str:
    if embed_key:
        params = {"key": embed_key, "q": query, "zoom": zoom}
        return f"{EMBED_BASE_URL}/place?{urlencode(params)}"
    params = {"q": query, "z": zoom, "output": "embed"}
    return f"{KEYLESS_EMBED_URL}?{urlencode(params)}"
