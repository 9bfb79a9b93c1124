from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Literal, Protocol, Union

from tourism_api.integrations.geocoding import Coordinates, GeocodingError
from tourism_api.integrations.maps_embed import coordinate_embed_url, query_embed_url

logger = logging.getLogger(__name__)

TOURISM_MARKER = "tourism:"

COUNTRY_CODE_MAP: dict[str, str] = {
    "Barbados": "BB",
    "Trinidad and Tobago": "TT",
    "Jamaica": "JM",
    "Saint Lucia": "LC",
    "Saint Kitts and Nevis": "KN",
    "Grenada": "GD",
    "Dominica": "DM",
    "Saint Vincent and the Grenadines": "VC",
    "Antigua and Barbuda": "AG",
    "The Bahamas": "BS",
    "Bahamas": "BS",
    "Belize": "BZ",
    "Guyana": "GY",
    "Suriname": "SR",
    "Haiti": "HT",
    "Dominican Republic": "DO",
    "Cuba": "CU",
    "Puerto Rico": "PR",
}
_COUNTRY_CODES_LOWER = {name.lower(): code for name, code in COUNTRY_CODE_MAP.items()}

MAP_INTENT_PATTERNS = (
    re.compile(r"\bmap\b"),
    re.compile(r"where is"),
    re.compile(r"location of"),
    re.compile(r"directions to"),
    re.compile(r"show me.*map", re.DOTALL),
)

# Order matters: the first pattern that matches supplies the place.
PLACE_PATTERNS = (
    re.compile(r"map of (.+)", re.IGNORECASE | re.DOTALL),
    re.compile(r"map for (.+)", re.IGNORECASE | re.DOTALL),
    re.compile(r"where is (.+)", re.IGNORECASE | re.DOTALL),
    re.compile(r"location of (.+)", re.IGNORECASE | re.DOTALL),
    re.compile(r"directions to (.+)", re.IGNORECASE | re.DOTALL),
    re.compile(r"show me (.+?) on the map", re.IGNORECASE | re.DOTALL),
)
_PLACE_TERMINATORS = re.compile(r"[?.!,]")


class Geocoder(Protocol):
    @property
    def enabled(self) -> bool: ...

    def geocode(self, address: str, *, country_code: str | None = None) -> Coordinates | None: ...


class TextGenerator(Protocol):
    @property
    def enabled(self) -> bool: ...

    def generate(self, prompt: str) -> str: ...


@dataclass(frozen=True)
class MapQuery:
    place: str
    country_code: str | None = None
    coordinates: Coordinates | None = None


@dataclass(frozen=True)
class MapAnswer:
    title: str
    embed_url: str
    text: str
    kind: Literal["map"] = "map"


@dataclass(frozen=True)
class TextAnswer:
    text: str
    kind: Literal["text"] = "text"


Answer = Union[MapAnswer, TextAnswer]


def is_tourism_prompt(prompt: str) -> bool:
    return TOURISM_MARKER in prompt.lower()


def is_map_intent(prompt: str) -> bool:
    if not is_tourism_prompt(prompt):
        return False
    lowered = prompt.lower()
    return any(pattern.search(lowered) for pattern in MAP_INTENT_PATTERNS)


def extract_place(prompt: str) -> str:
    trimmed = prompt.strip()
    fallback = trimmed.rsplit(":", 1)[1].strip() if ":" in trimmed else trimmed

    for pattern in PLACE_PATTERNS:
        match = pattern.search(fallback)
        if not match:
            continue
        place = _PLACE_TERMINATORS.split(match.group(1), maxsplit=1)[0].strip()
        return place or fallback
    return fallback


def country_code_for(country: str | None) -> str | None:
    if not country:
        return None
    return _COUNTRY_CODES_LOWER.get(country.strip().lower())


def qualify_place(place: str, country_hint: str | None) -> str:
    if country_hint and country_hint.lower() not in place.lower():
        return f"{place}, {country_hint}"
    return place


class IntentResolver:
    """Turns an assistant prompt into either a map embed or a text completion."""

    def __init__(
        self,
        *,
        geocoder: Geocoder,
        text_generator: TextGenerator,
        embed_key: str | None = None,
        zoom: int = 14,
    ) -> None:
        self._geocoder = geocoder
        self._text_generator = text_generator
        self._embed_key = embed_key or None
        self._zoom = zoom

    @property
    def enabled(self) -> bool:
        return self._text_generator.enabled

    def resolve(self, prompt: str, country_hint: str | None = None) -> Answer:
        if is_map_intent(prompt):
            return self._map_answer(self.build_map_query(prompt, country_hint))
        # TextGenerationError propagates to the caller untouched.
        return TextAnswer(text=self._text_generator.generate(prompt.strip()))

    def build_map_query(self, prompt: str, country_hint: str | None) -> MapQuery:
        place = qualify_place(extract_place(prompt), country_hint)
        country_code = country_code_for(country_hint)
        coordinates = None
        if country_code and self._geocoder.enabled:
            coordinates = self._geocode(place, country_code)
        return MapQuery(place=place, country_code=country_code, coordinates=coordinates)

    def _geocode(self, place: str, country_code: str) -> Coordinates | None:
        try:
            coordinates = self._geocoder.geocode(place, country_code=country_code)
        except GeocodingError as exc:
            logger.warning("Geocoding failed for %r, using query embed: %s", place, exc)
            return None
        if coordinates is None:
            logger.info("No geocoding result for %r, using query embed", place)
        return coordinates

    def _map_answer(self, query: MapQuery) -> MapAnswer:
        if query.coordinates is not None:
            embed_url = coordinate_embed_url(
                query.coordinates.lat,
                query.coordinates.lng,
                zoom=self._zoom,
                embed_key=self._embed_key,
            )
        else:
            embed_url = query_embed_url(query.place, zoom=self._zoom, embed_key=self._embed_key)

        return MapAnswer(
            title=f"Map of {query.place}",
            embed_url=embed_url,
            text=f"Here is a map of {query.place}.",
        )
