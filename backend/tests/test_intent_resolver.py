import pytest

from tourism_api.integrations.gemini import TextGenerationError
from tourism_api.services.intent_resolver import (
    IntentResolver,
    MapAnswer,
    TextAnswer,
    country_code_for,
    extract_place,
    is_map_intent,
    qualify_place,
)

from conftest import FakeGeocoder, FakeTextGenerator


@pytest.mark.parametrize(
    "prompt",
    [
        "tourism: show me a map of Bridgetown",
        "Tourism: where is Harrison's Cave?",
        "tourism: location of the airport",
        "tourism: directions to Crane Beach",
        "TOURISM: show me Oistins on the MAP",
        "tourism: Map",
    ],
)
def test_tourism_prompts_with_map_triggers_are_map_intent(prompt):
    assert is_map_intent(prompt)


@pytest.mark.parametrize(
    "prompt",
    [
        "show me a map of Bridgetown",
        "where is Harrison's Cave?",
        "tourism: what should I eat in Oistins?",
        "tourism: recommend a roadmap for my week",
    ],
)
def test_prompts_without_marker_or_trigger_are_not_map_intent(prompt):
    assert not is_map_intent(prompt)


@pytest.mark.parametrize(
    ("prompt", "expected"),
    [
        ("tourism: map of Bathsheba?", "Bathsheba"),
        ("tourism: map for Speightstown, please", "Speightstown"),
        ("tourism: where is Harrison's Cave!", "Harrison's Cave"),
        ("tourism: location of Hunte's Gardens.", "Hunte's Gardens"),
        ("tourism: directions to Crane Beach", "Crane Beach"),
        ("tourism: show me Oistins on the map", "Oistins"),
        ("tourism: Carlisle Bay map", "Carlisle Bay map"),
        ("map of Holetown", "Holetown"),
    ],
)
def test_extract_place(prompt, expected):
    assert extract_place(prompt) == expected


def test_extract_place_uses_text_after_last_colon():
    assert extract_place("note: tourism: where is Bathsheba") == "Bathsheba"


def test_extract_place_empty_capture_keeps_text_after_colon():
    assert extract_place("tourism: map of ?") == "map of ?"
    assert extract_place("tourism: where is , directions to Oistins") == "where is , directions to Oistins"


def test_country_hint_is_appended_once():
    assert qualify_place("Bathsheba", "Barbados") == "Bathsheba, Barbados"
    assert qualify_place("Bridgetown, barbados", "Barbados") == "Bridgetown, barbados"
    assert qualify_place("Bathsheba", None) == "Bathsheba"


def test_country_code_lookup_is_case_insensitive():
    assert country_code_for("barbados") == "BB"
    assert country_code_for("The Bahamas") == "BS"
    assert country_code_for("France") is None
    assert country_code_for(None) is None


def _resolver(geocoder, text_generator, embed_key=None):
    return IntentResolver(
        geocoder=geocoder, text_generator=text_generator, embed_key=embed_key, zoom=14
    )


def test_map_prompt_builds_coordinate_embed():
    geocoder = FakeGeocoder()
    resolver = _resolver(geocoder, FakeTextGenerator())

    answer = resolver.resolve("tourism: map of Bathsheba?", "Barbados")

    assert isinstance(answer, MapAnswer)
    assert answer.kind == "map"
    assert "Bathsheba, Barbados" in answer.title
    assert geocoder.calls == [("Bathsheba, Barbados", "BB")]
    assert answer.embed_url.startswith("https://maps.google.com/maps?")
    assert "13.2085" in answer.embed_url
    assert "output=embed" in answer.embed_url


def test_map_prompt_prefers_embed_key():
    resolver = _resolver(FakeGeocoder(), FakeTextGenerator(), embed_key="embed-key")

    answer = resolver.resolve("tourism: map of Bathsheba", "Barbados")

    assert answer.embed_url.startswith("https://www.google.com/maps/embed/v1/view?")
    assert "key=embed-key" in answer.embed_url


def test_geocoding_failure_falls_back_to_query_embed(geocoding_error):
    geocoder = FakeGeocoder()
    geocoder.error = geocoding_error
    resolver = _resolver(geocoder, FakeTextGenerator())

    answer = resolver.resolve("tourism: where is Bathsheba", "Barbados")

    assert isinstance(answer, MapAnswer)
    assert "q=Bathsheba%2C+Barbados" in answer.embed_url


def test_unknown_country_skips_geocoding():
    geocoder = FakeGeocoder()
    resolver = _resolver(geocoder, FakeTextGenerator(), embed_key="embed-key")

    answer = resolver.resolve("tourism: map of Paris", "France")

    assert geocoder.calls == []
    assert answer.embed_url.startswith("https://www.google.com/maps/embed/v1/place?")


def test_disabled_geocoder_is_not_called():
    geocoder = FakeGeocoder()
    geocoder.enabled = False
    resolver = _resolver(geocoder, FakeTextGenerator())

    resolver.resolve("tourism: map of Bathsheba", "Barbados")

    assert geocoder.calls == []


def test_empty_geocoding_result_uses_query_embed():
    geocoder = FakeGeocoder()
    geocoder.result = None
    resolver = _resolver(geocoder, FakeTextGenerator())

    answer = resolver.resolve("tourism: map of Nowhere", "Barbados")

    assert "q=Nowhere%2C+Barbados" in answer.embed_url


def test_non_map_prompt_goes_to_text_generation():
    text_generator = FakeTextGenerator()
    resolver = _resolver(FakeGeocoder(), text_generator)

    answer = resolver.resolve("  tourism: best rum shops?  ", "Barbados")

    assert isinstance(answer, TextAnswer)
    assert answer.text == text_generator.text
    assert text_generator.prompts == ["tourism: best rum shops?"]


def test_text_generation_errors_propagate():
    text_generator = FakeTextGenerator()
    text_generator.error = TextGenerationError(429, "Quota exceeded")
    resolver = _resolver(FakeGeocoder(), text_generator)

    with pytest.raises(TextGenerationError) as exc_info:
        resolver.resolve("what is flying fish?", None)

    assert exc_info.value.status_code == 429
