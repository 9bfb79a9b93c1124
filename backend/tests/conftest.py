from __future__ import annotations

from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from tourism_api.core.auth import AuthError, Identity, get_authenticator
from tourism_api.core.db import build_engine, build_sessionmaker, get_db
from tourism_api.integrations.gemini import TextGenerationError
from tourism_api.integrations.geocoding import Coordinates, GeocodingError
from tourism_api.main import app
from tourism_api.models import Base
from tourism_api.routers.ask import get_geocoder, get_text_generator

ALICE = Identity(id="user-alice", email="alice@example.com", username="alice")
BOB = Identity(id="user-bob", email="bob@example.com")


class FakeAuthenticator:
    def __init__(self, identities: dict[str, Identity]) -> None:
        self.identities = identities

    def authenticate(self, token: str) -> Identity:
        try:
            return self.identities[token]
        except KeyError:
            raise AuthError("Invalid or expired token.") from None


class FakeGeocoder:
    def __init__(self) -> None:
        self.enabled = True
        self.result: Coordinates | None = Coordinates(lat=13.2085, lng=-59.5163)
        self.error: Exception | None = None
        self.calls: list[tuple[str, str | None]] = []

    def geocode(self, address: str, *, country_code: str | None = None) -> Coordinates | None:
        self.calls.append((address, country_code))
        if self.error is not None:
            raise self.error
        return self.result


class FakeTextGenerator:
    def __init__(self) -> None:
        self.enabled = True
        self.text = "Barbados is known for its beaches."
        self.error: TextGenerationError | None = None
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def engine() -> Iterator[Any]:
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Any):
    return build_sessionmaker(engine)


@pytest.fixture
def db_session(session_factory) -> Iterator[Session]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder()


@pytest.fixture
def text_generator() -> FakeTextGenerator:
    return FakeTextGenerator()


@pytest.fixture
def authenticator() -> FakeAuthenticator:
    return FakeAuthenticator({"token-alice": ALICE, "token-bob": BOB})


@pytest.fixture
def client(
    session_factory,
    authenticator: FakeAuthenticator,
    geocoder: FakeGeocoder,
    text_generator: FakeTextGenerator,
) -> Iterator[TestClient]:
    def override_db() -> Iterator[Session]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_authenticator] = lambda: authenticator
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    app.dependency_overrides[get_text_generator] = lambda: text_generator
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def alice_headers() -> dict[str, str]:
    return {"Authorization": "Bearer token-alice"}


@pytest.fixture
def geocoding_error() -> GeocodingError:
    return GeocodingError("Geocoding status REQUEST_DENIED: bad key")
