from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from fastapi import Depends, Header

from tourism_api.core.errors import ApiError


@dataclass(frozen=True)
class Identity:
    id: str
    email: str | None = None
    username: str | None = None
    full_name: str | None = None


class AuthError(Exception):
    pass


class Authenticator(Protocol):
    def authenticate(self, token: str) -> Identity:
        """Return the verified identity for ``token`` or raise ``AuthError``."""
        ...


def get_authenticator() -> Authenticator:
    # Imported lazily so tests can override this dependency without
    # configuring the identity provider.
    from tourism_api.integrations.supabase_auth import get_supabase_auth_client

    return get_supabase_auth_client()


def bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    value = authorization.strip()
    if value.lower().startswith("bearer "):
        token = value[7:].strip()
        return token or None
    return None


def get_current_identity(
    authorization: str | None = Header(None),
    authenticator: Authenticator = Depends(get_authenticator),
) -> Identity:
    token = bearer_token(authorization)
    if not token:
        raise ApiError(
            401,
            "Unauthorized",
            "Missing Authorization header. Send: Authorization: Bearer <access_token>",
        )
    try:
        return authenticator.authenticate(token)
    except AuthError as exc:
        raise ApiError(401, "Unauthorized", str(exc)) from exc
