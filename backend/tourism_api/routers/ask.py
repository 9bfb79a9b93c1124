from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tourism_api.core.auth import Identity, get_current_identity
from tourism_api.core.config import settings
from tourism_api.core.db import get_db
from tourism_api.core.errors import ApiError
from tourism_api.integrations.gemini import TextGenerationError, get_gemini_client
from tourism_api.integrations.geocoding import get_geocoding_client
from tourism_api.schemas.ask import AskRequestIn, AskResponse, MapAskResponse, TextAskResponse
from tourism_api.services.intent_resolver import (
    Geocoder,
    IntentResolver,
    MapAnswer,
    TextGenerator,
)
from tourism_api.services.usage_service import increment_prompt_count

logger = logging.getLogger(__name__)

router = APIRouter()


def get_geocoder() -> Geocoder:
    return get_geocoding_client()


def get_text_generator() -> TextGenerator:
    return get_gemini_client()


def get_intent_resolver(
    geocoder: Geocoder = Depends(get_geocoder),
    text_generator: TextGenerator = Depends(get_text_generator),
) -> IntentResolver:
    return IntentResolver(
        geocoder=geocoder,
        text_generator=text_generator,
        embed_key=settings.google_maps_embed_api_key,
        zoom=settings.map_zoom,
    )


@router.post("/ask", response_model=AskResponse)
def ask(
    payload: AskRequestIn,
    identity: Identity = Depends(get_current_identity),
    resolver: IntentResolver = Depends(get_intent_resolver),
    db: Session = Depends(get_db),
) -> MapAskResponse | TextAskResponse:
    if payload.user_id != identity.id:
        logger.warning("User id mismatch on /ask: body=%s auth=%s", payload.user_id, identity.id)
        raise ApiError(403, "Unauthorized: User ID mismatch")
    if not resolver.enabled:
        raise ApiError(500, "AI service not configured")

    increment_prompt_count(db, identity.id)

    try:
        answer = resolver.resolve(payload.prompt, payload.country_name)
    except TextGenerationError as exc:
        logger.error("Gemini call failed (%s): %s", exc.status_code, exc.detail)
        raise ApiError(exc.status_code, "LLM call failed", exc.detail) from exc

    if isinstance(answer, MapAnswer):
        return MapAskResponse(title=answer.title, embed_url=answer.embed_url, response=answer.text)
    return TextAskResponse(response=answer.text)
