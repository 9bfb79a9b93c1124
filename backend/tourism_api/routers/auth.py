from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tourism_api.core.auth import Identity, get_current_identity
from tourism_api.core.db import get_db
from tourism_api.models.profile import Profile
from tourism_api.schemas.catalogue import MeResponse, MeUserOut, ProfileOut

router = APIRouter()


@router.get("/me", response_model=MeResponse)
def me(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> MeResponse:
    profile = db.get(Profile, identity.id)
    return MeResponse(
        user=MeUserOut(id=identity.id, email=identity.email),
        profile=ProfileOut.model_validate(profile) if profile is not None else None,
    )
