from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tourism_api.core.db import get_db
from tourism_api.core.errors import ApiError
from tourism_api.models.catalogue import Activity, Listing
from tourism_api.schemas.catalogue import (
    ActivityListResponse,
    ActivityOut,
    ListingListResponse,
    ListingOut,
)

router = APIRouter()


@router.get("/listings/public", response_model=ListingListResponse)
def public_listings(db: Session = Depends(get_db)) -> ListingListResponse:
    try:
        rows = db.execute(select(Listing).order_by(Listing.title)).scalars().all()
    except SQLAlchemyError as exc:
        raise ApiError(500, "Failed to fetch listings", str(exc)) from exc
    return ListingListResponse(data=[ListingOut.model_validate(row) for row in rows])


@router.get("/activities/public", response_model=ActivityListResponse)
def public_activities(db: Session = Depends(get_db)) -> ActivityListResponse:
    try:
        rows = db.execute(
            select(Activity).where(Activity.active.is_(True)).order_by(Activity.title)
        ).scalars().all()
    except SQLAlchemyError as exc:
        raise ApiError(500, "Failed to fetch activities", str(exc)) from exc
    return ActivityListResponse(data=[ActivityOut.model_validate(row) for row in rows])
