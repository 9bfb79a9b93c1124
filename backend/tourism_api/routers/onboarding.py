from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tourism_api.core.auth import Identity, get_current_identity
from tourism_api.core.config import settings
from tourism_api.core.db import get_db
from tourism_api.core.errors import ApiError
from tourism_api.schemas.onboarding import (
    AccommodationBookingIn,
    AccommodationBookingOut,
    AccommodationBookingResponse,
    AccommodationOut,
    ActivityBookingIn,
    ActivityBookingOut,
    ActivityBookingResponse,
    BookingErrorOut,
    OnboardingCompleteResponse,
    OnboardingOut,
    OnboardingStatusResponse,
    OnboardingSubmissionIn,
    TripBudgetOut,
    TripOut,
    TripResponse,
)
from tourism_api.services.onboarding_service import (
    OnboardingReconciler,
    book_accommodation,
    book_activity,
    find_onboarding,
    resolve_guest_name,
)
from tourism_api.services.trip_format import normalize_stay_option, parse_budget

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/status", response_model=OnboardingStatusResponse)
def onboarding_status(
    country: str | None = Query(None),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> OnboardingStatusResponse:
    try:
        record = find_onboarding(db, identity.id, country or settings.default_country)
    except SQLAlchemyError as exc:
        raise ApiError(500, "Failed to fetch onboarding status", str(exc)) from exc

    if record is None:
        return OnboardingStatusResponse(hasCompletedOnboarding=False, onboarding=None)
    return OnboardingStatusResponse(
        hasCompletedOnboarding=bool(record.has_completed_onboarding),
        onboarding=OnboardingOut.model_validate(record),
    )


@router.get("/trip", response_model=TripResponse)
def onboarding_trip(
    country: str | None = Query(None),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> TripResponse:
    try:
        record = find_onboarding(db, identity.id, country or settings.default_country)
    except SQLAlchemyError as exc:
        raise ApiError(500, "Failed to fetch trip", str(exc)) from exc

    if record is None:
        return TripResponse(found=False)

    stay = normalize_stay_option(record.stay_option, record.country)
    return TripResponse(
        found=True,
        trip=TripOut(
            id=record.id,
            destination_country=record.country,
            start_date=record.start_date,
            end_date=record.end_date,
        ),
        accommodation=AccommodationOut(
            name=stay.name, subtitle=stay.subtitle, location=stay.location
        ),
        budget=TripBudgetOut(total=parse_budget(record.budget)),
        selectedActivities=list(record.selected_activities or []),
        stayListingId=record.stay_listing_id,
        interests=list(record.interests or []),
    )


@router.post("/complete", response_model=OnboardingCompleteResponse)
def complete_onboarding(
    payload: OnboardingSubmissionIn,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> OnboardingCompleteResponse:
    reconciler = OnboardingReconciler(db, default_country=settings.default_country)
    try:
        result = reconciler.complete(identity.id, payload)
    except SQLAlchemyError as exc:
        db.rollback()
        raise ApiError(500, "Failed to save onboarding data", str(exc)) from exc

    logger.info(
        "Onboarding saved for user %s (%s): %d booking(s) created",
        identity.id,
        result.record.country,
        len(result.bookings_created),
    )
    return OnboardingCompleteResponse(
        message="Onboarding saved successfully",
        onboarding=OnboardingOut.model_validate(result.record),
        bookingsCreated=result.bookings_created,
        bookingErrors=[
            BookingErrorOut(kind=err.kind, reference=err.reference, error=err.error)
            for err in result.booking_errors
        ],
    )


@router.post("/book-accommodation", response_model=AccommodationBookingResponse)
def create_accommodation_booking(
    payload: AccommodationBookingIn,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> AccommodationBookingResponse:
    try:
        guest_name = resolve_guest_name(db, identity.id, payload.guest_name)
        booking, created = book_accommodation(
            db,
            listing_id=payload.listing_id,
            guest_name=guest_name,
            check_in=payload.check_in,
            check_out=payload.check_out,
            user_id=identity.id,
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise ApiError(500, "Failed to book accommodation", str(exc)) from exc

    return AccommodationBookingResponse(
        created=created, booking=AccommodationBookingOut.model_validate(booking)
    )


@router.post("/book-activity", response_model=ActivityBookingResponse)
def create_activity_booking(
    payload: ActivityBookingIn,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> ActivityBookingResponse:
    try:
        guest_name = resolve_guest_name(db, identity.id, payload.guest_name)
        booking, created = book_activity(
            db,
            activity_id=payload.activity_id,
            guest_name=guest_name,
            on_date=payload.date,
            at_time=payload.time,
            user_id=identity.id,
            pax=payload.pax,
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise ApiError(500, "Failed to book activity", str(exc)) from exc

    return ActivityBookingResponse(
        created=created, booking=ActivityBookingOut.model_validate(booking)
    )
