from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tourism_api.models.bookings import AccommodationBooking, ActivityBooking
from tourism_api.models.onboarding import TourismOnboarding
from tourism_api.models.profile import Profile
from tourism_api.schemas.onboarding import OnboardingSubmissionIn
from tourism_api.services.trip_format import normalize_time

logger = logging.getLogger(__name__)

DEFAULT_COUNTRY = "Barbados"
DEFAULT_GUEST_NAME = "Guest"

ACTIVITY_ID_KEYS = ("id", "activity_id", "activityId")
ACTIVITY_DATE_KEYS = ("scheduled_date", "scheduledDate", "date")
ACTIVITY_TIME_KEYS = ("scheduled_time", "scheduledTime", "time")


@dataclass
class BookingError:
    kind: str
    reference: str
    error: str


@dataclass
class ReconcileResult:
    record: TourismOnboarding
    bookings_created: list[dict[str, Any]] = field(default_factory=list)
    booking_errors: list[BookingError] = field(default_factory=list)


def find_onboarding(db: Session, user_id: str, country: str) -> TourismOnboarding | None:
    return db.execute(
        select(TourismOnboarding)
        .where(TourismOnboarding.user_id == user_id)
        .where(TourismOnboarding.country == country)
        .order_by(TourismOnboarding.created_at.desc(), TourismOnboarding.id.desc())
        .limit(1)
    ).scalar_one_or_none()


def resolve_guest_name(db: Session, user_id: str, explicit: str | None = None) -> str:
    if explicit and explicit.strip():
        return explicit.strip()

    profile = db.get(Profile, user_id)
    if profile is not None:
        for candidate in (profile.full_name, profile.name, profile.username, profile.email):
            if candidate and candidate.strip():
                return candidate.strip()
    return DEFAULT_GUEST_NAME


def book_accommodation(
    db: Session,
    *,
    listing_id: str,
    guest_name: str,
    check_in: date,
    check_out: date,
    user_id: str | None = None,
) -> tuple[AccommodationBooking, bool]:
    """Insert a stay booking unless one with the same key exists.

    Returns the booking and whether it was created. The caller commits.
    """
    existing = db.execute(
        select(AccommodationBooking)
        .where(AccommodationBooking.listing_id == listing_id)
        .where(AccommodationBooking.guest_name == guest_name)
        .where(AccommodationBooking.check_in == check_in)
        .where(AccommodationBooking.check_out == check_out)
        .limit(1)
    ).scalar_one_or_none()
    if existing is not None:
        return existing, False

    booking = AccommodationBooking(
        listing_id=listing_id,
        user_id=user_id,
        guest_name=guest_name,
        check_in=check_in,
        check_out=check_out,
        status="pending",
    )
    db.add(booking)
    db.flush()
    return booking, True


def book_activity(
    db: Session,
    *,
    activity_id: str,
    guest_name: str,
    on_date: date,
    at_time: str,
    user_id: str | None = None,
    pax: int = 1,
) -> tuple[ActivityBooking, bool]:
    existing = db.execute(
        select(ActivityBooking)
        .where(ActivityBooking.activity_id == activity_id)
        .where(ActivityBooking.guest_name == guest_name)
        .where(ActivityBooking.date == on_date)
        .where(ActivityBooking.time == at_time)
        .limit(1)
    ).scalar_one_or_none()
    if existing is not None:
        return existing, False

    booking = ActivityBooking(
        activity_id=activity_id,
        user_id=user_id,
        guest_name=guest_name,
        date=on_date,
        time=at_time,
        pax=pax,
        status="pending",
    )
    db.add(booking)
    db.flush()
    return booking, True


class OnboardingReconciler:
    """Persists an onboarding submission and derives its bookings.

    The record upsert and the booking existence checks are check-then-act
    without locking; concurrent identical submissions can still produce
    duplicate rows.
    """

    def __init__(self, db: Session, *, default_country: str = DEFAULT_COUNTRY) -> None:
        self._db = db
        self._default_country = default_country

    def complete(self, user_id: str, submission: OnboardingSubmissionIn) -> ReconcileResult:
        values = self.normalize(submission)
        record = self._upsert_record(user_id, values)
        self._db.commit()

        result = ReconcileResult(record=record)
        guest_name = resolve_guest_name(self._db, user_id, submission.guest_name)

        if record.stay_listing_id and record.start_date and record.end_date:
            self._book_stay(result, user_id, guest_name)

        for entry in record.selected_activities or []:
            self._book_selected_activity(result, user_id, guest_name, entry)

        self._db.commit()
        if result.booking_errors:
            logger.warning(
                "Onboarding for user %s saved with %d booking error(s)",
                user_id,
                len(result.booking_errors),
            )
        return result

    def normalize(self, submission: OnboardingSubmissionIn) -> dict[str, Any]:
        return {
            "session_id": submission.session_id,
            "country": submission.country or self._default_country,
            "budget": submission.budget,
            "start_date": submission.start_date,
            "end_date": submission.end_date,
            "want_reminder": submission.want_reminder,
            "stay_option": submission.stay_option,
            "interests": list(submission.interests),
            "want_bucket_list": submission.want_bucket,
            "selected_activities": list(submission.selected_activities),
            "stay_listing_id": submission.stay_listing_id,
            "has_completed_onboarding": True,
        }

    def _upsert_record(self, user_id: str, values: dict[str, Any]) -> TourismOnboarding:
        record = find_onboarding(self._db, user_id, values["country"])
        if record is None:
            record = TourismOnboarding(user_id=user_id, **values)
            self._db.add(record)
        else:
            for key, value in values.items():
                setattr(record, key, value)
        self._db.flush()
        return record

    def _book_stay(self, result: ReconcileResult, user_id: str, guest_name: str) -> None:
        record = result.record
        try:
            with self._db.begin_nested():
                booking, created = book_accommodation(
                    self._db,
                    listing_id=record.stay_listing_id,
                    guest_name=guest_name,
                    check_in=record.start_date,
                    check_out=record.end_date,
                    user_id=user_id,
                )
        except SQLAlchemyError as exc:
            logger.error("Accommodation booking failed for listing %s: %s", record.stay_listing_id, exc)
            result.booking_errors.append(
                BookingError(kind="accommodation", reference=str(record.stay_listing_id), error=str(exc))
            )
            return

        if created:
            result.bookings_created.append(
                {
                    "type": "accommodation",
                    "id": booking.id,
                    "listing_id": booking.listing_id,
                    "guest_name": booking.guest_name,
                    "check_in": booking.check_in.isoformat(),
                    "check_out": booking.check_out.isoformat(),
                }
            )

    def _book_selected_activity(
        self,
        result: ReconcileResult,
        user_id: str,
        guest_name: str,
        entry: dict[str, Any],
    ) -> None:
        triple = activity_booking_key(entry)
        if triple is None:
            return
        activity_id, on_date, at_time = triple

        try:
            with self._db.begin_nested():
                booking, created = book_activity(
                    self._db,
                    activity_id=activity_id,
                    guest_name=guest_name,
                    on_date=on_date,
                    at_time=at_time,
                    user_id=user_id,
                )
        except SQLAlchemyError as exc:
            logger.error("Activity booking failed for activity %s: %s", activity_id, exc)
            result.booking_errors.append(
                BookingError(kind="activity", reference=activity_id, error=str(exc))
            )
            return

        if created:
            result.bookings_created.append(
                {
                    "type": "activity",
                    "id": booking.id,
                    "activity_id": booking.activity_id,
                    "guest_name": booking.guest_name,
                    "date": booking.date.isoformat(),
                    "time": booking.time,
                }
            )


def activity_booking_key(entry: dict[str, Any]) -> tuple[str, date, str] | None:
    """(activity id, date, HH:MM) for a selected-activity entry, or None if incomplete."""
    activity_id = _first_present(entry, ACTIVITY_ID_KEYS)
    raw_date = _first_present(entry, ACTIVITY_DATE_KEYS)
    at_time = normalize_time(_first_present(entry, ACTIVITY_TIME_KEYS))
    if activity_id is None or raw_date is None or at_time is None:
        return None

    try:
        on_date = date.fromisoformat(str(raw_date)[:10])
    except ValueError:
        return None
    return str(activity_id), on_date, at_time


def _first_present(entry: dict[str, Any], keys: tuple[str, ...]) -> Any | None:
    for key in keys:
        value = entry.get(key)
        if value is not None and value != "":
            return value
    return None
