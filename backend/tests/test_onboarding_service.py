from datetime import date

from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from tourism_api.models import AccommodationBooking, ActivityBooking, Profile, TourismOnboarding
from tourism_api.schemas.onboarding import OnboardingSubmissionIn
from tourism_api.services import onboarding_service
from tourism_api.services.onboarding_service import (
    OnboardingReconciler,
    activity_booking_key,
    resolve_guest_name,
)


def _submission(**overrides):
    payload = {
        "sessionId": "chat-1",
        "country": "Barbados",
        "budget": "$500-$1000",
        "startDate": "2026-12-01",
        "endDate": "2026-12-08",
        "wantReminder": True,
        "stayOption": "Ocean View Villa (Deluxe)",
        "interests": ["beaches", "food"],
        "wantBucket": False,
        "stayListingId": "listing-1",
        "selectedActivities": [
            {"id": "act-1", "scheduled_date": "2026-12-02", "scheduled_time": "10:00:00"},
            {"id": "act-2", "scheduledDate": "2026-12-03", "scheduledTime": "15:30"},
        ],
    }
    payload.update(overrides)
    return OnboardingSubmissionIn.model_validate(payload)


def _count(db, model):
    return db.execute(select(func.count()).select_from(model)).scalar_one()


def test_complete_creates_record_and_bookings(db_session):
    result = OnboardingReconciler(db_session).complete("user-1", _submission())

    assert result.record.id is not None
    assert result.record.country == "Barbados"
    assert result.record.has_completed_onboarding is True
    assert result.booking_errors == []
    kinds = sorted(item["type"] for item in result.bookings_created)
    assert kinds == ["accommodation", "activity", "activity"]

    activity_times = {
        booking.activity_id: booking.time
        for booking in db_session.execute(select(ActivityBooking)).scalars()
    }
    assert activity_times == {"act-1": "10:00", "act-2": "15:30"}


def test_missing_fields_get_defaults(db_session):
    submission = OnboardingSubmissionIn.model_validate(
        {"budget": "", "interests": "beaches", "wantReminder": 1}
    )

    record = OnboardingReconciler(db_session).complete("user-1", submission).record

    assert record.country == "Barbados"
    assert record.budget is None
    assert record.interests == []
    assert record.selected_activities == []
    assert record.want_reminder is True
    assert record.want_bucket_list is False
    assert record.start_date is None


def test_resubmission_updates_the_same_record(db_session):
    reconciler = OnboardingReconciler(db_session)
    first = reconciler.complete("user-1", _submission())
    second = reconciler.complete("user-1", _submission(budget="$2000", interests=["hiking"]))

    assert second.record.id == first.record.id
    assert second.record.budget == "$2000"
    assert _count(db_session, TourismOnboarding) == 1


def test_records_are_scoped_per_country(db_session):
    reconciler = OnboardingReconciler(db_session)
    reconciler.complete("user-1", _submission())
    reconciler.complete("user-1", _submission(country="Jamaica"))

    assert _count(db_session, TourismOnboarding) == 2


def test_duplicate_submission_does_not_duplicate_bookings(db_session):
    reconciler = OnboardingReconciler(db_session)
    reconciler.complete("user-1", _submission(guestName="Ana Smith"))
    second = reconciler.complete("user-1", _submission(guestName="Ana Smith"))

    assert second.bookings_created == []
    assert _count(db_session, AccommodationBooking) == 1
    assert _count(db_session, ActivityBooking) == 2


def test_stay_booking_requires_both_dates(db_session):
    result = OnboardingReconciler(db_session).complete(
        "user-1", _submission(endDate=None, selectedActivities=[])
    )

    assert result.bookings_created == []
    assert _count(db_session, AccommodationBooking) == 0


def test_incomplete_activity_is_skipped_without_error(db_session):
    activities = [
        {"id": "act-1", "scheduled_date": "2026-12-02"},
        {"scheduled_date": "2026-12-02", "scheduled_time": "09:00"},
        {"id": "act-3", "scheduled_date": "2026-12-04", "scheduled_time": "08:15"},
    ]
    result = OnboardingReconciler(db_session).complete(
        "user-1", _submission(stayListingId=None, selectedActivities=activities)
    )

    assert result.booking_errors == []
    assert [item["activity_id"] for item in result.bookings_created] == ["act-3"]


def test_booking_failure_is_collected_and_others_continue(db_session, monkeypatch):
    real_book_activity = onboarding_service.book_activity

    def flaky_book_activity(db, **kwargs):
        if kwargs["activity_id"] == "act-1":
            raise OperationalError("INSERT", {}, Exception("database is locked"))
        return real_book_activity(db, **kwargs)

    monkeypatch.setattr(onboarding_service, "book_activity", flaky_book_activity)

    result = OnboardingReconciler(db_session).complete("user-1", _submission())

    assert len(result.booking_errors) == 1
    assert result.booking_errors[0].kind == "activity"
    assert result.booking_errors[0].reference == "act-1"
    created = {item.get("activity_id") or item.get("listing_id") for item in result.bookings_created}
    assert created == {"listing-1", "act-2"}
    assert _count(db_session, TourismOnboarding) == 1


def test_guest_name_resolution_order(db_session):
    db_session.add_all(
        [
            Profile(id="full", full_name="Ana Full", name="Ana", username="ana", email="a@x.io"),
            Profile(id="name", full_name=" ", name="Ben", username="ben", email="b@x.io"),
            Profile(id="user", username="cara", email="c@x.io"),
            Profile(id="mail", email="d@x.io"),
        ]
    )
    db_session.commit()

    assert resolve_guest_name(db_session, "full", "  Explicit  ") == "Explicit"
    assert resolve_guest_name(db_session, "full") == "Ana Full"
    assert resolve_guest_name(db_session, "name") == "Ben"
    assert resolve_guest_name(db_session, "user") == "cara"
    assert resolve_guest_name(db_session, "mail") == "d@x.io"
    assert resolve_guest_name(db_session, "missing") == "Guest"


def test_activity_booking_key_accepts_alternate_keys():
    assert activity_booking_key(
        {"activity_id": 7, "date": "2026-12-02T00:00:00Z", "time": "7:45:10"}
    ) == ("7", date(2026, 12, 2), "07:45")
    assert activity_booking_key({"id": "a", "date": "not-a-date", "time": "10:00"}) is None
