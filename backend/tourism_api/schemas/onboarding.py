from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from tourism_api.services.trip_format import normalize_time


class OnboardingSubmissionIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    session_id: str | None = Field(None, alias="sessionId")
    country: str | None = None
    budget: str | None = None
    start_date: dt.date | None = Field(None, alias="startDate")
    end_date: dt.date | None = Field(None, alias="endDate")
    want_reminder: bool = Field(False, alias="wantReminder")
    stay_option: str | None = Field(None, alias="stayOption")
    interests: list[str] = Field(default_factory=list)
    want_bucket: bool = Field(False, alias="wantBucket")
    selected_activities: list[dict[str, Any]] = Field(
        default_factory=list, alias="selectedActivities"
    )
    stay_listing_id: str | None = Field(None, alias="stayListingId")
    guest_name: str | None = Field(None, alias="guestName")

    @field_validator(
        "session_id",
        "country",
        "budget",
        "start_date",
        "end_date",
        "stay_option",
        "stay_listing_id",
        "guest_name",
        mode="before",
    )
    @classmethod
    def _blank_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("want_reminder", "want_bucket", mode="before")
    @classmethod
    def _truthy(cls, value: Any) -> bool:
        return bool(value)

    @field_validator("interests", mode="before")
    @classmethod
    def _interests_list(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [str(item) for item in value if item is not None]

    @field_validator("selected_activities", mode="before")
    @classmethod
    def _activities_list(cls, value: Any) -> list[dict[str, Any]]:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, dict)]


class OnboardingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    session_id: str | None
    country: str
    budget: str | None
    start_date: dt.date | None
    end_date: dt.date | None
    want_reminder: bool
    stay_option: str | None
    interests: list[str]
    want_bucket_list: bool
    selected_activities: list[dict[str, Any]]
    stay_listing_id: str | None
    has_completed_onboarding: bool
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class OnboardingStatusResponse(BaseModel):
    hasCompletedOnboarding: bool
    onboarding: OnboardingOut | None


class BookingErrorOut(BaseModel):
    kind: str
    reference: str
    error: str


class OnboardingCompleteResponse(BaseModel):
    message: str
    onboarding: OnboardingOut
    bookingsCreated: list[dict[str, Any]]
    bookingErrors: list[BookingErrorOut]


class AccommodationOut(BaseModel):
    name: str
    subtitle: str
    location: str


class TripBudgetOut(BaseModel):
    total: int
    spent: float = 0
    categories: list[dict[str, Any]] = Field(default_factory=list)


class TripOut(BaseModel):
    id: int
    destination_country: str
    start_date: dt.date | None
    end_date: dt.date | None


class TripResponse(BaseModel):
    found: bool
    trip: TripOut | None = None
    accommodation: AccommodationOut | None = None
    budget: TripBudgetOut | None = None
    selectedActivities: list[dict[str, Any]] = Field(default_factory=list)
    stayListingId: str | None = None
    interests: list[str] = Field(default_factory=list)


class AccommodationBookingIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    listing_id: str = Field(..., alias="listingId", min_length=1)
    check_in: dt.date = Field(..., alias="checkIn")
    check_out: dt.date = Field(..., alias="checkOut")
    guest_name: str | None = Field(None, alias="guestName")

    @field_validator("listing_id", mode="before")
    @classmethod
    def _listing_to_str(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="after")
    def _validate_dates(self) -> "AccommodationBookingIn":
        if self.check_out < self.check_in:
            raise ValueError("checkOut must be on or after checkIn.")
        return self


class ActivityBookingIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    activity_id: str = Field(..., alias="activityId", min_length=1)
    date: dt.date
    time: str
    guest_name: str | None = Field(None, alias="guestName")
    pax: int = Field(1, ge=1)

    @field_validator("activity_id", mode="before")
    @classmethod
    def _activity_to_str(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("time")
    @classmethod
    def _normalize_time(cls, value: str) -> str:
        normalized = normalize_time(value)
        if normalized is None:
            raise ValueError("time must be HH:MM")
        return normalized


class AccommodationBookingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    listing_id: str
    user_id: str | None
    guest_name: str
    check_in: dt.date
    check_out: dt.date
    status: str


class ActivityBookingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    activity_id: str
    user_id: str | None
    guest_name: str
    date: dt.date
    time: str
    pax: int
    status: str


class AccommodationBookingResponse(BaseModel):
    created: bool
    booking: AccommodationBookingOut


class ActivityBookingResponse(BaseModel):
    created: bool
    booking: ActivityBookingOut
