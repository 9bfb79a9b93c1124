from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ListingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    entity_id: str | None
    title: str
    description: str | None
    location: str | None
    price_per_night: float | None


class ActivityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    entity_id: str | None
    title: str
    description: str | None
    location: str | None
    price: float | None
    duration_minutes: int | None
    active: bool


class ListingListResponse(BaseModel):
    data: list[ListingOut]


class ActivityListResponse(BaseModel):
    data: list[ActivityOut]


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str | None
    username: str | None
    full_name: str | None
    avatar_url: str | None
    is_first_time_user: bool


class MeUserOut(BaseModel):
    id: str
    email: str | None


class MeResponse(BaseModel):
    user: MeUserOut
    profile: ProfileOut | None
