from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import JSON, Boolean, Date, DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from tourism_api.models.base import Base


class TourismOnboarding(Base):
    __tablename__ = "tourism_onboarding"
    __table_args__ = {"schema": "tourism_features"}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    session_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    country: Mapped[str] = mapped_column(String(120), nullable=False)
    budget: Mapped[str | None] = mapped_column(String(120), nullable=True)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    want_reminder: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    stay_option: Mapped[str | None] = mapped_column(Text, nullable=True)
    interests: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    want_bucket_list: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    selected_activities: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    stay_listing_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    has_completed_onboarding: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
