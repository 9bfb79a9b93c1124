from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tourism_api.models.profile import PromptCount

logger = logging.getLogger(__name__)


def increment_prompt_count(db: Session, user_id: str) -> None:
    """Bump the per-user prompt counter. Analytics never fail the request."""
    try:
        row = db.execute(
            select(PromptCount).where(PromptCount.user_id == user_id)
        ).scalar_one_or_none()
        if row is None:
            db.add(PromptCount(user_id=user_id, count=1))
        else:
            row.count = (row.count or 0) + 1
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Prompt count update failed for user %s: %s", user_id, exc)
