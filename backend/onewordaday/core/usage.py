from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import AIUsage
from .clock import utc_now

logger = logging.getLogger(__name__)


@dataclass
class UsageCheck:
    allowed: bool
    remaining: int
    reset_at: Optional[datetime]


def _usage_row(db: Session, user_id: str, day: str) -> Optional[AIUsage]:
    return (
        db.query(AIUsage)
        .filter(AIUsage.user_id == user_id, AIUsage.date == day)
        .first()
    )


def check_limit(db: Session, user_id: str, today: date, daily_limit: int) -> UsageCheck:
    """
    How many AI generations the user has left today. Resets at midnight UTC.
    If the counter cannot be read the user is let through.
    """
    try:
        row = _usage_row(db, user_id, today.isoformat())
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("AI usage lookup failed for %s: %s", user_id, exc)
        return UsageCheck(allowed=True, remaining=daily_limit, reset_at=None)

    used = row.words_generated if row else 0
    return UsageCheck(
        allowed=used < daily_limit,
        remaining=max(0, daily_limit - used),
        reset_at=datetime.combine(today + timedelta(days=1), time.min),
    )


def record_usage(db: Session, user_id: str, provider: str, today: date) -> None:
    """Count one AI generation. Failures are logged, never raised."""
    now = utc_now()
    try:
        row = _usage_row(db, user_id, today.isoformat())
        if row is None:
            row = AIUsage(user_id=user_id, date=today.isoformat(), words_generated=0)
            db.add(row)
        row.words_generated = (row.words_generated or 0) + 1
        row.last_provider = provider
        row.last_generated_at = now
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("Failed to record AI usage for %s: %s", user_id, exc)
