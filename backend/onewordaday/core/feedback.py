from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Feedback, UserProfile
from ..schemas import DifficultyFeedback, DifficultyPreference, LearningPatterns, PracticeStatus
from .clock import utc_now
from .word_store import get_record

logger = logging.getLogger(__name__)

_HARDER = {
    DifficultyPreference.EASY: DifficultyPreference.MEDIUM,
    DifficultyPreference.MEDIUM: DifficultyPreference.HARD,
}
_EASIER = {
    DifficultyPreference.HARD: DifficultyPreference.MEDIUM,
    DifficultyPreference.MEDIUM: DifficultyPreference.EASY,
}


def apply_feedback(patterns: LearningPatterns, fb: Feedback, now: datetime) -> LearningPatterns:
    """Return updated learning aggregates after one feedback entry."""
    p = patterns.model_copy()
    p.total_words += 1
    if fb.practiced:
        p.practiced_words += 1

    if fb.rating and fb.rating > 0:
        total = p.average_rating * (p.total_words - 1) + fb.rating
        p.average_rating = total / p.total_words

    if fb.difficulty == DifficultyFeedback.TOO_EASY.value:
        p.difficulty_preference = _HARDER.get(p.difficulty_preference, p.difficulty_preference)
    elif fb.difficulty == DifficultyFeedback.TOO_DIFFICULT.value:
        p.difficulty_preference = _EASIER.get(p.difficulty_preference, p.difficulty_preference)

    p.last_feedback_date = now
    return p


def _update_learning_patterns(db: Session, user_id: str, fb: Feedback, now: datetime) -> None:
    try:
        user = db.query(UserProfile).filter(UserProfile.user_id == user_id).first()
        if user is None:
            logger.info("No profile for %s, learning patterns not updated", user_id)
            return
        current = LearningPatterns.model_validate(user.learning_patterns or {})
        user.learning_patterns = apply_feedback(current, fb, now).model_dump(mode="json")
        user.last_feedback_at = now
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("Error updating learning patterns for %s: %s", user_id, exc)


def _update_practice_status(db: Session, user_id: str, fb: Feedback, now: datetime) -> None:
    try:
        row = get_record(db, user_id, fb.date)
        if row is None:
            logger.info("No daily word for %s on %s, practice status not updated", user_id, fb.date)
            return
        row.practice_status = (PracticeStatus.PRACTICED if fb.practiced else PracticeStatus.SKIPPED).value
        row.rating = fb.rating or 0
        row.practiced_at = now
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("Error updating practice status for %s on %s: %s", user_id, fb.date, exc)


def submit_feedback(db: Session, user_id: str, data: Dict[str, Any]) -> Feedback:
    """
    Store a feedback entry, then update the user's learning patterns and the
    rated word. Only storing the entry itself can fail the request.
    """
    now = utc_now()
    fb = Feedback(
        feedback_id=str(uuid.uuid4()),
        user_id=user_id,
        word_id=data["word_id"],
        date=data["date"],
        rating=data.get("rating") or 0,
        practiced=bool(data.get("practiced")),
        encountered=bool(data.get("encountered")),
        difficulty=data.get("difficulty") or DifficultyFeedback.APPROPRIATE.value,
        additional_context=data.get("additional_context") or "",
        comments=data.get("comments") or "",
        created_at=now,
    )
    db.add(fb)
    db.commit()
    db.refresh(fb)

    _update_learning_patterns(db, user_id, fb, now)
    _update_practice_status(db, user_id, fb, now)
    return fb
