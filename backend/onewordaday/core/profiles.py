from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import UserProfile
from ..schemas import LearningPatterns, Profile, default_profile
from .clock import utc_now

logger = logging.getLogger(__name__)

DEFAULT_NOTIFICATION_PREFERENCES: Dict[str, Any] = {
    "dailyWord": {
        "enabled": True,
        "channels": ["push"],
        "time": "08:00",
        "timezone": "UTC",
    },
    "feedbackReminder": {
        "enabled": True,
        "time": "20:00",
    },
    "milestones": {
        "enabled": True,
    },
}


def get_profile(db: Session, user_id: str) -> Profile:
    """
    Profile used for word generation. Never raises: a missing row or a store
    error both give the default adult/general profile.
    """
    try:
        row = read_profile(db, user_id)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("Profile lookup failed for %s, using default profile: %s", user_id, exc)
        return default_profile(user_id)

    if row is None:
        return default_profile(user_id)
    return Profile.model_validate(row)


def read_profile(db: Session, user_id: str) -> Optional[UserProfile]:
    return db.query(UserProfile).filter(UserProfile.user_id == user_id).first()


def upsert_profile(
    db: Session,
    user_id: str,
    data: Dict[str, Any],
    email: Optional[str] = None,
    name: Optional[str] = None,
) -> Tuple[UserProfile, bool]:
    """
    Merge ``data`` over the stored profile (or the defaults for a new user).
    Learning patterns are owned by the feedback processor and kept as-is.
    Returns (profile, created).
    """
    row = read_profile(db, user_id)
    created = row is None
    now = utc_now()

    if created:
        row = UserProfile(
            user_id=user_id,
            age_group="adult",
            context="general",
            timezone="UTC",
            language="en",
            notification_preferences=DEFAULT_NOTIFICATION_PREFERENCES,
            learning_patterns=LearningPatterns().model_dump(mode="json"),
            created_at=now,
        )
        db.add(row)

    if email:
        row.email = email
    if name or data.get("name"):
        row.name = name or data["name"]

    for field in ("age_group", "context", "exam_prep", "timezone", "language", "notification_preferences"):
        if data.get(field) is not None:
            setattr(row, field, data[field])

    contact_info = data.get("contact_info")
    if contact_info is not None:
        row.contact_info = contact_info
    elif created:
        row.contact_info = {
            "expoPushToken": data.get("expo_push_token"),
            "phoneNumber": data.get("phone_number"),
            "email": email,
        }

    row.updated_at = now
    db.commit()
    db.refresh(row)
    return row, created
