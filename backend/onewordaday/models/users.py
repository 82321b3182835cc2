from sqlalchemy import JSON, Column, DateTime, Integer, String

from ..core.clock import utc_now
from ..core.database import Base


class UserProfile(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(128), unique=True, nullable=False, index=True)
    email = Column(String, nullable=True)
    name = Column(String, nullable=True)

    age_group = Column(String(16), default="adult")  # child | teen | young_adult | adult | senior
    context = Column(String, default="general")
    exam_prep = Column(String, nullable=True)

    notification_preferences = Column(JSON, nullable=True)
    contact_info = Column(JSON, nullable=True)
    timezone = Column(String(64), default="UTC")
    language = Column(String(8), default="en")

    # Aggregates maintained by the feedback processor
    learning_patterns = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now)
    last_feedback_at = Column(DateTime, nullable=True)
