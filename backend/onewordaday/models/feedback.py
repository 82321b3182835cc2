from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from ..core.clock import utc_now
from ..core.database import Base


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True, index=True)
    feedback_id = Column(String(64), unique=True, nullable=False)
    user_id = Column(String(128), nullable=False, index=True)
    word_id = Column(String(64), nullable=False)
    date = Column(String(10), nullable=False)

    rating = Column(Integer, default=0)
    practiced = Column(Boolean, default=False)
    encountered = Column(Boolean, default=False)
    difficulty = Column(String(16), default="appropriate")  # too_easy | appropriate | too_difficult
    additional_context = Column(Text, default="")
    comments = Column(Text, default="")

    created_at = Column(DateTime, default=utc_now)
