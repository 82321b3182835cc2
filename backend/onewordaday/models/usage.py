from datetime import datetime

from sqlalchemy import Integer, String, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base


class AIUsage(Base):
    __tablename__ = "ai_usage"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_ai_usage_user_date"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(128), index=True)
    date: Mapped[str] = mapped_column(String(10))

    words_generated: Mapped[int] = mapped_column(Integer, default=0)
    last_provider: Mapped[str | None] = mapped_column(String(64), nullable=True)
    last_generated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
