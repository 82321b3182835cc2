from sqlalchemy import JSON, Column, DateTime, Integer, String, Text, UniqueConstraint

from ..core.clock import utc_now
from ..core.database import Base


class WordBankEntry(Base):
    __tablename__ = "word_bank"

    id = Column(Integer, primary_key=True, index=True)
    word_id = Column(String(64), unique=True, nullable=False, index=True)
    word = Column(String, nullable=False)
    definition = Column(Text, nullable=False)
    part_of_speech = Column(String(32), default="")
    pronunciation = Column(String, default="")
    syllables = Column(String, default="")

    difficulty = Column(Integer, nullable=False, index=True)  # 1 (easy) .. 5 (advanced)

    examples = Column(JSON, default=list)
    synonyms = Column(JSON, default=list)
    antonyms = Column(JSON, default=list)
    age_groups = Column(JSON, default=list)

    audio_url = Column(String, default="")
    image_url = Column(String, default="")

    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now)


class DailyWord(Base):
    __tablename__ = "daily_words"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_daily_words_user_date"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(128), nullable=False, index=True)
    date = Column(String(10), nullable=False)  # YYYY-MM-DD (UTC)

    word_id = Column(String(64), nullable=False)
    word = Column(String, nullable=False)
    definition = Column(Text, nullable=False)
    part_of_speech = Column(String(32), default="")
    pronunciation = Column(String, default="")
    syllables = Column(String, default="")
    difficulty = Column(Integer, default=3)

    sentences = Column(JSON, default=list)
    synonyms = Column(JSON, default=list)
    antonyms = Column(JSON, default=list)

    image_url = Column(String, default="")
    audio_url = Column(String, default="")

    practice_status = Column(String(16), default="pending")  # pending | practiced | skipped
    rating = Column(Integer, default=0)
    practiced_at = Column(DateTime, nullable=True)

    generation_method = Column(String(16), nullable=False)  # AI | WordBank
    provider = Column(String(64), default="")
    user_context = Column(String, default="general")

    created_at = Column(DateTime, default=utc_now)
