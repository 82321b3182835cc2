import os
import tempfile

# Settings are read at import time, so the test database has to be chosen
# before anything from onewordaday is imported.
_TMP_DIR = tempfile.mkdtemp(prefix="onewordaday-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["DAILY_JOB_ENABLED"] = "false"
os.environ["GROQ_API_KEY"] = ""
os.environ["UNSPLASH_ACCESS_KEY"] = ""
os.environ["DICTIONARY_API_KEY"] = ""

from datetime import datetime  # noqa: E402

import pytest  # noqa: E402

from onewordaday.core.database import Base, SessionLocal, engine  # noqa: E402
from onewordaday.models import DailyWord, UserProfile, WordBankEntry  # noqa: E402


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def add_bank_word(db):
    def _add(word_id, word, difficulty, examples=None, **extra):
        e = WordBankEntry(
            word_id=word_id,
            word=word,
            definition=extra.pop("definition", f"Definition of {word}."),
            difficulty=difficulty,
            examples=examples or [],
            synonyms=extra.pop("synonyms", []),
            antonyms=extra.pop("antonyms", []),
            age_groups=extra.pop("age_groups", []),
            **extra,
        )
        db.add(e)
        db.commit()
        return e

    return _add


@pytest.fixture
def add_user(db):
    def _add(user_id, age_group="adult", context="general", **extra):
        u = UserProfile(user_id=user_id, age_group=age_group, context=context, **extra)
        db.add(u)
        db.commit()
        return u

    return _add


@pytest.fixture
def add_daily_word(db):
    def _add(user_id, day, word, word_id=None, practice_status="pending", **extra):
        w = DailyWord(
            user_id=user_id,
            date=day,
            word_id=word_id or f"id-{word}",
            word=word,
            definition=extra.pop("definition", f"Definition of {word}."),
            generation_method=extra.pop("generation_method", "WordBank"),
            practice_status=practice_status,
            sentences=extra.pop("sentences", [f"{word} one.", f"{word} two.", f"{word} three."]),
            created_at=datetime(2024, 1, 1),
            **extra,
        )
        db.add(w)
        db.commit()
        return w

    return _add
