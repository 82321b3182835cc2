"""
Daily word orchestration.

For one (user, date) request the stored record is classified into a
``WordState`` by ``resolve_state``; only ``NO_RECORD`` and ``SKIPPED_TODAY``
lead to generation. Generation tries the AI generator first and falls back to
the word bank, which always yields a word. Bank words with too few examples
get contextual sentences from the providers when they are available. Both
paths end in a keyed upsert, so a skipped word for today is replaced rather
than duplicated.
"""
from __future__ import annotations

import logging
import random
import uuid
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Optional

from sqlalchemy.orm import Session

from ..config import settings
from ..models import DailyWord
from ..schemas import (
    GeneratedWord,
    GenerationMethod,
    PracticeStatus,
    Profile,
    WordBankItem,
    WordRecord,
)
from .ai_generator import AIWordGenerator
from .clock import utc_now, utc_today
from .enrichment import bank_sentences, example_sentences, split_into_syllables
from .errors import NoProviderAvailable, WordNotFound
from .profiles import get_profile
from .recency import RecentWords, recent_words
from .usage import check_limit, record_usage
from .word_selector import select_word
from .word_store import get_record, put_record

logger = logging.getLogger(__name__)


class WordState(str, Enum):
    NO_RECORD = "no_record"          # today, nothing stored yet
    SKIPPED_TODAY = "skipped_today"  # today, stored word was skipped
    STORED = "stored"                # anything stored that is returned as-is
    MISSING_PAST = "missing_past"    # past/future date, nothing stored


def resolve_state(existing: Optional[DailyWord], requested: date, today: date) -> WordState:
    is_today = requested == today
    if existing is None:
        return WordState.NO_RECORD if is_today else WordState.MISSING_PAST
    if is_today and existing.practice_status == PracticeStatus.SKIPPED.value:
        return WordState.SKIPPED_TODAY
    return WordState.STORED


def needs_generation(state: WordState) -> bool:
    return state in (WordState.NO_RECORD, WordState.SKIPPED_TODAY)


@dataclass
class DailyWordResult:
    record: WordRecord
    state: WordState

    @property
    def generated(self) -> bool:
        return self.state == WordState.NO_RECORD

    @property
    def regenerated(self) -> bool:
        return self.state == WordState.SKIPPED_TODAY


# ---------- record builders ----------


def record_from_ai(word: GeneratedWord, profile: Profile, day: date) -> WordRecord:
    return WordRecord(
        user_id=profile.user_id,
        date=day.isoformat(),
        word_id=str(uuid.uuid4()),
        word=word.word,
        definition=word.definition,
        part_of_speech=word.part_of_speech,
        pronunciation=word.pronunciation,
        syllables=word.syllables or split_into_syllables(word.word),
        difficulty=word.difficulty,
        sentences=word.sentences,
        synonyms=word.synonyms,
        antonyms=word.antonyms,
        image_url=word.image_url,
        audio_url="",
        practice_status=PracticeStatus.PENDING,
        rating=0,
        generation_method=GenerationMethod.AI,
        provider=word.provider,
        user_context=profile.context,
        created_at=utc_now(),
    )


def record_from_bank(
    item: WordBankItem,
    profile: Profile,
    day: date,
    sentences: Optional[List[str]] = None,
) -> WordRecord:
    return WordRecord(
        user_id=profile.user_id,
        date=day.isoformat(),
        word_id=item.word_id,
        word=item.word,
        definition=item.definition,
        part_of_speech=item.part_of_speech,
        pronunciation=item.pronunciation,
        syllables=item.syllables or split_into_syllables(item.word),
        difficulty=item.difficulty,
        sentences=sentences or example_sentences(item, profile),
        synonyms=item.synonyms,
        antonyms=item.antonyms,
        image_url=item.image_url,
        audio_url=item.audio_url,
        practice_status=PracticeStatus.PENDING,
        rating=0,
        generation_method=GenerationMethod.WORD_BANK,
        user_context=profile.context,
        created_at=utc_now(),
    )


# ---------- generation ----------


async def _try_ai(
    db: Session,
    profile: Profile,
    recent: RecentWords,
    generator: AIWordGenerator,
    today: date,
) -> Optional[GeneratedWord]:
    usage = check_limit(db, profile.user_id, today, settings.ai_daily_word_limit)
    if not usage.allowed:
        logger.info("AI daily limit reached for %s, using word bank", profile.user_id)
        return None

    try:
        word = await generator.generate(profile, recent.texts)
    except NoProviderAvailable as exc:
        logger.warning("AI generation unavailable for %s, falling back to word bank: %s", profile.user_id, exc)
        return None

    record_usage(db, profile.user_id, word.provider, today)
    return word


async def generate_word(
    db: Session,
    profile: Profile,
    day: date,
    generator: Optional[AIWordGenerator],
    today: date,
    rng: Optional[random.Random] = None,
) -> WordRecord:
    """Build a fresh, unsaved word for ``day``: AI first, then the word bank."""
    recent = recent_words(db, profile.user_id, settings.recency_window_days, today)
    if not settings.use_ai_generation:
        generator = None

    if generator is not None:
        word = await _try_ai(db, profile, recent, generator, today)
        if word is not None:
            return record_from_ai(word, profile, day)

    item = select_word(db, profile, exclude_ids=recent.ids, exclude_texts=recent.texts, rng=rng)
    sentences = await bank_sentences(item, profile, generator)
    return record_from_bank(item, profile, day, sentences)


async def get_todays_word(
    db: Session,
    user_id: str,
    generator: Optional[AIWordGenerator],
    requested: Optional[date] = None,
    today: Optional[date] = None,
    rng: Optional[random.Random] = None,
) -> DailyWordResult:
    """
    Return the user's word for ``requested`` (default: today, UTC).

    Raises WordNotFound for a non-today date with nothing stored and
    PersistenceError when the new word cannot be saved.
    """
    today = today or utc_today()
    requested = requested or today

    existing = get_record(db, user_id, requested.isoformat())
    state = resolve_state(existing, requested, today)

    if state == WordState.MISSING_PAST:
        raise WordNotFound(user_id, requested.isoformat())
    if not needs_generation(state):
        return DailyWordResult(record=WordRecord.model_validate(existing), state=state)

    if state == WordState.SKIPPED_TODAY:
        logger.info("Word was skipped, generating a replacement for user %s", user_id)
    else:
        logger.info("No word for %s yet, generating for user %s", requested.isoformat(), user_id)

    profile = get_profile(db, user_id)
    record = await generate_word(db, profile, requested, generator, today, rng=rng)
    row = put_record(db, record)
    return DailyWordResult(record=WordRecord.model_validate(row), state=state)
