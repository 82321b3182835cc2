from __future__ import annotations

import logging
import random
from typing import Collection, Dict, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import settings
from ..schemas import Profile, WordBankItem
from .word_store import scan_by_difficulty

logger = logging.getLogger(__name__)

DIFFICULTY_BY_AGE_GROUP: Dict[str, Tuple[int, ...]] = {
    "child": (1, 2),
    "teen": (2, 3),
    "young_adult": (3, 4),
    "adult": (4, 5),
    "senior": (3, 4, 5),
}
DEFAULT_TIERS: Tuple[int, ...] = (3, 4)

FALLBACK_WORD = WordBankItem(
    word_id="default-serendipity",
    word="serendipity",
    syllables="ser-en-dip-i-ty",
    pronunciation="/ˌserənˈdipədē/",
    definition="The occurrence and development of events by chance in a happy or beneficial way",
    part_of_speech="noun",
    difficulty=3,
    synonyms=["fortune", "luck", "chance"],
    antonyms=["misfortune", "bad luck"],
    examples=[
        "Finding that book was pure serendipity.",
        "Their meeting was a fortunate serendipity.",
        "It was serendipity that we bumped into each other.",
    ],
)


def difficulty_tiers(age_group: str) -> Tuple[int, ...]:
    return DIFFICULTY_BY_AGE_GROUP.get(age_group, DEFAULT_TIERS)


def select_word(
    db: Session,
    profile: Profile,
    exclude_ids: Collection[str] = (),
    exclude_texts: Collection[str] = (),
    rng: Optional[random.Random] = None,
) -> WordBankItem:
    """
    Pick a bank word suitable for the profile's age group that the user has
    not seen recently. Never fails: an empty candidate set or an unreachable
    store yields FALLBACK_WORD.
    """
    rng = rng or random.Random()
    tiers = difficulty_tiers(profile.age_group)

    try:
        candidates = scan_by_difficulty(db, tiers, limit=settings.word_bank_scan_limit)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("Word bank scan failed, using fallback word: %s", exc)
        return FALLBACK_WORD

    excluded_texts = {t.lower() for t in exclude_texts}
    candidates = [
        c
        for c in candidates
        if c.word_id not in exclude_ids and c.word.lower() not in excluded_texts
    ]

    if not candidates:
        logger.info("No bank candidates left for tiers %s, using fallback word", tiers)
        return FALLBACK_WORD

    return rng.choice(candidates)
