from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Set

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .word_store import query_range

logger = logging.getLogger(__name__)


@dataclass
class RecentWords:
    texts: List[str] = field(default_factory=list)  # oldest first, unique
    ids: Set[str] = field(default_factory=set)


def recent_words(db: Session, user_id: str, window_days: int, today: date) -> RecentWords:
    """
    Words the user received in [today - window_days, today].

    A failed lookup yields an empty result: missing exclusions are better than
    no word at all.
    """
    start = (today - timedelta(days=window_days)).isoformat()
    end = today.isoformat()
    try:
        rows = query_range(db, user_id, start, end)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("Recent words lookup failed for %s, continuing without exclusions: %s", user_id, exc)
        return RecentWords()

    texts: List[str] = []
    for r in rows:
        if r.word and r.word.lower() not in texts:
            texts.append(r.word.lower())
    return RecentWords(
        texts=texts,
        ids={r.word_id for r in rows if r.word_id},
    )
