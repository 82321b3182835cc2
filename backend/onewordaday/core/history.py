from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from ..models import DailyWord
from ..schemas import PracticeStatus, WordRecord


@dataclass
class WordHistory:
    words: List[WordRecord]
    stats: Dict[str, int]
    has_more: bool


def history_stats(words: List[WordRecord]) -> Dict[str, int]:
    return {
        "total_words": len(words),
        "practiced_words": sum(1 for w in words if w.practice_status == PracticeStatus.PRACTICED),
        "skipped_words": sum(1 for w in words if w.practice_status == PracticeStatus.SKIPPED),
        "pending_words": sum(1 for w in words if w.practice_status == PracticeStatus.PENDING),
    }


def word_history(
    db: Session,
    user_id: str,
    today: date,
    limit: int = 30,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    search: Optional[str] = None,
) -> WordHistory:
    """
    A user's daily words, newest first. The limit is applied in the store;
    the search filter runs on the fetched page.
    """
    q = db.query(DailyWord).filter(DailyWord.user_id == user_id)
    if start_date:
        end = end_date or today
        q = q.filter(DailyWord.date >= start_date.isoformat(), DailyWord.date <= end.isoformat())

    rows = q.order_by(DailyWord.date.desc()).limit(limit + 1).all()
    has_more = len(rows) > limit
    words = [WordRecord.model_validate(r) for r in rows[:limit]]

    if search:
        needle = search.lower()
        words = [w for w in words if needle in w.word.lower() or needle in w.definition.lower()]

    return WordHistory(words=words, stats=history_stats(words), has_more=has_more)
