from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import DailyWord, WordBankEntry
from ..schemas import WordBankItem, WordRecord
from .clock import utc_now
from .errors import PersistenceError

logger = logging.getLogger(__name__)


# ---------- daily words ----------


def get_record(db: Session, user_id: str, date: str) -> Optional[DailyWord]:
    return (
        db.query(DailyWord)
        .filter(DailyWord.user_id == user_id, DailyWord.date == date)
        .first()
    )


def query_range(db: Session, user_id: str, date_start: str, date_end: str) -> List[DailyWord]:
    """Records for one user with date in [date_start, date_end], oldest first."""
    return (
        db.query(DailyWord)
        .filter(
            DailyWord.user_id == user_id,
            DailyWord.date >= date_start,
            DailyWord.date <= date_end,
        )
        .order_by(DailyWord.date)
        .all()
    )


def _row_values(record: WordRecord) -> Dict[str, Any]:
    values = record.model_dump(exclude={"user_id", "date"})
    values["practice_status"] = record.practice_status.value
    values["generation_method"] = record.generation_method.value
    values["created_at"] = record.created_at or utc_now()
    return values


def _apply(row: DailyWord, values: Dict[str, Any]) -> None:
    for key, value in values.items():
        setattr(row, key, value)


def put_record(db: Session, record: WordRecord) -> DailyWord:
    """
    Store a daily word under its (user_id, date) key, replacing whatever was
    there. Concurrent writers for the same key end up last-writer-wins.
    """
    values = _row_values(record)
    try:
        row = get_record(db, record.user_id, record.date)
        if row is not None:
            _apply(row, values)
            db.commit()
        else:
            row = DailyWord(user_id=record.user_id, date=record.date, **values)
            db.add(row)
            try:
                db.commit()
            except IntegrityError:
                # Another request inserted the same key first; overwrite it.
                db.rollback()
                row = get_record(db, record.user_id, record.date)
                if row is None:
                    raise
                _apply(row, values)
                db.commit()
        db.refresh(row)
        return row
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Failed to store word for user %s on %s: %s", record.user_id, record.date, exc)
        raise PersistenceError(f"Could not store word for {record.date}") from exc


# ---------- word bank ----------


def scan_by_difficulty(db: Session, tiers: Iterable[int], limit: int = 100) -> List[WordBankItem]:
    rows = (
        db.query(WordBankEntry)
        .filter(WordBankEntry.difficulty.in_(list(tiers)))
        .limit(limit)
        .all()
    )
    return [WordBankItem.model_validate(r) for r in rows]
