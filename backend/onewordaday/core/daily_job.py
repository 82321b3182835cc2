from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import UserProfile
from .ai_generator import AIWordGenerator
from .clock import utc_today
from .database import SessionLocal
from .errors import PersistenceError
from .orchestrator import get_todays_word

logger = logging.getLogger(__name__)


async def generate_for_all_users(
    db: Session,
    generator: Optional[AIWordGenerator],
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Make sure every user has a word for today. Existing words are kept;
    a failure for one user does not stop the others.
    """
    today = today or utc_today()
    user_ids = [u.user_id for u in db.query(UserProfile.user_id).all()]
    logger.info("Daily generation for %d users on %s", len(user_ids), today.isoformat())

    results: List[Dict[str, Any]] = []
    for user_id in user_ids:
        try:
            result = await get_todays_word(db, user_id, generator, today=today)
        except (PersistenceError, SQLAlchemyError) as exc:
            db.rollback()
            logger.error("Daily generation failed for %s: %s", user_id, exc)
            results.append({"user_id": user_id, "success": False, "error": str(exc)})
            continue
        results.append(
            {
                "user_id": user_id,
                "success": True,
                "word": result.record.word,
                "method": result.record.generation_method.value,
                "generated": result.generated or result.regenerated,
            }
        )

    successful = sum(1 for r in results if r["success"])
    return {
        "date": today.isoformat(),
        "processed": len(user_ids),
        "successful": successful,
        "failed": len(results) - successful,
        "results": results,
    }


async def daily_generation_loop(
    generator: Optional[AIWordGenerator],
    interval_seconds: int = 3600,
) -> None:
    """
    Background loop that periodically fills in today's words.
    """
    while True:
        db = SessionLocal()
        try:
            summary = await generate_for_all_users(db, generator)
            logger.info(
                "Daily generation done: %d ok, %d failed",
                summary["successful"],
                summary["failed"],
            )
        except Exception:
            logger.exception("Daily generation run crashed")
        finally:
            db.close()

        await asyncio.sleep(interval_seconds)
