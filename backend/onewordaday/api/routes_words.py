from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..core.ai_generator import AIWordGenerator
from ..core.database import get_db
from ..core.errors import PersistenceError, WordNotFound
from ..core.history import word_history
from ..core.clock import utc_today
from ..core.orchestrator import get_todays_word
from ..schemas import WordRecord
from .deps import get_current_user_id, get_word_generator

router = APIRouter(prefix="/word", tags=["words"])


# ---------- Schemas ----------

class TodaysWordResponse(BaseModel):
    message: str
    word: WordRecord
    generated: bool = False
    regenerated: bool = False


class HistoryResponse(BaseModel):
    message: str
    stats: Dict[str, int]
    words: List[WordRecord]
    count: int
    has_more: bool


# ---------- Endpoints ----------

@router.get("/today", response_model=TodaysWordResponse)
async def todays_word(
    date_: Optional[date] = Query(None, alias="date"),
    user_id: str = Depends(get_current_user_id),
    generator: Optional[AIWordGenerator] = Depends(get_word_generator),
    db: Session = Depends(get_db),
):
    try:
        result = await get_todays_word(db, user_id, generator, requested=date_)
    except WordNotFound as exc:
        raise HTTPException(
            status_code=404,
            detail={
                "message": "Word not found for this date",
                "date": exc.date,
            },
        )
    except PersistenceError:
        raise HTTPException(status_code=500, detail="Error storing today's word")

    if result.regenerated:
        message = "New word generated successfully"
    elif result.generated:
        message = "Word generated successfully"
    else:
        message = "Word retrieved successfully"

    return TodaysWordResponse(
        message=message,
        word=result.record,
        generated=result.generated,
        regenerated=result.regenerated,
    )


@router.get("/history", response_model=HistoryResponse)
def history(
    limit: int = Query(30, ge=1, le=365),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    search: Optional[str] = Query(None, max_length=128),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    h = word_history(
        db,
        user_id,
        today=utc_today(),
        limit=limit,
        start_date=start_date,
        end_date=end_date,
        search=search,
    )
    return HistoryResponse(
        message="Word history retrieved",
        stats=h.stats,
        words=h.words,
        count=len(h.words),
        has_more=h.has_more,
    )
