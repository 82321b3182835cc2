from datetime import date as date_type, datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..core.feedback import submit_feedback
from ..schemas import DifficultyFeedback
from .deps import get_current_user_id

router = APIRouter(prefix="/feedback", tags=["feedback"])


class FeedbackIn(BaseModel):
    word_id: str = Field(..., min_length=1)
    date: date_type
    rating: int = Field(0, ge=0, le=5)
    practiced: bool = False
    encountered: bool = False
    difficulty: DifficultyFeedback = DifficultyFeedback.APPROPRIATE
    additional_context: str = ""
    comments: str = ""


class FeedbackOut(BaseModel):
    feedback_id: str
    user_id: str
    word_id: str
    date: str
    rating: int
    practiced: bool
    encountered: bool
    difficulty: DifficultyFeedback
    additional_context: str
    comments: str
    created_at: datetime

    class Config:
        from_attributes = True


class FeedbackResponse(BaseModel):
    message: str
    feedback_id: str
    data: FeedbackOut


@router.post("", response_model=FeedbackResponse)
def post_feedback(
    payload: FeedbackIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    fb = submit_feedback(db, user_id, payload.model_dump(mode="json"))
    return FeedbackResponse(
        message="Feedback submitted successfully",
        feedback_id=fb.feedback_id,
        data=FeedbackOut.model_validate(fb),
    )
