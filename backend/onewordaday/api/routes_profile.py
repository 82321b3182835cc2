from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..core.profiles import read_profile, upsert_profile
from ..schemas import AgeGroup, LearningPatterns
from .deps import get_current_user_id

router = APIRouter(prefix="/user", tags=["profile"])


# ---------- Schemas ----------

class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    age_group: Optional[AgeGroup] = None
    context: Optional[str] = None
    exam_prep: Optional[str] = None
    notification_preferences: Optional[Dict[str, Any]] = None
    contact_info: Optional[Dict[str, Any]] = None
    expo_push_token: Optional[str] = None
    phone_number: Optional[str] = None
    timezone: Optional[str] = None
    language: Optional[str] = None


class ProfileOut(BaseModel):
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    age_group: str
    context: str
    exam_prep: Optional[str] = None
    notification_preferences: Optional[Dict[str, Any]] = None
    contact_info: Optional[Dict[str, Any]] = None
    timezone: str
    language: str
    learning_patterns: Optional[LearningPatterns] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_feedback_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileResponse(BaseModel):
    message: str
    profile: ProfileOut


# ---------- Endpoints ----------

@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    row = read_profile(db, user_id)
    if not row:
        raise HTTPException(status_code=404, detail="User not found")
    return ProfileResponse(message="User profile retrieved", profile=ProfileOut.model_validate(row))


@router.put("/profile", response_model=ProfileResponse)
def put_profile(
    payload: ProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    x_user_email: Optional[str] = Header(None),
    x_user_name: Optional[str] = Header(None),
    db: Session = Depends(get_db),
):
    data = payload.model_dump(exclude_unset=True, mode="json")
    row, created = upsert_profile(db, user_id, data, email=x_user_email, name=x_user_name)
    return ProfileResponse(
        message="User profile created" if created else "User profile updated",
        profile=ProfileOut.model_validate(row),
    )
