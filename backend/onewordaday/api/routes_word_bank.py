from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..core.clock import utc_now
from ..core.content_enrichment import WordBankEnricher
from ..core.database import get_db
from ..core.errors import DuplicateWord, PersistenceError
from ..models import WordBankEntry
from ..schemas import AgeGroup, WordBankItem
from .deps import get_word_enricher

router = APIRouter(prefix="/word-bank", tags=["word-bank"])


# ---------- Schemas ----------

class WordBankCreate(BaseModel):
    word_id: str = Field(..., min_length=1, max_length=64)
    word: str = Field(..., min_length=1)
    definition: str = Field(..., min_length=1)
    part_of_speech: str = ""
    pronunciation: str = ""
    syllables: str = ""
    difficulty: int = Field(..., ge=1, le=5)
    examples: List[str] = []
    synonyms: List[str] = []
    antonyms: List[str] = []
    age_groups: List[AgeGroup] = []
    audio_url: str = ""
    image_url: str = ""


class WordBankUpdate(BaseModel):
    word: Optional[str] = None
    definition: Optional[str] = None
    part_of_speech: Optional[str] = None
    pronunciation: Optional[str] = None
    syllables: Optional[str] = None
    difficulty: Optional[int] = Field(None, ge=1, le=5)
    examples: Optional[List[str]] = None
    synonyms: Optional[List[str]] = None
    antonyms: Optional[List[str]] = None
    age_groups: Optional[List[AgeGroup]] = None
    audio_url: Optional[str] = None
    image_url: Optional[str] = None


class WordEnrichRequest(BaseModel):
    word: str = Field(..., min_length=1, max_length=64)
    part_of_speech: Optional[str] = None


class WordBankOut(WordBankItem):
    created_at: datetime
    updated_at: datetime


def _get_entry(db: Session, word_id: str) -> WordBankEntry:
    e = db.query(WordBankEntry).filter(WordBankEntry.word_id == word_id).first()
    if not e:
        raise HTTPException(status_code=404, detail="Word not found")
    return e


# ---------- Endpoints ----------

@router.get("", response_model=List[WordBankOut])
def list_entries(
    difficulty: Optional[int] = Query(None, ge=1, le=5),
    db: Session = Depends(get_db),
):
    q = db.query(WordBankEntry)
    if difficulty is not None:
        q = q.filter(WordBankEntry.difficulty == difficulty)
    return q.order_by(WordBankEntry.id).all()


@router.get("/{word_id}", response_model=WordBankOut)
def get_entry(word_id: str, db: Session = Depends(get_db)):
    return _get_entry(db, word_id)


@router.post("", response_model=WordBankOut, status_code=status.HTTP_201_CREATED)
def create_entry(payload: WordBankCreate, db: Session = Depends(get_db)):
    existing = db.query(WordBankEntry).filter(WordBankEntry.word_id == payload.word_id).first()
    if existing:
        raise HTTPException(status_code=400, detail="Word already exists")

    e = WordBankEntry(**payload.model_dump(mode="json"))
    db.add(e)
    db.commit()
    db.refresh(e)
    return e


@router.post("/enrich", response_model=WordBankOut, status_code=status.HTTP_201_CREATED)
async def enrich_entry(
    payload: WordEnrichRequest,
    db: Session = Depends(get_db),
    enricher: WordBankEnricher = Depends(get_word_enricher),
):
    try:
        return await enricher.enrich(db, payload.word, payload.part_of_speech)
    except DuplicateWord as exc:
        raise HTTPException(status_code=400, detail="Word already exists") from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail="Could not store word") from exc


@router.patch("/{word_id}", response_model=WordBankOut)
def update_entry(word_id: str, payload: WordBankUpdate, db: Session = Depends(get_db)):
    e = _get_entry(db, word_id)

    data = payload.model_dump(exclude_unset=True, mode="json")
    for key, value in data.items():
        if value is None:
            continue
        setattr(e, key, value)

    e.updated_at = utc_now()

    db.commit()
    db.refresh(e)
    return e


@router.delete("/{word_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(word_id: str, db: Session = Depends(get_db)):
    e = _get_entry(db, word_id)

    db.delete(e)
    db.commit()
    return
