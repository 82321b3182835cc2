"""
Typed records that move between the stores, the generation core and the API.

The ORM rows in ``models`` are converted into these at the store boundary so
the rest of the code never touches loosely shaped dicts.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

MAX_SENTENCES = 3
MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5
DEFAULT_DIFFICULTY = 3


class AgeGroup(str, Enum):
    CHILD = "child"
    TEEN = "teen"
    YOUNG_ADULT = "young_adult"
    ADULT = "adult"
    SENIOR = "senior"


class PracticeStatus(str, Enum):
    PENDING = "pending"
    PRACTICED = "practiced"
    SKIPPED = "skipped"


class GenerationMethod(str, Enum):
    AI = "AI"
    WORD_BANK = "WordBank"


class DifficultyFeedback(str, Enum):
    TOO_EASY = "too_easy"
    APPROPRIATE = "appropriate"
    TOO_DIFFICULT = "too_difficult"


class DifficultyPreference(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# ---------- helpers ----------

def clamp_difficulty(value: Any) -> int:
    try:
        level = int(value)
    except (TypeError, ValueError):
        return DEFAULT_DIFFICULTY
    return max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, level))


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    return [str(v).strip() for v in value if v is not None and str(v).strip()]


# ---------- profiles ----------

class LearningPatterns(BaseModel):
    total_words: int = 0
    practiced_words: int = 0
    average_rating: float = 0.0
    difficulty_preference: DifficultyPreference = DifficultyPreference.MEDIUM
    last_feedback_date: Optional[datetime] = None


class Profile(BaseModel):
    """Read-only view of a user used by word generation."""

    user_id: str
    age_group: str = AgeGroup.ADULT.value
    context: str = "general"
    exam_prep: Optional[str] = None
    learning_patterns: LearningPatterns = Field(default_factory=LearningPatterns)

    class Config:
        from_attributes = True

    @field_validator("age_group", "context", mode="before")
    @classmethod
    def blank_to_default(cls, v, info):
        if v:
            return v
        return AgeGroup.ADULT.value if info.field_name == "age_group" else "general"

    @field_validator("learning_patterns", mode="before")
    @classmethod
    def missing_patterns(cls, v):
        return v or {}


def default_profile(user_id: str) -> Profile:
    return Profile(user_id=user_id)


# ---------- word bank ----------

class WordBankItem(BaseModel):
    word_id: str
    word: str
    definition: str
    part_of_speech: str = ""
    pronunciation: str = ""
    syllables: str = ""
    difficulty: int = DEFAULT_DIFFICULTY
    examples: List[str] = Field(default_factory=list)
    synonyms: List[str] = Field(default_factory=list)
    antonyms: List[str] = Field(default_factory=list)
    age_groups: List[str] = Field(default_factory=list)
    audio_url: str = ""
    image_url: str = ""

    class Config:
        from_attributes = True

    @field_validator("part_of_speech", "pronunciation", "syllables", "audio_url", "image_url", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return v or ""

    @field_validator("examples", "synonyms", "antonyms", "age_groups", mode="before")
    @classmethod
    def coerce_lists(cls, v):
        return _as_str_list(v)

    @field_validator("difficulty", mode="before")
    @classmethod
    def valid_difficulty(cls, v):
        return clamp_difficulty(v)


# ---------- AI payload ----------

class GeneratedWord(BaseModel):
    """Structured word returned by an LLM provider, validated after parsing."""

    word: str
    definition: str
    part_of_speech: str = Field("", alias="partOfSpeech")
    pronunciation: str = ""
    syllables: str = ""
    difficulty: int = DEFAULT_DIFFICULTY
    sentences: List[str]
    synonyms: List[str] = Field(default_factory=list)
    antonyms: List[str] = Field(default_factory=list)
    usage_context: str = Field("", alias="usageContext")
    etymology: str = ""
    image_url: str = ""
    provider: str = ""

    class Config:
        populate_by_name = True

    @field_validator("word", "definition")
    @classmethod
    def required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator(
        "part_of_speech", "pronunciation", "syllables", "usage_context", "etymology", "image_url",
        mode="before",
    )
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else str(v)

    @field_validator("difficulty", mode="before")
    @classmethod
    def valid_difficulty(cls, v):
        return clamp_difficulty(v)

    @field_validator("sentences", mode="before")
    @classmethod
    def bounded_sentences(cls, v):
        sentences = _as_str_list(v)
        if not sentences:
            raise ValueError("at least one example sentence is required")
        return sentences[:MAX_SENTENCES]

    @field_validator("synonyms", "antonyms", mode="before")
    @classmethod
    def coerce_lists(cls, v):
        return _as_str_list(v)


# ---------- daily words ----------

class WordRecord(BaseModel):
    user_id: str
    date: str
    word_id: str
    word: str
    definition: str
    part_of_speech: str = ""
    pronunciation: str = ""
    syllables: str = ""
    difficulty: int = DEFAULT_DIFFICULTY
    sentences: List[str] = Field(default_factory=list)
    synonyms: List[str] = Field(default_factory=list)
    antonyms: List[str] = Field(default_factory=list)
    image_url: str = ""
    audio_url: str = ""
    practice_status: PracticeStatus = PracticeStatus.PENDING
    rating: int = Field(0, ge=0, le=5)
    generation_method: GenerationMethod
    provider: str = ""
    user_context: str = "general"
    created_at: Optional[datetime] = None
    practiced_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_validator("part_of_speech", "pronunciation", "syllables", "image_url", "audio_url", "provider", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return v or ""

    @field_validator("sentences", mode="before")
    @classmethod
    def bounded_sentences(cls, v):
        return _as_str_list(v)[:MAX_SENTENCES]

    @field_validator("synonyms", "antonyms", mode="before")
    @classmethod
    def coerce_lists(cls, v):
        return _as_str_list(v)

    @field_validator("difficulty", mode="before")
    @classmethod
    def valid_difficulty(cls, v):
        return clamp_difficulty(v)

    @field_validator("rating", mode="before")
    @classmethod
    def unset_rating(cls, v):
        return v or 0
