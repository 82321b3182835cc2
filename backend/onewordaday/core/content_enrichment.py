"""
Word bank enrichment.

A bare word is looked up in the Merriam-Webster collegiate dictionary, scored
for difficulty, matched to age groups and stored as a new bank entry. Lookups
are best effort: a missing key or a failed request still yields an entry with
a placeholder definition that can be edited later.
"""
from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import WordBankEntry
from ..schemas import AgeGroup
from .enrichment import split_into_syllables
from .errors import DuplicateWord, PersistenceError
from .image_provider import UnsplashImageProvider

logger = logging.getLogger(__name__)

AGE_GROUPS_BY_DIFFICULTY: Dict[int, List[AgeGroup]] = {
    1: [AgeGroup.CHILD, AgeGroup.TEEN, AgeGroup.YOUNG_ADULT, AgeGroup.ADULT, AgeGroup.SENIOR],
    2: [AgeGroup.TEEN, AgeGroup.YOUNG_ADULT, AgeGroup.ADULT, AgeGroup.SENIOR],
    3: [AgeGroup.YOUNG_ADULT, AgeGroup.ADULT, AgeGroup.SENIOR],
    4: [AgeGroup.ADULT, AgeGroup.SENIOR],
    5: [AgeGroup.ADULT, AgeGroup.SENIOR],
}

_VOWEL_GROUP = re.compile(r"[aeiouy]+", re.IGNORECASE)
_MARKUP = re.compile(r"\{[^}]*\}")


def calculate_difficulty(word: str) -> int:
    """Medium by default; short words are easier, long or many-voweled ones harder."""
    difficulty = 3
    if len(word) < 5:
        difficulty -= 1
    if len(word) > 10:
        difficulty += 1
    if len(_VOWEL_GROUP.findall(word)) > 4:
        difficulty += 1
    return max(1, min(5, difficulty))


def age_groups_for(difficulty: int) -> List[str]:
    groups = AGE_GROUPS_BY_DIFFICULTY.get(difficulty, [AgeGroup.ADULT])
    return [g.value for g in groups]


@dataclass
class DictionaryEntry:
    definition: str
    part_of_speech: str = "noun"
    pronunciation: str = ""
    synonyms: List[str] = field(default_factory=list)
    antonyms: List[str] = field(default_factory=list)
    examples: List[str] = field(default_factory=list)


def _first(items: Any) -> Any:
    return items[0] if isinstance(items, list) and items else None


def _examples(entry: Dict[str, Any]) -> List[str]:
    """Collect the "vis" (verbal illustration) texts of every sense."""
    found: List[str] = []
    for definition in entry.get("def") or []:
        for sequence in definition.get("sseq") or []:
            for sense in sequence:
                if len(sense) < 2 or not isinstance(sense[1], dict):
                    continue
                for item in sense[1].get("dt") or []:
                    if len(item) == 2 and item[0] == "vis":
                        for vis in item[1]:
                            text = _MARKUP.sub("", vis.get("t", "")).strip()
                            if text:
                                found.append(text)
    return found


def parse_dictionary_entry(word: str, data: Any) -> DictionaryEntry:
    entry = _first(data)
    if not isinstance(entry, dict):
        # Unknown words come back as a list of spelling suggestions.
        return DictionaryEntry(definition=f"A word meaning: {word}")

    meta = entry.get("meta") or {}
    prs = _first((entry.get("hwi") or {}).get("prs")) or {}
    return DictionaryEntry(
        definition=_first(entry.get("shortdef")) or "Definition not available",
        part_of_speech=entry.get("fl") or "noun",
        pronunciation=prs.get("mw", ""),
        synonyms=list(_first(meta.get("syns")) or []),
        antonyms=list(_first(meta.get("ants")) or []),
        examples=_examples(entry),
    )


class DictionaryClient:
    """Merriam-Webster collegiate lookups."""

    def __init__(
        self,
        api_key: str | None,
        api_url: str = "https://www.dictionaryapi.com/api/v3/references/collegiate/json",
        timeout_sec: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.api_url = api_url.rstrip("/")
        self.timeout_sec = timeout_sec
        self._transport = transport

    async def lookup(self, word: str) -> DictionaryEntry:
        if not self.api_key:
            logger.warning("No dictionary API key, storing %r without a definition", word)
            return DictionaryEntry(definition=f"Definition for {word}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout_sec, transport=self._transport) as client:
                r = await client.get(f"{self.api_url}/{word}", params={"key": self.api_key})
            r.raise_for_status()
            return parse_dictionary_entry(word, r.json())
        except (httpx.HTTPError, ValueError, AttributeError, TypeError) as exc:
            logger.warning("Dictionary lookup failed for %r: %s", word, exc)
            return DictionaryEntry(definition=f"Definition for {word}")


class WordBankEnricher:
    def __init__(
        self,
        dictionary: DictionaryClient,
        image_provider: Optional[UnsplashImageProvider] = None,
    ):
        self.dictionary = dictionary
        self.image_provider = image_provider

    async def enrich(self, db: Session, word: str, part_of_speech: Optional[str] = None) -> WordBankEntry:
        """
        Look ``word`` up and store it in the word bank.

        Raises DuplicateWord when the bank already has it and PersistenceError
        when the insert fails.
        """
        word = word.strip().lower()
        if db.query(WordBankEntry).filter(WordBankEntry.word == word).first():
            raise DuplicateWord(word)

        found = await self.dictionary.lookup(word)
        difficulty = calculate_difficulty(word)
        image_url = await self.image_provider.find_image(word) if self.image_provider else ""

        entry = WordBankEntry(
            word_id=str(uuid.uuid4()),
            word=word,
            definition=found.definition,
            part_of_speech=part_of_speech or found.part_of_speech,
            pronunciation=found.pronunciation,
            syllables=split_into_syllables(word),
            difficulty=difficulty,
            examples=found.examples,
            synonyms=found.synonyms,
            antonyms=found.antonyms,
            age_groups=age_groups_for(difficulty),
            audio_url="",
            image_url=image_url,
        )
        try:
            db.add(entry)
            db.commit()
            db.refresh(entry)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Could not store enriched word %r: %s", word, exc)
            raise PersistenceError(str(exc)) from exc

        logger.info("Added %r to the word bank (difficulty %d)", word, difficulty)
        return entry


def build_enricher(settings) -> WordBankEnricher:
    return WordBankEnricher(
        dictionary=DictionaryClient(
            api_key=settings.dictionary_api_key,
            api_url=settings.dictionary_api_url,
            timeout_sec=settings.dictionary_timeout_sec,
        ),
        image_provider=UnsplashImageProvider(
            access_key=settings.unsplash_access_key,
            api_url=settings.unsplash_api_url,
            timeout_sec=settings.image_timeout_sec,
        ),
    )
