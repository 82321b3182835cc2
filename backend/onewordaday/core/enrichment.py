from __future__ import annotations

import logging
from typing import List

from ..schemas import MAX_SENTENCES, Profile, WordBankItem
from .errors import NoProviderAvailable

logger = logging.getLogger(__name__)

VOWELS = "aeiouy"


def split_into_syllables(word: str) -> str:
    """
    Rough hyphenation: break after a vowel that is followed by a consonant.
    Good enough for display, not a dictionary syllabification.
    """
    syllables: List[str] = []
    current = ""
    for i, ch in enumerate(word):
        current += ch
        if ch.lower() in VOWELS and i < len(word) - 1 and word[i + 1].lower() not in VOWELS:
            syllables.append(current)
            current = ""
    if current:
        syllables.append(current)
    return "-".join(syllables) if syllables else word


def template_sentences(word: str, context: str) -> List[str]:
    return [
        f'The word "{word}" is commonly used in everyday conversation.',
        f"Understanding {word} can help improve your vocabulary.",
        f"Try to use {word} in your {context} communication.",
    ]


def example_sentences(item: WordBankItem, profile: Profile) -> List[str]:
    """Bank examples when there are enough of them, otherwise template filler."""
    if len(item.examples) >= MAX_SENTENCES:
        return item.examples[:MAX_SENTENCES]
    context = profile.context if profile.context and profile.context != "general" else "daily"
    return template_sentences(item.word, context)


async def bank_sentences(item: WordBankItem, profile: Profile, generator=None) -> List[str]:
    """
    Sentences for a bank word. Thin entries are sent to ``generator`` for
    contextual sentences; templates are the last resort.
    """
    if generator is None or len(item.examples) >= MAX_SENTENCES:
        return example_sentences(item, profile)
    try:
        return await generator.contextual_sentences(item, profile)
    except NoProviderAvailable as exc:
        logger.warning("Contextual sentences unavailable for %r, using templates: %s", item.word, exc)
        return example_sentences(item, profile)
