from __future__ import annotations

import json
import logging
from textwrap import dedent
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from pydantic import ValidationError

from ..schemas import MAX_SENTENCES, GeneratedWord, Profile, WordBankItem
from .errors import NoProviderAvailable, ProviderError
from .image_provider import UnsplashImageProvider
from .llm_provider import LLMMessage, LLMProvider, build_default_providers

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_EXCLUDED_IN_PROMPT = 30

SYSTEM_PROMPT = (
    "You are a vocabulary expert and English language teacher. "
    "Provide educational vocabulary words with detailed information in JSON format."
)

RESPONSE_SCHEMA = dedent(
    """\
    {
      "word": "the vocabulary word",
      "definition": "clear, concise definition",
      "partOfSpeech": "noun/verb/adjective/etc",
      "pronunciation": "IPA phonetic notation",
      "syllables": "word broken into syllables with hyphens",
      "difficulty": 1-5 (1=easy, 5=advanced),
      "sentences": ["example sentence 1", "example sentence 2", "example sentence 3"],
      "synonyms": ["synonym1", "synonym2", "synonym3"],
      "antonyms": ["antonym1", "antonym2"],
      "usageContext": "brief note on when/how to use this word",
      "etymology": "optional brief word origin"
    }"""
)


def build_prompt(profile: Profile, exclude_texts: Sequence[str] = ()) -> str:
    lines = [
        "Generate a vocabulary word suitable for the following profile:",
        "",
        f"Age Group: {profile.age_group}",
        f"Context: {profile.context}",
    ]
    if profile.exam_prep:
        lines.append(f"Exam Preparation: {profile.exam_prep}")

    recent = list(exclude_texts)[-MAX_EXCLUDED_IN_PROMPT:]
    if recent:
        lines += [
            "",
            "The user has recently learned these words. Do NOT reuse any of them:",
            ", ".join(recent),
        ]

    lines += [
        "",
        "Provide a response in the following JSON format:",
        RESPONSE_SCHEMA,
        "",
        "Requirements:",
        f"- Age-appropriate for {profile.age_group}",
        f"- Relevant to {profile.context} context",
        "- Useful for vocabulary building",
        "- Include 3 natural example sentences",
        "- Must be a real English word",
        "- Provide accurate pronunciation",
        "",
        "Return ONLY the JSON object, no additional text.",
    ]
    return "\n".join(lines)


def parse_word_payload(provider: str, content: str) -> GeneratedWord:
    """Unwrap the provider's message content into a validated word."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ProviderError(provider, f"malformed JSON: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise ProviderError(provider, "expected a JSON object")

    try:
        return GeneratedWord.model_validate(data)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in e["loc"]) for e in exc.errors())
        raise ProviderError(provider, f"invalid word payload ({fields})") from exc


def build_sentence_prompt(item: WordBankItem, profile: Profile) -> str:
    pos = f" ({item.part_of_speech})" if item.part_of_speech else ""
    return "\n".join(
        [
            f'Generate {MAX_SENTENCES} example sentences using the word "{item.word}"{pos}.',
            f"Definition: {item.definition}",
            f"Context: {profile.context}",
            f"Age group: {profile.age_group}",
            "",
            "The sentences should be:",
            "1. Age-appropriate and relevant to the user's context",
            "2. Natural and conversational",
            "3. Clearly demonstrate the meaning of the word",
            "",
            f"Return only the {MAX_SENTENCES} sentences, one per line, without numbering.",
        ]
    )


def parse_sentences(provider: str, content: str) -> List[str]:
    """One sentence per non-blank line, at most MAX_SENTENCES of them."""
    lines = [line.strip() for line in (content or "").splitlines()]
    sentences = [line for line in lines if line][:MAX_SENTENCES]
    if not sentences:
        raise ProviderError(provider, "empty sentence reply")
    return sentences


class AIWordGenerator:
    """
    Asks each provider in order for a structured word and returns the first
    valid one, decorated with a best-effort image. The same provider chain
    writes example sentences for bank words.
    """

    def __init__(
        self,
        providers: List[LLMProvider],
        image_provider: Optional[UnsplashImageProvider] = None,
    ):
        self.providers = providers
        self.image_provider = image_provider

    async def generate(self, profile: Profile, exclude_texts: Sequence[str] = ()) -> GeneratedWord:
        messages = [
            LLMMessage(role="system", content=SYSTEM_PROMPT),
            LLMMessage(role="user", content=build_prompt(profile, exclude_texts)),
        ]
        provider, word = await self._first_valid("word generation", messages, True, parse_word_payload)
        word.provider = provider
        word.image_url = await self._image_for(word.word)
        return word

    async def contextual_sentences(self, item: WordBankItem, profile: Profile) -> List[str]:
        """Example sentences for a bank word, tailored to the profile."""
        messages = [LLMMessage(role="user", content=build_sentence_prompt(item, profile))]
        _, sentences = await self._first_valid("sentence generation", messages, False, parse_sentences)
        return sentences

    async def _first_valid(
        self,
        task: str,
        messages: List[LLMMessage],
        json_mode: bool,
        parse: Callable[[str, str], T],
    ) -> Tuple[str, T]:
        for provider in self.providers:
            if not provider.configured:
                logger.info("No credential for %s, skipping", provider.name)
                continue

            logger.info("Attempting %s with %s", task, provider.name)
            try:
                resp = await provider.chat(messages, json_mode=json_mode)
                result = parse(provider.name, resp.content)
            except ProviderError as exc:
                logger.warning("%s failed: %s", task.capitalize(), exc)
                continue
            except Exception as exc:
                logger.warning("%s failed: %s: %s: %s", task.capitalize(), provider.name, type(exc).__name__, exc)
                continue
            return provider.name, result

        raise NoProviderAvailable("All LLM providers failed")

    async def _image_for(self, word: str) -> str:
        if self.image_provider is None:
            return ""
        return await self.image_provider.find_image(word)


def build_word_generator(settings) -> AIWordGenerator:
    return AIWordGenerator(
        providers=build_default_providers(settings),
        image_provider=UnsplashImageProvider(
            access_key=settings.unsplash_access_key,
            api_url=settings.unsplash_api_url,
            timeout_sec=settings.image_timeout_sec,
        ),
    )
