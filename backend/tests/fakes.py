import json
from datetime import date
from typing import List, Union

from onewordaday.core.ai_generator import AIWordGenerator
from onewordaday.core.errors import ProviderError
from onewordaday.core.llm_provider import LLMMessage, LLMProvider, LLMResponse

TODAY = date(2024, 3, 20)


class FakeProvider(LLMProvider):
    """Scripted provider: each call pops the next reply (a string or an exception)."""

    def __init__(self, name: str, replies: List[Union[str, Exception]], configured: bool = True):
        self.name = name
        self.replies = list(replies)
        self._configured = configured
        self.calls: List[List[LLMMessage]] = []

    @property
    def configured(self) -> bool:
        return self._configured

    async def chat(self, messages, json_mode=False):
        self.calls.append(messages)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return LLMResponse(content=reply)


def word_json(word="ephemeral", **overrides) -> str:
    payload = {
        "word": word,
        "definition": "Lasting for a very short time.",
        "partOfSpeech": "adjective",
        "pronunciation": "/əˈfem(ə)rəl/",
        "syllables": "e-phem-er-al",
        "difficulty": 4,
        "sentences": [
            f"The beauty of the sunset was {word}.",
            f"Fame can be {word}.",
            f"Mayflies are {word} creatures.",
        ],
        "synonyms": ["fleeting", "transient"],
        "antonyms": ["permanent"],
    }
    payload.update(overrides)
    return json.dumps(payload)


def ai_generator(*providers) -> AIWordGenerator:
    return AIWordGenerator(providers=list(providers))


def provider_error(name="Groq", message="boom") -> ProviderError:
    return ProviderError(name, message)
