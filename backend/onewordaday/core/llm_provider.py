from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List

import httpx

from .errors import ProviderError


@dataclass
class LLMMessage:
    role: str
    content: str


@dataclass
class LLMResponse:
    content: str
    raw: Any | None = None


class LLMProvider(ABC):
    """Abstract base class for any chat-completion backend."""

    name: str = "llm"

    @property
    def configured(self) -> bool:
        """False when the provider has no credential and should be skipped."""
        return True

    @abstractmethod
    async def chat(
        self,
        messages: List[LLMMessage],
        json_mode: bool = False,
    ) -> LLMResponse:
        ...


class OpenAICompatibleProvider(LLMProvider):
    """
    Provider speaking the OpenAI chat completions wire format
    (``POST .../chat/completions`` returning ``choices[0].message.content``).
    """

    def __init__(
        self,
        name: str,
        api_url: str,
        api_key: str | None,
        model: str,
        timeout_sec: float = 30.0,
        max_tokens: int = 1000,
        temperature: float = 0.7,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.name = name
        self.api_url = api_url
        self.api_key = api_key
        self.model = model
        self.timeout_sec = timeout_sec
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _payload(self, messages: List[LLMMessage], json_mode: bool) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}
        return payload

    async def chat(
        self,
        messages: List[LLMMessage],
        json_mode: bool = False,
    ) -> LLMResponse:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout_sec, transport=self._transport) as client:
                r = await client.post(self.api_url, json=self._payload(messages, json_mode), headers=headers)
            r.raise_for_status()
            data = r.json()
        except httpx.TimeoutException as exc:
            raise ProviderError(self.name, f"timed out after {self.timeout_sec}s") from exc
        except httpx.HTTPStatusError as exc:
            raise ProviderError(self.name, f"HTTP {exc.response.status_code}") from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise ProviderError(self.name, f"{type(exc).__name__}: {exc}") from exc

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ProviderError(self.name, "response has no message content") from exc
        if not content:
            raise ProviderError(self.name, "empty message content")

        return LLMResponse(content=content, raw=data)


def build_default_providers(settings) -> List[LLMProvider]:
    """Providers in priority order, built from settings."""
    return [
        OpenAICompatibleProvider(
            name="Groq",
            api_url=settings.groq_api_url,
            api_key=settings.groq_api_key,
            model=settings.groq_model,
            timeout_sec=settings.llm_timeout_sec,
            max_tokens=settings.llm_max_tokens,
            temperature=settings.llm_temperature,
        ),
    ]
