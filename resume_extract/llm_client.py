"""
LLM client abstraction layer to support multiple providers.

The structurer only needs one capability, complete(system, user, options)
returning the raw completion text, so both OpenAI and Ollama sit behind the
same small interface and tests can substitute a fake.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List

import ollama
from openai import OpenAI

from .config import Settings


@dataclass(frozen=True)
class CompletionOptions:
    model: str
    temperature: float = 0.1
    max_tokens: int = 2000
    json_mode: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionOptions":
        return cls(
            model=settings.model,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
        )


def _messages(system_prompt: str, user_prompt: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]


class CompletionClient(ABC):
    """Abstract base class for LLM clients."""

    @abstractmethod
    def complete(self, system_prompt: str, user_prompt: str, options: CompletionOptions) -> str:
        """Send one completion request and return the raw text."""


class OllamaClient(CompletionClient):
    """Ollama client implementation."""

    def __init__(self, host: str, timeout: float | None = None):
        self.client = ollama.Client(host=host, timeout=timeout)

    def complete(self, system_prompt: str, user_prompt: str, options: CompletionOptions) -> str:
        response = self.client.chat(
            model=options.model,
            messages=_messages(system_prompt, user_prompt),
            format="json" if options.json_mode else None,
            options={"temperature": options.temperature, "num_predict": options.max_tokens},
        )
        return response.message.content or ""


class OpenAIClient(CompletionClient):
    """OpenAI client implementation."""

    def __init__(self, api_key: str, timeout: float | None = None):
        if not api_key:
            raise ValueError("OpenAI API key is required. Set OPENAI_API_KEY environment variable.")
        self.client = OpenAI(api_key=api_key, timeout=timeout)

    def complete(self, system_prompt: str, user_prompt: str, options: CompletionOptions) -> str:
        kwargs = {}
        if options.json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        response = self.client.chat.completions.create(
            model=options.model,
            messages=_messages(system_prompt, user_prompt),
            temperature=options.temperature,
            max_tokens=options.max_tokens,
            **kwargs,
        )
        return response.choices[0].message.content or ""


def get_llm_client(settings: Settings) -> CompletionClient:
    """Factory function to get the appropriate LLM client based on configuration."""
    provider = settings.llm_provider
    if provider == "openai":
        return OpenAIClient(settings.openai_api_key or "", timeout=settings.llm_timeout)
    elif provider == "ollama":
        return OllamaClient(settings.ollama_base_url or "", timeout=settings.llm_timeout)
    else:
        raise ValueError(f"Unsupported LLM provider: {provider}")
