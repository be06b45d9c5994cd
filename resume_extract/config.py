"""
Configuration settings for the resume_extract service.

Values come from the environment (a local .env file is honoured).  The
pipeline never reads os.environ itself: callers build a Settings with
load_settings() and pass it down, so tests can hand in their own.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Tuple

from dotenv import load_dotenv

load_dotenv()          # ← must be before os.getenv(...)

# Model Configuration
# For OpenAI: "gpt-4o-mini", "gpt-4o", ...
# For Ollama: "llama3.1", "mistral", ...
DEFAULT_MODEL = {
    "openai": "gpt-4o-mini",
    "ollama": "llama3.1",
}

# Section headings recognised by the rule parser (Spanish CV conventions)
DEFAULT_SECTION_HEADERS: Tuple[str, ...] = (
    "EXPERIENCIA",
    "FORMACIÓN",
    "IDIOMAS",
    "INFORMATICA",
    "OTROS",
    "HABILIDADES",
)

DEFAULT_LOCATIONS: Tuple[str, ...] = (
    "Madrid",
    "Barcelona",
    "Valencia",
    "Sevilla",
    "Zaragoza",
    "Málaga",
    "Bilbao",
    "Valladolid",
    "Las Rozas",
)

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


def _csv(raw: str | None, default: Tuple[str, ...]) -> Tuple[str, ...]:
    if not raw:
        return default
    items = tuple(x.strip() for x in raw.split(",") if x.strip())
    return items or default


@dataclass(frozen=True)
class Settings:
    llm_provider: str = "openai"
    llm_model: str | None = None
    openai_api_key: str | None = None
    ollama_base_url: str | None = None
    llm_temperature: float = 0.1
    llm_max_tokens: int = 2000
    llm_timeout: float = 60.0
    llm_max_chars: int = 3000
    section_headers: Tuple[str, ...] = DEFAULT_SECTION_HEADERS
    known_locations: Tuple[str, ...] = DEFAULT_LOCATIONS
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    @property
    def model(self) -> str:
        return self.llm_model or get_model_for_provider(self.llm_provider)

    @property
    def llm_credential(self) -> str | None:
        """The value that enables the completion service, if any."""
        if self.llm_provider == "ollama":
            return self.ollama_base_url or None
        return self.openai_api_key or None


def load_settings() -> Settings:
    """Build Settings from the current environment."""
    return Settings(
        llm_provider=os.getenv("LLM_PROVIDER", "openai").strip().lower(),
        llm_model=os.getenv("LLM_MODEL") or None,
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        ollama_base_url=os.getenv("OLLAMA_BASE_URL") or None,
        llm_temperature=float(os.getenv("LLM_TEMPERATURE", "0.1")),
        llm_max_tokens=int(os.getenv("LLM_MAX_TOKENS", "2000")),
        llm_timeout=float(os.getenv("LLM_TIMEOUT", "60")),
        llm_max_chars=int(os.getenv("LLM_MAX_CHARS", "3000")),
        section_headers=_csv(os.getenv("SECTION_HEADERS"), DEFAULT_SECTION_HEADERS),
        known_locations=_csv(os.getenv("KNOWN_LOCATIONS"), DEFAULT_LOCATIONS),
        max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(DEFAULT_MAX_UPLOAD_BYTES))),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        api_host=os.getenv("API_HOST", "0.0.0.0"),
        api_port=int(os.getenv("API_PORT", "8000")),
    )


def get_model_for_provider(provider: str | None = None) -> str:
    """Get the default model for the specified provider."""
    provider = provider or os.getenv("LLM_PROVIDER", "openai")
    return DEFAULT_MODEL.get(provider, "gpt-4o-mini")


def configure_logging(level: str = "INFO") -> None:
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # noisy libraries
    logging.getLogger("pdfplumber").setLevel(logging.ERROR)
    logging.getLogger("pdfminer").setLevel(logging.ERROR)
    if level.upper() != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)
