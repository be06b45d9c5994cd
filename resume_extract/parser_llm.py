"""
LLM-based résumé structurer.

• One completion per request against the configured provider (OpenAI or
  Ollama), no retries and no cache.
• Skipped outright when no credential is configured.
• try_structure_resume() reports why a run produced nothing through
  StructurerResult; structure_resume() reduces that to record-or-None, so
  nothing raised in here ever reaches the pipeline.
"""

from __future__ import annotations
import json, logging, re, textwrap
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from .cleaner import clean_resume
from .config import Settings
from .errors import (
    CompletionError,
    MalformedCompletionError,
    MissingCredentialError,
    SchemaMismatchError,
    StructurerError,
)
from .llm_client import CompletionClient, CompletionOptions, get_llm_client
from .schema_resume import RESUME_SCHEMA, PartialResumeRecord, ResumeRecord

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = textwrap.dedent(
    """
    You are an expert résumé extractor. You return ONLY valid JSON that
    follows the requested schema exactly: no explanations, no extra keys.
    Read the résumé text carefully and extract the information precisely.
    """
).strip()

_USER_PROMPT = textwrap.dedent(
    """
    Extract the information from the following résumé and return ONLY a
    valid JSON object with exactly this shape:

    {schema}

    Rules:
    - Leave out any field you cannot find; never invent values.
    - "languages" items are "<language> - <level>" or just the language.
    - Keep lists in the order they appear in the résumé.

    Résumé text:
    \"\"\"{text}\"\"\"

    Reply with the JSON only.
    """
).strip()

_FENCED = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.S | re.I)
_JSON_FINDER = re.compile(r"\{.*\}", re.S)


@dataclass(frozen=True)
class StructurerResult:
    record: Optional[PartialResumeRecord] = None
    error: Optional[StructurerError] = None

    @property
    def ok(self) -> bool:
        return self.record is not None


def build_user_prompt(text: str, max_chars: int) -> str:
    return _USER_PROMPT.format(
        schema=json.dumps(RESUME_SCHEMA, indent=2, ensure_ascii=False),
        text=text[:max_chars],
    )


def _extract_json(raw: str) -> dict:
    """Fenced ```json block first, else the outermost {...} span."""
    m = _FENCED.search(raw or "")
    payload = m.group(1) if m else None
    if payload is None and (m := _JSON_FINDER.search(raw or "")):
        payload = m.group()
    if payload is None:
        raise MalformedCompletionError("no JSON object in completion")
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, RecursionError, ValueError) as e:
        raise MalformedCompletionError(f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedCompletionError(f"expected a JSON object, got {type(data).__name__}")
    return data


def parse_completion(raw: str) -> PartialResumeRecord:
    """Completion text → canonical partial record, or a StructurerError."""
    data = clean_resume(_extract_json(raw))
    try:
        record = ResumeRecord.model_validate(data)
    except ValidationError as e:
        raise SchemaMismatchError(str(e)) from e
    return record.to_dict()


def try_structure_resume(
    text: str, settings: Settings, client: CompletionClient | None = None
) -> StructurerResult:
    if not settings.llm_credential:
        return StructurerResult(
            error=MissingCredentialError(f"no credential for provider {settings.llm_provider!r}")
        )

    try:
        client = client or get_llm_client(settings)
        raw = client.complete(
            _SYSTEM_PROMPT,
            build_user_prompt(text, settings.llm_max_chars),
            CompletionOptions.from_settings(settings),
        )
    except Exception as e:  # transport, auth, timeout: all end the LLM stage
        return StructurerResult(error=CompletionError(f"{type(e).__name__}: {e}"))

    try:
        return StructurerResult(record=parse_completion(raw))
    except StructurerError as e:
        return StructurerResult(error=e)
    except Exception as e:
        return StructurerResult(error=MalformedCompletionError(f"{type(e).__name__}: {e}"))


def structure_resume(
    text: str, settings: Settings, client: CompletionClient | None = None
) -> Optional[PartialResumeRecord]:
    result = try_structure_resume(text, settings, client)
    if isinstance(result.error, MissingCredentialError):
        logger.debug("LLM structuring skipped: %s", result.error)
    elif result.error is not None:
        logger.warning("LLM structuring failed (%s): %s", type(result.error).__name__, result.error)
    return result.record
