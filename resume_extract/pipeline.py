"""
One extraction request end to end:

    bytes → text → {rule parser, LLM structurer} → merge/validate → record
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict

from .config import Settings
from .errors import EmptyTextError
from .extractor import document_to_text
from .llm_client import CompletionClient
from .merger import merge_and_validate
from .parser_llm import structure_resume
from .parser_rule import parse_resume_rule

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 1500


@dataclass(frozen=True)
class ExtractionResult:
    summary: Dict[str, Any]
    raw_text: str
    validated: bool = True
    llm_used: bool = False

    @property
    def raw_text_preview(self) -> str:
        return self.raw_text[:PREVIEW_CHARS]

    def to_response(self) -> Dict[str, Any]:
        return {"ok": True, "summary": self.summary, "rawTextPreview": self.raw_text_preview}


def extract_from_text(
    text: str,
    settings: Settings,
    use_llm: bool = False,
    client: CompletionClient | None = None,
) -> ExtractionResult:
    if not text or not text.strip():
        raise EmptyTextError("El archivo PDF parece estar vacío o no contiene texto extraíble")

    base = parse_resume_rule(text, settings.section_headers, settings.known_locations)
    enriched = structure_resume(text, settings, client) if use_llm else None

    outcome = merge_and_validate(base, enriched)
    logger.info(
        "extracted résumé: %d chars, llm=%s, validated=%s",
        len(text), enriched is not None, outcome.validated,
    )
    return ExtractionResult(
        summary=outcome.record,
        raw_text=text,
        validated=outcome.validated,
        llm_used=enriched is not None,
    )


def extract_resume(
    data: bytes,
    settings: Settings,
    use_llm: bool = False,
    content_type: str | None = None,
    client: CompletionClient | None = None,
) -> ExtractionResult:
    text = document_to_text(data, content_type)
    return extract_from_text(text, settings, use_llm=use_llm, client=client)
