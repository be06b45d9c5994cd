"""
Exception hierarchy for the extraction service.

ResumeExtractError subclasses that reach the HTTP layer become 4xx JSON
responses; StructurerError subclasses never leave parser_llm.
"""

from __future__ import annotations

from typing import Any


class ResumeExtractError(Exception):
    """Base class for errors raised by resume_extract."""

    status_code = 500
    message = "Error interno del servidor"

    def __init__(self, details: Any = None, message: str | None = None):
        self.details = details
        if message is not None:
            self.message = message
        super().__init__(self.message if details is None else f"{self.message}: {details}")


class UploadError(ResumeExtractError):
    status_code = 400
    message = "file requerido"


class ExtractionError(ResumeExtractError):
    """The uploaded bytes could not be decoded as a document."""

    status_code = 400
    message = "Error al extraer texto del PDF"


DecodeError = ExtractionError


class EmptyTextError(ResumeExtractError):
    """The document decoded fine but carries no usable text."""

    status_code = 400
    message = "No se pudo extraer texto del PDF"


# ───────────────────────────────────────── structurer ──
class StructurerError(Exception):
    """Any reason the LLM stage produced no record."""


class MissingCredentialError(StructurerError):
    pass


class CompletionError(StructurerError):
    """Transport or service failure while calling the completion API."""


class MalformedCompletionError(StructurerError):
    """The completion carried no parseable JSON object."""


class SchemaMismatchError(StructurerError):
    """The completion JSON does not fit the résumé schema."""
