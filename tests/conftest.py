"""
Pytest configuration and fixtures
"""
from __future__ import annotations

import os
from typing import List, Optional

import pytest

# keep a developer's .env / shell credentials out of the tests
os.environ["OPENAI_API_KEY"] = ""
os.environ["OLLAMA_BASE_URL"] = ""
os.environ["LLM_PROVIDER"] = "openai"

from resume_extract.config import Settings
from resume_extract.llm_client import CompletionClient, CompletionOptions


class FakeClient(CompletionClient):
    """Completion client that replays a canned reply or raises."""

    def __init__(self, reply: str = "", exc: Optional[BaseException] = None):
        self.reply = reply
        self.exc = exc
        self.calls: List[tuple] = []

    def complete(self, system_prompt: str, user_prompt: str, options: CompletionOptions) -> str:
        self.calls.append((system_prompt, user_prompt, options))
        if self.exc is not None:
            raise self.exc
        return self.reply


def _pdf_escape(s: str) -> str:
    return s.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def make_pdf(lines: List[str]) -> bytes:
    """A one-page Helvetica PDF showing `lines` (ASCII only)."""
    ops = ["BT", "/F1 12 Tf", "14 TL", "72 720 Td"]
    for ln in lines:
        ops.append(f"({_pdf_escape(ln)}) Tj T*")
    ops.append("ET")
    stream = "\n".join(ops).encode("latin-1") if lines else b""

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for i, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % i + body + b"\nendobj\n"

    xref_at = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for off in offsets:
        out += b"%010d 00000 n \n" % off
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_at
    return bytes(out)


@pytest.fixture
def settings():
    """No credential: the LLM stage is always skipped."""
    return Settings()


@pytest.fixture
def llm_settings():
    return Settings(openai_api_key="sk-test")


@pytest.fixture
def fake_client():
    return FakeClient


@pytest.fixture
def pdf_bytes():
    return make_pdf
