"""
Document ➜ raw text
– PDFs go through pdfplumber, `(cid:N)` glyph artifacts are stripped
– plain-text uploads are decoded as UTF-8
– suppresses verbose CropBox warnings from pdfplumber/pdfminer
"""
from __future__ import annotations
from io import BytesIO
from pathlib import Path
import re, logging, warnings, pdfplumber

from .errors import ExtractionError

# silence noisy PDF logging
logging.getLogger("pdfplumber").setLevel(logging.ERROR)
logging.getLogger("pdfminer").setLevel(logging.ERROR)
warnings.filterwarnings("ignore", category=UserWarning, module="pdfminer")

logger = logging.getLogger(__name__)

_CID_RE = re.compile(r"\(cid:\d+\)")
_PDF_MAGIC = b"%PDF-"


def _pages_to_text(pdf) -> str:
    pages = [p.extract_text() or "" for p in pdf.pages]
    return _CID_RE.sub("", "\n".join(pages))


def pdf_to_text(pdf_path: str | Path) -> str:
    with pdfplumber.open(pdf_path) as pdf:
        return _pages_to_text(pdf)


def pdf_bytes_to_text(data: bytes) -> str:
    """Decode PDF bytes; raises ExtractionError on anything pdfplumber rejects."""
    try:
        with pdfplumber.open(BytesIO(data)) as pdf:
            return _pages_to_text(pdf)
    except Exception as e:
        logger.info("PDF decode failed: %s", e)
        raise ExtractionError(str(e) or type(e).__name__) from e


def _is_text(data: bytes, content_type: str | None) -> bool:
    if data.startswith(_PDF_MAGIC):
        return False
    return bool(content_type) and content_type.split(";")[0].strip().lower().startswith("text/")


def document_to_text(data: bytes, content_type: str | None = None) -> str:
    """Uploaded bytes → text.  "" means decoded but empty, never failure."""
    if _is_text(data, content_type):
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ExtractionError(f"texto no es UTF-8 válido: {e}") from e
    return pdf_bytes_to_text(data)
