"""
Rule-based résumé parser.

Works without any model: contact fields come from regexes over the whole
text, list fields from header-delimited sections.  The function is pure,
the same text always yields the same record, and it never raises.
"""

from __future__ import annotations
import re, unicodedata
from typing import Iterable, List, Optional, Pattern, Sequence, Tuple, Union

from .cleaner import collapse, normalise_language, split_items
from .config import DEFAULT_LOCATIONS, DEFAULT_SECTION_HEADERS
from .schema_resume import PartialResumeRecord

EMAIL = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.I)
PHONE = re.compile(r"(?<!\d)\+?\d(?:[ \t]*\d){7,}(?![\dA-Za-z])")
URL = re.compile(r"https?://|www\.", re.I)
DATE = re.compile(r"\b\d{2}/\d{2}/\d{4}\b")

LABELLED_LOCATION = re.compile(
    r"^(?:ubicaci[oó]n|direcci[oó]n|domicilio|residencia|location|address)\s*:\s*(.+)$",
    re.I,
)
NAME_LINE = re.compile(r"^[^\W\d_]+(?:[ '.\-]+[^\W\d_]+){1,5}\.?$")
NOT_A_NAME = {"CURRICULUM VITAE", "CURRICULUM", "CV", "RESUME", "HOJA DE VIDA"}
NAME_PARTICLES = {"de", "del", "la", "las", "los", "y", "da", "van", "von"}

# field → section titles feeding it, in no particular order
LIST_SECTIONS = {
    "languages": ("IDIOMAS",),
    "skills": ("INFORMATICA", "HABILIDADES"),
}

Title = Union[str, Pattern[str]]


def fold(s: str) -> str:
    """Upper-case, trimmed, accents removed: 'Formación ' → 'FORMACION'."""
    decomposed = unicodedata.normalize("NFD", s.strip().upper())
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def _is_header(line: str, headers: Sequence[str]) -> bool:
    folded = fold(line)
    return any(folded.startswith(fold(h)) for h in headers)


def _matches_title(line: str, title: Title) -> bool:
    if isinstance(title, str):
        return fold(line).startswith(fold(title))
    return bool(title.search(line) or title.search(fold(line)))


def _find_section(
    lines: List[str], title: Title, headers: Sequence[str]
) -> Tuple[int, str, List[str]]:
    """(header index, text after 'TITLE:' on the header line, body lines)."""
    idx = next((i for i, ln in enumerate(lines) if _matches_title(ln, title)), -1)
    if idx == -1:
        return -1, "", []
    _, sep, rest = lines[idx].partition(":")
    inline = rest.strip() if sep else ""
    body = []
    for ln in lines[idx + 1:]:
        if _is_header(ln, headers):
            break
        body.append(ln)
    return idx, inline, body


def section(
    text: str, title: Title, headers: Sequence[str] = DEFAULT_SECTION_HEADERS
) -> str:
    """Lines strictly between the `title` header and the next known header."""
    _, _, body = _find_section(text.split("\n"), title, headers)
    return "\n".join(body).strip()


def _list_field(
    lines: List[str], titles: Iterable[str], headers: Sequence[str]
) -> List[str]:
    found = [_find_section(lines, t, headers) for t in titles]
    items: List[str] = []
    for idx, inline, body in sorted(f for f in found if f[0] != -1):
        items += split_items(inline, inline=True)
        items += split_items("\n".join(body).strip())
    return items


def _head(lines: List[str], headers: Sequence[str]) -> List[str]:
    """Lines above the first section header (the contact block)."""
    for i, ln in enumerate(lines):
        if _is_header(ln, headers):
            return lines[:i]
    return lines


def _capitalised(line: str) -> bool:
    words = re.split(r"[ \-]+", line)
    return words[0][:1].isupper() and all(
        w[:1].isupper() or w.lower() in NAME_PARTICLES for w in words
    )


def guess_name(lines: List[str], headers: Sequence[str]) -> Optional[str]:
    for ln in _head(lines, headers):
        ln = collapse(ln)
        if ln and NAME_LINE.match(ln) and _capitalised(ln) and fold(ln) not in NOT_A_NAME:
            return ln
    return None


def guess_location(
    lines: List[str], headers: Sequence[str], known: Sequence[str]
) -> Optional[str]:
    head = [collapse(ln) for ln in _head(lines, headers)]
    for ln in head:
        if m := LABELLED_LOCATION.match(ln):
            return collapse(m.group(1))
    for ln in head:
        if EMAIL.search(ln) or URL.search(ln):
            continue
        folded = fold(ln)
        if any(re.search(rf"\b{re.escape(fold(k))}\b", folded) for k in known):
            _, sep, rest = ln.partition(":")
            return collapse(rest) if sep and rest.strip() else ln
    return None


def parse_resume_rule(
    raw: str,
    section_headers: Sequence[str] = DEFAULT_SECTION_HEADERS,
    known_locations: Sequence[str] = DEFAULT_LOCATIONS,
) -> PartialResumeRecord:
    raw = raw or ""
    lines = raw.split("\n")
    out: PartialResumeRecord = {}

    if name := guess_name(lines, section_headers):
        out["name"] = name
    if m := EMAIL.search(raw):
        out["email"] = m.group()
    if m := PHONE.search(raw):
        out["phone"] = collapse(m.group())
    if loc := guess_location(lines, section_headers, known_locations):
        out["location"] = loc
    if m := DATE.search(raw):
        out["birthDate"] = m.group()

    out["languages"] = [
        normalise_language(x)
        for x in _list_field(lines, LIST_SECTIONS["languages"], section_headers)
    ]
    out["skills"] = _list_field(lines, LIST_SECTIONS["skills"], section_headers)
    return out
