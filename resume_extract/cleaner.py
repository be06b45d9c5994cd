"""
Shared clean-ups and schema normalisation.
"""
from __future__ import annotations
import re, unicodedata
from typing import Any, Dict, List

_WS = re.compile(r"\s+")
_ITEM_SPLIT = re.compile(r"\n|•")
_BULLET = re.compile(r"^[\-–*•·]+\s*")
_LANG_PAREN = re.compile(r"^(?P<lang>[^():]+?)\s*\((?P<level>[^()]+)\)$")
_LANG_COLON = re.compile(r"^(?P<lang>[^():]+?)\s*:\s*(?P<level>.+)$")


# ───────────────────────────────────────── helpers ──
def collapse(s: str | None) -> str:
    """Trim and squeeze internal whitespace."""
    return _WS.sub(" ", unicodedata.normalize("NFC", s or "")).strip()


def split_items(block: str, inline: bool = False) -> List[str]:
    """Turn a section block into list items.

    Lines and `•` separate items; a leading dash is a bullet marker, but an
    inner " - " is kept so "Inglés - Medio" stays whole.  A one-line block
    (e.g. text after "IDIOMAS:") is a comma list.
    """
    parts = _ITEM_SPLIT.split(block or "")
    if inline:
        parts = [p for part in parts for p in part.split(",")]
    items = [collapse(_BULLET.sub("", collapse(p))) for p in parts]
    return [x for x in items if x]


def normalise_language(item: str) -> str:
    """'Inglés (Medio)' / 'Inglés: Medio' → 'Inglés - Medio'."""
    item = collapse(item)
    for pat in (_LANG_PAREN, _LANG_COLON):
        if m := pat.match(item):
            return f"{m['lang'].strip()} - {m['level'].strip()}"
    return item


def _clean_value(v: Any) -> Any:
    """Trimmed copy of v, or None when nothing is left."""
    if isinstance(v, str):
        return collapse(v) or None
    if isinstance(v, dict):
        d = {k: c for k, c in ((k, _clean_value(x)) for k, x in v.items()) if c is not None}
        return d or None
    if isinstance(v, list):
        return [c for c in (_clean_value(x) for x in v) if c is not None]
    return v


# ───────────────────────────────────────── cleaner ──
def clean_resume(r: Dict[str, Any]) -> Dict[str, Any]:
    """Trim strings and drop empty values throughout a record.

    An empty string means "not found", so it must not mask a value another
    parser did find.  Empty lists stay: they are a real answer.
    Works on canonical or Spanish keys alike.
    """
    out: Dict[str, Any] = {}
    for key, value in r.items():
        value = _clean_value(value)
        if value is None:
            continue
        if key in ("languages", "idiomas") and isinstance(value, list):
            value = [normalise_language(x) if isinstance(x, str) else x for x in value]
        out[key] = value
    return out
