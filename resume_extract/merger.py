"""
Reconcile the rule-based and LLM records into one résumé.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, NamedTuple, Optional

from pydantic import ValidationError

from .schema_resume import PartialResumeRecord, ResumeRecord

logger = logging.getLogger(__name__)


class MergeOutcome(NamedTuple):
    record: Dict[str, Any]
    validated: bool
    errors: List[str]


def shallow_merge(
    heuristic: PartialResumeRecord, llm: Optional[PartialResumeRecord]
) -> Dict[str, Any]:
    """Top-level keys present in `llm` win; the rest come from `heuristic`."""
    merged: Dict[str, Any] = dict(heuristic)
    for key, value in (llm or {}).items():
        if value is not None:
            merged[key] = value
    return merged


def merge_and_validate(
    heuristic: PartialResumeRecord, llm: Optional[PartialResumeRecord]
) -> MergeOutcome:
    merged = shallow_merge(heuristic, llm)
    try:
        record = ResumeRecord.model_validate(merged)
    except ValidationError as e:
        errors = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        logger.warning("validation degraded, returning unvalidated merge: %s", errors)
        return MergeOutcome(merged, False, errors)
    return MergeOutcome(record.to_dict(), True, [])


def merge_records(
    heuristic: PartialResumeRecord, llm: Optional[PartialResumeRecord]
) -> Dict[str, Any]:
    return merge_and_validate(heuristic, llm).record
