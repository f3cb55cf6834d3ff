"""Turn raw model output into the response payloads.

Model output is free text that is usually, not always, the JSON we asked
for. Anything that does not parse into the expected top-level shape is
replaced by a single fallback entry so the endpoint can still answer.
"""
import json
import logging
import re
from typing import Any, Dict

from domain.errors import ResponseParseFailed
from domain.schemas import GeneratedCV, RankingRecord

logger = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_CODE_FENCE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.S | re.I)

NOT_PROVIDED = "Not provided"


def strip_control_chars(text: str) -> str:
    return _CONTROL_CHARS.sub("", text or "")


def _unwrap_code_fence(text: str) -> str:
    m = _CODE_FENCE.match(text)
    return m.group(1) if m else text


def parse_structured(cleaned: str, key: str) -> Dict[str, Any]:
    try:
        data = json.loads(_unwrap_code_fence(cleaned))
    except json.JSONDecodeError as exc:
        raise ResponseParseFailed(f"model response was not valid JSON: {exc}") from exc
    if not isinstance(data, dict) or not isinstance(data.get(key), list):
        raise ResponseParseFailed(f"model response has no '{key}' list")
    return data


def fallback_rankings() -> Dict[str, Any]:
    record = RankingRecord(
        filename="Error parsing AI response",
        candidateName=NOT_PROVIDED,
        phone=NOT_PROVIDED,
        email=NOT_PROVIDED,
        score=0,
        explanation="There was an error parsing the AI response. Please try again.",
        advantages=[],
        disadvantages=[],
    )
    return {"rankings": [record.model_dump()]}


def fallback_cvs(cleaned: str) -> Dict[str, Any]:
    return {"cvs": [GeneratedCV(title="Generated CV", content=cleaned).model_dump()]}


def normalize_rankings(raw_text: str) -> Dict[str, Any]:
    cleaned = strip_control_chars(raw_text)
    try:
        return parse_structured(cleaned, "rankings")
    except ResponseParseFailed as exc:
        logger.error("Ranking response unusable (%s). Response content: %s", exc, cleaned)
        return fallback_rankings()


def normalize_cvs(raw_text: str) -> Dict[str, Any]:
    cleaned = strip_control_chars(raw_text)
    try:
        return parse_structured(cleaned, "cvs")
    except ResponseParseFailed as exc:
        logger.error("Generation response unusable (%s). Response content: %s", exc, cleaned)
        return fallback_cvs(cleaned)
