# travelflow/api/parsing.py
"""Decoders for the text the model sends back.

Two contracts live here:

* ``decode_itinerary_reply`` handles the primary generation reply. The model
  is told to answer with a bare JSON array but routinely wraps it in a code
  fence or adds commentary. The decoder tries the fenced block, then the
  outermost ``[ ... ]`` span, and finally substitutes a one-day fallback
  itinerary. It never raises.
* ``parse_revision_reply`` handles conversational edits. The reply must use
  the ``RESPONSE_START`` / ``JSON_START`` envelope; anything else raises
  ``ReplyFormatError`` so the caller keeps the previous plan.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from travelflow.api.errors import ReplyFormatError

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_FALLBACK = "fallback"

DEFAULT_REVISION_SUMMARY = "AI가 계획을 수정했습니다."

_FENCED_JSON = re.compile(r"```json\s*([\s\S]*?)\s*```")
_RESPONSE_ENVELOPE = re.compile(r"RESPONSE_START\s*([\s\S]*?)\s*RESPONSE_END")
_JSON_ENVELOPE = re.compile(r"JSON_START\s*([\s\S]*?)\s*JSON_END")
_SUMMARY = re.compile(r"^([\s\S]*?)\s*JSON_START")


@dataclass
class DecodeResult:
    """Outcome of decoding a generation reply."""

    status: str
    days: List[Dict[str, Any]] = field(default_factory=list)
    reason: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.status == STATUS_FALLBACK


@dataclass
class PlanRevision:
    """A conversational edit: the change summary plus the full new plan."""

    summary: str
    days: List[Dict[str, Any]]


def fallback_itinerary(destination: str) -> List[Dict[str, Any]]:
    """The synthetic one-day plan used when a reply cannot be decoded."""
    return [{
        "title": "1일차",
        "day": 1,
        "activities": [{
            "time": "09:00",
            "activity": "여행 시작",
            "location": destination,
            "description": "AI 응답을 처리하는 중 오류가 발생했습니다. 일정을 직접 수정하거나 다시 생성해주세요.",
        }],
    }]


def _extract_payload(text: str) -> Optional[str]:
    fenced = _FENCED_JSON.search(text)
    if fenced:
        return fenced.group(1)

    start = text.find("[")
    end = text.rfind("]")
    if start != -1 and end > start:
        return text[start:end + 1]
    return None


def _is_day(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get("activities"), list)


def decode_itinerary_reply(text: Any, destination: str = "") -> DecodeResult:
    """Recover the array-of-days payload from a generation reply."""
    reason = None
    try:
        payload = _extract_payload(text)
        if payload is None:
            reason = "no JSON array found in reply"
        else:
            decoded = json.loads(payload)
            if not isinstance(decoded, list):
                reason = f"expected a JSON array, got {type(decoded).__name__}"
            else:
                days = [d for d in decoded if _is_day(d)]
                if days:
                    return DecodeResult(status=STATUS_OK, days=days)
                reason = "JSON array holds no day objects with an activities list"
    except (TypeError, ValueError) as exc:
        # json.JSONDecodeError is a ValueError; TypeError covers non-str input
        reason = f"could not decode reply: {exc}"

    logger.warning("Falling back to a one-day itinerary for %r: %s", destination, reason)
    return DecodeResult(status=STATUS_FALLBACK, days=fallback_itinerary(destination), reason=reason)


def parse_itinerary_reply(text: Any, destination: str = "") -> List[Dict[str, Any]]:
    """Shorthand for ``decode_itinerary_reply(...).days``."""
    return decode_itinerary_reply(text, destination).days


def parse_revision_reply(text: str) -> PlanRevision:
    """Strictly decode a conversational-edit reply.

    Raises:
        ReplyFormatError: if either envelope is missing or the plan JSON is
            invalid.
    """
    if not isinstance(text, str):
        raise ReplyFormatError("Reply is not text")

    response = _RESPONSE_ENVELOPE.search(text)
    if not response:
        raise ReplyFormatError("응답 형식이 올바르지 않습니다. (RESPONSE_START/RESPONSE_END 누락)")
    content = response.group(1)

    json_block = _JSON_ENVELOPE.search(content)
    if not json_block:
        raise ReplyFormatError("JSON 데이터를 찾을 수 없습니다. (JSON_START/JSON_END 누락)")

    summary_match = _SUMMARY.search(content)
    summary = summary_match.group(1).strip() if summary_match else ""

    try:
        days = json.loads(json_block.group(1).strip())
    except ValueError as exc:
        logger.error("Revision reply carried invalid JSON: %s", exc)
        raise ReplyFormatError(f"수정된 계획 JSON을 해석할 수 없습니다: {exc}") from exc

    if not isinstance(days, list):
        raise ReplyFormatError("수정된 계획은 JSON 배열이어야 합니다.")

    return PlanRevision(summary=summary or DEFAULT_REVISION_SUMMARY, days=days)


__all__ = [
    "DecodeResult",
    "PlanRevision",
    "decode_itinerary_reply",
    "parse_itinerary_reply",
    "parse_revision_reply",
    "fallback_itinerary",
]
