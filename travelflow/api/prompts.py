# travelflow/api/prompts.py
"""Prompt construction for itinerary generation and conversational edits."""

from __future__ import annotations

import json
from datetime import date
from typing import List

from travelflow.api.models import Itinerary, TripRequest

# ---------------------------------------------------------------------------
# Output-format directives
# ---------------------------------------------------------------------------

ITINERARY_FORMAT_DIRECTIVE = """응답은 반드시 아래 형식의 JSON 배열만 제공하고, 배열 앞뒤에 설명이나 다른 텍스트를 절대 추가하지 마세요:
[
  {
    "title": "1일차 - 일정 제목",
    "day": 1,
    "activities": [
      {
        "time": "09:00",
        "activity": "활동명",
        "location": "정확한 주소",
        "description": "활동 설명"
      }
    ]
  }
]"""

REVISION_FORMAT_DIRECTIVE = """응답은 다음 형식으로만 제공:

RESPONSE_START
{수정된 계획에 대한 간단한 설명}
JSON_START
[수정된 전체 여행 계획 JSON]
JSON_END
RESPONSE_END"""


def trip_day_count(start: date, end: date) -> int:
    """Number of calendar days covered by a trip, both ends inclusive."""
    return (end - start).days + 1


def _numbered_section(header: str, items: List[str]) -> List[str]:
    if not items:
        return []
    lines = [f"{header}:"]
    lines.extend(f"{i}. {item}" for i, item in enumerate(items, 1))
    lines.append("")
    return lines


def _format_number(value: float) -> str:
    return f"{value:g}"


def build_itinerary_prompt(request: TripRequest) -> str:
    """Turn a trip request into a single directive prompt."""
    days = trip_day_count(request.start_date, request.end_date)
    prefs = request.preferences

    lines = [
        "당신은 전문 여행 플래너입니다. 다음 조건에 맞는 여행 일정을 작성해주세요.",
        "",
        f"목적지: {request.destination}",
        f"여행 기간: {request.start_date.isoformat()} ~ {request.end_date.isoformat()} ({days}일)",
        f"여행자 수: {request.travelers}명",
    ]
    if request.interests.strip():
        lines.append(f"관심사 및 취향: {request.interests.strip()}")
    if request.budget is not None:
        lines.append(f"예산: {_format_number(request.budget)}만원")
    lines.append("")

    lines += _numbered_section("필수 방문 장소", prefs.must_visit_places)
    lines += _numbered_section("꼭 하고 싶은 활동", prefs.must_do_activities)
    lines += _numbered_section("피하고 싶은 장소", prefs.avoid_places)
    lines += _numbered_section("피하고 싶은 활동", prefs.avoid_activities)

    if prefs.max_walking_distance_km is not None:
        lines.append(f"최대 도보 거리: 하루 {_format_number(prefs.max_walking_distance_km)}km 이내")
    if prefs.budget_per_activity is not None:
        lines.append(f"활동당 예산: {_format_number(prefs.budget_per_activity)}원 이내")
    if prefs.max_walking_distance_km is not None or prefs.budget_per_activity is not None:
        lines.append("")

    lines += [
        f"총 {days}일 동안의 일정을 하루 단위로 작성하고, 각 활동의 장소는 지도에서 찾을 수 있는 정확한 주소로 적어주세요.",
        "",
        ITINERARY_FORMAT_DIRECTIVE,
    ]
    return "\n".join(lines)


def build_revision_prompt(itinerary: Itinerary, message: str) -> str:
    """Prompt asking the model to rewrite the current plan per a chat message."""
    current = json.dumps(itinerary.to_dicts(), ensure_ascii=False, indent=2)
    return f"""현재 여행 계획:
{current}

사용자 요청: "{message}"

위의 현재 여행 계획을 기반으로 사용자의 요청을 반영하여 계획을 수정해주세요.

다음 규칙을 따라주세요:
1. 사용자 요청을 분석하여 적절한 수정사항을 적용
2. 기존 계획의 구조와 형식을 유지
3. {REVISION_FORMAT_DIRECTIVE}

중요: 반드시 위 형식을 정확히 따라주세요.
"""


__all__ = [
    "trip_day_count",
    "build_itinerary_prompt",
    "build_revision_prompt",
]
