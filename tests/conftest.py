import os
import sys
from unittest.mock import MagicMock

import pytest

# Project root, so the package imports without an editable install.
_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _root not in sys.path:
    sys.path.insert(0, _root)

from travelflow.api import geocoding
from travelflow.api.models import Itinerary
from travelflow.api.storage import MemoryStore


@pytest.fixture(autouse=True)
def no_credentials(monkeypatch):
    """Tests never talk to real Google or Gemini endpoints."""
    monkeypatch.delenv("GOOGLE_MAPS_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("GEOCODE_DELAY_SECONDS", "0")
    geocoding.set_api_key(None)
    yield
    geocoding.set_api_key(None)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def raw_days():
    """Two days in the shape the model is asked to produce."""
    return [
        {
            "title": "1일차 - 도착",
            "day": 1,
            "activities": [
                {"time": "09:00", "activity": "경복궁 관람", "location": "서울 종로구 사직로 161", "description": "궁궐 산책"},
                {"time": "12:00", "activity": "광장시장 점심", "location": "서울 종로구 창경궁로 88", "description": "빈대떡"},
            ],
        },
        {
            "title": "2일차 - 남산",
            "day": 2,
            "activities": [
                {"time": "10:00", "activity": "N서울타워", "location": "서울 용산구 남산공원길 105", "description": "전망대"},
            ],
        },
    ]


@pytest.fixture
def itinerary(raw_days):
    return Itinerary.from_model_days(raw_days)


@pytest.fixture
def trip_form():
    return {
        "destination": "서울",
        "startDate": "2024-03-15",
        "endDate": "2024-03-18",
        "travelers": 2,
        "interests": "음식, 역사",
        "budget": 100,
        "preferences": {
            "mustVisitPlaces": ["경복궁", "남산타워"],
            "mustDoActivities": [],
            "avoidPlaces": [],
            "avoidActivities": ["쇼핑"],
        },
    }


@pytest.fixture
def fake_client():
    """Stand-in for GeminiClient; set ``generate_text`` per test."""
    return MagicMock()
