# travelflow/api/storage.py
"""Key-value persistence for itineraries, recommendations and boards.

The core planning code is storage-agnostic; services receive one of the
repositories below and call ``load`` / ``save``.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
import uuid
from typing import Any, Dict, Optional, Protocol

from flask import session

from travelflow.api.models import Itinerary

logger = logging.getLogger(__name__)

ITINERARY_KEY = "travel_plans"
USER_RECOMMENDATIONS_KEY = "user_recommendations"
LIKES_KEY = "recommendation_likes"
MY_PLANS_KEY = "my_travel_plans"
GEMINI_KEY_KEY = "gemini_api_key"
MAPS_KEY_KEY = "google_maps_api_key"
COLLABORATION_KEY = "collaboration:{plan_id}"
SESSION_SCOPE_KEY = "travelflow_sid"


class ItineraryRepository(Protocol):
    def scope(self) -> str:
        """Identifies the stored plan; plans with different scopes are independent."""
        ...

    def load(self) -> Optional[Itinerary]:
        ...

    def save(self, itinerary: Itinerary) -> None:
        ...

    def clear(self) -> None:
        ...


class JsonFileStore:
    """A JSON object on disk used as a small key-value store."""

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.RLock()

    def _read_all(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            logger.error(f"Could not read store at {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Store at {self.path} is not a JSON object; ignoring it")
            return {}
        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            fh = os.fdopen(fd, "w", encoding="utf-8")
        except BaseException:
            os.close(fd)
            os.unlink(tmp_path)
            raise
        try:
            with fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._read_all().get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            self._write_all(data)

    def update(self, values: Dict[str, Any]) -> None:
        """Set several keys in one write."""
        with self._lock:
            data = self._read_all()
            data.update(values)
            self._write_all(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._read_all()
            if data.pop(key, None) is not None:
                self._write_all(data)


class MemoryStore:
    """In-process stand-in for JsonFileStore (tests, throwaway sessions)."""

    def __init__(self):
        self._data: Dict[str, str] = {}
        self._lock = threading.RLock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            raw = self._data.get(key)
        # stored as JSON text so callers never share mutable state
        return default if raw is None else json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = json.dumps(value, ensure_ascii=False)

    def update(self, values: Dict[str, Any]) -> None:
        encoded = {k: json.dumps(v, ensure_ascii=False) for k, v in values.items()}
        with self._lock:
            self._data.update(encoded)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)


def _itinerary_from_blob(blob: Any) -> Optional[Itinerary]:
    if blob is None:
        return None
    if not isinstance(blob, list):
        logger.error("Stored itinerary is not a list; ignoring it")
        return None
    try:
        return Itinerary.from_dicts(blob)
    except (TypeError, ValueError) as e:
        logger.error(f"Failed to load stored itinerary: {e}")
        return None


class StoreItineraryRepository:
    """Keeps the itinerary under one key of a key-value store."""

    def __init__(self, store, key: str = ITINERARY_KEY):
        self.store = store
        self.key = key

    def scope(self) -> str:
        return self.key

    def load(self) -> Optional[Itinerary]:
        return _itinerary_from_blob(self.store.get(self.key))

    def save(self, itinerary: Itinerary) -> None:
        self.store.set(self.key, itinerary.to_dicts())
        logger.debug(f"Saved itinerary with {len(itinerary)} days under '{self.key}'")

    def clear(self) -> None:
        self.store.delete(self.key)


class SessionItineraryRepository:
    """Keeps the itinerary in the Flask session cookie of the current client."""

    def __init__(self, key: str = ITINERARY_KEY):
        self.key = key

    def scope(self) -> str:
        sid = session.get(SESSION_SCOPE_KEY)
        if not sid:
            sid = session[SESSION_SCOPE_KEY] = uuid.uuid4().hex
        return f"session:{sid}"

    def load(self) -> Optional[Itinerary]:
        return _itinerary_from_blob(session.get(self.key))

    def save(self, itinerary: Itinerary) -> None:
        session[self.key] = itinerary.to_dicts()
        session.modified = True

    def clear(self) -> None:
        session.pop(self.key, None)
        session.modified = True


__all__ = [
    "ItineraryRepository",
    "JsonFileStore",
    "MemoryStore",
    "StoreItineraryRepository",
    "SessionItineraryRepository",
    "ITINERARY_KEY",
    "USER_RECOMMENDATIONS_KEY",
    "LIKES_KEY",
    "MY_PLANS_KEY",
    "GEMINI_KEY_KEY",
    "MAPS_KEY_KEY",
    "COLLABORATION_KEY",
    "SESSION_SCOPE_KEY",
]
