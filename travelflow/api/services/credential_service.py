# travelflow/api/services/credential_service.py
"""Runtime management of the Gemini and Google Maps API keys.

Keys saved here are kept as plain strings under separate store keys and
take precedence over the environment (GEMINI_API_KEY, GOOGLE_MAPS_API_KEY).
Clearing them falls back to the environment again.
"""

import logging
from typing import Dict

from travelflow.api import geocoding
from travelflow.api.config import get_gemini_api_key, get_google_maps_config
from travelflow.api.errors import ValidationError
from travelflow.api.llm import GeminiClient
from travelflow.api.storage import GEMINI_KEY_KEY, MAPS_KEY_KEY

logger = logging.getLogger(__name__)


class CredentialService:
    """Stores, resolves and clears the two upstream API keys."""

    def __init__(self, store):
        self.store = store

    def stored_keys(self) -> Dict[str, str]:
        return {
            "gemini": self.store.get(GEMINI_KEY_KEY) or "",
            "maps": self.store.get(MAPS_KEY_KEY) or "",
        }

    def gemini_key(self) -> str:
        return self.stored_keys()["gemini"] or get_gemini_api_key()

    def maps_key(self) -> str:
        return self.stored_keys()["maps"] or get_google_maps_config()["api_key"]

    def save(self, gemini_key: str, maps_key: str) -> Dict[str, bool]:
        """Save both keys; either one missing is rejected and nothing is saved."""
        gemini_key = (gemini_key or "").strip()
        maps_key = (maps_key or "").strip()
        if not gemini_key or not maps_key:
            raise ValidationError("모든 API 키를 입력해주세요!")

        self.store.update({GEMINI_KEY_KEY: gemini_key, MAPS_KEY_KEY: maps_key})
        geocoding.set_api_key(maps_key)
        logger.info("Saved API keys (gemini=%s..., maps=%s...)", gemini_key[:4], maps_key[:4])
        return self.status()

    def clear(self) -> Dict[str, bool]:
        self.store.delete(GEMINI_KEY_KEY)
        self.store.delete(MAPS_KEY_KEY)
        geocoding.set_api_key(None)
        logger.info("Cleared saved API keys")
        return self.status()

    def apply(self) -> None:
        """Point the Maps client at the saved key (called once at start-up)."""
        maps_key = self.stored_keys()["maps"]
        if maps_key:
            geocoding.set_api_key(maps_key)

    def status(self) -> Dict[str, bool]:
        stored = self.stored_keys()
        return {
            "saved": bool(stored["gemini"] and stored["maps"]),
            "gemini_configured": bool(self.gemini_key()),
            "maps_configured": bool(self.maps_key()),
        }

    def client_factory(self) -> GeminiClient:
        """Gemini client using the saved key, else the environment's."""
        return GeminiClient.from_env(api_key=self.gemini_key())


__all__ = ["CredentialService"]
