"""LLM helper functions for TravelFlow.

Generates itineraries through the Gemini ``generateContent`` REST endpoint
and applies conversational edits to an existing plan. Transport failures are
classified by status code (see ``travelflow.api.errors``); nothing here
retries, the user re-triggers the action instead.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from travelflow.api.config import GEMINI_API_URL, get_gemini_api_key, get_gemini_config
from travelflow.api.errors import (
    ConnectivityError,
    MissingCredentialError,
    ReplyFormatError,
    classify_status,
)
from travelflow.api.models import Itinerary, TripRequest
from travelflow.api.parsing import (
    DecodeResult,
    PlanRevision,
    decode_itinerary_reply,
    parse_revision_reply,
)
from travelflow.api.prompts import build_itinerary_prompt, build_revision_prompt

logger = logging.getLogger(__name__)


class GeminiClient:
    """Thin wrapper around the Gemini REST API."""

    def __init__(self, api_key: str, model: str = "gemini-1.5-flash",
                 generation_config: Optional[Dict[str, Any]] = None,
                 timeout: float = 60.0,
                 session: Optional[requests.Session] = None):
        self.api_key = (api_key or "").strip()
        self.model = model
        self.generation_config = dict(generation_config or {})
        self.timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_env(cls, api_key: Optional[str] = None) -> "GeminiClient":
        """Build a client from the environment; an explicit key wins."""
        cfg = get_gemini_config()
        return cls(
            api_key=api_key if api_key is not None else get_gemini_api_key(),
            model=cfg["model"],
            generation_config=cfg["generation"],
            timeout=cfg["timeout"],
        )

    @property
    def endpoint(self) -> str:
        return GEMINI_API_URL.format(model=self.model)

    def generate_text(self, prompt: str, **overrides) -> str:
        """Send one prompt and return the text of the first candidate.

        Args:
            prompt: Full prompt text
            **overrides: generationConfig values to override for this call

        Returns:
            The model's reply text

        Raises:
            MissingCredentialError: no API key configured
            LLMError: non-2xx status or network failure, classified by cause
            ReplyFormatError: 2xx response without a candidate text
        """
        if not self.api_key:
            raise MissingCredentialError("Gemini API key is not configured")

        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {**self.generation_config, **overrides},
        }

        logger.debug("Calling Gemini generateContent: model=%s prompt_chars=%d",
                     self.model, len(prompt))
        try:
            response = self._session.post(
                self.endpoint,
                params={"key": self.api_key},
                json=body,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Gemini request failed before a response arrived: %s", exc)
            raise ConnectivityError(f"Could not reach Gemini API: {exc}") from exc

        if not 200 <= response.status_code < 300:
            error = classify_status(response.status_code, _error_detail(response))
            logger.error("%s", error)
            raise error

        try:
            payload = response.json()
            return payload["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            logger.error("Unexpected Gemini response shape: %s", exc)
            raise ReplyFormatError(f"Gemini response had no candidate text: {exc}") from exc


def _error_detail(response: requests.Response) -> str:
    try:
        return response.json().get("error", {}).get("message", "")
    except (ValueError, AttributeError):
        return ""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def generate_trip_itinerary(request: TripRequest,
                            client: Optional[GeminiClient] = None) -> DecodeResult:
    """Ask the model for a new itinerary and decode its reply.

    Decoding never fails: a malformed reply yields the fallback itinerary
    (``result.is_fallback``). Transport errors still propagate.
    """
    client = client or GeminiClient.from_env()
    logger.info("Generating itinerary for %s (%s ~ %s)",
                request.destination, request.start_date, request.end_date)

    reply = client.generate_text(build_itinerary_prompt(request))
    result = decode_itinerary_reply(reply, request.destination)
    logger.info("Itinerary reply decoded: status=%s days=%d", result.status, len(result.days))
    return result


def revise_itinerary(itinerary: Itinerary, message: str,
                     client: Optional[GeminiClient] = None) -> PlanRevision:
    """Apply a conversational edit request to an itinerary.

    Raises:
        ReplyFormatError: the reply did not follow the envelope contract
    """
    client = client or GeminiClient.from_env()
    revision_tokens = get_gemini_config()["revision_max_output_tokens"]

    reply = client.generate_text(
        build_revision_prompt(itinerary, message),
        maxOutputTokens=revision_tokens,
    )
    return parse_revision_reply(reply)


__all__ = [
    "GeminiClient",
    "generate_trip_itinerary",
    "revise_itinerary",
]
