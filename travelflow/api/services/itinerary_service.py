# travelflow/api/services/itinerary_service.py
"""Service layer for itinerary generation and management."""

import logging
import threading
from typing import Any, Callable, Dict, Optional, Tuple

from travelflow.api.errors import NotFoundError, ReplyFormatError, StaleResponseError, ValidationError
from travelflow.api.llm import GeminiClient, generate_trip_itinerary, revise_itinerary
from travelflow.api.models import Activity, Day, Itinerary, TripRequest
from travelflow.api.parsing import DecodeResult
from travelflow.api.storage import ItineraryRepository

logger = logging.getLogger(__name__)


class RequestSequencer:
    """Hands out increasing tickets so late replies can be recognised.

    Each model call takes a ticket before it is sent; when the reply comes
    back it is applied only if no newer ticket has been issued meanwhile
    for the same scope. A scope names one independently stored plan (a
    store key, or one client's session), so requests for different plans
    never supersede each other.
    """

    def __init__(self):
        self._counter = 0
        self._latest: Dict[str, int] = {}
        self._lock = threading.Lock()

    def issue(self, scope: str = "") -> int:
        with self._lock:
            self._counter += 1
            self._latest[scope] = self._counter
            return self._counter

    def is_current(self, ticket: int, scope: str = "") -> bool:
        with self._lock:
            return self._latest.get(scope) == ticket


class ItineraryService:
    """Handles itinerary generation, edits and persistence."""

    def __init__(self, repository: ItineraryRepository,
                 client_factory: Optional[Callable[[], GeminiClient]] = None,
                 sequencer: Optional[RequestSequencer] = None,
                 templates: Optional[Callable[[str], Optional[Dict[str, Any]]]] = None):
        """Initialize the service.

        Args:
            repository: Where the current itinerary is loaded from / saved to
            client_factory: Builds the Gemini client per call (defaults to env)
            sequencer: When given, replies to superseded requests are dropped
            templates: Looks up a plan template by id (recommended/community)
        """
        self.repository = repository
        self.client_factory = client_factory or GeminiClient.from_env
        self.sequencer = sequencer
        self.templates = templates
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Model-backed operations
    # ------------------------------------------------------------------
    def generate(self, request_data: Dict[str, Any]) -> Tuple[Itinerary, DecodeResult]:
        """Generate a new itinerary from form data and store it.

        Args:
            request_data: destination, startDate, endDate, travelers,
                interests, budget and optional preferences

        Returns:
            The stored itinerary and the decode result (which tells the
            caller whether the fallback plan was used)

        Raises:
            ValidationError: If the request is invalid
            LLMError: If the model endpoint call fails
        """
        request = TripRequest.from_dict(request_data)
        scope = self.repository.scope()
        ticket = self._issue(scope)

        result = generate_trip_itinerary(request, client=self.client_factory())
        self._ensure_current(ticket, scope, "generate")

        itinerary = Itinerary.from_model_days(result.days)
        self.repository.save(itinerary)
        logger.info(f"Stored new itinerary for {request.destination}: {itinerary.stats()}")
        return itinerary, result

    def revise(self, message: str) -> Tuple[Itinerary, str]:
        """Apply a chat request to the current itinerary.

        The stored itinerary is only replaced after the reply parsed
        cleanly; on any error it stays as it was.

        Returns:
            The updated itinerary and the model's change summary

        Raises:
            ValidationError: If the message is blank or there is no plan yet
            ReplyFormatError: If the reply breaks the envelope contract
            StaleResponseError: If a newer request was issued meanwhile
        """
        if not (message or "").strip():
            raise ValidationError("수정 요청 내용을 입력해주세요.")

        current = self.current()
        if current is None or not current.days:
            raise ValidationError("먼저 여행 계획을 생성해주세요.")

        scope = self.repository.scope()
        ticket = self._issue(scope)
        revision = revise_itinerary(current, message.strip(), client=self.client_factory())
        self._ensure_current(ticket, scope, "revise")

        try:
            updated = Itinerary.from_dicts(revision.days)
        except (TypeError, ValueError) as exc:
            raise ReplyFormatError(f"Revised plan has invalid days: {exc}") from exc
        if not updated.days:
            raise ReplyFormatError("Revised plan has no days")
        for position, day in enumerate(updated.days, 1):
            day.day = position
        self.repository.save(updated)
        logger.info(f"Applied revision: {revision.summary}")
        return updated, revision.summary

    def _issue(self, scope: str) -> Optional[int]:
        return self.sequencer.issue(scope) if self.sequencer else None

    def _ensure_current(self, ticket: Optional[int], scope: str, action: str) -> None:
        if ticket is not None and not self.sequencer.is_current(ticket, scope):
            logger.warning(f"Discarding stale {action} reply (ticket {ticket}, scope {scope})")
            raise StaleResponseError("A newer request superseded this one")

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    def current(self) -> Optional[Itinerary]:
        return self.repository.load()

    def require_current(self) -> Itinerary:
        itinerary = self.repository.load()
        if itinerary is None:
            raise NotFoundError("No itinerary has been created yet")
        return itinerary

    def reset(self) -> None:
        self.repository.clear()
        logger.debug("Cleared stored itinerary")

    def load_template(self, template_id: str) -> Itinerary:
        """Replace the current itinerary with a stored plan template."""
        template = self.templates(template_id) if self.templates else None
        if template is None:
            raise NotFoundError(f"Template '{template_id}' not found")

        try:
            itinerary = Itinerary.from_dicts(template.get("plans") or [])
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Template '{template_id}' has invalid days: {exc}") from exc
        if not itinerary.days:
            raise ValidationError(f"Template '{template_id}' has no days")
        with self._lock:
            self.repository.save(itinerary)
        return itinerary

    def stats(self) -> Dict[str, int]:
        return self.require_current().stats()

    def share_text(self) -> str:
        return self.require_current().share_text()

    # ------------------------------------------------------------------
    # Edits (load, mutate, save under one lock)
    # ------------------------------------------------------------------
    def _apply(self, edit: Callable[[Itinerary], Any]) -> Any:
        with self._lock:
            itinerary = self.require_current()
            result = edit(itinerary)
            self.repository.save(itinerary)
            return result

    def add_activity(self, day_id: str, **fields) -> Activity:
        return self._apply(lambda itinerary: itinerary.add_activity(day_id, **fields))

    def update_activity(self, day_id: str, activity_id: str, **changes) -> Activity:
        return self._apply(lambda itinerary: itinerary.update_activity(day_id, activity_id, **changes))

    def delete_activity(self, day_id: str, activity_id: str) -> Activity:
        return self._apply(lambda itinerary: itinerary.delete_activity(day_id, activity_id))

    def move_activity(self, day_id: str, activity_id: str, direction: str) -> Itinerary:
        def move(itinerary):
            itinerary.move_activity(day_id, activity_id, direction)
            return itinerary
        return self._apply(move)

    def add_day(self, title: Optional[str] = None) -> Day:
        return self._apply(lambda itinerary: itinerary.add_day(title))

    def remove_day(self, day_id: str) -> Itinerary:
        def remove(itinerary):
            itinerary.remove_day(day_id)
            return itinerary
        return self._apply(remove)


__all__ = ["ItineraryService", "RequestSequencer"]
