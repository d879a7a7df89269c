# travelflow/api/services/my_plans_service.py
"""Service layer for the user's own saved trips ("my plans")."""

import copy
import logging
import threading
import time
from collections import Counter
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from travelflow.api.errors import NotFoundError, ValidationError
from travelflow.api.models import Itinerary
from travelflow.api.storage import MY_PLANS_KEY
from travelflow.data.my_travel_plans import SAMPLE_MY_TRAVEL_PLANS

logger = logging.getLogger(__name__)

STATUS_PLANNING = "planning"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"
STATUSES = (STATUS_PLANNING, STATUS_COMPLETED, STATUS_CANCELLED)

_EDITABLE_FIELDS = {
    "title", "destination", "start_date", "end_date", "purpose", "status",
    "collaborators", "is_public", "image", "description", "budget", "plans",
}


class MyPlansService:
    """Lists, filters, summarises and edits saved trips in a key-value store."""

    def __init__(self, store):
        self.store = store
        self._lock = threading.RLock()

    def all(self) -> List[Dict[str, Any]]:
        """Every saved trip in stored order; seeds the store on first use."""
        with self._lock:
            stored = self.store.get(MY_PLANS_KEY)
            if stored is None:
                stored = copy.deepcopy(SAMPLE_MY_TRAVEL_PLANS)
                self.store.set(MY_PLANS_KEY, stored)
                logger.info(f"Seeded {len(stored)} sample trips")
            elif not isinstance(stored, list):
                logger.error("Stored trips are not a list; using samples")
                return copy.deepcopy(SAMPLE_MY_TRAVEL_PLANS)
            return stored

    def get(self, plan_id: str) -> Dict[str, Any]:
        plan = self.find_plan(plan_id)
        if plan is None:
            raise NotFoundError(f"Trip '{plan_id}' not found")
        return plan

    def find_plan(self, plan_id: str) -> Optional[Dict[str, Any]]:
        for plan in self.all():
            if plan["id"] == plan_id:
                return plan
        return None

    def search(self, query: Optional[str] = None, status: Optional[str] = None) -> List[Dict[str, Any]]:
        """Trips whose title or destination contains ``query``, optionally by status.

        Args:
            query: Case-insensitive substring; blank matches everything
            status: One of STATUSES, or "all"/None for no status filter

        Returns:
            Matching trips in stored order
        """
        if status and status != "all" and status not in STATUSES:
            raise ValidationError(f"Unknown status '{status}'")

        needle = (query or "").strip().lower()
        results = []
        for plan in self.all():
            if needle and needle not in plan.get("title", "").lower() \
                    and needle not in plan.get("destination", "").lower():
                continue
            if status and status != "all" and plan.get("status") != status:
                continue
            results.append(plan)
        return results

    def recently_updated(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        plans = sorted(self.all(), key=lambda p: p.get("updated_at", ""), reverse=True)
        return plans[:limit] if limit else plans

    def stats(self) -> Dict[str, Any]:
        """Counts per status, budget totals and destination summary."""
        plans = self.all()
        statuses = Counter(p.get("status") for p in plans)
        destinations = Counter(p.get("destination") for p in plans if p.get("destination"))
        return {
            "total_plans": len(plans),
            "completed_plans": statuses[STATUS_COMPLETED],
            "planning_plans": statuses[STATUS_PLANNING],
            "cancelled_plans": statuses[STATUS_CANCELLED],
            "total_budget": sum((p.get("budget") or {}).get("total", 0) for p in plans),
            "total_spent": sum((p.get("budget") or {}).get("spent", 0) for p in plans),
            "destinations": len(destinations),
            # Counter.most_common keeps first-seen order among ties
            "most_visited_destination": destinations.most_common(1)[0][0] if destinations else None,
        }

    def add(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Save a new trip; ``plans`` may be empty (e.g. a cancelled trip)."""
        for field in ("title", "destination", "start_date", "end_date"):
            if not str(data.get(field) or "").strip():
                raise ValidationError(f"'{field}' is required")

        now = _timestamp()
        plan = {
            "id": f"my-plan-{time.time_ns() // 1_000_000}",
            "title": "",
            "destination": "",
            "purpose": "",
            "status": STATUS_PLANNING,
            "collaborators": [],
            "is_public": False,
            "image": "✈️",
            "description": "",
            "plans": [],
            "created_at": now,
            "updated_at": now,
        }
        plan.update(_clean_fields(data))
        _check_dates(plan)

        with self._lock:
            plans = self.all()
            plans.append(plan)
            self.store.set(MY_PLANS_KEY, plans)
        logger.info(f"Saved trip {plan['id']} to {plan['destination']}")
        return plan

    def update(self, plan_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

        cleaned = _clean_fields(changes)
        with self._lock:
            plans = self.all()
            plan = _find(plans, plan_id)
            updated = dict(plan, **cleaned)
            _check_dates(updated)
            updated["updated_at"] = _timestamp()
            plan.clear()
            plan.update(updated)
            self.store.set(MY_PLANS_KEY, plans)
        return plan

    def delete(self, plan_id: str) -> Dict[str, Any]:
        with self._lock:
            plans = self.all()
            plan = _find(plans, plan_id)
            plans.remove(plan)
            self.store.set(MY_PLANS_KEY, plans)
        logger.info(f"Deleted trip {plan_id}")
        return plan


def trip_length_label(start: date, end: date) -> str:
    """Korean nights/days label, e.g. "3박 4일"; same-day trips are "당일치기"."""
    nights = (end - start).days
    return "당일치기" if nights == 0 else f"{nights}박 {nights + 1}일"


def _find(plans: List[Dict[str, Any]], plan_id: str) -> Dict[str, Any]:
    for plan in plans:
        if plan["id"] == plan_id:
            return plan
    raise NotFoundError(f"Trip '{plan_id}' not found")


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _parse_date(value: Any, field: str) -> date:
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise ValidationError(f"'{field}' must be an ISO date (YYYY-MM-DD)") from exc


def _check_dates(plan: Dict[str, Any]) -> None:
    start = _parse_date(plan.get("start_date"), "start_date")
    end = _parse_date(plan.get("end_date"), "end_date")
    if end < start:
        raise ValidationError("End date must not be before start date")
    plan["start_date"], plan["end_date"] = start.isoformat(), end.isoformat()
    plan["duration"] = trip_length_label(start, end)


def _clean_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    cleaned = {}
    for key in _EDITABLE_FIELDS & set(data):
        value = data[key]
        if key == "status":
            if value not in STATUSES:
                raise ValidationError(f"status must be one of {', '.join(STATUSES)}")
        elif key == "plans":
            value = _clean_plans(value)
        elif key == "budget":
            value = _clean_budget(value)
        elif key == "collaborators":
            value = [str(c) for c in (value or [])]
        elif key == "is_public":
            value = bool(value)
        else:
            value = str(value or "").strip()
        cleaned[key] = value

    for key in ("title", "destination"):
        if key in cleaned and not cleaned[key]:
            raise ValidationError(f"'{key}' cannot be empty")
    return cleaned


def _clean_plans(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        raise ValidationError("'plans' must be a list of days")
    try:
        itinerary = Itinerary.from_dicts(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid day plans: {exc}") from exc
    for position, day in enumerate(itinerary.days, 1):
        day.day = position
    return itinerary.to_dicts()


def _clean_budget(value: Any) -> Optional[Dict[str, Any]]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValidationError("'budget' must be an object with total and spent")
    try:
        total = float(value.get("total") or 0)
        spent = float(value.get("spent") or 0)
    except (TypeError, ValueError) as exc:
        raise ValidationError("budget amounts must be numbers") from exc
    if total < 0 or spent < 0:
        raise ValidationError("budget amounts must not be negative")
    return {
        "total": int(total) if total.is_integer() else total,
        "spent": int(spent) if spent.is_integer() else spent,
        "currency": str(value.get("currency") or "KRW"),
    }


__all__ = ["MyPlansService", "STATUSES", "trip_length_label"]
