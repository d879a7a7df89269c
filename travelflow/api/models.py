"""Shared data structures for itinerary planning.

The persisted / wire form of an itinerary is a JSON array of day objects::

    [{"id": "plan-0", "title": "1일차", "day": 1,
      "activities": [{"id": "activity-0-0", "time": "09:00",
                      "activity": "...", "location": "...",
                      "description": "...", "duration": 60}]}]

The dataclasses below are the in-memory form; ``to_dict`` / ``from_dict``
convert between the two.
"""

from __future__ import annotations

import time as _time
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from travelflow.api.errors import NotFoundError, ValidationError

DEFAULT_DURATION = 60
UNSCHEDULED = "미정"

_EDITABLE_FIELDS = {"time", "name", "location", "description", "duration"}


@dataclass
class Activity:
    """A single scheduled event within a day."""

    id: str
    time: str
    name: str
    location: str  # free-text address, not guaranteed to be geocodable
    description: str = ""
    duration: int = DEFAULT_DURATION  # minutes

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "time": self.time,
            "activity": self.name,
            "location": self.location,
            "description": self.description,
            "duration": self.duration,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default_id: str = "") -> "Activity":
        return cls(
            id=str(data.get("id") or default_id),
            time=str(data.get("time") or UNSCHEDULED),
            name=str(data.get("activity") or data.get("name") or ""),
            location=str(data.get("location") or ""),
            description=str(data.get("description") or ""),
            duration=_coerce_duration(data.get("duration")),
        )


@dataclass
class Day:
    """One calendar day of the plan."""

    id: str
    title: str
    day: int  # 1-based, matches position in the itinerary
    activities: List[Activity] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "day": self.day,
            "activities": [a.to_dict() for a in self.activities],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], index: int = 0) -> "Day":
        activities = _as_list(data.get("activities"))
        return cls(
            id=str(data.get("id") or f"plan-{index}"),
            title=str(data.get("title") or f"{index + 1}일차"),
            day=int(data.get("day") or index + 1),
            activities=[
                Activity.from_dict(a, default_id=f"activity-{index}-{j}")
                for j, a in enumerate(activities)
                if isinstance(a, dict)
            ],
        )

    def find_activity(self, activity_id: str) -> int:
        for idx, activity in enumerate(self.activities):
            if activity.id == activity_id:
                return idx
        raise NotFoundError(f"Activity '{activity_id}' not found in {self.id}")


@dataclass
class Waypoint:
    """A geocoded point derived from an activity's location text."""

    name: str
    address: str
    lat: float
    lng: float

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "address": self.address,
            "lat": self.lat,
            "lng": self.lng,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Waypoint":
        if not isinstance(data, dict):
            raise ValidationError(f"Invalid waypoint: {data!r}")
        try:
            return cls(
                name=str(data.get("name", "")),
                address=str(data.get("address", "")),
                lat=float(data["lat"]),
                lng=float(data["lng"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValidationError(f"Invalid waypoint: {data!r}") from exc


class Itinerary:
    """Ordered list of days; insertion order is chronological order.

    Every activity belongs to exactly one day, so removing a day discards
    its activities.
    """

    def __init__(self, days: Optional[List[Day]] = None):
        self.days: List[Day] = list(days or [])

    def __eq__(self, other):
        return isinstance(other, Itinerary) and self.to_dicts() == other.to_dicts()

    def __len__(self):
        return len(self.days)

    def __repr__(self):
        return f"Itinerary(days={len(self.days)})"

    # ------------------------------------------------------------------
    # Construction / serialisation
    # ------------------------------------------------------------------
    @classmethod
    def from_model_days(cls, raw_days: Iterable[Any]) -> "Itinerary":
        """Build a fresh itinerary from the parser's list of day dicts.

        Ids are reassigned and every activity gets the default duration,
        whatever the model sent.
        """
        days = []
        for index, raw in enumerate(d for d in raw_days if isinstance(d, dict)):
            activities = [
                Activity(
                    id=f"activity-{index}-{j}",
                    time=str(a.get("time") or UNSCHEDULED),
                    name=str(a.get("activity") or ""),
                    location=str(a.get("location") or ""),
                    description=str(a.get("description") or ""),
                    duration=DEFAULT_DURATION,
                )
                for j, a in enumerate(_as_list(raw.get("activities")))
                if isinstance(a, dict)
            ]
            days.append(Day(
                id=f"plan-{index}",
                title=str(raw.get("title") or f"{index + 1}일차"),
                day=index + 1,
                activities=activities,
            ))
        return cls(days)

    @classmethod
    def from_dicts(cls, data: Iterable[Any]) -> "Itinerary":
        return cls([Day.from_dict(d, i) for i, d in enumerate(data) if isinstance(d, dict)])

    def to_dicts(self) -> List[dict]:
        return [d.to_dict() for d in self.days]

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def get_day(self, day_id: str) -> Day:
        for day in self.days:
            if day.id == day_id:
                return day
        raise NotFoundError(f"Day '{day_id}' not found")

    def validate(self) -> None:
        """Raise ValidationError unless day numbers are 1..n in order."""
        numbers = [d.day for d in self.days]
        if numbers != list(range(1, len(self.days) + 1)):
            raise ValidationError(f"Day numbers must be 1..{len(self.days)} in order, got {numbers}")

    # ------------------------------------------------------------------
    # Edit operations
    # ------------------------------------------------------------------
    def add_activity(self, day_id: str, name: str, location: str, time: str = "",
                     description: str = "", duration: Optional[int] = None) -> Activity:
        if not (name or "").strip() or not (location or "").strip():
            raise ValidationError("활동명과 장소를 입력해주세요.")

        day = self.get_day(day_id)
        activity = Activity(
            id=_new_activity_id(),
            time=(time or "").strip() or UNSCHEDULED,
            name=name.strip(),
            location=location.strip(),
            description=description or "",
            duration=_coerce_duration(duration),
        )
        day.activities.append(activity)
        return activity

    def update_activity(self, day_id: str, activity_id: str, **changes) -> Activity:
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

        day = self.get_day(day_id)
        activity = day.activities[day.find_activity(activity_id)]
        for key, value in changes.items():
            if key == "duration":
                value = _coerce_duration(value)
            elif key in ("name", "location") and not str(value or "").strip():
                raise ValidationError(f"{key} cannot be empty")
            setattr(activity, key, value)
        return activity

    def delete_activity(self, day_id: str, activity_id: str) -> Activity:
        day = self.get_day(day_id)
        return day.activities.pop(day.find_activity(activity_id))

    def move_activity(self, day_id: str, activity_id: str, direction: str) -> None:
        """Swap an activity with its neighbour; no-op at either end."""
        if direction not in ("up", "down"):
            raise ValidationError("direction must be 'up' or 'down'")

        day = self.get_day(day_id)
        activities = day.activities
        idx = day.find_activity(activity_id)
        target = idx - 1 if direction == "up" else idx + 1
        if 0 <= target < len(activities):
            activities[idx], activities[target] = activities[target], activities[idx]

    def add_day(self, title: Optional[str] = None) -> Day:
        number = len(self.days) + 1
        day = Day(id=self._free_day_id(number), title=title or f"{number}일차", day=number)
        self.days.append(day)
        return day

    def remove_day(self, day_id: str) -> Day:
        if len(self.days) <= 1:
            raise ValidationError("An itinerary needs at least one day")

        day = self.get_day(day_id)
        self.days.remove(day)
        for position, remaining in enumerate(self.days, 1):
            remaining.day = position
        return day

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------
    def day_duration(self, day_id: str) -> int:
        return sum(a.duration or DEFAULT_DURATION for a in self.get_day(day_id).activities)

    def stats(self) -> Dict[str, int]:
        activities = [a for d in self.days for a in d.activities]
        return {
            "days": len(self.days),
            "activities": len(activities),
            "total_minutes": sum(a.duration for a in activities),
        }

    def location_queries(self, day_id: Optional[str] = None) -> List[Tuple[str, str]]:
        days = [self.get_day(day_id)] if day_id else self.days
        return [(a.name, a.location) for d in days for a in d.activities]

    def share_text(self) -> str:
        blocks = []
        for day in self.days:
            lines = [day.title]
            lines.extend(f"{a.time} - {a.name} ({a.location})" for a in day.activities)
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)

    def _free_day_id(self, number: int) -> str:
        taken = {d.id for d in self.days}
        candidate = f"plan-{number - 1}"
        suffix = number
        while candidate in taken:
            candidate = f"plan-{suffix}"
            suffix += 1
        return candidate


@dataclass
class TripPreferences:
    """Optional constraints layered on top of a trip request."""

    must_visit_places: List[str] = field(default_factory=list)
    must_do_activities: List[str] = field(default_factory=list)
    avoid_places: List[str] = field(default_factory=list)
    avoid_activities: List[str] = field(default_factory=list)
    max_walking_distance_km: Optional[float] = None
    budget_per_activity: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TripPreferences":
        data = data or {}
        return cls(
            must_visit_places=_clean_list(data.get("mustVisitPlaces", data.get("must_visit_places"))),
            must_do_activities=_clean_list(data.get("mustDoActivities", data.get("must_do_activities"))),
            avoid_places=_clean_list(data.get("avoidPlaces", data.get("avoid_places"))),
            avoid_activities=_clean_list(data.get("avoidActivities", data.get("avoid_activities"))),
            max_walking_distance_km=_optional_number(
                data.get("maxWalkingDistanceKm", data.get("max_walking_distance_km"))),
            budget_per_activity=_optional_number(
                data.get("budgetPerActivity", data.get("budget_per_activity"))),
        )


@dataclass
class TripRequest:
    """Structured parameters for generating a new itinerary."""

    destination: str
    start_date: date
    end_date: date
    travelers: int = 1
    interests: str = ""
    budget: Optional[float] = None
    preferences: TripPreferences = field(default_factory=TripPreferences)

    def __post_init__(self):
        if not (self.destination or "").strip():
            raise ValidationError("목적지를 입력해주세요.")
        if self.end_date < self.start_date:
            raise ValidationError("End date must not be before start date")
        if self.travelers < 1:
            raise ValidationError("Traveler count must be a positive integer")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TripRequest":
        if not data.get("destination") or not data.get("startDate") or not data.get("endDate"):
            raise ValidationError("필수 정보를 모두 입력해주세요!")

        try:
            start = date.fromisoformat(str(data["startDate"]))
            end = date.fromisoformat(str(data["endDate"]))
        except ValueError as exc:
            raise ValidationError(f"Dates must be ISO formatted (YYYY-MM-DD): {exc}") from exc

        try:
            raw_travelers = data.get("travelers")
            travelers = 1 if raw_travelers in (None, "") else int(raw_travelers)
        except (TypeError, ValueError) as exc:
            raise ValidationError("Traveler count must be a positive integer") from exc

        return cls(
            destination=str(data["destination"]).strip(),
            start_date=start,
            end_date=end,
            travelers=travelers,
            interests=str(data.get("interests") or ""),
            budget=_optional_number(data.get("budget")),
            preferences=TripPreferences.from_dict(data.get("preferences")),
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _new_activity_id() -> str:
    return str(_time.time_ns())


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _coerce_duration(value: Any) -> int:
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        return DEFAULT_DURATION
    return minutes if minutes > 0 else DEFAULT_DURATION


def _clean_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        value = [value]
    return [str(v).strip() for v in value if str(v).strip()]


def _optional_number(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Expected a number, got {value!r}") from exc
