# travelflow/api/services/recommendation_service.py
"""Recommended plan templates and community-shared itineraries."""

import copy
import logging
import threading
import time
from datetime import date
from typing import Any, Dict, List, Optional

from travelflow.api.errors import NotFoundError, ValidationError
from travelflow.api.models import Itinerary
from travelflow.api.storage import LIKES_KEY, USER_RECOMMENDATIONS_KEY
from travelflow.data.recommended_plans import RECOMMENDED_PLANS
from travelflow.data.user_recommendations import SAMPLE_USER_RECOMMENDATIONS

logger = logging.getLogger(__name__)

SORT_LATEST = "latest"
SORT_POPULAR = "popular"
SORT_RATING = "rating"
DURATION_BUCKETS = ("1-2", "3-4", "5-7", "8")


class RecommendationService:
    """Lists, filters and updates recommendations kept in a key-value store."""

    def __init__(self, store):
        self.store = store
        # guards read-modify-write of the recommendation list and likes
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Recommended templates
    # ------------------------------------------------------------------
    @staticmethod
    def list_templates() -> List[Dict[str, Any]]:
        """Template summaries without their day plans."""
        return [
            {k: v for k, v in plan.items() if k != "plans"}
            for plan in RECOMMENDED_PLANS
        ]

    @staticmethod
    def get_template(template_id: str) -> Optional[Dict[str, Any]]:
        for plan in RECOMMENDED_PLANS:
            if plan["id"] == template_id:
                return copy.deepcopy(plan)
        return None

    def find_plan(self, plan_id: str) -> Optional[Dict[str, Any]]:
        """Look a plan up among templates first, then community entries."""
        template = self.get_template(plan_id)
        if template is not None:
            return template
        for rec in self.all():
            if rec["id"] == plan_id:
                return rec
        return None

    # ------------------------------------------------------------------
    # Community recommendations
    # ------------------------------------------------------------------
    def all(self) -> List[Dict[str, Any]]:
        """Every stored recommendation; seeds the store on first use."""
        with self._lock:
            stored = self.store.get(USER_RECOMMENDATIONS_KEY)
            if stored is None:
                stored = copy.deepcopy(SAMPLE_USER_RECOMMENDATIONS)
                self.store.set(USER_RECOMMENDATIONS_KEY, stored)
                logger.info(f"Seeded {len(stored)} sample recommendations")
            elif not isinstance(stored, list):
                logger.error("Stored recommendations are not a list; using samples")
                return copy.deepcopy(SAMPLE_USER_RECOMMENDATIONS)
            return stored

    def get(self, rec_id: str) -> Dict[str, Any]:
        for rec in self.all():
            if rec["id"] == rec_id:
                return rec
        raise NotFoundError(f"Recommendation '{rec_id}' not found")

    def search(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Filter and sort recommendations.

        Supported filters: query, location, duration (bucket), budget,
        season, travel_style, tags (any match) and sort_by.
        """
        filters = filters or {}
        results = list(self.all())

        query = (filters.get("query") or "").strip().lower()
        if query:
            results = [r for r in results if _matches_query(r, query)]

        for key in ("location", "budget", "season", "travel_style"):
            value = filters.get(key)
            if value and value != "all":
                results = [r for r in results if r.get(key) == value]

        duration = filters.get("duration")
        if duration and duration != "all":
            low, high = _parse_duration_bucket(duration)
            results = [
                r for r in results
                if r.get("duration", 0) >= low and (high is None or r.get("duration", 0) <= high)
            ]

        tags = filters.get("tags") or []
        if isinstance(tags, str):
            tags = [t for t in tags.split(",") if t]
        if tags:
            results = [r for r in results if any(t in r.get("tags", []) for t in tags)]

        sort_by = filters.get("sort_by") or SORT_LATEST
        if sort_by == SORT_POPULAR:
            results.sort(key=lambda r: r.get("likes", 0), reverse=True)
        elif sort_by == SORT_RATING:
            results.sort(key=lambda r: r.get("rating", 0), reverse=True)
        else:
            results.sort(key=lambda r: r.get("created_at", ""), reverse=True)

        return results

    def facets(self) -> Dict[str, List[str]]:
        recs = self.all()
        return {
            "locations": sorted({r["location"] for r in recs if r.get("location")}),
            "budgets": sorted({r["budget"] for r in recs if r.get("budget")}),
            "seasons": sorted({r["season"] for r in recs if r.get("season")}),
            "travel_styles": sorted({r["travel_style"] for r in recs if r.get("travel_style")}),
            "tags": sorted({t for r in recs for t in r.get("tags", [])}),
        }

    def add(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Publish a new recommendation at the top of the list."""
        for field in ("title", "location", "author"):
            if not str(data.get(field) or "").strip():
                raise ValidationError(f"'{field}' is required")

        plans = data.get("plans") or []
        if not isinstance(plans, list) or not plans:
            raise ValidationError("At least one day plan is required")
        try:
            itinerary = Itinerary.from_dicts(plans)
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Invalid day plans: {exc}") from exc
        if not itinerary.days:
            raise ValidationError("At least one day plan is required")
        for position, day in enumerate(itinerary.days, 1):
            day.day = position

        tags = []
        for tag in data.get("tags") or []:
            tag = str(tag).strip()
            if tag and tag not in tags:
                tags.append(tag)

        recommendation = {
            "id": f"user-rec-{time.time_ns() // 1_000_000}",
            "title": str(data["title"]).strip(),
            "description": str(data.get("description") or ""),
            "author": str(data["author"]).strip(),
            "author_avatar": data.get("author_avatar") or "👤",
            "location": str(data["location"]).strip(),
            "duration": len(itinerary),
            "tags": tags,
            "rating": _clamp_rating(data.get("rating", 5)),
            "budget": str(data.get("budget") or ""),
            "season": str(data.get("season") or ""),
            "travel_style": str(data.get("travel_style") or ""),
            "plans": itinerary.to_dicts(),
            "photos": list(data.get("photos") or []),
            "tips": [t for t in (data.get("tips") or []) if str(t).strip()],
            "created_at": date.today().isoformat(),
            "likes": 0,
            "views": 0,
            "is_recommended": False,
        }

        with self._lock:
            recs = self.all()
            recs.insert(0, recommendation)
            self.store.set(USER_RECOMMENDATIONS_KEY, recs)
        logger.info(f"Added recommendation {recommendation['id']} by {recommendation['author']}")
        return recommendation

    def toggle_like(self, rec_id: str, user_id: str) -> Dict[str, Any]:
        """Like or unlike; returns the new count and the user's state."""
        with self._lock:
            recs = self.all()
            rec = _find(recs, rec_id)

            likes = self.store.get(LIKES_KEY) or {}
            likers = likes.setdefault(rec_id, [])
            if user_id in likers:
                likers.remove(user_id)
                rec["likes"] = max(0, rec.get("likes", 0) - 1)
                liked = False
            else:
                likers.append(user_id)
                rec["likes"] = rec.get("likes", 0) + 1
                liked = True

            self.store.update({LIKES_KEY: likes, USER_RECOMMENDATIONS_KEY: recs})
        return {"likes": rec["likes"], "liked": liked}

    def increment_views(self, rec_id: str) -> int:
        with self._lock:
            recs = self.all()
            rec = _find(recs, rec_id)
            rec["views"] = rec.get("views", 0) + 1
            self.store.set(USER_RECOMMENDATIONS_KEY, recs)
        return rec["views"]


def _find(recs: List[Dict[str, Any]], rec_id: str) -> Dict[str, Any]:
    for rec in recs:
        if rec["id"] == rec_id:
            return rec
    raise NotFoundError(f"Recommendation '{rec_id}' not found")


def _matches_query(rec: Dict[str, Any], query: str) -> bool:
    fields = [rec.get("title", ""), rec.get("description", ""),
              rec.get("location", ""), rec.get("author", "")]
    if any(query in str(f).lower() for f in fields):
        return True
    return any(query in str(tag).lower() for tag in rec.get("tags", []))


def _parse_duration_bucket(bucket: str):
    if bucket not in DURATION_BUCKETS:
        raise ValidationError(f"Unknown duration filter '{bucket}'")
    parts = [int(p) for p in bucket.split("-")]
    return parts[0], (parts[1] if len(parts) > 1 else None)


def _clamp_rating(value: Any) -> float:
    try:
        rating = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError("rating must be a number") from exc
    return min(5.0, max(0.0, rating))


__all__ = ['RecommendationService']
