# travelflow/api/routing.py
"""Route ordering: haversine distance, greedy optimiser, Directions API."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from googlemaps.exceptions import ApiError, HTTPError, Timeout, TransportError

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371

SOURCE_DIRECTIONS = "directions"
SOURCE_LOCAL = "local"


@dataclass
class RouteResult:
    waypoints: List[Any]
    source: str
    distance_km: float

    def to_dict(self) -> dict:
        return {
            "waypoints": [_as_dict(w) for w in self.waypoints],
            "source": self.source,
            "distance_km": round(self.distance_km, 3),
        }


def _coords(point: Any) -> tuple:
    if isinstance(point, dict):
        return float(point["lat"]), float(point["lng"])
    return float(point.lat), float(point.lng)


def _as_dict(point: Any) -> dict:
    return point if isinstance(point, dict) else point.to_dict()


def haversine_distance(a: Any, b: Any) -> float:
    """Great-circle distance in km between two points given in degrees."""
    lat1, lng1 = _coords(a)
    lat2, lng2 = _coords(b)
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    h = (math.sin(d_lat / 2) ** 2
         + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2))
         * math.sin(d_lng / 2) ** 2)
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def route_distance(waypoints: Sequence[Any]) -> float:
    """Total length in km of visiting the waypoints in order."""
    return sum(haversine_distance(a, b) for a, b in zip(waypoints, waypoints[1:]))


def optimize_route(waypoints: Sequence[Any], keep_last: bool = False) -> List[Any]:
    """Nearest-neighbour ordering starting from the first waypoint.

    Greedy, so not guaranteed minimal. With ``keep_last`` the final waypoint
    is held back and appended at the end, matching the fixed
    origin/destination contract of the Directions API path.
    """
    waypoints = list(waypoints)
    if len(waypoints) <= 2:
        return waypoints

    tail = [waypoints.pop()] if keep_last else []
    optimized = [waypoints[0]]
    remaining = waypoints[1:]

    while remaining:
        current = optimized[-1]
        # min() keeps the first of equal candidates
        nearest = min(range(len(remaining)),
                      key=lambda i: haversine_distance(current, remaining[i]))
        optimized.append(remaining.pop(nearest))

    return optimized + tail


def optimize_with_directions(waypoints: Sequence[Any], gmaps_client,
                             mode: str = "walking") -> Optional[List[Any]]:
    """Let the Directions API order the intermediate stops.

    Origin and destination stay fixed. Returns None when the service has no
    route for these points or the call fails.
    """
    waypoints = list(waypoints)
    if len(waypoints) <= 2:
        return waypoints

    origin, destination = _coords(waypoints[0]), _coords(waypoints[-1])
    middle = waypoints[1:-1]

    try:
        routes = gmaps_client.directions(
            origin,
            destination,
            mode=mode,
            waypoints=[_coords(w) for w in middle],
            optimize_waypoints=True,
        )
    except (ApiError, HTTPError, Timeout, TransportError) as e:
        logger.error(f"Directions request failed: {e}")
        return None

    if not routes:
        logger.warning("Directions API returned no route")
        return None

    order = routes[0].get("waypoint_order")
    if order is None or sorted(order) != list(range(len(middle))):
        logger.warning(f"Directions API returned an unusable waypoint order: {order}")
        return None

    return [waypoints[0]] + [middle[i] for i in order] + [waypoints[-1]]


__all__ = [
    "RouteResult",
    "haversine_distance",
    "route_distance",
    "optimize_route",
    "optimize_with_directions",
]
