# travelflow/api/services/map_service.py
"""Service layer for map-related operations."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from travelflow.api import geocoding
from travelflow.api.config import get_google_maps_config
from travelflow.api.models import Itinerary, Waypoint
from travelflow.api.routing import (
    SOURCE_DIRECTIONS,
    SOURCE_LOCAL,
    RouteResult,
    optimize_route,
    optimize_with_directions,
    route_distance,
)

logger = logging.getLogger(__name__)


class MapService:
    """Handles geocoding of itinerary days and route ordering."""

    @staticmethod
    def waypoints_for_day(itinerary: Itinerary, day_id: Optional[str] = None,
                          delay: Optional[float] = None) -> List[Waypoint]:
        """Geocode the activities of one day (or of the whole trip).

        Args:
            itinerary: Current itinerary
            day_id: Day to map; all days when omitted
            delay: Seconds between geocoding requests (config default)

        Returns:
            One waypoint per activity, in activity order
        """
        queries = itinerary.location_queries(day_id)
        logger.info(f"Mapping {len(queries)} activities (day={day_id or 'all'})")
        return geocoding.geocode_locations(queries, delay=delay)

    @staticmethod
    def optimize(waypoints: Sequence[Waypoint], mode: Optional[str] = None) -> RouteResult:
        """Reorder waypoints into a short visiting path.

        The Directions API result is used when the service is reachable and
        returns a route; otherwise the local nearest-neighbour heuristic
        runs with both the first and last waypoint pinned.

        Args:
            waypoints: Waypoints in their current order
            mode: Travel mode for the Directions API (config default)

        Returns:
            RouteResult with the new order and which path produced it
        """
        waypoints = list(waypoints)
        if len(waypoints) <= 2:
            return RouteResult(waypoints, SOURCE_LOCAL, route_distance(waypoints))

        mode = mode or get_google_maps_config()["travel_mode"]
        client = geocoding.get_maps_client()
        if client is not None:
            ordered = optimize_with_directions(waypoints, client, mode=mode)
            if ordered is not None:
                return RouteResult(ordered, SOURCE_DIRECTIONS, route_distance(ordered))
            logger.warning("Directions API unavailable for this route; using local optimiser")

        ordered = optimize_route(waypoints, keep_last=True)
        return RouteResult(ordered, SOURCE_LOCAL, route_distance(ordered))

    @staticmethod
    def validate_coordinates(lat: float, lng: float) -> bool:
        """Validate that coordinates are within valid ranges."""
        return -90 <= lat <= 90 and -180 <= lng <= 180

    @staticmethod
    def calculate_bounds(waypoints: Sequence[Waypoint]) -> Dict[str, Any]:
        """Calculate bounding box for a set of waypoints.

        Returns:
            Dictionary with north, south, east, west bounds (empty if none)
        """
        if not waypoints:
            return {}

        lats = [w.lat for w in waypoints]
        lngs = [w.lng for w in waypoints]
        return {
            'north': max(lats),
            'south': min(lats),
            'east': max(lngs),
            'west': min(lngs)
        }

    @staticmethod
    def directions_url(waypoints: Sequence[Waypoint]) -> str:
        """Google Maps link that opens the waypoints as a multi-stop route."""
        path = "/".join(f"{w.lat},{w.lng}" for w in waypoints)
        return f"https://www.google.com/maps/dir/{path}"

    @staticmethod
    def estimate_travel_time(distance_meters: float, mode: str = "walking") -> int:
        """Estimate travel time in minutes based on distance and mode."""
        # Average speeds in meters per minute
        speeds = {
            "driving": 666,    # ~40 km/h
            "walking": 83,     # ~5 km/h
            "transit": 333,    # ~20 km/h
            "bicycling": 250   # ~15 km/h
        }

        speed = speeds.get(mode, speeds["walking"])
        return max(1, int(distance_meters / speed))


# Export for use in other modules
__all__ = ['MapService']
