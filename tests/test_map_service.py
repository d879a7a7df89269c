"""
Unit tests for travelflow/api/services/map_service.py
"""
from unittest.mock import MagicMock, patch

import pytest

from travelflow.api.models import Waypoint
from travelflow.api.services.map_service import MapService


def _wp(name, lat, lng):
    return Waypoint(name=name, address=name, lat=lat, lng=lng)


@pytest.fixture
def points():
    return [_wp("start", 0, 0), _wp("far", 0, 10), _wp("mid", 0, 5), _wp("end", 0, 1)]


class TestWaypointsForDay:

    def test_one_waypoint_per_activity(self, itinerary):
        waypoints = MapService.waypoints_for_day(itinerary, "plan-0", delay=0)
        assert [w.name for w in waypoints] == ["경복궁 관람", "광장시장 점심"]
        assert waypoints[0].address == "서울 종로구 사직로 161"

    def test_whole_trip_when_no_day(self, itinerary):
        assert len(MapService.waypoints_for_day(itinerary, delay=0)) == 3


class TestOptimize:

    def test_short_routes_unchanged(self):
        pts = [_wp("a", 0, 1), _wp("b", 0, 0)]
        result = MapService.optimize(pts)
        assert result.waypoints == pts
        assert result.source == "local"

    def test_local_fallback_pins_both_ends(self, points):
        result = MapService.optimize(points)
        assert result.source == "local"
        assert [w.name for w in result.waypoints] == ["start", "mid", "far", "end"]
        assert result.distance_km > 0

    def test_uses_directions_when_available(self, points):
        gmaps = MagicMock()
        gmaps.directions.return_value = [{"waypoint_order": [1, 0]}]

        with patch("travelflow.api.geocoding.get_maps_client", return_value=gmaps):
            result = MapService.optimize(points, mode="driving")

        assert result.source == "directions"
        assert [w.name for w in result.waypoints] == ["start", "mid", "far", "end"]
        assert gmaps.directions.call_args.kwargs["mode"] == "driving"

    def test_directions_failure_falls_back(self, points):
        gmaps = MagicMock()
        gmaps.directions.return_value = []

        with patch("travelflow.api.geocoding.get_maps_client", return_value=gmaps):
            result = MapService.optimize(points)

        assert result.source == "local"
        assert result.waypoints[-1].name == "end"


class TestHelpers:

    def test_calculate_bounds(self, points):
        assert MapService.calculate_bounds(points) == {"north": 0, "south": 0, "east": 10, "west": 0}
        assert MapService.calculate_bounds([]) == {}

    @pytest.mark.parametrize("lat, lng, valid", [
        (37.5, 127.0, True),
        (90, 180, True),
        (91, 0, False),
        (0, -181, False),
    ])
    def test_validate_coordinates(self, lat, lng, valid):
        assert MapService.validate_coordinates(lat, lng) is valid

    def test_directions_url(self):
        url = MapService.directions_url([_wp("a", 37.5, 127.0), _wp("b", 37.6, 127.1)])
        assert url == "https://www.google.com/maps/dir/37.5,127.0/37.6,127.1"

    def test_estimate_travel_time(self):
        assert MapService.estimate_travel_time(830, "walking") == 10
        assert MapService.estimate_travel_time(10, "driving") == 1
        assert MapService.estimate_travel_time(830, "teleport") == 10
