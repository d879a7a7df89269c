"""
Unit tests for travelflow/api/routing.py
"""
from unittest.mock import MagicMock

import pytest
from googlemaps.exceptions import ApiError

from travelflow.api.models import Waypoint
from travelflow.api.routing import (
    haversine_distance,
    optimize_route,
    optimize_with_directions,
    route_distance,
)


def _wp(name, lat, lng):
    return Waypoint(name=name, address=name, lat=lat, lng=lng)


class TestHaversine:

    @pytest.mark.parametrize("a, b", [
        ((37.5665, 126.9780), (35.1796, 129.0756)),
        ((0, 0), (0, 180)),
        ((-33.8688, 151.2093), (51.5074, -0.1278)),
    ])
    def test_symmetric(self, a, b):
        pa = {"lat": a[0], "lng": a[1]}
        pb = {"lat": b[0], "lng": b[1]}
        assert haversine_distance(pa, pb) == pytest.approx(haversine_distance(pb, pa))

    def test_zero_on_identical_points(self):
        p = _wp("x", 37.5, 127.0)
        assert haversine_distance(p, p) == 0

    def test_seoul_to_busan(self):
        seoul = {"lat": 37.5665, "lng": 126.9780}
        busan = {"lat": 35.1796, "lng": 129.0756}
        assert haversine_distance(seoul, busan) == pytest.approx(325, abs=5)

    def test_one_degree_of_latitude(self):
        assert haversine_distance({"lat": 0, "lng": 0}, {"lat": 1, "lng": 0}) == pytest.approx(111.19, abs=0.01)


class TestOptimizeRoute:

    @pytest.mark.parametrize("n", [0, 1, 2])
    def test_degenerate_inputs_unchanged(self, n):
        points = [_wp(f"p{i}", i * 5.0, 0.0) for i in range(n)][::-1]
        result = optimize_route(points)
        assert result == points
        assert result is not points

    def test_nearest_neighbour_order(self):
        a, b, c = _wp("a", 0, 0), _wp("b", 0, 10), _wp("c", 0, 1)
        assert optimize_route([a, b, c]) == [a, c, b]

    def test_first_waypoint_stays_first(self):
        points = [_wp("start", 0, 5), _wp("x", 0, 0), _wp("y", 0, 4), _wp("z", 0, 1)]
        result = optimize_route(points)
        assert result[0].name == "start"
        assert [w.name for w in result] == ["start", "y", "z", "x"]

    def test_last_waypoint_may_move_by_default(self):
        points = [_wp("start", 0, 0), _wp("far", 0, 10), _wp("end", 0, 1)]
        assert optimize_route(points)[-1].name == "far"

    def test_keep_last_pins_destination(self):
        points = [_wp("start", 0, 0), _wp("far", 0, 10), _wp("mid", 0, 5), _wp("end", 0, 1)]
        result = optimize_route(points, keep_last=True)
        assert [w.name for w in result] == ["start", "mid", "far", "end"]

    def test_ties_pick_earliest_candidate(self):
        points = [_wp("o", 0, 0), _wp("east", 0, 1), _wp("west", 0, -1)]
        assert [w.name for w in optimize_route(points)] == ["o", "east", "west"]

    def test_is_a_permutation(self):
        points = [_wp(f"p{i}", (i * 7) % 5, (i * 3) % 4) for i in range(8)]
        result = optimize_route(points)
        assert sorted(w.name for w in result) == sorted(w.name for w in points)

    def test_accepts_plain_dicts(self):
        points = [{"lat": 0, "lng": 0}, {"lat": 0, "lng": 10}, {"lat": 0, "lng": 1}]
        assert optimize_route(points) == [points[0], points[2], points[1]]

    def test_route_distance(self):
        points = [_wp("a", 0, 0), _wp("b", 1, 0), _wp("c", 2, 0)]
        assert route_distance(points) == pytest.approx(2 * 111.19, abs=0.05)
        assert route_distance(points[:1]) == 0


class TestOptimizeWithDirections:

    def _points(self):
        return [_wp("start", 0, 0), _wp("a", 0, 3), _wp("b", 0, 1), _wp("end", 0, 4)]

    def test_reorders_intermediate_stops(self):
        gmaps = MagicMock()
        gmaps.directions.return_value = [{"waypoint_order": [1, 0]}]

        result = optimize_with_directions(self._points(), gmaps, mode="walking")

        assert [w.name for w in result] == ["start", "b", "a", "end"]
        args, kwargs = gmaps.directions.call_args
        assert args == ((0.0, 0.0), (0.0, 4.0))
        assert kwargs["optimize_waypoints"] is True
        assert kwargs["mode"] == "walking"
        assert kwargs["waypoints"] == [(0.0, 3.0), (0.0, 1.0)]

    def test_no_route_returns_none(self):
        gmaps = MagicMock()
        gmaps.directions.return_value = []
        assert optimize_with_directions(self._points(), gmaps) is None

    def test_api_error_returns_none(self):
        gmaps = MagicMock()
        gmaps.directions.side_effect = ApiError("ZERO_RESULTS")
        assert optimize_with_directions(self._points(), gmaps) is None

    def test_bad_waypoint_order_returns_none(self):
        gmaps = MagicMock()
        gmaps.directions.return_value = [{"waypoint_order": [0, 0]}]
        assert optimize_with_directions(self._points(), gmaps) is None
