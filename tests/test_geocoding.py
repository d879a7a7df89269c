"""
Unit tests for travelflow/api/geocoding.py
"""
from unittest.mock import MagicMock, patch

import pytest
from googlemaps.exceptions import Timeout

from travelflow.api import geocoding


def _geocode_result(lat, lng):
    return [{"geometry": {"location": {"lat": lat, "lng": lng}}}]


class TestWithoutCredentials:
    """No GOOGLE_MAPS_API_KEY means the service is unavailable."""

    def test_client_is_none(self):
        assert geocoding.get_maps_client() is None
        assert geocoding.is_geocoding_available() is False

    def test_geocode_address_returns_none(self):
        assert geocoding.geocode_address("서울역") is None

    def test_locations_get_deterministic_fallbacks(self):
        with patch("travelflow.api.geocoding.time.sleep") as mock_sleep:
            waypoints = geocoding.geocode_locations(
                [("A", "주소 A"), ("B", "주소 B"), ("C", "주소 C")], delay=0.1
            )

        assert [w.name for w in waypoints] == ["A", "B", "C"]
        assert (waypoints[0].lat, waypoints[0].lng) == pytest.approx((37.5665, 126.9780))
        assert (waypoints[2].lat, waypoints[2].lng) == pytest.approx((37.5865, 126.9980))
        mock_sleep.assert_not_called()

    def test_empty_input(self):
        assert geocoding.geocode_locations([]) == []


class TestWithClient:

    def test_uses_client_results_and_spaces_requests(self):
        client = MagicMock()
        client.geocode.side_effect = [_geocode_result(35.1, 129.0), _geocode_result(35.2, 129.1)]

        with patch("travelflow.api.geocoding.get_maps_client", return_value=client), \
             patch("travelflow.api.geocoding.time.sleep") as mock_sleep:
            waypoints = geocoding.geocode_locations([("해운대", "부산 해운대"), ("광안리", "부산 광안리")], delay=0.1)

        assert [(w.lat, w.lng) for w in waypoints] == [(35.1, 129.0), (35.2, 129.1)]
        assert mock_sleep.call_count == 2
        mock_sleep.assert_called_with(0.1)

    def test_failed_lookup_falls_back_in_place(self):
        client = MagicMock()
        client.geocode.side_effect = [_geocode_result(35.1, 129.0), [], Timeout()]

        with patch("travelflow.api.geocoding.get_maps_client", return_value=client):
            waypoints = geocoding.geocode_locations(
                [("ok", "주소1"), ("none", "주소2"), ("timeout", "주소3")], delay=0
            )

        assert len(waypoints) == 3
        assert (waypoints[0].lat, waypoints[0].lng) == (35.1, 129.0)
        assert (waypoints[1].lat, waypoints[1].lng) == pytest.approx(geocoding.fallback_coordinates(1))
        assert (waypoints[2].lat, waypoints[2].lng) == pytest.approx(geocoding.fallback_coordinates(2))

    def test_lookups_are_cached(self):
        client = MagicMock()
        client.geocode.return_value = _geocode_result(1.0, 2.0)

        with patch("travelflow.api.geocoding.get_maps_client", return_value=client):
            assert geocoding.geocode_address("같은 주소") == (1.0, 2.0)
            assert geocoding.geocode_address("같은 주소") == (1.0, 2.0)

        client.geocode.assert_called_once_with("같은 주소")

    def test_client_built_from_env_key(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "AIza-test")
        with patch("travelflow.api.geocoding.googlemaps.Client") as mock_cls:
            assert geocoding.get_maps_client() is mock_cls.return_value
            assert geocoding.get_maps_client() is mock_cls.return_value
        mock_cls.assert_called_once_with(key="AIza-test")

    def test_rejected_key_means_unavailable(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "bad")
        with patch("travelflow.api.geocoding.googlemaps.Client", side_effect=ValueError("Invalid API key provided.")):
            assert geocoding.get_maps_client() is None

    def test_failed_lookup_is_retried(self):
        client = MagicMock()
        client.geocode.side_effect = [Timeout(), _geocode_result(1.0, 2.0)]

        with patch("travelflow.api.geocoding.get_maps_client", return_value=client):
            assert geocoding.geocode_address("잠깐 끊긴 주소") is None
            assert geocoding.geocode_address("잠깐 끊긴 주소") == (1.0, 2.0)
            assert geocoding.geocode_address("잠깐 끊긴 주소") == (1.0, 2.0)

        assert client.geocode.call_count == 2

    def test_cache_evicts_oldest_entry(self, monkeypatch):
        monkeypatch.setattr(geocoding, "CACHE_MAX_ENTRIES", 2)
        client = MagicMock()
        client.geocode.return_value = _geocode_result(1.0, 2.0)

        with patch("travelflow.api.geocoding.get_maps_client", return_value=client):
            for address in ("a", "b", "c", "a"):
                geocoding.geocode_address(address)

        assert [c.args[0] for c in client.geocode.call_args_list] == ["a", "b", "c", "a"]


class TestRuntimeKey:

    def test_override_wins_over_env(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "AIza-env")
        geocoding.set_api_key("AIza-saved")
        with patch("travelflow.api.geocoding.googlemaps.Client") as mock_cls:
            geocoding.get_maps_client()
        mock_cls.assert_called_once_with(key="AIza-saved")

    def test_clearing_override_restores_env(self, monkeypatch):
        geocoding.set_api_key("AIza-saved")
        geocoding.set_api_key(None)
        assert geocoding.get_maps_client() is None
