# travelflow/api/geocoding.py
from __future__ import annotations

import logging
import threading
import time
from typing import Dict, Iterable, List, Optional, Tuple

import googlemaps
from googlemaps.exceptions import ApiError, HTTPError, Timeout, TransportError

from travelflow.api.config import get_geocode_delay, get_google_maps_config
from travelflow.api.models import Waypoint

logger = logging.getLogger(__name__)

# Seoul City Hall; demo coordinates fan out from here when geocoding fails.
FALLBACK_ORIGIN = (37.5665, 126.9780)
FALLBACK_STEP = 0.01

_gmaps: Optional[googlemaps.Client] = None
_api_key_override: Optional[str] = None

# successful look-ups only; failures are retried on the next call
_geocoding_cache: Dict[str, Tuple[float, float]] = {}
_cache_lock = threading.Lock()
CACHE_MAX_ENTRIES = 1000


def get_maps_client() -> Optional[googlemaps.Client]:
    """Return a cached googlemaps.Client, or None without a usable key."""
    global _gmaps
    if _gmaps is None:
        api_key = _api_key_override or get_google_maps_config().get("api_key", "")
        if not api_key:
            logger.info("No Google Maps API key configured; geocoding unavailable")
            return None
        try:
            logger.info(f"Initializing Google Maps client with key: {api_key[:6]}...")
            _gmaps = googlemaps.Client(key=api_key)
        except ValueError as e:
            # googlemaps rejects malformed keys at construction time
            logger.error(f"Failed to initialize Google Maps client: {e}")
            return None
    return _gmaps


def reset_client() -> None:
    """Forget the cached client and cached lookups (e.g. after a key change)."""
    global _gmaps
    _gmaps = None
    with _cache_lock:
        _geocoding_cache.clear()


def set_api_key(api_key: Optional[str]) -> None:
    """Use ``api_key`` instead of GOOGLE_MAPS_API_KEY; None restores the env key."""
    global _api_key_override
    _api_key_override = (api_key or "").strip() or None
    reset_client()


def is_geocoding_available() -> bool:
    return get_maps_client() is not None


def geocode_address(address: str) -> Optional[Tuple[float, float]]:
    """Resolve a free-text address to (lat, lng), or None if not found."""
    with _cache_lock:
        cached = _geocoding_cache.get(address)
    if cached is not None:
        return cached

    client = get_maps_client()
    if client is None:
        return None

    try:
        logger.debug(f"Geocoding address: {address}")
        results = client.geocode(address)
    except (ApiError, HTTPError, Timeout, TransportError) as e:
        logger.error(f"Geocoding error for '{address}': {e}")
        return None

    if not results:
        logger.warning(f"No results found for address: {address}")
        return None

    loc = results[0]["geometry"]["location"]
    coords = (loc["lat"], loc["lng"])
    logger.debug(f"Geocoded {address} to {coords[0]}, {coords[1]}")
    with _cache_lock:
        if len(_geocoding_cache) >= CACHE_MAX_ENTRIES:
            _geocoding_cache.pop(next(iter(_geocoding_cache)))
        _geocoding_cache[address] = coords
    return coords


def fallback_coordinates(index: int) -> Tuple[float, float]:
    """Deterministic demo coordinate for the index-th waypoint."""
    lat, lng = FALLBACK_ORIGIN
    return lat + index * FALLBACK_STEP, lng + index * FALLBACK_STEP


def geocode_locations(locations: Iterable[Tuple[str, str]],
                      delay: Optional[float] = None) -> List[Waypoint]:
    """Geocode (name, address) pairs one after another.

    Failed look-ups get fallback coordinates instead of being dropped, so
    the output always has one waypoint per input, in input order. Requests
    are spaced ``delay`` seconds apart to stay under provider rate limits.
    Never raises.
    """
    delay = get_geocode_delay() if delay is None else delay
    available = is_geocoding_available()
    waypoints: List[Waypoint] = []
    start_time = time.time()

    for name, address in locations:
        coords = geocode_address(address) if available and address else None
        if coords is None:
            coords = fallback_coordinates(len(waypoints))
            logger.warning(f"Using fallback coordinates for '{name}': {coords}")

        waypoints.append(Waypoint(name=name, address=address, lat=coords[0], lng=coords[1]))

        if available and delay > 0:
            time.sleep(delay)

    duration = time.time() - start_time
    logger.info(f"Geocoded {len(waypoints)} locations in {duration:.2f}s")
    return waypoints


__all__ = [
    "get_maps_client",
    "geocode_address",
    "geocode_locations",
    "fallback_coordinates",
    "is_geocoding_available",
    "reset_client",
    "set_api_key",
]
