# travelflow/__init__.py
"""TravelFlow: AI itinerary generation, route ordering and shared trip planning."""

__version__ = "0.1.0"
