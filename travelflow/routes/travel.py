# travelflow/routes/travel.py
"""Travel routes and blueprint configuration."""

import logging

from flask import Blueprint, jsonify, request

from travelflow.api.config import get_gemini_config, get_google_maps_config
from travelflow.api.errors import ValidationError
from travelflow.api.geocoding import is_geocoding_available
from travelflow.api.models import Waypoint
from travelflow.api.services.map_service import MapService
from travelflow.routes import register_error_handlers

logger = logging.getLogger(__name__)

# wire name -> Itinerary.add_activity / update_activity keyword
_ACTIVITY_FIELDS = {
    "activity": "name",
    "name": "name",
    "time": "time",
    "location": "location",
    "description": "description",
    "duration": "duration",
}


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _activity_fields(data: dict) -> dict:
    return {_ACTIVITY_FIELDS[k]: v for k, v in data.items() if k in _ACTIVITY_FIELDS}


def create_travel_blueprint(itinerary_service, credential_service, map_service=MapService):
    """Create and configure the travel blueprint.

    Args:
        itinerary_service: ItineraryService holding the current plan
        credential_service: CredentialService resolving the API keys
        map_service: Geocoding/route service (class with static methods)

    Returns:
        Configured Flask Blueprint
    """
    travel_bp = Blueprint("travel", __name__, url_prefix="/travel")
    register_error_handlers(travel_bp)

    @travel_bp.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok", "service": "travel"})

    @travel_bp.route("/api/config")
    def api_config():
        """Return map and model configuration for the frontend."""
        maps_key = credential_service.maps_key()
        return jsonify({
            "google_maps_api_key": maps_key,
            "maps_configured": bool(maps_key),
            "travel_mode": get_google_maps_config()["travel_mode"],
            "gemini_configured": bool(credential_service.gemini_key()),
            "model": get_gemini_config()["model"],
        })

    @travel_bp.route("/api/keys", methods=["GET"])
    def key_status():
        return jsonify(credential_service.status())

    @travel_bp.route("/api/keys", methods=["PUT"])
    def save_keys():
        """Store both API keys for this server."""
        data = _json_body()
        return jsonify(credential_service.save(data.get("gemini_api_key"), data.get("google_maps_api_key")))

    @travel_bp.route("/api/keys", methods=["DELETE"])
    def clear_keys():
        return jsonify(credential_service.clear())

    # ------------------------------------------------------------------
    # Itinerary
    # ------------------------------------------------------------------
    @travel_bp.route("/api/itinerary", methods=["POST"])
    def generate_itinerary():
        """Generate a new itinerary from the trip form."""
        itinerary, result = itinerary_service.generate(_json_body())
        return jsonify({
            "itinerary": itinerary.to_dicts(),
            "status": result.status,
            "reason": result.reason,
            "stats": itinerary.stats(),
        })

    @travel_bp.route("/api/itinerary", methods=["GET"])
    def get_itinerary():
        itinerary = itinerary_service.require_current()
        return jsonify({"itinerary": itinerary.to_dicts(), "stats": itinerary.stats()})

    @travel_bp.route("/api/itinerary", methods=["DELETE"])
    def reset_itinerary():
        itinerary_service.reset()
        return jsonify({"status": "cleared"})

    @travel_bp.route("/api/itinerary/revise", methods=["POST"])
    def revise():
        """Apply a conversational change request."""
        message = _json_body().get("message", "")
        itinerary, summary = itinerary_service.revise(message)
        return jsonify({"itinerary": itinerary.to_dicts(), "summary": summary})

    @travel_bp.route("/api/itinerary/template/<template_id>", methods=["POST"])
    def load_template(template_id):
        itinerary = itinerary_service.load_template(template_id)
        return jsonify({"itinerary": itinerary.to_dicts(), "stats": itinerary.stats()})

    @travel_bp.route("/api/itinerary/share")
    def share():
        return jsonify({"text": itinerary_service.share_text()})

    @travel_bp.route("/api/itinerary/stats")
    def stats():
        return jsonify(itinerary_service.stats())

    # ------------------------------------------------------------------
    # Day / activity editing
    # ------------------------------------------------------------------
    @travel_bp.route("/api/itinerary/days", methods=["POST"])
    def add_day():
        day = itinerary_service.add_day(_json_body().get("title"))
        return jsonify(day.to_dict()), 201

    @travel_bp.route("/api/itinerary/days/<day_id>", methods=["DELETE"])
    def remove_day(day_id):
        itinerary = itinerary_service.remove_day(day_id)
        return jsonify({"itinerary": itinerary.to_dicts()})

    @travel_bp.route("/api/itinerary/days/<day_id>/activities", methods=["POST"])
    def add_activity(day_id):
        activity = itinerary_service.add_activity(day_id, **_activity_fields(_json_body()))
        return jsonify(activity.to_dict()), 201

    @travel_bp.route("/api/itinerary/days/<day_id>/activities/<activity_id>", methods=["PATCH"])
    def update_activity(day_id, activity_id):
        changes = _activity_fields(_json_body())
        if not changes:
            raise ValidationError("Nothing to update")
        activity = itinerary_service.update_activity(day_id, activity_id, **changes)
        return jsonify(activity.to_dict())

    @travel_bp.route("/api/itinerary/days/<day_id>/activities/<activity_id>", methods=["DELETE"])
    def delete_activity(day_id, activity_id):
        activity = itinerary_service.delete_activity(day_id, activity_id)
        return jsonify({"deleted": activity.to_dict()})

    @travel_bp.route("/api/itinerary/days/<day_id>/activities/<activity_id>/move", methods=["POST"])
    def move_activity(day_id, activity_id):
        direction = _json_body().get("direction", "")
        itinerary = itinerary_service.move_activity(day_id, activity_id, direction)
        return jsonify(itinerary.get_day(day_id).to_dict())

    # ------------------------------------------------------------------
    # Map
    # ------------------------------------------------------------------
    @travel_bp.route("/api/map/waypoints", methods=["POST"])
    def map_waypoints():
        """Geocode the activities of one day (or the whole trip)."""
        day_id = _json_body().get("day_id")
        itinerary = itinerary_service.require_current()
        waypoints = map_service.waypoints_for_day(itinerary, day_id)
        body = {
            "waypoints": [w.to_dict() for w in waypoints],
            "bounds": map_service.calculate_bounds(waypoints),
            "geocoding_available": is_geocoding_available(),
        }
        if day_id:
            body["day_minutes"] = itinerary.day_duration(day_id)
        return jsonify(body)

    @travel_bp.route("/api/map/optimize", methods=["POST"])
    def map_optimize():
        """Reorder the given waypoints into a short route."""
        data = _json_body()
        raw = data.get("waypoints")
        if not isinstance(raw, list):
            raise ValidationError("'waypoints' must be a list")

        waypoints = [Waypoint.from_dict(w) for w in raw]
        for w in waypoints:
            if not map_service.validate_coordinates(w.lat, w.lng):
                raise ValidationError(f"Coordinates out of range for '{w.name}'")

        mode = data.get("mode") or get_google_maps_config()["travel_mode"]
        result = map_service.optimize(waypoints, mode=mode)
        body = result.to_dict()
        body["directions_url"] = map_service.directions_url(result.waypoints)
        body["estimated_minutes"] = map_service.estimate_travel_time(result.distance_km * 1000, mode)
        return jsonify(body)

    return travel_bp


__all__ = ['create_travel_blueprint']
