# travelflow/routes/my_plans.py
"""Routes for the user's saved trips."""

from flask import Blueprint, jsonify, request

from travelflow.api.errors import ValidationError
from travelflow.routes import register_error_handlers


def _json_object() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def create_my_plans_blueprint(my_plans_service):
    """Create the my-plans blueprint.

    Args:
        my_plans_service: MyPlansService backed by the app store

    Returns:
        Configured Flask Blueprint
    """
    plans_bp = Blueprint("my_plans", __name__, url_prefix="/travel/api/my-plans")
    register_error_handlers(plans_bp)

    @plans_bp.route("", methods=["GET"])
    def search():
        """Search by title/destination and filter by status."""
        return jsonify(my_plans_service.search(
            query=request.args.get("query"),
            status=request.args.get("status"),
        ))

    @plans_bp.route("/recent")
    def recent():
        limit = request.args.get("limit", type=int)
        return jsonify(my_plans_service.recently_updated(limit))

    @plans_bp.route("/stats")
    def stats():
        return jsonify(my_plans_service.stats())

    @plans_bp.route("", methods=["POST"])
    def add():
        return jsonify(my_plans_service.add(_json_object())), 201

    @plans_bp.route("/<plan_id>")
    def get(plan_id):
        return jsonify(my_plans_service.get(plan_id))

    @plans_bp.route("/<plan_id>", methods=["PATCH"])
    def update(plan_id):
        return jsonify(my_plans_service.update(plan_id, _json_object()))

    @plans_bp.route("/<plan_id>", methods=["DELETE"])
    def delete(plan_id):
        return jsonify({"deleted": my_plans_service.delete(plan_id)["id"]})

    return plans_bp


__all__ = ['create_my_plans_blueprint']
