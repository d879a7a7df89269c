# travelflow/routes/recommendations.py
"""Routes for recommended templates and community recommendations."""

from flask import Blueprint, jsonify, request

from travelflow.api.errors import NotFoundError, ValidationError
from travelflow.routes import register_error_handlers

_FILTER_KEYS = ("query", "location", "duration", "budget", "season", "travel_style", "sort_by")


def create_recommendations_blueprint(recommendation_service):
    """Create the recommendations blueprint.

    Args:
        recommendation_service: RecommendationService backed by the app store

    Returns:
        Configured Flask Blueprint
    """
    rec_bp = Blueprint("recommendations", __name__, url_prefix="/travel/api/recommendations")
    register_error_handlers(rec_bp)

    @rec_bp.route("/templates")
    def list_templates():
        return jsonify(recommendation_service.list_templates())

    @rec_bp.route("/templates/<template_id>")
    def get_template(template_id):
        template = recommendation_service.get_template(template_id)
        if template is None:
            raise NotFoundError(f"Template '{template_id}' not found")
        return jsonify(template)

    @rec_bp.route("", methods=["GET"])
    def search():
        """Filter community recommendations via query-string parameters."""
        filters = {k: request.args.get(k) for k in _FILTER_KEYS if request.args.get(k)}
        tags = request.args.getlist("tags")
        if tags:
            filters["tags"] = tags
        return jsonify(recommendation_service.search(filters))

    @rec_bp.route("/facets")
    def facets():
        return jsonify(recommendation_service.facets())

    @rec_bp.route("", methods=["POST"])
    def add():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return jsonify(recommendation_service.add(data)), 201

    @rec_bp.route("/<rec_id>")
    def get(rec_id):
        return jsonify(recommendation_service.get(rec_id))

    @rec_bp.route("/<rec_id>/like", methods=["POST"])
    def like(rec_id):
        user_id = (request.get_json(silent=True) or {}).get("user_id", "")
        if not user_id:
            raise ValidationError("'user_id' is required")
        return jsonify(recommendation_service.toggle_like(rec_id, user_id))

    @rec_bp.route("/<rec_id>/view", methods=["POST"])
    def view(rec_id):
        return jsonify({"views": recommendation_service.increment_views(rec_id)})

    return rec_bp


__all__ = ['create_recommendations_blueprint']
