# travelflow/routes/__init__.py
import logging

from flask import jsonify

from travelflow.api.errors import LLMError, ReplyFormatError, TravelFlowError

logger = logging.getLogger(__name__)

NAMESPACE = "/travel/ws"


def error_payload(error: TravelFlowError) -> dict:
    """JSON body for a TravelFlowError; upstream failures get a user message."""
    payload = {"error": str(error), "type": type(error).__name__}
    if isinstance(error, (LLMError, ReplyFormatError)):
        payload["message"] = error.user_message
        payload["status_code"] = getattr(error, "status_code", None)
    return payload


def register_error_handlers(blueprint) -> None:
    """Translate service exceptions into JSON responses with their status."""

    @blueprint.errorhandler(TravelFlowError)
    def handle_travelflow_error(error):
        if error.http_status >= 500:
            logger.error(f"{type(error).__name__}: {error}")
        else:
            logger.info(f"{type(error).__name__}: {error}")
        return jsonify(error_payload(error)), error.http_status


__all__ = ["NAMESPACE", "error_payload", "register_error_handlers"]
