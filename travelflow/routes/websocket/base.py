# travelflow/routes/websocket/base.py
"""Shared plumbing for the collaboration namespace handlers."""

import logging
from flask import request
from flask_socketio import emit

from travelflow.api.errors import TravelFlowError, ValidationError
from travelflow.routes import NAMESPACE, error_payload

logger = logging.getLogger(__name__)


class BaseWebSocketHandler:
    """Reply/broadcast helpers, event logging and error reporting."""

    def __init__(self, socketio, namespace=NAMESPACE):
        self.socketio = socketio
        self.namespace = namespace

    def reply(self, event, data):
        """Send an event back to the client whose event is being handled."""
        emit(event, data, namespace=self.namespace)

    def broadcast_to_plan(self, plan_id, event, data):
        """Send an event to every client that joined ``plan_id``."""
        self.socketio.emit(event, data, room=plan_id, namespace=self.namespace)

    def log_event(self, event_name, data=None):
        plan_id = data.get("plan_id") if isinstance(data, dict) else None
        if plan_id:
            logger.info(f"[WS] {event_name} - Client: {request.sid}, Plan: {plan_id}")
        else:
            logger.info(f"[WS] {event_name} - Client: {request.sid}")

    def handle_error(self, error, event_name=""):
        """Report a failed event to its sender as an 'error' event."""
        logger.warning(f"[WS] {event_name} rejected - Client: {request.sid}, Error: {error}")
        payload = error_payload(error) if isinstance(error, TravelFlowError) else {"error": str(error)}
        payload["event"] = event_name
        self.reply("error", payload)

    @staticmethod
    def require(data, key):
        """Fetch a required, non-empty field from an event payload."""
        if not isinstance(data, dict):
            raise ValidationError("Event payload must be an object")
        value = data.get(key)
        if value in (None, ""):
            raise ValidationError(f"'{key}' is required")
        return value
