# travelflow/routes/websocket/__init__.py
"""WebSocket route handlers initialization."""

import logging

from .base import NAMESPACE
from .collaboration import CollaborationHandler

logger = logging.getLogger(__name__)


def register_websocket_handlers(socketio, collaboration_service):
    """Register all WebSocket event handlers with SocketIO.

    Args:
        socketio: Flask-SocketIO instance
        collaboration_service: CollaborationService shared with the app
    """
    logger.info(f"Registering collaboration handler for namespace: {NAMESPACE}")
    CollaborationHandler(socketio, collaboration_service, NAMESPACE).register_handlers()

    @socketio.on("connect", namespace=NAMESPACE)
    def handle_connect(auth=None):
        logger.info("Client connected to collaboration namespace")

    @socketio.on("disconnect", namespace=NAMESPACE)
    def handle_disconnect(*args):
        logger.info("Client disconnected from collaboration namespace")


__all__ = ['register_websocket_handlers', 'NAMESPACE']
