# travelflow/app.py
"""Application factory: Flask app, Socket.IO and the shared services."""

import logging
import os

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO

from travelflow.api.config import get_storage_path
from travelflow.api.services.collaboration_service import CollaborationService
from travelflow.api.services.credential_service import CredentialService
from travelflow.api.services.itinerary_service import ItineraryService, RequestSequencer
from travelflow.api.services.map_service import MapService
from travelflow.api.services.my_plans_service import MyPlansService
from travelflow.api.services.recommendation_service import RecommendationService
from travelflow.api.storage import JsonFileStore, SessionItineraryRepository, StoreItineraryRepository
from travelflow.routes.my_plans import create_my_plans_blueprint
from travelflow.routes.recommendations import create_recommendations_blueprint
from travelflow.routes.travel import create_travel_blueprint
from travelflow.routes.websocket import NAMESPACE, register_websocket_handlers

logger = logging.getLogger(__name__)


def create_app(config=None):
    """Build the Flask app and its Socket.IO server.

    Recognised config keys besides Flask's own:
        TRAVELFLOW_STORE: key-value store object (default: JsonFileStore)
        TRAVELFLOW_ITINERARY_BACKEND: "store" (default) or "session"
        TRAVELFLOW_CLIENT_FACTORY: callable returning a GeminiClient

    Returns:
        (app, socketio)
    """
    app = Flask(__name__)

    flask_secret_key = os.getenv("FLASK_SECRET_KEY")
    if not flask_secret_key:
        logger.warning("No FLASK_SECRET_KEY found. Generated a temporary key.")
        flask_secret_key = os.urandom(32).hex()
    app.secret_key = flask_secret_key

    app.config.update(
        SESSION_COOKIE_SECURE=False,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
        PERMANENT_SESSION_LIFETIME=86400,
    )
    app.json.ensure_ascii = False
    if config:
        app.config.update(config)

    # CORS for local dev / cross-origin front-end requests
    CORS(app, origins="*", supports_credentials=True)

    store = app.config.get("TRAVELFLOW_STORE") or JsonFileStore(get_storage_path())
    if app.config.get("TRAVELFLOW_ITINERARY_BACKEND", "store") == "session":
        repository = SessionItineraryRepository()
    else:
        repository = StoreItineraryRepository(store)

    credential_service = CredentialService(store)
    credential_service.apply()
    recommendation_service = RecommendationService(store)
    my_plans_service = MyPlansService(store)

    def find_plan(plan_id):
        return recommendation_service.find_plan(plan_id) or my_plans_service.find_plan(plan_id)

    itinerary_service = ItineraryService(
        repository,
        client_factory=app.config.get("TRAVELFLOW_CLIENT_FACTORY") or credential_service.client_factory,
        sequencer=RequestSequencer(),
        templates=find_plan,
    )
    collaboration_service = CollaborationService(store)

    app.extensions["travelflow"] = {
        "store": store,
        "credentials": credential_service,
        "itinerary": itinerary_service,
        "recommendations": recommendation_service,
        "my_plans": my_plans_service,
        "collaboration": collaboration_service,
    }

    app.register_blueprint(create_travel_blueprint(itinerary_service, credential_service, MapService))
    app.register_blueprint(create_recommendations_blueprint(recommendation_service))
    app.register_blueprint(create_my_plans_blueprint(my_plans_service))

    socketio = SocketIO(
        app,
        cors_allowed_origins="*",
        async_mode="threading",
        logger=False,
        engineio_logger=False,
    )
    register_websocket_handlers(socketio, collaboration_service)
    logger.info(f"Socket.IO initialised (async_mode=threading, namespace={NAMESPACE})")

    return app, socketio


__all__ = ["create_app"]
