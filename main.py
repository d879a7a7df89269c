"""
TravelFlow – main application entry point

* Flask app + Socket.IO (threading mode) built by ``travelflow.app.create_app``.
* The collaboration namespace is ``/travel/ws``.
* Run locally with ``python main.py``.
"""

import logging

from dotenv import load_dotenv

# --------------------------------------------------------------------------- #
# Environment & logging
# --------------------------------------------------------------------------- #
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

from travelflow.api.config import get_port  # noqa: E402
from travelflow.app import create_app  # noqa: E402

app, socketio = create_app()

# --------------------------------------------------------------------------- #
# Local development runner
# --------------------------------------------------------------------------- #
if __name__ == "__main__":
    port = get_port()
    logger.info("Starting travel app on http://localhost:%d", port)
    socketio.run(app, host="0.0.0.0", port=port, debug=False, allow_unsafe_werkzeug=True)

# Export both app and socketio so a router can mount them
__all__ = ["app", "socketio"]
