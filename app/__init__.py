import atexit
import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from .config import Settings
from .gcp_clients import GcpClients, init_services
from .routes import main_bp
from .services.registry import EXTENSION_KEY, build_services


def create_app(settings: Optional[Settings] = None, clients: Optional[GcpClients] = None):
    settings = settings or Settings.from_env()

    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    app = Flask(__name__)
    # Leave headroom for multipart framing; validate_image enforces the real limit
    app.config["MAX_CONTENT_LENGTH"] = (settings.max_image_size_mb + 1) * 1024 * 1024

    CORS(
        app,
        origins=settings.cors_origins,
        methods=["GET", "POST", "PUT", "DELETE"],
        supports_credentials=True,
    )

    # Initialize Services
    if clients is None:
        clients = init_services(settings)
        atexit.register(clients.close)
    app.extensions[EXTENSION_KEY] = build_services(settings, clients)

    # Register Blueprints
    app.register_blueprint(main_bp)

    return app
