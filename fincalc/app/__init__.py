"""Application factory and app-wide configuration."""

from typing import Optional

from flask import Flask
from flask_cors import CORS
from loguru import logger

from fincalc.app.api.routes import api_bp
from fincalc.config import Settings, get_settings
from fincalc.core.registry import CalculatorRegistry
from fincalc.log import configure_logging


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.extensions["fincalc"] = CalculatorRegistry(settings)

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    logger.info("fincalc API ready, CORS origins: {}", ", ".join(settings.cors_origins))
    return app
