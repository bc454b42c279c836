"""Flask application factory and bootstrap.

This module provides the create_app() factory function for initializing
the Flask application with all blueprints, middleware, and configuration.
"""
from __future__ import annotations
import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from studio_admin.config import AppConfig, load_settings
from studio_admin.core.services import Services, build_services

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Application Factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app(cfg: Optional[AppConfig] = None, services: Optional[Services] = None) -> Flask:
    """Create and configure Flask application.

    Args:
        cfg: Settings (loaded from the environment when omitted)
        services: Collaborator handles (built from cfg when omitted)

    Raises:
        ConfigurationError: Missing credentials or unloadable Firebase key
    """
    if cfg is None:
        cfg = load_settings()
    _configure_logging(cfg.log_level)

    if services is None:
        services = build_services(cfg)

    app = Flask(__name__)
    app.config["APP_CONFIG"] = cfg
    app.config["SERVICES"] = services
    app.json.sort_keys = False

    CORS(app, origins=cfg.cors_origin_list)

    from studio_admin.api import assets, errors, health, profile, users

    app.register_blueprint(health.bp)
    app.register_blueprint(users.bp)
    app.register_blueprint(assets.bp)
    app.register_blueprint(profile.bp)

    errors.register_error_handlers(app)

    logger.info(f"Admin backend configured (cloud={cfg.cloudinary_cloud_name}, cors={cfg.cors_origins})")
    return app


def _configure_logging(level: str) -> None:
    """Configure root logging once; gunicorn workers keep their own handlers."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        root.setLevel(level)
