"""JSON error handlers for the application."""
import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from studio_admin.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


def register_error_handlers(app):
    """Register error handlers with the Flask app."""

    @app.errorhandler(400)
    def bad_request(error):
        """Handle 400 Bad Request errors (including malformed JSON bodies)."""
        return jsonify({"error": "Bad Request", "message": _description(error)}), 400

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 Not Found errors."""
        return jsonify({"error": "Not Found", "message": "Resource not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"error": "Method Not Allowed", "message": _description(error)}), 405

    @app.errorhandler(UpstreamError)
    def upstream_error(error):
        """Upstream failures that escaped a route: surface the underlying message."""
        logger.error(f"Upstream {error.service} failure: {error}", exc_info=True)
        return jsonify({"error": "Upstream service failure", "details": error.message}), 500

    @app.errorhandler(Exception)
    def handle_exception(error):
        """Handle uncaught exceptions."""
        if isinstance(error, HTTPException):
            return jsonify({"error": error.name, "message": _description(error)}), error.code

        logger.error(f"Unhandled exception: {error}", exc_info=True)
        return jsonify({"error": "Internal Server Error", "message": str(error) or error.__class__.__name__}), 500


def _description(error) -> str:
    return getattr(error, "description", None) or str(error)
