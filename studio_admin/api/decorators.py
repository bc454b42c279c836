"""
Flask decorators for client authentication.

Client-facing endpoints receive a Firebase ID token as an OAuth 2.0 Bearer
token (RFC 6750). Verification is delegated to the identity directory.
"""

import logging
from functools import wraps
from typing import Optional

from flask import current_app, g, jsonify, request

from studio_admin.core.exceptions import TokenValidationError

logger = logging.getLogger(__name__)


def _unauthorized(detail: str):
    return jsonify({"error": "Unauthorized", "message": detail}), 401


def require_id_token(fn):
    """
    Decorator to require a valid Bearer ID token.

    On success the verified claims are attached to ``g.token_claims`` and the
    caller's uid to ``g.uid``.

    Example:
        @bp.route("/initialize-user", methods=["POST"])
        @require_id_token
        def initialize_user():
            return {"uid": g.uid}
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        auth_header = request.headers.get("Authorization", "")

        if not auth_header:
            logger.warning("Request missing Authorization header")
            return _unauthorized("Authorization header required. Use 'Authorization: Bearer <token>'")

        if not auth_header.startswith("Bearer "):
            logger.warning(f"Request with invalid Authorization format: {auth_header[:20]}")
            return _unauthorized("Invalid Authorization header format. Expected 'Bearer <token>'")

        token = auth_header[7:].strip()
        if not token:
            return _unauthorized("Bearer token is empty")

        identity = current_app.config["SERVICES"].identity
        try:
            claims = identity.verify_id_token(token)
        except TokenValidationError as e:
            logger.warning(f"ID token validation failed: {e}")
            return _unauthorized(f"Invalid token: {e}")

        uid = claims.get("uid") or claims.get("sub")
        if not uid:
            return _unauthorized("Token carries no subject")

        g.token_claims = claims
        g.uid = uid
        return fn(*args, **kwargs)

    return wrapper


def get_token_claims() -> Optional[dict]:
    """Verified claims for the current request, after @require_id_token."""
    return getattr(g, "token_claims", None)
