"""Client-authenticated profile initialization."""
from __future__ import annotations

from flask import Blueprint, current_app, g, jsonify

from studio_admin.api.decorators import get_token_claims, require_id_token
from studio_admin.core.exceptions import UpstreamError
from studio_admin.core.profiles import initialize_profile

bp = Blueprint("profile", __name__)


@bp.route("/initialize-user", methods=["POST"])
@require_id_token
def initialize_user():
    """Create the caller's profile record on first sign-in."""
    claims = get_token_claims() or {}
    records = current_app.config["SERVICES"].records
    try:
        profile, created = initialize_profile(records, g.uid, claims.get("email"))
    except UpstreamError as exc:
        return jsonify({"error": "Failed to initialize user", "details": exc.message}), 500

    return jsonify({"uid": g.uid, "created": created, "profile": profile}), 201 if created else 200
