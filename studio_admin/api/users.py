"""User administration routes: list, create, delete, enable, disable."""
from __future__ import annotations
import logging

from flask import Blueprint, current_app, jsonify, request

from studio_admin.core.account_state import set_account_disabled
from studio_admin.core.exceptions import UpstreamError

bp = Blueprint("users", __name__)

logger = logging.getLogger(__name__)


def _services():
    return current_app.config["SERVICES"]


def _failure(error: str, details: str, status: int):
    return jsonify({"error": error, "details": details}), status


@bp.route("/users", methods=["GET"])
def list_users():
    try:
        users = _services().identity.list_users()
    except UpstreamError as exc:
        logger.error(f"Error listing users: {exc}", exc_info=True)
        return _failure("Failed to list users", exc.message, 500)
    return jsonify(users)


@bp.route("/users", methods=["POST"])
def create_user():
    payload = request.get_json(silent=True) or {}
    email = payload.get("email")
    password = payload.get("password")
    if not email or not password:
        return jsonify({"error": "Email and password are required fields."}), 400

    try:
        user = _services().identity.create_user(email, password, payload.get("displayName"))
    except UpstreamError as exc:
        logger.error(f"Error creating user {email}: {exc}")
        return _failure("Failed to create user", exc.message, 400)
    return jsonify(user), 201


@bp.route("/users/<uid>", methods=["DELETE"])
def delete_user(uid: str):
    try:
        result = _services().deprovisioning.deprovision(uid)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    if result.success:
        return jsonify(result.to_dict())

    status = 404 if result.not_found else 500
    body = result.to_dict()
    body["error"] = "User not found" if result.not_found else "Failed to delete user"
    return jsonify(body), status


@bp.route("/users/<uid>/disable", methods=["POST"])
def disable_user(uid: str):
    return _toggle(uid, disabled=True)


@bp.route("/users/<uid>/enable", methods=["POST"])
def enable_user(uid: str):
    return _toggle(uid, disabled=False)


def _toggle(uid: str, disabled: bool):
    action = "disable" if disabled else "enable"
    try:
        message = set_account_disabled(_services().identity, uid, disabled)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    except UpstreamError as exc:
        logger.error(f"Error trying to {action} user {uid}: {exc}")
        return _failure(f"Failed to {action} user", exc.message, 500)
    return jsonify({"success": True, "message": message})
