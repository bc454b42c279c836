"""Standalone media cleanup routes."""
from __future__ import annotations
import logging

from flask import Blueprint, current_app, jsonify, request

from studio_admin.core.asset_cleanup import (
    URL_ROLES,
    delete_assets,
    delete_assets_by_url,
    delete_folder_tree,
)

bp = Blueprint("assets", __name__)

logger = logging.getLogger(__name__)


@bp.route("/delete-cloudinary-assets", methods=["POST"])
def delete_cloudinary_assets():
    """Delete assets given either ``public_ids`` or ``artworkUrl``/``audioUrl``.

    Per-class failures are reported in ``details`` and never fail the request.
    """
    payload = request.get_json(silent=True) or {}
    assets = current_app.config["SERVICES"].assets

    if "public_ids" in payload:
        public_ids = payload.get("public_ids")
        if (
            not isinstance(public_ids, list)
            or not public_ids
            or not all(isinstance(public_id, str) and public_id for public_id in public_ids)
        ):
            return jsonify({"error": "Missing 'public_ids' array."}), 400
        logger.info(f"Received request to delete public_ids: {public_ids}")
        report = delete_assets(assets, public_ids)
    elif any(payload.get(field) for field in URL_ROLES):
        urls = {field: payload.get(field) for field in URL_ROLES}
        try:
            report = delete_assets_by_url(assets, urls)
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400
    else:
        return jsonify({"error": "Provide 'public_ids' or at least one of 'artworkUrl', 'audioUrl'."}), 400

    return jsonify({"message": "Assets and folder cleanup process finished.", **report.to_dict()}), 200


@bp.route("/delete-cloudinary-folder", methods=["POST"])
def delete_cloudinary_folder():
    """Delete a folder and everything under it. Always 200 once a folder is named."""
    payload = request.get_json(silent=True) or {}
    folder = payload.get("folder")
    if not folder or not isinstance(folder, str) or not folder.strip("/"):
        return jsonify({"error": "Missing 'folder' path."}), 400

    report = delete_folder_tree(current_app.config["SERVICES"].assets, folder)
    return jsonify({"message": "Cleanup process finished.", **report.to_dict()}), 200
