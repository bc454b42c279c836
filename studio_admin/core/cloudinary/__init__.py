"""Cloudinary Admin API client.

Usage:
    from studio_admin.core.cloudinary import AssetHostClient

    assets = AssetHostClient(cloud_name, api_key, api_secret)
    assets.delete_resources(["user/u1/releases/r1/artwork"], resource_type="image")
"""
from .client import (
    AssetHostClient,
    RESOURCE_TYPES,
    REQUEST_TIMEOUT,
    MAX_IDS_PER_CALL,
)

__all__ = [
    "AssetHostClient",
    "RESOURCE_TYPES",
    "REQUEST_TIMEOUT",
    "MAX_IDS_PER_CALL",
]
