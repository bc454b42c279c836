"""Low-level HTTP client for the Cloudinary Admin API.

Handles authentication, endpoint construction, and error translation.
"""
from __future__ import annotations
import logging
from typing import Optional, Dict, Any, Iterable
from urllib.parse import quote

import requests

from studio_admin.core.exceptions import AssetHostAPIError, UpstreamError

REQUEST_TIMEOUT = 10
DEFAULT_API_BASE_URL = "https://api.cloudinary.com"

# Content-type classes a stored asset can belong to, in deletion order.
RESOURCE_TYPES = ("image", "video", "raw")

# Admin API accepts at most this many public ids per delete call.
MAX_IDS_PER_CALL = 100

logger = logging.getLogger(__name__)


class AssetHostClient:
    """HTTP client for the Cloudinary Admin API.

    Every call is made exactly once; non-2xx responses raise
    AssetHostAPIError and it is up to the caller to decide whether the
    failure is tolerated.

    Usage:
        assets = AssetHostClient("demo-cloud", "1234", "secret")
        assets.delete_resources(["user/u1/avatar"], resource_type="image")
        assets.delete_folder("user/u1")
    """

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        base_url: Optional[str] = None,
    ):
        """Initialize asset host client.

        Args:
            cloud_name: Cloudinary cloud name
            api_key: Admin API key
            api_secret: Admin API secret
            base_url: API root (defaults to https://api.cloudinary.com)
        """
        if not cloud_name or not api_key or not api_secret:
            raise ValueError("cloud_name, api_key and api_secret are all required")
        self.cloud_name = cloud_name
        self.base_url = (base_url or DEFAULT_API_BASE_URL).rstrip("/")
        self._auth = (api_key, api_secret)

    def delete_resources(
        self,
        public_ids: Iterable[str],
        resource_type: str = "image",
        invalidate: bool = True,
    ) -> Dict[str, Any]:
        """Delete assets by public id within one content-type class.

        Ids that do not exist in the class come back as "not_found" in the
        response's "deleted" map rather than as an error.

        Args:
            public_ids: Public ids to delete
            resource_type: Content-type class (image, video, raw)
            invalidate: Invalidate CDN cached copies

        Returns:
            Merged "deleted" map across batches
        """
        ids = [public_id for public_id in public_ids if public_id]
        if not ids:
            raise ValueError("public_ids must contain at least one id")

        deleted: Dict[str, Any] = {}
        partial = False
        for start in range(0, len(ids), MAX_IDS_PER_CALL):
            batch = ids[start:start + MAX_IDS_PER_CALL]
            payload = self.delete(
                self._resources_path(resource_type),
                params={"public_ids[]": batch, "invalidate": _flag(invalidate)},
            )
            deleted.update(payload.get("deleted") or {})
            partial = partial or bool(payload.get("partial"))
        return {"deleted": deleted, "partial": partial}

    def delete_resources_by_prefix(
        self,
        prefix: str,
        resource_type: str = "image",
        invalidate: bool = True,
    ) -> Dict[str, Any]:
        """Delete every asset whose public id starts with prefix."""
        if not prefix:
            raise ValueError("prefix must not be empty")
        payload = self.delete(
            self._resources_path(resource_type),
            params={"prefix": prefix, "invalidate": _flag(invalidate)},
        )
        return {"deleted": payload.get("deleted") or {}, "partial": bool(payload.get("partial"))}

    def delete_folder(self, folder: str) -> Dict[str, Any]:
        """Delete an empty folder.

        Raises:
            AssetHostAPIError: 404 when the folder does not exist, 400 when it
                still holds assets
        """
        folder = folder.strip("/")
        if not folder:
            raise ValueError("folder must not be empty")
        return self.delete(f"/folders/{quote(folder, safe='/')}")

    def delete(self, path: str, params: Optional[Dict] = None, **kwargs) -> Dict[str, Any]:
        """Execute DELETE request with basic authentication.

        Args:
            path: Endpoint path relative to /v1_1/<cloud_name>
            params: Query parameters

        Returns:
            Decoded JSON payload (empty dict when the body is empty)

        Raises:
            AssetHostAPIError: On HTTP error
            UpstreamError: On transport failure
        """
        url = f"{self.base_url}/v1_1/{self.cloud_name}{path}"
        try:
            resp = requests.delete(url, params=params, auth=self._auth, timeout=REQUEST_TIMEOUT, **kwargs)
        except requests.RequestException as exc:
            raise UpstreamError("assets", f"{path}: {exc}") from exc
        self._handle_error(resp, path)
        logger.debug(f"DELETE {path} -> {resp.status_code}")
        if not resp.content:
            return {}
        return resp.json()

    def _resources_path(self, resource_type: str) -> str:
        if resource_type not in RESOURCE_TYPES:
            raise ValueError(f"Unsupported resource_type '{resource_type}'")
        return f"/resources/{resource_type}/upload"

    def _handle_error(self, resp: requests.Response, endpoint: str) -> None:
        """Raise AssetHostAPIError if the response status indicates an error."""
        if resp.status_code >= 400:
            raise AssetHostAPIError(resp.status_code, _error_message(resp), endpoint)


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _error_message(resp: requests.Response) -> str:
    """Extract the Admin API error message ({"error": {"message": ...}})."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return resp.text or f"HTTP {resp.status_code}"
