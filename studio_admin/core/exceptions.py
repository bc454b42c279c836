"""Typed exceptions for upstream service failures."""
from __future__ import annotations
from typing import Optional


class StudioAdminError(Exception):
    """Base exception for all admin backend operations."""
    pass


class ConfigurationError(StudioAdminError, RuntimeError):
    """Required credential material is missing or cannot be loaded."""
    pass


class UpstreamError(StudioAdminError):
    """Failure reported by an external collaborator.

    Attributes:
        service: Collaborator that failed (identity, records, assets)
        message: Underlying error message
        status_code: HTTP-class status reported by the collaborator, if any
    """

    def __init__(self, service: str, message: str, status_code: Optional[int] = None):
        self.service = service
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class IdentityNotFoundError(UpstreamError):
    """Identity record does not exist."""

    def __init__(self, uid: str, message: Optional[str] = None):
        self.uid = uid
        super().__init__("identity", message or f"No user record found for uid '{uid}'", 404)


class IdentityRejectedError(UpstreamError):
    """Identity directory rejected the supplied attributes."""

    def __init__(self, message: str):
        super().__init__("identity", message, 400)


class AssetHostAPIError(UpstreamError):
    """HTTP error from the asset host Admin API.

    Attributes:
        endpoint: API endpoint that failed
    """

    def __init__(self, status_code: int, message: str, endpoint: str):
        self.endpoint = endpoint
        super().__init__("assets", message, status_code)

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.endpoint}: {self.message}"


class TokenValidationError(StudioAdminError):
    """Bearer token is missing, malformed, or rejected by the identity directory."""
    pass
