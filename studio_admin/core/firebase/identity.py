"""Identity directory operations backed by Firebase Authentication."""
from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from firebase_admin import auth, exceptions as firebase_exceptions

from studio_admin.core.exceptions import (
    IdentityNotFoundError,
    IdentityRejectedError,
    TokenValidationError,
    UpstreamError,
)

GOOGLE_PROVIDER_ID = "google.com"
AUTH_PROVIDER_GOOGLE = "federated-google"
AUTH_PROVIDER_PASSWORD = "password"

logger = logging.getLogger(__name__)


class IdentityDirectory:
    """Service for managing identity records.

    Every call translates SDK failures into UpstreamError subclasses so that
    callers never depend on firebase_admin exception types.
    """

    def __init__(self, app=None):
        """Initialize identity directory.

        Args:
            app: firebase_admin.App handle (None uses the SDK default app)
        """
        self.app = app

    def list_users(self) -> List[Dict[str, Any]]:
        """Return every identity record as a summary dict, following pagination."""
        try:
            page = auth.list_users(app=self.app)
            return [summarize_user(record) for record in page.iterate_all()]
        except firebase_exceptions.FirebaseError as exc:
            raise _upstream(exc) from exc

    def create_user(self, email: str, password: str, display_name: Optional[str] = None) -> Dict[str, Any]:
        """Create a verified email/password identity.

        Raises:
            IdentityRejectedError: Invalid attributes or email already in use
        """
        try:
            record = auth.create_user(
                email=email,
                password=password,
                email_verified=True,
                display_name=display_name or None,
                app=self.app,
            )
        except ValueError as exc:
            raise IdentityRejectedError(str(exc)) from exc
        except auth.EmailAlreadyExistsError as exc:
            raise IdentityRejectedError(str(exc)) from exc
        except firebase_exceptions.FirebaseError as exc:
            raise _upstream(exc) from exc
        logger.info(f"Created identity {record.uid} for {email}")
        return summarize_user(record)

    def set_disabled(self, uid: str, disabled: bool) -> None:
        """Set the disabled flag on an identity record."""
        try:
            auth.update_user(uid, disabled=disabled, app=self.app)
        except auth.UserNotFoundError as exc:
            raise IdentityNotFoundError(uid, str(exc)) from exc
        except ValueError as exc:
            raise IdentityRejectedError(str(exc)) from exc
        except firebase_exceptions.FirebaseError as exc:
            raise _upstream(exc) from exc

    def delete_user(self, uid: str) -> None:
        """Delete an identity record.

        Raises:
            IdentityNotFoundError: No record exists for uid
        """
        try:
            auth.delete_user(uid, app=self.app)
        except auth.UserNotFoundError as exc:
            raise IdentityNotFoundError(uid, str(exc)) from exc
        except ValueError as exc:
            raise IdentityRejectedError(str(exc)) from exc
        except firebase_exceptions.FirebaseError as exc:
            raise _upstream(exc) from exc

    def verify_id_token(self, token: str) -> Dict[str, Any]:
        """Verify a client ID token and return its claims."""
        try:
            return auth.verify_id_token(token, app=self.app)
        except (ValueError, auth.InvalidIdTokenError, auth.CertificateFetchError) as exc:
            raise TokenValidationError(str(exc)) from exc
        except auth.UserDisabledError as exc:
            raise TokenValidationError(str(exc)) from exc
        except firebase_exceptions.FirebaseError as exc:
            raise _upstream(exc) from exc


# ─────────────────────────────────────────────────────────────────────────────
# Serialization
# ─────────────────────────────────────────────────────────────────────────────
def summarize_user(record) -> Dict[str, Any]:
    """Convert a UserRecord into the admin API representation."""
    metadata = getattr(record, "user_metadata", None)
    return {
        "id": record.uid,
        "email": record.email,
        "displayName": record.display_name,
        "photoUrl": record.photo_url,
        "disabled": bool(record.disabled),
        "createdAt": _iso_timestamp(getattr(metadata, "creation_timestamp", None)),
        "lastSignInAt": _iso_timestamp(getattr(metadata, "last_sign_in_timestamp", None)),
        "authProvider": auth_provider(record.provider_data or []),
    }


def auth_provider(provider_data) -> str:
    """federated-google when any linked provider is Google, password otherwise."""
    if any(getattr(info, "provider_id", None) == GOOGLE_PROVIDER_ID for info in provider_data):
        return AUTH_PROVIDER_GOOGLE
    return AUTH_PROVIDER_PASSWORD


def _iso_timestamp(millis: Optional[int]) -> Optional[str]:
    if not millis:
        return None
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc).isoformat().replace("+00:00", "Z")


def _upstream(exc: firebase_exceptions.FirebaseError) -> UpstreamError:
    response = getattr(exc, "http_response", None)
    return UpstreamError("identity", str(exc), getattr(response, "status_code", None))
