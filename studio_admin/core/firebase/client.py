"""Firebase Admin SDK bootstrap.

Builds an explicitly named firebase_admin.App from a service account file so
that the identity directory and record store receive an injected handle
instead of relying on the SDK's default global app.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

import firebase_admin
from firebase_admin import credentials

from studio_admin.core.exceptions import ConfigurationError

DEFAULT_APP_NAME = "studio-admin"

logger = logging.getLogger(__name__)


def initialize_firebase(
    credentials_file: str,
    database_url: str,
    name: str = DEFAULT_APP_NAME,
) -> firebase_admin.App:
    """Initialize (or reuse) the named Firebase app.

    Args:
        credentials_file: Path to the service account JSON key
        database_url: Realtime Database URL
        name: Firebase app name

    Returns:
        Initialized firebase_admin.App

    Raises:
        ConfigurationError: If the credential file is missing or invalid
    """
    existing = _get_existing_app(name)
    if existing is not None:
        return existing

    key_path = Path(credentials_file)
    if not key_path.is_file():
        raise ConfigurationError(f"Firebase credential file not found: {credentials_file}")
    if not database_url:
        raise ConfigurationError("FIREBASE_DATABASE_URL is required")

    try:
        cred = credentials.Certificate(str(key_path))
    except (ValueError, OSError) as exc:
        raise ConfigurationError(f"Could not load Firebase credentials from {credentials_file}: {exc}") from exc

    app = firebase_admin.initialize_app(cred, {"databaseURL": database_url}, name=name)
    logger.info(f"Firebase Admin SDK initialized (app={name}, project={getattr(cred, 'project_id', 'unknown')})")
    return app


def _get_existing_app(name: str) -> Optional[firebase_admin.App]:
    try:
        return firebase_admin.get_app(name)
    except ValueError:
        return None
