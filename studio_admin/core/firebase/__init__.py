"""Firebase-backed identity directory and record store.

Architecture:
- client.py: named firebase_admin.App bootstrap from a service account file
- identity.py: identity record lifecycle (list, create, enable/disable, delete)
- records.py: key-path record tree access (get, set, update, remove)

Usage:
    from studio_admin.core.firebase import initialize_firebase, IdentityDirectory, RecordStore

    app = initialize_firebase("serviceAccountKey.json", "https://<db>.firebaseio.com")
    identity = IdentityDirectory(app)
    records = RecordStore(app)
"""
from .client import initialize_firebase, DEFAULT_APP_NAME
from .identity import (
    IdentityDirectory,
    summarize_user,
    auth_provider,
    GOOGLE_PROVIDER_ID,
    AUTH_PROVIDER_GOOGLE,
    AUTH_PROVIDER_PASSWORD,
)
from .records import RecordStore, SERVER_TIMESTAMP

__all__ = [
    "initialize_firebase",
    "DEFAULT_APP_NAME",
    "IdentityDirectory",
    "summarize_user",
    "auth_provider",
    "GOOGLE_PROVIDER_ID",
    "AUTH_PROVIDER_GOOGLE",
    "AUTH_PROVIDER_PASSWORD",
    "RecordStore",
    "SERVER_TIMESTAMP",
]
