"""Structured record store backed by the Firebase Realtime Database."""
from __future__ import annotations
from typing import Any, Dict

from firebase_admin import db, exceptions as firebase_exceptions

from studio_admin.core.exceptions import UpstreamError

# Resolved to the server's clock on write.
SERVER_TIMESTAMP = {".sv": "timestamp"}


class RecordStore:
    """Key-path access to a hierarchical record tree."""

    def __init__(self, app=None):
        self.app = app

    def get(self, path: str) -> Any:
        try:
            return self._ref(path).get()
        except firebase_exceptions.FirebaseError as exc:
            raise _upstream(exc) from exc

    def set(self, path: str, value: Any) -> None:
        try:
            self._ref(path).set(value)
        except firebase_exceptions.FirebaseError as exc:
            raise _upstream(exc) from exc

    def update(self, path: str, values: Dict[str, Any]) -> None:
        try:
            self._ref(path).update(values)
        except firebase_exceptions.FirebaseError as exc:
            raise _upstream(exc) from exc

    def remove(self, path: str) -> None:
        """Delete the subtree at path. Removing an absent path is a no-op."""
        try:
            self._ref(path).delete()
        except firebase_exceptions.FirebaseError as exc:
            raise _upstream(exc) from exc

    def _ref(self, path: str):
        path = path.strip("/")
        if not path:
            # Never address the database root from admin operations.
            raise ValueError("record path must not be empty")
        return db.reference(path, app=self.app)


def _upstream(exc: firebase_exceptions.FirebaseError) -> UpstreamError:
    response = getattr(exc, "http_response", None)
    return UpstreamError("records", str(exc), getattr(response, "status_code", None))
