"""Pytest shared fixtures: in-memory collaborators and a Flask test client."""
import pathlib
import sys

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from studio_admin.config import AppConfig
from studio_admin.core.exceptions import (
    AssetHostAPIError,
    IdentityNotFoundError,
    IdentityRejectedError,
    TokenValidationError,
)
from studio_admin.core.services import Services
from studio_admin.flask_app import create_app


# ─────────────────────────────────────────────────────────────────────────────
# In-memory collaborators
# ─────────────────────────────────────────────────────────────────────────────
class FakeIdentityDirectory:
    def __init__(self, calls):
        self.calls = calls
        self.users = {}
        self.tokens = {}
        self.failures = {}

    def add_user(self, uid, email=None, disabled=False, auth_provider="password"):
        self.users[uid] = {
            "id": uid,
            "email": email or f"{uid}@example.com",
            "displayName": uid.title(),
            "photoUrl": None,
            "disabled": disabled,
            "createdAt": "2024-01-01T00:00:00Z",
            "lastSignInAt": None,
            "authProvider": auth_provider,
        }

    def _maybe_fail(self, operation):
        if operation in self.failures:
            raise self.failures[operation]

    def list_users(self):
        self.calls.append(("identity", "list"))
        self._maybe_fail("list")
        return list(self.users.values())

    def create_user(self, email, password, display_name=None):
        self.calls.append(("identity", "create", email))
        self._maybe_fail("create")
        if any(user["email"] == email for user in self.users.values()):
            raise IdentityRejectedError(f"The user with the provided email already exists ({email}).")
        uid = f"uid-{len(self.users) + 1}"
        self.add_user(uid, email=email)
        self.users[uid]["displayName"] = display_name
        return self.users[uid]

    def set_disabled(self, uid, disabled):
        self.calls.append(("identity", "set_disabled", uid, disabled))
        self._maybe_fail("set_disabled")
        if uid not in self.users:
            raise IdentityNotFoundError(uid)
        self.users[uid]["disabled"] = disabled

    def delete_user(self, uid):
        self.calls.append(("identity", "delete", uid))
        self._maybe_fail("delete")
        if uid not in self.users:
            raise IdentityNotFoundError(uid)
        del self.users[uid]

    def verify_id_token(self, token):
        if token not in self.tokens:
            raise TokenValidationError("Could not verify token signature.")
        return self.tokens[token]


class FakeRecordStore:
    def __init__(self, calls):
        self.calls = calls
        self.data = {}
        self.failures = {}

    def get(self, path):
        return self.data.get(path)

    def set(self, path, value):
        self.calls.append(("records", "set", path))
        resolved = dict(value)
        if resolved.get("createdAt") == {".sv": "timestamp"}:
            resolved["createdAt"] = 1704067200000
        self.data[path] = resolved

    def update(self, path, values):
        self.data.setdefault(path, {}).update(values)

    def remove(self, path):
        self.calls.append(("records", "remove", path))
        if "remove" in self.failures:
            raise self.failures["remove"]
        self.data.pop(path, None)


class FakeAssetHost:
    """Asset host that mirrors the Admin API's per-class behavior.

    A delete call against a class holding none of the requested ids fails
    with 404, the way a mismatched class is reported to callers.
    """

    def __init__(self, calls):
        self.calls = calls
        self.resources = {}
        self.folders = set()
        self.failures = {}

    def upload(self, public_id, resource_type="image"):
        self.resources[public_id] = resource_type
        parts = public_id.split("/")[:-1]
        for depth in range(1, len(parts) + 1):
            self.folders.add("/".join(parts[:depth]))

    def delete_resources(self, public_ids, resource_type="image", invalidate=True):
        self.calls.append(("assets", "delete_resources", resource_type, tuple(public_ids)))
        if resource_type in self.failures:
            raise self.failures[resource_type]
        matches = [pid for pid in public_ids if self.resources.get(pid) == resource_type]
        if not matches:
            raise AssetHostAPIError(404, "Resource not found", f"/resources/{resource_type}/upload")
        deleted = {}
        for pid in public_ids:
            if pid in matches:
                del self.resources[pid]
                deleted[pid] = "deleted"
            else:
                deleted[pid] = "not_found"
        return {"deleted": deleted, "partial": False}

    def delete_resources_by_prefix(self, prefix, resource_type="image", invalidate=True):
        self.calls.append(("assets", "delete_by_prefix", resource_type, prefix))
        if "prefix" in self.failures:
            raise self.failures["prefix"]
        deleted = {}
        for pid, rt in list(self.resources.items()):
            if rt == resource_type and pid.startswith(prefix):
                del self.resources[pid]
                deleted[pid] = "deleted"
        return {"deleted": deleted, "partial": False}

    def delete_folder(self, folder):
        self.calls.append(("assets", "delete_folder", folder))
        if folder not in self.folders:
            raise AssetHostAPIError(404, f"Can't find folder with path {folder}", f"/folders/{folder}")
        if any(pid.startswith(folder + "/") for pid in self.resources):
            raise AssetHostAPIError(400, "Folder is not empty", f"/folders/{folder}")
        self.folders = {f for f in self.folders if f != folder and not f.startswith(folder + "/")}
        return {"deleted": [folder]}


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture()
def calls():
    """Shared ordered log of collaborator calls."""
    return []


@pytest.fixture()
def identity(calls):
    return FakeIdentityDirectory(calls)


@pytest.fixture()
def records(calls):
    return FakeRecordStore(calls)


@pytest.fixture()
def assets(calls):
    return FakeAssetHost(calls)


@pytest.fixture()
def services(identity, records, assets):
    return Services(identity=identity, records=records, assets=assets)


def make_config(**overrides):
    base = dict(
        cloudinary_cloud_name="demo-cloud",
        cloudinary_api_key="1234",
        cloudinary_api_secret="secret",
        firebase_credentials_file="serviceAccountKey.json",
        firebase_database_url="https://demo.firebaseio.com",
        log_level="WARNING",
    )
    base.update(overrides)
    return AppConfig(**base)


@pytest.fixture()
def app(services):
    flask_app = create_app(cfg=make_config(), services=services)
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client
