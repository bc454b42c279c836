"""Tests for the Firebase-backed identity directory (SDK stubbed)."""
from types import SimpleNamespace

import pytest
from firebase_admin import auth, exceptions as firebase_exceptions

from studio_admin.core.exceptions import (
    IdentityNotFoundError,
    IdentityRejectedError,
    TokenValidationError,
    UpstreamError,
)
from studio_admin.core.firebase.identity import IdentityDirectory, auth_provider, summarize_user

APP = object()


def make_record(uid="u1", providers=("password",), created=1704067200000, last_sign_in=None, **overrides):
    base = dict(
        uid=uid,
        email=f"{uid}@example.com",
        display_name="Alice",
        photo_url="https://example.com/a.png",
        disabled=False,
        user_metadata=SimpleNamespace(creation_timestamp=created, last_sign_in_timestamp=last_sign_in),
        provider_data=[SimpleNamespace(provider_id=provider) for provider in providers],
    )
    base.update(overrides)
    return SimpleNamespace(**base)


@pytest.fixture()
def directory():
    return IdentityDirectory(APP)


class TestSummarizeUser:
    def test_shape(self):
        summary = summarize_user(make_record(last_sign_in=1704153600000))

        assert summary == {
            "id": "u1",
            "email": "u1@example.com",
            "displayName": "Alice",
            "photoUrl": "https://example.com/a.png",
            "disabled": False,
            "createdAt": "2024-01-01T00:00:00Z",
            "lastSignInAt": "2024-01-02T00:00:00Z",
            "authProvider": "password",
        }

    def test_missing_timestamps_are_null(self):
        summary = summarize_user(make_record(created=None))
        assert summary["createdAt"] is None
        assert summary["lastSignInAt"] is None

    @pytest.mark.parametrize("providers, expected", [
        (("google.com",), "federated-google"),
        (("password", "google.com"), "federated-google"),
        (("password",), "password"),
        (("facebook.com",), "password"),
        ((), "password"),
    ])
    def test_auth_provider(self, providers, expected):
        entries = [SimpleNamespace(provider_id=provider) for provider in providers]
        assert auth_provider(entries) == expected


def test_list_users_follows_pagination(directory, monkeypatch):
    page = SimpleNamespace(iterate_all=lambda: iter([make_record("u1"), make_record("u2", providers=("google.com",))]))
    seen = {}

    def _list_users(app=None):
        seen["app"] = app
        return page

    monkeypatch.setattr(auth, "list_users", _list_users)

    users = directory.list_users()

    assert seen["app"] is APP
    assert [user["id"] for user in users] == ["u1", "u2"]
    assert users[1]["authProvider"] == "federated-google"


def test_list_users_failure(directory, monkeypatch):
    def _list_users(app=None):
        raise firebase_exceptions.FirebaseError(firebase_exceptions.UNAVAILABLE, "backend unavailable")

    monkeypatch.setattr(auth, "list_users", _list_users)

    with pytest.raises(UpstreamError, match="backend unavailable"):
        directory.list_users()


def test_create_user_marks_email_verified(directory, monkeypatch):
    captured = {}

    def _create_user(**kwargs):
        captured.update(kwargs)
        return make_record("new", email=kwargs["email"], display_name=kwargs["display_name"])

    monkeypatch.setattr(auth, "create_user", _create_user)

    user = directory.create_user("new@example.com", "s3cret!!")

    assert captured["email_verified"] is True
    assert captured["display_name"] is None
    assert captured["app"] is APP
    assert user["id"] == "new"


def test_create_user_invalid_input(directory, monkeypatch):
    def _create_user(**kwargs):
        raise ValueError("Invalid password string. Password must be a string at least 6 characters long.")

    monkeypatch.setattr(auth, "create_user", _create_user)

    with pytest.raises(IdentityRejectedError, match="at least 6 characters"):
        directory.create_user("a@example.com", "x")


def test_create_user_duplicate_email(directory, monkeypatch):
    def _create_user(**kwargs):
        raise auth.EmailAlreadyExistsError("The user with the provided email already exists", None, None)

    monkeypatch.setattr(auth, "create_user", _create_user)

    with pytest.raises(IdentityRejectedError) as excinfo:
        directory.create_user("a@example.com", "s3cret!!")
    assert excinfo.value.status_code == 400


@pytest.mark.parametrize("disabled", [True, False])
def test_set_disabled(directory, monkeypatch, disabled):
    captured = {}

    def _update_user(uid, **kwargs):
        captured.update(uid=uid, **kwargs)

    monkeypatch.setattr(auth, "update_user", _update_user)

    directory.set_disabled("u1", disabled)

    assert captured == {"uid": "u1", "disabled": disabled, "app": APP}


def test_delete_missing_user(directory, monkeypatch):
    def _delete_user(uid, app=None):
        raise auth.UserNotFoundError("No user record found for the given identifier")

    monkeypatch.setattr(auth, "delete_user", _delete_user)

    with pytest.raises(IdentityNotFoundError) as excinfo:
        directory.delete_user("ghost")
    assert excinfo.value.status_code == 404
    assert excinfo.value.uid == "ghost"


def test_verify_id_token(directory, monkeypatch):
    monkeypatch.setattr(auth, "verify_id_token", lambda token, app=None: {"uid": "u1"})
    assert directory.verify_id_token("token") == {"uid": "u1"}


def test_verify_id_token_rejected(directory, monkeypatch):
    def _verify(token, app=None):
        raise auth.InvalidIdTokenError("Token expired")

    monkeypatch.setattr(auth, "verify_id_token", _verify)

    with pytest.raises(TokenValidationError, match="Token expired"):
        directory.verify_id_token("token")
