"""Tests for AuthService."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from taskpad_cli.models.exceptions import NetworkError
from taskpad_cli.services.auth_service import AuthError, AuthService

SIGN_IN_RESPONSE = {
    "localId": "uid-1",
    "email": "ann@example.com",
    "displayName": "Ann",
    "idToken": "id-token",
    "refreshToken": "refresh-token",
}


@pytest.fixture()
def identity_api():
    api = MagicMock()
    api.sign_in = AsyncMock(return_value=SIGN_IN_RESPONSE)
    api.sign_up = AsyncMock(return_value={"localId": "uid-2"})
    api.client.close = AsyncMock()
    return api


@pytest.fixture()
def auth(tmp_config, identity_api):
    return AuthService(config_service=tmp_config, identity_api=identity_api)


def test_no_user_without_credentials(auth):
    assert auth.current_user() is None
    assert not auth.is_authenticated()


@pytest.mark.asyncio
async def test_sign_in_persists_user(auth, tmp_config, identity_api):
    user = await auth.sign_in("ann@example.com", "secret1")

    identity_api.sign_in.assert_awaited_once_with("ann@example.com", "secret1")
    assert user.uid == "uid-1"
    assert user.greeting_name == "Ann"
    assert tmp_config.load_credentials()["id_token"] == "id-token"
    assert auth.current_user() == user


@pytest.mark.asyncio
async def test_sign_in_requires_email_and_password(auth, identity_api):
    with pytest.raises(AuthError):
        await auth.sign_in("", "")
    identity_api.sign_in.assert_not_awaited()


@pytest.mark.asyncio
async def test_sign_in_failure_uses_provider_message(auth, identity_api):
    identity_api.sign_in.side_effect = NetworkError(
        "POST failed", status_code=400, detail="INVALID_PASSWORD"
    )

    with pytest.raises(AuthError, match="Sign-in failed: INVALID_PASSWORD"):
        await auth.sign_in("ann@example.com", "wrong")

    assert auth.current_user() is None


@pytest.mark.asyncio
async def test_subscribe_receives_current_value_and_changes(auth):
    seen = []
    unsubscribe = auth.subscribe(seen.append)

    await auth.sign_in("ann@example.com", "secret1")
    auth.sign_out()
    unsubscribe()
    await auth.sign_in("ann@example.com", "secret1")

    assert [u.email if u else None for u in seen] == [None, "ann@example.com", None]


@pytest.mark.asyncio
async def test_sign_out_clears_credentials(auth, tmp_config):
    await auth.sign_in("ann@example.com", "secret1")

    auth.sign_out()

    assert tmp_config.load_credentials() is None
    assert auth.current_user() is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email,password,message",
    [
        ("not-an-email", "secret1", "Please enter a valid email address."),
        ("ann@example.com", "12345", "Password must be at least 6 characters."),
    ],
)
async def test_sign_up_validates_locally(auth, identity_api, email, password, message):
    with pytest.raises(AuthError, match=message):
        await auth.sign_up(email, password)
    identity_api.sign_up.assert_not_awaited()


@pytest.mark.asyncio
async def test_sign_up_does_not_sign_in(auth, identity_api):
    uid = await auth.sign_up("new@example.com", "secret1")

    assert uid == "uid-2"
    assert auth.current_user() is None


@pytest.mark.asyncio
async def test_sign_up_failure(auth, identity_api):
    identity_api.sign_up.side_effect = NetworkError("x", detail="EMAIL_EXISTS")

    with pytest.raises(AuthError, match="Failed to register: EMAIL_EXISTS"):
        await auth.sign_up("new@example.com", "secret1")


def test_malformed_credentials_are_ignored(auth, tmp_config):
    tmp_config.save_credentials({"token": "old-format"})

    assert auth.current_user() is None
