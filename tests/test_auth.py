"""Tests for admin authentication."""

import pytest
from conftest import ADMIN_EMAIL, ADMIN_PASSWORD
from portfolio_app.services.auth_service import AuthService, hash_password
from portfolio_app.services.errors import BackendUnavailableError, InvalidCredentialsError


def test_sign_in_issues_token(auth):
    token = auth.sign_in(ADMIN_EMAIL, ADMIN_PASSWORD)

    identity = auth.current_identity(token)
    assert identity.email == ADMIN_EMAIL
    assert identity.role == "admin"


def test_sign_in_email_is_case_insensitive(auth):
    token = auth.sign_in(ADMIN_EMAIL.upper(), ADMIN_PASSWORD)

    assert auth.current_identity(token) is not None


@pytest.mark.parametrize("email,password", [
    (ADMIN_EMAIL, "wrong"),
    ("someone@example.com", ADMIN_PASSWORD),
    (ADMIN_EMAIL, ""),
])
def test_sign_in_rejects_bad_credentials(auth, email, password):
    with pytest.raises(InvalidCredentialsError):
        auth.sign_in(email, password)


def test_sign_in_with_password_hash(settings):
    settings.admin_password = ""
    settings.admin_password_hash = hash_password("hashed secret")
    auth = AuthService(settings, available=True)

    assert auth.current_identity(auth.sign_in(ADMIN_EMAIL, "hashed secret")) is not None


def test_sign_in_requires_backend(offline_auth):
    with pytest.raises(BackendUnavailableError):
        offline_auth.sign_in(ADMIN_EMAIL, ADMIN_PASSWORD)


def test_sign_out_revokes_token(auth):
    token = auth.sign_in(ADMIN_EMAIL, ADMIN_PASSWORD)
    other = auth.sign_in(ADMIN_EMAIL, ADMIN_PASSWORD)

    auth.sign_out(token)

    assert auth.current_identity(token) is None
    assert auth.current_identity(other) is not None


def test_sign_out_requires_backend(offline_auth):
    with pytest.raises(BackendUnavailableError):
        offline_auth.sign_out("token")


@pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
def test_invalid_tokens_have_no_identity(auth, token):
    assert auth.current_identity(token) is None


def test_token_from_other_secret_is_rejected(auth, settings):
    token = auth.sign_in(ADMIN_EMAIL, ADMIN_PASSWORD)
    other_settings = settings.model_copy(update={"auth_secret": "other"})

    assert AuthService(other_settings, available=True).current_identity(token) is None


def test_listeners_follow_identity_changes(auth):
    seen = []
    unsubscribe = auth.subscribe(seen.append)

    token = auth.sign_in(ADMIN_EMAIL, ADMIN_PASSWORD)
    auth.sign_out(token)
    unsubscribe()
    auth.sign_in(ADMIN_EMAIL, ADMIN_PASSWORD)

    assert [i.email if i else None for i in seen] == [ADMIN_EMAIL, None]
