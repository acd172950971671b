from datetime import timedelta

import pytest
from jose import jwt

from todo_app.services.token import (
    InvalidSignature,
    MalformedToken,
    TokenError,
    TokenExpired,
    issue_token,
    verify_token,
)


def _claims(**overrides):
    base = {
        "userID": "u-1",
        "name": "Ann",
        "email": "ann@example.com",
        "sessionID": "s-1",
        "exp": 4102444800,  # 2100-01-01
    }
    base.update(overrides)
    return {k: v for k, v in base.items() if v is not None}


def test_issue_then_verify_returns_claims(settings):
    token = issue_token(settings, "u-1", "Ann", "ann@example.com", "s-1")
    claims = verify_token(settings, token)
    assert claims.user_id == "u-1"
    assert claims.name == "Ann"
    assert claims.email == "ann@example.com"
    assert claims.session_id == "s-1"


def test_token_carries_expiry(settings):
    token = issue_token(settings, "u-1", "Ann", "ann@example.com", "s-1")
    payload = jwt.get_unverified_claims(token)
    assert payload["exp"] - payload["iat"] == settings.access_token_expire_minutes * 60


def test_expired_token(settings):
    token = issue_token(
        settings, "u-1", "Ann", "ann@example.com", "s-1", expires_delta=timedelta(seconds=-10)
    )
    with pytest.raises(TokenExpired):
        verify_token(settings, token)


def test_wrong_secret_is_invalid_signature(settings):
    token = jwt.encode(_claims(), "another-secret", algorithm="HS256")
    with pytest.raises(InvalidSignature):
        verify_token(settings, token)


def test_unexpected_algorithm_is_rejected(settings):
    token = jwt.encode(_claims(), settings.jwt_secret_key, algorithm="HS512")
    with pytest.raises(InvalidSignature):
        verify_token(settings, token)


def test_not_a_jwt(settings):
    with pytest.raises(InvalidSignature):
        verify_token(settings, "definitely-not-a-token")


@pytest.mark.parametrize("missing", ["userID", "name", "email", "sessionID"])
def test_missing_identity_claim_is_malformed(settings, missing):
    token = jwt.encode(_claims(**{missing: None}), settings.jwt_secret_key, algorithm="HS256")
    with pytest.raises(MalformedToken):
        verify_token(settings, token)


def test_non_string_claim_is_malformed(settings):
    token = jwt.encode(_claims(userID=42), settings.jwt_secret_key, algorithm="HS256")
    with pytest.raises(MalformedToken):
        verify_token(settings, token)


def test_missing_exp_is_malformed(settings):
    token = jwt.encode(_claims(exp=None), settings.jwt_secret_key, algorithm="HS256")
    with pytest.raises(MalformedToken):
        verify_token(settings, token)


def test_errors_share_a_base():
    for exc in (InvalidSignature, MalformedToken, TokenExpired):
        assert issubclass(exc, TokenError)
