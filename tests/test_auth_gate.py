from jose import jwt
from sqlalchemy.exc import OperationalError

from todo_app.models.user import UserSession
from todo_app.services.token import issue_token, verify_token
from todo_app.services.user_store import (
    SessionStatus,
    archive_user_session,
    create_user,
    create_user_session,
    get_session_status,
)

from tests.conftest import auth

PROFILE = "/v1/user/profile"


# ---------- session validity check ----------
def test_session_status_lifecycle(db):
    user = create_user(db, "Ann", "ann@example.com", "x")
    session_id = create_user_session(db, user.id)
    assert get_session_status(db, session_id) is SessionStatus.ACTIVE

    assert archive_user_session(db, session_id) == 1
    assert get_session_status(db, session_id) is SessionStatus.REVOKED

    # archiving twice touches nothing
    assert archive_user_session(db, session_id) == 0


def test_unknown_session_is_not_found(db):
    assert get_session_status(db, "no-such-session") is SessionStatus.NOT_FOUND


# ---------- gate states ----------
def test_missing_header(client):
    res = client.get(PROFILE)
    assert res.status_code == 401
    assert res.json() == {"error": "authorization header missing"}


def test_header_without_bearer_scheme(client):
    res = client.get(PROFILE, headers={"Authorization": "Basic dXNlcjpwYXNz"})
    assert res.status_code == 401
    assert res.json() == {"error": "bearer token missing"}


def test_bearer_scheme_is_case_insensitive(client, register_and_login):
    token = register_and_login("ann@example.com")
    res = client.get(PROFILE, headers={"Authorization": f"bearer {token}"})
    assert res.status_code == 200


def test_bad_signature(client, register_and_login, settings):
    token = register_and_login("ann@example.com")
    forged = jwt.encode(jwt.get_unverified_claims(token), "not-the-secret", algorithm="HS256")
    res = client.get(PROFILE, headers=auth(forged))
    assert res.status_code == 401
    assert res.json() == {"error": "invalid token"}


def test_logged_out_session_rejected_even_with_valid_signature(client, register_and_login, settings):
    token = register_and_login("ann@example.com")
    assert client.post("/v1/user/logout", headers=auth(token)).status_code == 200

    verify_token(settings, token)  # signature and claims still fine
    res = client.get(PROFILE, headers=auth(token))
    assert res.status_code == 401
    assert res.json() == {"error": "invalid token"}


def test_token_for_unknown_session_is_unauthorized(client, register_and_login, settings):
    token = register_and_login("ann@example.com")
    claims = verify_token(settings, token)
    orphan = issue_token(settings, claims.user_id, claims.name, claims.email, "missing-session")
    res = client.get(PROFILE, headers=auth(orphan))
    assert res.status_code == 401


def test_session_lookup_fault_is_500(client, register_and_login, monkeypatch):
    token = register_and_login("ann@example.com")

    def broken(db, session_id):
        raise OperationalError("SELECT archived_at", {}, Exception("connection refused"))

    monkeypatch.setattr("todo_app.deps.get_session_status", broken)
    res = client.get(PROFILE, headers=auth(token))
    assert res.status_code == 500
    assert res.json() == {"error": "internal server error"}


def test_authenticated_identity_reaches_handler(client, register_and_login, db, settings):
    token = register_and_login("ann@example.com", name="Ann")
    res = client.get(PROFILE, headers=auth(token))
    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "Ann"
    assert body["email"] == "ann@example.com"
    assert body["id"] == verify_token(settings, token).user_id
    assert "password" not in body

    session_id = verify_token(settings, token).session_id
    assert db.get(UserSession, session_id).archived_at is None
