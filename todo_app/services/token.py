# todo_app/services/token.py
"""
Bearer token issue/verify.

A token carries userID, name, email and sessionID plus iat/exp. The signature
alone is not enough: the auth gate also checks that sessionID is still active.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError

from todo_app.config import Settings

CLAIM_FIELDS = ("userID", "name", "email", "sessionID")


class TokenError(Exception):
    pass


class InvalidSignature(TokenError):
    pass


class MalformedToken(TokenError):
    pass


class TokenExpired(TokenError):
    pass


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    name: str
    email: str
    session_id: str


def issue_token(
    settings: Settings,
    user_id: str,
    name: str,
    email: str,
    session_id: str,
    expires_delta: timedelta | None = None,
) -> str:
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "userID": user_id,
        "name": name,
        "email": email,
        "sessionID": session_id,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def verify_token(settings: Settings, token: str) -> TokenClaims:
    try:
        # algorithms pins the symmetric scheme; "none" or RS* headers are rejected
        claims = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except ExpiredSignatureError as e:
        raise TokenExpired("token has expired") from e
    except JWTClaimsError as e:
        raise MalformedToken(str(e)) from e
    except JWTError as e:
        raise InvalidSignature(str(e)) from e

    if "exp" not in claims:
        raise MalformedToken("claim 'exp' missing")

    values = {}
    for field in CLAIM_FIELDS:
        v = claims.get(field)
        if not isinstance(v, str) or not v:
            raise MalformedToken(f"claim {field!r} missing or not a string")
        values[field] = v

    return TokenClaims(
        user_id=values["userID"],
        name=values["name"],
        email=values["email"],
        session_id=values["sessionID"],
    )
