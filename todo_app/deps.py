# todo_app/deps.py
import logging

from fastapi import Depends, Header, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from todo_app.config import Settings
from todo_app.errors import InternalError, Unauthorized
from todo_app.schemas.user import CurrentUser
from todo_app.services import token as token_svc
from todo_app.services.user_store import SessionStatus, get_session_status

logger = logging.getLogger(__name__)


# ----------------------------
# settings / DB session
# ----------------------------
def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


# ----------------------------
# auth gate
# ----------------------------
def _bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise Unauthorized("authorization header missing")

    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise Unauthorized("bearer token missing")
    return parts[1].strip()


def get_current_user(
    authorization: str | None = Header(None),
    settings: Settings = Depends(get_app_settings),
    db: Session = Depends(get_db),
) -> CurrentUser:
    """
    Authorization: Bearer <token>
    - signature/claims are checked first, then the session row referenced by
      sessionID must still be active (logout archives it).
    - a session that no longer exists is treated as unauthorized.
    """
    token = _bearer_token(authorization)

    try:
        claims = token_svc.verify_token(settings, token)
    except token_svc.TokenError as e:
        logger.info("[AUTH] token rejected: %s", type(e).__name__)
        raise Unauthorized("invalid token") from e

    try:
        status = get_session_status(db, claims.session_id)
    except SQLAlchemyError as e:
        logger.exception("[AUTH] session lookup failed")
        raise InternalError("internal server error") from e

    if status is not SessionStatus.ACTIVE:
        if status is SessionStatus.NOT_FOUND:
            logger.warning("[AUTH] token references unknown session %s", claims.session_id)
        raise Unauthorized("invalid token")

    return CurrentUser(
        user_id=claims.user_id,
        name=claims.name,
        email=claims.email,
        session_id=claims.session_id,
    )
