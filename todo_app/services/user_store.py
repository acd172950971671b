# todo_app/services/user_store.py
# users / user_session persistence. Each write commits on its own: there is
# no transaction spanning several statements.
import enum
from datetime import datetime, timezone

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from todo_app.errors import Conflict
from todo_app.models.user import User, UserSession
from todo_app.services.password import MismatchError, verify_password


class SessionStatus(str, enum.Enum):
    ACTIVE = "active"
    REVOKED = "revoked"
    NOT_FOUND = "not_found"


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ---------- users ----------
def is_user_exists(db: Session, email: str) -> bool:
    return (
        db.query(User.id)
        .filter(User.email == email.strip(), User.archived_at.is_(None))
        .first()
        is not None
    )


def create_user(db: Session, name: str, email: str, password_hash: str) -> User:
    user = User(name=name.strip(), email=email.strip(), password=password_hash)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # lost a race against another registration with the same email
        db.rollback()
        raise Conflict("user already exists") from e
    db.refresh(user)
    return user


def get_user_for_login(db: Session, email: str, password: str) -> User | None:
    """
    Active user matching email whose stored hash accepts password.
    Unknown email and wrong password both give None.
    """
    user = (
        db.query(User)
        .filter(User.email == email.strip(), User.archived_at.is_(None))
        .first()
    )
    if user is None:
        return None
    try:
        verify_password(password, user.password)
    except MismatchError:
        return None
    return user


def get_user_profile(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def archive_user(db: Session, user_id: str) -> int:
    result = db.execute(
        update(User)
        .where(User.id == user_id, User.archived_at.is_(None))
        .values(archived_at=_now())
    )
    db.commit()
    return result.rowcount


# ---------- sessions ----------
def create_user_session(db: Session, user_id: str) -> str:
    session = UserSession(user_id=user_id)
    db.add(session)
    db.commit()
    return session.id


def get_session_status(db: Session, session_id: str) -> SessionStatus:
    row = (
        db.query(UserSession.archived_at)
        .filter(UserSession.id == session_id)
        .first()
    )
    if row is None:
        return SessionStatus.NOT_FOUND
    if row.archived_at is not None:
        return SessionStatus.REVOKED
    return SessionStatus.ACTIVE


def archive_user_session(db: Session, session_id: str) -> int:
    result = db.execute(
        update(UserSession)
        .where(UserSession.id == session_id, UserSession.archived_at.is_(None))
        .values(archived_at=_now())
    )
    db.commit()
    return result.rowcount


def archive_all_user_sessions(db: Session, user_id: str) -> int:
    result = db.execute(
        update(UserSession)
        .where(UserSession.user_id == user_id, UserSession.archived_at.is_(None))
        .values(archived_at=_now())
    )
    db.commit()
    return result.rowcount
