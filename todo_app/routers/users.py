# todo_app/routers/users.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from todo_app.config import Settings
from todo_app.deps import get_app_settings, get_current_user, get_db
from todo_app.errors import Conflict, InternalError, NotFound
from todo_app.schemas.user import (
    CurrentUser,
    LoginIn,
    MessageOut,
    ProfileOut,
    RegisterIn,
    TokenOut,
)
from todo_app.services import token as token_svc
from todo_app.services import user_store
from todo_app.services.password import HashError, hash_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["users"])


# ---------- public ----------
@router.post("/register", response_model=MessageOut, status_code=201)
def register(body: RegisterIn, db: Session = Depends(get_db)):
    """
    Sign up. Name/email presence and password length are validated by RegisterIn
    before this runs; the account can log in immediately.
    """
    if user_store.is_user_exists(db, body.email):
        raise Conflict("user already exists")

    try:
        hashed = hash_password(body.password)
    except HashError as e:
        raise InternalError("failed to secure password") from e

    user = user_store.create_user(db, body.name, body.email, hashed)
    logger.info("[AUTH] registered user %s", user.id)
    return MessageOut(message="user created successfully")


@router.post("/login", response_model=TokenOut)
def login(
    body: LoginIn,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    # unknown email and wrong password are deliberately the same response
    user = user_store.get_user_for_login(db, body.email, body.password)
    if user is None:
        raise NotFound("user not found")

    session_id = user_store.create_user_session(db, user.id)
    token = token_svc.issue_token(settings, user.id, user.name, user.email, session_id)
    logger.info("[AUTH] user %s logged in (session %s)", user.id, session_id)
    return TokenOut(message="user logged in successfully", token=token)


# ---------- /v1/user (auth required) ----------
@router.get("/user/profile", response_model=ProfileOut)
def profile(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = user_store.get_user_profile(db, current.user_id)
    if user is None:
        # token and session are valid but the row is gone: data error
        logger.error("[AUTH] profile missing for user %s", current.user_id)
        raise InternalError("failed to get user profile")
    return user


@router.post("/user/logout", response_model=MessageOut)
def logout(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user_store.archive_user_session(db, current.session_id)
    return MessageOut(message="user logged out successfully")


@router.delete("/user/delete-account", response_model=MessageOut)
def delete_account(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Archive the account, then every active session of it.
    Two separate commits: if the second fails the user stays archived and
    the caller gets a 500; login is already impossible at that point.
    """
    user_store.archive_user(db, current.user_id)
    user_store.archive_all_user_sessions(db, current.user_id)
    logger.info("[AUTH] user %s deleted account", current.user_id)
    return MessageOut(message="account deleted successfully")
