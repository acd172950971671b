# todo_app/services/password.py
# One-way password hashing (bcrypt through passlib).
# Minimum length is enforced by the request schemas, not here.
import logging

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")


class HashError(Exception):
    """Hashing failed inside the primitive."""


class MismatchError(Exception):
    """Plaintext does not match the stored digest."""


def hash_password(raw: str) -> str:
    try:
        return pwd_ctx.hash(raw)
    except Exception as e:
        logger.exception("[AUTH] password hashing failed")
        raise HashError("failed to hash password") from e


def verify_password(raw: str, hashed: str) -> None:
    # an unknown/corrupt digest counts as a mismatch, not a server fault
    try:
        ok = pwd_ctx.verify(raw, hashed)
    except (ValueError, TypeError):
        ok = False
    if not ok:
        raise MismatchError("password does not match")
