# store/services/auth_service.py
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import jwt, JWTError, ExpiredSignatureError

from store.utils import settings
from store.utils.logging import get_logger

logger = get_logger(__name__)


class TokenInvalid(Exception):
    """Token is missing, malformed, badly signed or does not carry a user id."""


class TokenExpired(TokenInvalid):
    """Token was valid but its lifetime is over."""


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, digest: str) -> bool:
    # checkpw rehashes the candidate with the stored salt and compares in constant time
    try:
        return bcrypt.checkpw(password.encode("utf-8"), digest.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password digest is not a bcrypt hash")
        return False


def issue_token(user_id: int, expires_in: int | None = None) -> str:
    lifetime = settings.TOKEN_LIFETIME if expires_in is None else expires_in
    now = datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "iat": now,
        "exp": now + timedelta(seconds=lifetime),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> int:
    """Return the user id carried by `token` or raise TokenExpired / TokenInvalid."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError as e:
        raise TokenExpired("expired token") from e
    except JWTError as e:
        raise TokenInvalid("invalid token") from e

    user_id = payload.get("id")
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise TokenInvalid("invalid token")
    return user_id
