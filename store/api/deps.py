# store/api/deps.py
"""
Request guards, applied as FastAPI dependencies in this order:

    require_authentication -> require_admin

Each step either passes, leaving the resolved user on `request.state.user`,
or stops the request with a typed rejection that main.py turns into JSON.
"""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from store.data.database import get_db
from store.data.models.user import UserModel
from store.repos.user_repo import UserRepo
from store.services.auth_service import verify_token, TokenExpired, TokenInvalid
from store.utils.logging import get_logger

logger = get_logger(__name__)


class Unauthenticated(Exception):
    def __init__(self, reason: str = "invalid token"):
        super().__init__(reason)
        self.reason = reason


class Forbidden(Exception):
    pass


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization")
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def require_authentication(request: Request, db: Session = Depends(get_db)) -> UserModel:
    token = _bearer_token(request)
    if token is None:
        raise Unauthenticated("invalid token")

    try:
        user_id = verify_token(token)
    except TokenExpired:
        logger.warning(f"Expired token on {request.url.path}")
        raise Unauthenticated("expired token")
    except TokenInvalid:
        logger.warning(f"Invalid token on {request.url.path}")
        raise Unauthenticated("invalid token")

    user = UserRepo(db).get_user(user_id)
    if not user:
        # token outlived its user
        raise Unauthenticated("invalid token")

    request.state.user = user
    return user


def require_admin(user: UserModel = Depends(require_authentication)) -> UserModel:
    if not user.admin:
        logger.warning(f"User {user.id} is not an admin")
        raise Forbidden()
    return user
