from typing import Any, Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from store.data.models.user import UserModel
from store.domain.result import Ok, NotFound, ValidationFailed, Result
from store.domain.schemas import FieldError
from store.domain.validation import validate_registration, validate_admin_flag, is_empty
from store.repos.user_repo import UserRepo
from store.services.auth_service import hash_password, verify_password, issue_token
from store.utils.sanitize import sanitize
from store.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, fields: Dict[str, Any]) -> Result:
        errors = validate_registration(fields)
        if errors:
            return ValidationFailed(errors)

        email = None if is_empty(fields.get("email")) else sanitize(fields["email"])
        username = email if is_empty(fields.get("username")) else sanitize(fields["username"])

        # either identifier can be used to log in, so both must be free in both columns
        taken = []
        if self.repo.find_by_login(username):
            taken.append(FieldError(field="username", message="Username is already registered"))
        if email and email != username and self.repo.find_by_login(email):
            taken.append(FieldError(field="email", message="Email is already registered"))
        if taken:
            return ValidationFailed(taken)

        user = UserModel(
            username=username,
            email=email,
            password=hash_password(fields["password"]),
            admin=False,
        )
        try:
            created = self.repo.create_user(user)
        except IntegrityError:
            # lost a race with a concurrent registration
            self.repo.rollback()
            return ValidationFailed([
                FieldError(field="username", message="Username is already registered"),
            ])

        logger.info(f"Registered user {created.id} ({created.username})")
        return Ok({"token": issue_token(created.id), "identity": created})

    def login(self, login: Any, password: Any) -> str | None:
        """Token for valid credentials, None otherwise."""
        if not isinstance(login, str) or not isinstance(password, str):
            return None

        user = self.repo.find_by_login(login)
        if not user or not verify_password(password, user.password):
            logger.warning(f"Failed login for {login!r}")
            return None

        return issue_token(user.id)

    def get_user(self, user_id: int) -> UserModel | None:
        return self.repo.get_user(user_id)

    def list_users(self) -> List[UserModel]:
        return self.repo.list_users()

    def set_admin(self, user_id: int, fields: Dict[str, Any]) -> Result:
        errors = validate_admin_flag(fields)
        if errors:
            return ValidationFailed(errors)

        user = self.repo.get_user(user_id)
        if not user:
            return NotFound()

        updated = self.repo.set_admin(user, fields["admin"])
        logger.info(f"User {user_id} admin flag set to {updated.admin}")
        return Ok(updated)
