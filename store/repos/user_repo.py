from typing import List

from sqlalchemy import select, or_
from sqlalchemy.orm import Session
from store.data.models.user import UserModel

class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def find_by_login(self, login: str) -> UserModel | None:
        stmt = select(UserModel).where(
            or_(UserModel.username == login, UserModel.email == login)
        )
        return self.db.execute(stmt).scalars().first()

    def list_users(self) -> List[UserModel]:
        return list(self.db.execute(select(UserModel).order_by(UserModel.id)).scalars().all())

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def set_admin(self, user: UserModel, admin: bool) -> UserModel:
        user.admin = admin
        self.db.commit()
        self.db.refresh(user)
        return user

    def rollback(self):
        self.db.rollback()
