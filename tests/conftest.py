import os
from decimal import Decimal

# must be set before anything from store is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from store.data.database import Base, engine, SessionLocal
from store.data.models import CategoryModel, ProductModel, UserModel
from store.main import app
from store.services.auth_service import hash_password, issue_token


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    Base.metadata.drop_all(bind=engine)


def create_user(username="regular_user", password="s3cret-pass", admin=False) -> UserModel:
    with SessionLocal() as session:
        user = UserModel(username=username, password=hash_password(password), admin=admin)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user


def create_category(title="Tools") -> CategoryModel:
    with SessionLocal() as session:
        category = CategoryModel(title=title)
        session.add(category)
        session.commit()
        session.refresh(category)
        return category


def create_product(category_id=None, title="Hammer", price="12.50", about="Heavy", img="h.png") -> ProductModel:
    with SessionLocal() as session:
        product = ProductModel(
            category_id=category_id,
            title=title,
            price=Decimal(str(price)),
            about=about,
            img=img,
        )
        session.add(product)
        session.commit()
        session.refresh(product)
        return product


def auth_header(user: UserModel) -> dict:
    return {"Authorization": f"Bearer {issue_token(user.id)}"}


@pytest.fixture
def admin(client):
    return create_user(username="admin_user", admin=True)


@pytest.fixture
def user(client):
    return create_user()
