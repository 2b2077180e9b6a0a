import os

# Point the app at an in-memory database before anything from cueroom is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test_secret_key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cueroom.db import base  # noqa: F401
from cueroom.db.session import Base, get_db
from cueroom.main import app
from cueroom.modules.posts.schemas.post import PostCreate
from cueroom.modules.posts.services.post import create_post
from tests.utils import auth_headers, make_user

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def user(db):
    return make_user(db, "acid_annie")


@pytest.fixture()
def other_user(db):
    return make_user(db, "techno_tom")


@pytest.fixture()
def headers(user):
    return auth_headers(user)


@pytest.fixture()
def other_headers(other_user):
    return auth_headers(other_user)


@pytest.fixture()
def post(db, user):
    return create_post(
        db,
        PostCreate(title="Warehouse set", content="Recorded live last night", tags=["#Techno"]),
        user.id,
    )
