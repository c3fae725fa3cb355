import itertools
import os
import tempfile
from types import SimpleNamespace

# settings are read at import time, so point them at a scratch area first
_TMP = tempfile.mkdtemp(prefix="marketplace-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'test.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP, "uploads")
os.environ["ENVIRONMENT"] = "test"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from app import app  # noqa: E402
from db import Base, engine, get_db  # noqa: E402
from models import User  # noqa: E402
from utils import create_jwt, hash_password  # noqa: E402

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_test_db():
    """Fresh tables for every test"""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_user(client):
    """Register a user through the API (admins are inserted directly)."""
    counter = itertools.count(1)

    def _make(role="student", college="Test College", name=None):
        n = next(counter)
        email = f"user{n}@example.com"
        name = name or f"User {n}"
        if role == "admin":
            db = TestingSessionLocal()
            try:
                user = User(
                    name=name,
                    email=email,
                    password=hash_password("password123"),
                    college=college,
                    role="admin",
                )
                db.add(user)
                db.commit()
                user_id = user.id
            finally:
                db.close()
            token = create_jwt(user_id, "admin")
        else:
            response = client.post("/auth/register", json={
                "name": name,
                "email": email,
                "password": "password123",
                "college": college,
                "role": role,
            })
            assert response.status_code == 201, response.text
            data = response.json()["data"]
            user_id, token = data["id"], data["token"]
        return SimpleNamespace(
            id=user_id,
            email=email,
            name=name,
            headers={"Authorization": f"Bearer {token}"},
        )

    return _make


@pytest.fixture
def book_fields():
    return {
        "title": "Linear Algebra Done Right",
        "author": "Sheldon Axler",
        "subject": "Mathematics",
        "price": "450",
        "rental_price": "60",
        "location": "Hostel A",
    }


@pytest.fixture
def create_book(client, book_fields):
    def _create(owner, **overrides):
        data = {**book_fields, **overrides}
        response = client.post("/books", data=data, headers=owner.headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
