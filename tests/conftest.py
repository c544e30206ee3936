import os
import tempfile

_tmp_dir = tempfile.mkdtemp(prefix="routine-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmp_dir, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough-1234"
os.environ["SEED_ADMIN_USERNAME"] = ""
os.environ["LOG_DIR"] = os.path.join(_tmp_dir, "logs")

import pytest
from fastapi.testclient import TestClient

from routine_app.database import Base, SessionLocal, engine
from routine_app.main import app
from routine_app.models.user import User
from routine_app.utils.auth import create_access_token


@pytest.fixture(autouse=True)
def fresh_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def _headers_for(db, username, role):
    db.add(User(username=username, password_hash="not-a-real-hash", role=role))
    db.commit()
    token = create_access_token({"sub": username, "role": role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(db):
    return _headers_for(db, "principal", "admin")


@pytest.fixture
def staff_headers(db):
    return _headers_for(db, "clerk", "staff")


def period(start, end, subject="Mathematics", teacher="", room=""):
    return {"startTime": start, "endTime": end, "subject": subject, "teacher": teacher, "roomNo": room}


def routine_body(class_name, section, days):
    """days: {"Monday": [period(...), ...]}"""
    return {
        "className": class_name,
        "section": section,
        "weekSchedule": [{"day": d, "periods": ps} for d, ps in days.items()],
    }
