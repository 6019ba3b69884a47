"""
Shared fixtures: a throw-away SQLite database and logged-in clients per role
"""
import os
import sys
import tempfile
from pathlib import Path

# Root directory on the PYTHONPATH for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Environment must be in place before config is imported
_TMP_DIR = tempfile.mkdtemp(prefix="hotel_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'hotel_test.db')}"
os.environ["LOG_FILE"] = os.path.join(_TMP_DIR, "hotel_test_logs.txt")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ALLOW_OVERPAYMENT"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["HOTEL_TIMEZONE"] = "UTC"

import pytest
from fastapi.testclient import TestClient

from create_admin import create_profile
from database.conexion import Base, SessionLocal, engine
from main import app

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def reset_database():
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


@pytest.fixture
def login():
    """Factory: creates a profile with the given role and returns a client signed in as it"""
    clients = []

    def _login(role="admin", email=None):
        email = email or f"{role}@hotel.com"
        session = SessionLocal()
        try:
            create_profile(session, email, PASSWORD, role.title(), "Tester", role=role)
        finally:
            session.close()

        c = TestClient(app)
        response = c.post("/auth/login", data={"username": email, "password": PASSWORD})
        assert response.status_code == 200, response.text
        c.headers["Authorization"] = f"Bearer {response.json()['access_token']}"
        clients.append(c)
        return c

    yield _login

    for c in clients:
        c.close()


# ========== DATA HELPERS ==========

def add_guest(c, **overrides):
    payload = {"first_name": "Ada", "last_name": "Lovelace", "email": "ada@hotel.com"}
    payload.update(overrides)
    response = c.post("/dashboard/guests", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["record"]


def add_room(c, **overrides):
    payload = {"room_number": "101", "room_type": "double", "base_price": "100.00"}
    payload.update(overrides)
    response = c.post("/dashboard/rooms", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["record"]


def add_booking(c, guest_id, room_id, check_in="2024-01-01", check_out="2024-01-03", **overrides):
    payload = {
        "guest_id": guest_id,
        "room_id": room_id,
        "check_in_date": check_in,
        "check_out_date": check_out,
    }
    payload.update(overrides)
    response = c.post("/dashboard/bookings", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["record"]
