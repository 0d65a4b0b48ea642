"""
Test fixtures - in-memory SQLite database, seeded hotel and token helpers
"""
import os

# must be set before the app modules build their engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")

from datetime import date

import pytest
from fastapi.testclient import TestClient

from shared.core.auth import create_access_token
from shared.core.database import Base, HousekeepingSessionLocal, get_housekeeping_db, housekeeping_engine
from shared.core.schemas import UserToken
from housekeeping_service.app.main import app
from housekeeping_service.app.models.hotels import Booking, Hotel, Room
from housekeeping_service.app.models.housekeeping import HousekeepingTask

SERVICE_DAY = date(2024, 6, 1)


@pytest.fixture()
def db_session():
    """Fresh tables for each test"""
    Base.metadata.drop_all(bind=housekeeping_engine)
    Base.metadata.create_all(bind=housekeeping_engine)

    session = HousekeepingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=housekeeping_engine)


@pytest.fixture()
def seed_data(db_session):
    """Hotel H1 with rooms R1, R2 (R2 checks out on SERVICE_DAY) and hotel H2 with one room"""
    h1 = Hotel(name="Harbour View", code="H1", status="active", timezone="UTC")
    h2 = Hotel(name="Hill Lodge", code="H2", status="active", timezone="UTC")
    db_session.add_all([h1, h2])
    db_session.flush()

    r1 = Room(hotel_id=h1.id, room_number="101", room_type="Deluxe")
    r2 = Room(hotel_id=h1.id, room_number="102", room_type="Suite")
    r3 = Room(hotel_id=h2.id, room_number="201", room_type="Standard")
    db_session.add_all([r1, r2, r3])
    db_session.flush()

    booking = Booking(
        hotel_id=h1.id,
        room_id=r2.id,
        guest_name="Ada Guest",
        status="in_house",
        check_in=date(2024, 5, 28),
        check_out=SERVICE_DAY,
    )
    db_session.add(booking)
    db_session.commit()

    return {"h1": h1, "h2": h2, "r1": r1, "r2": r2, "r3": r3, "booking": booking}


@pytest.fixture()
def make_task(db_session):
    def _make(hotel, room, status="pending", assigned_to=None, task_date=SERVICE_DAY,
              shift="morning", task_type="routine_cleaning", completed_at=None):
        task = HousekeepingTask(
            hotel_id=hotel.id,
            room_id=room.id,
            task_date=task_date,
            shift=shift,
            task_type=task_type,
            status=status,
            assigned_to=assigned_to,
            completed_at=completed_at,
        )
        db_session.add(task)
        db_session.commit()
        db_session.refresh(task)
        return task

    return _make


def make_user(user_id, role, hotel_id=None):
    return UserToken(user_id=user_id, role=role, hotel_id=hotel_id, name=user_id)


@pytest.fixture()
def users(seed_data):
    h1 = seed_data["h1"]
    return {
        "admin": make_user("admin-1", "admin"),
        "reception": make_user("rec-1", "receptionist", h1.id),
        "reception_h2": make_user("rec-2", "receptionist", seed_data["h2"].id),
        "s1": make_user("S1", "housekeeping", h1.id),
        "s2": make_user("S2", "housekeeping", h1.id),
        "guest": make_user("guest-1", "guest"),
    }


def bearer(user: UserToken) -> dict:
    token = create_access_token({
        "user_id": user.user_id,
        "role": user.role,
        "hotel_id": user.hotel_id,
        "name": user.name,
    })
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def client(db_session, seed_data):
    """TestClient bound to the FastAPI app, sharing the test session"""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_housekeeping_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers():
    return bearer
