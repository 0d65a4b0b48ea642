"""
Daily task generation: task types, idempotency and race handling.
"""
from datetime import date

import pytest
from sqlalchemy.exc import SQLAlchemyError

from shared.core.exceptions import NotFoundError, ValidationError
from housekeeping_service.app.crud.housekeeping import task_generator
from housekeeping_service.app.crud.housekeeping.task_generator import generate_daily_tasks
from housekeeping_service.app.models.hotels import Booking, Room
from housekeeping_service.app.models.housekeeping import HousekeepingTask

SERVICE_DAY = date(2024, 6, 1)


def _tasks_by_room(db_session, hotel):
    tasks = db_session.query(HousekeepingTask).filter(HousekeepingTask.hotel_id == hotel.id).all()
    return {t.room_id: t for t in tasks}


def test_generates_routine_and_checkout_tasks(db_session, seed_data):
    result = generate_daily_tasks(db_session, seed_data["h1"].id, "2024-06-01")
    assert result == {"created": 2, "skipped": 0, "failed": 0}

    tasks = _tasks_by_room(db_session, seed_data["h1"])
    r1_task = tasks[seed_data["r1"].id]
    r2_task = tasks[seed_data["r2"].id]

    assert r1_task.task_type == "routine_cleaning"
    assert r2_task.task_type == "checkout_cleaning"
    for task in (r1_task, r2_task):
        assert task.status == "pending"
        assert task.shift == "morning"
        assert task.task_date == SERVICE_DAY
        assert task.completed_at is None


def test_regeneration_is_idempotent(db_session, seed_data):
    generate_daily_tasks(db_session, seed_data["h1"].id, SERVICE_DAY)
    second = generate_daily_tasks(db_session, seed_data["h1"].id, SERVICE_DAY)

    assert second["created"] == 0
    assert second["skipped"] == 2
    assert len(_tasks_by_room(db_session, seed_data["h1"])) == 2


def test_only_target_hotel_gets_tasks(db_session, seed_data):
    generate_daily_tasks(db_session, seed_data["h1"].id, SERVICE_DAY)
    assert _tasks_by_room(db_session, seed_data["h2"]) == {}


def test_iso_timestamp_is_normalised_to_day(db_session, seed_data):
    generate_daily_tasks(db_session, seed_data["h1"].id, "2024-06-01T18:45:12.000Z")
    tasks = _tasks_by_room(db_session, seed_data["h1"])
    assert {t.task_date for t in tasks.values()} == {SERVICE_DAY}


def test_cancelled_checkout_falls_back_to_routine(db_session, seed_data):
    booking = seed_data["booking"]
    booking.status = "cancelled"
    db_session.commit()

    generate_daily_tasks(db_session, seed_data["h1"].id, SERVICE_DAY)
    tasks = _tasks_by_room(db_session, seed_data["h1"])
    assert tasks[seed_data["r2"].id].task_type == "routine_cleaning"


def test_checkout_on_other_day_is_routine(db_session, seed_data):
    generate_daily_tasks(db_session, seed_data["h1"].id, date(2024, 6, 2))
    tasks = _tasks_by_room(db_session, seed_data["h1"])
    assert {t.task_type for t in tasks.values()} == {"routine_cleaning"}


def test_deleted_rooms_are_ignored(db_session, seed_data):
    room = db_session.get(Room, seed_data["r1"].id)
    room.is_deleted = True
    db_session.commit()

    result = generate_daily_tasks(db_session, seed_data["h1"].id, SERVICE_DAY)
    assert result["created"] == 1


def test_unknown_hotel_not_found(db_session, seed_data):
    import uuid
    with pytest.raises(NotFoundError):
        generate_daily_tasks(db_session, uuid.uuid4(), SERVICE_DAY)


def test_inactive_hotel_not_found(db_session, seed_data):
    hotel = seed_data["h2"]
    hotel.status = "inactive"
    db_session.commit()

    with pytest.raises(NotFoundError):
        generate_daily_tasks(db_session, hotel.id, SERVICE_DAY)


@pytest.mark.parametrize("bad_date", ["garbage", "2024-13-45", "", None])
def test_unparseable_date_rejected(db_session, seed_data, bad_date):
    with pytest.raises(ValidationError):
        generate_daily_tasks(db_session, seed_data["h1"].id, bad_date)


def test_lost_race_counts_as_skipped(db_session, seed_data, make_task, monkeypatch):
    # a concurrent generator wrote R1 after our existence check
    make_task(seed_data["h1"], seed_data["r1"])
    monkeypatch.setattr(task_generator, "_existing_room_ids", lambda db, hotel_id, day: set())

    result = generate_daily_tasks(db_session, seed_data["h1"].id, SERVICE_DAY)

    assert result == {"created": 1, "skipped": 1, "failed": 0}
    assert len(_tasks_by_room(db_session, seed_data["h1"])) == 2


def test_failed_room_does_not_roll_back_others(db_session, seed_data, monkeypatch):
    original_insert = task_generator._insert_task
    broken_room = seed_data["r1"].id

    def flaky_insert(db, task):
        if task.room_id == broken_room:
            raise SQLAlchemyError("disk full")
        return original_insert(db, task)

    monkeypatch.setattr(task_generator, "_insert_task", flaky_insert)

    result = generate_daily_tasks(db_session, seed_data["h1"].id, SERVICE_DAY)

    assert result == {"created": 1, "skipped": 0, "failed": 1}
    tasks = _tasks_by_room(db_session, seed_data["h1"])
    assert list(tasks) == [seed_data["r2"].id]


def test_generation_never_touches_existing_tasks(db_session, seed_data, make_task):
    task = make_task(seed_data["h1"], seed_data["r1"], status="in_progress", assigned_to="S1")

    generate_daily_tasks(db_session, seed_data["h1"].id, SERVICE_DAY)
    db_session.refresh(task)

    assert task.status == "in_progress"
    assert task.assigned_to == "S1"
