"""
Daily housekeeping task generation.

One task per room per day: ``checkout_cleaning`` when a live booking for the
room checks out that day, ``routine_cleaning`` otherwise. Re-running for the
same hotel and day only reports the existing tasks as skipped.
"""
import logging
from datetime import date
from typing import Set
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.exceptions import ConflictError, NotFoundError
from shared.utils.app_status_code import AppStatusCode
from shared.utils.date_helper import parse_task_date
from shared.utils.enums import RecordStatus

from ...enum.housekeeping_enum import (
    HousekeepingShift,
    HousekeepingTaskStatus,
    HousekeepingTaskType,
    INACTIVE_BOOKING_STATUSES,
)
from ...models.hotels.bookings import Booking
from ...models.hotels.hotels import Hotel
from ...models.hotels.rooms import Room
from ...models.housekeeping.housekeeping_tasks import HousekeepingTask
from .roster_filter import parse_uuid

logger = logging.getLogger(__name__)

DEFAULT_SHIFT = HousekeepingShift.morning


def get_active_hotel(db: Session, hotel_id: UUID) -> Hotel:
    hotel = db.query(Hotel).filter(
        Hotel.id == hotel_id,
        Hotel.is_deleted == False,
        Hotel.status == RecordStatus.active.value,
    ).first()
    if not hotel:
        raise NotFoundError(f"Active hotel {hotel_id} not found", AppStatusCode.HOTEL_NOT_FOUND)
    return hotel


def _checkout_room_ids(db: Session, hotel_id: UUID, day: date) -> Set[UUID]:
    rows = (
        db.query(Booking.room_id)
        .filter(
            Booking.hotel_id == hotel_id,
            Booking.check_out == day,
            Booking.status.notin_(INACTIVE_BOOKING_STATUSES),
        )
        .all()
    )
    return {r.room_id for r in rows}


def _existing_room_ids(db: Session, hotel_id: UUID, day: date) -> Set[UUID]:
    rows = (
        db.query(HousekeepingTask.room_id)
        .filter(
            HousekeepingTask.hotel_id == hotel_id,
            HousekeepingTask.task_date == day,
        )
        .all()
    )
    return {r.room_id for r in rows}


def _insert_task(db: Session, task: HousekeepingTask) -> None:
    """Insert inside a savepoint; a unique-key clash becomes ConflictError."""
    try:
        with db.begin_nested():
            db.add(task)
    except IntegrityError:
        raise ConflictError(
            f"Task already exists for room {task.room_id} on {task.task_date}",
            AppStatusCode.DUPLICATE_ADD_ERROR,
        )


# ----------------- Generate Tasks -----------------
def generate_daily_tasks(db: Session, hotel_id, task_date) -> dict:
    day = parse_task_date(task_date)
    hotel = get_active_hotel(db, parse_uuid(hotel_id, "hotel_id"))

    rooms = (
        db.query(Room)
        .filter(Room.hotel_id == hotel.id, Room.is_deleted == False)
        .order_by(Room.room_number)
        .all()
    )
    checkout_rooms = _checkout_room_ids(db, hotel.id, day)
    existing_rooms = _existing_room_ids(db, hotel.id, day)

    created = skipped = failed = 0
    for room in rooms:
        if room.id in existing_rooms:
            skipped += 1
            continue

        task_type = (
            HousekeepingTaskType.checkout_cleaning
            if room.id in checkout_rooms
            else HousekeepingTaskType.routine_cleaning
        )
        task = HousekeepingTask(
            hotel_id=hotel.id,
            room_id=room.id,
            task_date=day,
            shift=DEFAULT_SHIFT.value,
            task_type=task_type.value,
            status=HousekeepingTaskStatus.pending.value,
        )

        try:
            _insert_task(db, task)
            created += 1
        except ConflictError:
            # another generator got there first
            skipped += 1
        except SQLAlchemyError:
            logger.exception("Failed to create task for room %s on %s", room.room_number, day)
            failed += 1

    db.commit()
    logger.info(
        "Generated housekeeping tasks for hotel %s on %s: created=%d skipped=%d failed=%d",
        hotel.id, day, created, skipped, failed)
    return {"created": created, "skipped": skipped, "failed": failed}
