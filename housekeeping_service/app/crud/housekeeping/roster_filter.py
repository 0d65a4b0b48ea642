"""
Roster view policy: which housekeeping tasks a requester may see and act on.

This module is the single place where role decides scope:

* housekeeping staff see only their own queue (hotel filter ignored)
* receptionists see every task of the hotel on their token
* admins see the requested hotel, or every hotel when none is given
* anyone else is refused
"""
import logging
from datetime import date
from typing import List, Optional, Tuple, Union
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.orm import Session, joinedload

from shared.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from shared.core.schemas import UserToken
from shared.utils.app_status_code import AppStatusCode
from shared.utils.date_helper import parse_task_date, today_in
from shared.utils.enums import UserRole

from ...enum.housekeeping_enum import HousekeepingShift, HousekeepingTaskStatus
from ...models.hotels.hotels import Hotel
from ...models.hotels.rooms import Room
from ...models.housekeeping.housekeeping_tasks import HousekeepingTask

logger = logging.getLogger(__name__)


class RosterScope(BaseModel):
    hotel_id: Optional[UUID] = None
    assigned_to: Optional[str] = None
    task_date: Optional[date] = None
    shift: Optional[HousekeepingShift] = None
    status: Optional[HousekeepingTaskStatus] = None


# ----------------- Input coercion -----------------
def parse_uuid(value: Union[str, UUID, None], field: str = "id") -> Optional[UUID]:
    if value is None or isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {field}: {value}", AppStatusCode.INVALID_INPUT)


def parse_shift(value: Union[str, HousekeepingShift, None]) -> Optional[HousekeepingShift]:
    if value is None:
        return None
    try:
        return HousekeepingShift(value)
    except ValueError:
        raise ValidationError(f"Unknown shift '{value}'", AppStatusCode.INVALID_INPUT)


def parse_status_filter(value: Union[str, HousekeepingTaskStatus, None]) -> Optional[HousekeepingTaskStatus]:
    if value is None:
        return None
    try:
        return HousekeepingTaskStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown status '{value}'", AppStatusCode.INVALID_INPUT)


# ----------------- Scope Policy -----------------
def scope_for_requester(
    requester: UserToken,
    hotel_id: Union[str, UUID, None] = None,
) -> Tuple[Optional[UUID], Optional[str]]:
    """Return ``(hotel_id, assigned_to)`` the requester is entitled to."""
    role = (requester.role or "").lower()

    if role == UserRole.HOUSEKEEPING.value:
        return None, requester.user_id

    if role == UserRole.RECEPTIONIST.value:
        if requester.hotel_id is None:
            raise ForbiddenError("Receptionist is not attached to a hotel")
        return requester.hotel_id, None

    if role == UserRole.ADMIN.value:
        return parse_uuid(hotel_id, "hotel_id"), None

    raise ForbiddenError(f"Role '{requester.role}' cannot view the housekeeping roster")


def authorize_task_action(requester: UserToken, task: HousekeepingTask) -> None:
    """Assigned staff may act on their own task; admins and the hotel's
    receptionists may override."""
    role = (requester.role or "").lower()

    if task.assigned_to is not None and task.assigned_to == requester.user_id:
        return
    if role == UserRole.ADMIN.value:
        return
    if role == UserRole.RECEPTIONIST.value and requester.hotel_id == task.hotel_id:
        return

    logger.warning("User %s (%s) refused on task %s",
                   requester.user_id, requester.role, task.id)
    raise ForbiddenError("You are not allowed to update this task")


def authorize_assignment(requester: UserToken, task: HousekeepingTask) -> None:
    role = (requester.role or "").lower()
    if role == UserRole.ADMIN.value:
        return
    if role == UserRole.RECEPTIONIST.value and requester.hotel_id == task.hotel_id:
        return
    raise ForbiddenError("Only admins or the hotel's receptionists can assign tasks")


def get_hotel_or_404(db: Session, hotel_id: UUID) -> Hotel:
    hotel = db.query(Hotel).filter(
        Hotel.id == hotel_id,
        Hotel.is_deleted == False
    ).first()
    if not hotel:
        raise NotFoundError(f"Hotel {hotel_id} not found", AppStatusCode.HOTEL_NOT_FOUND)
    return hotel


def resolve_roster_scope(
    db: Session,
    requester: UserToken,
    hotel_id=None,
    task_date=None,
    shift=None,
    status=None,
) -> RosterScope:
    scoped_hotel_id, assigned_to = scope_for_requester(requester, hotel_id)

    tz_name = None
    if scoped_hotel_id is not None:
        tz_name = get_hotel_or_404(db, scoped_hotel_id).timezone
    elif requester.hotel_id is not None:
        home = db.query(Hotel).filter(Hotel.id == requester.hotel_id).first()
        tz_name = home.timezone if home else None

    # "today" is the hotel's local day
    day = parse_task_date(task_date) if task_date is not None else today_in(tz_name)

    return RosterScope(
        hotel_id=scoped_hotel_id,
        assigned_to=assigned_to,
        task_date=day,
        shift=parse_shift(shift),
        status=parse_status_filter(status),
    )


# ----------------- Build Filters -----------------
def build_roster_filters(scope: RosterScope):
    filters = []

    if scope.hotel_id is not None:
        filters.append(HousekeepingTask.hotel_id == scope.hotel_id)

    if scope.assigned_to is not None:
        filters.append(HousekeepingTask.assigned_to == scope.assigned_to)

    if scope.task_date is not None:
        filters.append(HousekeepingTask.task_date == scope.task_date)

    if scope.shift is not None:
        filters.append(HousekeepingTask.shift == scope.shift.value)

    if scope.status is not None:
        filters.append(HousekeepingTask.status == scope.status.value)

    return filters


def query_tasks(db: Session, scope: RosterScope) -> List[HousekeepingTask]:
    # ordered by room number so the roster reads the same on every refresh
    return (
        db.query(HousekeepingTask)
        .join(Room, Room.id == HousekeepingTask.room_id)
        .options(joinedload(HousekeepingTask.room))
        .filter(*build_roster_filters(scope))
        .order_by(HousekeepingTask.task_date, Room.room_number, HousekeepingTask.id)
        .all()
    )


# ----------------- Store Reads -----------------
def list_tasks_by_date_and_hotel(db: Session, hotel_id, task_date, shift=None, status=None) -> List[HousekeepingTask]:
    scope = RosterScope(
        hotel_id=parse_uuid(hotel_id, "hotel_id"),
        task_date=parse_task_date(task_date),
        shift=parse_shift(shift),
        status=parse_status_filter(status),
    )
    return query_tasks(db, scope)


def list_tasks_by_assignee(db: Session, staff_id: str, task_date=None, shift=None, status=None) -> List[HousekeepingTask]:
    scope = RosterScope(
        assigned_to=staff_id,
        task_date=parse_task_date(task_date) if task_date is not None else None,
        shift=parse_shift(shift),
        status=parse_status_filter(status),
    )
    return query_tasks(db, scope)


# ----------------- Roster -----------------
def list_tasks(
    db: Session,
    requester: UserToken,
    hotel_id=None,
    task_date=None,
    shift=None,
    status=None,
) -> Tuple[List[HousekeepingTask], RosterScope]:
    scope = resolve_roster_scope(db, requester, hotel_id, task_date, shift, status)
    tasks = query_tasks(db, scope)
    logger.debug("Roster for %s (%s): %d tasks on %s",
                 requester.user_id, requester.role, len(tasks), scope.task_date)
    return tasks, scope
