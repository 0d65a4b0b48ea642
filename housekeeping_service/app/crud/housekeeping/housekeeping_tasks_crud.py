import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from shared.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from shared.core.schemas import Lookup, UserToken
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole

from ...enum.housekeeping_enum import (
    HousekeepingShift,
    HousekeepingTaskStatus,
    HousekeepingTaskType,
    TERMINAL_TASK_STATUSES,
)
from ...models.housekeeping.housekeeping_tasks import HousekeepingTask
from .roster_filter import authorize_assignment, build_roster_filters, resolve_roster_scope

logger = logging.getLogger(__name__)


def get_task_or_404(db: Session, task_id: UUID) -> HousekeepingTask:
    task = db.query(HousekeepingTask).filter(HousekeepingTask.id == task_id).first()
    if not task:
        raise NotFoundError(f"Housekeeping task {task_id} not found", AppStatusCode.TASK_NOT_FOUND)
    return task


# ----------------- Assign Task -----------------
def assign_task(db: Session, task_id: UUID, staff_id: Optional[str], acting_user: UserToken) -> HousekeepingTask:
    if not staff_id or not str(staff_id).strip():
        raise ValidationError("staff_id is required", AppStatusCode.REQUIRED_VALIDATION_ERROR)
    staff_id = str(staff_id).strip()

    task = get_task_or_404(db, task_id)
    authorize_assignment(acting_user, task)

    terminal = [s.value for s in TERMINAL_TASK_STATUSES]
    if task.status in terminal:
        raise InvalidTransitionError(f"Cannot reassign a task that is {task.status}")

    updated = (
        db.query(HousekeepingTask)
        .filter(
            HousekeepingTask.id == task.id,
            HousekeepingTask.status.notin_(terminal),
        )
        .update(
            {"assigned_to": staff_id, "updated_at": datetime.now(timezone.utc)},
            synchronize_session=False,
        )
    )
    if updated == 0:
        db.rollback()
        raise ConflictError("Task was closed while assigning. Refresh and try again.")

    db.commit()
    db.refresh(task)
    logger.info("Task %s assigned to %s by %s", task.id, staff_id, acting_user.user_id)
    return task


# ----------------- Overview Calculation -----------------
def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def get_housekeeping_overview(db: Session, requester: UserToken, hotel_id=None, task_date=None) -> dict:
    if (requester.role or "").lower() not in UserRole.managers():
        raise ForbiddenError("Only admins or receptionists can view the overview")

    scope = resolve_roster_scope(db, requester, hotel_id, task_date)
    filters = build_roster_filters(scope)

    counts = (
        db.query(
            func.count(HousekeepingTask.id).label("total_tasks"),
            func.count(case((HousekeepingTask.status == "pending", 1))).label("pending"),
            func.count(case((HousekeepingTask.status == "in_progress", 1))).label("in_progress"),
            func.count(case((HousekeepingTask.status == "completed", 1))).label("completed"),
            func.count(case((HousekeepingTask.status == "skipped", 1))).label("skipped"),
        )
        .filter(*filters)
        .one()
    )

    # averaged in python; sqlite has no epoch extract
    finished = (
        db.query(HousekeepingTask.created_at, HousekeepingTask.completed_at)
        .filter(*filters, HousekeepingTask.completed_at.isnot(None))
        .all()
    )
    durations = [
        (_as_utc(done) - _as_utc(created)).total_seconds() / 60
        for created, done in finished
        if created is not None
    ]
    avg_minutes = sum(durations) / len(durations) if durations else 0

    return {
        "totalTasks": counts.total_tasks or 0,
        "pending": counts.pending or 0,
        "inProgress": counts.in_progress or 0,
        "completed": counts.completed or 0,
        "skipped": counts.skipped or 0,
        "avgCompletionMinutes": round(float(max(avg_minutes, 0)), 2),
    }


# ------------------ Lookups ------------------
def shift_lookup() -> List[Lookup]:
    return [
        Lookup(id=shift.value, name=shift.name.capitalize())
        for shift in HousekeepingShift
    ]


def status_lookup() -> List[Lookup]:
    return [
        Lookup(id=status.value, name=status.name.replace("_", " ").capitalize())
        for status in HousekeepingTaskStatus
    ]


def task_type_lookup() -> List[Lookup]:
    return [
        Lookup(id=task_type.value, name=task_type.name.replace("_", " ").capitalize())
        for task_type in HousekeepingTaskType
    ]
