"""
Housekeeping task status state machine.

    pending -> in_progress -> completed
    pending -> skipped

``completed`` and ``skipped`` are terminal. The graph is validated with the
``transitions`` library; the write is a conditional UPDATE so two racing
requests cannot both move the same task.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, Union
from uuid import UUID

from sqlalchemy.orm import Session
from transitions import Machine

from shared.core.exceptions import ConflictError, InvalidTransitionError, ValidationError
from shared.core.schemas import UserToken
from shared.utils.app_status_code import AppStatusCode

from ...enum.housekeeping_enum import HousekeepingTaskStatus, TERMINAL_TASK_STATUSES
from ...models.housekeeping.housekeeping_tasks import HousekeepingTask
from .roster_filter import authorize_task_action
from .housekeeping_tasks_crud import get_task_or_404

logger = logging.getLogger(__name__)

STATES = [s.value for s in HousekeepingTaskStatus]

TRANSITIONS = [
    {"trigger": "start",    "source": "pending",     "dest": "in_progress"},
    {"trigger": "skip",     "source": "pending",     "dest": "skipped"},
    {"trigger": "complete", "source": "in_progress", "dest": "completed"},
]

TRIGGER_BY_TARGET = {t["dest"]: t["trigger"] for t in TRANSITIONS}
TARGET_BY_TRIGGER = {t["trigger"]: t["dest"] for t in TRANSITIONS}


def coerce_status(value: Union[str, HousekeepingTaskStatus, None]) -> HousekeepingTaskStatus:
    try:
        return HousekeepingTaskStatus(value)
    except ValueError:
        raise ValidationError(
            f"Unknown status '{value}'. Expected one of: {', '.join(STATES)}",
            AppStatusCode.INVALID_INPUT,
        )


class TaskLifecycle:
    """Pure transition check for a single task, no IO."""

    def __init__(self, initial_state: str = HousekeepingTaskStatus.pending.value):
        self.machine = Machine(
            model=self,
            states=STATES,
            transitions=TRANSITIONS,
            initial=initial_state,
            auto_transitions=False,
            send_event=False,
        )

    def can_move_to(self, target: str) -> bool:
        trigger = TRIGGER_BY_TARGET.get(target)
        return trigger is not None and trigger in self.machine.get_triggers(self.state)

    def move_to(self, target: str) -> str:
        if not self.can_move_to(target):
            raise InvalidTransitionError(
                f"Cannot move task from '{self.state}' to '{target}'"
            )
        getattr(self, TRIGGER_BY_TARGET[target])()
        return self.state

    def allowed_targets(self) -> list:
        return [TARGET_BY_TRIGGER[t] for t in self.machine.get_triggers(self.state)
                if t in TARGET_BY_TRIGGER]

    @property
    def is_terminal(self) -> bool:
        return self.state in {s.value for s in TERMINAL_TASK_STATUSES}


def apply_status_write(
    db: Session,
    task: HousekeepingTask,
    observed_status: str,
    target: str,
    notes: Optional[str] = None,
) -> HousekeepingTask:
    """Persist ``target`` only if the row still holds ``observed_status``."""
    now = datetime.now(timezone.utc)
    values = {"status": target, "updated_at": now}
    if target == HousekeepingTaskStatus.completed.value:
        values["completed_at"] = now
    if notes is not None:
        values["notes"] = notes

    updated = (
        db.query(HousekeepingTask)
        .filter(
            HousekeepingTask.id == task.id,
            HousekeepingTask.status == observed_status,
        )
        .update(values, synchronize_session=False)
    )
    if updated == 0:
        db.rollback()
        logger.warning(
            "Stale status write on task %s (expected %s)", task.id, observed_status)
        raise ConflictError(
            "Task was changed by someone else. Refresh and try again."
        )

    db.commit()
    db.refresh(task)
    return task


# ----------------- Update Status -----------------
def update_task_status(
    db: Session,
    task_id: UUID,
    requested_status: Union[str, HousekeepingTaskStatus],
    acting_user: UserToken,
    notes: Optional[str] = None,
) -> HousekeepingTask:
    target = coerce_status(requested_status).value
    task = get_task_or_404(db, task_id)

    authorize_task_action(acting_user, task)

    observed = task.status
    lifecycle = TaskLifecycle(observed)
    try:
        lifecycle.move_to(target)
    except InvalidTransitionError:
        logger.warning(
            "Rejected transition %s -> %s on task %s by %s",
            observed, target, task.id, acting_user.user_id)
        raise

    task = apply_status_write(db, task, observed, target, notes)
    logger.info(
        "Task %s moved %s -> %s by %s", task.id, observed, target, acting_user.user_id)
    return task
