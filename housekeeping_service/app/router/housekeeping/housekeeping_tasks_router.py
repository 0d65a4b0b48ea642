from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from uuid import UUID

from shared.core.database import get_housekeeping_db as get_db
from shared.core.auth import allow_admin, allow_staff_manager, validate_current_token
from shared.core.schemas import Lookup, UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...schemas.housekeeping.housekeeping_tasks_schemas import (
    GenerateTasksRequest,
    GenerateTasksResult,
    HousekeepingTaskListResponse,
    HousekeepingTaskOut,
    HousekeepingTaskOverview,
    MyTasksRequest,
    OverviewRequest,
    RosterRequest,
    TaskAssignRequest,
    TaskStatusUpdate,
)
from ...crud.housekeeping import housekeeping_tasks_crud as crud
from ...crud.housekeeping import roster_filter, task_generator, task_status

router = APIRouter(prefix="/api/housekeeping", tags=["Housekeeping Roster"])


# -------------------- Generate --------------------
@router.post("/generate", response_model=None)
def generate_daily_tasks_endpoint(
    request: GenerateTasksRequest,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_admin)
):
    result = task_generator.generate_daily_tasks(db, request.hotel_id, request.task_date)
    return success_response(
        data=GenerateTasksResult(**result),
        message=f"{result['created']} tasks generated, {result['skipped']} already existed",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY,
    )


# -------------------- Roster --------------------
@router.get("/tasks", response_model=HousekeepingTaskListResponse)
def get_roster_endpoint(
    params: RosterRequest = Depends(),
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    tasks, scope = roster_filter.list_tasks(
        db, current_user,
        hotel_id=params.hotel_id,
        task_date=params.task_date,
        shift=params.shift,
        status=params.status,
    )
    return {
        "tasks": [HousekeepingTaskOut.model_validate(t) for t in tasks],
        "total": len(tasks),
        "task_date": scope.task_date,
    }


@router.get("/my-tasks", response_model=HousekeepingTaskListResponse)
def get_my_tasks_endpoint(
    params: MyTasksRequest = Depends(),
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    tasks = roster_filter.list_tasks_by_assignee(
        db, current_user.user_id,
        task_date=params.task_date,
        shift=params.shift,
        status=params.status,
    )
    return {
        "tasks": [HousekeepingTaskOut.model_validate(t) for t in tasks],
        "total": len(tasks),
    }


# -------------------- Status --------------------
@router.patch("/tasks/{task_id}/status", response_model=None)
def update_task_status_endpoint(
    task_id: UUID,
    request: TaskStatusUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    task = task_status.update_task_status(
        db, task_id, request.status, current_user, notes=request.notes)
    return success_response(
        data=HousekeepingTaskOut.model_validate(task),
        message=f"Task marked as {task.status.replace('_', ' ')}",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY,
    )


# -------------------- Assign --------------------
@router.patch("/tasks/{task_id}/assign", response_model=None)
def assign_task_endpoint(
    task_id: UUID,
    request: TaskAssignRequest,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_staff_manager)
):
    task = crud.assign_task(db, task_id, request.staff_id, current_user)
    return success_response(
        data=HousekeepingTaskOut.model_validate(task),
        message="Task assigned successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY,
    )


# -------------------- Overview --------------------
@router.get("/overview", response_model=HousekeepingTaskOverview)
def get_housekeeping_overview_endpoint(
    params: OverviewRequest = Depends(),
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_staff_manager)
):
    return crud.get_housekeeping_overview(
        db, current_user, hotel_id=params.hotel_id, task_date=params.task_date)


# -------------------- Lookups --------------------
@router.get("/shift-lookup", response_model=List[Lookup])
def shift_lookup_endpoint(current_user: UserToken = Depends(validate_current_token)):
    return crud.shift_lookup()


@router.get("/status-lookup", response_model=List[Lookup])
def status_lookup_endpoint(current_user: UserToken = Depends(validate_current_token)):
    return crud.status_lookup()


@router.get("/task-type-lookup", response_model=List[Lookup])
def task_type_lookup_endpoint(current_user: UserToken = Depends(validate_current_token)):
    return crud.task_type_lookup()
