from datetime import date, datetime
from uuid import UUID
from typing import List, Optional
from pydantic import BaseModel, Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ...enum.housekeeping_enum import (
    HousekeepingShift,
    HousekeepingTaskStatus,
    HousekeepingTaskType,
)


# ----------------- Room summary -----------------
class RoomSummary(BaseModel):
    id: UUID
    room_number: str
    room_type: Optional[str] = None

    model_config = {"from_attributes": True}


# ----------------- Out -----------------
class HousekeepingTaskOut(BaseModel):
    id: UUID
    hotel_id: UUID
    room_id: UUID
    task_date: date
    shift: HousekeepingShift
    task_type: HousekeepingTaskType
    status: HousekeepingTaskStatus
    assigned_to: Optional[str] = None
    notes: Optional[str] = None
    room: Optional[RoomSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# ----------------- Generate -----------------
class GenerateTasksRequest(BaseModel):
    hotel_id: UUID = Field(alias="hotelId")
    # raw string so an unparseable date surfaces as a ValidationError
    task_date: str = Field(alias="date")

    model_config = {"populate_by_name": True}


class GenerateTasksResult(BaseModel):
    created: int
    skipped: int
    failed: int = 0


# ----------------- Status / Assign -----------------
class TaskStatusUpdate(EmptyStringModel):
    status: str
    notes: Optional[str] = None


class TaskAssignRequest(EmptyStringModel):
    staff_id: Optional[str] = Field(None, alias="staffId")


# ----------------- Roster Request -----------------
class RosterRequest(EmptyStringModel):
    hotel_id: Optional[str] = Field(None, alias="hotelId")
    task_date: Optional[str] = Field(None, alias="date")
    shift: Optional[str] = None
    status: Optional[str] = None


class MyTasksRequest(EmptyStringModel):
    task_date: Optional[str] = Field(None, alias="date")
    shift: Optional[str] = None
    status: Optional[str] = None


# ----------------- List Response -----------------
class HousekeepingTaskListResponse(BaseModel):
    tasks: List[HousekeepingTaskOut]
    total: int
    task_date: Optional[date] = None

    model_config = {"from_attributes": True}


# ----------------- Overview -----------------
class OverviewRequest(EmptyStringModel):
    hotel_id: Optional[str] = Field(None, alias="hotelId")
    task_date: Optional[str] = Field(None, alias="date")


class HousekeepingTaskOverview(BaseModel):
    totalTasks: int
    pending: int
    inProgress: int
    completed: int
    skipped: int
    avgCompletionMinutes: float

    model_config = {"from_attributes": True}
