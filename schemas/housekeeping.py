"""
Pydantic schemas for housekeeping tasks
"""
from typing import Optional
from datetime import datetime, date
from pydantic import BaseModel, Field, constr, model_validator, ConfigDict
from schemas.rooms import RoomSummary
from schemas.staff import StaffSummary

PRIORITY_PATTERN = "^(low|medium|high|urgent)$"


class TaskCreate(BaseModel):
    room_id: Optional[int] = None
    assigned_to: Optional[int] = None
    task_type: constr(strip_whitespace=True, max_length=50) = "cleaning"
    description: Optional[str] = None
    priority: str = Field(default="medium", pattern=PRIORITY_PATTERN)
    due_date: Optional[date] = None


class TaskUpdate(BaseModel):
    room_id: Optional[int] = None
    assigned_to: Optional[int] = None
    task_type: Optional[constr(strip_whitespace=True, max_length=50)] = None
    description: Optional[str] = None
    priority: Optional[str] = Field(None, pattern=PRIORITY_PATTERN)
    due_date: Optional[date] = None

    @model_validator(mode="before")
    def require_some_field(cls, data):
        if isinstance(data, dict) and data:
            return data
        raise ValueError("At least one field is required for an update")


class TaskStatusUpdate(BaseModel):
    status: str


class TaskRead(BaseModel):
    id: int
    room_id: int
    assigned_to: Optional[int] = None
    task_type: str
    description: Optional[str] = None
    priority: str
    status: str
    due_date: Optional[date] = None
    completed_at: Optional[datetime] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    room: Optional[RoomSummary] = None
    assigned_to_profile: Optional[StaffSummary] = None

    model_config = ConfigDict(from_attributes=True)
