from typing import Optional
from datetime import datetime, date, time
from pydantic import BaseModel, Field, constr, model_validator, ConfigDict

ROLE_PATTERN = "^(admin|manager|receptionist|housekeeping|maintenance|security)$"


class StaffCreate(BaseModel):
    first_name: constr(strip_whitespace=True, max_length=60) = ""
    last_name: constr(strip_whitespace=True, max_length=60) = ""
    phone: Optional[constr(strip_whitespace=True, max_length=30)] = None
    role: str = Field(default="receptionist", pattern=ROLE_PATTERN)


class StaffUpdate(BaseModel):
    first_name: Optional[constr(strip_whitespace=True, max_length=60)] = None
    last_name: Optional[constr(strip_whitespace=True, max_length=60)] = None
    phone: Optional[constr(strip_whitespace=True, max_length=30)] = None
    role: Optional[str] = Field(None, pattern=ROLE_PATTERN)

    @model_validator(mode="before")
    def require_some_field(cls, data):
        if isinstance(data, dict) and data:
            return data
        raise ValueError("At least one field is required for an update")


class StaffSummary(BaseModel):
    id: int
    first_name: str
    last_name: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class StaffRead(BaseModel):
    id: int
    email: Optional[str] = None
    first_name: str
    last_name: str
    phone: Optional[str] = None
    role: str
    is_active: bool

    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ========== SCHEDULES ==========

class ScheduleCreate(BaseModel):
    staff_id: Optional[int] = None
    shift_date: Optional[date] = None
    start_time: time = time(9, 0)
    end_time: time = time(17, 0)
    break_duration: int = Field(default=60, ge=0, le=480)


class ScheduleRead(BaseModel):
    id: int
    staff_id: int
    shift_date: date
    start_time: time
    end_time: time
    break_duration: int
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    staff: Optional[StaffSummary] = None

    model_config = ConfigDict(from_attributes=True)
