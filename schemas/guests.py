from typing import Optional
from datetime import datetime, date
from pydantic import BaseModel, EmailStr, constr, model_validator, ConfigDict


class GuestCreate(BaseModel):
    # Required fields are checked by the coordinator so a blank form gets a readable message
    first_name: constr(strip_whitespace=True, max_length=60) = ""
    last_name: constr(strip_whitespace=True, max_length=60) = ""
    email: constr(strip_whitespace=True, max_length=100) = ""
    phone: Optional[constr(strip_whitespace=True, max_length=30)] = None
    address: Optional[constr(strip_whitespace=True, max_length=200)] = None
    id_number: Optional[constr(strip_whitespace=True, max_length=40)] = None
    nationality: Optional[constr(strip_whitespace=True, max_length=60)] = None
    date_of_birth: Optional[date] = None


class GuestUpdate(BaseModel):
    first_name: Optional[constr(strip_whitespace=True, max_length=60)] = None
    last_name: Optional[constr(strip_whitespace=True, max_length=60)] = None
    email: Optional[EmailStr] = None
    phone: Optional[constr(strip_whitespace=True, max_length=30)] = None
    address: Optional[constr(strip_whitespace=True, max_length=200)] = None
    id_number: Optional[constr(strip_whitespace=True, max_length=40)] = None
    nationality: Optional[constr(strip_whitespace=True, max_length=60)] = None
    date_of_birth: Optional[date] = None

    @model_validator(mode="before")
    def require_some_field(cls, data):
        if isinstance(data, dict) and data:
            return data
        raise ValueError("At least one field is required for an update")


class GuestSummary(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class GuestRead(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    id_number: Optional[str] = None
    nationality: Optional[str] = None
    date_of_birth: Optional[date] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
