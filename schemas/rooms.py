from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field, constr, field_validator, model_validator, ConfigDict

ROOM_TYPE_PATTERN = "^(single|double|suite|deluxe|presidential)$"


def _distinct(amenities):
    if amenities is None:
        return amenities
    seen = []
    for item in amenities:
        item = item.strip()
        if item and item not in seen:
            seen.append(item)
    return seen


class RoomCreate(BaseModel):
    room_number: constr(strip_whitespace=True, max_length=10) = ""
    room_type: constr(strip_whitespace=True, max_length=20) = "single"
    floor_number: int = Field(default=1, ge=0)
    capacity: int = Field(default=2, ge=1)
    base_price: Decimal = Field(default=Decimal("99.99"), ge=0, max_digits=12, decimal_places=2)
    amenities: List[str] = Field(default_factory=list)
    description: Optional[str] = None

    @field_validator("amenities")
    @classmethod
    def distinct_amenities(cls, v):
        return _distinct(v)


class RoomUpdate(BaseModel):
    room_number: Optional[constr(strip_whitespace=True, max_length=10)] = None
    room_type: Optional[str] = Field(None, pattern=ROOM_TYPE_PATTERN)
    floor_number: Optional[int] = Field(None, ge=0)
    capacity: Optional[int] = Field(None, ge=1)
    base_price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    amenities: Optional[List[str]] = None
    description: Optional[str] = None

    @field_validator("amenities")
    @classmethod
    def distinct_amenities(cls, v):
        return _distinct(v)

    @model_validator(mode="before")
    def require_some_field(cls, data):
        if isinstance(data, dict) and data:
            return data
        raise ValueError("At least one field is required for an update")


class RoomStatusUpdate(BaseModel):
    status: str


class RoomSummary(BaseModel):
    id: int
    room_number: str
    room_type: str
    base_price: Decimal
    status: str

    model_config = ConfigDict(from_attributes=True)


class RoomRead(BaseModel):
    id: int
    room_number: str
    room_type: str
    floor_number: int
    capacity: int
    base_price: Decimal
    status: str
    amenities: List[str] = []
    description: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
