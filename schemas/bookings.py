from typing import Optional, List
from datetime import datetime, date
from decimal import Decimal
from pydantic import BaseModel, Field, model_validator, ConfigDict
from schemas.guests import GuestSummary
from schemas.rooms import RoomSummary

PAYMENT_METHOD_PATTERN = "^(cash|credit_card|debit_card|bank_transfer|check)$"


class BookingCreate(BaseModel):
    guest_id: Optional[int] = None
    room_id: Optional[int] = None
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    adults: int = Field(default=1, ge=1)
    children: int = Field(default=0, ge=0)
    special_requests: Optional[str] = None


class BookingUpdate(BaseModel):
    guest_id: Optional[int] = None
    room_id: Optional[int] = None
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    adults: Optional[int] = Field(None, ge=1)
    children: Optional[int] = Field(None, ge=0)
    special_requests: Optional[str] = None

    @model_validator(mode="before")
    def require_some_field(cls, data):
        if isinstance(data, dict) and data:
            return data
        raise ValueError("At least one field is required for an update")


class BookingStatusUpdate(BaseModel):
    status: str


class PaymentCreate(BaseModel):
    amount: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)
    payment_method: str = Field(default="cash", pattern=PAYMENT_METHOD_PATTERN)


class PaymentRead(BaseModel):
    id: int
    booking_id: int
    amount: Decimal
    payment_method: str
    status: str
    payment_date: datetime
    created_by: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class BookingRead(BaseModel):
    id: int
    guest_id: int
    room_id: int
    check_in_date: date
    check_out_date: date
    adults: int
    children: int
    total_amount: Decimal
    status: str
    special_requests: Optional[str] = None
    created_by: Optional[int] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Expanded relations
    guest: Optional[GuestSummary] = None
    room: Optional[RoomSummary] = None
    payments: List[PaymentRead] = []

    model_config = ConfigDict(from_attributes=True)
