from typing import Optional
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field, constr, model_validator, ConfigDict


class ServiceCreate(BaseModel):
    name: constr(strip_whitespace=True, max_length=100) = ""
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    category: constr(strip_whitespace=True, max_length=50) = "general"
    is_active: bool = True


class ServiceUpdate(BaseModel):
    name: Optional[constr(strip_whitespace=True, max_length=100)] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    category: Optional[constr(strip_whitespace=True, max_length=50)] = None

    @model_validator(mode="before")
    def require_some_field(cls, data):
        if isinstance(data, dict) and data:
            return data
        raise ValueError("At least one field is required for an update")


class ServiceRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    category: str
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
