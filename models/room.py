import enum

from sqlalchemy import (
    Column, Integer, String, DateTime, Numeric, Text, JSON, Index, CheckConstraint
)
from database.conexion import Base
from utils.timezone import get_utc_now


class RoomType(str, enum.Enum):
    SINGLE = "single"
    DOUBLE = "double"
    SUITE = "suite"
    DELUXE = "deluxe"
    PRESIDENTIAL = "presidential"


class RoomStatus(str, enum.Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"
    CLEANING = "cleaning"
    OUT_OF_ORDER = "out_of_order"


def _in_enum(column: str, members) -> str:
    values = ", ".join(f"'{m.value}'" for m in members)
    return f"{column} IN ({values})"


class Room(Base):
    __tablename__ = "rooms"
    __table_args__ = (
        Index("idx_room_status", "status"),
        Index("idx_room_type", "room_type"),
        CheckConstraint(_in_enum("status", RoomStatus), name="ck_room_status"),
        CheckConstraint(_in_enum("room_type", RoomType), name="ck_room_type"),
    )

    id = Column(Integer, primary_key=True, index=True)
    room_number = Column(String(10), unique=True, nullable=False)
    room_type = Column(String(20), nullable=False, default=RoomType.SINGLE.value)
    floor_number = Column(Integer, nullable=False, default=1)
    capacity = Column(Integer, nullable=False, default=2)
    base_price = Column(Numeric(12, 2), nullable=False)  # nightly rate

    # Operational status, any transition allowed
    status = Column(String(20), nullable=False, default=RoomStatus.AVAILABLE.value)

    amenities = Column(JSON, nullable=False, default=list)  # ["wifi", "tv", ...]
    description = Column(Text, nullable=True)

    created_at = Column(DateTime, default=get_utc_now)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now)

    def __repr__(self):
        return f"<Room(id={self.id}, number='{self.room_number}', status='{self.status}')>"
