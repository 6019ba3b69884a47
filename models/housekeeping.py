import enum

from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Text, Index
from sqlalchemy.orm import relationship
from database.conexion import Base
from utils.timezone import get_utc_now


class TaskPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class HousekeepingTask(Base):
    __tablename__ = "housekeeping_tasks"
    __table_args__ = (
        Index("idx_hk_task_room", "room_id"),
        Index("idx_hk_task_status", "status"),
        Index("idx_hk_task_assigned", "assigned_to"),
    )

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id", ondelete="RESTRICT"), nullable=False)
    assigned_to = Column(Integer, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)

    task_type = Column(String(50), nullable=False, default="cleaning")
    description = Column(Text, nullable=True)
    priority = Column(String(20), nullable=False, default=TaskPriority.MEDIUM.value)
    status = Column(String(20), nullable=False, default=TaskStatus.PENDING.value)
    due_date = Column(Date, nullable=True)
    completed_at = Column(DateTime, nullable=True)

    created_by = Column(Integer, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=get_utc_now)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now)

    room = relationship("Room")
    assigned_to_profile = relationship("Profile", foreign_keys=[assigned_to])
