from datetime import time

from sqlalchemy import Column, Integer, Date, Time, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from database.conexion import Base
from utils.timezone import get_utc_now


class Schedule(Base):
    """Work shift of one staff member"""
    __tablename__ = "staff_schedules"
    __table_args__ = (
        Index("idx_schedule_staff_date", "staff_id", "shift_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    staff_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)

    shift_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False, default=time(9, 0))
    end_time = Column(Time, nullable=False, default=time(17, 0))
    break_duration = Column(Integer, nullable=False, default=60)  # minutes

    created_by = Column(Integer, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=get_utc_now)

    staff = relationship("Profile", foreign_keys=[staff_id])
