"""
User profiles
Every staff member has a profile; the ones that can sign in also carry credentials
"""
import enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Index
from database.conexion import Base
from utils.timezone import get_utc_now


class StaffRole(str, enum.Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    RECEPTIONIST = "receptionist"
    HOUSEKEEPING = "housekeeping"
    MAINTENANCE = "maintenance"
    SECURITY = "security"


class Profile(Base):
    __tablename__ = "profiles"
    __table_args__ = (
        Index("idx_profile_role", "role"),
        Index("idx_profile_active", "is_active"),
    )

    id = Column(Integer, primary_key=True, index=True)

    # Credentials (NULL for staff members without a login)
    email = Column(String(100), unique=True, nullable=True, index=True)
    hashed_password = Column(String(255), nullable=True)

    first_name = Column(String(60), nullable=False)
    last_name = Column(String(60), nullable=False)
    phone = Column(String(30), nullable=True)
    role = Column(String(20), nullable=False, default=StaffRole.RECEPTIONIST.value)
    is_active = Column(Boolean, default=True, nullable=False)

    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=get_utc_now)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now)

    def __repr__(self):
        return f"<Profile(id={self.id}, name='{self.first_name} {self.last_name}', role='{self.role}')>"
