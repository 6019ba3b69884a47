from sqlalchemy import Column, Integer, String, Boolean, DateTime, Numeric, Text
from database.conexion import Base
from utils.timezone import get_utc_now


class Service(Base):
    """Extra services offered to guests (spa, laundry, airport transfer...)"""
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(12, 2), nullable=False)
    category = Column(String(50), nullable=False, default="general")
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=get_utc_now)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now)
