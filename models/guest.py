from sqlalchemy import Column, Integer, String, Date, DateTime, Text, Index
from sqlalchemy.orm import relationship
from database.conexion import Base
from utils.timezone import get_utc_now


class Guest(Base):
    __tablename__ = "guests"
    __table_args__ = (
        Index("idx_guest_email", "email"),
        Index("idx_guest_last_name", "last_name"),
    )

    id = Column(Integer, primary_key=True, index=True)

    first_name = Column(String(60), nullable=False)
    last_name = Column(String(60), nullable=False)
    email = Column(String(100), nullable=False)
    phone = Column(String(30), nullable=True)
    address = Column(Text, nullable=True)
    id_number = Column(String(40), nullable=True)  # passport / national id
    nationality = Column(String(60), nullable=True)
    date_of_birth = Column(Date, nullable=True)

    created_at = Column(DateTime, default=get_utc_now)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now)

    bookings = relationship("Booking", back_populates="guest")

    def __repr__(self):
        return f"<Guest(id={self.id}, name='{self.first_name} {self.last_name}')>"
