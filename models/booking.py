"""
Bookings and the payments recorded against them
"""
import enum

from sqlalchemy import (
    Column, Integer, String, Date, DateTime, ForeignKey, Numeric, Text, Index, CheckConstraint
)
from sqlalchemy.orm import relationship
from database.conexion import Base
from utils.timezone import get_utc_now


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    CANCELLED = "cancelled"


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    BANK_TRANSFER = "bank_transfer"
    CHECK = "check"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("idx_booking_dates", "check_in_date", "check_out_date"),
        Index("idx_booking_status", "status"),
        CheckConstraint("check_out_date > check_in_date", name="ck_booking_dates"),
    )

    id = Column(Integer, primary_key=True, index=True)
    guest_id = Column(Integer, ForeignKey("guests.id", ondelete="RESTRICT"), nullable=False)
    room_id = Column(Integer, ForeignKey("rooms.id", ondelete="RESTRICT"), nullable=False)

    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)
    adults = Column(Integer, nullable=False, default=1)
    children = Column(Integer, nullable=False, default=0)

    # nights x room.base_price, fixed when the booking is written
    total_amount = Column(Numeric(12, 2), nullable=False)

    # pending | confirmed | checked_in | checked_out | cancelled
    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value)
    special_requests = Column(Text, nullable=True)

    created_by = Column(Integer, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=get_utc_now)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now)

    guest = relationship("Guest", back_populates="bookings")
    room = relationship("Room")
    payments = relationship(
        "Payment",
        back_populates="booking",
        order_by=lambda: [Payment.payment_date, Payment.id],
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Booking(id={self.id}, room_id={self.room_id}, status='{self.status}')>"


class Payment(Base):
    __tablename__ = "payments"
    __table_args__ = (
        Index("idx_payment_booking", "booking_id"),
        Index("idx_payment_date", "payment_date"),
        CheckConstraint("amount > 0", name="ck_payment_amount_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False)

    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String(20), nullable=False, default=PaymentMethod.CASH.value)
    status = Column(String(20), nullable=False, default=PaymentStatus.PAID.value)
    payment_date = Column(DateTime, default=get_utc_now, nullable=False)

    created_by = Column(Integer, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)

    booking = relationship("Booking", back_populates="payments")
