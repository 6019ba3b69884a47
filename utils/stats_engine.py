"""
Derived statistics for the dashboard, the management pages and the admin panel.

Every function is pure and recomputed on each call. Records can be
pydantic schemas, ORM rows or plain dicts. Money is handled as Decimal.
"""
import math
from collections import OrderedDict
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from models import BookingStatus, RoomStatus, StaffRole, TaskStatus
from utils.search_engine import resolve_field
from utils.timezone import get_hotel_now, to_hotel_time

ZERO = Decimal("0.00")
TWO_PLACES = Decimal("0.01")

ACTIVE_BOOKING_STATUSES = (BookingStatus.CONFIRMED.value, BookingStatus.CHECKED_IN.value)
OPEN_TASK_STATUSES = (TaskStatus.PENDING.value, TaskStatus.IN_PROGRESS.value)
# Payments with these statuses do not count as revenue
NON_REVENUE_PAYMENT_STATUSES = ("pending", "refunded")


# ========== HELPERS ==========

def _safe_decimal(value, fallback: Decimal = ZERO) -> Decimal:
    if value is None:
        return fallback
    try:
        if isinstance(value, Decimal):
            return value
        return Decimal(str(value))
    except (ValueError, TypeError, ArithmeticError):
        return fallback


def _value(value) -> Any:
    return getattr(value, "value", value)


def parse_to_date(value) -> date:
    """Converts string/datetime/date to date"""
    if value is None:
        raise ValueError("Date value is None")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    raise ValueError(f"Cannot convert {type(value)} to date")


def parse_to_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    raise ValueError(f"Cannot convert {type(value)} to datetime")


# ========== TALLIES ==========

def tally(collection: Iterable[Any], field: str, members: Iterable[Any]) -> Dict[str, int]:
    """Count of records per enum member, every member present and zero-initialised."""
    counts = OrderedDict((str(_value(member)), 0) for member in members)
    for record in collection:
        key = _value(resolve_field(record, field))
        if key is None:
            continue
        key = str(key)
        if key in counts:
            counts[key] += 1
    return dict(counts)


def _with_total(counts: Dict[str, int], collection: List[Any]) -> Dict[str, int]:
    result = {"total": len(collection)}
    result.update(counts)
    return result


def booking_status_counts(bookings) -> Dict[str, int]:
    bookings = list(bookings)
    return _with_total(tally(bookings, "status", BookingStatus), bookings)


def room_status_counts(rooms) -> Dict[str, int]:
    rooms = list(rooms)
    return _with_total(tally(rooms, "status", RoomStatus), rooms)


def task_status_counts(tasks) -> Dict[str, int]:
    tasks = list(tasks)
    return _with_total(tally(tasks, "status", TaskStatus), tasks)


def staff_role_counts(staff) -> Dict[str, int]:
    staff = list(staff)
    return _with_total(tally(staff, "role", StaffRole), staff)


def staff_activity_counts(staff) -> Dict[str, int]:
    staff = list(staff)
    active = sum(1 for member in staff if resolve_field(member, "is_active"))
    return {"total": len(staff), "active": active, "inactive": len(staff) - active}


# ========== ROOMS & STAYS ==========

def occupancy_rate(rooms) -> float:
    """Percentage of rooms currently occupied; 0 for an empty hotel."""
    rooms = list(rooms)
    if not rooms:
        return 0.0
    occupied = sum(1 for room in rooms if _value(resolve_field(room, "status")) == RoomStatus.OCCUPIED.value)
    return occupied / len(rooms) * 100


def stay_nights(check_in, check_out) -> int:
    """Nights between two dates, fractional days rounded up."""
    start = parse_to_datetime(check_in)
    end = parse_to_datetime(check_out)
    if start.tzinfo is not None or end.tzinfo is not None:
        start, end = to_hotel_time(start), to_hotel_time(end)
    return math.ceil((end - start).total_seconds() / 86400)


def average_stay(bookings) -> float:
    stays = [
        stay_nights(resolve_field(b, "check_in_date"), resolve_field(b, "check_out_date"))
        for b in bookings
        if _value(resolve_field(b, "status")) == BookingStatus.CHECKED_OUT.value
    ]
    if not stays:
        return 0.0
    return sum(stays) / len(stays)


def quote_total(room, check_in, check_out) -> Decimal:
    """nights x room.base_price, or 0 when any input is missing."""
    if room is None or not check_in or not check_out:
        return ZERO
    base_price = resolve_field(room, "base_price")
    if base_price is None:
        return ZERO
    nights = stay_nights(check_in, check_out)
    return (_safe_decimal(base_price) * nights).quantize(TWO_PLACES)


# ========== REVENUE ==========

def _is_revenue(payment) -> bool:
    return _value(resolve_field(payment, "status")) not in NON_REVENUE_PAYMENT_STATUSES


def total_revenue(payments) -> Decimal:
    total = ZERO
    for payment in payments:
        if _is_revenue(payment):
            total += _safe_decimal(resolve_field(payment, "amount"))
    return total


def _payment_moment(payment) -> Optional[datetime]:
    raw = resolve_field(payment, "payment_date")
    if raw is None:
        return None
    return to_hotel_time(parse_to_datetime(raw))


def monthly_revenue(payments, now: Optional[datetime] = None) -> Decimal:
    """Revenue of the current calendar month (year and month) in the hotel's timezone."""
    now = to_hotel_time(now) if now is not None else get_hotel_now()
    total = ZERO
    for payment in payments:
        moment = _payment_moment(payment)
        if moment is None or not _is_revenue(payment):
            continue
        if (moment.year, moment.month) == (now.year, now.month):
            total += _safe_decimal(resolve_field(payment, "amount"))
    return total


def revenue_by_month(payments) -> List[Dict[str, Any]]:
    """Chronological [{month: "Jan 2024", revenue, payments}] for the revenue chart."""
    buckets: Dict[tuple, Dict[str, Any]] = {}
    for payment in payments:
        moment = _payment_moment(payment)
        if moment is None or not _is_revenue(payment):
            continue
        key = (moment.year, moment.month)
        bucket = buckets.setdefault(key, {
            "month": moment.strftime("%b %Y"),
            "revenue": ZERO,
            "payments": 0,
        })
        bucket["revenue"] += _safe_decimal(resolve_field(payment, "amount"))
        bucket["payments"] += 1
    return [buckets[key] for key in sorted(buckets)]


def booking_balance(booking) -> Dict[str, Any]:
    """total_amount minus the revenue payments only; pending and refunded ones are left out of the balance."""
    total_amount = _safe_decimal(resolve_field(booking, "total_amount"))
    payments = resolve_field(booking, "payments") or []
    total_paid = total_revenue(payments)
    balance = total_amount - total_paid
    return {
        "total_amount": total_amount,
        "total_paid": total_paid,
        "balance": balance,
        "paid_in_full": balance <= 0,
    }


# ========== AGGREGATES ==========

def todays_schedules(schedules, today: date) -> List[Any]:
    return [s for s in schedules if parse_to_date(resolve_field(s, "shift_date")) == today]


def open_tasks(tasks) -> List[Any]:
    return [t for t in tasks if _value(resolve_field(t, "status")) in OPEN_TASK_STATUSES]


def dashboard_counts(total_rooms: int, total_guests: int, active_bookings: int,
                     payments=(), now: Optional[datetime] = None) -> Dict[str, Any]:
    return {
        "total_rooms": total_rooms,
        "total_guests": total_guests,
        "active_bookings": active_bookings,
        "monthly_revenue": monthly_revenue(payments, now),
    }


def admin_analytics(payments, bookings, rooms, guests, staff, tasks,
                    now: Optional[datetime] = None) -> Dict[str, Any]:
    payments = list(payments)
    bookings = list(bookings)
    return {
        "total_revenue": total_revenue(payments),
        "monthly_revenue": monthly_revenue(payments, now),
        "total_bookings": len(bookings),
        "occupancy_rate": round(occupancy_rate(rooms), 2),
        "average_stay": round(average_stay(bookings), 2),
        "total_guests": len(list(guests)),
        "active_staff": staff_activity_counts(staff)["active"],
        "maintenance_issues": sum(
            1 for t in tasks if _value(resolve_field(t, "status")) == TaskStatus.PENDING.value
        ),
    }
