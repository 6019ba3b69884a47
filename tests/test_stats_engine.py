"""
Tests for the derived statistics engine
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import date, datetime, timezone
from decimal import Decimal

from utils.stats_engine import (
    admin_analytics,
    average_stay,
    booking_balance,
    booking_status_counts,
    monthly_revenue,
    occupancy_rate,
    open_tasks,
    quote_total,
    revenue_by_month,
    room_status_counts,
    staff_activity_counts,
    stay_nights,
    tally,
    todays_schedules,
    total_revenue,
)
from utils.timezone import get_utc_now
from models import BookingStatus


class TestTallies:
    def test_booking_status_tally(self):
        bookings = [{"status": "pending"}, {"status": "pending"}, {"status": "confirmed"}]
        assert tally(bookings, "status", BookingStatus) == {
            "pending": 2, "confirmed": 1, "checked_in": 0, "checked_out": 0, "cancelled": 0,
        }

    def test_counts_include_total(self):
        counts = booking_status_counts([{"status": "cancelled"}])
        assert counts["total"] == 1
        assert counts["cancelled"] == 1

    def test_room_counts_zero_initialised(self):
        counts = room_status_counts([])
        assert counts["total"] == 0
        assert counts["out_of_order"] == 0

    def test_staff_activity(self):
        staff = [{"is_active": True}, {"is_active": False}, {"is_active": True}]
        assert staff_activity_counts(staff) == {"total": 3, "active": 2, "inactive": 1}


class TestOccupancyAndStays:
    def test_occupancy_no_rooms(self):
        assert occupancy_rate([]) == 0

    def test_occupancy_two_of_five(self):
        rooms = [{"status": "occupied"}] * 2 + [{"status": "available"}] * 3
        assert occupancy_rate(rooms) == 40.0

    def test_average_stay_without_checked_out(self):
        assert average_stay([{"status": "confirmed", "check_in_date": "2024-01-01", "check_out_date": "2024-01-03"}]) == 0

    def test_average_stay(self):
        bookings = [
            {"status": "checked_out", "check_in_date": date(2024, 1, 1), "check_out_date": date(2024, 1, 3)},
            {"status": "checked_out", "check_in_date": "2024-01-05", "check_out_date": "2024-01-10"},
            {"status": "cancelled", "check_in_date": "2024-02-01", "check_out_date": "2024-02-20"},
        ]
        assert average_stay(bookings) == 3.5

    def test_stay_nights_rounds_up(self):
        assert stay_nights(datetime(2024, 1, 1, 14), datetime(2024, 1, 2, 11)) == 1
        assert stay_nights("2024-01-01", "2024-01-04") == 3

    def test_quote_total(self):
        room = {"base_price": Decimal("99.99")}
        assert quote_total(room, "2024-03-01", "2024-03-03") == Decimal("199.98")

    def test_quote_total_missing_input(self):
        assert quote_total(None, "2024-03-01", "2024-03-03") == 0
        assert quote_total({"base_price": 80}, "", "2024-03-03") == 0

    def test_quote_total_reversed_dates_not_positive(self):
        assert quote_total({"base_price": 80}, "2024-03-03", "2024-03-01") <= 0


class TestRevenue:
    def test_balance_partially_paid(self):
        booking = {"total_amount": 200, "payments": [{"amount": 50}, {"amount": 50}]}
        balance = booking_balance(booking)
        assert balance["balance"] == Decimal("100")
        assert balance["paid_in_full"] is False

    def test_balance_paid_in_full(self):
        booking = {"total_amount": 200, "payments": [{"amount": 200}]}
        balance = booking_balance(booking)
        assert balance["balance"] == 0
        assert balance["paid_in_full"] is True

    def test_refunded_payments_do_not_count(self):
        payments = [{"amount": 100, "status": "paid"}, {"amount": 40, "status": "refunded"}]
        assert total_revenue(payments) == Decimal("100")
        balance = booking_balance({"total_amount": 150, "payments": payments})
        assert balance["total_paid"] == Decimal("100")
        assert balance["balance"] == Decimal("50")

    def test_monthly_revenue_same_month_other_year_ignored(self):
        now = datetime(2024, 5, 20, 12, 0)
        payments = [
            {"amount": "10.00", "payment_date": datetime(2024, 5, 2, 9, 0)},
            {"amount": "25.50", "payment_date": "2024-05-19T23:00:00"},
            {"amount": "99.00", "payment_date": datetime(2023, 5, 10, 9, 0)},
            {"amount": "7.00", "payment_date": datetime(2024, 4, 30, 9, 0)},
        ]
        assert monthly_revenue(payments, now=now) == Decimal("35.50")

    def test_revenue_by_month_is_chronological(self):
        payments = [
            {"amount": 30, "payment_date": datetime(2024, 2, 3)},
            {"amount": 10, "payment_date": datetime(2024, 1, 15)},
            {"amount": 5, "payment_date": datetime(2024, 2, 28)},
        ]
        data = revenue_by_month(payments)
        assert [row["month"] for row in data] == ["Jan 2024", "Feb 2024"]
        assert data[1]["revenue"] == Decimal("35")
        assert data[1]["payments"] == 2


class TestAggregates:
    def test_todays_schedules(self):
        today = date(2024, 6, 1)
        schedules = [{"shift_date": date(2024, 6, 1)}, {"shift_date": "2024-06-02"}]
        assert todays_schedules(schedules, today) == [schedules[0]]

    def test_open_tasks(self):
        tasks = [{"status": "pending"}, {"status": "in_progress"}, {"status": "completed"}]
        assert len(open_tasks(tasks)) == 2

    def test_admin_analytics(self):
        analytics = admin_analytics(
            payments=[{"amount": 120, "payment_date": datetime(2024, 5, 1)}],
            bookings=[
                {"status": "checked_out", "check_in_date": "2024-01-01", "check_out_date": "2024-01-03"},
                {"status": "pending", "check_in_date": "2024-02-01", "check_out_date": "2024-02-02"},
            ],
            rooms=[{"status": "occupied"}, {"status": "available"}],
            guests=[{"id": 1}, {"id": 2}, {"id": 3}],
            staff=[{"is_active": True}, {"is_active": False}],
            tasks=[{"status": "pending"}, {"status": "in_progress"}],
            now=datetime(2024, 5, 15),
        )
        assert analytics["total_revenue"] == Decimal("120")
        assert analytics["monthly_revenue"] == Decimal("120")
        assert analytics["total_bookings"] == 2
        assert analytics["occupancy_rate"] == 50.0
        assert analytics["average_stay"] == 2.0
        assert analytics["total_guests"] == 3
        assert analytics["active_staff"] == 1
        assert analytics["maintenance_issues"] == 1


class TestUtcNow:
    def test_naive_and_current(self):
        now = get_utc_now()
        assert now.tzinfo is None
        assert abs((datetime.now(timezone.utc).replace(tzinfo=None) - now).total_seconds()) < 5
