"""
Tests for the mutation coordinator, with the store mocked out
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import Mock

from database.store import StoreError
from services.mutation_coordinator import MutationCoordinator
from services.view_state import ViewState


def _guest(record_id, first_name="Guest"):
    return Mock(id=record_id, first_name=first_name)


class TestCreateReconciliation:
    def setup_method(self):
        self.store = Mock()
        self.view = ViewState({"guests": [_guest(1), _guest(2)], "rooms": [Mock(id=1)]})
        self.user = Mock(id=99, email="frontdesk@hotel.com")
        self.coordinator = MutationCoordinator(self.store, self.view, self.user)

    def test_rejected_create_leaves_collection_unchanged(self):
        self.store.insert.side_effect = StoreError("duplicate key value", status_code=409)

        result = self.coordinator.create_guest({"first_name": "Ada", "last_name": "Lovelace", "email": "ada@hotel.com"})

        assert result.ok is False
        assert len(self.view.collection("guests")) == 2
        assert result.notification.level == "error"
        assert result.notification.message == "Failed to add guest. Please try again."
        assert result.status_code == 409
        assert not self.view.loading

    def test_accepted_create_adds_canonical_record_at_head(self):
        self.store.insert.return_value = _guest(42, "Ada")

        result = self.coordinator.create_guest({"first_name": "Ada", "last_name": "Lovelace", "email": "ada@hotel.com"})

        guests = self.view.collection("guests")
        assert result.ok is True
        assert len(guests) == 3
        assert guests[0].id == 42
        assert result.record.id == 42
        assert result.notification.message == "Guest added successfully"

    def test_rooms_are_appended_at_the_tail(self):
        self.store.insert.return_value = Mock(id=5)

        self.coordinator.create_room({"room_number": "305", "room_type": "suite"})

        assert [r.id for r in self.view.collection("rooms")] == [1, 5]

    def test_missing_required_fields_never_reach_the_store(self):
        result = self.coordinator.create_guest({"first_name": "Ada", "last_name": "", "email": "ada@hotel.com"})

        assert result.ok is False
        assert result.status_code == 400
        assert "Please fill in all required fields" in result.notification.message
        self.store.insert.assert_not_called()

    def test_invalid_email_rejected(self):
        result = self.coordinator.create_guest({"first_name": "Ada", "last_name": "L", "email": "not-an-email"})
        assert result.ok is False
        self.store.insert.assert_not_called()

    def test_update_replaces_by_id(self):
        self.store.update.return_value = _guest(2, "Renamed")

        result = self.coordinator.update_guest(2, {"first_name": "Renamed"})

        guests = self.view.collection("guests")
        assert result.ok is True
        assert len(guests) == 2
        assert guests[1].first_name == "Renamed"

    def test_closed_view_ignores_late_response(self):
        self.store.insert.return_value = _guest(42)
        self.view.close()

        result = self.coordinator.create_guest({"first_name": "Ada", "last_name": "Lovelace", "email": "ada@hotel.com"})

        assert result.ok is True
        assert len(self.view.collection("guests")) == 2

    def test_invalid_room_status(self):
        result = self.coordinator.change_room_status(1, "flooded")
        assert result.ok is False
        assert result.notification.message == "Invalid room status"
        self.store.update.assert_not_called()


class TestBookings:
    def setup_method(self):
        self.store = Mock()
        self.store.get.return_value = Mock(id=3, base_price=Decimal("100.00"))
        self.view = ViewState({"bookings": []})
        self.coordinator = MutationCoordinator(self.store, self.view, Mock(id=7, email="a@hotel.com"))

    def test_total_is_nights_times_base_price(self):
        self.store.insert.return_value = Mock(id=1)

        result = self.coordinator.create_booking({
            "guest_id": 1, "room_id": 3,
            "check_in_date": date(2024, 1, 1), "check_out_date": date(2024, 1, 4),
        })

        assert result.ok is True
        kind, values = self.store.insert.call_args[0]
        assert kind == "bookings"
        assert values["total_amount"] == Decimal("300.00")
        assert values["status"] == "pending"
        assert values["created_by"] == 7

    def test_checkout_before_checkin_rejected(self):
        result = self.coordinator.create_booking({
            "guest_id": 1, "room_id": 3,
            "check_in_date": date(2024, 1, 4), "check_out_date": date(2024, 1, 4),
        })

        assert result.ok is False
        assert result.notification.message == "Invalid booking dates"
        self.store.insert.assert_not_called()

    def test_missing_room_is_not_found(self):
        self.store.get.return_value = None

        result = self.coordinator.create_booking({
            "guest_id": 1, "room_id": 404,
            "check_in_date": date(2024, 1, 1), "check_out_date": date(2024, 1, 4),
        })

        assert result.ok is False
        assert result.status_code == 404
        assert result.notification.message == "Room not found"
        self.store.insert.assert_not_called()

    def test_status_change_validated(self):
        assert self.coordinator.change_booking_status(1, "teleported").ok is False
        self.store.update.assert_not_called()


class TestPayments:
    def setup_method(self):
        self.booking = Mock(id=8, total_amount=Decimal("200.00"), payments=[{"amount": Decimal("50.00"), "status": "paid"}])
        self.refreshed = Mock(id=8, total_amount=Decimal("200.00"))
        self.store = Mock()
        self.store.get.side_effect = [self.booking, self.refreshed]
        self.view = ViewState({"bookings": [Mock(id=8), Mock(id=9)]})

    def _coordinator(self, allow_overpayment=False):
        return MutationCoordinator(self.store, self.view, Mock(id=1, email="a@hotel.com"),
                                   allow_overpayment=allow_overpayment)

    @pytest.mark.parametrize("amount", [None, ""])
    def test_amount_required(self, amount):
        result = self._coordinator().record_payment(8, amount)
        assert result.notification.message == "Please enter payment amount"

    @pytest.mark.parametrize("amount", [0, "-10"])
    def test_amount_must_be_positive(self, amount):
        result = self._coordinator().record_payment(8, amount)
        assert result.ok is False
        self.store.insert.assert_not_called()

    def test_overpayment_rejected_by_default(self):
        result = self._coordinator().record_payment(8, "150.01")
        assert result.ok is False
        assert result.notification.message == "Payment exceeds the outstanding balance"
        self.store.insert.assert_not_called()

    def test_overpayment_allowed_when_configured(self):
        result = self._coordinator(allow_overpayment=True).record_payment(8, "500")
        assert result.ok is True

    def test_payment_rereads_and_replaces_booking(self):
        result = self._coordinator().record_payment(8, "150.00", "credit_card")

        assert result.ok is True
        values = self.store.insert.call_args[0][1]
        assert values["status"] == "paid"
        assert values["amount"] == Decimal("150.00")
        assert self.view.collection("bookings")[0] is self.refreshed
        assert len(self.view.collection("bookings")) == 2

    def test_failed_reread_still_reports_stored_payment(self):
        stored = {"id": 31, "amount": Decimal("150.00"), "status": "paid"}
        self.store.insert.return_value = stored
        self.store.get.side_effect = [self.booking, StoreError("connection reset")]

        result = self._coordinator().record_payment(8, "150.00")

        assert result.ok is True
        assert result.notification.message == "Payment recorded successfully"
        self.store.insert.assert_called_once()
        assert result.record is self.booking
        assert self.booking.payments[-1] == stored
        assert self.view.collection("bookings")[0] is self.booking


class TestStaffAndTasks:
    def setup_method(self):
        self.store = Mock()
        self.view = ViewState()
        self.coordinator = MutationCoordinator(self.store, self.view, Mock(id=1, email="a@hotel.com"))

    def test_toggle_staff_flips_current_status(self):
        self.store.get.return_value = Mock(id=4, is_active=True)
        self.store.update.return_value = Mock(id=4, is_active=False)

        result = self.coordinator.toggle_staff_status(4)

        self.store.update.assert_called_once_with("profiles", 4, {"is_active": False})
        assert result.notification.message == "Staff member deactivated successfully"

    def test_completed_task_gets_timestamp(self):
        self.store.update.return_value = Mock(id=2)

        self.coordinator.change_task_status(2, "completed")

        changes = self.store.update.call_args[0][2]
        assert changes["status"] == "completed"
        assert changes["completed_at"] is not None
        assert changes["completed_at"].tzinfo is None

    def test_schedule_requires_staff_and_date(self):
        result = self.coordinator.create_schedule({"staff_id": None, "shift_date": date(2024, 1, 1)})
        assert result.ok is False
        self.store.insert.assert_not_called()
