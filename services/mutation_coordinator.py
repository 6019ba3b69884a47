"""
Mutation coordinator

Every write issued by a view goes through here:
- precondition checks (a failure never reaches the store)
- the write itself, with the action's loading marker held while it runs
- reconciliation of the canonical record returned by the store into the view
- exactly one notification, success or failure

Store error details are logged for operators; the notification only
carries a generic message.
"""
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Iterable, Optional

from pydantic import BaseModel, EmailStr, TypeAdapter, ValidationError

import config
from database.store import QueryClient, StoreError
from models import (
    BookingStatus, PaymentMethod, PaymentStatus, RoomStatus, RoomType,
    StaffRole, TaskPriority, TaskStatus,
)
from services.view_state import ViewState
from utils.logging_utils import log_error, log_event
from utils.stats_engine import booking_balance, quote_total
from utils.timezone import get_utc_now

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields"

_email_adapter = TypeAdapter(EmailStr)


class Notification(BaseModel):
    level: str  # success | error
    title: str
    message: str


class MutationResult(BaseModel):
    ok: bool
    record: Optional[Any] = None
    notification: Notification
    status_code: int = 200


# ========== HELPERS ==========

def _members(enum_cls) -> set:
    return {member.value for member in enum_cls}


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _missing(payload: Dict[str, Any], fields: Iterable[str]) -> bool:
    return any(_blank(payload.get(field)) for field in fields)


def _blanked(payload: Dict[str, Any], fields: Iterable[str]) -> bool:
    """True when an update explicitly clears one of the required fields."""
    return any(field in payload and _blank(payload[field]) for field in fields)


def _as_dict(payload) -> Dict[str, Any]:
    if payload is None:
        return {}
    if isinstance(payload, BaseModel):
        return payload.model_dump(exclude_unset=True)
    return dict(payload)


def _optional_text(payload: Dict[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    """Empty optional text is stored as NULL."""
    for field in fields:
        if field in payload and isinstance(payload[field], str) and not payload[field].strip():
            payload[field] = None
    return payload


def _to_decimal(value) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None


def _with_payment(booking, payment):
    """Booking as read before the write, with the stored payment appended."""
    payments = [*(getattr(booking, "payments", None) or []), payment]
    if isinstance(booking, BaseModel):
        return booking.model_copy(update={"payments": payments})
    booking.payments = payments
    return booking


class MutationCoordinator:
    def __init__(
        self,
        store: QueryClient,
        view: Optional[ViewState] = None,
        user: Any = None,
        allow_overpayment: Optional[bool] = None,
    ):
        self.store = store
        self.view = view if view is not None else ViewState()
        self.user = user
        self.allow_overpayment = config.ALLOW_OVERPAYMENT if allow_overpayment is None else allow_overpayment

    # ========== PLUMBING ==========

    @property
    def user_id(self) -> Optional[int]:
        return getattr(self.user, "id", None)

    @property
    def user_label(self) -> str:
        if self.user is None:
            return "anonymous"
        return getattr(self.user, "email", None) or f"profile:{self.user_id}"

    def _reject(self, message: str, status_code: int = 400) -> MutationResult:
        return MutationResult(
            ok=False,
            notification=Notification(level="error", title="Error", message=message),
            status_code=status_code,
        )

    def _run(
        self,
        action: str,
        area: str,
        write: Callable[[], Any],
        success: str,
        failure: str,
        collection: Optional[str] = None,
        at_head: bool = True,
        replace_only: bool = False,
    ) -> MutationResult:
        self.view.start(action)
        try:
            record = write()
        except StoreError as e:
            log_error(area, self.user_label, f"{action} failed", e.message)
            return self._reject(failure, e.status_code if e.status_code in (404, 409) else 500)
        finally:
            self.view.finish(action)

        if collection is not None:
            if replace_only:
                self.view.replace(collection, record)
            else:
                self.view.upsert(collection, record, at_head=at_head)

        log_event(area, self.user_label, action, f"id={getattr(record, 'id', None)}")
        return MutationResult(
            ok=True,
            record=record,
            notification=Notification(level="success", title="Success", message=success),
        )

    # ========== GUESTS ==========

    def create_guest(self, payload) -> MutationResult:
        data = _optional_text(_as_dict(payload), ("phone", "address", "id_number", "nationality"))
        if _missing(data, ("first_name", "last_name", "email")):
            return self._reject(f"{REQUIRED_FIELDS_MESSAGE} (First Name, Last Name, Email)")
        try:
            data["email"] = str(_email_adapter.validate_python(data["email"].strip()))
        except ValidationError:
            return self._reject("Please enter a valid email address")

        return self._run(
            "create-guest", "guests",
            lambda: self.store.insert("guests", data),
            success="Guest added successfully",
            failure="Failed to add guest. Please try again.",
            collection="guests", at_head=True,
        )

    def update_guest(self, guest_id: int, payload) -> MutationResult:
        data = _optional_text(_as_dict(payload), ("phone", "address", "id_number", "nationality"))
        if not data or _blanked(data, ("first_name", "last_name", "email")):
            return self._reject(REQUIRED_FIELDS_MESSAGE)

        return self._run(
            "update-guest", "guests",
            lambda: self.store.update("guests", guest_id, data),
            success="Guest updated successfully",
            failure="Failed to update guest. Please try again.",
            collection="guests",
        )

    # ========== ROOMS ==========

    def create_room(self, payload) -> MutationResult:
        data = _optional_text(_as_dict(payload), ("description",))
        if _missing(data, ("room_number", "room_type")):
            return self._reject(REQUIRED_FIELDS_MESSAGE)
        if data["room_type"] not in _members(RoomType):
            return self._reject("Invalid room type")
        data.setdefault("status", RoomStatus.AVAILABLE.value)

        return self._run(
            "create-room", "rooms",
            lambda: self.store.insert("rooms", data),
            success="Room added successfully",
            failure="Failed to add room. Please try again.",
            collection="rooms", at_head=False,
        )

    def update_room(self, room_id: int, payload) -> MutationResult:
        data = _optional_text(_as_dict(payload), ("description",))
        data.pop("status", None)  # status has its own operation
        if not data or _blanked(data, ("room_number", "room_type")):
            return self._reject(REQUIRED_FIELDS_MESSAGE)
        if "room_type" in data and data["room_type"] not in _members(RoomType):
            return self._reject("Invalid room type")

        return self._run(
            "update-room", "rooms",
            lambda: self.store.update("rooms", room_id, data),
            success="Room updated successfully",
            failure="Failed to update room. Please try again.",
            collection="rooms",
        )

    def change_room_status(self, room_id: int, new_status: str) -> MutationResult:
        if new_status not in _members(RoomStatus):
            return self._reject("Invalid room status")

        return self._run(
            "change-room-status", "rooms",
            lambda: self.store.update("rooms", room_id, {"status": new_status}),
            success="Room status updated successfully",
            failure="Failed to update room status",
            collection="rooms",
        )

    # ========== BOOKINGS ==========

    def _booking_total(self, room_id, check_in, check_out) -> Optional[Decimal]:
        """None when the room does not exist"""
        room = self.store.get("rooms", room_id)
        if room is None:
            return None
        return quote_total(room, check_in, check_out)

    def create_booking(self, payload) -> MutationResult:
        data = _optional_text(_as_dict(payload), ("special_requests",))
        if _missing(data, ("guest_id", "room_id", "check_in_date", "check_out_date")):
            return self._reject(REQUIRED_FIELDS_MESSAGE)

        try:
            total = self._booking_total(data["room_id"], data["check_in_date"], data["check_out_date"])
        except StoreError as e:
            log_error("bookings", self.user_label, "create-booking failed", e.message)
            return self._reject("Failed to create booking. Please try again.", 500)
        if total is None:
            return self._reject("Room not found", 404)
        if total <= 0:
            return self._reject("Invalid booking dates")

        data.update({
            "total_amount": total,
            "status": BookingStatus.PENDING.value,
            "created_by": self.user_id,
        })
        data.setdefault("adults", 1)
        data.setdefault("children", 0)

        return self._run(
            "create-booking", "bookings",
            lambda: self.store.insert("bookings", data),
            success="Booking created successfully",
            failure="Failed to create booking. Please try again.",
            collection="bookings", at_head=True,
        )

    def update_booking(self, booking_id: int, payload) -> MutationResult:
        data = _optional_text(_as_dict(payload), ("special_requests",))
        data.pop("status", None)
        if not data or _blanked(data, ("guest_id", "room_id", "check_in_date", "check_out_date")):
            return self._reject(REQUIRED_FIELDS_MESSAGE)

        failure = "Failed to update booking. Please try again."
        try:
            current = self.store.get("bookings", booking_id)
            if current is None:
                return self._reject(failure, 404)
            total = self._booking_total(
                data.get("room_id", current.room_id),
                data.get("check_in_date", current.check_in_date),
                data.get("check_out_date", current.check_out_date),
            )
        except StoreError as e:
            log_error("bookings", self.user_label, "update-booking failed", e.message)
            return self._reject(failure, 500)
        if total is None:
            return self._reject("Room not found", 404)
        if total <= 0:
            return self._reject("Invalid booking dates")
        data["total_amount"] = total

        return self._run(
            "update-booking", "bookings",
            lambda: self.store.update("bookings", booking_id, data),
            success="Booking updated successfully",
            failure=failure,
            collection="bookings",
        )

    def change_booking_status(self, booking_id: int, new_status: str) -> MutationResult:
        if new_status not in _members(BookingStatus):
            return self._reject("Invalid booking status")

        return self._run(
            "change-booking-status", "bookings",
            lambda: self.store.update("bookings", booking_id, {"status": new_status}),
            success="Booking status updated successfully",
            failure="Failed to update booking status",
            collection="bookings",
        )

    def record_payment(self, booking_id: int, amount, payment_method: str = PaymentMethod.CASH.value) -> MutationResult:
        value = _to_decimal(amount)
        if value is None:
            return self._reject("Please enter payment amount")
        if value <= 0:
            return self._reject("Payment amount must be greater than zero")
        if payment_method not in _members(PaymentMethod):
            return self._reject("Invalid payment method")

        failure = "Failed to record payment. Please try again."
        try:
            booking = self.store.get("bookings", booking_id)
        except StoreError as e:
            log_error("payments", self.user_label, "record-payment failed", e.message)
            return self._reject(failure, 500)
        if booking is None:
            return self._reject(failure, 404)
        if not self.allow_overpayment and value > booking_balance(booking)["balance"]:
            return self._reject("Payment exceeds the outstanding balance")

        def write():
            payment = self.store.insert("payments", {
                "booking_id": booking_id,
                "amount": value,
                "payment_method": payment_method,
                "status": PaymentStatus.PAID.value,
                "created_by": self.user_id,
            })
            # The payment is committed from here on; a failed re-read must not report it as lost
            try:
                refreshed = self.store.get("bookings", booking_id)
            except StoreError as e:
                log_error("payments", self.user_label, "booking re-read after payment failed", e.message)
                refreshed = None
            if refreshed is None:
                return _with_payment(booking, payment)
            return refreshed

        return self._run(
            "record-payment", "payments", write,
            success="Payment recorded successfully",
            failure=failure,
            collection="bookings", replace_only=True,
        )

    # ========== STAFF ==========

    def create_staff(self, payload) -> MutationResult:
        data = _optional_text(_as_dict(payload), ("phone",))
        if _missing(data, ("first_name", "last_name")):
            return self._reject(REQUIRED_FIELDS_MESSAGE)
        data.setdefault("role", StaffRole.RECEPTIONIST.value)
        if data["role"] not in _members(StaffRole):
            return self._reject("Invalid role")
        data["is_active"] = True

        return self._run(
            "create-staff", "staff",
            lambda: self.store.insert("profiles", data),
            success="Staff member added successfully",
            failure="Failed to add staff member. Please try again.",
            collection="staff", at_head=True,
        )

    def update_staff(self, staff_id: int, payload) -> MutationResult:
        data = _optional_text(_as_dict(payload), ("phone",))
        if not data or _blanked(data, ("first_name", "last_name")):
            return self._reject(REQUIRED_FIELDS_MESSAGE)
        if "role" in data and data["role"] not in _members(StaffRole):
            return self._reject("Invalid role")

        return self._run(
            "update-staff", "staff",
            lambda: self.store.update("profiles", staff_id, data),
            success="Staff member updated successfully",
            failure="Failed to update staff member. Please try again.",
            collection="staff",
        )

    def toggle_staff_status(self, staff_id: int) -> MutationResult:
        failure = "Failed to update staff status"
        try:
            member = self.store.get("profiles", staff_id)
        except StoreError as e:
            log_error("staff", self.user_label, "toggle-staff-status failed", e.message)
            return self._reject(failure, 500)
        if member is None:
            return self._reject(failure, 404)

        activate = not member.is_active
        return self._run(
            "toggle-staff-status", "staff",
            lambda: self.store.update("profiles", staff_id, {"is_active": activate}),
            success=f"Staff member {'activated' if activate else 'deactivated'} successfully",
            failure=failure,
            collection="staff",
        )

    def create_schedule(self, payload) -> MutationResult:
        data = _as_dict(payload)
        if _missing(data, ("staff_id", "shift_date")):
            return self._reject(REQUIRED_FIELDS_MESSAGE)
        data["created_by"] = self.user_id

        return self._run(
            "create-schedule", "staff",
            lambda: self.store.insert("staff_schedules", data),
            success="Schedule created successfully",
            failure="Failed to create schedule. Please try again.",
            collection="schedules", at_head=True,
        )

    # ========== HOUSEKEEPING ==========

    def create_task(self, payload) -> MutationResult:
        data = _optional_text(_as_dict(payload), ("description",))
        if _missing(data, ("room_id", "task_type")):
            return self._reject(REQUIRED_FIELDS_MESSAGE)
        data.setdefault("priority", TaskPriority.MEDIUM.value)
        if data["priority"] not in _members(TaskPriority):
            return self._reject("Invalid task priority")
        data.update({"status": TaskStatus.PENDING.value, "created_by": self.user_id})

        return self._run(
            "create-task", "housekeeping",
            lambda: self.store.insert("housekeeping_tasks", data),
            success="Housekeeping task created successfully",
            failure="Failed to create task. Please try again.",
            collection="tasks", at_head=True,
        )

    def update_task(self, task_id: int, payload) -> MutationResult:
        data = _optional_text(_as_dict(payload), ("description",))
        data.pop("status", None)
        if not data or _blanked(data, ("room_id", "task_type")):
            return self._reject(REQUIRED_FIELDS_MESSAGE)
        if "priority" in data and data["priority"] not in _members(TaskPriority):
            return self._reject("Invalid task priority")

        return self._run(
            "update-task", "housekeeping",
            lambda: self.store.update("housekeeping_tasks", task_id, data),
            success="Task updated successfully",
            failure="Failed to update task. Please try again.",
            collection="tasks",
        )

    def change_task_status(self, task_id: int, new_status: str) -> MutationResult:
        if new_status not in _members(TaskStatus):
            return self._reject("Invalid task status")
        changes = {
            "status": new_status,
            "completed_at": get_utc_now() if new_status == TaskStatus.COMPLETED.value else None,
        }

        return self._run(
            "change-task-status", "housekeeping",
            lambda: self.store.update("housekeeping_tasks", task_id, changes),
            success="Task status updated successfully",
            failure="Failed to update task status",
            collection="tasks",
        )

    # ========== SERVICES ==========

    def create_service(self, payload) -> MutationResult:
        data = _optional_text(_as_dict(payload), ("description",))
        if _missing(data, ("name", "price")):
            return self._reject(REQUIRED_FIELDS_MESSAGE)

        return self._run(
            "create-service", "services",
            lambda: self.store.insert("services", data),
            success="Service added successfully",
            failure="Failed to add service. Please try again.",
            collection="services", at_head=False,
        )

    def update_service(self, service_id: int, payload) -> MutationResult:
        data = _optional_text(_as_dict(payload), ("description",))
        data.pop("is_active", None)
        if not data or _blanked(data, ("name", "price")):
            return self._reject(REQUIRED_FIELDS_MESSAGE)

        return self._run(
            "update-service", "services",
            lambda: self.store.update("services", service_id, data),
            success="Service updated successfully",
            failure="Failed to update service. Please try again.",
            collection="services",
        )

    def toggle_service_status(self, service_id: int) -> MutationResult:
        failure = "Failed to update service status"
        try:
            service = self.store.get("services", service_id)
        except StoreError as e:
            log_error("services", self.user_label, "toggle-service-status failed", e.message)
            return self._reject(failure, 500)
        if service is None:
            return self._reject(failure, 404)

        activate = not service.is_active
        return self._run(
            "toggle-service-status", "services",
            lambda: self.store.update("services", service_id, {"is_active": activate}),
            success=f"Service {'activated' if activate else 'deactivated'} successfully",
            failure=failure,
            collection="services",
        )
