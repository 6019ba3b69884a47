"""
Dashboard overview
"""
from fastapi import APIRouter, Depends

from database.store import QueryClient, StoreError
from models import BookingStatus
from schemas.auth import ProfileRead
from services.view_state import ViewState
from utils.dependencies import get_query_client, require_login_page
from utils.logging_utils import log_error
from utils.responses import load_collection, page_context
from utils.stats_engine import ACTIVE_BOOKING_STATUSES, dashboard_counts


router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("")
def dashboard_page(
    current_user=Depends(require_login_page),
    store: QueryClient = Depends(get_query_client)
):
    """
    Overview counts: rooms, guests, active bookings and this month's revenue
    """
    try:
        total_rooms = store.count("rooms")
        total_guests = store.count("guests")
        active_bookings = store.count("bookings", filters={"status__in": ACTIVE_BOOKING_STATUSES})
    except StoreError as e:
        log_error("dashboard", current_user.email, "Count failed", e.message)
        total_rooms = total_guests = active_bookings = 0

    payments = load_collection(store, "payments", current_user.email)
    view = ViewState({"payments": payments})

    return {
        **page_context(current_user, view),
        "profile": ProfileRead.model_validate(current_user),
        "stats": dashboard_counts(total_rooms, total_guests, active_bookings, payments),
        "booking_statuses": [s.value for s in BookingStatus],
    }
