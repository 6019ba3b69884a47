"""
Bookings page, booking mutations and payments
"""
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from database.store import QueryClient, StoreError
from models import RoomStatus
from schemas.bookings import BookingCreate, BookingStatusUpdate, BookingUpdate, PaymentCreate
from services.mutation_coordinator import MutationCoordinator
from services.view_state import ViewState
from utils.access_policy import MANAGE_BOOKINGS, VIEW_BOOKINGS
from utils.dependencies import get_query_client, require_action, require_page
from utils.logging_utils import log_error
from utils.responses import load_collection, mutation_response, page_context
from utils.search_engine import filter_bookings
from utils.stats_engine import booking_balance, booking_status_counts, quote_total, stay_nights


router = APIRouter(prefix="/dashboard/bookings", tags=["Bookings"])


@router.get("")
def bookings_page(
    search: str = Query("", max_length=100),
    status_filter: str = Query("all", alias="status"),
    current_user=Depends(require_page(VIEW_BOOKINGS)),
    store: QueryClient = Depends(get_query_client)
):
    """
    Bookings with guest/room search and status filter, plus the options of the booking form
    """
    user = current_user.email
    view = ViewState(
        {
            "bookings": load_collection(store, "bookings", user),
            "available_rooms": load_collection(
                store, "rooms", user, filters={"status": RoomStatus.AVAILABLE.value}
            ),
            "guests": load_collection(store, "guests", user, order=("first_name", "last_name")),
            "services": load_collection(store, "services", user, filters={"is_active": True}),
        },
        {"search": search, "status": status_filter},
    )
    bookings = view.collection("bookings")

    return {
        **page_context(current_user, view),
        "bookings": bookings,
        "filtered": filter_bookings(bookings, search, status=status_filter),
        "balances": {booking.id: booking_balance(booking) for booking in bookings},
        "available_rooms": view.collection("available_rooms"),
        "guests": view.collection("guests"),
        "services": view.collection("services"),
        "stats": booking_status_counts(bookings),
    }


@router.get("/quote")
def booking_quote(
    room_id: int = Query(..., gt=0),
    check_in_date: date = Query(...),
    check_out_date: date = Query(...),
    current_user=Depends(require_action(VIEW_BOOKINGS)),
    store: QueryClient = Depends(get_query_client)
):
    """Live total shown by the booking form: nights x the room's nightly rate"""
    try:
        room = store.get("rooms", room_id)
    except StoreError as e:
        log_error("bookings", current_user.email, "Quote failed", e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to calculate the booking total"
        )
    if room is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")

    total = quote_total(room, check_in_date, check_out_date)
    return {
        "room_id": room_id,
        "nights": max(stay_nights(check_in_date, check_out_date), 0),
        "total_amount": total,
        "valid": total > 0,
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_booking(
    booking: BookingCreate,
    current_user=Depends(require_action(MANAGE_BOOKINGS)),
    store: QueryClient = Depends(get_query_client)
):
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    return mutation_response(coordinator.create_booking(booking.model_dump()))


@router.put("/{booking_id}")
def update_booking(
    booking: BookingUpdate,
    booking_id: int = Path(..., gt=0),
    current_user=Depends(require_action(MANAGE_BOOKINGS)),
    store: QueryClient = Depends(get_query_client)
):
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    return mutation_response(coordinator.update_booking(booking_id, booking.model_dump(exclude_unset=True)))


@router.patch("/{booking_id}/status")
def change_booking_status(
    body: BookingStatusUpdate,
    booking_id: int = Path(..., gt=0),
    current_user=Depends(require_action(MANAGE_BOOKINGS)),
    store: QueryClient = Depends(get_query_client)
):
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    return mutation_response(coordinator.change_booking_status(booking_id, body.status))


@router.post("/{booking_id}/payments", status_code=status.HTTP_201_CREATED)
def record_payment(
    payment: PaymentCreate,
    booking_id: int = Path(..., gt=0),
    current_user=Depends(require_action(MANAGE_BOOKINGS)),
    store: QueryClient = Depends(get_query_client)
):
    """
    Records a paid payment and returns the re-read booking with its balance
    """
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    result = mutation_response(
        coordinator.record_payment(booking_id, payment.amount, payment.payment_method)
    )
    result["balance"] = booking_balance(result["record"])
    return result
