"""
Guests page and guest mutations
"""
from fastapi import APIRouter, Depends, Path, Query, status

from database.store import QueryClient
from schemas.guests import GuestCreate, GuestUpdate
from services.mutation_coordinator import MutationCoordinator
from services.view_state import ViewState
from utils.access_policy import MANAGE_GUESTS, VIEW_GUESTS
from utils.dependencies import get_query_client, require_action, require_page
from utils.responses import load_collection, mutation_response, page_context
from utils.search_engine import filter_guests


router = APIRouter(prefix="/dashboard/guests", tags=["Guests"])


@router.get("")
def guests_page(
    search: str = Query("", max_length=100),
    current_user=Depends(require_page(VIEW_GUESTS)),
    store: QueryClient = Depends(get_query_client)
):
    view = ViewState(
        {"guests": load_collection(store, "guests", current_user.email)},
        {"search": search},
    )
    guests = view.collection("guests")

    return {
        **page_context(current_user, view),
        "guests": guests,
        "filtered": filter_guests(guests, search),
        "stats": {"total": len(guests)},
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_guest(
    guest: GuestCreate,
    current_user=Depends(require_action(MANAGE_GUESTS)),
    store: QueryClient = Depends(get_query_client)
):
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    return mutation_response(coordinator.create_guest(guest.model_dump()))


@router.put("/{guest_id}")
def update_guest(
    guest: GuestUpdate,
    guest_id: int = Path(..., gt=0),
    current_user=Depends(require_action(MANAGE_GUESTS)),
    store: QueryClient = Depends(get_query_client)
):
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    return mutation_response(coordinator.update_guest(guest_id, guest.model_dump(exclude_unset=True)))
