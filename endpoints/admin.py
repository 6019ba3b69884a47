"""
Admin panel: hotel analytics, revenue chart and extra services
"""
from fastapi import APIRouter, Depends, Path, status

from database.store import QueryClient
from schemas.services import ServiceCreate, ServiceUpdate
from services.mutation_coordinator import MutationCoordinator
from services.view_state import ViewState
from utils.access_policy import VIEW_ADMIN_PANEL
from utils.dependencies import get_query_client, require_action, require_page
from utils.responses import load_collection, mutation_response, page_context
from utils.stats_engine import admin_analytics, revenue_by_month, room_status_counts


router = APIRouter(prefix="/dashboard/admin", tags=["Admin"])


@router.get("")
def admin_page(
    current_user=Depends(require_page(VIEW_ADMIN_PANEL)),
    store: QueryClient = Depends(get_query_client)
):
    user = current_user.email
    view = ViewState({
        kind: load_collection(store, table, user)
        for kind, table in (
            ("payments", "payments"),
            ("bookings", "bookings"),
            ("rooms", "rooms"),
            ("guests", "guests"),
            ("staff", "profiles"),
            ("tasks", "housekeeping_tasks"),
            ("services", "services"),
        )
    })
    c = view.collection

    return {
        **page_context(current_user, view),
        "analytics": admin_analytics(
            c("payments"), c("bookings"), c("rooms"), c("guests"), c("staff"), c("tasks")
        ),
        "revenue_data": revenue_by_month(c("payments")),
        "room_status": room_status_counts(c("rooms")),
        "services": c("services"),
    }


# ========== SERVICES ==========

@router.post("/services", status_code=status.HTTP_201_CREATED)
def create_service(
    service: ServiceCreate,
    current_user=Depends(require_action(VIEW_ADMIN_PANEL)),
    store: QueryClient = Depends(get_query_client)
):
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    return mutation_response(coordinator.create_service(service.model_dump()))


@router.put("/services/{service_id}")
def update_service(
    service: ServiceUpdate,
    service_id: int = Path(..., gt=0),
    current_user=Depends(require_action(VIEW_ADMIN_PANEL)),
    store: QueryClient = Depends(get_query_client)
):
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    return mutation_response(coordinator.update_service(service_id, service.model_dump(exclude_unset=True)))


@router.patch("/services/{service_id}/toggle-active")
def toggle_service_status(
    service_id: int = Path(..., gt=0),
    current_user=Depends(require_action(VIEW_ADMIN_PANEL)),
    store: QueryClient = Depends(get_query_client)
):
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    return mutation_response(coordinator.toggle_service_status(service_id))
