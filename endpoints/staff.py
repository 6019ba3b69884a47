"""
Staff page: members, schedules and assigned housekeeping tasks
"""
from fastapi import APIRouter, Depends, Path, Query, status

from database.store import QueryClient
from schemas.staff import ScheduleCreate, StaffCreate, StaffUpdate
from services.mutation_coordinator import MutationCoordinator
from services.view_state import ViewState
from utils.access_policy import MANAGE_STAFF, VIEW_STAFF
from utils.dependencies import get_query_client, require_action, require_page
from utils.responses import load_collection, mutation_response, page_context
from utils.search_engine import filter_staff
from utils.stats_engine import open_tasks, staff_activity_counts, staff_role_counts, todays_schedules
from utils.timezone import get_hotel_now


router = APIRouter(prefix="/dashboard/staff", tags=["Staff"])


@router.get("")
def staff_page(
    search: str = Query("", max_length=100),
    role: str = Query("all"),
    status_filter: str = Query("all", alias="status", pattern="^(all|active|inactive)$"),
    current_user=Depends(require_page(VIEW_STAFF)),
    store: QueryClient = Depends(get_query_client)
):
    """
    Staff members, upcoming schedules (from today on) and tasks assigned to someone
    """
    user = current_user.email
    today = get_hotel_now().date()
    view = ViewState(
        {
            "staff": load_collection(store, "profiles", user),
            "schedules": load_collection(store, "staff_schedules", user, filters={"shift_date__gte": today}),
            "tasks": load_collection(store, "housekeeping_tasks", user, filters={"assigned_to__ne": None}),
        },
        {"search": search, "role": role, "status": status_filter},
    )
    staff = view.collection("staff")
    schedules = view.collection("schedules")
    tasks = view.collection("tasks")
    shifts_today = todays_schedules(schedules, today)
    pending = open_tasks(tasks)

    return {
        **page_context(current_user, view),
        "staff": staff,
        "filtered": filter_staff(staff, search, role=role, status=status_filter),
        "schedules": schedules,
        "todays_schedules": shifts_today,
        "tasks": tasks,
        "open_tasks": pending,
        "stats": {
            **staff_activity_counts(staff),
            "roles": staff_role_counts(staff),
            "todays_schedules": len(shifts_today),
            "pending_tasks": len(pending),
        },
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_staff(
    member: StaffCreate,
    current_user=Depends(require_action(MANAGE_STAFF)),
    store: QueryClient = Depends(get_query_client)
):
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    return mutation_response(coordinator.create_staff(member.model_dump()))


@router.post("/schedules", status_code=status.HTTP_201_CREATED)
def create_schedule(
    schedule: ScheduleCreate,
    current_user=Depends(require_action(MANAGE_STAFF)),
    store: QueryClient = Depends(get_query_client)
):
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    return mutation_response(coordinator.create_schedule(schedule.model_dump()))


@router.put("/{staff_id}")
def update_staff(
    member: StaffUpdate,
    staff_id: int = Path(..., gt=0),
    current_user=Depends(require_action(MANAGE_STAFF)),
    store: QueryClient = Depends(get_query_client)
):
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    return mutation_response(coordinator.update_staff(staff_id, member.model_dump(exclude_unset=True)))


@router.patch("/{staff_id}/toggle-active")
def toggle_staff_status(
    staff_id: int = Path(..., gt=0),
    current_user=Depends(require_action(MANAGE_STAFF)),
    store: QueryClient = Depends(get_query_client)
):
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    return mutation_response(coordinator.toggle_staff_status(staff_id))
