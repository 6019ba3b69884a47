"""
Rooms page, room mutations and housekeeping tasks
"""
from fastapi import APIRouter, Depends, Path, Query, status

from database.store import QueryClient
from models import StaffRole
from schemas.housekeeping import TaskCreate, TaskStatusUpdate, TaskUpdate
from schemas.rooms import RoomCreate, RoomStatusUpdate, RoomUpdate
from services.mutation_coordinator import MutationCoordinator
from services.view_state import ViewState
from utils.access_policy import CHANGE_ROOM_STATUS, MANAGE_ROOMS, MANAGE_TASKS, VIEW_ROOMS, VIEW_TASKS
from utils.dependencies import get_query_client, require_action, require_page
from utils.responses import load_collection, mutation_response, page_context
from utils.search_engine import filter_rooms, filter_tasks
from utils.stats_engine import occupancy_rate, room_status_counts, task_status_counts


router = APIRouter(prefix="/dashboard/rooms", tags=["Rooms"])

# Roles that housekeeping tasks can be assigned to
ASSIGNABLE_ROLES = (StaffRole.HOUSEKEEPING.value, StaffRole.MAINTENANCE.value)


@router.get("")
def rooms_page(
    search: str = Query("", max_length=100),
    status_filter: str = Query("all", alias="status"),
    room_type: str = Query("all"),
    task_search: str = Query("", max_length=100),
    task_status: str = Query("all"),
    task_priority: str = Query("all"),
    current_user=Depends(require_page(VIEW_ROOMS)),
    store: QueryClient = Depends(get_query_client)
):
    """
    Rooms with status/type filters, plus the housekeeping task board
    """
    user = current_user.email
    view = ViewState(
        {
            "rooms": load_collection(store, "rooms", user),
            "tasks": load_collection(store, "housekeeping_tasks", user),
            "assignable_staff": load_collection(
                store, "profiles", user,
                filters={"role__in": ASSIGNABLE_ROLES, "is_active": True},
                order=("first_name", "last_name"),
            ),
        },
        {
            "search": search, "status": status_filter, "room_type": room_type,
            "task_search": task_search, "task_status": task_status, "task_priority": task_priority,
        },
    )
    rooms = view.collection("rooms")
    tasks = view.collection("tasks")

    return {
        **page_context(current_user, view),
        "rooms": rooms,
        "filtered": filter_rooms(rooms, search, status=status_filter, room_type=room_type),
        "tasks": tasks,
        "filtered_tasks": filter_tasks(tasks, task_search, status=task_status, priority=task_priority),
        "assignable_staff": view.collection("assignable_staff"),
        "stats": {
            **room_status_counts(rooms),
            "occupancy_rate": round(occupancy_rate(rooms), 2),
            "tasks": task_status_counts(tasks),
        },
    }


# ========== ROOMS ==========

@router.post("", status_code=status.HTTP_201_CREATED)
def create_room(
    room: RoomCreate,
    current_user=Depends(require_action(MANAGE_ROOMS)),
    store: QueryClient = Depends(get_query_client)
):
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    return mutation_response(coordinator.create_room(room.model_dump()))


@router.put("/{room_id}")
def update_room(
    room: RoomUpdate,
    room_id: int = Path(..., gt=0),
    current_user=Depends(require_action(MANAGE_ROOMS)),
    store: QueryClient = Depends(get_query_client)
):
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    return mutation_response(coordinator.update_room(room_id, room.model_dump(exclude_unset=True)))


@router.patch("/{room_id}/status")
def change_room_status(
    body: RoomStatusUpdate,
    room_id: int = Path(..., gt=0),
    current_user=Depends(require_action(CHANGE_ROOM_STATUS)),
    store: QueryClient = Depends(get_query_client)
):
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    return mutation_response(coordinator.change_room_status(room_id, body.status))


# ========== HOUSEKEEPING TASKS ==========

@router.get("/tasks")
def tasks_page(
    search: str = Query("", max_length=100),
    status_filter: str = Query("all", alias="status"),
    priority: str = Query("all"),
    current_user=Depends(require_page(VIEW_TASKS)),
    store: QueryClient = Depends(get_query_client)
):
    """
    Housekeeping task board for every role that may see tasks, including maintenance and security
    """
    view = ViewState(
        {"tasks": load_collection(store, "housekeeping_tasks", current_user.email)},
        {"search": search, "status": status_filter, "priority": priority},
    )
    tasks = view.collection("tasks")

    return {
        **page_context(current_user, view),
        "tasks": tasks,
        "filtered": filter_tasks(tasks, search, status=status_filter, priority=priority),
        "my_tasks": [t for t in tasks if t.assigned_to == current_user.id],
        "stats": task_status_counts(tasks),
    }


@router.post("/tasks", status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    current_user=Depends(require_action(MANAGE_TASKS)),
    store: QueryClient = Depends(get_query_client)
):
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    return mutation_response(coordinator.create_task(task.model_dump()))


@router.put("/tasks/{task_id}")
def update_task(
    task: TaskUpdate,
    task_id: int = Path(..., gt=0),
    current_user=Depends(require_action(MANAGE_TASKS)),
    store: QueryClient = Depends(get_query_client)
):
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    return mutation_response(coordinator.update_task(task_id, task.model_dump(exclude_unset=True)))


@router.patch("/tasks/{task_id}/status")
def change_task_status(
    body: TaskStatusUpdate,
    task_id: int = Path(..., gt=0),
    current_user=Depends(require_action(MANAGE_TASKS)),
    store: QueryClient = Depends(get_query_client)
):
    coordinator = MutationCoordinator(store, ViewState(), current_user)
    return mutation_response(coordinator.change_task_status(task_id, body.status))
