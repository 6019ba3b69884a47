"""
Role based access policy.

Single source of truth for "may this role do this?". Page guards,
mutation routes and the per-control capability flags of every view
model consult it.
"""
from typing import Dict, FrozenSet, Optional

from models import StaffRole

VIEW_GUESTS = "view-guests"
MANAGE_GUESTS = "manage-guests"
VIEW_ROOMS = "view-rooms"
MANAGE_ROOMS = "manage-rooms"
CHANGE_ROOM_STATUS = "change-room-status"
VIEW_BOOKINGS = "view-bookings"
MANAGE_BOOKINGS = "manage-bookings"
VIEW_STAFF = "view-staff"
MANAGE_STAFF = "manage-staff"
VIEW_ADMIN_PANEL = "view-admin-panel"
VIEW_TASKS = "view-tasks"
MANAGE_TASKS = "manage-tasks"

ACTIONS: FrozenSet[str] = frozenset({
    VIEW_GUESTS, MANAGE_GUESTS,
    VIEW_ROOMS, MANAGE_ROOMS, CHANGE_ROOM_STATUS,
    VIEW_BOOKINGS, MANAGE_BOOKINGS,
    VIEW_STAFF, MANAGE_STAFF,
    VIEW_ADMIN_PANEL,
    VIEW_TASKS, MANAGE_TASKS,
})

ROLE_ACTIONS: Dict[str, FrozenSet[str]] = {
    StaffRole.ADMIN.value: ACTIONS,
    StaffRole.MANAGER.value: ACTIONS,
    StaffRole.RECEPTIONIST.value: frozenset({
        VIEW_GUESTS, MANAGE_GUESTS,
        VIEW_ROOMS, CHANGE_ROOM_STATUS,
        VIEW_BOOKINGS, MANAGE_BOOKINGS,
        VIEW_TASKS,
    }),
    StaffRole.HOUSEKEEPING.value: frozenset({
        VIEW_ROOMS, CHANGE_ROOM_STATUS,
        VIEW_TASKS, MANAGE_TASKS,
    }),
    StaffRole.MAINTENANCE.value: frozenset({VIEW_TASKS}),
    StaffRole.SECURITY.value: frozenset({VIEW_TASKS}),
}


def allowed_actions(role: Optional[str], is_active: bool = True) -> FrozenSet[str]:
    if not is_active or role is None:
        return frozenset()
    return ROLE_ACTIONS.get(getattr(role, "value", role), frozenset())


def is_allowed(role: Optional[str], action: str, is_active: bool = True) -> bool:
    if action not in ACTIONS:
        raise ValueError(f"Unknown action: {action}")
    return action in allowed_actions(role, is_active)


def capabilities(role: Optional[str], is_active: bool = True) -> Dict[str, bool]:
    """Flag per action, used to decide which controls a view shows."""
    granted = allowed_actions(role, is_active)
    return {action.replace("-", "_"): action in granted for action in sorted(ACTIONS)}
