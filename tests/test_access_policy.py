"""
Tests for the role based access policy
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from utils.access_policy import (
    ACTIONS,
    MANAGE_BOOKINGS,
    MANAGE_GUESTS,
    MANAGE_TASKS,
    VIEW_ADMIN_PANEL,
    VIEW_ROOMS,
    VIEW_TASKS,
    allowed_actions,
    capabilities,
    is_allowed,
)


class TestAccessPolicy:
    def test_housekeeping_cannot_manage_bookings(self):
        assert is_allowed("housekeeping", MANAGE_BOOKINGS) is False

    @pytest.mark.parametrize("role", ["admin", "manager"])
    def test_admin_and_manager_can_do_everything(self, role):
        assert all(is_allowed(role, action) for action in ACTIONS)

    def test_receptionist(self):
        assert is_allowed("receptionist", MANAGE_GUESTS)
        assert is_allowed("receptionist", MANAGE_BOOKINGS)
        assert not is_allowed("receptionist", VIEW_ADMIN_PANEL)
        assert not is_allowed("receptionist", MANAGE_TASKS)

    def test_housekeeping_sees_rooms_and_tasks(self):
        assert is_allowed("housekeeping", VIEW_ROOMS)
        assert is_allowed("housekeeping", MANAGE_TASKS)

    @pytest.mark.parametrize("role", ["maintenance", "security"])
    def test_task_viewers(self, role):
        assert allowed_actions(role) == frozenset({VIEW_TASKS})

    def test_unknown_role_gets_nothing(self):
        assert allowed_actions("night-auditor") == frozenset()
        assert allowed_actions(None) == frozenset()

    def test_inactive_profile_gets_nothing(self):
        assert is_allowed("admin", VIEW_ROOMS, is_active=False) is False

    def test_unknown_action_rejected(self):
        with pytest.raises(ValueError):
            is_allowed("admin", "launch-rockets")

    def test_capability_flags(self):
        flags = capabilities("receptionist")
        assert flags["manage_bookings"] is True
        assert flags["manage_staff"] is False
        assert len(flags) == len(ACTIONS)
