"""
Tests for the staff page: members, schedules and assigned tasks
"""

from datetime import timedelta

from conftest import add_room
from utils.timezone import get_hotel_now


def _add_staff(c, **overrides):
    payload = {"first_name": "Mia", "last_name": "Wong", "role": "housekeeping"}
    payload.update(overrides)
    response = c.post("/dashboard/staff", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["record"]


class TestStaffMembers:
    def test_create_staff_member_without_login(self, login):
        c = login("manager")
        member = _add_staff(c, phone="")

        assert member["is_active"] is True
        assert member["email"] is None
        assert member["phone"] is None

        page = c.get("/dashboard/staff").json()
        assert page["staff"][0]["id"] == member["id"]
        assert page["stats"]["roles"]["housekeeping"] == 1

    def test_toggle_active(self, login):
        c = login("admin")
        member = _add_staff(c)

        response = c.patch(f"/dashboard/staff/{member['id']}/toggle-active")
        assert response.json()["record"]["is_active"] is False
        assert response.json()["notification"]["message"] == "Staff member deactivated successfully"

        page = c.get("/dashboard/staff", params={"status": "inactive"}).json()
        assert [s["id"] for s in page["filtered"]] == [member["id"]]

        again = c.patch(f"/dashboard/staff/{member['id']}/toggle-active")
        assert again.json()["notification"]["message"] == "Staff member activated successfully"

    def test_role_and_search_filters(self, login):
        c = login("admin")
        _add_staff(c)
        guard = _add_staff(c, first_name="Kim", last_name="Lee", role="security")

        assert [s["id"] for s in c.get("/dashboard/staff", params={"role": "security"}).json()["filtered"]] == [guard["id"]]
        assert [s["id"] for s in c.get("/dashboard/staff", params={"search": "kim"}).json()["filtered"]] == [guard["id"]]

    def test_update_requires_names(self, login):
        c = login("admin")
        member = _add_staff(c)
        response = c.put(f"/dashboard/staff/{member['id']}", json={"first_name": "  "})
        assert response.status_code == 400

    def test_receptionist_cannot_manage_staff(self, login):
        c = login("receptionist")
        response = c.post("/dashboard/staff", json={"first_name": "A", "last_name": "B"})
        assert response.status_code == 403


class TestSchedules:
    def test_schedule_defaults_and_today(self, login):
        c = login("manager")
        member = _add_staff(c)
        today = get_hotel_now().date()

        response = c.post("/dashboard/staff/schedules", json={"staff_id": member["id"], "shift_date": today.isoformat()})
        assert response.status_code == 201
        schedule = response.json()["record"]
        assert schedule["start_time"] == "09:00:00"
        assert schedule["end_time"] == "17:00:00"
        assert schedule["break_duration"] == 60
        assert schedule["staff"]["first_name"] == "Mia"

        c.post("/dashboard/staff/schedules", json={
            "staff_id": member["id"], "shift_date": (today + timedelta(days=1)).isoformat(),
        })
        c.post("/dashboard/staff/schedules", json={
            "staff_id": member["id"], "shift_date": (today - timedelta(days=3)).isoformat(),
        })

        page = c.get("/dashboard/staff").json()
        assert len(page["schedules"]) == 2
        assert page["stats"]["todays_schedules"] == 1
        assert page["todays_schedules"][0]["id"] == schedule["id"]

    def test_assigned_tasks_listed(self, login):
        c = login("admin")
        member = _add_staff(c)
        room = add_room(c)
        c.post("/dashboard/rooms/tasks", json={"room_id": room["id"], "assigned_to": member["id"]})
        c.post("/dashboard/rooms/tasks", json={"room_id": room["id"]})

        page = c.get("/dashboard/staff").json()
        assert len(page["tasks"]) == 1
        assert page["tasks"][0]["assigned_to_profile"]["id"] == member["id"]
        assert page["stats"]["pending_tasks"] == 1
