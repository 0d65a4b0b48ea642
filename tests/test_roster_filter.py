"""
Roster view policy: who sees which tasks.
"""
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from shared.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from housekeeping_service.app.crud.housekeeping.roster_filter import (
    list_tasks,
    list_tasks_by_assignee,
    list_tasks_by_date_and_hotel,
    scope_for_requester,
)

SERVICE_DAY = date(2024, 6, 1)


@pytest.fixture()
def roster(seed_data, make_task):
    h1, h2 = seed_data["h1"], seed_data["h2"]
    return {
        "s1_morning": make_task(h1, seed_data["r1"], assigned_to="S1", shift="morning"),
        "s1_night": make_task(h1, seed_data["r2"], assigned_to="S1", shift="night"),
        "s2_h2": make_task(h2, seed_data["r3"], assigned_to="S2", shift="morning"),
        "s1_next_day": make_task(h1, seed_data["r1"], assigned_to="S1",
                                 task_date=SERVICE_DAY + timedelta(days=1)),
    }


def _ids(tasks):
    return {t.id for t in tasks}


# ===================== SCOPE POLICY (no IO) =====================


def test_housekeeping_scope_ignores_hotel_filter(users, seed_data):
    assert scope_for_requester(users["s1"], seed_data["h2"].id) == (None, "S1")


def test_receptionist_scope_is_own_hotel(users, seed_data):
    assert scope_for_requester(users["reception"], seed_data["h2"].id) == (seed_data["h1"].id, None)


def test_admin_scope_uses_filter_or_all(users, seed_data):
    assert scope_for_requester(users["admin"], seed_data["h2"].id) == (seed_data["h2"].id, None)
    assert scope_for_requester(users["admin"]) == (None, None)


def test_guest_has_no_roster(users):
    with pytest.raises(ForbiddenError):
        scope_for_requester(users["guest"])


def test_receptionist_without_hotel_refused(users):
    receptionist = users["reception"].model_copy(update={"hotel_id": None})
    with pytest.raises(ForbiddenError):
        scope_for_requester(receptionist)


# ===================== LIST TASKS =====================


def test_housekeeping_sees_only_own_tasks(db_session, users, roster):
    for requester in (users["s1"], users["s2"]):
        tasks, _ = list_tasks(db_session, requester, task_date=SERVICE_DAY)
        assert all(t.assigned_to == requester.user_id for t in tasks)

    tasks, _ = list_tasks(db_session, users["s1"], task_date=SERVICE_DAY)
    assert _ids(tasks) == {roster["s1_morning"].id, roster["s1_night"].id}


def test_housekeeping_shift_narrows(db_session, users, roster):
    tasks, _ = list_tasks(db_session, users["s1"], task_date=SERVICE_DAY, shift="night")
    assert _ids(tasks) == {roster["s1_night"].id}


def test_receptionist_sees_whole_own_hotel(db_session, users, seed_data, roster):
    tasks, scope = list_tasks(db_session, users["reception"],
                              hotel_id=seed_data["h2"].id, task_date=SERVICE_DAY)
    assert scope.hotel_id == seed_data["h1"].id
    assert _ids(tasks) == {roster["s1_morning"].id, roster["s1_night"].id}


def test_admin_all_hotels(db_session, users, roster):
    tasks, _ = list_tasks(db_session, users["admin"], task_date=SERVICE_DAY)
    assert _ids(tasks) == {roster["s1_morning"].id, roster["s1_night"].id, roster["s2_h2"].id}


def test_admin_hotel_and_shift_filter(db_session, users, seed_data, roster):
    tasks, _ = list_tasks(db_session, users["admin"], hotel_id=str(seed_data["h1"].id),
                          task_date="2024-06-01", shift="morning")
    assert _ids(tasks) == {roster["s1_morning"].id}


def test_status_filter(db_session, users, roster, make_task, seed_data):
    done = make_task(seed_data["h2"], seed_data["r3"], status="skipped",
                     task_date=SERVICE_DAY + timedelta(days=2))
    tasks, _ = list_tasks(db_session, users["admin"],
                          task_date=SERVICE_DAY + timedelta(days=2), status="skipped")
    assert _ids(tasks) == {done.id}


def test_roster_ordered_by_room_number(db_session, users, roster):
    tasks, _ = list_tasks(db_session, users["reception"], task_date=SERVICE_DAY)
    assert [t.room.room_number for t in tasks] == ["101", "102"]


def test_defaults_to_hotel_local_today(db_session, users, seed_data, make_task):
    hotel = seed_data["h1"]
    hotel.timezone = "Pacific/Kiritimati"
    db_session.commit()

    local_today = datetime.now(ZoneInfo("Pacific/Kiritimati")).date()
    today_task = make_task(hotel, seed_data["r1"], task_date=local_today)
    make_task(hotel, seed_data["r2"], task_date=local_today - timedelta(days=3))

    tasks, scope = list_tasks(db_session, users["reception"])
    assert scope.task_date == local_today
    assert _ids(tasks) == {today_task.id}


def test_unknown_shift_rejected(db_session, users, roster):
    with pytest.raises(ValidationError):
        list_tasks(db_session, users["admin"], task_date=SERVICE_DAY, shift="evening")


def test_admin_unknown_hotel_not_found(db_session, users, roster):
    import uuid
    with pytest.raises(NotFoundError):
        list_tasks(db_session, users["admin"], hotel_id=uuid.uuid4(), task_date=SERVICE_DAY)


def test_guest_cannot_list(db_session, users, roster):
    with pytest.raises(ForbiddenError):
        list_tasks(db_session, users["guest"], task_date=SERVICE_DAY)


# ===================== STORE READS =====================


def test_list_by_date_and_hotel(db_session, seed_data, roster):
    tasks = list_tasks_by_date_and_hotel(db_session, seed_data["h1"].id, SERVICE_DAY, shift="morning")
    assert _ids(tasks) == {roster["s1_morning"].id}


def test_list_by_assignee_any_date(db_session, roster):
    tasks = list_tasks_by_assignee(db_session, "S1")
    assert _ids(tasks) == {roster["s1_morning"].id, roster["s1_night"].id, roster["s1_next_day"].id}
