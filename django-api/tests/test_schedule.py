"""Unit tests for schedule parsing and session enumeration.

Run with: pytest tests/test_schedule.py -v
"""

from datetime import date, datetime, time

import pytest

from tests.factories import (
    SCENARIO_B_DOC,
    make_project,
    make_signup,
    multi_area_doc,
    multi_day_doc,
    one_time_doc,
)
from volunteering.domain import enumerate_sessions
from volunteering.domain.lookup import remaining_capacity
from volunteering.domain.schedule import (
    MultiDaySchedule,
    OneTimeSchedule,
    dump_schedule,
    parse_schedule,
)
from volunteering.domain.session_ids import OneTimeRef, RoleRef, SlotRef
from volunteering.domain.value_objects import EventType, SignupStatus


class TestParseSchedule:
    """Tests for parse_schedule."""

    def test_parses_one_time_document(self):
        schedule = parse_schedule(EventType.ONE_TIME, one_time_doc())
        assert isinstance(schedule, OneTimeSchedule)
        assert schedule.date == date(2025, 6, 1)
        assert schedule.slot.start_time == time(9, 0)
        assert schedule.slot.capacity.value == 10

    def test_parses_multi_day_document(self):
        schedule = parse_schedule(EventType.MULTI_DAY, SCENARIO_B_DOC)
        assert isinstance(schedule, MultiDaySchedule)
        assert [len(day.slots) for day in schedule.days] == [2]

    def test_accepts_legacy_multi_role_key(self):
        document = {"multiRole": multi_area_doc("2025-08-02", ("Setup", "08:00", "10:00"))["sameDayMultiArea"]}
        schedule = parse_schedule(EventType.SAME_DAY_MULTI_AREA, document)
        assert schedule is not None
        assert schedule.roles[0].name == "Setup"

    @pytest.mark.parametrize(
        "event_type,document",
        [
            (EventType.ONE_TIME, None),
            (EventType.ONE_TIME, {}),
            (EventType.ONE_TIME, {"oneTime": {"date": "2025-06-01", "startTime": "09:00"}}),
            (EventType.ONE_TIME, one_time_doc(start="9am")),
            (EventType.ONE_TIME, one_time_doc(date="June 1st")),
            (EventType.ONE_TIME, one_time_doc(volunteers=-3)),
            (EventType.ONE_TIME, SCENARIO_B_DOC),
            (EventType.MULTI_DAY, {"multiDay": []}),
            (EventType.MULTI_DAY, {"multiDay": [{"date": "2025-07-10", "slots": []}]}),
            (EventType.MULTI_DAY, {"multiDay": [{"date": "2025-07-10", "slots": ["09:00"]}]}),
            (
                EventType.MULTI_DAY,
                multi_day_doc(("2025-07-10", [("09:00", "10:00")]), ("2025-07-10", [("11:00", "12:00")])),
            ),
            (EventType.SAME_DAY_MULTI_AREA, multi_area_doc("2025-08-02", ("Setup", "08:00", "10:00"), ("Setup", "10:00", "12:00"))),
            (EventType.SAME_DAY_MULTI_AREA, multi_area_doc("2025-08-02", (" ", "08:00", "10:00"))),
        ],
    )
    def test_malformed_documents_yield_none(self, event_type, document):
        """Malformed or partial schedules never raise."""
        assert parse_schedule(event_type, document) is None

    def test_dump_round_trips_document(self):
        document = multi_area_doc("2025-08-02", ("Setup", "08:00", "10:00"), ("Food", "10:00", "14:00"))
        schedule = parse_schedule(EventType.SAME_DAY_MULTI_AREA, document)
        assert parse_schedule(EventType.SAME_DAY_MULTI_AREA, dump_schedule(schedule)) == schedule


class TestEnumerateSessions:
    """Tests for enumerate_sessions."""

    def test_one_time_has_single_session(self):
        (session,) = enumerate_sessions(make_project())
        assert session.ref == OneTimeRef()
        assert session.session_id == "oneTime"
        assert session.starts_at == datetime(2025, 6, 1, 9, 0)
        assert session.ends_at == datetime(2025, 6, 1, 12, 0)
        assert session.label == "June 1, 2025 (9:00 AM - 12:00 PM)"

    def test_multi_day_sessions_follow_day_then_slot_order(self):
        project = make_project(
            EventType.MULTI_DAY,
            multi_day_doc(
                ("2025-07-10", [("09:00", "11:00"), ("13:00", "15:00")]),
                ("2025-07-11", [("10:00", "12:00")]),
            ),
        )
        sessions = enumerate_sessions(project)
        assert [s.session_id for s in sessions] == [
            "2025-07-10-0",
            "2025-07-10-1",
            "2025-07-11-0",
        ]
        assert sessions[2].ref == SlotRef(date(2025, 7, 11), 0)
        assert sessions[2].day_index == 1

    def test_multi_area_sessions_follow_declared_role_order(self):
        project = make_project(
            EventType.SAME_DAY_MULTI_AREA,
            multi_area_doc("2025-08-02", ("Registration", "08:00", "10:00"), ("Cleanup", "14:00", "16:00")),
        )
        sessions = enumerate_sessions(project)
        assert [s.ref for s in sessions] == [RoleRef("Registration"), RoleRef("Cleanup")]
        assert [s.role_index for s in sessions] == [0, 1]
        assert sessions[1].label.endswith(" - Cleanup")

    def test_overnight_slot_ends_next_day(self):
        project = make_project(schedule=one_time_doc(start="22:00", end="02:00"))
        (session,) = enumerate_sessions(project)
        assert session.ends_at == datetime(2025, 6, 2, 2, 0)

    def test_malformed_schedule_has_no_sessions(self):
        project = make_project(schedule={"oneTime": {"date": "soon"}})
        assert enumerate_sessions(project) == ()

    def test_schedule_of_other_shape_has_no_sessions(self):
        project = make_project(EventType.MULTI_DAY, one_time_doc())
        assert enumerate_sessions(project) == ()

    def test_enumeration_is_deterministic(self):
        project = make_project(EventType.MULTI_DAY, SCENARIO_B_DOC)
        assert enumerate_sessions(project) == enumerate_sessions(project)


class TestRemainingCapacity:
    """Tests for remaining_capacity."""

    def test_counts_approved_and_attended_signups(self):
        project = make_project(schedule=one_time_doc(volunteers=3))
        signups = [
            make_signup(project, status=SignupStatus.APPROVED),
            make_signup(project, status=SignupStatus.ATTENDED),
            make_signup(project, status=SignupStatus.PENDING),
            make_signup(project, status=SignupStatus.REJECTED),
        ]
        assert remaining_capacity(project, signups) == {"oneTime": 1}

    def test_counts_signups_stored_under_aliases(self):
        project = make_project(EventType.MULTI_DAY, SCENARIO_B_DOC)
        signups = [
            make_signup(project, "2025-07-10-1"),
            make_signup(project, "day-0-slot-1"),
            make_signup(project, "0-1"),
        ]
        assert remaining_capacity(project, signups) == {"2025-07-10-0": 5, "2025-07-10-1": 2}

    def test_never_goes_below_zero(self):
        project = make_project(schedule=one_time_doc(volunteers=1))
        signups = [make_signup(project) for _ in range(3)]
        assert remaining_capacity(project, signups) == {"oneTime": 0}
