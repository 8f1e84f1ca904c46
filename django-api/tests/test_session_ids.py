"""Unit tests for session id encoding, decoding and legacy aliases.

Run with: pytest tests/test_session_ids.py -v
"""

from datetime import date

import pytest

from tests.factories import (
    SCENARIO_B_DOC,
    make_project,
    make_signup,
    multi_area_doc,
    multi_day_doc,
)
from volunteering.domain import enumerate_sessions
from volunteering.domain.lookup import find_session, group_signups_by_session, resolve_session_id
from volunteering.domain.session_ids import OneTimeRef, RoleRef, SlotRef, decode, encode
from volunteering.domain.value_objects import EventType


@pytest.fixture
def multi_day_project():
    return make_project(
        EventType.MULTI_DAY,
        multi_day_doc(
            ("2025-07-10", [("09:00", "11:00"), ("13:00", "15:00")]),
            ("2025-07-12", [("09:00", "12:00")]),
        ),
    )


@pytest.fixture
def multi_area_project():
    return make_project(
        EventType.SAME_DAY_MULTI_AREA,
        multi_area_doc(
            "2025-08-02",
            ("Registration", "08:00", "10:00"),
            ("Food Bank - Sorting", "10:00", "12:00"),
            ("3", "12:00", "13:00"),
        ),
    )


class TestCodec:
    """Tests for encode and decode."""

    def test_one_time_encodes_to_literal(self):
        assert encode(OneTimeRef()) == "oneTime"
        assert decode(EventType.ONE_TIME, "oneTime") == OneTimeRef()

    def test_multi_day_second_slot(self):
        """A slot id is the date and the zero-based slot index."""
        project = make_project(EventType.MULTI_DAY, SCENARIO_B_DOC)
        second = enumerate_sessions(project)[1]
        assert encode(second.ref) == "2025-07-10-1"
        assert decode(EventType.MULTI_DAY, "2025-07-10-1") == SlotRef(
            date=date(2025, 7, 10), slot_index=1
        )

    def test_role_encodes_to_its_name(self):
        assert encode(RoleRef("Food Bank - Sorting")) == "Food Bank - Sorting"
        assert decode(EventType.SAME_DAY_MULTI_AREA, "Food Bank - Sorting") == RoleRef(
            "Food Bank - Sorting"
        )

    @pytest.mark.parametrize(
        "session_id",
        ["", "oneTime-0", "2025-07-10", "2025-07-10-", "2025-07-10-x", "2025-13-10-0", "20250710-0", "2025-07-10-01"],
    )
    def test_unparseable_multi_day_ids_decode_to_none(self, session_id):
        assert decode(EventType.MULTI_DAY, session_id) is None

    def test_unknown_one_time_id_decodes_to_none(self):
        assert decode(EventType.ONE_TIME, "default") is None

    def test_round_trip_for_every_shape(self, multi_day_project, multi_area_project):
        """decode(encode(s)) == s for every enumerable session."""
        for project in (make_project(), multi_day_project, multi_area_project):
            sessions = enumerate_sessions(project)
            assert sessions
            for session in sessions:
                assert decode(project.event_type, encode(session.ref)) == session.ref

    def test_ids_never_collide_within_a_project(self, multi_day_project, multi_area_project):
        for project in (multi_day_project, multi_area_project):
            ids = [s.session_id for s in enumerate_sessions(project)]
            assert len(ids) == len(set(ids))


class TestFindSession:
    """Tests for find_session and the alias resolver."""

    def test_finds_canonical_id(self, multi_day_project):
        session = find_session(multi_day_project, "2025-07-12-0")
        assert session is not None
        assert session.ref == SlotRef(date(2025, 7, 12), 0)

    @pytest.mark.parametrize("alias", ["day-1-slot-0", "1-0"])
    def test_resolves_multi_day_aliases(self, multi_day_project, alias):
        assert resolve_session_id(multi_day_project, alias) == "2025-07-12-0"

    @pytest.mark.parametrize("alias", ["0", "default", "oneTime"])
    def test_resolves_one_time_aliases(self, alias):
        assert resolve_session_id(make_project(), alias) == "oneTime"

    @pytest.mark.parametrize("alias", ["role-1", "role1", "1"])
    def test_resolves_multi_area_aliases(self, multi_area_project, alias):
        assert resolve_session_id(multi_area_project, alias) == "Food Bank - Sorting"

    def test_canonical_name_wins_over_index_alias(self, multi_area_project):
        """A role literally named "3" is not confused with role index 3."""
        assert resolve_session_id(multi_area_project, "3") == "3"
        assert resolve_session_id(multi_area_project, "role-2") == "3"

    @pytest.mark.parametrize(
        "session_id", ["2025-07-11-0", "2025-07-10-2", "day-3-slot-0", "9-9", "oneTime", None, ""]
    )
    def test_unknown_multi_day_sessions_are_unavailable(self, multi_day_project, session_id):
        assert find_session(multi_day_project, session_id) is None

    def test_unknown_role_is_unavailable(self, multi_area_project):
        assert find_session(multi_area_project, "Parking") is None
        assert find_session(multi_area_project, "role-7") is None

    def test_ids_issued_before_a_schedule_edit_become_unavailable(self):
        before = make_project(EventType.MULTI_DAY, SCENARIO_B_DOC)
        issued = enumerate_sessions(before)[1].session_id
        after = make_project(
            EventType.MULTI_DAY, multi_day_doc(("2025-07-10", [("09:00", "11:00")]))
        )
        assert find_session(after, issued) is None

    def test_malformed_project_has_no_resolvable_ids(self):
        project = make_project(schedule={"oneTime": None})
        assert find_session(project, "oneTime") is None
        assert find_session(project, "0") is None

    def test_groups_signups_under_canonical_ids(self, multi_day_project):
        signups = [
            make_signup(multi_day_project, "2025-07-10-0"),
            make_signup(multi_day_project, "day-0-slot-0"),
            make_signup(multi_day_project, "1-0"),
            make_signup(multi_day_project, "gone"),
        ]
        grouped = group_signups_by_session(multi_day_project, signups)
        assert {key: len(value) for key, value in grouped.items()} == {
            "2025-07-10-0": 2,
            "2025-07-12-0": 1,
        }
