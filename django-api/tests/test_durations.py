"""Unit tests for duration reconciliation and bulk adjustment.

Run with: pytest tests/test_durations.py -v
"""

from datetime import UTC, datetime, timedelta

import pytest

from tests.factories import make_project, make_signup
from volunteering.domain.durations import (
    REASON_CHECK_OUT_FIRST,
    REASON_EXCESSIVE,
    REASON_MISSING,
    DurationResult,
    adjust_check_outs,
    format_duration,
    reconcile,
)
from volunteering.domain.publication import ANONYMOUS_NAME, build_batch

CHECK_IN = datetime(2025, 6, 1, 9, 0, tzinfo=UTC)


class TestReconcile:
    """Tests for reconcile."""

    def test_check_out_before_check_in_is_invalid(self):
        result = reconcile(
            datetime.fromisoformat("2025-06-01T09:00:00Z"),
            datetime.fromisoformat("2025-06-01T08:59:00Z"),
        )
        assert result == DurationResult(minutes=0, is_valid=False, reason=REASON_CHECK_OUT_FIRST)

    @pytest.mark.parametrize("check_in,check_out", [(None, CHECK_IN), (CHECK_IN, None), (None, None)])
    def test_missing_instant_is_not_computable(self, check_in, check_out):
        result = reconcile(check_in, check_out)
        assert result.minutes == 0
        assert not result.is_valid
        assert result.reason == REASON_MISSING

    def test_regular_shift(self):
        result = reconcile(CHECK_IN, CHECK_IN + timedelta(hours=3, minutes=5))
        assert result == DurationResult(minutes=185, is_valid=True)

    def test_zero_duration_is_valid(self):
        assert reconcile(CHECK_IN, CHECK_IN) == DurationResult(minutes=0, is_valid=True)

    @pytest.mark.parametrize(
        "elapsed,minutes",
        [
            (timedelta(minutes=10, seconds=29), 10),
            (timedelta(minutes=10, seconds=30), 11),
            (timedelta(minutes=10, seconds=59, microseconds=999999), 11),
            (timedelta(seconds=29, microseconds=999999), 0),
        ],
    )
    def test_minutes_round_half_up(self, elapsed, minutes):
        assert reconcile(CHECK_IN, CHECK_IN + elapsed).minutes == minutes

    def test_exactly_twenty_four_hours_is_valid(self):
        result = reconcile(CHECK_IN, CHECK_IN + timedelta(hours=24))
        assert result == DurationResult(minutes=1440, is_valid=True)

    def test_more_than_twenty_four_hours_is_excessive(self):
        result = reconcile(CHECK_IN, CHECK_IN + timedelta(hours=24, seconds=1))
        assert not result.is_valid
        assert result.reason == REASON_EXCESSIVE

    def test_valid_minutes_stay_within_a_day(self):
        for hours in range(0, 25):
            result = reconcile(CHECK_IN, CHECK_IN + timedelta(hours=hours))
            assert result.is_valid
            assert 0 <= result.minutes <= 1440

    def test_format_duration(self):
        assert format_duration(DurationResult(minutes=185, is_valid=True)) == "3h 5m"
        assert format_duration(reconcile(None, None)) == "--:--"


class TestAdjustCheckOuts:
    """Tests for adjust_check_outs."""

    def test_shifts_every_check_out_and_revalidates_each(self):
        project = make_project()
        short = make_signup(project, check_in=CHECK_IN, check_out=CHECK_IN + timedelta(minutes=20))
        long = make_signup(project, check_in=CHECK_IN, check_out=CHECK_IN + timedelta(hours=3))

        adjustments = adjust_check_outs([short, long], -30)

        assert [a.signup_id for a in adjustments] == [short.id, long.id]
        assert all(a.applied for a in adjustments)
        assert adjustments[0].check_out_time == CHECK_IN - timedelta(minutes=10)
        assert adjustments[0].result.reason == REASON_CHECK_OUT_FIRST
        assert adjustments[1].result == DurationResult(minutes=150, is_valid=True)

    def test_signup_without_check_out_is_reported_not_applied(self):
        project = make_project()
        signup = make_signup(project, check_in=CHECK_IN)
        (adjustment,) = adjust_check_outs([signup], 15)
        assert not adjustment.applied
        assert adjustment.check_out_time is None
        assert adjustment.result.reason == REASON_MISSING

    def test_positive_offset_can_make_duration_excessive(self):
        project = make_project()
        signup = make_signup(project, check_in=CHECK_IN, check_out=CHECK_IN + timedelta(hours=23))
        (adjustment,) = adjust_check_outs([signup], 90)
        assert adjustment.result.reason == REASON_EXCESSIVE


class TestBuildBatch:
    """Tests for build_batch."""

    def test_excludes_invalid_entries_and_counts_them(self):
        project = make_project()
        valid = make_signup(project, check_in=CHECK_IN, check_out=CHECK_IN + timedelta(hours=2))
        anonymous = make_signup(
            project,
            check_in=CHECK_IN,
            check_out=CHECK_IN + timedelta(hours=1),
            name=None,
            anonymous=True,
        )
        backwards = make_signup(project, check_in=CHECK_IN, check_out=CHECK_IN - timedelta(minutes=1))
        missing = make_signup(project, check_in=CHECK_IN)

        batch = build_batch([valid, anonymous, backwards, missing])

        assert batch.excluded == 2
        assert [entry.signup_id for entry in batch.entries] == [valid.id, anonymous.id]
        assert batch.entries[0].minutes == 120
        assert batch.entries[0].user_id == valid.user_id
        assert batch.entries[1].user_id is None
        assert batch.entries[1].name == ANONYMOUS_NAME
