"""Reconciliation of recorded check-in and check-out instants."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from volunteering.domain.models import Signup
from volunteering.domain.value_objects import SignupId

MAX_DURATION = timedelta(hours=24)

REASON_MISSING = "missing check-in or check-out"
REASON_CHECK_OUT_FIRST = "check-out precedes check-in"
REASON_EXCESSIVE = "excessive duration"


@dataclass(frozen=True)
class DurationResult:
    minutes: int
    is_valid: bool
    reason: str | None = None


def reconcile(check_in: datetime | None, check_out: datetime | None) -> DurationResult:
    """Validate a check-in/check-out pair and compute whole minutes.

    Anything above 24 hours is treated as a data entry error rather than a
    long shift. Minutes round half up to absorb sub-minute jitter.
    """
    if check_in is None or check_out is None:
        return DurationResult(minutes=0, is_valid=False, reason=REASON_MISSING)
    if check_out < check_in:
        return DurationResult(minutes=0, is_valid=False, reason=REASON_CHECK_OUT_FIRST)
    elapsed = check_out - check_in
    minutes = _round_minutes(elapsed)
    if elapsed > MAX_DURATION:
        return DurationResult(minutes=minutes, is_valid=False, reason=REASON_EXCESSIVE)
    return DurationResult(minutes=minutes, is_valid=True)


def _round_minutes(elapsed: timedelta) -> int:
    microseconds = Decimal(elapsed // timedelta(microseconds=1))
    minutes = microseconds / Decimal(60_000_000)
    return int(minutes.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_duration(result: DurationResult) -> str:
    if not result.is_valid and result.reason != REASON_EXCESSIVE:
        return "--:--"
    hours, minutes = divmod(result.minutes, 60)
    return f"{hours}h {minutes}m"


@dataclass(frozen=True)
class Adjustment:
    """Outcome of shifting one signup's check-out.

    ``applied`` is False when the signup had nothing to shift; ``result`` is
    the revalidated duration either way. ``stored`` and ``error`` describe
    whether the shifted check-out was written.
    """

    signup_id: SignupId
    applied: bool
    check_out_time: datetime | None
    result: DurationResult
    stored: bool = False
    error: str | None = None


def adjust_check_outs(
    signups: Iterable[Signup], offset_minutes: int
) -> tuple[Adjustment, ...]:
    """Shift every check-out by ``offset_minutes`` and revalidate each one.

    Signups are handled independently: one becoming invalid does not stop or
    revert the others.
    """
    offset = timedelta(minutes=offset_minutes)
    adjustments = []
    for signup in signups:
        if signup.check_out_time is None:
            adjustments.append(
                Adjustment(
                    signup_id=signup.id,
                    applied=False,
                    check_out_time=None,
                    result=reconcile(signup.check_in_time, None),
                )
            )
            continue
        shifted = signup.check_out_time + offset
        adjustments.append(
            Adjustment(
                signup_id=signup.id,
                applied=True,
                check_out_time=shifted,
                result=reconcile(signup.check_in_time, shifted),
            )
        )
    return tuple(adjustments)
