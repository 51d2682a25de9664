from datetime import datetime, timedelta, timezone

import pytest

from core import SLAExtensionLimitExceeded
from sla.domain import TrackedItem


STATUS_RANK = {"on_time": 0, "at_risk": 1, "overdue": 2}


@pytest.mark.parametrize(
    "priority, hours",
    [("emergency", 4), ("high", 24), ("medium", 72), ("low", 168)],
)
def test_compute_deadline_adds_resolution_window(clock, new_year, priority, hours):
    submitted = new_year + timedelta(minutes=17)
    assert clock.compute_deadline(priority, submitted) == submitted + timedelta(hours=hours)


def test_unknown_priority_uses_default_window(clock, new_year):
    assert clock.compute_deadline("urgent-ish", new_year) == new_year + timedelta(hours=48)
    assert clock.compute_deadline(None, new_year) == new_year + timedelta(hours=48)


def test_priority_lookup_is_case_insensitive(clock, new_year):
    assert clock.compute_deadline("HIGH", new_year) == new_year + timedelta(hours=24)


def test_naive_timestamps_are_treated_as_utc(clock):
    naive = datetime(2024, 1, 1)
    assert clock.compute_deadline("high", naive) == datetime(2024, 1, 2, tzinfo=timezone.utc)


def test_response_deadline(clock, new_year):
    assert clock.compute_response_deadline("emergency", new_year) == new_year + timedelta(hours=1)
    assert clock.compute_response_deadline("low", new_year) == new_year + timedelta(hours=48)


def test_high_priority_boundaries(clock, new_year):
    deadline = clock.compute_deadline("high", new_year)
    assert deadline == datetime(2024, 1, 2, tzinfo=timezone.utc)

    three_hours_left = clock.classify(deadline, datetime(2024, 1, 1, 21, tzinfo=timezone.utc))
    assert three_hours_left.status == "at_risk"
    assert three_hours_left.hours_remaining == 3
    assert three_hours_left.is_overdue is False
    assert three_hours_left.countdown_text == "3h 0m"

    one_second_late = clock.classify(deadline, datetime(2024, 1, 2, 0, 0, 1, tzinfo=timezone.utc))
    assert one_second_late.status == "overdue"
    assert one_second_late.is_overdue is True
    assert one_second_late.percentage == 100.0
    assert one_second_late.hours_remaining == 0
    assert one_second_late.minutes_remaining == 0
    assert one_second_late.seconds_remaining == 0


def test_deadline_equal_to_now_is_overdue(clock, new_year):
    result = clock.classify(new_year, new_year)
    assert result.status == "overdue"


@pytest.mark.parametrize("window_hours", [None, 24])
def test_classification_never_regresses(clock, new_year, window_hours):
    deadline = new_year + timedelta(hours=24)
    previous = None

    for step in range(0, 27 * 4):
        now = new_year + timedelta(minutes=15 * step)
        current = clock.classify(deadline, now, window_hours=window_hours)
        if previous is not None:
            assert current.percentage >= previous.percentage
            assert STATUS_RANK[current.status] >= STATUS_RANK[previous.status]
        previous = current

    assert previous.status == "overdue"


def test_percentage_uses_reference_window_by_default(clock, new_year):
    result = clock.classify(new_year + timedelta(hours=36), new_year)
    assert result.percentage == 50.0
    assert result.status == "on_time"


def test_percentage_clamped_at_zero(clock, new_year):
    result = clock.classify(new_year + timedelta(hours=100), new_year)
    assert result.percentage == 0.0


def test_explicit_window(clock, new_year):
    result = clock.classify(new_year + timedelta(hours=1), new_year, window_hours=4)
    assert result.percentage == 75.0
    assert result.status == "at_risk"


def test_completed_wins_over_overdue(clock, new_year):
    result = clock.classify(new_year - timedelta(days=3), new_year, completed=True)
    assert result.status == "completed"
    assert result.percentage == 100.0
    assert result.is_overdue is False
    assert result.countdown_text == "Completed"


def test_format_countdown(clock, new_year):
    assert clock.format_countdown(new_year + timedelta(days=2, hours=3), new_year) == "2d 3h"
    assert clock.format_countdown(new_year + timedelta(hours=5, minutes=12), new_year) == "5h 12m"
    assert clock.format_countdown(new_year - timedelta(hours=6, minutes=40), new_year) == "Overdue by 6h"
    assert clock.format_countdown(new_year, new_year, completed=True) == "Completed"


def test_extend_deadline(clock, new_year):
    assert clock.extend_deadline(new_year, "high", 0) == new_year + timedelta(hours=12)
    assert clock.extend_deadline(new_year, "high", 1) == new_year + timedelta(hours=12)


def test_extend_deadline_beyond_allowance(clock, new_year):
    with pytest.raises(SLAExtensionLimitExceeded) as exc_info:
        clock.extend_deadline(new_year, "emergency", 1)

    assert exc_info.value.max_extensions == 1
    assert exc_info.value.details["priority"] == "emergency"


def test_deadline_for_prefers_stored_deadline(clock, new_year):
    stored = new_year + timedelta(hours=30)
    item = TrackedItem(id="c1", priority="high", submitted_at=new_year, status="assigned", sla_due_at=stored)
    assert clock.deadline_for(item) == stored


def test_deadline_for_recomputes_missing_deadline(clock, new_year):
    item = TrackedItem(id="c1", priority="low", submitted_at=new_year, status="received")
    assert clock.deadline_for(item) == new_year + timedelta(hours=168)


def test_item_without_priority_has_no_deadline(clock, new_year):
    item = TrackedItem(id="c1", priority=None, submitted_at=new_year, status="received")
    assert clock.deadline_for(item) is None


def test_describe(clock):
    assert clock.describe("at_risk") == ("At Risk", "Approaching SLA deadline")
    assert clock.describe("completed")[0] == "Completed"


def test_deadline_for_adds_granted_extensions(clock, new_year):
    item = TrackedItem(id="c1", priority="high", submitted_at=new_year, status="assigned", extensions_used=1)
    assert clock.deadline_for(item) == new_year + timedelta(hours=36)
