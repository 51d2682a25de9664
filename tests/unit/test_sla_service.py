from datetime import datetime, timedelta

import pytest

from sla.domain import TrackedItem


def _item(new_year, item_id="c1", priority="emergency", status="in_progress", **kwargs):
    return TrackedItem(id=item_id, priority=priority, submitted_at=new_year, status=status, **kwargs)


def test_percentage_follows_item_window(sla_service, new_year):
    result = sla_service.classify_item(_item(new_year), new_year + timedelta(hours=3))

    assert result.percentage == 75.0
    assert result.status == "at_risk"
    assert result.hours_remaining == 1


def test_granted_extensions_widen_window(sla_service, new_year):
    item = _item(
        new_year,
        priority="high",
        extensions_used=1,
        sla_due_at=new_year + timedelta(hours=36),
    )

    assert sla_service.item_window_hours(item) == 36
    assert sla_service.classify_item(item, new_year + timedelta(hours=18)).percentage == 50.0


def test_escalation_fires_once_per_tier(sla_service, new_year):
    item = _item(new_year)
    now = new_year + timedelta(hours=3, minutes=30)

    first = sla_service.evaluate_item(item, now)
    assert first.escalation_tier == "supervisor"
    assert first.should_escalate is True

    repeat = sla_service.evaluate_item(item, now, last_notified_tier="supervisor")
    assert repeat.escalation_tier == "supervisor"
    assert repeat.should_escalate is False

    later = sla_service.evaluate_item(item, new_year + timedelta(hours=3, minutes=50), "supervisor")
    assert later.escalation_tier == "department_head"
    assert later.should_escalate is True


def test_breached_item_reaches_city_admin(sla_service, new_year):
    evaluation = sla_service.evaluate_item(_item(new_year), new_year + timedelta(hours=5))

    assert evaluation.classification.status == "overdue"
    assert evaluation.escalation_tier == "city_admin"


def test_completed_item_never_escalates(sla_service, new_year):
    item = _item(new_year, status="resolved", resolved_at=new_year + timedelta(hours=6))
    evaluation = sla_service.evaluate_item(item, new_year + timedelta(hours=8))

    assert evaluation.classification.status == "completed"
    assert evaluation.escalation_tier is None
    assert evaluation.should_escalate is False


def test_item_without_priority(sla_service, new_year):
    evaluation = sla_service.evaluate_item(_item(new_year, priority=None), new_year + timedelta(days=30))

    assert evaluation.deadline is None
    assert evaluation.classification is None
    assert evaluation.should_escalate is False


def test_evaluate_items_and_summary(sla_service, new_year):
    items = [
        _item(new_year, "c1", priority="emergency"),
        _item(new_year, "c2", priority="low"),
        _item(new_year, "c3", priority=None),
        _item(new_year, "t1", priority="high", status="completed", item_type="task"),
    ]
    now = new_year + timedelta(hours=6)

    evaluations = sla_service.evaluate_items(items, now, {"c1": "city_admin"})
    counts = sla_service.summarize(evaluations)

    assert [e.item_id for e in evaluations] == ["c1", "c2", "c3", "t1"]
    assert counts == {
        "total": 4,
        "no_deadline": 1,
        "escalations": 0,
        "overdue": 1,
        "on_time": 1,
        "completed": 1,
    }


def test_evaluation_to_dict(sla_service, new_year):
    evaluation = sla_service.evaluate_item(_item(new_year), new_year + timedelta(hours=1))
    as_dict = evaluation.to_dict()

    assert as_dict["item_id"] == "c1"
    assert as_dict["deadline"] == "2024-01-01T04:00:00+00:00"
    assert as_dict["percentage"] == 25.0


def test_compliance_with_nothing_resolved(sla_service, new_year):
    report = sla_service.compliance([_item(new_year)])

    assert report.total_resolved == 0
    assert report.compliance_rate == 100.0
    assert report.average_resolution_hours == 0.0


def test_compliance(sla_service, new_year):
    items = [
        _item(new_year, "c1", priority="high", status="resolved", resolved_at=new_year + timedelta(hours=20)),
        _item(new_year, "c2", priority="high", status="resolved", resolved_at=new_year + timedelta(hours=30)),
        _item(new_year, "c3", priority=None, status="resolved", resolved_at=new_year + timedelta(hours=1)),
        _item(new_year, "c4", priority="low"),
    ]

    report = sla_service.compliance(items)

    assert report.total_resolved == 2
    assert report.on_time == 1
    assert report.compliance_rate == 50.0
    assert report.average_resolution_hours == 25.0


def test_resolved_before_submitted_rejected(new_year):
    with pytest.raises(ValueError):
        _item(new_year, resolved_at=new_year - timedelta(hours=1))


def test_recomputed_deadline_includes_granted_extensions(sla_service, new_year):
    item = _item(new_year, priority="high", extensions_used=1)

    assert sla_service.classify_item(item, new_year).percentage == 0.0
    assert sla_service.classify_item(item, new_year + timedelta(hours=18)).percentage == 50.0


def test_naive_resolved_at_is_read_as_utc(new_year):
    item = _item(new_year, status="resolved", resolved_at=datetime(2024, 1, 1, 10))
    assert item.is_completed

    with pytest.raises(ValueError):
        _item(new_year, status="resolved", resolved_at=datetime(2023, 12, 31, 23))


def test_unknown_item_type_rejected(new_year):
    with pytest.raises(ValueError):
        _item(new_year, item_type="incident")
