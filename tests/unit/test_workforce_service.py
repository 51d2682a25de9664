from shared.geo import GeoPoint
from workforce.domain import Assignment, Jurisdiction, StaffRecord


ROSTER = [
    StaffRecord(user_id="A", ward_id="W1", current_workload=9, max_concurrent_assignments=10),
    StaffRecord(user_id="B", ward_id="W1", current_workload=1, max_concurrent_assignments=10),
    StaffRecord(user_id="C", ward_id="W2", current_workload=10, max_concurrent_assignments=10),
    StaffRecord(user_id="D", ward_id="W2", current_workload=0, max_concurrent_assignments=10),
]

ASSIGNMENTS = [
    Assignment("a1", "A"),
    Assignment("c1", "C"),
    Assignment("c2", "C"),
]


def test_rebalance_without_scope_uses_whole_roster(workforce_service):
    moves = workforce_service.rebalance(ASSIGNMENTS, ROSTER)

    assert [(m.assignment_id, m.to_staff_id) for m in moves] == [
        ("a1", "B"), ("c1", "D"), ("c2", "B"),
    ]


def test_rebalance_stays_inside_jurisdiction(workforce_service):
    moves = workforce_service.rebalance(ASSIGNMENTS, ROSTER, Jurisdiction(assigned_wards={"W2"}))

    assert [(m.assignment_id, m.from_staff_id, m.to_staff_id) for m in moves] == [
        ("c1", "C", "D"), ("c2", "C", "D"),
    ]


def test_suggest_staff_scoped(workforce_service):
    ranked = workforce_service.suggest_staff(
        ROSTER,
        target_location=GeoPoint(lat=19.07, lng=72.87),
        jurisdiction=Jurisdiction(assigned_wards={"W1"}),
    )

    assert [r.staff.user_id for r in ranked] == ["B", "A"]


def test_empty_jurisdiction_summary(workforce_service):
    summary = workforce_service.workload_summary(ROSTER, Jurisdiction())
    assert summary.total_staff == 0


def test_check_capacity(workforce_service):
    assert workforce_service.check_capacity(ROSTER[2]) == (True, 100)
