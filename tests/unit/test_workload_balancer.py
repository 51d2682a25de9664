import pytest

from workforce.domain import Assignment, StaffRecord, WorkloadBalancer


@pytest.fixture
def balancer(sla_config) -> WorkloadBalancer:
    return WorkloadBalancer(sla_config.workload)


def _staff(user_id, workload, maximum=10, availability="available"):
    return StaffRecord(
        user_id=user_id,
        current_workload=workload,
        max_concurrent_assignments=maximum,
        availability_status=availability,
    )


def test_moves_capped_per_source(balancer):
    a = _staff("A", 9)
    b = _staff("B", 2)
    assignments = [
        Assignment("c1", "A"),
        Assignment("c2", "A"),
        Assignment("t1", "A", item_type="task"),
    ]

    moves = balancer.rebalance(assignments, [a, b])

    assert len(moves) == 2
    assert [m.assignment_id for m in moves] == ["c1", "c2"]
    assert all(m.from_staff_id == "A" and m.to_staff_id == "B" for m in moves)


def test_no_targets_means_no_moves(balancer):
    staff = [_staff("A", 9), _staff("B", 6), _staff("C", 1, availability="busy")]
    assignments = [Assignment("c1", "A"), Assignment("c2", "A")]

    assert balancer.rebalance(assignments, staff) == []


def test_targets_are_used_round_robin(balancer):
    staff = [_staff("A", 9), _staff("B", 0), _staff("C", 0), _staff("D", 8)]
    assignments = [
        Assignment("a1", "A"), Assignment("a2", "A"),
        Assignment("d1", "D"), Assignment("d2", "D"),
    ]

    moves = balancer.rebalance(assignments, staff)

    assert [(m.assignment_id, m.to_staff_id) for m in moves] == [
        ("a1", "B"), ("a2", "C"), ("d1", "B"), ("d2", "C"),
    ]


def test_never_moves_to_self(balancer):
    staff = [_staff("A", 9), _staff("B", 1)]
    moves = balancer.rebalance([Assignment("c1", "A"), Assignment("c2", "B")], staff)

    assert all(m.from_staff_id != m.to_staff_id for m in moves)


def test_rebalance_does_not_touch_workloads(balancer):
    staff = [_staff("A", 9), _staff("B", 2)]
    balancer.rebalance([Assignment("c1", "A")], staff)

    assert [s.current_workload for s in staff] == [9, 2]


def test_rebalance_is_deterministic(balancer):
    staff = [_staff("A", 10), _staff("B", 0), _staff("C", 3)]
    assignments = [Assignment(f"c{i}", "A") for i in range(5)]

    assert balancer.rebalance(assignments, staff) == balancer.rebalance(assignments, staff)


def test_summarize(balancer):
    summary = balancer.summarize([_staff("A", 9), _staff("B", 6), _staff("C", 2)])

    assert summary.total_staff == 3
    assert summary.overloaded == 1
    assert summary.balanced == 1
    assert summary.underutilized == 1
    assert summary.average_workload == pytest.approx(5.67)
    assert summary.average_capacity_percentage == pytest.approx(56.67)


def test_summarize_empty_roster(balancer):
    summary = balancer.summarize([])
    assert summary.total_staff == 0
    assert summary.average_workload == 0.0
