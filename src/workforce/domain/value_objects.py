"""
Workforce Domain Services
=========================

Stateless logic for jurisdiction scoping, staff ranking and workload
rebalancing. Every method is a pure function of its inputs.
"""

from dataclasses import replace
from typing import Any, List, Optional, Sequence, Tuple, TypeVar

from sla.domain.value_objects import WorkloadPolicy
from shared.geo import GeoPoint, distance_between
from workforce.domain.entities import (
    Assignment,
    AssignmentMove,
    Jurisdiction,
    RankedStaff,
    StaffRecord,
    WorkloadSummary,
)

T = TypeVar("T")


class JurisdictionGate:
    """
    Decides whether an entity falls inside a supervisor's scope.

    Entities are anything carrying `ward_id` and `department_id`
    (TrackedItem, StaffRecord).
    """

    @staticmethod
    def matches(jurisdiction: Jurisdiction, entity: Any) -> bool:
        if jurisdiction.is_senior:
            return True

        # OR logic: ward OR department
        in_ward = entity.ward_id in jurisdiction.assigned_wards
        in_department = entity.department_id in jurisdiction.assigned_departments
        return in_ward or in_department

    @classmethod
    def filter_roster(
        cls,
        jurisdiction: Jurisdiction,
        staff: Sequence[StaffRecord]
    ) -> List[StaffRecord]:
        """Staff visible to the supervisor, input order preserved."""
        return cls._filter(jurisdiction, staff)

    @classmethod
    def filter_items(cls, jurisdiction: Jurisdiction, items: Sequence[T]) -> List[T]:
        """Complaints/tasks visible to the supervisor, input order preserved."""
        return cls._filter(jurisdiction, items)

    @classmethod
    def _filter(cls, jurisdiction: Jurisdiction, entities: Sequence[T]) -> List[T]:
        if jurisdiction.is_empty:
            return []
        return [e for e in entities if cls.matches(jurisdiction, e)]


class StaffRanker:
    """
    Orders assignment candidates.

    Available staff come first, then lower capacity utilisation, then
    shorter distance when a distance is known.
    """

    def __init__(self, policy: WorkloadPolicy):
        self._policy = policy

    @staticmethod
    def capacity_percentage(staff: StaffRecord) -> float:
        """Unclamped utilisation; may exceed 100."""
        return staff.current_workload / staff.effective_capacity * 100

    def check_capacity(self, staff: StaffRecord) -> Tuple[bool, int]:
        """(is_overloaded, display percentage clamped to 100)."""
        percentage = self.capacity_percentage(staff)
        return (
            percentage >= self._policy.overload_threshold,
            min(100, round(percentage))
        )

    def rank(
        self,
        candidates: Sequence[StaffRecord],
        target_location: Optional[GeoPoint] = None
    ) -> List[RankedStaff]:
        scored = [
            RankedStaff(
                staff=staff,
                capacity_percentage=self.capacity_percentage(staff),
                distance_km=distance_between(target_location, staff.last_known_location),
                is_available=staff.is_available,
            )
            for staff in candidates
        ]

        # Unknown distance sorts after known distance, never as closest
        scored.sort(key=lambda r: (
            not r.is_available,
            r.capacity_percentage,
            r.distance_km is None,
            r.distance_km or 0.0,
        ))

        return [
            replace(ranked, recommendation_rank=position)
            for position, ranked in enumerate(scored, start=1)
        ]


class WorkloadBalancer:
    """
    Greedy rebalancing from overloaded to underloaded, available staff.

    Advisory: produces moves, never mutates workloads.
    """

    def __init__(self, policy: WorkloadPolicy):
        self._policy = policy

    def _percentage(self, staff: StaffRecord) -> float:
        return StaffRanker.capacity_percentage(staff)

    def is_overloaded(self, staff: StaffRecord) -> bool:
        return self._percentage(staff) >= self._policy.overload_threshold

    def is_valid_target(self, staff: StaffRecord) -> bool:
        return staff.is_available and self._percentage(staff) < self._policy.target_threshold

    def rebalance(
        self,
        assignments: Sequence[Assignment],
        staff: Sequence[StaffRecord]
    ) -> List[AssignmentMove]:
        targets = tuple(s for s in staff if self.is_valid_target(s))
        if not targets:
            return []

        overloaded = [s for s in staff if self.is_overloaded(s)]
        moves: List[AssignmentMove] = []
        target_index = 0

        for source in overloaded:
            held = [a for a in assignments if a.staff_id == source.user_id]

            for assignment in held[:self._policy.max_moves_per_source]:
                target, target_index = self._next_target(targets, target_index, source.user_id)
                if target is None:
                    break

                moves.append(AssignmentMove(
                    assignment_id=assignment.assignment_id,
                    item_type=assignment.item_type,
                    from_staff_id=source.user_id,
                    to_staff_id=target.user_id
                ))

        return moves

    @staticmethod
    def _next_target(
        targets: Tuple[StaffRecord, ...],
        index: int,
        exclude_id: str
    ) -> Tuple[Optional[StaffRecord], int]:
        """Next round-robin target that is not the source; returns the advanced index."""
        for offset in range(len(targets)):
            position = (index + offset) % len(targets)
            if targets[position].user_id != exclude_id:
                return targets[position], (position + 1) % len(targets)
        return None, index

    def summarize(self, staff: Sequence[StaffRecord]) -> WorkloadSummary:
        percentages = [self._percentage(s) for s in staff]
        overloaded = sum(1 for p in percentages if p >= self._policy.overload_threshold)
        underutilized = sum(1 for p in percentages if p < self._policy.target_threshold)

        total = len(staff)
        return WorkloadSummary(
            total_staff=total,
            overloaded=overloaded,
            balanced=total - overloaded - underutilized,
            underutilized=underutilized,
            average_workload=round(sum(s.current_workload for s in staff) / total, 2) if total else 0.0,
            average_capacity_percentage=round(sum(percentages) / total, 2) if total else 0.0,
        )
