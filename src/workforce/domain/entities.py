"""
Workforce Domain Entities
=========================

Staff, jurisdiction and assignment types for workload balancing.

These are explicit value types hydrated by the persistence collaborator;
the engine never guesses between partially loaded profile fields.
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional

from config import (
    AvailabilityStatus, ItemType, SupervisorLevel,
    VALID_AVAILABILITY_STATUSES, VALID_SUPERVISOR_LEVELS
)
from shared.geo import GeoPoint


@dataclass
class StaffRecord:
    """
    A staff member's workload snapshot.

    A staff member can be over capacity; utilisation above 100% is
    reported, not rejected.
    """

    user_id: str
    ward_id: Optional[str] = None
    department_id: Optional[str] = None
    current_workload: int = 0
    max_concurrent_assignments: Optional[int] = 1
    availability_status: str = AvailabilityStatus.AVAILABLE
    last_known_location: Optional[GeoPoint] = None
    performance_rating: Optional[float] = None
    full_name: Optional[str] = None

    def __post_init__(self):
        if self.current_workload < 0:
            raise ValueError("current_workload cannot be negative")
        if self.max_concurrent_assignments is not None and self.max_concurrent_assignments < 0:
            raise ValueError("max_concurrent_assignments cannot be negative")
        if self.availability_status not in VALID_AVAILABILITY_STATUSES:
            raise ValueError(f"availability_status must be one of {VALID_AVAILABILITY_STATUSES}")

    @property
    def effective_capacity(self) -> int:
        """Max concurrent assignments, treating zero/absent as 1."""
        return max(1, self.max_concurrent_assignments or 0)

    @property
    def is_available(self) -> bool:
        return self.availability_status == AvailabilityStatus.AVAILABLE


@dataclass(frozen=True)
class Jurisdiction:
    """
    Wards and departments a supervisor may see and act on.

    Senior supervisors see everything. Everyone else sees an entity whose
    ward OR department is assigned to them.
    """

    assigned_wards: FrozenSet[str] = frozenset()
    assigned_departments: FrozenSet[str] = frozenset()
    supervisor_level: str = SupervisorLevel.WARD

    def __post_init__(self):
        if self.supervisor_level not in VALID_SUPERVISOR_LEVELS:
            raise ValueError(f"supervisor_level must be one of {VALID_SUPERVISOR_LEVELS}")

        # Accept any iterable (lists from JSON, sets from callers)
        object.__setattr__(self, "assigned_wards", _freeze(self.assigned_wards))
        object.__setattr__(self, "assigned_departments", _freeze(self.assigned_departments))

    @property
    def is_senior(self) -> bool:
        return self.supervisor_level == SupervisorLevel.SENIOR

    @property
    def is_empty(self) -> bool:
        """Non-senior scope with nothing assigned sees nothing."""
        return not self.is_senior and not self.assigned_wards and not self.assigned_departments


def _freeze(values: Optional[Iterable[str]]) -> FrozenSet[str]:
    return frozenset(values or ())


@dataclass(frozen=True)
class Assignment:
    """One active complaint or task held by a staff member."""
    assignment_id: str
    staff_id: str
    item_type: str = ItemType.COMPLAINT


@dataclass(frozen=True)
class AssignmentMove:
    """
    Proposed reassignment produced by a balancing run.

    Advisory only: the caller applies it with an atomic, conditional update
    keyed on the assignment's current staff.
    """
    assignment_id: str
    item_type: str
    from_staff_id: str
    to_staff_id: str

    def to_dict(self) -> dict:
        return {
            "assignment_id": self.assignment_id,
            "item_type": self.item_type,
            "from_staff_id": self.from_staff_id,
            "to_staff_id": self.to_staff_id,
        }


@dataclass(frozen=True)
class RankedStaff:
    """A candidate with the scores used to order it."""
    staff: StaffRecord
    capacity_percentage: float
    distance_km: Optional[float]
    is_available: bool
    recommendation_rank: int = 0


@dataclass(frozen=True)
class WorkloadSummary:
    """Counts of staff per load band plus averages."""
    total_staff: int
    overloaded: int
    balanced: int
    underutilized: int
    average_workload: float
    average_capacity_percentage: float
