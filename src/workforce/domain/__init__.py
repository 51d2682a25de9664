"""
Workforce Domain Layer
======================

Domain layer for the workforce balancing module.

Contains:
- Entities: StaffRecord, Jurisdiction, Assignment and balancing results
- Domain Services: JurisdictionGate, StaffRanker, WorkloadBalancer

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from workforce.domain.entities import (
    StaffRecord,
    Jurisdiction,
    Assignment,
    AssignmentMove,
    RankedStaff,
    WorkloadSummary,
)
from workforce.domain.value_objects import (
    JurisdictionGate,
    StaffRanker,
    WorkloadBalancer,
)

__all__ = [
    # Entities
    "StaffRecord",
    "Jurisdiction",
    "Assignment",
    "AssignmentMove",
    "RankedStaff",
    "WorkloadSummary",
    # Domain Services
    "JurisdictionGate",
    "StaffRanker",
    "WorkloadBalancer",
]
