"""
Workforce Application DTOs
==========================

Pydantic request/response models for the workforce API.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from sla.application.dto import GeoPointDTO, ItemTypeStr
from workforce.domain import (
    Assignment,
    AssignmentMove,
    Jurisdiction,
    RankedStaff,
    StaffRecord,
    WorkloadSummary,
)


# ========== Type Aliases for Literals ==========
AvailabilityStr = Literal["available", "busy", "on_break", "off_duty", "on_leave"]
SupervisorLevelStr = Literal["ward", "department", "combined", "senior"]


# ========== Shared DTOs ==========

class StaffRecordDTO(BaseModel):
    """Staff workload snapshot."""
    user_id: str = Field(..., min_length=1)
    full_name: Optional[str] = None
    ward_id: Optional[str] = None
    department_id: Optional[str] = None
    current_workload: int = Field(default=0, ge=0)
    max_concurrent_assignments: Optional[int] = Field(
        default=1, ge=0, description="Zero or missing is treated as 1"
    )
    availability_status: AvailabilityStr = "available"
    last_known_location: Optional[GeoPointDTO] = None
    performance_rating: Optional[float] = Field(None, ge=0, le=5)

    def to_domain(self) -> StaffRecord:
        return StaffRecord(
            user_id=self.user_id,
            full_name=self.full_name,
            ward_id=self.ward_id,
            department_id=self.department_id,
            current_workload=self.current_workload,
            max_concurrent_assignments=self.max_concurrent_assignments,
            availability_status=self.availability_status,
            last_known_location=(
                self.last_known_location.to_domain() if self.last_known_location else None
            ),
            performance_rating=self.performance_rating
        )


class JurisdictionDTO(BaseModel):
    """Supervisor scope."""
    assigned_wards: List[str] = Field(default_factory=list)
    assigned_departments: List[str] = Field(default_factory=list)
    supervisor_level: SupervisorLevelStr = "ward"

    def to_domain(self) -> Jurisdiction:
        return Jurisdiction(
            assigned_wards=frozenset(self.assigned_wards),
            assigned_departments=frozenset(self.assigned_departments),
            supervisor_level=self.supervisor_level
        )


class AssignmentDTO(BaseModel):
    """An active item held by a staff member."""
    assignment_id: str = Field(..., min_length=1)
    item_type: ItemTypeStr = "complaint"
    staff_id: str = Field(..., min_length=1)

    def to_domain(self) -> Assignment:
        return Assignment(
            assignment_id=self.assignment_id,
            item_type=self.item_type,
            staff_id=self.staff_id
        )


# ========== Request DTOs ==========

class RankRequest(BaseModel):
    """Request model for staff suggestions."""
    staff: List[StaffRecordDTO]
    target_location: Optional[GeoPointDTO] = None
    jurisdiction: Optional[JurisdictionDTO] = None


class RebalanceRequest(BaseModel):
    """Request model for a rebalancing run."""
    assignments: List[AssignmentDTO]
    staff: List[StaffRecordDTO]
    jurisdiction: Optional[JurisdictionDTO] = None


class WorkloadSummaryRequest(BaseModel):
    """Request model for roster load statistics."""
    staff: List[StaffRecordDTO]
    jurisdiction: Optional[JurisdictionDTO] = None


# ========== Response DTOs ==========

class RankedStaffResponse(BaseModel):
    """One ranked candidate."""
    user_id: str
    full_name: Optional[str] = None
    recommendation_rank: int
    capacity_percentage: float = Field(..., description="May exceed 100 when over capacity")
    display_capacity_percentage: int = Field(..., description="Clamped to 100")
    distance_km: Optional[float] = None
    is_available: bool
    availability_status: AvailabilityStr
    current_workload: int
    max_concurrent_assignments: int

    @classmethod
    def from_domain(cls, ranked: RankedStaff) -> "RankedStaffResponse":
        staff = ranked.staff
        return cls(
            user_id=staff.user_id,
            full_name=staff.full_name,
            recommendation_rank=ranked.recommendation_rank,
            capacity_percentage=round(ranked.capacity_percentage, 2),
            display_capacity_percentage=min(100, round(ranked.capacity_percentage)),
            distance_km=round(ranked.distance_km, 3) if ranked.distance_km is not None else None,
            is_available=ranked.is_available,
            availability_status=staff.availability_status,
            current_workload=staff.current_workload,
            max_concurrent_assignments=staff.effective_capacity
        )


class RankResponse(BaseModel):
    staff: List[RankedStaffResponse]


class AssignmentMoveResponse(BaseModel):
    """Proposed reassignment."""
    assignment_id: str
    item_type: ItemTypeStr
    from_staff_id: str
    to_staff_id: str

    @classmethod
    def from_domain(cls, move: AssignmentMove) -> "AssignmentMoveResponse":
        return cls(**move.to_dict())


class RebalanceResponse(BaseModel):
    moves: List[AssignmentMoveResponse]
    total_moves: int


class WorkloadSummaryResponse(BaseModel):
    """Roster load statistics."""
    total_staff: int
    overloaded: int
    balanced: int
    underutilized: int
    average_workload: float
    average_capacity_percentage: float

    @classmethod
    def from_domain(cls, summary: WorkloadSummary) -> "WorkloadSummaryResponse":
        return cls(
            total_staff=summary.total_staff,
            overloaded=summary.overloaded,
            balanced=summary.balanced,
            underutilized=summary.underutilized,
            average_workload=summary.average_workload,
            average_capacity_percentage=summary.average_capacity_percentage
        )
