"""
SLA Application DTOs
=====================

Data Transfer Objects for SLA API layer.

These Pydantic models handle serialization/deserialization and validation
for API requests and responses. Following YAGNI - only what's needed.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Dict, List, Optional, Literal
from datetime import datetime

from sla.domain import TrackedItem, SLAEvaluation, ComplianceReport, DeadlineClock, as_utc
from shared.geo import GeoPoint


# ========== Type Aliases for Literals ==========
ItemTypeStr = Literal["complaint", "task"]
SLAStatusStr = Literal["on_time", "at_risk", "overdue", "completed"]
EscalationTierStr = Literal["supervisor", "department_head", "city_admin"]


# ========== Shared DTOs ==========

class GeoPointDTO(BaseModel):
    """Latitude/longitude pair."""
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    def to_domain(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lng=self.lng)


class TrackedItemDTO(BaseModel):
    """Complaint or task snapshot supplied by the caller."""
    id: str = Field(..., min_length=1, description="Item ID")
    item_type: ItemTypeStr = Field(default="complaint")
    priority: Optional[str] = Field(
        None,
        description="emergency, high, medium or low; anything else uses the default tier"
    )
    submitted_at: datetime = Field(..., description="Submission timestamp")
    status: str = Field(..., min_length=1, description="Lifecycle status")
    ward_id: Optional[str] = None
    department_id: Optional[str] = None
    assigned_staff_id: Optional[str] = None
    sla_due_at: Optional[datetime] = Field(None, description="Stored deadline, recomputed when absent")
    resolved_at: Optional[datetime] = None
    location: Optional[GeoPointDTO] = None
    extensions_used: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_resolved_at(self) -> "TrackedItemDTO":
        """Ensure resolved_at is not before submitted_at (naive times are UTC)."""
        if self.resolved_at and as_utc(self.resolved_at) < as_utc(self.submitted_at):
            raise ValueError("resolved_at cannot be before submitted_at")
        return self

    def to_domain(self) -> TrackedItem:
        """Convert to domain entity."""
        return TrackedItem(
            id=self.id,
            item_type=self.item_type,
            priority=self.priority,
            submitted_at=self.submitted_at,
            status=self.status,
            ward_id=self.ward_id,
            department_id=self.department_id,
            assigned_staff_id=self.assigned_staff_id,
            sla_due_at=self.sla_due_at,
            resolved_at=self.resolved_at,
            location=self.location.to_domain() if self.location else None,
            extensions_used=self.extensions_used
        )


# ========== Request DTOs ==========

class ClassifyRequest(BaseModel):
    """Request model for snapshot classification."""
    items: List[TrackedItemDTO] = Field(..., description="Items to classify")
    now: Optional[datetime] = Field(None, description="Evaluation time; defaults to server time")
    notified_tiers: Dict[str, EscalationTierStr] = Field(
        default_factory=dict,
        description="Last escalation tier already notified, keyed by item ID"
    )


class ComplianceRequest(BaseModel):
    """Request model for compliance statistics."""
    items: List[TrackedItemDTO] = Field(..., description="Items, resolved or not")


# ========== Response DTOs ==========

class ItemSLAResponse(BaseModel):
    """Deadline classification and escalation decision for one item."""
    item_id: str
    item_type: ItemTypeStr
    deadline: Optional[datetime] = Field(None, description="None when the item has no priority")
    status: Optional[SLAStatusStr] = None
    label: Optional[str] = None
    description: Optional[str] = None
    countdown_text: Optional[str] = None
    percentage: Optional[float] = Field(None, description="Percent of the window elapsed")
    is_overdue: bool = False
    hours_remaining: int = 0
    minutes_remaining: int = 0
    seconds_remaining: int = 0
    escalation_tier: Optional[EscalationTierStr] = None
    should_escalate: bool = False

    @classmethod
    def from_evaluation(cls, evaluation: SLAEvaluation) -> "ItemSLAResponse":
        classification = evaluation.classification
        if classification is None:
            return cls(item_id=evaluation.item_id, item_type=evaluation.item_type)

        label, description = DeadlineClock.describe(classification.status)
        return cls(
            item_id=evaluation.item_id,
            item_type=evaluation.item_type,
            deadline=evaluation.deadline,
            status=classification.status,
            label=label,
            description=description,
            countdown_text=classification.countdown_text,
            percentage=classification.percentage,
            is_overdue=classification.is_overdue,
            hours_remaining=classification.hours_remaining,
            minutes_remaining=classification.minutes_remaining,
            seconds_remaining=classification.seconds_remaining,
            escalation_tier=evaluation.escalation_tier,
            should_escalate=evaluation.should_escalate
        )


class SLASummary(BaseModel):
    """Counts per status for a classified snapshot."""
    total: int
    on_time: int = 0
    at_risk: int = 0
    overdue: int = 0
    completed: int = 0
    no_deadline: int = 0
    escalations: int = 0


class ClassifyResponse(BaseModel):
    """Response model for snapshot classification."""
    evaluated_at: datetime
    items: List[ItemSLAResponse]
    summary: SLASummary


class ComplianceResponse(BaseModel):
    """Response model for compliance statistics."""
    total_resolved: int
    on_time: int
    compliance_rate: float = Field(..., description="Percent resolved by deadline")
    average_resolution_hours: float

    @classmethod
    def from_report(cls, report: ComplianceReport) -> "ComplianceResponse":
        return cls(
            total_resolved=report.total_resolved,
            on_time=report.on_time,
            compliance_rate=report.compliance_rate,
            average_resolution_hours=report.average_resolution_hours
        )
