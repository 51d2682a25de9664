"""
SLA Domain Entities
====================

Pure Python domain entities for SLA tracking.

Following Domain-Driven Design principles, these entities contain
business logic and are free of infrastructure concerns.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from config import ItemType, COMPLETED_STATUSES, VALID_ITEM_TYPES
from shared.geo import GeoPoint


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class TrackedItem:
    """
    A complaint or task under an SLA.

    Snapshot of a record owned by external storage; the engine only reads it.
    """

    id: str
    priority: Optional[str]
    submitted_at: datetime
    status: str
    ward_id: Optional[str] = None
    department_id: Optional[str] = None
    item_type: str = ItemType.COMPLAINT
    assigned_staff_id: Optional[str] = None
    sla_due_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    location: Optional[GeoPoint] = None
    extensions_used: int = 0

    def __post_init__(self):
        """Validate item on initialization."""
        if self.item_type not in VALID_ITEM_TYPES:
            raise ValueError(f"item_type must be one of {VALID_ITEM_TYPES}")

        if self.resolved_at and as_utc(self.resolved_at) < as_utc(self.submitted_at):
            raise ValueError("resolved_at cannot be before submitted_at")

        if self.extensions_used < 0:
            raise ValueError("extensions_used cannot be negative")

    @property
    def is_completed(self) -> bool:
        """Check if the item has left the active lifecycle."""
        return self.status in COMPLETED_STATUSES


@dataclass(frozen=True)
class DeadlineClassification:
    """Where `now` sits relative to a deadline."""
    status: str
    hours_remaining: int
    minutes_remaining: int
    seconds_remaining: int
    is_overdue: bool
    percentage: float
    countdown_text: str


@dataclass(frozen=True)
class SLAEvaluation:
    """
    Classification plus escalation decision for one item.

    `deadline` and `classification` are None when the item has no priority.
    """
    item_id: str
    item_type: str
    deadline: Optional[datetime]
    classification: Optional[DeadlineClassification]
    escalation_tier: Optional[str]
    should_escalate: bool

    def to_dict(self) -> dict:
        """Convert to dictionary for logging and sinks."""
        classification = self.classification
        return {
            "item_id": self.item_id,
            "item_type": self.item_type,
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "status": classification.status if classification else None,
            "percentage": classification.percentage if classification else None,
            "is_overdue": classification.is_overdue if classification else False,
            "escalation_tier": self.escalation_tier,
            "should_escalate": self.should_escalate,
        }


@dataclass(frozen=True)
class ComplianceReport:
    """Resolution compliance over a set of items."""
    total_resolved: int
    on_time: int
    compliance_rate: float
    average_resolution_hours: float
