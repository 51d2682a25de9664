"""
SLA Value Objects
==================

Immutable value objects and stateless domain services for the SLA domain.

Value objects are defined by their attributes rather than an identity.
They are immutable and can be freely shared.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from config import (
    Priority, SLAStatus, EscalationTier, ESCALATION_ORDER
)
from core import SLAExtensionLimitExceeded
from sla.domain.entities import DeadlineClassification, TrackedItem, as_utc


# Hours per priority tier; also used to fill tiers missing from a YAML file.
DEFAULT_SERVICE_LEVELS: Dict[str, Dict[str, float]] = {
    Priority.EMERGENCY: {"response_hours": 1, "resolution_hours": 4,
                         "max_extensions": 1, "extension_hours": 2},
    Priority.HIGH: {"response_hours": 4, "resolution_hours": 24,
                    "max_extensions": 2, "extension_hours": 12},
    Priority.MEDIUM: {"response_hours": 24, "resolution_hours": 72,
                      "max_extensions": 2, "extension_hours": 24},
    Priority.LOW: {"response_hours": 48, "resolution_hours": 168,
                   "max_extensions": 3, "extension_hours": 48},
    Priority.DEFAULT: {"response_hours": 24, "resolution_hours": 48,
                       "max_extensions": 2, "extension_hours": 24},
}

STATUS_DESCRIPTIONS: Dict[str, Tuple[str, str]] = {
    SLAStatus.ON_TIME: ("On Track", "SLA on track"),
    SLAStatus.AT_RISK: ("At Risk", "Approaching SLA deadline"),
    SLAStatus.OVERDUE: ("Overdue", "SLA deadline has passed"),
    SLAStatus.COMPLETED: ("Completed", "SLA completed"),
}


class ServiceLevelEntry(BaseModel):
    """Response/resolution windows and extension allowance for one tier."""
    model_config = ConfigDict(frozen=True)

    response_hours: float = Field(gt=0, description="Hours to first response")
    resolution_hours: float = Field(gt=0, description="Hours to resolution")
    max_extensions: int = Field(default=0, ge=0, description="Deadline extensions allowed")
    extension_hours: float = Field(default=0, ge=0, description="Hours added per extension")


class EscalationThresholds(BaseModel):
    """Percent-elapsed thresholds per escalation tier."""
    model_config = ConfigDict(frozen=True)

    supervisor: float = Field(default=85.0, gt=0)
    department_head: float = Field(default=95.0, gt=0)
    city_admin: float = Field(default=100.0, gt=0)

    @model_validator(mode="after")
    def validate_ascending(self) -> "EscalationThresholds":
        if not self.supervisor < self.department_head < self.city_admin:
            raise ValueError(
                "escalation thresholds must be strictly ascending: "
                "supervisor < department_head < city_admin"
            )
        return self

    def ordered(self) -> List[Tuple[str, float]]:
        """Tiers paired with thresholds, lowest first."""
        return [
            (EscalationTier.SUPERVISOR, self.supervisor),
            (EscalationTier.DEPARTMENT_HEAD, self.department_head),
            (EscalationTier.CITY_ADMIN, self.city_admin),
        ]


class WorkloadPolicy(BaseModel):
    """Capacity thresholds used by the workforce balancer."""
    model_config = ConfigDict(frozen=True)

    overload_threshold: float = Field(default=80.0, gt=0, description="Percent at or above which staff are overloaded")
    target_threshold: float = Field(default=50.0, gt=0, description="Percent below which available staff can take work")
    max_moves_per_source: int = Field(default=2, ge=1, description="Assignments moved off one overloaded member per run")

    @model_validator(mode="after")
    def validate_thresholds(self) -> "WorkloadPolicy":
        if self.target_threshold >= self.overload_threshold:
            raise ValueError("target_threshold must be below overload_threshold")
        return self


class ServiceLevelConfig(BaseModel):
    """
    Service level configuration loaded from YAML.

    Validated once at startup and injected into the clock, the escalation
    evaluator and the workforce services. A `default` tier always exists.
    """
    model_config = ConfigDict(frozen=True)

    service_levels: Dict[str, ServiceLevelEntry] = Field(
        default_factory=dict,
        validate_default=True,
        description="Service level entry per priority tier"
    )
    escalation_thresholds: EscalationThresholds = Field(default_factory=EscalationThresholds)
    workload: WorkloadPolicy = Field(default_factory=WorkloadPolicy)
    at_risk_hours: float = Field(
        default=4, gt=0,
        description="Items with fewer whole hours remaining are at risk"
    )
    reference_window_hours: float = Field(
        default=72, gt=0,
        description="Window used for progress when the item's own window is unknown"
    )

    @field_validator("service_levels", mode="before")
    @classmethod
    def fill_missing_tiers(cls, v: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Merge configured tiers over the built-in table."""
        if v is not None and not isinstance(v, dict):
            raise ValueError("service_levels must be a mapping of priority to entry")

        merged: Dict[str, Any] = {k: dict(e) for k, e in DEFAULT_SERVICE_LEVELS.items()}

        for priority, entry in (v or {}).items():
            key = str(priority).lower()
            if isinstance(entry, dict) and key in merged:
                merged[key] = {**merged[key], **entry}
            else:
                merged[key] = entry

        return merged

    def entry_for(self, priority: Optional[str]) -> ServiceLevelEntry:
        """Service level for a priority, falling back to `default`."""
        if priority:
            entry = self.service_levels.get(priority.lower())
            if entry is not None:
                return entry
        return self.service_levels[Priority.DEFAULT]

    def resolution_window(self, priority: Optional[str]) -> float:
        """Resolution window in hours."""
        return self.entry_for(priority).resolution_hours

    def response_window(self, priority: Optional[str]) -> float:
        """Response window in hours."""
        return self.entry_for(priority).response_hours


class DeadlineClock:
    """
    Computes deadlines and classifies the current time against them.

    Stateless apart from the injected configuration; every method is a pure
    function of its arguments.
    """

    def __init__(self, config: ServiceLevelConfig):
        self._config = config

    def compute_deadline(self, priority: Optional[str], submitted_at: datetime) -> datetime:
        """Resolution deadline: submitted_at + resolution window."""
        hours = self._config.resolution_window(priority)
        return as_utc(submitted_at) + timedelta(hours=hours)

    def compute_response_deadline(self, priority: Optional[str], submitted_at: datetime) -> datetime:
        """First-response deadline: submitted_at + response window."""
        hours = self._config.response_window(priority)
        return as_utc(submitted_at) + timedelta(hours=hours)

    def deadline_for(self, item: TrackedItem) -> Optional[datetime]:
        """
        Deadline for an item.

        A stored `sla_due_at` wins; a missing one is recomputed, including any
        extensions already granted. Only an item without a priority has no
        deadline.
        """
        if item.sla_due_at is not None:
            return as_utc(item.sla_due_at)
        if item.priority is None:
            return None

        entry = self._config.entry_for(item.priority)
        return self.compute_deadline(item.priority, item.submitted_at) + timedelta(
            hours=item.extensions_used * entry.extension_hours
        )

    def extend_deadline(
        self,
        deadline: datetime,
        priority: Optional[str],
        extensions_used: int
    ) -> datetime:
        """
        Push a deadline out by one extension.

        Raises:
            SLAExtensionLimitExceeded: the tier's allowance is used up
        """
        entry = self._config.entry_for(priority)
        if extensions_used >= entry.max_extensions:
            raise SLAExtensionLimitExceeded(
                priority or Priority.DEFAULT, entry.max_extensions, extensions_used
            )
        return as_utc(deadline) + timedelta(hours=entry.extension_hours)

    def classify(
        self,
        deadline: datetime,
        now: datetime,
        completed: bool = False,
        window_hours: Optional[float] = None
    ) -> DeadlineClassification:
        """
        Classify `now` against a deadline.

        Args:
            deadline: The SLA deadline
            now: Evaluation time
            completed: Item already finished
            window_hours: Total window for the progress percentage; the
                reference window is used when not given

        Returns:
            DeadlineClassification
        """
        if completed:
            return DeadlineClassification(
                status=SLAStatus.COMPLETED,
                hours_remaining=0,
                minutes_remaining=0,
                seconds_remaining=0,
                is_overdue=False,
                percentage=100.0,
                countdown_text=self.format_countdown(deadline, now, completed=True)
            )

        deadline = as_utc(deadline)
        now = as_utc(now)

        if deadline <= now:
            return DeadlineClassification(
                status=SLAStatus.OVERDUE,
                hours_remaining=0,
                minutes_remaining=0,
                seconds_remaining=0,
                is_overdue=True,
                percentage=100.0,
                countdown_text=self.format_countdown(deadline, now)
            )

        diff = (deadline - now).total_seconds()
        window = (window_hours or self._config.reference_window_hours) * 3600
        elapsed = window - diff
        percentage = min(100.0, max(0.0, elapsed / window * 100))

        hours = int(diff // 3600)
        minutes = int((diff % 3600) // 60)
        seconds = int(diff % 60)

        status = SLAStatus.AT_RISK if hours < self._config.at_risk_hours else SLAStatus.ON_TIME

        return DeadlineClassification(
            status=status,
            hours_remaining=hours,
            minutes_remaining=minutes,
            seconds_remaining=seconds,
            is_overdue=False,
            percentage=round(percentage, 2),
            countdown_text=self._format_remaining(hours, minutes)
        )

    def format_countdown(
        self,
        deadline: datetime,
        now: datetime,
        completed: bool = False
    ) -> str:
        """Human countdown: '2d 3h', '5h 12m', 'Overdue by 6h' or 'Completed'."""
        if completed:
            return "Completed"

        diff = (as_utc(deadline) - as_utc(now)).total_seconds()
        if diff <= 0:
            return f"Overdue by {int(abs(diff) // 3600)}h"

        return self._format_remaining(int(diff // 3600), int((diff % 3600) // 60))

    @staticmethod
    def _format_remaining(hours: int, minutes: int) -> str:
        if hours < 24:
            return f"{hours}h {minutes}m"
        return f"{hours // 24}d {hours % 24}h"

    @staticmethod
    def describe(status: str) -> Tuple[str, str]:
        """Display label and description for a status."""
        return STATUS_DESCRIPTIONS.get(status, STATUS_DESCRIPTIONS[SLAStatus.ON_TIME])


class EscalationEvaluator:
    """
    Maps percentage elapsed to the escalation tier that should be notified.

    Pure classifier: which tier was last notified per item is tracked by the
    caller and compared with `should_fire`.
    """

    _RANK = {tier: index for index, tier in enumerate(ESCALATION_ORDER)}

    def __init__(self, thresholds: EscalationThresholds):
        self._thresholds = thresholds.ordered()

    def evaluate(self, percentage_elapsed: Optional[float]) -> Optional[str]:
        """Highest tier whose threshold has been crossed, or None."""
        if percentage_elapsed is None:
            return None

        tier = None
        for candidate, threshold in self._thresholds:
            if percentage_elapsed >= threshold:
                tier = candidate
        return tier

    @classmethod
    def should_fire(
        cls,
        current_tier: Optional[str],
        last_notified_tier: Optional[str] = None
    ) -> bool:
        """True when the current tier outranks the last one notified."""
        if current_tier is None:
            return False
        if last_notified_tier is None:
            return True
        return cls._RANK[current_tier] > cls._RANK.get(last_notified_tier, -1)
