"""
SLA Domain Layer
================

Domain layer for SLA tracking module.

Contains:
- Entities: TrackedItem and the results computed for it
- Value Objects: Immutable configuration (ServiceLevelConfig and friends)
- Domain Services: Stateless business logic (DeadlineClock, EscalationEvaluator)

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from sla.domain.entities import (
    TrackedItem,
    DeadlineClassification,
    SLAEvaluation,
    ComplianceReport,
    as_utc,
)
from sla.domain.value_objects import (
    DEFAULT_SERVICE_LEVELS,
    ServiceLevelEntry,
    EscalationThresholds,
    WorkloadPolicy,
    ServiceLevelConfig,
    DeadlineClock,
    EscalationEvaluator,
)

__all__ = [
    # Entities
    "TrackedItem",
    "DeadlineClassification",
    "SLAEvaluation",
    "ComplianceReport",
    # Value Objects & Services
    "DEFAULT_SERVICE_LEVELS",
    "ServiceLevelEntry",
    "EscalationThresholds",
    "WorkloadPolicy",
    "ServiceLevelConfig",
    "DeadlineClock",
    "EscalationEvaluator",
    "as_utc",
]
