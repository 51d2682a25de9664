"""
SLA Application Services
=========================

Application services orchestrate business logic and coordinate between
domain entities and collaborators.

Following SOLID principles:
- Single Responsibility: Each service has one clear purpose
- Dependency Inversion: Depend on abstractions (providers), not concrete implementations
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional, Sequence

from sla.domain import (
    TrackedItem, DeadlineClassification, SLAEvaluation, ComplianceReport,
    DeadlineClock, EscalationEvaluator, ServiceLevelConfig, as_utc
)
from shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


# ========== Provider Interfaces (Dependency Inversion) ==========

class ISLAConfigProvider(ABC):
    """Interface for SLA configuration access."""

    @abstractmethod
    def get_config(self) -> ServiceLevelConfig:
        """Get current SLA configuration."""


# ========== Application Services ==========

class SLAService:
    """
    Classifies items against their deadlines and decides escalations.

    Works on snapshots handed in by the caller; nothing is persisted here.
    """

    def __init__(self, config_provider: ISLAConfigProvider):
        self._config_provider = config_provider

    @property
    def config(self) -> ServiceLevelConfig:
        return self._config_provider.get_config()

    def clock(self) -> DeadlineClock:
        return DeadlineClock(self.config)

    def escalation_evaluator(self) -> EscalationEvaluator:
        return EscalationEvaluator(self.config.escalation_thresholds)

    def item_window_hours(self, item: TrackedItem) -> float:
        """Resolution window plus any extensions already granted."""
        entry = self.config.entry_for(item.priority)
        return entry.resolution_hours + item.extensions_used * entry.extension_hours

    def classify_item(
        self,
        item: TrackedItem,
        now: Optional[datetime] = None
    ) -> Optional[DeadlineClassification]:
        """
        Classify one item.

        Progress is measured against the item's own window.

        Returns:
            DeadlineClassification, or None when the item has no priority
        """
        clock = self.clock()
        deadline = clock.deadline_for(item)
        if deadline is None:
            return None

        return clock.classify(
            deadline,
            now or datetime.now(timezone.utc),
            completed=item.is_completed,
            window_hours=self.item_window_hours(item)
        )

    def evaluate_item(
        self,
        item: TrackedItem,
        now: Optional[datetime] = None,
        last_notified_tier: Optional[str] = None
    ) -> SLAEvaluation:
        """Classify an item and decide whether a new escalation should fire."""
        now = now or datetime.now(timezone.utc)
        deadline = self.clock().deadline_for(item)
        classification = self.classify_item(item, now)

        tier = None
        if classification is not None and not item.is_completed:
            tier = self.escalation_evaluator().evaluate(classification.percentage)

        return SLAEvaluation(
            item_id=item.id,
            item_type=item.item_type,
            deadline=deadline,
            classification=classification,
            escalation_tier=tier,
            should_escalate=EscalationEvaluator.should_fire(tier, last_notified_tier)
        )

    def evaluate_items(
        self,
        items: Sequence[TrackedItem],
        now: Optional[datetime] = None,
        notified_tiers: Optional[Mapping[str, str]] = None
    ) -> List[SLAEvaluation]:
        """
        Evaluate a snapshot.

        Args:
            items: Items to evaluate
            now: Evaluation time (defaults to current UTC time)
            notified_tiers: Last tier already notified, per item id

        Returns:
            One SLAEvaluation per item, in input order
        """
        now = now or datetime.now(timezone.utc)
        notified_tiers = notified_tiers or {}

        evaluations = [
            self.evaluate_item(item, now, notified_tiers.get(item.id))
            for item in items
        ]

        logger.info(
            "SLA snapshot evaluated",
            extra={
                "items_evaluated": len(evaluations),
                "escalations": sum(1 for e in evaluations if e.should_escalate),
                "overdue": sum(
                    1 for e in evaluations
                    if e.classification is not None and e.classification.is_overdue
                ),
            }
        )
        return evaluations

    def summarize(self, evaluations: Sequence[SLAEvaluation]) -> Dict[str, int]:
        """Count evaluations per status."""
        counts = {"total": len(evaluations), "no_deadline": 0, "escalations": 0}
        for evaluation in evaluations:
            if evaluation.classification is None:
                counts["no_deadline"] += 1
            else:
                status = evaluation.classification.status
                counts[status] = counts.get(status, 0) + 1
            if evaluation.should_escalate:
                counts["escalations"] += 1
        return counts

    def compliance(self, items: Sequence[TrackedItem]) -> ComplianceReport:
        """
        Share of resolved items that finished by their deadline.

        Items without a resolution time or without a deadline are ignored.
        A set with nothing resolved counts as fully compliant.
        """
        clock = self.clock()
        on_time = 0
        durations: List[float] = []

        for item in items:
            if item.resolved_at is None:
                continue
            deadline = clock.deadline_for(item)
            if deadline is None:
                continue

            resolved_at = as_utc(item.resolved_at)
            durations.append((resolved_at - as_utc(item.submitted_at)).total_seconds() / 3600)
            if resolved_at <= deadline:
                on_time += 1

        total = len(durations)
        return ComplianceReport(
            total_resolved=total,
            on_time=on_time,
            compliance_rate=round(on_time / total * 100, 1) if total else 100.0,
            average_resolution_hours=round(sum(durations) / total, 1) if total else 0.0
        )
