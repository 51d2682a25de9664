"""
SLA Services
============

Snapshot re-evaluation across both bounded contexts.

Collaborators supply the snapshot (items, roster, assignments, escalation
state) and receive the decisions; this module only computes. Re-running on an
unchanged snapshot yields the same decisions, and escalations the caller has
already recorded are not sent again.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional

from core import ApplicationException
from shared.infrastructure.logging import get_logger, log_latency
from sla.application.services import ISLAConfigProvider, SLAService
from sla.domain import SLAEvaluation, TrackedItem
from workforce.application.services import WorkforceService
from workforce.domain import Assignment, AssignmentMove, StaffRecord

logger = get_logger(__name__)


class ISnapshotProvider(ABC):
    """Interface for the storage collaborator that hydrates a snapshot."""

    @abstractmethod
    async def get_open_items(self) -> List[TrackedItem]:
        """Complaints and tasks still in the active lifecycle."""

    @abstractmethod
    async def get_staff(self) -> List[StaffRecord]:
        """Active staff roster."""

    @abstractmethod
    async def get_active_assignments(self) -> List[Assignment]:
        """Items currently held by staff."""

    @abstractmethod
    async def get_notified_tiers(self) -> Mapping[str, str]:
        """Last escalation tier already notified, per item id."""


class IDecisionSink(ABC):
    """Interface for the collaborator that persists/dispatches decisions."""

    @abstractmethod
    async def publish_escalations(self, escalations: List[SLAEvaluation]) -> None:
        """Hand new escalations to the notification dispatcher."""

    @abstractmethod
    async def publish_moves(self, moves: List[AssignmentMove]) -> None:
        """Hand proposed moves to the atomic apply step."""


class SnapshotEvaluator:
    """
    Evaluates a full snapshot and forwards the resulting decisions.

    This service:
    1. Reads the snapshot from the provider
    2. Classifies every item and decides escalations
    3. Proposes rebalancing moves for the roster
    4. Publishes new escalations and moves to the sink
    """

    def __init__(
        self,
        config_provider: ISLAConfigProvider,
        snapshot_provider: ISnapshotProvider,
        decision_sink: IDecisionSink
    ):
        self._sla_service = SLAService(config_provider)
        self._workforce_service = WorkforceService(config_provider)
        self._snapshot_provider = snapshot_provider
        self._decision_sink = decision_sink

    async def run_once(self, now: Optional[datetime] = None) -> Dict[str, int]:
        """
        Evaluate the current snapshot.

        Returns:
            Summary of evaluation results
        """
        now = now or datetime.now(timezone.utc)

        items = await self._snapshot_provider.get_open_items()
        staff = await self._snapshot_provider.get_staff()
        assignments = await self._snapshot_provider.get_active_assignments()
        notified_tiers = await self._snapshot_provider.get_notified_tiers()

        with log_latency(logger, "snapshot_evaluation", items=len(items), staff=len(staff)):
            evaluations = self._sla_service.evaluate_items(items, now, notified_tiers)
            moves = self._workforce_service.rebalance(assignments, staff)

        escalations = [e for e in evaluations if e.should_escalate]

        if escalations:
            await self._decision_sink.publish_escalations(escalations)
        if moves:
            await self._decision_sink.publish_moves(moves)

        summary = self._sla_service.summarize(evaluations)
        return {
            "items_evaluated": summary["total"],
            "overdue": summary.get("overdue", 0),
            "at_risk": summary.get("at_risk", 0),
            "escalations_published": len(escalations),
            "moves_proposed": len(moves),
        }

    async def run_scheduled(self) -> Optional[Dict[str, int]]:
        """Scheduler entry point; a failed run is logged and retried next interval."""
        try:
            return await self.run_once()
        except ApplicationException as e:
            logger.error(
                "Snapshot evaluation failed",
                extra={"error_type": type(e).__name__, "error": e.message}
            )
            return None
