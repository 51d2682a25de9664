"""
Workforce Application Services
==============================

Coordinates jurisdiction scoping, ranking and balancing for callers that
hold a roster snapshot.
"""

from typing import List, Optional, Sequence

from sla.application.services import ISLAConfigProvider
from shared.geo import GeoPoint
from shared.infrastructure.logging import get_logger, log_latency
from workforce.domain import (
    Assignment,
    AssignmentMove,
    Jurisdiction,
    JurisdictionGate,
    RankedStaff,
    StaffRanker,
    StaffRecord,
    WorkloadBalancer,
    WorkloadSummary,
)

logger = get_logger(__name__)


class WorkforceService:
    """
    Staff suggestions and rebalancing scoped to a supervisor.

    A `None` jurisdiction means the caller has already scoped the roster.
    """

    def __init__(self, config_provider: ISLAConfigProvider):
        self._config_provider = config_provider

    def _ranker(self) -> StaffRanker:
        return StaffRanker(self._config_provider.get_config().workload)

    def _balancer(self) -> WorkloadBalancer:
        return WorkloadBalancer(self._config_provider.get_config().workload)

    @staticmethod
    def scope_roster(
        jurisdiction: Optional[Jurisdiction],
        staff: Sequence[StaffRecord]
    ) -> List[StaffRecord]:
        if jurisdiction is None:
            return list(staff)
        return JurisdictionGate.filter_roster(jurisdiction, staff)

    def suggest_staff(
        self,
        staff: Sequence[StaffRecord],
        target_location: Optional[GeoPoint] = None,
        jurisdiction: Optional[Jurisdiction] = None
    ) -> List[RankedStaff]:
        """Rank in-scope staff for an assignment decision."""
        roster = self.scope_roster(jurisdiction, staff)
        ranked = self._ranker().rank(roster, target_location)

        logger.debug(
            "Staff ranked",
            extra={
                "candidates": len(roster),
                "available": sum(1 for r in ranked if r.is_available),
                "with_distance": sum(1 for r in ranked if r.distance_km is not None),
            }
        )
        return ranked

    def rebalance(
        self,
        assignments: Sequence[Assignment],
        staff: Sequence[StaffRecord],
        jurisdiction: Optional[Jurisdiction] = None
    ) -> List[AssignmentMove]:
        """
        Propose moves among in-scope staff.

        Assignments held by out-of-scope staff are left alone.
        """
        roster = self.scope_roster(jurisdiction, staff)
        in_scope = {s.user_id for s in roster}
        scoped_assignments = [a for a in assignments if a.staff_id in in_scope]

        with log_latency(logger, "rebalance", staff=len(roster), assignments=len(scoped_assignments)):
            moves = self._balancer().rebalance(scoped_assignments, roster)

        logger.info(
            "Rebalancing proposed",
            extra={
                "moves": len(moves),
                "sources": len({m.from_staff_id for m in moves}),
                "targets": len({m.to_staff_id for m in moves}),
            }
        )
        return moves

    def workload_summary(
        self,
        staff: Sequence[StaffRecord],
        jurisdiction: Optional[Jurisdiction] = None
    ) -> WorkloadSummary:
        return self._balancer().summarize(self.scope_roster(jurisdiction, staff))

    def check_capacity(self, staff: StaffRecord):
        """(is_overloaded, display percentage) for one staff member."""
        return self._ranker().check_capacity(staff)
