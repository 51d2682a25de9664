"""
Workforce Controllers (API Routes)
==================================

FastAPI routes for staff suggestions and rebalancing.
"""

from fastapi import APIRouter, Depends

from sla.application import ISLAConfigProvider
from sla.interfaces.controllers import get_config_provider
from workforce.application import (
    WorkforceService,
    RankRequest,
    RankResponse,
    RankedStaffResponse,
    RebalanceRequest,
    RebalanceResponse,
    AssignmentMoveResponse,
    WorkloadSummaryRequest,
    WorkloadSummaryResponse,
)

router = APIRouter(prefix="/workforce", tags=["Workforce Balancing"])


async def get_workforce_service(
    config_provider: ISLAConfigProvider = Depends(get_config_provider)
) -> WorkforceService:
    """Get workforce service instance."""
    return WorkforceService(config_provider)


@router.post(
    "/rank",
    response_model=RankResponse,
    summary="Rank staff for an assignment",
    description="""
    Order candidate staff: available first, then lowest capacity utilisation,
    then nearest to `target_location` when both locations are known.
    Unavailable staff are still returned, after available staff.
    When `jurisdiction` is given, out-of-scope staff are dropped first.
    """
)
async def rank_staff(
    payload: RankRequest,
    service: WorkforceService = Depends(get_workforce_service)
):
    ranked = service.suggest_staff(
        [s.to_domain() for s in payload.staff],
        target_location=payload.target_location.to_domain() if payload.target_location else None,
        jurisdiction=payload.jurisdiction.to_domain() if payload.jurisdiction else None
    )
    return RankResponse(staff=[RankedStaffResponse.from_domain(r) for r in ranked])


@router.post(
    "/rebalance",
    response_model=RebalanceResponse,
    summary="Propose reassignments away from overloaded staff",
    description="""
    Staff at or above 80% capacity give up to 2 assignments each, spread
    round-robin over available staff below 50%. Moves are advisory: apply
    each one with a conditional update on the assignment's current staff.
    """
)
async def rebalance(
    payload: RebalanceRequest,
    service: WorkforceService = Depends(get_workforce_service)
):
    moves = service.rebalance(
        [a.to_domain() for a in payload.assignments],
        [s.to_domain() for s in payload.staff],
        jurisdiction=payload.jurisdiction.to_domain() if payload.jurisdiction else None
    )
    return RebalanceResponse(
        moves=[AssignmentMoveResponse.from_domain(m) for m in moves],
        total_moves=len(moves)
    )


@router.post(
    "/summary",
    response_model=WorkloadSummaryResponse,
    summary="Roster load statistics"
)
async def workload_summary(
    payload: WorkloadSummaryRequest,
    service: WorkforceService = Depends(get_workforce_service)
):
    summary = service.workload_summary(
        [s.to_domain() for s in payload.staff],
        jurisdiction=payload.jurisdiction.to_domain() if payload.jurisdiction else None
    )
    return WorkloadSummaryResponse.from_domain(summary)
