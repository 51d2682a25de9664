"""
SLA Controllers (API Routes)
=============================

FastAPI routes for SLA tracking endpoints.

Controllers are thin - they delegate to application services.
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from sla.application import (
    SLAService,
    ISLAConfigProvider,
    ClassifyRequest,
    ClassifyResponse,
    ComplianceRequest,
    ComplianceResponse,
    ItemSLAResponse,
    SLASummary,
)
from shared.infrastructure.logging import get_context_logger

router = APIRouter(prefix="/sla", tags=["SLA Tracking"])


# ========== Example payloads for Swagger ==========

CLASSIFY_REQUEST_EXAMPLE = {
    "items": [
        {
            "id": "CMP-1042",
            "item_type": "complaint",
            "priority": "high",
            "submitted_at": "2024-01-01T00:00:00Z",
            "status": "in_progress",
            "ward_id": "W1",
            "department_id": "D3"
        }
    ],
    "now": "2024-01-01T21:00:00Z",
    "notified_tiers": {}
}

CLASSIFY_RESPONSE_EXAMPLE = {
    "evaluated_at": "2024-01-01T21:00:00Z",
    "items": [
        {
            "item_id": "CMP-1042",
            "item_type": "complaint",
            "deadline": "2024-01-02T00:00:00Z",
            "status": "at_risk",
            "label": "At Risk",
            "description": "Approaching SLA deadline",
            "countdown_text": "3h 0m",
            "percentage": 87.5,
            "is_overdue": False,
            "hours_remaining": 3,
            "minutes_remaining": 0,
            "seconds_remaining": 0,
            "escalation_tier": "supervisor",
            "should_escalate": True
        }
    ],
    "summary": {
        "total": 1, "on_time": 0, "at_risk": 1, "overdue": 0,
        "completed": 0, "no_deadline": 0, "escalations": 1
    }
}


# ========== Dependencies ==========

async def get_config_provider(request: Request) -> ISLAConfigProvider:
    """Configuration provider created at startup."""
    return request.app.state.config_provider


async def get_sla_service(
    config_provider: ISLAConfigProvider = Depends(get_config_provider)
) -> SLAService:
    """Get SLA service instance."""
    return SLAService(config_provider)


# ========== Route Handlers ==========

@router.post(
    "/classify",
    response_model=ClassifyResponse,
    summary="Classify items against their SLA deadlines",
    description="""
    Classify a snapshot of complaints/tasks and decide escalations.

    **Priorities**: `emergency`, `high`, `medium`, `low`; anything else uses
    the `default` service level. Items without a priority have no deadline.

    **Statuses**: `on_time`, `at_risk` (under 4 hours left), `overdue`, `completed`

    **Escalation tiers**: `supervisor` (85% elapsed), `department_head` (95%),
    `city_admin` (100%). `should_escalate` is true only when the tier outranks
    the one given in `notified_tiers` for that item.
    """,
    responses={
        200: {
            "description": "Classification per item",
            "content": {"application/json": {"example": CLASSIFY_RESPONSE_EXAMPLE}}
        }
    }
)
async def classify_items(
    payload: ClassifyRequest,
    request: Request,
    sla_service: SLAService = Depends(get_sla_service)
):
    logger = get_context_logger(__name__, getattr(request.state, "correlation_id", None))
    start_time = time.perf_counter()

    now = payload.now or datetime.now(timezone.utc)
    items = [dto.to_domain() for dto in payload.items]

    evaluations = sla_service.evaluate_items(items, now, payload.notified_tiers)
    counts = sla_service.summarize(evaluations)

    logger.info(
        "Classification request served",
        extra={
            "items": len(items),
            "escalations": counts["escalations"],
            "processing_time_ms": int((time.perf_counter() - start_time) * 1000)
        }
    )

    return ClassifyResponse(
        evaluated_at=now,
        items=[ItemSLAResponse.from_evaluation(e) for e in evaluations],
        summary=SLASummary(**counts)
    )


@router.post(
    "/compliance",
    response_model=ComplianceResponse,
    summary="Resolution compliance",
    description="Share of resolved items that were resolved by their deadline."
)
async def compliance(
    payload: ComplianceRequest,
    sla_service: SLAService = Depends(get_sla_service)
):
    report = sla_service.compliance([dto.to_domain() for dto in payload.items])
    return ComplianceResponse.from_report(report)


@router.get(
    "/config",
    summary="Active service levels",
    description="Service level entries, escalation thresholds and workload policy in effect."
)
async def get_config(sla_service: SLAService = Depends(get_sla_service)):
    return sla_service.config.model_dump()
