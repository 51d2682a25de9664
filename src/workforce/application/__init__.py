"""
Workforce Application Layer
===========================

Contains:
- Services: WorkforceService
- DTOs: Data transfer objects for API serialization
"""

from workforce.application.dto import (
    StaffRecordDTO,
    JurisdictionDTO,
    AssignmentDTO,
    RankRequest,
    RebalanceRequest,
    WorkloadSummaryRequest,
    RankedStaffResponse,
    RankResponse,
    AssignmentMoveResponse,
    RebalanceResponse,
    WorkloadSummaryResponse,
)
from workforce.application.services import WorkforceService

__all__ = [
    # DTOs
    "StaffRecordDTO",
    "JurisdictionDTO",
    "AssignmentDTO",
    "RankRequest",
    "RebalanceRequest",
    "WorkloadSummaryRequest",
    "RankedStaffResponse",
    "RankResponse",
    "AssignmentMoveResponse",
    "RebalanceResponse",
    "WorkloadSummaryResponse",
    # Services
    "WorkforceService",
]
