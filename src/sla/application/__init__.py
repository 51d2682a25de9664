"""
SLA Application Layer
======================

Application layer for SLA tracking module.

Contains:
- Services: Orchestrate business logic over caller-supplied snapshots
- DTOs: Data transfer objects for API serialization

This layer depends on the domain layer and provider interfaces,
but not on concrete infrastructure implementations.
"""

from sla.application.dto import (
    GeoPointDTO,
    TrackedItemDTO,
    ClassifyRequest,
    ComplianceRequest,
    ItemSLAResponse,
    SLASummary,
    ClassifyResponse,
    ComplianceResponse,
)
from sla.application.services import (
    SLAService,
    ISLAConfigProvider,
)

__all__ = [
    # DTOs
    "GeoPointDTO",
    "TrackedItemDTO",
    "ClassifyRequest",
    "ComplianceRequest",
    "ItemSLAResponse",
    "SLASummary",
    "ClassifyResponse",
    "ComplianceResponse",
    # Services
    "SLAService",
    # Provider Interfaces
    "ISLAConfigProvider",
]
