"""
SLA Infrastructure Layer
=========================

Infrastructure implementations for SLA tracking:
- Config providers: YAML file and in-code configuration
- Scheduler: APScheduler wrapper for periodic re-evaluation
"""

from sla.infrastructure.external import (
    StaticConfigProvider,
    YAMLConfigProvider,
    SLAScheduler,
)

__all__ = [
    "StaticConfigProvider",
    "YAMLConfigProvider",
    "SLAScheduler",
]
