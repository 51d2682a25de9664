"""
Configuration Module
====================

Application settings and configuration management using Pydantic.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache
from pathlib import Path
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="sla-engine", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port", ge=1, le=65535)

    # ========== SLA Configuration ==========
    sla_config_path: Path = Field(
        default=Path("sla_config.yaml"),
        description="Path to service level / workload policy YAML file"
    )
    sla_evaluation_interval: int = Field(
        default=60,
        description="Seconds between periodic re-evaluations (0 disables)",
        ge=0
    )

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        description="Allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


# ========== Constants ==========

class Priority(str):
    """Complaint/task priority tiers."""
    EMERGENCY = "emergency"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    DEFAULT = "default"  # fallback service level for unknown priorities


class ItemType(str):
    """Kinds of tracked work items."""
    COMPLAINT = "complaint"
    TASK = "task"


class ItemStatus(str):
    """Complaint and task lifecycle statuses."""
    RECEIVED = "received"
    UNDER_REVIEW = "under_review"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    ESCALATED = "escalated"
    NOT_STARTED = "not_started"
    RESOLVED = "resolved"
    CLOSED = "closed"
    REJECTED = "rejected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SLAStatus(str):
    """Deadline classification states."""
    ON_TIME = "on_time"
    AT_RISK = "at_risk"
    OVERDUE = "overdue"
    COMPLETED = "completed"


class EscalationTier(str):
    """Organisational levels notified as breach risk increases."""
    SUPERVISOR = "supervisor"
    DEPARTMENT_HEAD = "department_head"
    CITY_ADMIN = "city_admin"


class AvailabilityStatus(str):
    """Staff availability states."""
    AVAILABLE = "available"
    BUSY = "busy"
    ON_BREAK = "on_break"
    OFF_DUTY = "off_duty"
    ON_LEAVE = "on_leave"


class SupervisorLevel(str):
    """Scope levels for supervisory jurisdiction."""
    WARD = "ward"
    DEPARTMENT = "department"
    COMBINED = "combined"
    SENIOR = "senior"


# ========== Lists for validation ==========

VALID_ITEM_TYPES = [ItemType.COMPLAINT, ItemType.TASK]
COMPLETED_STATUSES = [
    ItemStatus.RESOLVED, ItemStatus.CLOSED, ItemStatus.COMPLETED,
    ItemStatus.CANCELLED, ItemStatus.REJECTED
]
# Ascending order of seniority
ESCALATION_ORDER = [
    EscalationTier.SUPERVISOR,
    EscalationTier.DEPARTMENT_HEAD,
    EscalationTier.CITY_ADMIN
]
VALID_AVAILABILITY_STATUSES = [
    AvailabilityStatus.AVAILABLE, AvailabilityStatus.BUSY,
    AvailabilityStatus.ON_BREAK, AvailabilityStatus.OFF_DUTY,
    AvailabilityStatus.ON_LEAVE
]
VALID_SUPERVISOR_LEVELS = [
    SupervisorLevel.WARD, SupervisorLevel.DEPARTMENT,
    SupervisorLevel.COMBINED, SupervisorLevel.SENIOR
]
