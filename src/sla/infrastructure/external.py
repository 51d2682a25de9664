"""
SLA External Service Integrations
==================================

External services for SLA tracking:
- YAML service level configuration, loaded once at startup
- APScheduler for periodic re-evaluation
"""

from pathlib import Path
from typing import Awaitable, Callable, Optional, Union

import yaml
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from pydantic import ValidationError

from core import ConfigurationException
from shared.infrastructure.logging import get_logger
from sla.application.services import ISLAConfigProvider
from sla.domain.value_objects import ServiceLevelConfig

logger = get_logger(__name__)


class StaticConfigProvider(ISLAConfigProvider):
    """Serves a configuration built in code (defaults, tests, embedding callers)."""

    def __init__(self, config: Optional[ServiceLevelConfig] = None):
        self._config = config or ServiceLevelConfig()

    def get_config(self) -> ServiceLevelConfig:
        return self._config


class YAMLConfigProvider(ISLAConfigProvider):
    """
    SLA configuration provider that loads from YAML.

    The file is read and validated once; a missing file falls back to the
    built-in service levels, a malformed one fails startup.
    """

    def __init__(self, config_path: Union[str, Path]):
        self._path = Path(config_path)
        self._config = self._load_from_file(self._path)

    @staticmethod
    def _load_from_file(path: Path) -> ServiceLevelConfig:
        """Load and validate YAML config file."""
        if not path.exists():
            logger.warning(f"SLA config file not found: {path}, using defaults")
            return ServiceLevelConfig()

        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Invalid YAML: {e}", source=str(path))

        if not isinstance(data, dict):
            raise ConfigurationException("Top level must be a mapping", source=str(path))

        try:
            config = ServiceLevelConfig(**data)
        except ValidationError as e:
            raise ConfigurationException(
                "Invalid SLA configuration",
                source=str(path),
                details={"errors": e.errors(include_url=False, include_context=False)}
            )

        logger.info(
            "SLA configuration loaded",
            extra={"path": str(path), "tiers": sorted(config.service_levels)}
        )
        return config

    @property
    def path(self) -> Path:
        return self._path

    def get_config(self) -> ServiceLevelConfig:
        """Get current SLA configuration."""
        return self._config


class SLAScheduler:
    """
    Wrapper for APScheduler for periodic snapshot re-evaluation.

    Manages the lifecycle of the scheduler and its single job.
    """

    def __init__(self, interval_seconds: int = 60):
        self.interval_seconds = interval_seconds
        self._scheduler: Optional[AsyncIOScheduler] = None
        self._running = False

    async def start(self, job_func: Callable[[], Awaitable[object]]) -> None:
        """Start the scheduler with the given job function."""
        if self._running:
            logger.warning("SLA scheduler already running")
            return

        self._scheduler = AsyncIOScheduler()

        # One run at a time; a slow run delays the next instead of overlapping
        self._scheduler.add_job(
            job_func,
            "interval",
            seconds=self.interval_seconds,
            id="sla_evaluation",
            name="SLA Evaluation Job",
            misfire_grace_time=60,
            max_instances=1,
            coalesce=True,
            replace_existing=True
        )

        self._scheduler.start()
        self._running = True

        logger.info(
            "SLA scheduler started",
            extra={"interval_seconds": self.interval_seconds}
        )

    async def stop(self) -> None:
        """Stop the scheduler gracefully."""
        if not self._running:
            return

        if self._scheduler:
            self._scheduler.shutdown(wait=False)

        self._running = False
        logger.info("SLA scheduler stopped")

    @property
    def is_running(self) -> bool:
        """Check if scheduler is running."""
        return self._running
