from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from main import create_app
from sla.application import SLAService
from sla.domain import DeadlineClock, ServiceLevelConfig
from sla.infrastructure import StaticConfigProvider
from workforce.application import WorkforceService


@pytest.fixture
def sla_config() -> ServiceLevelConfig:
    return ServiceLevelConfig()


@pytest.fixture
def config_provider(sla_config) -> StaticConfigProvider:
    return StaticConfigProvider(sla_config)


@pytest.fixture
def clock(sla_config) -> DeadlineClock:
    return DeadlineClock(sla_config)


@pytest.fixture
def sla_service(config_provider) -> SLAService:
    return SLAService(config_provider)


@pytest.fixture
def workforce_service(config_provider) -> WorkforceService:
    return WorkforceService(config_provider)


@pytest.fixture
def new_year() -> datetime:
    return datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def api_client(config_provider):
    app = create_app(config_provider=config_provider)
    with TestClient(app) as client:
        yield client
