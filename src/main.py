"""
SLA Engine - Main Application
=============================

Deadline tracking and workforce balancing for municipal complaint handling.

Modules:
- SLA Tracking: Deadlines, at-risk/overdue classification and escalation
- Workforce Balancing: Jurisdiction scoping, staff ranking and rebalancing

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Services and DTOs
- Domain: Entities and value objects
- Infrastructure: YAML configuration, scheduler
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# Configuration and Core
from config import settings
from core import ApplicationException

# SLA Module
from sla.application import ISLAConfigProvider
from sla.infrastructure import YAMLConfigProvider, SLAScheduler
from sla.services import ISnapshotProvider, IDecisionSink, SnapshotEvaluator

# Module Routers
from sla.interfaces import sla_router
from workforce.interfaces import workforce_router

# Middleware
from shared.api.middleware import (
    CorrelationIDMiddleware,
    LoggingMiddleware,
    application_exception_handler,
    global_exception_handler
)

# Logging
from shared.infrastructure.logging import setup_logging, get_logger

logger = get_logger(__name__)


def create_app(
    config_provider: Optional[ISLAConfigProvider] = None,
    snapshot_provider: Optional[ISnapshotProvider] = None,
    decision_sink: Optional[IDecisionSink] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config_provider: Service level configuration; loaded from
            settings.sla_config_path when omitted
        snapshot_provider: Storage collaborator for periodic re-evaluation
        decision_sink: Receiver of escalations and proposed moves

    The scheduler only runs when both collaborators are supplied and
    settings.sla_evaluation_interval is positive.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator:
        """
        Application lifespan manager.

        STARTUP:
        1. Setup structured logging
        2. Load SLA configuration
        3. Start SLA scheduler (when collaborators are wired)

        SHUTDOWN:
        1. Stop SLA scheduler
        """
        # === STARTUP ===
        setup_logging(settings.log_level, settings.environment)
        logger.info("Starting SLA Engine", extra={
            "version": settings.app_version,
            "environment": settings.environment
        })

        provider = config_provider
        if provider is None:
            logger.info("Loading SLA configuration")
            provider = YAMLConfigProvider(settings.sla_config_path)

        app.state.settings = settings
        app.state.config_provider = provider

        scheduler = None
        if snapshot_provider and decision_sink and settings.sla_evaluation_interval > 0:
            evaluator = SnapshotEvaluator(provider, snapshot_provider, decision_sink)
            scheduler = SLAScheduler(interval_seconds=settings.sla_evaluation_interval)
            await scheduler.start(evaluator.run_scheduled)
        else:
            logger.info("SLA scheduler disabled - no snapshot collaborators configured")
        app.state.scheduler = scheduler

        logger.info("SLA Engine started successfully")

        yield  # Application runs here

        # === SHUTDOWN ===
        logger.info("Shutting down SLA Engine")

        if scheduler:
            await scheduler.stop()

        logger.info("SLA Engine shutdown complete")

    app = FastAPI(
        title="SLA Engine API",
        description="""
    ## Deadline Tracking and Workforce Balancing

    Stateless decision engine for complaint and task handling: callers send a
    snapshot, the engine answers with classifications, escalations and moves.

    ---

    ### SLA Tracking Module

    **Endpoints:**
    - `POST /sla/classify` - Classify items and decide escalations
    - `POST /sla/compliance` - Share of items resolved on time
    - `GET /sla/config` - Active service levels

    **Service Levels (hours):**

    | Priority  | Response | Resolution | Extensions |
    |-----------|----------|------------|------------|
    | Emergency | 1        | 4          | 1 x 2h     |
    | High      | 4        | 24         | 2 x 12h    |
    | Medium    | 24       | 72         | 2 x 24h    |
    | Low       | 48       | 168        | 3 x 48h    |
    | Default   | 24       | 48         | 2 x 24h    |

    ---

    ### Workforce Balancing Module

    **Endpoints:**
    - `POST /workforce/rank` - Rank staff by availability, load and distance
    - `POST /workforce/rebalance` - Propose moves away from overloaded staff
    - `POST /workforce/summary` - Roster load statistics
    """,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    # === CORS Middleware ===
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # === Custom Middleware (from shared) ===
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(CorrelationIDMiddleware)
    app.add_exception_handler(ApplicationException, application_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # === Include Module Routers ===
    app.include_router(sla_router)
    app.include_router(workforce_router)

    # === Health Check Endpoint ===

    @app.get("/health", tags=["Health"], responses={
        200: {
            "description": "Service is healthy",
            "content": {
                "application/json": {
                    "example": {
                        "status": "healthy",
                        "version": "1.0.0",
                        "environment": "development",
                        "checks": {
                            "sla_config": "loaded",
                            "sla_scheduler": "running"
                        }
                    }
                }
            }
        }
    })
    async def health_check(request: Request):
        """
        Health check endpoint for load balancers and orchestrators.

        Returns service health status including:
        - SLA configuration status
        - Scheduler state
        """
        scheduler = getattr(request.app.state, "scheduler", None)
        config_loaded = getattr(request.app.state, "config_provider", None) is not None

        checks = {
            "sla_config": "loaded" if config_loaded else "missing",
            "sla_scheduler": "running" if scheduler and scheduler.is_running else "stopped"
        }

        return {
            "status": "healthy" if config_loaded else "degraded",
            "version": settings.app_version,
            "environment": settings.environment,
            "checks": checks
        }

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": "SLA Engine",
            "version": settings.app_version,
            "architecture": "Clean Architecture / Modular Monolith",
            "docs": "/docs",
            "health": "/health",
            "modules": {
                "sla": {
                    "prefix": "/sla",
                    "endpoints": [
                        "POST /sla/classify - Classify items and decide escalations",
                        "POST /sla/compliance - Resolution compliance",
                        "GET /sla/config - Active service levels"
                    ]
                },
                "workforce": {
                    "prefix": "/workforce",
                    "endpoints": [
                        "POST /workforce/rank - Rank staff for an assignment",
                        "POST /workforce/rebalance - Propose reassignments",
                        "POST /workforce/summary - Roster load statistics"
                    ]
                }
            }
        }

    return app


app = create_app()


# === Development Entry Point ===

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info"
    )
