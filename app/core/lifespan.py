"""Application lifespan: startup and shutdown.

Owns the process-wide search analytics recorder: created at startup,
drained at shutdown so in-flight query log writes are not lost. Also
sets up logging and telemetry, and disposes the SQL engine on exit.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.application.services.search_analytics import SearchAnalyticsRecorder
from app.core.config import get_settings
from app.infrastructure.persistence import database
from app.infrastructure.persistence.repositories.search_query_repo import (
    search_query_store_scope,
)
from app.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, telemetry (if enabled), search analytics
    recorder. Shutdown order: drain pending analytics writes, telemetry
    shutdown, SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    if settings.telemetry_enabled:
        from app.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_logging()
        if settings.database_url:
            database.get_session_factory()
            telemetry.instrument_sqlalchemy(database.engine)
        logger.info("Telemetry initialized")

    # Process-wide analytics handle; every search request shares it.
    app.state.search_analytics = SearchAnalyticsRecorder(
        search_query_store_scope,
        write_timeout=settings.search_analytics_timeout_seconds,
        lookback_days=settings.popular_terms_lookback_days,
        history_limit=settings.popular_terms_history_limit,
    )
    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    # ---- Shutdown ----
    recorder: SearchAnalyticsRecorder | None = getattr(
        app.state, "search_analytics", None
    )
    if recorder is not None:
        await recorder.aclose(settings.search_analytics_shutdown_grace_seconds)
        logger.info("Search analytics recorder drained")

    from app.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")

    if database.engine is not None:
        await database.dispose_engine()
        logger.info("Database engine disposed")
