"""
SupportPal Exporter - FastAPI application
"""
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI

from supportpal_exporter import __version__
from supportpal_exporter.config import get_settings
from supportpal_exporter.routes import health, metrics
from supportpal_exporter.services.errors import StartupError
from supportpal_exporter.services.labels import LabelSchemaBuilder
from supportpal_exporter.services.metrics import TicketMetrics
from supportpal_exporter.services.supportpal import SupportPalClient
from supportpal_exporter.services.sync import MetricsSynchronizer, SyncScheduler
from supportpal_exporter.utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Label discovery must finish before the gauges are registered;
    # without it the exporter cannot serve anything and startup aborts.
    settings = get_settings()
    client = SupportPalClient()

    try:
        label_names = await LabelSchemaBuilder(client).build()
    except StartupError as e:
        logger.critical(f"Exporter startup failed: {e}")
        raise

    ticket_metrics = TicketMetrics(label_names)
    synchronizer = MetricsSynchronizer(
        client,
        ticket_metrics,
        max_ticket_age=timedelta(days=settings.max_ticket_age_days),
        missing_organization_label=settings.missing_organization_label,
    )
    scheduler = SyncScheduler(
        synchronizer,
        interval=settings.sync_interval_seconds,
        retry_base_delay=settings.retry_base_delay_seconds,
        retry_max_delay=settings.retry_max_delay_seconds,
    )

    app.state.ticket_metrics = ticket_metrics
    app.state.synchronizer = synchronizer
    scheduler.start()
    logger.info("Metrics initialized.")

    try:
        yield
    finally:
        await scheduler.stop()


app = FastAPI(
    title="SupportPal Exporter",
    description="Prometheus exporter for SupportPal tickets",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(metrics.router)
app.include_router(health.router)


def run() -> None:
    """Console entry point"""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.exporter_host, port=settings.exporter_port)


if __name__ == "__main__":
    run()
