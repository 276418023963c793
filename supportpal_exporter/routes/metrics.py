"""
Prometheus exposition endpoint

Returns the ticket gauges in Prometheus text format. The synchronization
loop keeps them current; a scrape only reads the registry.
"""
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST

router = APIRouter(tags=["metrics"])


@router.get("/metrics", include_in_schema=False)
async def metrics(request: Request) -> Response:
    """Expose the ticket gauges in text exposition format"""
    ticket_metrics = getattr(request.app.state, "ticket_metrics", None)
    if ticket_metrics is None:
        raise HTTPException(status_code=503, detail="Exporter is not initialized")

    return Response(
        content=ticket_metrics.render(),
        media_type=CONTENT_TYPE_LATEST,
    )
