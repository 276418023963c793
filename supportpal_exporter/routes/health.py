"""
Health check endpoint

Reports the state of the synchronization loop:
- starting: no cycle has completed yet
- healthy: the last cycle republished the metrics
- degraded: the last cycle failed, metrics may be stale
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Synchronization health"""
    status: str = Field(..., description="Overall status: starting, healthy, degraded")
    last_success: Optional[datetime] = Field(None, description="Time of the last successful cycle")
    consecutive_failures: int = Field(0, description="Failed cycles since the last success")
    label_count: int = Field(0, description="Number of labels on the ticket gauges")


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    """Basic health check"""
    synchronizer = getattr(request.app.state, "synchronizer", None)
    if synchronizer is None or synchronizer.last_cycle_ok is None:
        return HealthResponse(status="starting")

    return HealthResponse(
        status="healthy" if synchronizer.last_cycle_ok else "degraded",
        last_success=synchronizer.last_success,
        consecutive_failures=synchronizer.consecutive_failures,
        label_count=len(synchronizer.metrics.label_names),
    )
