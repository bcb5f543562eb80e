"""
SkyRoutes Backend - Health Check Route
=======================================

What:  Liveness endpoint for load balancers and container probes.
How:   Answers without touching the database. The dataset is verified once
       at startup, and read failures surface per request as 500s.
"""

from fastapi import APIRouter

from skyroutes.schemas.catalog import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok")
