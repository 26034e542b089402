"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready when the search store answers."""

    status: str = Field(default="ok")
    database: str = Field(default="ok", description="Search store connectivity")
    analytics_pending_writes: int | None = Field(
        default=None,
        description="Query log writes still in flight; null before startup",
    )


class ReadinessErrorResponse(BaseModel):
    """503 body for GET /health/ready."""

    status: str = Field(default="not_ready")
    message: str
