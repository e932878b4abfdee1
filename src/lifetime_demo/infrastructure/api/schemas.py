from typing import Dict
from uuid import UUID

from pydantic import BaseModel, Field


class LifetimeIds(BaseModel):
    transient: UUID
    scoped: UUID
    singleton: UUID


class LifetimeAnalysis(BaseModel):
    transient: str
    scoped: str
    singleton: str


class LifetimeSummary(BaseModel):
    transient: str
    scoped: str
    singleton: str


class ComparisonResponse(BaseModel):
    """Ids resolved by the handler and by a dependent service in the same request."""

    title: str = "Dependency Injection Lifetime Comparison"
    description: str = "Compare the IDs below. Notice how they differ based on lifetime:"
    from_handler: LifetimeIds
    from_service: LifetimeIds
    analysis: LifetimeAnalysis
    summary: LifetimeSummary
    timestamp: str = Field(..., description="UTC time formatted as yyyy-mm-dd HH:MM:SS.fff UTC")


class OperationView(BaseModel):
    short_id: str
    full_id: UUID
    sequence: int
    behavior: str


class SimpleResponse(BaseModel):
    instructions: str = "Call this endpoint multiple times to observe lifetime behavior"
    operations: Dict[str, OperationView]
    request_time: str


class MultipleResponse(BaseModel):
    description: str = "Multiple resolutions within the same request"
    first_resolution: LifetimeIds
    second_resolution: LifetimeIds
    analysis: LifetimeAnalysis
    summary: str = (
        "Within a single request: per-request creates new instances, per-scope reuses the same instance, "
        "per-process always uses the global instance"
    )


class HealthResponse(BaseModel):
    status: str = "ok"
    capabilities: Dict[str, str]


class ErrorResponse(BaseModel):
    error: str
    detail: str
