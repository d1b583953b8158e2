"""
Pydantic response models for the host API.

Field examples populate OpenAPI docs at /docs.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness health check response."""

    status: str
    uptime_seconds: float
    id_header: str = Field(..., examples=["X-Command-ID"])
    generator: str = Field("", examples=["TimestampIDGenerator"])
    save_handler: str = Field("", examples=["HeaderSaveHandler"])
    post_processor: str = Field("", examples=["HeaderPostProcessor"])


class RequestIDResponse(BaseModel):
    """Identifier resolved for the current request, as downstream code sees it."""

    request_id: str = Field(..., examples=["1760889600.123456.a1b2"])
    context_id: str = ""
