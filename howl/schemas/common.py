"""
Howl Backend — Shared Response Schemas
========================================

What:  Pydantic models for the envelopes every resource returns: links after
       a write, the 201 body after a create, error bodies, and the health check.
Why:   FastAPI validates and documents responses from these; the OpenAPI docs
       show the same shapes the clients parse.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field


class LinksResponse(BaseModel):
    """
    What:  Body of a successful replace: where the record lives.
    Example:
        {"links": {"business": "/businesses/7"}}
    """
    links: Dict[str, str] = Field(description="Relative links to the written record")


class CreatedResponse(BaseModel):
    """
    What:  Body of a 201 Created response.
    Example:
        {"id": 7, "links": {"business": "/businesses/7"}}
    """
    id: int = Field(description="Identifier assigned by storage")
    links: Dict[str, str] = Field(description="Relative links to the new record")


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every failure status.

    Fields:
        error: Human-readable description (the only field clients must read)
        details: Extra context for 400s, e.g. {"missing": ["phone"]}
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response for load balancers and monitoring.
    """
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
