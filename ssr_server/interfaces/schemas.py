"""
Pydantic schemas for the server's own API responses.

No business logic belongs here.
"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response schema for health check endpoint."""

    status: str
    version: str
    error_boundary: bool
