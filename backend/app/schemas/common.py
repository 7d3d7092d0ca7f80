"""
Pydantic schemas shared by the service endpoints
"""

from pydantic import BaseModel, Field
from datetime import datetime


class HealthResponse(BaseModel):
    """Liveness payload returned by /health"""

    status: str = Field(
        "ok",
        description="Service status",
        examples=["ok"]
    )

    uptime: int = Field(
        ...,
        ge=0,
        description="Seconds since the process started",
        examples=[3600]
    )

    timestamp: datetime = Field(
        ...,
        description="Current server time (UTC)"
    )


class ErrorResponse(BaseModel):
    """JSON body used for 403/404/500 responses"""

    success: bool = False
    message: str = Field(
        ...,
        description="Human readable error message",
        examples=["Route not found."]
    )
