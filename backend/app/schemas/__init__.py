"""
Pydantic schemas for API request/response validation
"""

from .common import ErrorResponse, HealthResponse

__all__ = ["ErrorResponse", "HealthResponse"]
