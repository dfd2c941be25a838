"""
Pydantic models for standardized error responses.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    """
    Detailed information about a specific error.

    Used for validation errors with multiple field-level issues.
    """

    field: Optional[str] = Field(None, description="Field name that caused the error")
    message: str = Field(..., description="Error message for this field")
    code: Optional[str] = Field(None, description="Error code for this specific issue")


class ErrorResponse(BaseModel):
    """
    Standardized error response model for all API errors.

    Attributes:
        error_code: Machine-readable error identifier (e.g., 'VALIDATION_ERROR')
        message: Human-readable error message
        details: Optional dictionary with additional technical details
        timestamp: When the error occurred (UTC)
        request_id: Optional request correlation ID for tracing
        suggestions: Optional list of actionable suggestions for resolution
        errors: Optional list of detailed field-level errors
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Technical details")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the error occurred (UTC)",
    )
    request_id: Optional[str] = Field(None, description="Request correlation ID")
    suggestions: Optional[List[str]] = Field(None, description="Resolution suggestions")
    errors: Optional[List[ErrorDetail]] = Field(None, description="Field-level errors")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "timestamp": "2025-11-10T15:30:00Z",
                "request_id": "550e8400-e29b-41d4-a716-446655440000",
                "suggestions": ["Check the request format and field values"],
                "errors": [
                    {
                        "field": "body.project.acreage",
                        "message": "Input should be greater than 0",
                        "code": "greater_than",
                    }
                ],
            }
        }
    )
