"""
Custom exception hierarchy for LandQuote.

Only input validation failures are raised out of the estimation core.
Geocoding failures are recovered inside the resolver and unknown table keys
fail closed, so callers always receive a fully formed estimate for valid
input.
"""

from typing import Any, Dict, List, Optional


class LandQuoteException(Exception):
    """
    Base exception for all LandQuote-specific errors.

    Attributes:
        error_code: String identifier for the error type
        message: User-friendly error message
        details: Technical details for logging/debugging
        status_code: HTTP status code for API responses
        suggestions: Optional list of resolution suggestions
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize LandQuoteException.

        Args:
            message: User-friendly error message
            error_code: String identifier for the error type
            status_code: HTTP status code (default: 500)
            details: Technical details for logging
            suggestions: List of suggestions for resolution
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        self.suggestions = suggestions or []

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for API responses.

        Returns:
            Dictionary representation of the error
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "suggestions": self.suggestions,
        }

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.error_code}: {self.message}"

    def __repr__(self) -> str:
        """Detailed string representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"error_code='{self.error_code}', "
            f"message='{self.message}', "
            f"status_code={self.status_code})"
        )


class ValidationError(LandQuoteException):
    """
    Raised when estimate input is rejected.

    Covers non-positive acreage and malformed coordinates.
    Maps to HTTP 400 Bad Request.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize ValidationError.

        Args:
            message: User-friendly error message
            field: Name of the field that failed validation
            details: Technical details about the validation failure
            suggestions: List of suggestions for fixing the validation error
        """
        error_details = details or {}
        if field:
            error_details["field"] = field

        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=400,
            details=error_details,
            suggestions=suggestions or ["Check the input format and try again"],
        )


class GeocodingError(LandQuoteException):
    """
    Raised by the maps provider client when a lookup fails.

    The resolver always recovers from this with a fallback location.
    Maps to HTTP 502 Bad Gateway if it ever escapes.
    """

    def __init__(
        self,
        message: str,
        provider_status: Optional[str] = None,
        query: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize GeocodingError.

        Args:
            message: User-friendly error message
            provider_status: Status string returned by the provider
            query: Address or coordinate query that failed
            details: Technical details about the failure
            suggestions: List of suggestions for resolution
        """
        error_details = details or {}
        if provider_status:
            error_details["provider_status"] = provider_status
        if query:
            error_details["query"] = query

        super().__init__(
            message=message,
            error_code="GEOCODING_ERROR",
            status_code=502,
            details=error_details,
            suggestions=suggestions or ["Check the address spelling", "Drop a pin on the map instead"],
        )


class NotFoundError(LandQuoteException):
    """
    Raised when a stored resource does not exist.

    Maps to HTTP 404 Not Found.
    """

    def __init__(
        self,
        message: str,
        resource: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize NotFoundError.

        Args:
            message: User-friendly error message
            resource: Kind of resource that was requested
            resource_id: Identifier that was not found
            details: Technical details
        """
        error_details = details or {}
        if resource:
            error_details["resource"] = resource
        if resource_id:
            error_details["resource_id"] = resource_id

        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            status_code=404,
            details=error_details,
            suggestions=["Verify the identifier and try again"],
        )


class ConfigurationError(LandQuoteException):
    """
    Raised when pricing tables or settings are inconsistent.

    Maps to HTTP 500 Internal Server Error.
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: User-friendly error message
            config_key: Configuration key that is invalid
            details: Technical details about the configuration error
            suggestions: List of suggestions for resolution
        """
        error_details = details or {}
        if config_key:
            error_details["config_key"] = config_key

        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            status_code=500,
            details=error_details,
            suggestions=suggestions or ["Check the pricing table definitions"],
        )
