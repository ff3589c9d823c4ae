"""
Custom exceptions and error codes for the LiftLens application.

This module provides:
- Structured error codes for categorized error handling
- Custom exception classes for specific failure scenarios
"""
from enum import Enum
from typing import Optional, Dict, Any, List


class ErrorCode(str, Enum):
    """
    Application-wide error codes for categorized error handling.

    Format: CATEGORY_SPECIFIC_ERROR
    Categories:
    - AUTH_*: Authentication errors
    - VALIDATION_*: Input validation errors
    - LOCATION_*: Gym location errors
    - UPSTREAM_*: Model output that broke the requested contract
    - DATABASE_*: Database operation errors
    """

    # Authentication errors
    AUTH_UNAUTHENTICATED = "AUTH_UNAUTHENTICATED"

    # Validation errors
    VALIDATION_INVALID_ARGUMENT = "VALIDATION_INVALID_ARGUMENT"

    # Location-related errors
    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"

    # Model output errors
    UPSTREAM_CONTENT_INVALID = "UPSTREAM_CONTENT_INVALID"

    # Database errors
    DATABASE_QUERY_ERROR = "DATABASE_QUERY_ERROR"

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class LiftLensError(Exception):
    """
    Base exception for all LiftLens application errors.

    Provides structured error information for consistent error handling.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_detail(self) -> Dict[str, Any]:
        """Payload used as the ``detail`` of an HTTPException."""
        return {
            "error_code": self.error_code.value,
            "message": self.message,
            "details": self.details,
        }


class UnauthenticatedError(LiftLensError):
    """Raised when a request carries no valid caller identity."""

    def __init__(self, message: str = "User must be authenticated"):
        super().__init__(
            message=message,
            error_code=ErrorCode.AUTH_UNAUTHENTICATED,
            status_code=401,
        )


class InvalidArgumentError(LiftLensError):
    """Raised when a required argument is missing or empty."""

    def __init__(self, field: str, message: str = None):
        super().__init__(
            message=message or f"'{field}' is required",
            error_code=ErrorCode.VALIDATION_INVALID_ARGUMENT,
            details={"field": field},
            status_code=400,
        )


class LocationNotFoundError(LiftLensError):
    """Raised when a gym location is not found."""

    def __init__(self, location_id: str):
        super().__init__(
            message="Location not found",
            error_code=ErrorCode.LOCATION_NOT_FOUND,
            details={"location_id": location_id},
            status_code=404,
        )


class UpstreamContentInvalidError(LiftLensError):
    """
    Raised when model output fails structural validation.

    Signals that the model ignored the requested response contract, as
    opposed to a transport failure or bad caller input.
    """

    def __init__(self, missing_fields: List[str], message: str = None):
        super().__init__(
            message=message or (
                "Generated routine is missing required fields: "
                + ", ".join(missing_fields)
            ),
            error_code=ErrorCode.UPSTREAM_CONTENT_INVALID,
            details={"missing_fields": missing_fields},
            status_code=502,
        )


class EquipmentDetectionError(LiftLensError):
    """
    Raised when equipment detection fails after validation passed.

    The caller only sees a generic message; the cause is logged.
    """

    def __init__(self, location_id: str, reason: str):
        super().__init__(
            message="Error processing request",
            error_code=ErrorCode.INTERNAL_ERROR,
            details={"location_id": location_id},
            status_code=500,
        )
        self.reason = reason


class RoutineGenerationError(LiftLensError):
    """Raised when routine generation or its validation fails."""

    def __init__(self, reason: str, details: Dict[str, Any] = None):
        super().__init__(
            message=f"Failed to generate workout routine: {reason}",
            error_code=ErrorCode.INTERNAL_ERROR,
            details=details,
            status_code=500,
        )


class DatabaseQueryError(LiftLensError):
    """Raised when reading or writing a location fails in the database."""

    def __init__(self, operation: str, error_type: str):
        super().__init__(
            message="Error processing request",
            error_code=ErrorCode.DATABASE_QUERY_ERROR,
            details={"operation": operation, "error_type": error_type},
            status_code=500,
        )
