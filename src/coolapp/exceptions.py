"""
CoolApp - Custom Exceptions.

Centralized exception handling with standardized error responses.
"""

from typing import Any
from uuid import UUID


class CoolAppException(Exception):
    """Base exception for CoolApp application."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        request_id: UUID | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        self.request_id = request_id
        super().__init__(message)


class NotFoundException(CoolAppException):
    """Raised when a resource is not found."""

    def __init__(self, resource_type: str, resource_id: Any):
        super().__init__(
            code="NOT_FOUND",
            message=f"{resource_type} not found: {resource_id}",
            status_code=404,
            details={"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class ValidationException(CoolAppException):
    """Raised when submitted fields fail validation.

    ``errors`` maps each rejected field to a human-readable message.
    """

    def __init__(self, message: str = "Validation failed", errors: dict[str, str] | None = None):
        self.errors = dict(errors or {})
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=400,
            details={"errors": self.errors} if self.errors else None,
        )


class FeatureDisabledException(CoolAppException):
    """Raised when a feature flag is disabled."""

    def __init__(self, feature_name: str):
        super().__init__(
            code="FEATURE_DISABLED",
            message=f"Feature '{feature_name}' is currently disabled",
            status_code=503,
            details={"feature": feature_name},
        )


class TransportFailureException(CoolAppException):
    """Raised when the forecast API cannot be reached or answers garbage."""

    def __init__(self, service_name: str, message: str):
        super().__init__(
            code="TRANSPORT_FAILURE",
            message=f"{service_name} error: {message}",
            status_code=502,
            details={"service": service_name},
        )
