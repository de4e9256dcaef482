"""Domain exceptions for the GeoLab access service.

Defines domain-level exceptions that represent business rule violations
and access-control failures. These exceptions are independent of
infrastructure concerns. Presentation layer maps them to HTTP responses in
exception handlers.
"""

from typing import Any


class GeolabException(Exception):
    """Base exception for all GeoLab application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the API exception handler."""
        body: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationException(GeolabException):
    """Raised when input validation fails (e.g. invalid hierarchy or field)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(GeolabException):
    """Raised when authentication fails (e.g. missing or invalid token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(GeolabException):
    """Raised when the actor may not perform the operation.

    The message stays generic and never says whether the target exists. Resource and action are kept in details for logs only
    and are not rendered by the API handler.
    """

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Forbidden",
    ) -> None:
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class UnknownRoleException(GeolabException):
    """Raised for a role label outside the canonical six.

    Signals a data-integrity problem upstream (a bad label stored or
    supplied). Never mapped to a default role.
    """

    def __init__(self, role: Any) -> None:
        """Initialize with the offending label.

        Args:
            role: The label that failed validation (any type, as received).
        """
        super().__init__(
            f"Unknown role: {role!r}",
            "UNKNOWN_ROLE",
            {"role": str(role)},
        )
        self.role = role


class OrganizationLookupFailedException(GeolabException):
    """Raised when the organization directory errored or timed out."""

    def __init__(self, organization_id: int, reason: str | None = None) -> None:
        """Initialize with the organization being looked up.

        Args:
            organization_id: Id whose lookup (or affiliate listing) failed.
            reason: Optional backend error description.
        """
        details: dict[str, Any] = {"organization_id": organization_id}
        if reason:
            details["reason"] = reason
        super().__init__(
            f"Organization lookup failed: {organization_id}",
            "ORGANIZATION_LOOKUP_FAILED",
            details,
        )
        self.organization_id = organization_id


class OrganizationNotFoundException(GeolabException):
    """Raised when a referenced organization does not exist."""

    def __init__(self, organization_id: int) -> None:
        super().__init__(
            f"Organization not found: {organization_id}",
            "ORGANIZATION_NOT_FOUND",
            {"organization_id": organization_id},
        )


class ResourceNotFoundException(GeolabException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'user', 'organization').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class SqlNotConfiguredException(GeolabException):
    """Raised when an operation requires Postgres but the backend is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
