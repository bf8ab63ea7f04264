"""Custom exceptions for the QandA application."""

from typing import Any


class QandAException(Exception):
    """Base exception for all QandA errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class NotFoundError(QandAException):
    """Resource not found."""

    def __init__(
        self,
        resource: str,
        resource_id: Any,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=f"{resource} '{resource_id}' not found",
            error_code="NOT_FOUND",
            details={
                "resource": resource,
                "resource_id": str(resource_id),
                **(details or {}),
            },
        )


class FormValidationError(QandAException):
    """Submitted form fields failed validation.

    ``errors`` maps each field name to its messages; ``values`` holds the
    submitted input so the form can be shown again with it.
    """

    def __init__(
        self,
        errors: dict[str, list[str]],
        values: dict[str, Any] | None = None,
    ) -> None:
        self.errors = errors
        self.values = values or {}
        super().__init__(
            message="The given data was invalid.",
            error_code="VALIDATION_ERROR",
            details={"fields": sorted(errors)},
        )


class AuthorizationError(QandAException):
    """The current user may not perform an action on a resource."""

    def __init__(
        self,
        ability: str,
        resource: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message="This action is unauthorized.",
            error_code="FORBIDDEN",
            details={"ability": ability, "resource": resource, **(details or {})},
        )


class AuthenticationRequiredError(QandAException):
    """A route needs a logged-in user and there is none."""

    def __init__(self, next_url: str | None = None) -> None:
        self.next_url = next_url
        super().__init__(
            message="Please log in to continue.",
            error_code="UNAUTHENTICATED",
        )
