"""Application-level exception types.

Services and repositories raise these; the global exception handlers turn
them into HTTP responses with a consistent JSON shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context returned to clients and written to logs."""

    hint: str
    field: str
    resource: str
    resource_id: int
    min_value: int
    max_value: int
    actual_value: int
    allowed_values: list[str]
    retry_after: int
    errors: dict[str, list[str]]
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when client input breaks a validation or business rule."""


class NotFoundAppError(AppError):
    """Raised when a requested resource does not exist."""

    @classmethod
    def for_resource(cls, resource: str, resource_id: int) -> "NotFoundAppError":
        """Build the standard "<Resource> with ID <id> not found" error."""
        return cls(
            code="not_found",
            message=f"{resource} with ID {resource_id} not found",
            details={"resource": resource, "resource_id": resource_id},
        )
