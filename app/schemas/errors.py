"""Error envelope schema, used to document error responses in OpenAPI."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ErrorBody(BaseModel):
    code: str = Field(..., description="Stable, machine-readable error code.")
    message: str = Field(..., description="Human-readable message.")
    request_id: str | None = Field(None, description="Correlation id of the failed request.")
    details: dict[str, Any] | None = Field(None, description="Optional structured context.")


class ErrorResponse(BaseModel):
    error: ErrorBody


def error_responses(*status_codes: int) -> dict[int | str, dict[str, Any]]:
    """Build the ``responses=`` mapping for routes that can fail."""
    return {code: {"model": ErrorResponse} for code in status_codes}
