"""
Shared Pydantic schemas.

``CamelModel`` gives every API schema camelCase field names on the wire
(``shareToken``, ``viewTemplate``) while the Python side stays snake_case.
The error models document the envelope produced by
``app.core.exceptions.add_exception_handlers`` in the OpenAPI schema.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for API schemas: camelCase aliases, accepts either spelling on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """Standard error envelope returned by all error handlers."""

    error: str = Field(
        ..., description="Human-readable error description", examples=["Invalid share token"]
    )


class ValidationErrorDetail(BaseModel):
    """Single field-level validation failure."""

    field: str = Field(
        ...,
        description="Path to the invalid field",
        examples=["body -> shareToken"],
    )
    message: str = Field(
        ...,
        description="Explanation of the validation failure",
        examples=["Input should be a valid string"],
    )


class ValidationErrorResponse(BaseModel):
    """Response body for 400 request-validation failures."""

    error: str = Field(default="Validation failed", description="Summary message")
    details: List[ValidationErrorDetail] = Field(..., description="Per-field validation failures")


class SuccessResponse(CamelModel):
    """Acknowledgement for operations with no resource to return."""

    success: bool = True
