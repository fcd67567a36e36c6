"""
Pydantic schemas for Venture API request / response serialisation.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from app.models.venture import VenturePriority
from app.schemas.common import CamelModel


class VentureFields(CamelModel):
    """Optional descriptive fields shared by create, update and response."""

    description: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=255)
    problem_world: Optional[str] = None
    new_world: Optional[str] = None
    value_unlock: Optional[str] = None
    origin_story: Optional[str] = None
    deep_capability: Optional[str] = None
    unfair_advantage: Optional[str] = None
    unlock_factor: Optional[str] = None
    inevitability: Optional[str] = None
    urgency_trigger: Optional[str] = None
    market_size: Optional[str] = Field(default=None, max_length=255)
    funding_need: Optional[str] = Field(default=None, max_length=255)
    timeline: Optional[str] = Field(default=None, max_length=255)
    repository: Optional[str] = Field(default=None, max_length=512)
    language: Optional[str] = Field(default=None, max_length=100)


class VentureCreate(VentureFields):
    """Schema for ``POST /ventures``."""

    name: str = Field(..., min_length=1, max_length=255, examples=["tprm-monitor-platform"])
    stage: str = Field(default="idea", max_length=50, examples=["mvp"])
    maturity: int = Field(default=10, ge=0, le=100, description="Maturity score 0-100")
    priority: VenturePriority = Field(default=VenturePriority.MEDIUM)
    status: str = Field(default="active", max_length=50)

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        """Reject whitespace-only names."""
        if not v.strip():
            raise ValueError("name must not be blank")
        return v.strip()


class VentureUpdate(VentureFields):
    """
    Schema for ``PUT /ventures/{id}``.

    Every field is optional; only the fields present in the body are applied.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    stage: Optional[str] = Field(default=None, max_length=50)
    maturity: Optional[int] = Field(default=None, ge=0, le=100)
    priority: Optional[VenturePriority] = None
    status: Optional[str] = Field(default=None, max_length=50)

    @field_validator("name", "stage", "maturity", "priority", "status")
    @classmethod
    def reject_null(cls, v):
        """These columns are NOT NULL: omit them to leave them unchanged."""
        if v is None:
            raise ValueError("must not be null")
        return v


class VentureResponse(VentureFields):
    """Schema returned by every endpoint that emits ventures."""

    id: str
    name: str
    stage: str
    maturity: int
    priority: VenturePriority
    status: str
    created_at: datetime
    updated_at: datetime


class VentureIdsRequest(CamelModel):
    """Body of ``POST /ventures/by-ids``."""

    venture_ids: Optional[List[str]] = None
