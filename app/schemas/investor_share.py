"""
Pydantic schemas for investor shares and share verification.

The share projection returned to investors deliberately omits ``password``
and ``shareToken``; the admin representation omits ``password`` only.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import EmailStr, Field, field_validator

from app.models.investor_share import VentureIdList
from app.schemas.common import CamelModel
from app.schemas.venture import VentureResponse


class ShareVerifyRequest(CamelModel):
    """
    Body of ``POST /investor-shares/verify``.

    Both fields are optional at the schema level so that a missing value
    reaches the service and is reported as "Missing share token or password"
    rather than as a generic validation failure.
    """

    share_token: Optional[str] = Field(default=None, examples=["Xk3v9..."])
    password: Optional[str] = Field(default=None, examples=["s3cret"])


class SharedView(CamelModel):
    """Share metadata disclosed to an investor after successful verification."""

    id: str
    name: str
    view_template: str
    include_metrics: bool
    include_timeline: bool
    include_financial: bool
    allow_download: bool
    custom_message: Optional[str] = None


class ShareVerifyResponse(CamelModel):
    """Successful verification payload."""

    success: bool = True
    share: SharedView
    ventures: List[VentureResponse]


class InvestorShareCreate(CamelModel):
    """
    Body of ``POST /investor-shares``.

    ``name``, ``password`` and a non-empty ``ventureIds`` list are required;
    they are checked by the service so the caller gets a single
    "Missing required fields" error.
    """

    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[EmailStr] = None
    company: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, max_length=255)
    venture_ids: Optional[List[str]] = None
    view_template: str = Field(default="professional", max_length=50)
    include_metrics: bool = True
    include_timeline: bool = True
    include_financial: bool = True
    allow_download: bool = False
    custom_message: Optional[str] = None
    expires_at: Optional[datetime] = None


class InvestorShareResponse(CamelModel):
    """Administrative representation of a share (no password)."""

    id: str
    name: str
    email: Optional[str] = None
    company: Optional[str] = None
    share_token: str
    venture_ids: List[str]
    view_template: str
    include_metrics: bool
    include_timeline: bool
    include_financial: bool
    allow_download: bool
    custom_message: Optional[str] = None
    is_active: bool
    expires_at: Optional[datetime] = None
    access_count: int
    last_accessed: Optional[datetime] = None
    created_at: datetime

    @field_validator("venture_ids", mode="before")
    @classmethod
    def decode_stored_ids(cls, v: Any) -> Any:
        """The table stores the id list as JSON text; expose it as an array."""
        if isinstance(v, str):
            return list(VentureIdList.decode(v))
        return v


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class InvestorShareListResponse(CamelModel):
    shares: List[InvestorShareResponse]
    pagination: Pagination


class InvestorShareCreateResponse(CamelModel):
    success: bool = True
    share: InvestorShareResponse
    share_url: str


class InvestorShareDeleteResponse(CamelModel):
    success: bool = True
    message: str
