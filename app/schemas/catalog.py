"""
Pydantic schemas for the vendor catalog (seller and buyer views).

These records are served from an in-memory repository seeded at start-up,
so the same classes act as both storage record and API schema.
"""

import datetime
from typing import List, Optional

from pydantic import EmailStr, Field, field_validator

from app.schemas.common import CamelModel


class AssessmentEntry(CamelModel):
    """One historical assessment of a vendor."""

    date: datetime.date
    score: int = Field(..., ge=0, le=100)
    status: Optional[str] = None
    assessor: str
    notes: Optional[str] = None


# ── Seller side ──


class VendorProfile(CamelModel):
    """The seller's own vendor passport."""

    id: str
    company_name: str
    domain: str
    description: str
    category: str
    location: str
    employee_count: str
    revenue: str
    founded_year: int
    website: str
    contact_email: EmailStr
    contact_phone: str
    certifications: List[str] = []
    key_services: List[str] = []
    compliance_score: int = Field(..., ge=0, le=100)
    risk_score: int = Field(..., ge=0, le=100)
    passport_status: str
    last_updated: datetime.date
    assessment_history: List[AssessmentEntry] = []


class VendorProfileUpdate(CamelModel):
    """Partial update for ``PUT /sellers/profile``; unset fields are left alone."""

    company_name: Optional[str] = Field(default=None, min_length=1)
    domain: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    employee_count: Optional[str] = None
    revenue: Optional[str] = None
    founded_year: Optional[int] = Field(default=None, ge=1800)
    website: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = None
    certifications: Optional[List[str]] = None
    key_services: Optional[List[str]] = None

    @field_validator("*")
    @classmethod
    def reject_null(cls, v):
        """Every profile field is required, so it may be omitted but not nulled."""
        if v is None:
            raise ValueError("must not be null")
        return v


class SellerDocument(CamelModel):
    id: str
    name: str
    type: str
    upload_date: datetime.date
    status: str


class SellerDocumentCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["SOC 2 Type II Report"])
    type: str = Field(..., min_length=1, max_length=100, examples=["Compliance"])


class SellerRequest(CamelModel):
    """An assessment request a buyer has sent to this seller."""

    id: str
    buyer_company: str
    buyer_domain: str
    category: str
    urgency: str
    requested_date: datetime.date
    status: str
    estimated_time: str
    progress: int = Field(..., ge=0, le=100)


class SellerRequestUpdate(CamelModel):
    """Body of ``PUT /sellers/requests``: the id plus the fields to change."""

    id: str
    status: Optional[str] = None
    urgency: Optional[str] = None
    estimated_time: Optional[str] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)

    @field_validator("*")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v


# ── Buyer side ──


class BuyerVendor(CamelModel):
    """A vendor as seen from a buyer's risk dashboard."""

    id: str
    name: str
    category: str
    risk_score: int = Field(..., ge=0, le=100)
    risk_level: str
    compliance_score: int = Field(..., ge=0, le=100)
    status: str
    last_assessed: datetime.date
    description: Optional[str] = None
    location: Optional[str] = None
    employee_count: Optional[str] = None
    revenue: Optional[str] = None
    certifications: List[str] = []
    key_services: List[str] = []
    assessment_history: List[AssessmentEntry] = []


class BuyerVendorCreate(CamelModel):
    """Body of ``POST /buyers/vendors`` (a request to assess a new vendor)."""

    name: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = None
    employee_count: Optional[str] = None
    revenue: Optional[str] = None
    certifications: List[str] = []
    key_services: List[str] = []


class BuyerAssessment(CamelModel):
    id: str
    vendor_name: str
    vendor_domain: str
    category: str
    urgency: str
    requested_by: str
    requested_date: datetime.date
    status: str
    estimated_time: Optional[str] = None
    progress: int = Field(..., ge=0, le=100)


class BuyerAssessmentCreate(CamelModel):
    vendor_name: str = Field(..., min_length=1, max_length=255)
    vendor_domain: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=255)
    urgency: str = Field(default="medium", max_length=20)
    requested_by: str = Field(..., min_length=1, max_length=255)
    estimated_time: Optional[str] = None
