"""
Buyer API endpoints (risk dashboard over third-party vendors).

- GET/POST /buyers/vendors
- GET/POST /buyers/assessments
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.repositories.catalog_repo import CatalogStore, get_catalog_store
from app.schemas.catalog import (
    BuyerAssessment,
    BuyerAssessmentCreate,
    BuyerVendor,
    BuyerVendorCreate,
)
from app.schemas.common import ValidationErrorResponse
from app.services.buyer_service import BuyerService

router = APIRouter()


def _get_buyer_service(store: CatalogStore = Depends(get_catalog_store)) -> BuyerService:
    return BuyerService(store)


@router.get(
    "/vendors",
    response_model=List[BuyerVendor],
    summary="List vendors",
    description=(
        "``category`` and ``riskLevel`` filter exactly; the value ``all`` "
        "disables the filter.  ``search`` matches name or description, "
        "case-insensitively."
    ),
)
async def list_vendors(
    category: Optional[str] = Query(None),
    risk_level: Optional[str] = Query(None, alias="riskLevel"),
    search: Optional[str] = Query(None),
    service: BuyerService = Depends(_get_buyer_service),
) -> List[BuyerVendor]:
    return await service.list_vendors(category=category, risk_level=risk_level, search=search)


@router.post(
    "/vendors",
    response_model=BuyerVendor,
    status_code=201,
    summary="Request assessment of a new vendor",
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation error"},
    },
)
async def create_vendor(
    vendor: BuyerVendorCreate,
    service: BuyerService = Depends(_get_buyer_service),
) -> BuyerVendor:
    return await service.request_vendor_assessment(vendor)


@router.get(
    "/assessments",
    response_model=List[BuyerAssessment],
    summary="List assessments",
)
async def list_assessments(
    status: Optional[str] = Query(None, description="Filter by assessment status"),
    service: BuyerService = Depends(_get_buyer_service),
) -> List[BuyerAssessment]:
    return await service.list_assessments(status=status)


@router.post(
    "/assessments",
    response_model=BuyerAssessment,
    status_code=201,
    summary="Create an assessment request",
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation error"},
    },
)
async def create_assessment(
    assessment: BuyerAssessmentCreate,
    service: BuyerService = Depends(_get_buyer_service),
) -> BuyerAssessment:
    return await service.create_assessment(assessment)
