"""
Seller API endpoints (the vendor's own view).

- GET/PUT /sellers/profile
- GET/POST /sellers/documents
- GET/PUT  /sellers/requests    (PUT carries the request id in the body)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.repositories.catalog_repo import CatalogStore, get_catalog_store
from app.schemas.catalog import (
    SellerDocument,
    SellerDocumentCreate,
    SellerRequest,
    SellerRequestUpdate,
    VendorProfile,
    VendorProfileUpdate,
)
from app.schemas.common import ErrorResponse, ValidationErrorResponse
from app.services.seller_service import SellerService

router = APIRouter()


def _get_seller_service(store: CatalogStore = Depends(get_catalog_store)) -> SellerService:
    return SellerService(store)


@router.get("/profile", response_model=VendorProfile, summary="Get the vendor profile")
async def get_profile(
    service: SellerService = Depends(_get_seller_service),
) -> VendorProfile:
    return await service.get_profile()


@router.put(
    "/profile",
    response_model=VendorProfile,
    summary="Update the vendor profile",
    description="Merges the supplied fields and sets ``lastUpdated`` to today.",
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation error"},
    },
)
async def update_profile(
    changes: VendorProfileUpdate,
    service: SellerService = Depends(_get_seller_service),
) -> VendorProfile:
    return await service.update_profile(changes)


@router.get("/documents", response_model=List[SellerDocument], summary="List documents")
async def list_documents(
    status: Optional[str] = Query(None, description="Filter by document status"),
    type: Optional[str] = Query(None, description="Filter by document type"),
    service: SellerService = Depends(_get_seller_service),
) -> List[SellerDocument]:
    return await service.list_documents(status=status, doc_type=type)


@router.post(
    "/documents",
    response_model=SellerDocument,
    status_code=201,
    summary="Upload a document",
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation error"},
    },
)
async def upload_document(
    document: SellerDocumentCreate,
    service: SellerService = Depends(_get_seller_service),
) -> SellerDocument:
    return await service.upload_document(document)


@router.get(
    "/requests",
    response_model=List[SellerRequest],
    summary="List incoming assessment requests",
)
async def list_requests(
    status: Optional[str] = Query(None, description="Filter by request status"),
    service: SellerService = Depends(_get_seller_service),
) -> List[SellerRequest]:
    return await service.list_requests(status=status)


@router.put(
    "/requests",
    response_model=SellerRequest,
    summary="Update an assessment request",
    responses={
        404: {"model": ErrorResponse, "description": "Assessment request not found"},
    },
)
async def update_request(
    request_update: SellerRequestUpdate,
    service: SellerService = Depends(_get_seller_service),
) -> SellerRequest:
    return await service.update_request(request_update)
