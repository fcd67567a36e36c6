"""
Venture API endpoints.

- GET    /ventures          — List ventures in portfolio order
- POST   /ventures          — Create a venture
- POST   /ventures/by-ids   — Fetch several ventures by id
- GET    /ventures/{id}     — Retrieve a venture
- PUT    /ventures/{id}     — Partially update a venture
- DELETE /ventures/{id}     — Delete a venture
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.models.venture import Venture
from app.repositories.venture_repo import VentureRepository
from app.schemas.common import ErrorResponse, SuccessResponse, ValidationErrorResponse
from app.schemas.venture import (
    VentureCreate,
    VentureIdsRequest,
    VentureResponse,
    VentureUpdate,
)
from app.services.venture_service import VentureService

router = APIRouter()


def _get_venture_service(db: AsyncSession = Depends(get_db)) -> VentureService:
    """Build a VentureService wired to the current request's DB session."""
    return VentureService(VentureRepository(Venture, db))


@router.get(
    "",
    response_model=List[VentureResponse],
    summary="List all ventures",
    description="Ordered by priority (high first), then maturity, then newest.",
)
async def list_ventures(
    service: VentureService = Depends(_get_venture_service),
) -> List[VentureResponse]:
    return await service.list_ventures()


@router.post(
    "",
    response_model=VentureResponse,
    status_code=201,
    summary="Create a venture",
    description=(
        "Only ``name`` is required.  Defaults: stage ``idea``, maturity 10, "
        "priority ``medium``, status ``active``."
    ),
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation error"},
    },
)
async def create_venture(
    venture: VentureCreate,
    service: VentureService = Depends(_get_venture_service),
) -> VentureResponse:
    return await service.create_venture(venture)


# Declared before /{venture_id} so "by-ids" is not captured as an id.
@router.post(
    "/by-ids",
    response_model=List[VentureResponse],
    summary="Get ventures by id",
    description="Unknown ids are ignored.  Results are ordered newest first.",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid venture IDs"},
    },
)
async def get_ventures_by_ids(
    body: VentureIdsRequest,
    service: VentureService = Depends(_get_venture_service),
) -> List[VentureResponse]:
    return await service.get_ventures_by_ids(body.venture_ids)


@router.get(
    "/{venture_id}",
    response_model=VentureResponse,
    summary="Get a specific venture",
    responses={
        404: {"model": ErrorResponse, "description": "Venture not found"},
    },
)
async def get_venture(
    venture_id: str,
    service: VentureService = Depends(_get_venture_service),
) -> VentureResponse:
    return await service.get_venture(venture_id)


@router.put(
    "/{venture_id}",
    response_model=VentureResponse,
    summary="Update a venture",
    description="Only the fields present in the body are changed.",
    responses={
        404: {"model": ErrorResponse, "description": "Venture not found"},
        400: {"model": ValidationErrorResponse, "description": "Validation error"},
    },
)
async def update_venture(
    venture_id: str,
    venture_update: VentureUpdate,
    service: VentureService = Depends(_get_venture_service),
) -> VentureResponse:
    return await service.update_venture(venture_id, venture_update)


@router.delete(
    "/{venture_id}",
    response_model=SuccessResponse,
    summary="Delete a venture",
    responses={
        404: {"model": ErrorResponse, "description": "Venture not found"},
    },
)
async def delete_venture(
    venture_id: str,
    service: VentureService = Depends(_get_venture_service),
) -> SuccessResponse:
    return await service.delete_venture(venture_id)
