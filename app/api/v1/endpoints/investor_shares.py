"""
Investor share API endpoints.

- GET    /investor-shares          — List shares (paginated, newest first)
- POST   /investor-shares          — Create a password-protected share link
- POST   /investor-shares/verify   — Verify token + password, return the ventures
- DELETE /investor-shares/{id}     — Delete a share
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.models.investor_share import InvestorShare
from app.models.venture import Venture
from app.repositories.investor_share_repo import InvestorShareRepository
from app.repositories.venture_repo import VentureRepository
from app.schemas.common import ErrorResponse
from app.schemas.investor_share import (
    InvestorShareCreate,
    InvestorShareCreateResponse,
    InvestorShareDeleteResponse,
    InvestorShareListResponse,
    ShareVerifyRequest,
    ShareVerifyResponse,
)
from app.services.investor_share_service import InvestorShareService
from app.services.share_verification_service import ShareVerificationService

router = APIRouter()


# ── Dependency injection ──


def _get_investor_share_service(db: AsyncSession = Depends(get_db)) -> InvestorShareService:
    return InvestorShareService(InvestorShareRepository(InvestorShare, db))


def _get_verification_service(db: AsyncSession = Depends(get_db)) -> ShareVerificationService:
    """
    Build a ShareVerificationService wired to the current request's DB session.

    Both repositories share the session, so the access-count update commits
    in the same unit of work that read the share.
    """
    return ShareVerificationService(
        share_repo=InvestorShareRepository(InvestorShare, db),
        venture_repo=VentureRepository(Venture, db),
    )


# ── Endpoints ──


@router.get(
    "",
    response_model=InvestorShareListResponse,
    summary="List investor shares",
    description="Newest first.  ``page`` is 1-based.",
)
async def list_investor_shares(
    page: int = Query(1, ge=1, description="Page number (1-based)"),
    limit: int = Query(10, ge=1, le=100, description="Shares per page"),
    service: InvestorShareService = Depends(_get_investor_share_service),
) -> InvestorShareListResponse:
    return await service.list_shares(page=page, limit=limit)


@router.post(
    "",
    response_model=InvestorShareCreateResponse,
    summary="Create an investor share",
    description=(
        "Creates a share link for the given ventures.  ``name``, ``password`` "
        "and a non-empty ``ventureIds`` list are required.  The response "
        "includes the public ``shareUrl``; the password is never returned."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Missing required fields"},
    },
)
async def create_investor_share(
    share_in: InvestorShareCreate,
    service: InvestorShareService = Depends(_get_investor_share_service),
) -> InvestorShareCreateResponse:
    return await service.create_share(share_in)


@router.post(
    "/verify",
    response_model=ShareVerifyResponse,
    summary="Verify an investor share",
    description=(
        "Checks the share token and password.  On success the share's access "
        "counter is incremented and the shared ventures are returned in "
        "portfolio order (priority, then maturity, then newest)."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Missing share token or password"},
        401: {"model": ErrorResponse, "description": "Invalid password"},
        403: {"model": ErrorResponse, "description": "Share deactivated or expired"},
        404: {"model": ErrorResponse, "description": "Invalid share token"},
        500: {"model": ErrorResponse, "description": "Internal error"},
    },
)
async def verify_investor_share(
    body: ShareVerifyRequest,
    service: ShareVerificationService = Depends(_get_verification_service),
) -> ShareVerifyResponse:
    return await service.verify(body.share_token, body.password)


@router.delete(
    "/{share_id}",
    response_model=InvestorShareDeleteResponse,
    summary="Delete an investor share",
    responses={
        404: {"model": ErrorResponse, "description": "Investor share not found"},
    },
)
async def delete_investor_share(
    share_id: str,
    service: InvestorShareService = Depends(_get_investor_share_service),
) -> InvestorShareDeleteResponse:
    return await service.delete_share(share_id)
