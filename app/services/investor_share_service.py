"""
Investor share service — administrative operations on share links.

Creating a share generates a random URL-safe token, retrying on the rare
token collision; the unique index on ``share_token`` is the final guard.
"""

import logging
import math
import secrets
from typing import List

from sqlalchemy.exc import IntegrityError

from app.core.config import settings
from app.core.exceptions import (
    BadRequestException,
    MalformedVentureIdList,
    NotFoundException,
)
from app.models.investor_share import InvestorShare, VentureIdList
from app.repositories.investor_share_repo import InvestorShareRepository
from app.schemas.investor_share import (
    InvestorShareCreate,
    InvestorShareCreateResponse,
    InvestorShareDeleteResponse,
    InvestorShareListResponse,
    InvestorShareResponse,
    Pagination,
)

logger = logging.getLogger(__name__)

TOKEN_BYTES = 24
MAX_TOKEN_ATTEMPTS = 5


def generate_share_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


def build_share_url(share_token: str) -> str:
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/investor-view/{share_token}"


class InvestorShareService:
    """List, create and delete :class:`InvestorShare` records."""

    def __init__(self, share_repo: InvestorShareRepository):
        self._repo = share_repo

    # ── Queries ──

    async def list_shares(self, page: int = 1, limit: int = 10) -> InvestorShareListResponse:
        """Newest shares first, with page metadata."""
        skip = (page - 1) * limit
        shares = await self._repo.list_recent(skip=skip, limit=limit)
        total = await self._repo.count()
        return InvestorShareListResponse(
            shares=self._readable(shares),
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                total_pages=math.ceil(total / limit),
            ),
        )

    @staticmethod
    def _readable(shares: List[InvestorShare]) -> List[InvestorShareResponse]:
        """Rows whose stored venture id list is corrupt are logged and left out."""
        readable = []
        for share in shares:
            try:
                readable.append(InvestorShareResponse.model_validate(share))
            except MalformedVentureIdList as exc:
                logger.error(
                    "Skipping investor share %s: malformed venture id list %r",
                    share.id,
                    exc.raw,
                    extra={"share_id": share.id},
                )
        return readable

    # ── Commands ──

    async def create_share(self, share_in: InvestorShareCreate) -> InvestorShareCreateResponse:
        """
        Create a share for the given ventures.

        Raises :class:`BadRequestException` unless ``name``, ``password`` and a
        non-empty ``ventureIds`` list are supplied.
        """
        if not share_in.name or not share_in.password or not share_in.venture_ids:
            raise BadRequestException("Missing required fields")

        fields = share_in.model_dump(exclude={"venture_ids"})
        encoded_ids = VentureIdList(share_in.venture_ids).encode()

        for attempt in range(1, MAX_TOKEN_ATTEMPTS + 1):
            share = InvestorShare(
                **fields,
                venture_ids=encoded_ids,
                share_token=generate_share_token(),
            )
            try:
                created = await self._repo.create(share)
                break
            except IntegrityError:
                await self._repo.db.rollback()
                logger.warning(
                    "Share token collision (attempt %d/%d)", attempt, MAX_TOKEN_ATTEMPTS
                )
        else:
            raise RuntimeError("Could not generate a unique share token")

        logger.info(
            "Created investor share %s for %d venture(s)",
            created.id,
            len(share_in.venture_ids),
        )
        return InvestorShareCreateResponse(
            share=InvestorShareResponse.model_validate(created),
            share_url=build_share_url(created.share_token),
        )

    async def delete_share(self, share_id: str) -> InvestorShareDeleteResponse:
        """Raises :class:`NotFoundException` if the share does not exist."""
        deleted = await self._repo.delete(share_id)
        if not deleted:
            raise NotFoundException(f"Investor share with id '{share_id}' not found")
        logger.info("Deleted investor share %s", share_id)
        return InvestorShareDeleteResponse(message="Investor share deleted successfully")
