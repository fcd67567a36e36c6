"""
Venture service — business logic layer for portfolio items.

Caching:
    ``list_ventures`` and ``get_venture`` go through the in-memory TTL cache.
    Every write invalidates all ``ventures:`` keys.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from app.core.cache import cache
from app.core.exceptions import BadRequestException, NotFoundException
from app.models.venture import Venture
from app.repositories.venture_repo import VentureRepository
from app.schemas.common import SuccessResponse
from app.schemas.venture import VentureCreate, VentureUpdate

logger = logging.getLogger(__name__)


class VentureService:
    """Encapsulates CRUD for :class:`Venture`."""

    CACHE_PREFIX = "ventures:"

    def __init__(self, venture_repo: VentureRepository):
        self._repo = venture_repo

    # ── Queries ──

    async def list_ventures(self) -> List[Venture]:
        """All ventures in portfolio order (cache-backed)."""
        cache_key = f"{self.CACHE_PREFIX}list"
        cached = cache.get(cache_key)
        if cached is not None:
            return cached

        ventures = await self._repo.list_by_portfolio_order()
        cache.set(cache_key, ventures)
        return ventures

    async def get_venture(self, venture_id: str) -> Venture:
        """Raises :class:`NotFoundException` if the venture does not exist."""
        cache_key = f"{self.CACHE_PREFIX}{venture_id}"
        cached = cache.get(cache_key)
        if cached is not None:
            return cached

        venture = await self._repo.get(venture_id)
        if not venture:
            raise NotFoundException("Venture not found")
        cache.set(cache_key, venture)
        return venture

    async def get_ventures_by_ids(self, venture_ids: Optional[List[str]]) -> List[Venture]:
        """
        Ventures matching the given ids, newest first.

        Unknown ids are ignored.  Raises :class:`BadRequestException` when no
        id list was supplied.
        """
        if venture_ids is None:
            raise BadRequestException("Invalid venture IDs")
        return await self._repo.get_many(venture_ids, order_by=(Venture.created_at.desc(),))

    # ── Commands ──

    async def create_venture(self, venture_in: VentureCreate) -> Venture:
        venture = Venture(**venture_in.model_dump())
        try:
            created = await self._repo.create(venture)
        except IntegrityError as exc:
            await self._repo.db.rollback()
            logger.warning("IntegrityError creating venture: %s", exc)
            raise BadRequestException("Venture data violates a database constraint")
        cache.invalidate(self.CACHE_PREFIX)
        logger.info("Created venture %s (%s)", created.id, created.name)
        return created

    async def update_venture(self, venture_id: str, venture_update: VentureUpdate) -> Venture:
        """
        Apply the fields present in the request body.

        Raises :class:`NotFoundException` if the venture does not exist.
        """
        venture = await self._repo.get(venture_id)
        if not venture:
            raise NotFoundException("Venture not found")

        for key, value in venture_update.model_dump(exclude_unset=True).items():
            setattr(venture, key, value)
        venture.updated_at = datetime.now(timezone.utc)

        try:
            updated = await self._repo.update(venture)
        except IntegrityError as exc:
            await self._repo.db.rollback()
            logger.warning("IntegrityError updating venture %s: %s", venture_id, exc)
            raise BadRequestException("Venture update violates a database constraint")
        cache.invalidate(self.CACHE_PREFIX)
        logger.info("Updated venture %s", updated.id)
        return updated

    async def delete_venture(self, venture_id: str) -> SuccessResponse:
        if not await self._repo.delete(venture_id):
            raise NotFoundException("Venture not found")
        cache.invalidate(self.CACHE_PREFIX)
        logger.info("Deleted venture %s", venture_id)
        return SuccessResponse()
