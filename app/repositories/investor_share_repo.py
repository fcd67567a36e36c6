"""
Investor share repository — data-access layer for the ``investor_shares`` table.

Adds the token lookup used by verification and the access-analytics update.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.future import select

from app.models.investor_share import InvestorShare
from app.repositories.base import BaseRepository


class InvestorShareRepository(BaseRepository[InvestorShare]):
    """Concrete repository for :class:`InvestorShare` entities."""

    async def get_by_token(self, share_token: str) -> Optional[InvestorShare]:
        """Look up a share by its public token.  Returns ``None`` if unknown."""

        async def _get_by_token() -> Optional[InvestorShare]:
            stmt = select(InvestorShare).where(InvestorShare.share_token == share_token)
            result = await self.db.execute(stmt)
            return result.scalars().first()

        return await self._execute_with_circuit_breaker(_get_by_token)

    async def list_recent(self, skip: int = 0, limit: int = 10) -> List[InvestorShare]:
        """Newest shares first."""
        return await self.get_all(
            skip=skip, limit=limit, order_by=(InvestorShare.created_at.desc(),)
        )

    async def record_access(self, share_id: str, accessed_at: datetime) -> None:
        """
        Bump ``access_count`` by one and stamp ``last_accessed``.

        The increment is evaluated by the database
        (``SET access_count = access_count + 1``), so concurrent
        verifications never overwrite each other's increments.
        """

        async def _record_access() -> None:
            stmt = (
                update(InvestorShare)
                .where(InvestorShare.id == share_id)
                .values(
                    access_count=InvestorShare.access_count + 1,
                    last_accessed=accessed_at,
                )
                .execution_options(synchronize_session=False)
            )
            await self.db.execute(stmt)
            await self._commit("record_access")

        await self._execute_with_circuit_breaker(_record_access)
