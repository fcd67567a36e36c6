"""
Venture repository — data-access layer for the ``ventures`` table.
"""

from typing import Any, List, Optional, Sequence

from sqlalchemy.future import select

from app.models.venture import Venture
from app.repositories.base import BaseRepository


class VentureRepository(BaseRepository[Venture]):
    """Concrete repository for :class:`Venture` entities."""

    async def list_by_portfolio_order(self) -> List[Venture]:
        """All ventures, priority desc → maturity desc → newest first."""
        return await self.get_all(limit=None, order_by=Venture.portfolio_order())

    async def get_many(
        self, ids: Sequence[str], order_by: Optional[Sequence[Any]] = None
    ) -> List[Venture]:
        """
        Return the ventures whose id is in ``ids``.

        Ids that match nothing are simply absent from the result.  Ordering is
        one multi-key ``ORDER BY`` (portfolio order unless overridden).
        """
        if not ids:
            return []

        async def _get_many() -> List[Venture]:
            ordering = order_by or Venture.portfolio_order()
            stmt = select(Venture).where(Venture.id.in_(list(ids))).order_by(*ordering)
            result = await self.db.execute(stmt)
            return list(result.scalars().all())

        return await self._execute_with_circuit_breaker(_get_many)
