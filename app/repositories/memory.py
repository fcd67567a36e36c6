"""
In-memory repository for seeded catalog data.

Mirrors the async ``get / get_all / create / update / delete / count``
surface of :class:`app.repositories.base.BaseRepository`, so services do not
care whether records come from PostgreSQL or from this store.  Records are
Pydantic models with a string ``id``; insertion order is preserved.
"""

import logging
import uuid
from typing import Callable, Dict, Generic, Iterable, List, Optional, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

RecordType = TypeVar("RecordType", bound=BaseModel)


class InMemoryRepository(Generic[RecordType]):
    """Dict-backed store keyed by record ``id``."""

    def __init__(self, name: str, records: Iterable[RecordType] = ()):
        self.name = name
        self._records: Dict[str, RecordType] = {}
        for record in records:
            self._records[record.id] = record  # type: ignore[attr-defined]

    @staticmethod
    def new_id() -> str:
        return uuid.uuid4().hex

    async def get(self, id: str) -> Optional[RecordType]:
        return self._records.get(id)

    async def get_all(
        self, where: Optional[Callable[[RecordType], bool]] = None
    ) -> List[RecordType]:
        """All records in insertion order, optionally filtered by ``where``."""
        records = list(self._records.values())
        if where is None:
            return records
        return [r for r in records if where(r)]

    async def create(self, record: RecordType) -> RecordType:
        self._records[record.id] = record  # type: ignore[attr-defined]
        logger.debug("%s: created %s", self.name, record.id)  # type: ignore[attr-defined]
        return record

    async def update(self, record: RecordType) -> RecordType:
        """Replace the stored record with the same id."""
        if record.id not in self._records:  # type: ignore[attr-defined]
            raise KeyError(record.id)  # type: ignore[attr-defined]
        self._records[record.id] = record  # type: ignore[attr-defined]
        return record

    async def delete(self, id: str) -> bool:
        return self._records.pop(id, None) is not None

    async def count(self) -> int:
        return len(self._records)
