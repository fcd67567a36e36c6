"""
InvestorShare domain model.

An investor share is a password-protected, optionally expiring link that
grants read access to a curated subset of ventures.  The venture subset is
persisted as a JSON-encoded id list; :class:`VentureIdList` is the only
place that encodes or decodes it.
"""

import json
import uuid
from datetime import datetime, timezone
from typing import Iterable, Iterator, List, Optional

from sqlalchemy import CheckConstraint, DateTime, Text
from sqlmodel import Field, SQLModel

from app.core.exceptions import MalformedVentureIdList


class VentureIdList:
    """Ordered list of venture ids with an explicit text encoding."""

    __slots__ = ("_ids",)

    def __init__(self, ids: Iterable[str]):
        self._ids: List[str] = [str(i) for i in ids]

    @classmethod
    def decode(cls, raw: Optional[str]) -> "VentureIdList":
        """
        Parse the stored representation (a JSON array of strings).

        Raises :class:`MalformedVentureIdList` for anything else: invalid
        JSON, a non-array value, or non-string elements.
        """
        if raw is None:
            raise MalformedVentureIdList(repr(raw))
        try:
            value = json.loads(raw)
        except (TypeError, ValueError):
            raise MalformedVentureIdList(raw)
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise MalformedVentureIdList(raw)
        return cls(value)

    def encode(self) -> str:
        return json.dumps(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, VentureIdList):
            return self._ids == other._ids
        return NotImplemented

    def __repr__(self) -> str:
        return f"VentureIdList({self._ids!r})"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InvestorShare(SQLModel, table=True):
    """
    SQLModel / SQLAlchemy table definition for investor shares.

    - ``share_token`` has a unique index; it is the public lookup key.
    - ``password`` is stored in plaintext and compared by exact match.
    - ``access_count`` / ``last_accessed`` are analytics written only by a
      successful verification.
    """

    __tablename__ = "investor_shares"  # type: ignore[assignment]

    __table_args__ = (
        CheckConstraint("access_count >= 0", name="ck_investor_shares_access_count"),
        CheckConstraint("length(share_token) > 0", name="ck_investor_shares_token_not_empty"),
    )

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()), primary_key=True, max_length=64
    )
    name: str = Field(max_length=255)
    email: Optional[str] = Field(default=None, max_length=320)
    company: Optional[str] = Field(default=None, max_length=255)
    password: str = Field(max_length=255)
    share_token: str = Field(unique=True, index=True, max_length=128)
    venture_ids: str = Field(sa_type=Text)

    # ── Presentation options (returned verbatim on verification) ──
    view_template: str = Field(default="professional", max_length=50)
    include_metrics: bool = Field(default=True)
    include_timeline: bool = Field(default=True)
    include_financial: bool = Field(default=True)
    allow_download: bool = Field(default=False)
    custom_message: Optional[str] = Field(default=None, sa_type=Text)

    # ── Lifecycle ──
    is_active: bool = Field(default=True)
    expires_at: Optional[datetime] = Field(
        default=None,
        sa_type=DateTime(timezone=True),  # type: ignore[arg-type]
    )

    # ── Access analytics ──
    access_count: int = Field(default=0)
    last_accessed: Optional[datetime] = Field(
        default=None,
        sa_type=DateTime(timezone=True),  # type: ignore[arg-type]
    )

    created_at: datetime = Field(
        default_factory=_utcnow,
        nullable=False,
        sa_type=DateTime(timezone=True),  # type: ignore[arg-type]
        index=True,
    )

    @property
    def venture_id_list(self) -> VentureIdList:
        return VentureIdList.decode(self.venture_ids)

    def __repr__(self) -> str:
        return f"<InvestorShare id={self.id} name='{self.name}' active={self.is_active}>"
