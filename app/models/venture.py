"""
Venture domain model.

A venture is a portfolio item (startup / product) tracked by the platform.
Investor shares reference ventures by id; they never own them.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Text, case
from sqlmodel import Field, SQLModel


class VenturePriority(str, Enum):
    """Priority levels, lowest to highest."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Venture(SQLModel, table=True):
    """
    SQLModel / SQLAlchemy table definition for ventures.

    ``priority`` is stored as a string enum; ordering by it goes through
    :meth:`priority_rank` so ``high`` sorts above ``medium`` and ``low``
    instead of following alphabetical order.
    """

    __tablename__ = "ventures"  # type: ignore[assignment]

    __table_args__ = (
        CheckConstraint("maturity >= 0 AND maturity <= 100", name="ck_ventures_maturity_range"),
        CheckConstraint("length(name) > 0", name="ck_ventures_name_not_empty"),
    )

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()), primary_key=True, max_length=64
    )
    name: str = Field(index=True, max_length=255)
    description: Optional[str] = Field(default=None, sa_type=Text)
    category: Optional[str] = Field(default=None, max_length=255)
    stage: str = Field(default="idea", max_length=50)
    maturity: int = Field(default=10)
    priority: VenturePriority = Field(default=VenturePriority.MEDIUM, index=True)
    status: str = Field(default="active", max_length=50)

    # ── Narrative fields ──
    problem_world: Optional[str] = Field(default=None, sa_type=Text)
    new_world: Optional[str] = Field(default=None, sa_type=Text)
    value_unlock: Optional[str] = Field(default=None, sa_type=Text)
    origin_story: Optional[str] = Field(default=None, sa_type=Text)
    deep_capability: Optional[str] = Field(default=None, sa_type=Text)
    unfair_advantage: Optional[str] = Field(default=None, sa_type=Text)
    unlock_factor: Optional[str] = Field(default=None, sa_type=Text)
    inevitability: Optional[str] = Field(default=None, sa_type=Text)
    urgency_trigger: Optional[str] = Field(default=None, sa_type=Text)

    # ── Commercial fields ──
    market_size: Optional[str] = Field(default=None, max_length=255)
    funding_need: Optional[str] = Field(default=None, max_length=255)
    timeline: Optional[str] = Field(default=None, max_length=255)
    repository: Optional[str] = Field(default=None, max_length=512)
    language: Optional[str] = Field(default=None, max_length=100)

    created_at: datetime = Field(
        default_factory=_utcnow,
        nullable=False,
        sa_type=DateTime(timezone=True),  # type: ignore[arg-type]
        index=True,
    )
    updated_at: datetime = Field(
        default_factory=_utcnow,
        nullable=False,
        sa_type=DateTime(timezone=True),  # type: ignore[arg-type]
    )

    @classmethod
    def priority_rank(cls):
        """SQL expression mapping ``priority`` to 1 (low) .. 3 (high)."""
        return case(
            (cls.priority == VenturePriority.HIGH, 3),
            (cls.priority == VenturePriority.MEDIUM, 2),
            else_=1,
        )

    @classmethod
    def portfolio_order(cls) -> tuple:
        """Priority desc, then maturity desc, then newest first."""
        return (
            cls.priority_rank().desc(),
            cls.maturity.desc(),
            cls.created_at.desc(),
        )

    def __repr__(self) -> str:
        return f"<Venture id={self.id} name='{self.name}' priority={self.priority}>"
