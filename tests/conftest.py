"""
Shared pytest fixtures for unit tests.

All tests run with ``USE_SQLITE=true`` and mocked (or in-memory)
dependencies, so no PostgreSQL server or network I/O is needed.
"""

import os

os.environ.setdefault("USE_SQLITE", "true")

from datetime import datetime, timedelta, timezone  # noqa: E402
from typing import List, Optional  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402

from app.core.cache import TTLCache  # noqa: E402
from app.models.investor_share import InvestorShare, VentureIdList  # noqa: E402
from app.models.venture import Venture, VenturePriority  # noqa: E402

# ────────────────────────────────────────────────────────────────────────────
# Factory helpers
# ────────────────────────────────────────────────────────────────────────────

VENTURE_ID = "venture-a"
VENTURE_ID_2 = "venture-b"
SHARE_ID = "share-1"
SHARE_TOKEN = "tok-abc"
SHARE_PASSWORD = "s3cret"

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_venture(
    *,
    id: str = VENTURE_ID,
    name: str = "Venture A",
    stage: str = "mvp",
    maturity: int = 50,
    priority: VenturePriority = VenturePriority.MEDIUM,
    status: str = "active",
    category: Optional[str] = None,
    timeline: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> Venture:
    """Create a Venture domain object with sensible test defaults."""
    created = created_at or NOW - timedelta(days=30)
    return Venture(
        id=id,
        name=name,
        stage=stage,
        maturity=maturity,
        priority=priority,
        status=status,
        category=category,
        timeline=timeline,
        created_at=created,
        updated_at=created,
    )


def make_share(
    *,
    id: str = SHARE_ID,
    name: str = "Acme Capital",
    share_token: str = SHARE_TOKEN,
    password: str = SHARE_PASSWORD,
    venture_ids: Optional[List[str]] = None,
    raw_venture_ids: Optional[str] = None,
    is_active: bool = True,
    expires_at: Optional[datetime] = None,
    access_count: int = 0,
    last_accessed: Optional[datetime] = None,
) -> InvestorShare:
    """
    Create an InvestorShare domain object.

    ``raw_venture_ids`` stores the given text verbatim (for malformed-data
    tests); otherwise ``venture_ids`` is encoded the normal way.
    """
    if raw_venture_ids is None:
        ids = venture_ids if venture_ids is not None else [VENTURE_ID]
        raw_venture_ids = VentureIdList(ids).encode()
    return InvestorShare(
        id=id,
        name=name,
        email="partner@acme.example",
        company="Acme",
        password=password,
        share_token=share_token,
        venture_ids=raw_venture_ids,
        custom_message="Welcome",
        is_active=is_active,
        expires_at=expires_at,
        access_count=access_count,
        last_accessed=last_accessed,
        created_at=NOW - timedelta(days=1),
    )


# ────────────────────────────────────────────────────────────────────────────
# Pytest fixtures
# ────────────────────────────────────────────────────────────────────────────


@pytest.fixture()
def mock_db():
    """A mocked AsyncSession that tracks add/commit/refresh/rollback calls."""
    session = AsyncMock()
    session.add = MagicMock()
    session.commit = AsyncMock()
    session.refresh = AsyncMock()
    session.rollback = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.merge = AsyncMock()
    session.delete = AsyncMock()
    return session


@pytest.fixture()
def test_cache():
    """A fresh TTL cache instance for test isolation."""
    return TTLCache(ttl=30.0, max_size=100, enabled=True)


@pytest.fixture()
def disabled_cache():
    """A disabled TTL cache — all operations are no-ops."""
    return TTLCache(ttl=30.0, max_size=100, enabled=False)


@pytest.fixture(autouse=True)
def _clear_global_cache():
    """Clear the global cache before and after every test."""
    from app.core.cache import cache

    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def _reset_circuit_breaker():
    """Tests that trip the global breaker must not affect the next test."""
    from app.core.resilience import db_circuit_breaker

    db_circuit_breaker.reset()
    yield
    db_circuit_breaker.reset()
