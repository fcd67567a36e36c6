"""
Unit tests for VentureService — business logic layer.

All repository calls are mocked.  Tests cover:
- list_ventures / get_venture: cache miss, cache hit, not found
- get_ventures_by_ids: ordering argument, missing list
- create / update / delete: success, not found, IntegrityError, cache invalidation
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.cache import cache
from app.core.exceptions import BadRequestException, NotFoundException
from app.models.venture import VenturePriority
from app.schemas.venture import VentureCreate, VentureUpdate
from app.services.venture_service import VentureService

from .conftest import VENTURE_ID, VENTURE_ID_2, make_venture


@pytest.fixture()
def venture_repo():
    repo = AsyncMock()
    repo.db = AsyncMock()
    return repo


@pytest.fixture()
def venture_service(venture_repo):
    return VentureService(venture_repo)


async def _echo(venture):
    return venture


class TestListVentures:
    @pytest.mark.asyncio
    async def test_cache_miss_queries_repository(self, venture_service, venture_repo):
        venture_repo.list_by_portfolio_order.return_value = [make_venture()]

        result = await venture_service.list_ventures()

        venture_repo.list_by_portfolio_order.assert_awaited_once()
        assert len(result) == 1

    @pytest.mark.asyncio
    async def test_second_call_served_from_cache(self, venture_service, venture_repo):
        venture_repo.list_by_portfolio_order.return_value = [make_venture()]

        await venture_service.list_ventures()
        await venture_service.list_ventures()

        venture_repo.list_by_portfolio_order.assert_awaited_once()


class TestGetVenture:
    @pytest.mark.asyncio
    async def test_found(self, venture_service, venture_repo):
        venture_repo.get.return_value = make_venture()

        result = await venture_service.get_venture(VENTURE_ID)

        assert result.id == VENTURE_ID

    @pytest.mark.asyncio
    async def test_not_found(self, venture_service, venture_repo):
        venture_repo.get.return_value = None

        with pytest.raises(NotFoundException) as exc_info:
            await venture_service.get_venture("missing")

        assert exc_info.value.message == "Venture not found"

    @pytest.mark.asyncio
    async def test_cached(self, venture_service, venture_repo):
        cache.set(f"ventures:{VENTURE_ID}", make_venture())

        await venture_service.get_venture(VENTURE_ID)

        venture_repo.get.assert_not_awaited()


class TestGetVenturesByIds:
    @pytest.mark.asyncio
    async def test_delegates_with_newest_first_order(self, venture_service, venture_repo):
        venture_repo.get_many.return_value = [make_venture(id=VENTURE_ID_2)]

        result = await venture_service.get_ventures_by_ids([VENTURE_ID_2, "missing"])

        args, kwargs = venture_repo.get_many.await_args
        assert args == ([VENTURE_ID_2, "missing"],)
        assert len(kwargs["order_by"]) == 1
        assert [v.id for v in result] == [VENTURE_ID_2]

    @pytest.mark.asyncio
    async def test_missing_list_is_400(self, venture_service, venture_repo):
        with pytest.raises(BadRequestException) as exc_info:
            await venture_service.get_ventures_by_ids(None)

        assert exc_info.value.message == "Invalid venture IDs"
        venture_repo.get_many.assert_not_awaited()


class TestCreateVenture:
    @pytest.mark.asyncio
    async def test_defaults(self, venture_service, venture_repo):
        venture_repo.create.side_effect = _echo

        result = await venture_service.create_venture(VentureCreate(name="  New  "))

        assert result.name == "New"
        assert result.stage == "idea"
        assert result.maturity == 10
        assert result.priority == VenturePriority.MEDIUM
        assert result.status == "active"
        assert result.id

    @pytest.mark.asyncio
    async def test_invalidates_cache(self, venture_service, venture_repo):
        venture_repo.create.side_effect = _echo
        cache.set("ventures:list", [])

        await venture_service.create_venture(VentureCreate(name="New"))

        assert cache.get("ventures:list") is None

    @pytest.mark.asyncio
    async def test_integrity_error(self, venture_service, venture_repo):
        venture_repo.create.side_effect = IntegrityError("INSERT", {}, Exception("ck"))

        with pytest.raises(BadRequestException):
            await venture_service.create_venture(VentureCreate(name="New"))

        venture_repo.db.rollback.assert_awaited_once()


class TestUpdateVenture:
    @pytest.mark.asyncio
    async def test_applies_only_supplied_fields(self, venture_service, venture_repo):
        existing = make_venture(maturity=50, stage="mvp")
        original_updated_at = existing.updated_at
        venture_repo.get.return_value = existing
        venture_repo.update.side_effect = _echo

        result = await venture_service.update_venture(
            VENTURE_ID, VentureUpdate(maturity=75)
        )

        assert result.maturity == 75
        assert result.stage == "mvp"
        assert result.updated_at > original_updated_at

    @pytest.mark.asyncio
    async def test_not_found(self, venture_service, venture_repo):
        venture_repo.get.return_value = None

        with pytest.raises(NotFoundException):
            await venture_service.update_venture("missing", VentureUpdate(maturity=1))

        venture_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalidates_cached_item(self, venture_service, venture_repo):
        venture_repo.get.return_value = make_venture()
        venture_repo.update.side_effect = _echo
        cache.set(f"ventures:{VENTURE_ID}", make_venture())

        await venture_service.update_venture(VENTURE_ID, VentureUpdate(status="paused"))

        assert cache.get(f"ventures:{VENTURE_ID}") is None


class TestDeleteVenture:
    @pytest.mark.asyncio
    async def test_success(self, venture_service, venture_repo):
        venture_repo.delete.return_value = True

        result = await venture_service.delete_venture(VENTURE_ID)

        assert result.success is True

    @pytest.mark.asyncio
    async def test_not_found(self, venture_service, venture_repo):
        venture_repo.delete.return_value = False

        with pytest.raises(NotFoundException):
            await venture_service.delete_venture("missing")
