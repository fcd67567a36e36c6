"""
Unit tests for SellerService and BuyerService over the seeded catalog store.

Each test builds its own store so mutations never leak between tests.
"""

from datetime import date

import pytest

from app.core.exceptions import NotFoundException
from app.repositories.catalog_repo import build_catalog_store
from app.schemas.catalog import (
    BuyerAssessmentCreate,
    BuyerVendorCreate,
    SellerDocumentCreate,
    SellerRequestUpdate,
    VendorProfileUpdate,
)
from app.services.buyer_service import BuyerService
from app.services.seller_service import SellerService

TODAY = date(2025, 6, 1)


@pytest.fixture()
def store():
    return build_catalog_store()


@pytest.fixture()
def seller_service(store):
    return SellerService(store, today=lambda: TODAY)


@pytest.fixture()
def buyer_service(store):
    return BuyerService(store, today=lambda: TODAY)


class TestSellerProfile:
    @pytest.mark.asyncio
    async def test_get_profile(self, seller_service):
        profile = await seller_service.get_profile()

        assert profile.id == "1"
        assert profile.company_name

    @pytest.mark.asyncio
    async def test_update_merges_and_stamps_date(self, seller_service):
        before = await seller_service.get_profile()

        updated = await seller_service.update_profile(
            VendorProfileUpdate(location="Berlin, DE")
        )

        assert updated.location == "Berlin, DE"
        assert updated.company_name == before.company_name
        assert updated.last_updated == TODAY
        assert (await seller_service.get_profile()).location == "Berlin, DE"

    @pytest.mark.asyncio
    async def test_update_does_not_mutate_previous_instance(self, seller_service):
        before = await seller_service.get_profile()
        original_location = before.location

        await seller_service.update_profile(VendorProfileUpdate(location="Elsewhere"))

        assert before.location == original_location

    @pytest.mark.asyncio
    async def test_missing_profile(self, store):
        await store.profiles.delete("1")

        with pytest.raises(NotFoundException):
            await SellerService(store).get_profile()


class TestSellerDocuments:
    @pytest.mark.asyncio
    async def test_filters(self, seller_service):
        every = await seller_service.list_documents()
        some = await seller_service.list_documents(status=every[0].status)

        assert len(every) >= len(some) >= 1
        assert all(d.status == every[0].status for d in some)

    @pytest.mark.asyncio
    async def test_type_filter_no_match(self, seller_service):
        assert await seller_service.list_documents(doc_type="No Such Type") == []

    @pytest.mark.asyncio
    async def test_upload(self, seller_service):
        doc = await seller_service.upload_document(
            SellerDocumentCreate(name="Pen Test 2025", type="Security")
        )

        assert doc.status == "uploaded"
        assert doc.upload_date == TODAY
        assert doc in await seller_service.list_documents(doc_type="Security")


class TestSellerRequests:
    @pytest.mark.asyncio
    async def test_update_request(self, seller_service):
        existing = (await seller_service.list_requests())[0]

        updated = await seller_service.update_request(
            SellerRequestUpdate(id=existing.id, status="completed", progress=100)
        )

        assert updated.status == "completed"
        assert updated.progress == 100
        assert updated.buyer_company == existing.buyer_company

    @pytest.mark.asyncio
    async def test_update_unknown_request(self, seller_service):
        with pytest.raises(NotFoundException) as exc_info:
            await seller_service.update_request(SellerRequestUpdate(id="nope", status="x"))

        assert exc_info.value.message == "Assessment request not found"

    @pytest.mark.asyncio
    async def test_status_filter(self, seller_service):
        everything = await seller_service.list_requests()
        wanted = everything[0].status

        filtered = await seller_service.list_requests(status=wanted)

        assert filtered and all(r.status == wanted for r in filtered)


class TestBuyerVendors:
    @pytest.mark.asyncio
    async def test_all_disables_filters(self, buyer_service):
        everything = await buyer_service.list_vendors()

        assert await buyer_service.list_vendors(category="all", risk_level="all") == everything

    @pytest.mark.asyncio
    async def test_category_filter(self, buyer_service):
        first = (await buyer_service.list_vendors())[0]

        result = await buyer_service.list_vendors(category=first.category)

        assert result and all(v.category == first.category for v in result)

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive(self, buyer_service):
        first = (await buyer_service.list_vendors())[0]

        result = await buyer_service.list_vendors(search=first.name.upper())

        assert first in result

    @pytest.mark.asyncio
    async def test_search_no_match(self, buyer_service):
        assert await buyer_service.list_vendors(search="zzz-no-such-vendor") == []

    @pytest.mark.asyncio
    async def test_request_vendor_assessment(self, buyer_service):
        vendor = await buyer_service.request_vendor_assessment(
            BuyerVendorCreate(name="NewCo", category="Analytics")
        )

        assert vendor.risk_level == "pending"
        assert vendor.status == "pending"
        assert vendor.risk_score == 0
        assert vendor.compliance_score == 0
        assert vendor.last_assessed == TODAY
        assert vendor.assessment_history == []
        assert vendor in await buyer_service.list_vendors(risk_level="pending")


class TestBuyerAssessments:
    @pytest.mark.asyncio
    async def test_create(self, buyer_service):
        assessment = await buyer_service.create_assessment(
            BuyerAssessmentCreate(
                vendor_name="NewCo",
                vendor_domain="newco.example",
                category="Analytics",
                requested_by="jane@buyer.example",
            )
        )

        assert assessment.status == "pending"
        assert assessment.progress == 0
        assert assessment.requested_date == TODAY
        assert assessment.urgency == "medium"

    @pytest.mark.asyncio
    async def test_status_filter(self, buyer_service):
        assert await buyer_service.list_assessments(status="no-such-status") == []
        assert len(await buyer_service.list_assessments()) >= 2
