"""
Buyer service — vendor risk catalog and outgoing assessment requests.
"""

import logging
from datetime import date
from typing import Callable, List, Optional

from app.repositories.catalog_repo import CatalogStore
from app.schemas.catalog import (
    BuyerAssessment,
    BuyerAssessmentCreate,
    BuyerVendor,
    BuyerVendorCreate,
)

logger = logging.getLogger(__name__)

# Filter value meaning "do not filter on this field".
ALL = "all"


def _matches(value: str, wanted: Optional[str]) -> bool:
    return not wanted or wanted == ALL or value == wanted


class BuyerService:
    """Buyer-side catalog operations over the injected :class:`CatalogStore`."""

    def __init__(self, store: CatalogStore, today: Callable[[], date] = date.today):
        self._store = store
        self._today = today

    # ── Vendors ──

    async def list_vendors(
        self,
        category: Optional[str] = None,
        risk_level: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[BuyerVendor]:
        """
        Filter the vendor catalog.

        ``category`` and ``risk_level`` match exactly (``all`` disables them);
        ``search`` is a case-insensitive substring match on name or description.
        """
        needle = search.lower() if search else None

        def _keep(vendor: BuyerVendor) -> bool:
            if not _matches(vendor.category, category):
                return False
            if not _matches(vendor.risk_level, risk_level):
                return False
            if needle:
                haystacks = (vendor.name, vendor.description or "")
                return any(needle in h.lower() for h in haystacks)
            return True

        return await self._store.buyer_vendors.get_all(where=_keep)

    async def request_vendor_assessment(self, vendor_in: BuyerVendorCreate) -> BuyerVendor:
        """Add a vendor to the catalog in ``pending`` state with no scores yet."""
        vendor = BuyerVendor(
            id=self._store.buyer_vendors.new_id(),
            **vendor_in.model_dump(),
            risk_score=0,
            risk_level="pending",
            compliance_score=0,
            status="pending",
            last_assessed=self._today(),
            assessment_history=[],
        )
        await self._store.buyer_vendors.create(vendor)
        logger.info("Vendor assessment requested for %s (%s)", vendor.name, vendor.id)
        return vendor

    # ── Assessments ──

    async def list_assessments(self, status: Optional[str] = None) -> List[BuyerAssessment]:
        return await self._store.buyer_assessments.get_all(
            where=lambda a: not status or a.status == status
        )

    async def create_assessment(self, assessment_in: BuyerAssessmentCreate) -> BuyerAssessment:
        assessment = BuyerAssessment(
            id=self._store.buyer_assessments.new_id(),
            **assessment_in.model_dump(),
            requested_date=self._today(),
            status="pending",
            progress=0,
        )
        await self._store.buyer_assessments.create(assessment)
        logger.info("Assessment %s requested for %s", assessment.id, assessment.vendor_name)
        return assessment
