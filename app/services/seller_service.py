"""
Seller service — the vendor's own profile, documents and incoming requests.
"""

import logging
from datetime import date
from typing import Callable, List, Optional

from app.core.exceptions import NotFoundException
from app.repositories.catalog_repo import CatalogStore
from app.schemas.catalog import (
    SellerDocument,
    SellerDocumentCreate,
    SellerRequest,
    SellerRequestUpdate,
    VendorProfile,
    VendorProfileUpdate,
)

logger = logging.getLogger(__name__)

PROFILE_ID = "1"


class SellerService:
    """Seller-side catalog operations over the injected :class:`CatalogStore`."""

    def __init__(self, store: CatalogStore, today: Callable[[], date] = date.today):
        self._store = store
        self._today = today

    # ── Profile ──

    async def get_profile(self) -> VendorProfile:
        profile = await self._store.profiles.get(PROFILE_ID)
        if profile is None:
            raise NotFoundException("Vendor profile not found")
        return profile

    async def update_profile(self, changes: VendorProfileUpdate) -> VendorProfile:
        """Merge the supplied fields into the profile and stamp ``lastUpdated``."""
        profile = await self.get_profile()
        updated = profile.model_copy(
            update={**changes.model_dump(exclude_unset=True), "last_updated": self._today()}
        )
        await self._store.profiles.update(updated)
        logger.info("Updated vendor profile %s", updated.id)
        return updated

    # ── Documents ──

    async def list_documents(
        self, status: Optional[str] = None, doc_type: Optional[str] = None
    ) -> List[SellerDocument]:
        return await self._store.documents.get_all(
            where=lambda d: (not status or d.status == status)
            and (not doc_type or d.type == doc_type)
        )

    async def upload_document(self, document_in: SellerDocumentCreate) -> SellerDocument:
        """Register a document; new uploads start in ``uploaded`` status."""
        document = SellerDocument(
            id=self._store.documents.new_id(),
            name=document_in.name,
            type=document_in.type,
            upload_date=self._today(),
            status="uploaded",
        )
        await self._store.documents.create(document)
        logger.info("Uploaded document %s (%s)", document.id, document.name)
        return document

    # ── Assessment requests from buyers ──

    async def list_requests(self, status: Optional[str] = None) -> List[SellerRequest]:
        return await self._store.seller_requests.get_all(
            where=lambda r: not status or r.status == status
        )

    async def update_request(self, request_update: SellerRequestUpdate) -> SellerRequest:
        """Raises :class:`NotFoundException` for an unknown request id."""
        existing = await self._store.seller_requests.get(request_update.id)
        if existing is None:
            raise NotFoundException("Assessment request not found")

        changes = request_update.model_dump(exclude_unset=True, exclude={"id"})
        updated = existing.model_copy(update=changes)
        await self._store.seller_requests.update(updated)
        logger.info("Updated assessment request %s: %s", updated.id, sorted(changes))
        return updated
