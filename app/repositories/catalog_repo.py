"""
Vendor catalog repositories.

The seller and buyer views are backed by in-memory stores seeded from
``app.seed``.  Endpoints receive the store through ``Depends(get_catalog_store)``
so tests (or a future database-backed implementation) can override it.
"""

from dataclasses import dataclass
from functools import lru_cache

from app.repositories.memory import InMemoryRepository
from app.schemas.catalog import (
    BuyerAssessment,
    BuyerVendor,
    SellerDocument,
    SellerRequest,
    VendorProfile,
)


@dataclass
class CatalogStore:
    """All catalog repositories, grouped for injection."""

    profiles: InMemoryRepository[VendorProfile]
    documents: InMemoryRepository[SellerDocument]
    seller_requests: InMemoryRepository[SellerRequest]
    buyer_vendors: InMemoryRepository[BuyerVendor]
    buyer_assessments: InMemoryRepository[BuyerAssessment]


def build_catalog_store() -> CatalogStore:
    """Create a fresh store populated with the sample catalog."""
    from app import seed

    return CatalogStore(
        profiles=InMemoryRepository("profiles", [seed.CATALOG_PROFILE]),
        documents=InMemoryRepository("documents", seed.CATALOG_DOCUMENTS),
        seller_requests=InMemoryRepository("seller_requests", seed.CATALOG_SELLER_REQUESTS),
        buyer_vendors=InMemoryRepository("buyer_vendors", seed.CATALOG_BUYER_VENDORS),
        buyer_assessments=InMemoryRepository(
            "buyer_assessments", seed.CATALOG_BUYER_ASSESSMENTS
        ),
    )


@lru_cache(maxsize=1)
def get_catalog_store() -> CatalogStore:
    """FastAPI dependency: the process-wide catalog store."""
    return build_catalog_store()
