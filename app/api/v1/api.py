"""
V1 API router aggregation.

``main.py`` mounts this router at ``settings.API_V1_STR``.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    analytics,
    buyers,
    investor_shares,
    sellers,
    template,
    ventures,
)

api_router = APIRouter()

api_router.include_router(
    investor_shares.router, prefix="/investor-shares", tags=["Investor Shares"]
)
api_router.include_router(ventures.router, prefix="/ventures", tags=["Ventures"])
api_router.include_router(sellers.router, prefix="/sellers", tags=["Sellers"])
api_router.include_router(buyers.router, prefix="/buyers", tags=["Buyers"])
api_router.include_router(template.router, prefix="/template", tags=["Template"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])
