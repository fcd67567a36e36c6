"""
Portfolio analytics endpoint.

- GET /analytics — Health score, maturity, risk and recommendations
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.models.venture import Venture
from app.repositories.venture_repo import VentureRepository
from app.schemas.analytics import PortfolioAnalytics
from app.schemas.common import ErrorResponse
from app.services.analytics_service import AnalyticsService

router = APIRouter()


def _get_analytics_service(db: AsyncSession = Depends(get_db)) -> AnalyticsService:
    return AnalyticsService(VentureRepository(Venture, db))


@router.get(
    "",
    response_model=PortfolioAnalytics,
    summary="Portfolio analytics",
    description=(
        "Derived from every venture in the portfolio. An empty portfolio "
        "returns zeroed metrics."
    ),
    responses={500: {"model": ErrorResponse, "description": "Internal server error"}},
)
async def get_portfolio_analytics(
    service: AnalyticsService = Depends(_get_analytics_service),
) -> PortfolioAnalytics:
    return await service.get_portfolio_analytics()
