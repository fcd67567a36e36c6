"""
Analytics service — portfolio-level scoring over all ventures.

Every figure is derived from the current ``ventures`` table; nothing is
stored.  The result is cached under the ``ventures:`` prefix, so any venture
write invalidates it together with the venture list.

An empty portfolio yields zeroed metrics (score 0, grade ``F``) instead of
dividing by zero.
"""

import logging
import math
from collections import Counter
from typing import Callable, List, Sequence

from app.core.cache import cache
from app.models.venture import Venture, VenturePriority
from app.repositories.venture_repo import VentureRepository
from app.schemas.analytics import (
    MaturityAnalysis,
    PerformanceMetrics,
    PortfolioAnalytics,
    PortfolioHealth,
    Recommendations,
    RiskAssessment,
    RiskFactors,
    StrategicInsights,
)

logger = logging.getLogger(__name__)

EARLY_STAGES = ("idea", "prototype")
COMPETITIVE_CATEGORIES = ("Health & Nutrition", "Relationships & Social")

# (minimum score, grade, status), checked top to bottom
HEALTH_BANDS = (
    (80, "A", "Excellent"),
    (60, "B", "Good"),
    (40, "C", "Fair"),
    (20, "D", "Poor"),
    (0, "F", "Critical"),
)

MATURITY_BUCKETS = (
    ("0-20", 0, 20),
    ("21-40", 21, 40),
    ("41-60", 41, 60),
    ("61-80", 61, 80),
    ("81-100", 81, 100),
)

RISK_RECOMMENDATION_THRESHOLD = 40


def round_half_up(value: float) -> int:
    """Nearest integer with halves going up (``round()`` rounds halves to even)."""
    return int(math.floor(value + 0.5))


def _percent(ventures: Sequence[Venture], predicate: Callable[[Venture], bool]) -> float:
    if not ventures:
        return 0.0
    return sum(1 for v in ventures if predicate(v)) / len(ventures) * 100


def _names(ventures: Sequence[Venture]) -> str:
    return ", ".join(v.name for v in ventures)


def _is_high_priority(venture: Venture) -> bool:
    return venture.priority == VenturePriority.HIGH


def average_maturity(ventures: Sequence[Venture]) -> float:
    if not ventures:
        return 0.0
    return sum(v.maturity for v in ventures) / len(ventures)


def portfolio_health(ventures: Sequence[Venture]) -> PortfolioHealth:
    """Weighted score: 40% average maturity, 30% active share, 30% high-priority share."""
    score = round_half_up(
        average_maturity(ventures) * 0.4
        + _percent(ventures, lambda v: v.status == "active") * 0.3
        + _percent(ventures, _is_high_priority) * 0.3
    )
    grade, status = next((g, s) for minimum, g, s in HEALTH_BANDS if score >= minimum)
    return PortfolioHealth(score=score, grade=grade, status=status)


def maturity_analysis(ventures: Sequence[Venture]) -> MaturityAnalysis:
    distribution = {
        label: sum(1 for v in ventures if low <= v.maturity <= high)
        for label, low, high in MATURITY_BUCKETS
    }
    mature = _percent(ventures, lambda v: v.maturity > 60)
    if not ventures:
        trend = "stable"
    elif mature > 40:
        trend = "improving"
    elif mature > 20:
        trend = "stable"
    else:
        trend = "declining"
    return MaturityAnalysis(
        average_maturity=round_half_up(average_maturity(ventures)),
        maturity_distribution=distribution,
        maturity_trend=trend,
    )


def risk_assessment(ventures: Sequence[Venture]) -> RiskAssessment:
    """
    Four factors, each a percentage of the portfolio:

    concentration
        Size of the largest category.
    execution
        Ventures below 30 maturity.
    market
        Ventures still at idea or prototype stage.
    funding
        High-priority ventures below 50 maturity.
    """
    largest_category = max(Counter(v.category for v in ventures).values(), default=0)
    concentration = min(largest_category / len(ventures) * 100, 100) if ventures else 0.0
    execution = _percent(ventures, lambda v: v.maturity < 30)
    market = _percent(ventures, lambda v: v.stage in EARLY_STAGES)
    funding = _percent(ventures, lambda v: _is_high_priority(v) and v.maturity < 50)

    overall_score = (concentration + execution + market + funding) / 4
    if overall_score < 30:
        overall = "low"
    elif overall_score < 60:
        overall = "medium"
    else:
        overall = "high"

    advice = (
        (concentration, "Diversify portfolio across different categories to reduce concentration risk"),
        (execution, "Focus on accelerating low-maturity ventures or consider pausing underperforming ones"),
        (market, "Balance portfolio with more growth-stage ventures to reduce market risk"),
        (funding, "Secure additional funding for high-priority ventures or adjust priorities"),
    )
    return RiskAssessment(
        overall_risk=overall,
        risk_factors=RiskFactors(
            concentration=round_half_up(concentration),
            execution=round_half_up(execution),
            market=round_half_up(market),
            funding=round_half_up(funding),
        ),
        recommendations=[
            text for factor, text in advice if factor > RISK_RECOMMENDATION_THRESHOLD
        ],
    )


def strategic_insights(ventures: Sequence[Venture]) -> StrategicInsights:
    strengths: List[str] = []
    weaknesses: List[str] = []
    opportunities: List[str] = []
    threats: List[str] = []

    mature = [v for v in ventures if v.maturity > 70]
    if mature:
        strengths.append(f"Strong portfolio of mature ventures ready for scaling: {_names(mature)}")
    categories = len({v.category for v in ventures})
    if categories > 3:
        strengths.append(f"Well-diversified across {categories} different categories")

    early = [v for v in ventures if v.maturity < 30]
    if len(early) > len(ventures) * 0.3:
        weaknesses.append(
            f"High proportion of early-stage ventures may delay returns: {_names(early)}"
        )
    paused = [v for v in ventures if v.status == "paused"]
    if paused:
        weaknesses.append(
            f"{len(paused)} ventures are currently paused, indicating execution "
            f"challenges: {_names(paused)}"
        )

    mvp = [v for v in ventures if v.stage == "mvp"]
    if mvp:
        opportunities.append(
            f"Ventures at MVP stage ready for market entry and growth: {_names(mvp)}"
        )
    high = [v for v in ventures if _is_high_priority(v)]
    if high:
        opportunities.append(
            f"High-priority ventures with significant market potential: {_names(high)}"
        )

    crowded = [v for v in ventures if v.category in COMPETITIVE_CATEGORIES]
    if crowded:
        threats.append(
            f"{len(crowded)} ventures in highly competitive markets require strong "
            f"differentiation: {_names(crowded)}"
        )
    slow = [v for v in ventures if v.timeline and "year" in v.timeline]
    if len(slow) > len(ventures) * 0.4:
        threats.append(
            f"Extended timelines increase market risk and funding requirements: {_names(slow)}"
        )

    return StrategicInsights(
        strengths=strengths,
        weaknesses=weaknesses,
        opportunities=opportunities,
        threats=threats,
    )


def recommendations(ventures: Sequence[Venture]) -> Recommendations:
    immediate: List[str] = []
    short_term: List[str] = []
    long_term: List[str] = []

    critical = [v for v in ventures if _is_high_priority(v) and v.maturity < 40]
    if critical:
        immediate.append(
            f"Accelerate development of critical high-priority ventures: {_names(critical)}"
        )
    overlapping = [
        v
        for v in ventures
        if v.category and ("DNA" in v.category or "Relationship" in v.category)
    ]
    if len(overlapping) > 3:
        immediate.append(
            f"Consolidate duplicate/redundant ventures to focus resources: {_names(overlapping)}"
        )

    mvp = [v for v in ventures if v.stage == "mvp"]
    if mvp:
        short_term.append(
            f"Launch and scale MVP-ready ventures to capture market share: {_names(mvp)}"
        )
    prototypes = [v for v in ventures if v.stage == "prototype"]
    if prototypes:
        short_term.append(
            f"Complete MVP development for prototype-stage ventures: {_names(prototypes)}"
        )

    growth = [v for v in ventures if v.stage == "growth"]
    if growth:
        long_term.append(
            f"Scale growth-stage ventures to market leadership positions: {_names(growth)}"
        )
    exit_ready = [v for v in ventures if v.maturity > 80]
    if exit_ready:
        long_term.append(
            "Develop exit strategies for mature ventures and prepare for Series A "
            f"funding: {_names(exit_ready)}"
        )
    long_term.append("Expand portfolio with 2-3 new ventures in emerging categories")

    return Recommendations(immediate=immediate, short_term=short_term, long_term=long_term)


def analyse_portfolio(ventures: Sequence[Venture]) -> PortfolioAnalytics:
    health = portfolio_health(ventures)
    return PortfolioAnalytics(
        portfolio_health=health,
        maturity_analysis=maturity_analysis(ventures),
        risk_assessment=risk_assessment(ventures),
        performance_metrics=PerformanceMetrics(
            total_ventures=len(ventures),
            active_ventures=sum(1 for v in ventures if v.status == "active"),
            high_priority_ventures=sum(1 for v in ventures if _is_high_priority(v)),
            mvp_ready_ventures=sum(1 for v in ventures if v.stage == "mvp"),
            average_maturity=round_half_up(average_maturity(ventures)),
            portfolio_score=health.score,
        ),
        strategic_insights=strategic_insights(ventures),
        recommendations=recommendations(ventures),
    )


class AnalyticsService:
    CACHE_KEY = "ventures:analytics"

    def __init__(self, venture_repo: VentureRepository):
        self._repo = venture_repo

    async def get_portfolio_analytics(self) -> PortfolioAnalytics:
        cached = cache.get(self.CACHE_KEY)
        if cached is not None:
            return cached

        ventures = await self._repo.list_by_portfolio_order()
        analytics = analyse_portfolio(ventures)
        logger.info(
            "Portfolio analytics computed over %d venture(s): score %d (%s)",
            len(ventures),
            analytics.portfolio_health.score,
            analytics.portfolio_health.grade,
        )
        cache.set(self.CACHE_KEY, analytics)
        return analytics
