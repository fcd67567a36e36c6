"""
Pydantic schemas for ``GET /analytics``.
"""

from typing import Dict, List, Literal

from app.schemas.common import CamelModel

Grade = Literal["A", "B", "C", "D", "F"]
HealthStatus = Literal["Excellent", "Good", "Fair", "Poor", "Critical"]
MaturityTrend = Literal["improving", "stable", "declining"]
RiskLevel = Literal["low", "medium", "high"]


class PortfolioHealth(CamelModel):
    score: int
    grade: Grade
    status: HealthStatus


class MaturityAnalysis(CamelModel):
    average_maturity: int
    maturity_distribution: Dict[str, int]
    maturity_trend: MaturityTrend


class RiskFactors(CamelModel):
    """Each factor is a 0-100 percentage of the portfolio."""

    concentration: int
    execution: int
    market: int
    funding: int


class RiskAssessment(CamelModel):
    overall_risk: RiskLevel
    risk_factors: RiskFactors
    recommendations: List[str]


class PerformanceMetrics(CamelModel):
    total_ventures: int
    active_ventures: int
    high_priority_ventures: int
    mvp_ready_ventures: int
    average_maturity: int
    portfolio_score: int


class StrategicInsights(CamelModel):
    strengths: List[str]
    weaknesses: List[str]
    opportunities: List[str]
    threats: List[str]


class Recommendations(CamelModel):
    """Grouped by horizon: 30 days, 90 days, 12 months."""

    immediate: List[str]
    short_term: List[str]
    long_term: List[str]


class PortfolioAnalytics(CamelModel):
    portfolio_health: PortfolioHealth
    maturity_analysis: MaturityAnalysis
    risk_assessment: RiskAssessment
    performance_metrics: PerformanceMetrics
    strategic_insights: StrategicInsights
    recommendations: Recommendations
