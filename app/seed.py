"""
Sample data for development / demo.

- ``python -m app.seed`` inserts sample ventures and one demo investor share
  into the configured database.  Idempotent: skips if ventures exist.
- The vendor catalog datasets (``CATALOG_*``) are loaded into the in-memory
  catalog repositories at start-up by ``app.repositories.catalog_repo``.
"""

import asyncio
import logging
from datetime import date, datetime, timezone

from sqlalchemy import select

from app.db.session import AsyncSessionLocal, create_tables
from app.models.investor_share import InvestorShare, VentureIdList
from app.models.venture import Venture, VenturePriority
from app.schemas.catalog import (
    AssessmentEntry,
    BuyerAssessment,
    BuyerVendor,
    SellerDocument,
    SellerRequest,
    VendorProfile,
)

logger = logging.getLogger(__name__)

# ── Portfolio ──

VENTURES = [
    Venture(
        id="venture-tprm-monitor",
        name="tprm-monitor-platform",
        description="Enterprise-grade real-time vendor risk monitoring platform",
        category="Vendor & Risk Management",
        stage="mvp",
        maturity=80,
        priority=VenturePriority.HIGH,
        inevitability="Risk management becoming CEO-level priority.",
        market_size="$25B vendor risk management market",
        funding_need="$1M for enterprise scaling",
        repository="https://github.com/ddevaix-commits/tprm-monitor-platform",
        language="TypeScript",
        created_at=datetime(2024, 3, 1, 9, 0, 0, tzinfo=timezone.utc),
    ),
    Venture(
        id="venture-vendorhub",
        name="vendorhub-stage2-complete",
        description="VendorHub Platform - Stage 2 AI Engine Complete Implementation",
        category="Vendor & Risk Management",
        stage="growth",
        maturity=85,
        priority=VenturePriority.HIGH,
        market_size="$20B vendor intelligence market",
        funding_need="$2M for enterprise expansion",
        repository="https://github.com/ddevaix-commits/vendorhub-stage2-complete",
        language="TypeScript",
        created_at=datetime(2024, 4, 12, 9, 0, 0, tzinfo=timezone.utc),
    ),
    Venture(
        id="venture-lens",
        name="lens",
        description="Focus and clarity for expertise matching within organizations",
        category="Business & Networking",
        stage="prototype",
        maturity=45,
        priority=VenturePriority.MEDIUM,
        market_size="$15B expertise management market",
        funding_need="$300K for MVP completion",
        repository="https://github.com/ddevaix-commits/lens",
        language="TypeScript",
        created_at=datetime(2024, 5, 2, 9, 0, 0, tzinfo=timezone.utc),
    ),
    Venture(
        id="venture-tutor-copilot",
        name="ai-tutor-copilot",
        description="AI-powered tutoring assistant system for education automation",
        category="Education & Learning",
        stage="prototype",
        maturity=40,
        priority=VenturePriority.MEDIUM,
        market_size="$40B education technology market",
        funding_need="$250K for MVP development",
        repository="https://github.com/ddevaix-commits/ai-tutor-copilot",
        language="TypeScript",
        created_at=datetime(2024, 6, 20, 9, 0, 0, tzinfo=timezone.utc),
    ),
    Venture(
        id="venture-pokerface",
        name="pokerface-networking",
        description="AI-powered strategic networking platform with gamification",
        category="Business & Networking",
        stage="idea",
        maturity=15,
        priority=VenturePriority.LOW,
        market_size="$30B professional networking market",
        funding_need="$150K for prototype development",
        repository="https://github.com/ddevaix-commits/pokerface-networking",
        language="TypeScript",
        created_at=datetime(2024, 7, 8, 9, 0, 0, tzinfo=timezone.utc),
    ),
]

DEMO_SHARES = [
    InvestorShare(
        id="share-demo",
        name="Demo LP preview",
        email="lp@example.com",
        company="Example Capital",
        password="demo-password",
        share_token="demo-share-token",
        venture_ids=VentureIdList(
            ["venture-lens", "venture-tprm-monitor", "venture-vendorhub"]
        ).encode(),
        custom_message="Thanks for taking a look at the portfolio.",
    ),
]


# ── Vendor catalog ──

CATALOG_PROFILE = VendorProfile(
    id="1",
    company_name="TechCorp Solutions",
    domain="techcorp.com",
    description=(
        "Leading provider of cloud infrastructure and enterprise solutions "
        "with a focus on security and scalability."
    ),
    category="Cloud Services",
    location="San Francisco, CA",
    employee_count="500-1000",
    revenue="$100M-500M",
    founded_year=2015,
    website="https://techcorp.com",
    contact_email="contact@techcorp.com",
    contact_phone="+1 (555) 123-4567",
    certifications=["SOC 2 Type II", "ISO 27001", "GDPR", "PCI DSS"],
    key_services=["Cloud Hosting", "Data Analytics", "Security Services", "DevOps Solutions"],
    compliance_score=92,
    risk_score=85,
    passport_status="approved",
    last_updated=date(2024, 1, 15),
    assessment_history=[
        AssessmentEntry(
            date=date(2024, 1, 15),
            score=85,
            status="approved",
            assessor="John Doe",
            notes="Excellent security posture",
        ),
        AssessmentEntry(
            date=date(2023, 10, 20),
            score=78,
            status="approved",
            assessor="Jane Smith",
            notes="Good overall, minor improvements needed",
        ),
    ],
)

CATALOG_DOCUMENTS = [
    SellerDocument(
        id="1",
        name="SOC 2 Type II Report",
        type="Compliance",
        upload_date=date(2024, 1, 10),
        status="verified",
    ),
    SellerDocument(
        id="2",
        name="ISO 27001 Certificate",
        type="Certification",
        upload_date=date(2024, 1, 8),
        status="verified",
    ),
    SellerDocument(
        id="3",
        name="Security Policy Document",
        type="Policy",
        upload_date=date(2024, 1, 5),
        status="uploaded",
    ),
]

CATALOG_SELLER_REQUESTS = [
    SellerRequest(
        id="1",
        buyer_company="Global Enterprises",
        buyer_domain="globalenterprises.com",
        category="Cloud Services",
        urgency="high",
        requested_date=date(2024, 1, 20),
        status="in_progress",
        estimated_time="2 minutes",
        progress=75,
    ),
    SellerRequest(
        id="2",
        buyer_company="TechStart Inc",
        buyer_domain="techstart.io",
        category="Cloud Services",
        urgency="medium",
        requested_date=date(2024, 1, 19),
        status="pending",
        estimated_time="5 minutes",
        progress=0,
    ),
    SellerRequest(
        id="3",
        buyer_company="Finance Corp",
        buyer_domain="financecorp.com",
        category="Cloud Services",
        urgency="critical",
        requested_date=date(2024, 1, 18),
        status="completed",
        estimated_time="1 minute",
        progress=100,
    ),
]

CATALOG_BUYER_VENDORS = [
    BuyerVendor(
        id="1",
        name="TechCorp Solutions",
        category="Cloud Services",
        risk_score=85,
        risk_level="low",
        compliance_score=92,
        status="active",
        last_assessed=date(2024, 1, 15),
        description="Leading provider of cloud infrastructure and enterprise solutions",
        location="San Francisco, CA",
        employee_count="500-1000",
        revenue="$100M-500M",
        certifications=["SOC 2 Type II", "ISO 27001", "GDPR"],
        key_services=["Cloud Hosting", "Data Analytics", "Security Services"],
        assessment_history=[
            AssessmentEntry(
                date=date(2024, 1, 15),
                score=85,
                assessor="John Doe",
                notes="Excellent security posture",
            )
        ],
    ),
    BuyerVendor(
        id="2",
        name="DataSecure Inc",
        category="Cybersecurity",
        risk_score=45,
        risk_level="medium",
        compliance_score=78,
        status="active",
        last_assessed=date(2024, 1, 10),
        description="Specialized cybersecurity solutions for enterprise clients",
        location="New York, NY",
        employee_count="100-500",
        revenue="$50M-100M",
        certifications=["SOC 2 Type I", "ISO 27001"],
        key_services=["Threat Detection", "Incident Response", "Compliance Management"],
        assessment_history=[
            AssessmentEntry(
                date=date(2024, 1, 10),
                score=45,
                assessor="Jane Smith",
                notes="Needs improvement in incident response",
            )
        ],
    ),
    BuyerVendor(
        id="3",
        name="GlobalPay Systems",
        category="Financial Services",
        risk_score=25,
        risk_level="high",
        compliance_score=65,
        status="under_review",
        last_assessed=date(2024, 1, 5),
        description="Payment processing and financial technology solutions",
        location="London, UK",
        employee_count="1000-5000",
        revenue="$500M-1B",
        certifications=["PCI DSS", "SOC 1"],
        key_services=["Payment Processing", "Risk Management", "Compliance"],
        assessment_history=[
            AssessmentEntry(
                date=date(2024, 1, 5),
                score=25,
                assessor="Mike Johnson",
                notes="Critical compliance issues identified",
            )
        ],
    ),
]

CATALOG_BUYER_ASSESSMENTS = [
    BuyerAssessment(
        id="1",
        vendor_name="StartupXYZ",
        vendor_domain="startupxyz.com",
        category="AI Services",
        urgency="high",
        requested_by="Sarah Wilson",
        requested_date=date(2024, 1, 20),
        status="in_progress",
        estimated_time="2 minutes",
        progress=75,
    ),
    BuyerAssessment(
        id="2",
        vendor_name="CloudNet Pro",
        vendor_domain="cloudnetpro.com",
        category="Cloud Services",
        urgency="medium",
        requested_by="Tom Brown",
        requested_date=date(2024, 1, 19),
        status="pending",
        estimated_time="5 minutes",
        progress=0,
    ),
]


async def seed() -> None:
    """Create tables and insert the sample portfolio if the database is empty."""
    await create_tables()

    async with AsyncSessionLocal() as session:
        result = await session.execute(select(Venture).limit(1))
        if result.scalars().first() is not None:
            logger.info("Database already contains ventures — skipping seed.")
            return

        for venture in VENTURES:
            session.add(venture)
        await session.commit()

        # Shares reference ventures by id, so insert after
        for share in DEMO_SHARES:
            session.add(share)
        await session.commit()

        logger.info("Seeded %d ventures, %d investor shares", len(VENTURES), len(DEMO_SHARES))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")
    asyncio.run(seed())
