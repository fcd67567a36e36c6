"""SQLModel table models — import here so metadata is populated."""

from app.models.investor_share import InvestorShare  # noqa: F401
from app.models.venture import Venture  # noqa: F401
