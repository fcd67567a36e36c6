"""
Database model registry.

Importing this module registers every table model with SQLModel's metadata,
which ``create_all()`` needs before it can create anything.
"""

from app.models.investor_share import InvestorShare  # noqa: F401
from app.models.venture import Venture  # noqa: F401
