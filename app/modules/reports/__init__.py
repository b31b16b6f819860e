# app/modules/reports/__init__.py
"""
Reports module

Revenue, transaction count and best-selling product over a half-open
UTC window, read from the transaction log written by checkout.
"""

from .router import router as reports_router
from .service import ReportService
from .repository import ReportRepository

__all__ = [
    "reports_router",
    "ReportService",
    "ReportRepository"
]
