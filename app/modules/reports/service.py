# app/modules/reports/service.py
import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.config.settings import settings
from app.core.exceptions import InfrastructureFault
from .repository import ReportRepository
from .schemas import ReportSummary, TopProductResponse

logger = logging.getLogger(__name__)

def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken as UTC; aware ones are converted"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

def day_bounds(day: date):
    """[midnight, next midnight) of a UTC calendar day"""
    if isinstance(day, datetime):
        day = as_utc(day).date()
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)

class ReportService:
    """
    Sales report aggregator.

    Each call is its own read-only unit of work: a transaction the report
    opened is ended when the report is done. A transaction the caller
    already had open on the session is left as it was.
    """

    def __init__(self, db: Session, isolation_level: Optional[str] = None):
        self.db = db
        self.repository = ReportRepository(db)
        self.isolation_level = isolation_level or settings.report_isolation_level

    def report_between(self, start: datetime, end: datetime) -> ReportSummary:
        """Revenue, transaction count and top product for [start, end)"""
        start, end = as_utc(start), as_utc(end)
        if end <= start:
            return ReportSummary()

        # A transaction already open on the session belongs to the caller
        owns_transaction = not self.db.in_transaction()

        try:
            if owns_transaction:
                self._begin_snapshot()

            total_revenue, total_transactions = self.repository.get_revenue_and_count(start, end)
            top = self.repository.get_top_product(start, end)

        except SQLAlchemyError as e:
            logger.exception(f"❌ Report {start.isoformat()} - {end.isoformat()} failed")
            raise InfrastructureFault(
                f"Report failed: {e}",
                public_message="Failed to generate report"
            ) from e
        finally:
            if owns_transaction:
                self.db.rollback()

        return ReportSummary(
            total_revenue=total_revenue,
            total_transactions=total_transactions,
            top_product=TopProductResponse(name=top[0], quantity_sold=top[1]) if top else None
        )

    def report_for_day(self, day: date) -> ReportSummary:
        start, end = day_bounds(day)
        return self.report_between(start, end)

    def _begin_snapshot(self):
        """
        Run both aggregates against one snapshot on server databases.
        SQLite serializes writers, and every checkout commits its
        transaction and details together, so it needs no isolation change.
        """
        if not self.isolation_level:
            return
        if self.db.get_bind().dialect.name == "sqlite":
            return
        self.db.connection(execution_options={"isolation_level": self.isolation_level})
