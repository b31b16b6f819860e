# app/modules/reports/router.py
from datetime import datetime, date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.shared.database.types import utc_now
from .service import ReportService, day_bounds
from .schemas import ReportSummary

router = APIRouter(prefix="/report", tags=["Reports"])

def _parse_date(value: str, field: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {field}")

@router.get("/today", response_model=ReportSummary)
def get_today_report(db: Session = Depends(get_db)):
    """Sales summary for the current UTC day"""
    service = ReportService(db)

    return service.report_for_day(utc_now().date())

@router.get("", response_model=ReportSummary)
def get_report(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    Sales summary between two dates (YYYY-MM-DD), both days included
    """
    if not start_date or not end_date:
        raise HTTPException(status_code=400, detail="start_date and end_date are required")

    start_day = _parse_date(start_date, "start_date")
    end_day = _parse_date(end_date, "end_date")
    if end_day < start_day:
        raise HTTPException(status_code=400, detail="end_date must be on or after start_date")

    start, _ = day_bounds(start_day)
    _, end = day_bounds(end_day)

    service = ReportService(db)

    return service.report_between(start, end)
