# tests/test_reports.py
from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import InfrastructureFault
from app.modules.checkout.schemas import CheckoutItem
from app.modules.checkout.service import CheckoutService
from app.modules.reports.repository import ReportRepository
from app.modules.reports.service import ReportService, day_bounds
from app.shared.database.models import Category, Product
from conftest import make_category, make_product

UTC = timezone.utc

def at(*args):
    return datetime(*args, tzinfo=UTC)

def sell(db, when, *lines):
    service = CheckoutService(db, clock=lambda: when)
    return service.checkout([CheckoutItem(product_id=pid, quantity=qty) for pid, qty in lines])

@pytest.fixture
def catalog(db):
    food = make_category(db)
    return {
        "apple": make_product(db, "Apple", 1000, 100, food).id,
        "orange": make_product(db, "Orange", 2500, 100, food).id,
        "pear": make_product(db, "Pear", 500, 100, food).id,
    }

def test_empty_window_reports_zeros(db):
    summary = ReportService(db).report_between(at(2026, 2, 1), at(2026, 2, 2))

    assert summary.total_revenue == 0
    assert summary.total_transactions == 0
    assert summary.top_product is None

def test_revenue_count_and_top_product(db, catalog):
    # 15000 = 5 apples + 4 oranges; 20000 = 10 apples + 4 oranges
    sell(db, at(2026, 2, 1, 9), (catalog["apple"], 5), (catalog["orange"], 4))
    sell(db, at(2026, 2, 1, 17), (catalog["apple"], 10), (catalog["orange"], 4))

    summary = ReportService(db).report_between(at(2026, 2, 1), at(2026, 2, 2))

    assert summary.total_revenue == 35000
    assert summary.total_transactions == 2
    assert summary.top_product.name == "Apple"
    assert summary.top_product.quantity_sold == 15

def test_window_is_half_open(db, catalog):
    sell(db, at(2026, 2, 1, 0, 0, 0), (catalog["apple"], 1))
    sell(db, at(2026, 2, 1, 23, 59, 59), (catalog["pear"], 3))
    sell(db, at(2026, 2, 2, 0, 0, 0), (catalog["orange"], 9))

    summary = ReportService(db).report_between(at(2026, 2, 1), at(2026, 2, 2))

    assert summary.total_transactions == 2
    assert summary.total_revenue == 1000 + 1500
    assert summary.top_product.name == "Pear"

def test_top_product_tie_breaks_by_name(db, catalog):
    sell(db, at(2026, 3, 1, 10), (catalog["pear"], 2))
    sell(db, at(2026, 3, 1, 11), (catalog["apple"], 2))

    summary = ReportService(db).report_between(at(2026, 3, 1), at(2026, 3, 2))

    assert summary.top_product.name == "Apple"
    assert summary.top_product.quantity_sold == 2

def test_top_product_groups_by_snapshot_name(db, catalog):
    sell(db, at(2026, 3, 1, 10), (catalog["apple"], 3))

    product = db.get(Product, catalog["apple"])
    product.name = "Red Apple"
    db.commit()

    sell(db, at(2026, 3, 1, 11), (catalog["apple"], 2))
    sell(db, at(2026, 3, 1, 12), (catalog["orange"], 4))

    summary = ReportService(db).report_between(at(2026, 3, 1), at(2026, 3, 2))

    assert summary.top_product.name == "Orange"
    assert summary.top_product.quantity_sold == 4

def test_revenue_matches_sum_of_transactions(db, catalog):
    totals = [
        sell(db, at(2026, 4, 1, h), (catalog["apple"], h), (catalog["pear"], 1)).total_amount
        for h in range(1, 6)
    ]

    summary = ReportService(db).report_between(at(2026, 4, 1), at(2026, 4, 2))

    assert summary.total_revenue == sum(totals)
    assert summary.total_transactions == len(totals)

def test_reporting_is_idempotent(db, catalog):
    sell(db, at(2026, 2, 1, 9), (catalog["apple"], 2))
    service = ReportService(db)

    first = service.report_between(at(2026, 2, 1), at(2026, 2, 2))
    second = service.report_between(at(2026, 2, 1), at(2026, 2, 2))

    assert first == second

def test_report_for_day(db, catalog):
    sell(db, at(2026, 2, 1, 23), (catalog["apple"], 1))
    sell(db, at(2026, 2, 2, 1), (catalog["orange"], 1))

    summary = ReportService(db).report_for_day(date(2026, 2, 2))

    assert summary.total_transactions == 1
    assert summary.total_revenue == 2500
    assert summary.top_product.name == "Orange"

def test_naive_and_offset_bounds_are_utc(db, catalog):
    sell(db, at(2026, 2, 1, 12), (catalog["apple"], 1))
    service = ReportService(db)

    naive = service.report_between(datetime(2026, 2, 1), datetime(2026, 2, 2))
    jakarta = timezone(timedelta(hours=7))
    # 19:00 Jakarta == 12:00 UTC, so this window starts one second after the sale
    shifted = service.report_between(
        datetime(2026, 2, 1, 19, 0, 1, tzinfo=jakarta),
        datetime(2026, 2, 2, 7, tzinfo=jakarta)
    )

    assert naive.total_transactions == 1
    assert shifted.total_transactions == 0

def test_inverted_window_is_empty(db, catalog):
    sell(db, at(2026, 2, 1, 12), (catalog["apple"], 1))

    summary = ReportService(db).report_between(at(2026, 2, 2), at(2026, 2, 1))

    assert summary.total_transactions == 0
    assert summary.top_product is None

def test_day_bounds():
    assert day_bounds(date(2026, 2, 1)) == (at(2026, 2, 1), at(2026, 2, 2))
    assert day_bounds(at(2026, 2, 1, 15, 30)) == (at(2026, 2, 1), at(2026, 2, 2))

def test_storage_fault_is_infrastructure_fault(db, monkeypatch):
    def broken(self, start, end):
        raise OperationalError("SELECT", {}, Exception("connection lost"))

    monkeypatch.setattr(ReportRepository, "get_top_product", broken)

    with pytest.raises(InfrastructureFault) as exc:
        ReportService(db).report_between(at(2026, 2, 1), at(2026, 2, 2))

    assert exc.value.public_message == "Failed to generate report"

def test_report_ends_the_transaction_it_opened(db, catalog):
    sell(db, at(2026, 2, 1, 9), (catalog["apple"], 1))
    assert not db.in_transaction()

    ReportService(db).report_between(at(2026, 2, 1), at(2026, 2, 2))

    assert not db.in_transaction()

def test_report_keeps_callers_pending_work(db, session_factory, catalog):
    sell(db, at(2026, 2, 1, 9), (catalog["apple"], 1))

    db.add(Category(name="Pending"))
    db.flush()

    summary = ReportService(db).report_between(at(2026, 2, 1), at(2026, 2, 2))

    assert summary.total_transactions == 1
    assert db.in_transaction()
    db.commit()

    session = session_factory()
    try:
        assert session.query(Category).filter(Category.name == "Pending").count() == 1
    finally:
        session.close()
