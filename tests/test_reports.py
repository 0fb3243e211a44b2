"""Tests for the report service."""

from datetime import date
from decimal import Decimal

import pytest

from flockledger.domain.entities import LedgerLineType
from flockledger.domain.errors import NotFoundError


@pytest.fixture
def trading_history(sale_service, receivable_service, farm_service, sample_customer, sample_farm):
    """Two farms, three sales and two receipts for the sample customer."""
    south = farm_service.create_farm("South Shed", 2000)
    sale_service.create_sale(
        date=date(2024, 2, 20),
        customer_id=sample_customer.id,
        farm_id=sample_farm.id,
        chickens=100,
        weight=Decimal("200"),
        rate=Decimal("100"),
    )
    sale_service.create_sale(
        date=date(2024, 3, 5),
        customer_id=sample_customer.id,
        farm_id=south,
        chickens=50,
        weight=Decimal("100"),
        rate=Decimal("100"),
        vehicle_number="LHR-77",
    )
    sale_service.create_sale(
        date=date(2024, 3, 10),
        customer_id=sample_customer.id,
        farm_id=sample_farm.id,
        chickens=30,
        weight=Decimal("60"),
        rate=Decimal("100"),
    )
    receivable_service.create_receivable(
        date=date(2024, 2, 25), customer_id=sample_customer.id, amount=Decimal("15000")
    )
    receivable_service.create_receivable(
        date=date(2024, 3, 5), customer_id=sample_customer.id, amount=Decimal("4000")
    )
    return {"south": south}


def test_sales_summary(report_service, trading_history):
    summary = report_service.sales_summary(date(2024, 3, 1), date(2024, 3, 31))

    assert [s.date for s in summary.sales] == [date(2024, 3, 10), date(2024, 3, 5)]
    assert summary.totals.count == 2
    assert summary.totals.chickens == 80
    assert summary.totals.weight == Decimal("160")
    assert summary.totals.total == Decimal("16000")


def test_customer_ledger_opening_and_running_balance(report_service, sample_customer, trading_history):
    ledger = report_service.customer_ledger(sample_customer.id, date(2024, 3, 1), date(2024, 3, 31))

    # 20,000 sold and 15,000 received before March.
    assert ledger.opening_balance == Decimal("5000")
    assert [(line.type, line.description) for line in ledger.lines] == [
        (LedgerLineType.SALE, "Inv #2 - South Shed (LHR-77)"),
        (LedgerLineType.RECEIPT, "Receipt #2"),
        (LedgerLineType.SALE, "Inv #3 - North Shed"),
    ]
    assert [line.balance for line in ledger.lines] == [
        Decimal("15000"),
        Decimal("11000"),
        Decimal("17000"),
    ]
    assert ledger.closing_balance == Decimal("17000")


def test_customer_ledger_without_period(report_service, sample_customer, trading_history):
    ledger = report_service.customer_ledger(sample_customer.id)

    assert ledger.opening_balance == Decimal("0")
    assert len(ledger.lines) == 5
    assert ledger.closing_balance == Decimal("17000")


def test_customer_ledger_unknown_customer(report_service):
    with pytest.raises(NotFoundError):
        report_service.customer_ledger(404)


def test_farm_performance(report_service, sample_farm, trading_history):
    rows = report_service.farm_performance(date(2024, 3, 1), date(2024, 3, 31))

    by_name = {row.farm.name: row for row in rows}
    assert by_name["North Shed"].period.chickens == 30
    assert by_name["North Shed"].period.total == Decimal("6000")
    # Remaining stock counts every sale, not just those in the period.
    assert by_name["North Shed"].remaining_stock == 4870
    assert by_name["South Shed"].period.count == 1
    assert by_name["South Shed"].remaining_stock == 1950


def test_farm_performance_single_farm(report_service, trading_history):
    rows = report_service.farm_performance(farm_id=trading_history["south"])
    assert [row.farm.name for row in rows] == ["South Shed"]


def test_aging_report(report_service, sample_customer, trading_history):
    rows = report_service.aging(date(2024, 3, 31))

    assert len(rows) == 1
    row = rows[0]
    assert row.customer == sample_customer
    # 19,000 received leaves 1,000 open on the February sale.
    assert row.total_due == Decimal("17000")
    assert row.buckets.days_31_60 == Decimal("1000")
    assert row.buckets.days_16_30 == Decimal("16000")
    assert row.buckets.days_0_15 == Decimal("0")
    assert row.last_payment.date == date(2024, 3, 5)


def test_balance_listings(report_service, sample_customer, trading_history):
    assert report_service.customer_balances() == [(sample_customer, Decimal("17000"))]
    assert [(a.name, b) for a, b in report_service.account_balances()] == [
        ("Cash in Hand", Decimal("19000")),
        ("Bank Account", Decimal("0")),
    ]
    assert [(f.name, left) for f, left in report_service.farm_stock()] == [
        ("North Shed", 4870),
        ("South Shed", 1950),
    ]


def test_search_vouchers(report_service, trading_history):
    everything = report_service.search_vouchers()
    assert [v.id for v in everything] == [5, 4, 3, 2, 1]

    receipts = report_service.search_vouchers("receipt")
    assert len(receipts) == 2

    south = report_service.search_vouchers("SALES - SOUTH")
    assert [v.description for v in south] == ["Sale #2 - Ali Traders (LHR-77)"]

    assert [v.id for v in report_service.search_vouchers("4")] == [4]


def test_dashboard(report_service, trading_history):
    dashboard = report_service.dashboard()

    assert dashboard.total_sales == Decimal("36000")
    assert dashboard.total_received == Decimal("19000")
    assert dashboard.outstanding == Decimal("17000")
    assert dashboard.birds_left == 7000 - 180
    assert [m.month for m in report_service.monthly()] == ["2024-02", "2024-03"]
