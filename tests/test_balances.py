"""Tests for balance and period aggregates."""

from datetime import date
from decimal import Decimal

import pytest

from flockledger.domain import balances
from flockledger.domain.errors import NotFoundError


def test_customer_balance_moves_with_sales_and_receipts(
    book, sale_service, receivable_service, sample_customer, sample_farm
):
    assert balances.customer_balance(book.state, sample_customer.id) == Decimal("0")

    sale_service.create_sale(
        date=date(2024, 3, 1),
        customer_id=sample_customer.id,
        farm_id=sample_farm.id,
        chickens=10,
        weight=Decimal("20"),
        rate=Decimal("300"),
    )
    assert balances.customer_balance(book.state, sample_customer.id) == Decimal("6000")

    receivable_service.create_receivable(
        date=date(2024, 3, 2), customer_id=sample_customer.id, amount=Decimal("2500")
    )
    assert balances.customer_balance(book.state, sample_customer.id) == Decimal("3500")


def test_account_balance_includes_opening_and_deposits(
    book, account_service, receivable_service, sample_customer
):
    account_id = account_service.create_account("Meezan Bank", initial_balance=Decimal("1000"))
    receivable_service.create_receivable(
        date=date(2024, 3, 2), customer_id=sample_customer.id, amount=Decimal("500"), account_id=account_id
    )
    receivable_service.create_receivable(
        date=date(2024, 3, 3), customer_id=sample_customer.id, amount=Decimal("700")
    )

    assert balances.account_balance(book.state, account_id) == Decimal("1500")
    # The default deposit account is the first one.
    assert balances.account_balance(book.state, 1) == Decimal("700")


def test_account_balance_missing_account(book):
    with pytest.raises(NotFoundError):
        balances.account_balance(book.state, 99)


def test_farm_remaining_stock_can_go_negative(book, sale_service, farm_service, sample_customer):
    farm_id = farm_service.create_farm("Small Shed", 100)
    sale_service.create_sale(
        date=date(2024, 3, 1),
        customer_id=sample_customer.id,
        farm_id=farm_id,
        chickens=150,
        weight=Decimal("300"),
        rate=Decimal("200"),
    )

    assert balances.farm_sold(book.state, farm_id) == 150
    assert balances.farm_remaining_stock(book.state, farm_id) == -50


@pytest.mark.parametrize(
    "value, start, end, expected",
    [
        (date(2024, 3, 1), date(2024, 3, 1), date(2024, 3, 31), True),
        (date(2024, 3, 31), date(2024, 3, 1), date(2024, 3, 31), True),
        (date(2024, 2, 29), date(2024, 3, 1), date(2024, 3, 31), False),
        (date(2024, 4, 1), date(2024, 3, 1), date(2024, 3, 31), False),
        (date(2000, 1, 1), None, date(2024, 3, 31), True),
        (date(2030, 1, 1), date(2024, 3, 1), None, True),
        (date(2030, 1, 1), None, None, True),
    ],
)
def test_in_period_is_inclusive(value, start, end, expected):
    assert balances.in_period(value, start, end) is expected


def test_period_aggregate(book, sale_service, sample_customer, sample_farm):
    for sale_date, chickens in [(date(2024, 3, 1), 100), (date(2024, 3, 15), 200), (date(2024, 4, 9), 300)]:
        sale_service.create_sale(
            date=sale_date,
            customer_id=sample_customer.id,
            farm_id=sample_farm.id,
            chickens=chickens,
            weight=Decimal(chickens * 2),
            rate=Decimal("100"),
        )

    totals = balances.period_aggregate(book.state.sales.values(), date(2024, 3, 1), date(2024, 3, 31))

    assert totals.count == 2
    assert totals.chickens == 300
    assert totals.weight == Decimal("600")
    assert totals.total == Decimal("60000")


def test_dashboard_and_monthly_series(
    book, sale_service, receivable_service, sample_customer, sample_farm
):
    sale_service.create_sale(
        date=date(2024, 2, 10),
        customer_id=sample_customer.id,
        farm_id=sample_farm.id,
        chickens=100,
        weight=Decimal("200"),
        rate=Decimal("100"),
    )
    sale_service.create_sale(
        date=date(2024, 3, 10),
        customer_id=sample_customer.id,
        farm_id=sample_farm.id,
        chickens=50,
        weight=Decimal("100"),
        rate=Decimal("100"),
    )
    receivable_service.create_receivable(
        date=date(2024, 3, 12), customer_id=sample_customer.id, amount=Decimal("5000")
    )

    dashboard = balances.dashboard_totals(book.state)
    assert dashboard.total_sales == Decimal("30000")
    assert dashboard.total_received == Decimal("5000")
    assert dashboard.outstanding == Decimal("25000")
    assert dashboard.customer_count == 1
    assert dashboard.farm_count == 1
    assert dashboard.birds_initial == 5000
    assert dashboard.birds_sold == 150
    assert dashboard.birds_left == 4850

    months = balances.monthly_series(book.state)
    assert [(m.month, m.sales, m.received) for m in months] == [
        ("2024-02", Decimal("20000"), Decimal("0")),
        ("2024-03", Decimal("10000"), Decimal("5000")),
    ]
