"""Read-side aggregates over the book state."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from typing import Optional

from flockledger.domain import errors
from flockledger.domain.entities import (
    DashboardTotals,
    MonthlyFigures,
    PeriodTotals,
    Sale,
    State,
)
from flockledger.domain.errors import NotFoundError

ZERO = Decimal("0")


def customer_balance(state: State, customer_id: int) -> Decimal:
    """Amount the customer owes: sales minus receipts.

    Positive means the customer owes money, zero or negative means settled
    or paid in advance.
    """
    sold = sum((s.total for s in state.sales.values() if s.customer_id == customer_id), ZERO)
    received = sum(
        (r.amount for r in state.receivables.values() if r.customer_id == customer_id), ZERO
    )
    return sold - received


def account_balance(state: State, account_id: int) -> Decimal:
    """Opening balance plus receipts deposited into the account.

    Outflows are not tracked, so this only ever grows from the opening
    balance.
    """
    account = state.accounts.get(account_id)
    if account is None:
        raise NotFoundError(errors.account_not_found(account_id))
    deposits = sum(
        (r.amount for r in state.receivables.values() if r.account_id == account_id), ZERO
    )
    return account.initial_balance + deposits


def farm_sold(state: State, farm_id: int) -> int:
    return sum(s.chickens for s in state.sales.values() if s.farm_id == farm_id)


def farm_remaining_stock(state: State, farm_id: int) -> int:
    """Birds left at a farm. Not clamped: oversold farms go negative."""
    farm = state.farms.get(farm_id)
    if farm is None:
        raise NotFoundError(errors.farm_not_found(farm_id))
    return farm.initial_stock - farm_sold(state, farm_id)


def in_period(value: date, start_date: Optional[date], end_date: Optional[date]) -> bool:
    """Inclusive range check; a missing bound is open."""
    if start_date is not None and value < start_date:
        return False
    if end_date is not None and value > end_date:
        return False
    return True


def sales_in_period(
    sales: Iterable[Sale], start_date: Optional[date], end_date: Optional[date]
) -> list[Sale]:
    return [s for s in sales if in_period(s.date, start_date, end_date)]


def totals(sales: Iterable[Sale]) -> PeriodTotals:
    sales = list(sales)
    return PeriodTotals(
        count=len(sales),
        chickens=sum(s.chickens for s in sales),
        weight=sum((s.weight for s in sales), ZERO),
        total=sum((s.total for s in sales), ZERO),
    )


def period_aggregate(
    sales: Iterable[Sale], start_date: Optional[date], end_date: Optional[date]
) -> PeriodTotals:
    """Sum birds, weight and amount over sales dated within the range."""
    return totals(sales_in_period(sales, start_date, end_date))


def dashboard_totals(state: State) -> DashboardTotals:
    total_sales = sum((s.total for s in state.sales.values()), ZERO)
    total_received = sum((r.amount for r in state.receivables.values()), ZERO)
    birds_initial = sum(f.initial_stock for f in state.farms.values())
    birds_sold = sum(s.chickens for s in state.sales.values())
    return DashboardTotals(
        total_sales=total_sales,
        total_received=total_received,
        outstanding=total_sales - total_received,
        customer_count=len(state.customers),
        farm_count=len(state.farms),
        birds_initial=birds_initial,
        birds_sold=birds_sold,
        birds_left=birds_initial - birds_sold,
    )


def monthly_series(state: State) -> list[MonthlyFigures]:
    """Sales and receipts per calendar month, oldest month first."""
    sales: dict[str, Decimal] = {}
    received: dict[str, Decimal] = {}
    for sale in state.sales.values():
        month = sale.date.strftime("%Y-%m")
        sales[month] = sales.get(month, ZERO) + sale.total
    for receivable in state.receivables.values():
        month = receivable.date.strftime("%Y-%m")
        received[month] = received.get(month, ZERO) + receivable.amount

    return [
        MonthlyFigures(month=month, sales=sales.get(month, ZERO), received=received.get(month, ZERO))
        for month in sorted(set(sales) | set(received))
    ]
