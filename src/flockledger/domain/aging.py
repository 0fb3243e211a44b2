"""Receivables aging by FIFO allocation of payments.

All payments a customer has made are pooled and applied to that
customer's sales oldest first. Whatever the pool does not cover is open
debt, bucketed by how many days old the sale is on the reporting date.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from flockledger.domain.entities import (
    AgingBuckets,
    AgingRow,
    Customer,
    Receivable,
    Sale,
)

ZERO = Decimal("0")

# Balances at or below this are treated as settled.
SETTLED_TOLERANCE = Decimal("0.01")


def age_in_days(sale_date: date, as_of: date) -> int:
    return abs((as_of - sale_date).days)


def open_invoices(sales: Iterable[Sale], paid: Decimal) -> list[tuple[Sale, Decimal]]:
    """Apply ``paid`` to ``sales`` oldest first.

    Returns ``(sale, remaining_due)`` for every sale the pool does not fully
    cover. Sales on the same date keep their input order.
    """
    pool = paid
    result = []
    for sale in sorted(sales, key=lambda s: s.date):
        if pool >= sale.total:
            pool -= sale.total
        else:
            result.append((sale, sale.total - pool))
            pool = ZERO
    return result


def bucket_amounts(invoices: Iterable[tuple[Sale, Decimal]], as_of: date) -> AgingBuckets:
    """Sum open amounts into 0-15, 16-30, 31-60 and 60+ day buckets."""
    days_0_15 = days_16_30 = days_31_60 = days_60_plus = ZERO
    for sale, due in invoices:
        days = age_in_days(sale.date, as_of)
        if days <= 15:
            days_0_15 += due
        elif days <= 30:
            days_16_30 += due
        elif days <= 60:
            days_31_60 += due
        else:
            days_60_plus += due
    return AgingBuckets(
        days_0_15=days_0_15,
        days_16_30=days_16_30,
        days_31_60=days_31_60,
        days_60_plus=days_60_plus,
    )


def age_receivables(
    customers: Iterable[Customer],
    sales: Iterable[Sale],
    receivables: Iterable[Receivable],
    as_of: date,
) -> list[AgingRow]:
    """Build the aging report as of ``as_of``.

    Customers whose outstanding total is within ``SETTLED_TOLERANCE`` of
    zero are left out. Rows are ordered by amount due, largest first.
    The result depends only on the arguments.
    """
    sales = list(sales)
    receivables = list(receivables)

    rows = []
    for customer in customers:
        customer_sales = [s for s in sales if s.customer_id == customer.id]
        payments = [r for r in receivables if r.customer_id == customer.id]
        paid = sum((r.amount for r in payments), ZERO)

        buckets = bucket_amounts(open_invoices(customer_sales, paid), as_of)
        total_due = buckets.total
        if total_due <= SETTLED_TOLERANCE:
            continue

        last_payment = max(payments, key=lambda r: r.date) if payments else None
        rows.append(
            AgingRow(
                customer=customer,
                total_due=total_due,
                buckets=buckets,
                last_payment=last_payment,
            )
        )

    return sorted(rows, key=lambda row: row.total_due, reverse=True)
