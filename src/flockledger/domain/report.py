"""Reporting domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from flockledger.domain import errors
from flockledger.domain.aging import age_receivables
from flockledger.domain.balances import (
    ZERO,
    account_balance,
    customer_balance,
    dashboard_totals,
    farm_remaining_stock,
    in_period,
    monthly_series,
    sales_in_period,
    totals,
)
from flockledger.domain.book import Book
from flockledger.domain.entities import (
    Account,
    AgingRow,
    Customer,
    CustomerLedger,
    DashboardTotals,
    Farm,
    FarmPerformance,
    LedgerLine,
    LedgerLineType,
    MonthlyFigures,
    SalesSummary,
    Voucher,
)
from flockledger.domain.errors import NotFoundError


class ReportService:
    """Service building the read-only views of the book."""

    def __init__(self, book: Book):
        """Initialize report service.

        Args:
            book: Book holding the current state
        """
        self.book = book

    def sales_summary(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> SalesSummary:
        """Sales dated within the period, newest first, with their totals."""
        sales = sales_in_period(self.book.state.sales.values(), start_date, end_date)
        sales.sort(key=lambda s: s.date, reverse=True)
        return SalesSummary(
            start_date=start_date,
            end_date=end_date,
            sales=tuple(sales),
            totals=totals(sales),
        )

    def customer_ledger(
        self,
        customer_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> CustomerLedger:
        """Statement of a customer's sales and receipts with running balance.

        The opening balance covers everything dated before ``start_date``.
        Within the period, lines are in date order; on the same date sales
        come before receipts.

        Raises:
            NotFoundError: If the customer does not exist
        """
        state = self.book.state
        customer = state.customers.get(customer_id)
        if customer is None:
            raise NotFoundError(errors.customer_not_found(customer_id))

        sales = [s for s in state.sales.values() if s.customer_id == customer_id]
        receipts = [r for r in state.receivables.values() if r.customer_id == customer_id]

        opening = ZERO
        if start_date is not None:
            opening = sum((s.total for s in sales if s.date < start_date), ZERO) - sum(
                (r.amount for r in receipts if r.date < start_date), ZERO
            )

        entries = []
        for sale in sales:
            if not in_period(sale.date, start_date, end_date):
                continue
            farm = state.farms.get(sale.farm_id)
            farm_name = farm.name if farm is not None else "Farm"
            vehicle_info = f" ({sale.vehicle_number})" if sale.vehicle_number else ""
            entries.append(
                (
                    sale.date,
                    sale.id,
                    LedgerLineType.SALE,
                    f"Inv #{sale.id} - {farm_name}{vehicle_info}",
                    sale.total,
                    ZERO,
                )
            )
        for receipt in receipts:
            if not in_period(receipt.date, start_date, end_date):
                continue
            entries.append(
                (
                    receipt.date,
                    receipt.id,
                    LedgerLineType.RECEIPT,
                    f"Receipt #{receipt.id}",
                    ZERO,
                    receipt.amount,
                )
            )
        entries.sort(key=lambda e: e[0])

        balance = opening
        lines = []
        for entry_date, entry_id, line_type, description, debit, credit in entries:
            balance += debit - credit
            lines.append(
                LedgerLine(
                    id=entry_id,
                    date=entry_date,
                    type=line_type,
                    description=description,
                    debit=debit,
                    credit=credit,
                    balance=balance,
                )
            )

        return CustomerLedger(
            customer=customer,
            start_date=start_date,
            end_date=end_date,
            opening_balance=opening,
            lines=tuple(lines),
            closing_balance=balance,
        )

    def farm_performance(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        farm_id: Optional[int] = None,
    ) -> list[FarmPerformance]:
        """Per-farm sales in the period and all-time remaining stock.

        Raises:
            NotFoundError: If ``farm_id`` is given but does not exist
        """
        state = self.book.state
        if farm_id is not None:
            farm = state.farms.get(farm_id)
            if farm is None:
                raise NotFoundError(errors.farm_not_found(farm_id))
            farms = [farm]
        else:
            farms = list(state.farms.values())

        result = []
        for farm in farms:
            farm_sales = [s for s in state.sales.values() if s.farm_id == farm.id]
            result.append(
                FarmPerformance(
                    farm=farm,
                    period=totals(sales_in_period(farm_sales, start_date, end_date)),
                    remaining_stock=farm_remaining_stock(state, farm.id),
                )
            )
        return result

    def aging(self, as_of: date) -> list[AgingRow]:
        """Receivables aging as of the given date."""
        state = self.book.state
        return age_receivables(
            state.customers.values(),
            state.sales.values(),
            state.receivables.values(),
            as_of,
        )

    def dashboard(self) -> DashboardTotals:
        return dashboard_totals(self.book.state)

    def monthly(self) -> list[MonthlyFigures]:
        return monthly_series(self.book.state)

    def customer_balances(self) -> list[tuple[Customer, Decimal]]:
        state = self.book.state
        return [(c, customer_balance(state, c.id)) for c in state.customers.values()]

    def account_balances(self) -> list[tuple[Account, Decimal]]:
        state = self.book.state
        return [(a, account_balance(state, a.id)) for a in state.accounts.values()]

    def farm_stock(self) -> list[tuple[Farm, int]]:
        state = self.book.state
        return [(f, farm_remaining_stock(state, f.id)) for f in state.farms.values()]

    def get_voucher(self, voucher_id: int) -> Optional[Voucher]:
        return self.book.state.vouchers.get(voucher_id)

    def search_vouchers(self, term: Optional[str] = None) -> list[Voucher]:
        """Vouchers matching ``term`` in id, description or account names.

        Matching is case-insensitive; newest (highest id) first.
        """
        vouchers = list(self.book.state.vouchers.values())
        if term:
            needle = term.lower()
            vouchers = [
                v
                for v in vouchers
                if needle in str(v.id)
                or needle in v.description.lower()
                or needle in v.debit_account.lower()
                or needle in v.credit_account.lower()
            ]
        return sorted(vouchers, key=lambda v: v.id, reverse=True)
