"""Receipt (receivable) domain service."""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from flockledger.domain import errors, ledger
from flockledger.domain.balances import in_period
from flockledger.domain.book import Book
from flockledger.domain.entities import Receivable, ReceivableDraft, Voucher
from flockledger.domain.errors import NotFoundError


class ReceivableService:
    """Service for recording customer receipts and their vouchers."""

    def __init__(self, book: Book):
        self.book = book

    def _check_references(self, customer_id: Optional[int], account_id: Optional[int]) -> None:
        state = self.book.state
        if customer_id is not None and customer_id not in state.customers:
            raise NotFoundError(errors.customer_not_found(customer_id))
        if account_id is not None and account_id not in state.accounts:
            raise NotFoundError(errors.account_not_found(account_id))

    def default_account_id(self) -> Optional[int]:
        """The account receipts go to when none is chosen: the first one."""
        return next(iter(self.book.state.accounts), None)

    def create_receivable(
        self,
        date: date,
        customer_id: int,
        amount: Decimal,
        account_id: Optional[int] = None,
    ) -> tuple[Receivable, Voucher]:
        """Record a receipt and its voucher.

        Args:
            date: Receipt date
            customer_id: Paying customer
            amount: Amount received
            account_id: Account the money went into; defaults to the first
                account

        Returns:
            The stored receipt and its voucher

        Raises:
            NotFoundError: If the customer or account doesn't exist
            ValidationError: If the amount is not positive
        """
        if account_id is None:
            account_id = self.default_account_id()
        self._check_references(customer_id, account_id)
        draft = ReceivableDraft(
            date=date, customer_id=customer_id, amount=amount, account_id=account_id
        )
        return self.book.apply(ledger.record_receivable, draft, strict=self.book.strict_references)

    def get_receivable(self, receivable_id: int) -> Optional[Receivable]:
        return self.book.state.receivables.get(receivable_id)

    def list_receivables(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        customer_id: Optional[int] = None,
        account_id: Optional[int] = None,
    ) -> list[Receivable]:
        """List receipts with filters, newest first."""
        receivables = [
            r
            for r in self.book.state.receivables.values()
            if in_period(r.date, start_date, end_date)
            and (customer_id is None or r.customer_id == customer_id)
            and (account_id is None or r.account_id == account_id)
        ]
        return sorted(receivables, key=lambda r: (r.date, r.id), reverse=True)

    def update_receivable(
        self,
        receivable_id: int,
        date: Optional[date] = None,
        customer_id: Optional[int] = None,
        amount: Optional[Decimal] = None,
        account_id: Optional[int] = None,
    ) -> Receivable:
        """Update receipt fields and rewrite its voucher.

        Raises:
            NotFoundError: If the receipt, or a new customer or account, doesn't exist
            MissingReferenceError: In strict mode, if the customer is gone
            ValidationError: If the amount is not positive
        """
        receivable = self.get_receivable(receivable_id)
        if receivable is None:
            raise NotFoundError(errors.receivable_not_found(receivable_id))

        updated = replace(
            receivable,
            date=date if date is not None else receivable.date,
            customer_id=customer_id if customer_id is not None else receivable.customer_id,
            amount=amount if amount is not None else receivable.amount,
            account_id=account_id if account_id is not None else receivable.account_id,
        )
        # Only new references are checked. A stale account falls back to cash,
        # a stale customer to "Unknown" unless references are strict.
        self._check_references(customer_id, account_id)
        return self.book.apply(
            ledger.update_receivable, updated, strict=self.book.strict_references
        )

    def delete_receivable(self, receivable_id: int) -> Receivable:
        """Delete a receipt and its voucher."""
        return self.book.apply(ledger.delete_receivable, receivable_id)
