"""Account domain service."""

from dataclasses import replace
from decimal import Decimal
from typing import Optional

from flockledger.domain import errors, ledger
from flockledger.domain.balances import account_balance
from flockledger.domain.book import Book
from flockledger.domain.entities import Account, AccountType
from flockledger.domain.errors import NotFoundError


class AccountService:
    """Service for managing money accounts."""

    def __init__(self, book: Book):
        """Initialize account service.

        Args:
            book: Book holding the current state
        """
        self.book = book

    def create_account(
        self,
        name: str,
        type: AccountType = AccountType.CASH,
        initial_balance: Decimal = Decimal("0"),
    ) -> int:
        """Create a new account.

        Args:
            name: Account name
            type: Account type (cash, bank or other)
            initial_balance: Opening balance, may be negative

        Returns:
            Account ID
        """
        account = self.book.apply(ledger.add_account, name, type, initial_balance)
        return account.id

    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.book.state.accounts.get(account_id)

    def list_accounts(self) -> list[Account]:
        """List all accounts.

        Returns:
            List of account entities
        """
        return list(self.book.state.accounts.values())

    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        type: Optional[AccountType] = None,
        initial_balance: Optional[Decimal] = None,
    ) -> Account:
        """Update an account.

        Args:
            account_id: Account ID to update
            name: Optional new name
            type: Optional new type
            initial_balance: Optional new opening balance

        Raises:
            NotFoundError: If account not found
        """
        account = self.get_account(account_id)
        if account is None:
            raise NotFoundError(errors.account_not_found(account_id))

        updated = replace(
            account,
            name=name if name is not None else account.name,
            type=type if type is not None else account.type,
            initial_balance=(
                initial_balance if initial_balance is not None else account.initial_balance
            ),
        )
        return self.book.apply(ledger.update_account, updated)

    def delete_account(self, account_id: int) -> Account:
        """Delete an account.

        Receipts deposited into the account are kept; their vouchers are
        booked to cash in hand the next time the receipt is edited.

        Raises:
            NotFoundError: If account not found
        """
        return self.book.apply(ledger.delete_account, account_id)

    def get_receipt_count(self, account_id: int) -> int:
        """Get count of receipts deposited into an account."""
        return sum(1 for r in self.book.state.receivables.values() if r.account_id == account_id)

    def get_balance(self, account_id: int) -> Decimal:
        """Opening balance plus receipts deposited into the account."""
        return account_balance(self.book.state, account_id)
