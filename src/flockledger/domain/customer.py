"""Customer domain service."""

from dataclasses import replace
from decimal import Decimal
from typing import Optional

from flockledger.domain import errors, ledger
from flockledger.domain.balances import customer_balance
from flockledger.domain.book import Book
from flockledger.domain.entities import Customer
from flockledger.domain.errors import NotFoundError


class CustomerService:
    """Service for managing customers."""

    def __init__(self, book: Book):
        """Initialize customer service.

        Args:
            book: Book holding the current state
        """
        self.book = book

    def create_customer(self, name: str, phone: str = "", address: str = "") -> int:
        """Create a new customer.

        Args:
            name: Customer name
            phone: Optional phone number
            address: Optional address

        Returns:
            Customer ID

        Raises:
            ValidationError: If the name is empty
        """
        customer = self.book.apply(ledger.add_customer, name, phone, address)
        return customer.id

    def get_customer(self, customer_id: int) -> Optional[Customer]:
        """Get customer by ID, or None if not found."""
        return self.book.state.customers.get(customer_id)

    def list_customers(self, search: Optional[str] = None) -> list[Customer]:
        """List customers, optionally filtered by name or phone.

        Args:
            search: Case-insensitive text matched against name and phone

        Returns:
            List of customer entities in the order they were added
        """
        customers = list(self.book.state.customers.values())
        if not search:
            return customers
        term = search.lower()
        return [c for c in customers if term in c.name.lower() or term in c.phone.lower()]

    def update_customer(
        self,
        customer_id: int,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> Customer:
        """Update customer details. Fields left as None are unchanged.

        Raises:
            NotFoundError: If the customer does not exist
        """
        customer = self.get_customer(customer_id)
        if customer is None:
            raise NotFoundError(errors.customer_not_found(customer_id))

        updated = replace(
            customer,
            name=name if name is not None else customer.name,
            phone=phone if phone is not None else customer.phone,
            address=address if address is not None else customer.address,
        )
        return self.book.apply(ledger.update_customer, updated)

    def delete_customer(self, customer_id: int) -> Customer:
        """Delete a customer together with their sales, receipts and vouchers.

        Raises:
            NotFoundError: If the customer does not exist
        """
        return self.book.apply(ledger.delete_customer, customer_id)

    def get_balance(self, customer_id: int) -> Decimal:
        """Outstanding balance for a customer (sales minus receipts)."""
        return customer_balance(self.book.state, customer_id)
