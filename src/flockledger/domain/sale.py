"""Sale domain service."""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from flockledger.domain import errors, ledger
from flockledger.domain.balances import in_period
from flockledger.domain.book import Book
from flockledger.domain.entities import Sale, SaleDraft, Voucher
from flockledger.domain.errors import NotFoundError


class SaleService:
    """Service for recording sales and keeping their vouchers in step."""

    def __init__(self, book: Book):
        """Initialize sale service.

        Args:
            book: Book holding the current state
        """
        self.book = book

    def _check_references(self, customer_id: Optional[int], farm_id: Optional[int]) -> None:
        state = self.book.state
        if customer_id is not None and customer_id not in state.customers:
            raise NotFoundError(errors.customer_not_found(customer_id))
        if farm_id is not None and farm_id not in state.farms:
            raise NotFoundError(errors.farm_not_found(farm_id))

    def create_sale(
        self,
        date: date,
        customer_id: int,
        farm_id: int,
        chickens: int,
        weight: Decimal,
        rate: Decimal,
        vehicle_number: Optional[str] = None,
        crates: Optional[int] = None,
    ) -> tuple[Sale, Voucher]:
        """Record a sale and its voucher.

        Args:
            date: Sale date
            customer_id: Buying customer
            farm_id: Farm the birds came from
            chickens: Number of birds
            weight: Total weight
            rate: Price per unit of weight
            vehicle_number: Optional vehicle registration
            crates: Optional number of crates

        Returns:
            The stored sale (with its computed total) and its voucher

        Raises:
            NotFoundError: If the customer or farm doesn't exist
            ValidationError: If a quantity is not positive
        """
        self._check_references(customer_id, farm_id)
        draft = SaleDraft(
            date=date,
            customer_id=customer_id,
            farm_id=farm_id,
            chickens=chickens,
            weight=weight,
            rate=rate,
            vehicle_number=vehicle_number,
            crates=crates,
        )
        return self.book.apply(ledger.record_sale, draft, strict=self.book.strict_references)

    def get_sale(self, sale_id: int) -> Optional[Sale]:
        return self.book.state.sales.get(sale_id)

    def list_sales(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        customer_id: Optional[int] = None,
        farm_id: Optional[int] = None,
    ) -> list[Sale]:
        """List sales with filters, newest first.

        Args:
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            customer_id: Optional customer filter
            farm_id: Optional farm filter

        Returns:
            List of sale entities
        """
        sales = [
            s
            for s in self.book.state.sales.values()
            if in_period(s.date, start_date, end_date)
            and (customer_id is None or s.customer_id == customer_id)
            and (farm_id is None or s.farm_id == farm_id)
        ]
        return sorted(sales, key=lambda s: (s.date, s.id), reverse=True)

    def update_sale(
        self,
        sale_id: int,
        date: Optional[date] = None,
        customer_id: Optional[int] = None,
        farm_id: Optional[int] = None,
        chickens: Optional[int] = None,
        weight: Optional[Decimal] = None,
        rate: Optional[Decimal] = None,
        vehicle_number: Optional[str] = None,
        crates: Optional[int] = None,
        clear_crates: bool = False,
    ) -> Sale:
        """Update sale fields. The total and the voucher follow automatically.

        Only a newly given customer or farm is checked here. A sale whose
        stored customer or farm is gone keeps it, and its voucher gets the
        "Unknown" name, or a MissingReferenceError in strict mode.

        Raises:
            NotFoundError: If the sale, or a new customer or farm, doesn't exist
            MissingReferenceError: In strict mode, if the customer or farm is gone
            ValidationError: If a quantity is not positive
        """
        sale = self.get_sale(sale_id)
        if sale is None:
            raise NotFoundError(errors.sale_not_found(sale_id))

        updated = replace(
            sale,
            date=date if date is not None else sale.date,
            customer_id=customer_id if customer_id is not None else sale.customer_id,
            farm_id=farm_id if farm_id is not None else sale.farm_id,
            chickens=chickens if chickens is not None else sale.chickens,
            weight=weight if weight is not None else sale.weight,
            rate=rate if rate is not None else sale.rate,
            vehicle_number=vehicle_number if vehicle_number is not None else sale.vehicle_number,
            crates=None if clear_crates else (crates if crates is not None else sale.crates),
        )
        self._check_references(customer_id, farm_id)
        return self.book.apply(ledger.update_sale, updated, strict=self.book.strict_references)

    def delete_sale(self, sale_id: int) -> Sale:
        """Delete a sale and its voucher.

        Raises:
            NotFoundError: If the sale doesn't exist
        """
        return self.book.apply(ledger.delete_sale, sale_id)
