"""Farm domain service."""

from dataclasses import replace
from typing import Optional

from flockledger.domain import errors, ledger
from flockledger.domain.balances import farm_remaining_stock
from flockledger.domain.book import Book
from flockledger.domain.entities import Farm
from flockledger.domain.errors import NotFoundError


class FarmService:
    """Service for managing farms and their bird stock."""

    def __init__(self, book: Book):
        self.book = book

    def create_farm(self, name: str, initial_stock: int) -> int:
        """Create a farm with a starting bird count.

        Returns:
            Farm ID

        Raises:
            ValidationError: If the name is empty or the stock is negative
        """
        farm = self.book.apply(ledger.add_farm, name, initial_stock)
        return farm.id

    def get_farm(self, farm_id: int) -> Optional[Farm]:
        return self.book.state.farms.get(farm_id)

    def list_farms(self) -> list[Farm]:
        return list(self.book.state.farms.values())

    def update_farm(
        self, farm_id: int, name: Optional[str] = None, initial_stock: Optional[int] = None
    ) -> Farm:
        """Rename a farm or correct its starting stock."""
        farm = self.get_farm(farm_id)
        if farm is None:
            raise NotFoundError(errors.farm_not_found(farm_id))

        updated = replace(
            farm,
            name=name if name is not None else farm.name,
            initial_stock=initial_stock if initial_stock is not None else farm.initial_stock,
        )
        return self.book.apply(ledger.update_farm, updated)

    def delete_farm(self, farm_id: int) -> Farm:
        """Delete a farm together with its sales and their vouchers."""
        return self.book.apply(ledger.delete_farm, farm_id)

    def get_remaining_stock(self, farm_id: int) -> int:
        """Birds not yet sold. Negative when the farm is oversold."""
        return farm_remaining_stock(self.book.state, farm_id)
