"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class MissingReferenceError(NotFoundError):
    """A transaction refers to a customer, farm or account that is gone."""


class ImportFormatError(ValidationError):
    """A backup document does not have the expected shape."""


def customer_not_found(customer_id: int) -> str:
    """Return message for missing customer."""
    return f"Customer {customer_id} not found"


def farm_not_found(farm_id: int) -> str:
    """Return message for missing farm."""
    return f"Farm {farm_id} not found"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def sale_not_found(sale_id: int) -> str:
    """Return message for missing sale."""
    return f"Sale {sale_id} not found"


def receivable_not_found(receivable_id: int) -> str:
    """Return message for missing receipt."""
    return f"Receipt {receivable_id} not found"


def voucher_not_found(voucher_id: int) -> str:
    """Return message for missing voucher."""
    return f"Voucher {voucher_id} not found"


def must_be_positive(field_name: str) -> str:
    return f"{field_name} must be greater than zero"


def must_not_be_negative(field_name: str) -> str:
    return f"{field_name} cannot be negative"


def must_not_be_empty(field_name: str) -> str:
    return f"{field_name} cannot be empty"


class StorageError(Exception):
    """Reading or writing the persisted state failed."""
