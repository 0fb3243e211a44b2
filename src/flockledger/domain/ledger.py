"""Whole-state transformations that keep vouchers in step with transactions.

Every function takes the current ``State`` and returns a new one together
with the affected record(s). The input state is never modified, so a
failing call leaves the book exactly as it was.

Names used in voucher text are resolved from the state at derivation time.
A missing customer or farm becomes ``"Unknown"`` and a missing deposit
account becomes ``"Cash in Hand"``, unless ``strict=True`` is passed, in
which case a ``MissingReferenceError`` is raised instead.
"""

import logging
from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from flockledger.domain import errors
from flockledger.domain.entities import (
    CASH_IN_HAND,
    Account,
    AccountType,
    Customer,
    Farm,
    Receivable,
    ReceivableDraft,
    RelatedType,
    Sale,
    SaleDraft,
    State,
    Voucher,
)
from flockledger.domain.errors import (
    MissingReferenceError,
    NotFoundError,
    ValidationError,
)
from flockledger.domain.identity import next_id

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown"

# Weight and rate are kept to three places so ``weight * rate`` has at most
# six, the scale of the stored money columns.
MEASURE_PLACES = Decimal("0.001")


def round_measure(value: Decimal) -> Decimal:
    """Round a weight or rate to ``MEASURE_PLACES``."""
    return Decimal(value).quantize(MEASURE_PLACES, rounding=ROUND_HALF_UP)


# Validation

def _require_name(name: str, field_name: str) -> str:
    if name is None or not name.strip():
        raise ValidationError(errors.must_not_be_empty(field_name))
    return name.strip()


def _validate_sale(chickens: int, weight: Decimal, rate: Decimal, crates: Optional[int]) -> None:
    if chickens <= 0:
        raise ValidationError(errors.must_be_positive("Chickens"))
    if weight <= 0:
        raise ValidationError(errors.must_be_positive("Weight"))
    if rate <= 0:
        raise ValidationError(errors.must_be_positive("Rate"))
    if crates is not None and crates < 0:
        raise ValidationError(errors.must_not_be_negative("Crates"))


def _validate_amount(amount: Decimal) -> None:
    if amount <= 0:
        raise ValidationError(errors.must_be_positive("Amount"))


# Name resolution

def _customer_name(state: State, customer_id: int, strict: bool) -> str:
    customer = state.customers.get(customer_id)
    if customer is not None:
        return customer.name
    if strict:
        raise MissingReferenceError(errors.customer_not_found(customer_id))
    logger.warning("Customer %s not found, voucher uses '%s'", customer_id, UNKNOWN_NAME)
    return UNKNOWN_NAME


def _farm_name(state: State, farm_id: int, strict: bool) -> str:
    farm = state.farms.get(farm_id)
    if farm is not None:
        return farm.name
    if strict:
        raise MissingReferenceError(errors.farm_not_found(farm_id))
    logger.warning("Farm %s not found, voucher uses '%s'", farm_id, UNKNOWN_NAME)
    return UNKNOWN_NAME


def _deposit_account_name(state: State, account_id: Optional[int]) -> str:
    """Name of the account a receipt is debited to.

    Receipts without an account, or whose account no longer exists, are
    booked to cash in hand.
    """
    if account_id is None:
        return CASH_IN_HAND
    account = state.accounts.get(account_id)
    if account is None:
        logger.warning("Account %s not found, receipt booked to '%s'", account_id, CASH_IN_HAND)
        return CASH_IN_HAND
    return account.name


# Voucher derivation

def sale_voucher_fields(state: State, sale: Sale, strict: bool = False) -> dict:
    """Voucher fields mirroring ``sale``."""
    customer_name = _customer_name(state, sale.customer_id, strict)
    farm_name = _farm_name(state, sale.farm_id, strict)
    vehicle_info = f" ({sale.vehicle_number})" if sale.vehicle_number else ""
    return {
        "date": sale.date,
        "description": f"Sale #{sale.id} - {customer_name}{vehicle_info}",
        "debit_account": f"Customer - {customer_name}",
        "credit_account": f"Sales - {farm_name}",
        "amount": sale.total,
    }


def receivable_voucher_fields(state: State, receivable: Receivable, strict: bool = False) -> dict:
    """Voucher fields mirroring ``receivable``."""
    customer_name = _customer_name(state, receivable.customer_id, strict)
    return {
        "date": receivable.date,
        "description": f"Receipt #{receivable.id} - {customer_name}",
        "debit_account": _deposit_account_name(state, receivable.account_id),
        "credit_account": f"Customer - {customer_name}",
        "amount": receivable.amount,
    }


def _sync_voucher(
    vouchers: dict[int, Voucher],
    related_id: int,
    related_type: RelatedType,
    fields: dict,
) -> dict[int, Voucher]:
    """Return ``vouchers`` with the entry for a transaction rewritten.

    If the paired voucher has gone missing a new one is created, so every
    transaction keeps exactly one ledger entry.
    """
    updated = dict(vouchers)
    found = False
    for voucher_id, voucher in vouchers.items():
        if voucher.related_id == related_id and voucher.related_type == related_type:
            updated[voucher_id] = replace(voucher, **fields)
            found = True

    if not found:
        logger.warning(
            "No voucher found for %s %s, creating a new one", related_type.value, related_id
        )
        voucher_id = next_id(vouchers)
        updated[voucher_id] = Voucher(
            id=voucher_id, related_id=related_id, related_type=related_type, **fields
        )
    return updated


def _drop_related(
    vouchers: dict[int, Voucher], related_type: RelatedType, related_ids: set[int]
) -> dict[int, Voucher]:
    return {
        voucher_id: voucher
        for voucher_id, voucher in vouchers.items()
        if not (voucher.related_type == related_type and voucher.related_id in related_ids)
    }


# Customers

def add_customer(state: State, name: str, phone: str = "", address: str = "") -> tuple[State, Customer]:
    customer = Customer(
        id=next_id(state.customers),
        name=_require_name(name, "Customer name"),
        phone=phone or "",
        address=address or "",
    )
    return replace(state, customers={**state.customers, customer.id: customer}), customer


def update_customer(state: State, customer: Customer) -> tuple[State, Customer]:
    """Replace a customer's details.

    Existing vouchers keep the name they were booked with until their
    transaction is next edited.
    """
    if customer.id not in state.customers:
        raise NotFoundError(errors.customer_not_found(customer.id))
    customer = replace(customer, name=_require_name(customer.name, "Customer name"))
    return replace(state, customers={**state.customers, customer.id: customer}), customer


def delete_customer(state: State, customer_id: int) -> tuple[State, Customer]:
    """Remove a customer with its sales, receipts and their vouchers."""
    customer = state.customers.get(customer_id)
    if customer is None:
        raise NotFoundError(errors.customer_not_found(customer_id))

    sale_ids = {s.id for s in state.sales.values() if s.customer_id == customer_id}
    receivable_ids = {r.id for r in state.receivables.values() if r.customer_id == customer_id}

    vouchers = _drop_related(state.vouchers, RelatedType.SALE, sale_ids)
    vouchers = _drop_related(vouchers, RelatedType.RECEIVABLE, receivable_ids)

    new_state = replace(
        state,
        customers={k: v for k, v in state.customers.items() if k != customer_id},
        sales={k: v for k, v in state.sales.items() if k not in sale_ids},
        receivables={k: v for k, v in state.receivables.items() if k not in receivable_ids},
        vouchers=vouchers,
    )
    logger.debug(
        "Deleted customer %s with %d sales and %d receipts",
        customer_id,
        len(sale_ids),
        len(receivable_ids),
    )
    return new_state, customer


# Farms

def _validate_stock(initial_stock: int) -> None:
    if initial_stock < 0:
        raise ValidationError(errors.must_not_be_negative("Initial stock"))


def add_farm(state: State, name: str, initial_stock: int) -> tuple[State, Farm]:
    _validate_stock(initial_stock)
    farm = Farm(
        id=next_id(state.farms),
        name=_require_name(name, "Farm name"),
        initial_stock=initial_stock,
    )
    return replace(state, farms={**state.farms, farm.id: farm}), farm


def update_farm(state: State, farm: Farm) -> tuple[State, Farm]:
    if farm.id not in state.farms:
        raise NotFoundError(errors.farm_not_found(farm.id))
    _validate_stock(farm.initial_stock)
    farm = replace(farm, name=_require_name(farm.name, "Farm name"))
    return replace(state, farms={**state.farms, farm.id: farm}), farm


def delete_farm(state: State, farm_id: int) -> tuple[State, Farm]:
    """Remove a farm with its sales and their vouchers."""
    farm = state.farms.get(farm_id)
    if farm is None:
        raise NotFoundError(errors.farm_not_found(farm_id))

    sale_ids = {s.id for s in state.sales.values() if s.farm_id == farm_id}
    new_state = replace(
        state,
        farms={k: v for k, v in state.farms.items() if k != farm_id},
        sales={k: v for k, v in state.sales.items() if k not in sale_ids},
        vouchers=_drop_related(state.vouchers, RelatedType.SALE, sale_ids),
    )
    logger.debug("Deleted farm %s with %d sales", farm_id, len(sale_ids))
    return new_state, farm


# Accounts

def add_account(
    state: State, name: str, type: AccountType, initial_balance: Decimal = Decimal("0")
) -> tuple[State, Account]:
    account = Account(
        id=next_id(state.accounts),
        name=_require_name(name, "Account name"),
        type=AccountType(type),
        initial_balance=initial_balance,
    )
    return replace(state, accounts={**state.accounts, account.id: account}), account


def update_account(state: State, account: Account) -> tuple[State, Account]:
    if account.id not in state.accounts:
        raise NotFoundError(errors.account_not_found(account.id))
    account = replace(
        account,
        name=_require_name(account.name, "Account name"),
        type=AccountType(account.type),
    )
    return replace(state, accounts={**state.accounts, account.id: account}), account


def delete_account(state: State, account_id: int) -> tuple[State, Account]:
    """Remove an account. Receipts that pointed at it are left as they are."""
    account = state.accounts.get(account_id)
    if account is None:
        raise NotFoundError(errors.account_not_found(account_id))
    accounts = {k: v for k, v in state.accounts.items() if k != account_id}
    return replace(state, accounts=accounts), account


# Sales

def record_sale(state: State, draft: SaleDraft, strict: bool = False) -> tuple[State, Sale, Voucher]:
    """Add a sale and its voucher. Weight and rate are rounded to three places."""
    draft = replace(draft, weight=round_measure(draft.weight), rate=round_measure(draft.rate))
    _validate_sale(draft.chickens, draft.weight, draft.rate, draft.crates)

    sale = Sale(
        id=next_id(state.sales),
        date=draft.date,
        customer_id=draft.customer_id,
        farm_id=draft.farm_id,
        chickens=draft.chickens,
        weight=draft.weight,
        rate=draft.rate,
        total=draft.weight * draft.rate,
        vehicle_number=draft.vehicle_number or None,
        crates=draft.crates,
    )
    voucher = Voucher(
        id=next_id(state.vouchers),
        related_id=sale.id,
        related_type=RelatedType.SALE,
        **sale_voucher_fields(state, sale, strict),
    )
    new_state = replace(
        state,
        sales={**state.sales, sale.id: sale},
        vouchers={**state.vouchers, voucher.id: voucher},
    )
    logger.debug("Recorded sale %s with voucher %s", sale.id, voucher.id)
    return new_state, sale, voucher


def update_sale(state: State, sale: Sale, strict: bool = False) -> tuple[State, Sale]:
    """Replace a sale and rewrite its voucher. The total is recomputed."""
    if sale.id not in state.sales:
        raise NotFoundError(errors.sale_not_found(sale.id))
    sale = replace(sale, weight=round_measure(sale.weight), rate=round_measure(sale.rate))
    _validate_sale(sale.chickens, sale.weight, sale.rate, sale.crates)

    sale = replace(sale, total=sale.weight * sale.rate, vehicle_number=sale.vehicle_number or None)
    fields = sale_voucher_fields(state, sale, strict)
    new_state = replace(
        state,
        sales={**state.sales, sale.id: sale},
        vouchers=_sync_voucher(state.vouchers, sale.id, RelatedType.SALE, fields),
    )
    logger.debug("Updated sale %s", sale.id)
    return new_state, sale


def delete_sale(state: State, sale_id: int) -> tuple[State, Sale]:
    sale = state.sales.get(sale_id)
    if sale is None:
        raise NotFoundError(errors.sale_not_found(sale_id))
    new_state = replace(
        state,
        sales={k: v for k, v in state.sales.items() if k != sale_id},
        vouchers=_drop_related(state.vouchers, RelatedType.SALE, {sale_id}),
    )
    logger.debug("Deleted sale %s", sale_id)
    return new_state, sale


# Receivables

def record_receivable(
    state: State, draft: ReceivableDraft, strict: bool = False
) -> tuple[State, Receivable, Voucher]:
    """Add a receipt and its voucher."""
    _validate_amount(draft.amount)

    receivable = Receivable(
        id=next_id(state.receivables),
        date=draft.date,
        customer_id=draft.customer_id,
        amount=draft.amount,
        account_id=draft.account_id,
    )
    voucher = Voucher(
        id=next_id(state.vouchers),
        related_id=receivable.id,
        related_type=RelatedType.RECEIVABLE,
        **receivable_voucher_fields(state, receivable, strict),
    )
    new_state = replace(
        state,
        receivables={**state.receivables, receivable.id: receivable},
        vouchers={**state.vouchers, voucher.id: voucher},
    )
    logger.debug("Recorded receipt %s with voucher %s", receivable.id, voucher.id)
    return new_state, receivable, voucher


def update_receivable(
    state: State, receivable: Receivable, strict: bool = False
) -> tuple[State, Receivable]:
    """Replace a receipt and rewrite its voucher."""
    if receivable.id not in state.receivables:
        raise NotFoundError(errors.receivable_not_found(receivable.id))
    _validate_amount(receivable.amount)

    fields = receivable_voucher_fields(state, receivable, strict)
    new_state = replace(
        state,
        receivables={**state.receivables, receivable.id: receivable},
        vouchers=_sync_voucher(state.vouchers, receivable.id, RelatedType.RECEIVABLE, fields),
    )
    logger.debug("Updated receipt %s", receivable.id)
    return new_state, receivable


def delete_receivable(state: State, receivable_id: int) -> tuple[State, Receivable]:
    receivable = state.receivables.get(receivable_id)
    if receivable is None:
        raise NotFoundError(errors.receivable_not_found(receivable_id))
    new_state = replace(
        state,
        receivables={k: v for k, v in state.receivables.items() if k != receivable_id},
        vouchers=_drop_related(state.vouchers, RelatedType.RECEIVABLE, {receivable_id}),
    )
    logger.debug("Deleted receipt %s", receivable_id)
    return new_state, receivable
