"""Tests for the state transformations that keep vouchers in step."""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from flockledger.domain import ledger
from flockledger.domain.entities import (
    AccountType,
    ReceivableDraft,
    RelatedType,
    SaleDraft,
    State,
)
from flockledger.domain.errors import MissingReferenceError, NotFoundError, ValidationError


def _sale_draft(customer_id=1, farm_id=1, **overrides):
    values = dict(
        date=date(2024, 3, 1),
        customer_id=customer_id,
        farm_id=farm_id,
        chickens=100,
        weight=Decimal("200"),
        rate=Decimal("310"),
        vehicle_number=None,
        crates=None,
    )
    values.update(overrides)
    return SaleDraft(**values)


@pytest.fixture
def state():
    """A book with one customer and one farm."""
    state = State.default()
    state, _ = ledger.add_customer(state, "Ali Traders")
    state, _ = ledger.add_farm(state, "North Shed", 1000)
    return state


def _vouchers_for(state, related_type, related_id):
    return [
        v
        for v in state.vouchers.values()
        if v.related_type == related_type and v.related_id == related_id
    ]


def test_default_state_has_seed_accounts():
    state = State.default()
    assert [a.name for a in state.accounts.values()] == ["Cash in Hand", "Bank Account"]
    assert state.accounts[1].type == AccountType.CASH
    assert state.accounts[2].type == AccountType.BANK


def test_add_customer_trims_and_rejects_empty_name():
    state, customer = ledger.add_customer(State.default(), "  Ali  ")
    assert customer.name == "Ali"
    assert customer.id == 1

    with pytest.raises(ValidationError):
        ledger.add_customer(state, "   ")


def test_record_sale_creates_voucher(state):
    new_state, sale, voucher = ledger.record_sale(state, _sale_draft(vehicle_number="LES-1234"))

    assert sale.id == 1
    assert sale.total == Decimal("62000")
    assert voucher.related_id == sale.id
    assert voucher.related_type == RelatedType.SALE
    assert voucher.description == "Sale #1 - Ali Traders (LES-1234)"
    assert voucher.debit_account == "Customer - Ali Traders"
    assert voucher.credit_account == "Sales - North Shed"
    assert voucher.amount == sale.total
    assert new_state.vouchers[voucher.id] == voucher


def test_record_sale_leaves_input_state_unchanged(state):
    ledger.record_sale(state, _sale_draft())
    assert state.sales == {}
    assert state.vouchers == {}


@pytest.mark.parametrize(
    "overrides",
    [
        {"chickens": 0},
        {"weight": Decimal("0")},
        {"rate": Decimal("-1")},
        {"crates": -1},
    ],
)
def test_record_sale_rejects_invalid_quantities(state, overrides):
    with pytest.raises(ValidationError):
        ledger.record_sale(state, _sale_draft(**overrides))


def test_record_sale_unknown_references_use_placeholder(state, caplog):
    with caplog.at_level(logging.WARNING, logger="flockledger"):
        _, _, voucher = ledger.record_sale(state, _sale_draft(customer_id=99, farm_id=42))

    assert voucher.debit_account == "Customer - Unknown"
    assert voucher.credit_account == "Sales - Unknown"
    assert "Customer 99 not found" in caplog.text


def test_record_sale_strict_rejects_unknown_customer(state):
    with pytest.raises(MissingReferenceError):
        ledger.record_sale(state, _sale_draft(customer_id=99), strict=True)


def test_update_sale_recomputes_total_and_voucher(state):
    state, sale, voucher = ledger.record_sale(state, _sale_draft())
    state, updated = ledger.update_sale(state, replace(sale, weight=Decimal("250"), rate=Decimal("300")))

    assert updated.total == Decimal("75000")
    assert state.vouchers[voucher.id].amount == Decimal("75000")
    assert len(state.vouchers) == 1


def test_record_sale_rounds_weight_and_rate_to_three_places(state):
    _, sale, voucher = ledger.record_sale(
        state, _sale_draft(weight=Decimal("12.3456"), rate=Decimal("1.0001"))
    )

    assert sale.weight == Decimal("12.346")
    assert sale.rate == Decimal("1.000")
    assert sale.total == sale.weight * sale.rate == Decimal("12.346")
    assert voucher.amount == sale.total


def test_record_sale_rejects_weight_that_rounds_to_zero(state):
    with pytest.raises(ValidationError):
        ledger.record_sale(state, _sale_draft(weight=Decimal("0.0004")))


def test_update_sale_rounds_weight(state):
    state, sale, _ = ledger.record_sale(state, _sale_draft())
    _, updated = ledger.update_sale(state, replace(sale, weight=Decimal("1.0015")))

    assert updated.weight == Decimal("1.002")
    assert updated.total == Decimal("1.002") * Decimal("310")


def test_update_sale_picks_up_renamed_customer(state):
    state, sale, voucher = ledger.record_sale(state, _sale_draft())
    state, _ = ledger.update_customer(state, replace(state.customers[1], name="Ali & Sons"))

    # Renaming alone does not touch existing vouchers.
    assert state.vouchers[voucher.id].debit_account == "Customer - Ali Traders"

    state, _ = ledger.update_sale(state, sale)
    assert state.vouchers[voucher.id].debit_account == "Customer - Ali & Sons"
    assert state.vouchers[voucher.id].description == "Sale #1 - Ali & Sons"


def test_update_sale_recreates_missing_voucher(state, caplog):
    state, sale, voucher = ledger.record_sale(state, _sale_draft())
    state = replace(state, vouchers={})

    with caplog.at_level(logging.WARNING, logger="flockledger"):
        state, _ = ledger.update_sale(state, sale)

    vouchers = _vouchers_for(state, RelatedType.SALE, sale.id)
    assert len(vouchers) == 1
    assert vouchers[0].amount == sale.total
    assert "creating a new one" in caplog.text


def test_update_sale_not_found(state):
    state, sale, _ = ledger.record_sale(state, _sale_draft())
    with pytest.raises(NotFoundError, match="Sale 5 not found"):
        ledger.update_sale(state, replace(sale, id=5))


def test_delete_sale_removes_voucher(state):
    state, sale, _ = ledger.record_sale(state, _sale_draft())
    state, deleted = ledger.delete_sale(state, sale.id)

    assert deleted == sale
    assert state.sales == {}
    assert state.vouchers == {}


def test_delete_missing_sale_raises(state):
    with pytest.raises(NotFoundError):
        ledger.delete_sale(state, 1)


def test_record_receivable_uses_account_name(state):
    draft = ReceivableDraft(date=date(2024, 3, 5), customer_id=1, amount=Decimal("5000"), account_id=2)
    state, receivable, voucher = ledger.record_receivable(state, draft)

    assert voucher.description == "Receipt #1 - Ali Traders"
    assert voucher.debit_account == "Bank Account"
    assert voucher.credit_account == "Customer - Ali Traders"
    assert voucher.related_type == RelatedType.RECEIVABLE


@pytest.mark.parametrize("account_id", [None, 77])
def test_record_receivable_falls_back_to_cash(state, account_id):
    draft = ReceivableDraft(
        date=date(2024, 3, 5), customer_id=1, amount=Decimal("5000"), account_id=account_id
    )
    _, _, voucher = ledger.record_receivable(state, draft)
    assert voucher.debit_account == "Cash in Hand"


def test_record_receivable_rejects_non_positive_amount(state):
    draft = ReceivableDraft(date=date(2024, 3, 5), customer_id=1, amount=Decimal("0"))
    with pytest.raises(ValidationError, match="Amount must be greater than zero"):
        ledger.record_receivable(state, draft)


def test_update_receivable_rewrites_voucher(state):
    draft = ReceivableDraft(date=date(2024, 3, 5), customer_id=1, amount=Decimal("5000"), account_id=1)
    state, receivable, voucher = ledger.record_receivable(state, draft)
    state, _ = ledger.update_receivable(
        state, replace(receivable, amount=Decimal("6000"), account_id=2)
    )

    assert state.vouchers[voucher.id].amount == Decimal("6000")
    assert state.vouchers[voucher.id].debit_account == "Bank Account"


def test_delete_customer_cascades(state):
    state, sale, _ = ledger.record_sale(state, _sale_draft())
    draft = ReceivableDraft(date=date(2024, 3, 5), customer_id=1, amount=Decimal("5000"))
    state, _, _ = ledger.record_receivable(state, draft)
    state, _ = ledger.add_customer(state, "Other")
    state, other_sale, other_voucher = ledger.record_sale(state, _sale_draft(customer_id=2))

    state, _ = ledger.delete_customer(state, 1)

    assert list(state.customers) == [2]
    assert list(state.sales) == [other_sale.id]
    assert state.receivables == {}
    assert list(state.vouchers) == [other_voucher.id]


def test_delete_farm_cascades_to_sales_only(state):
    state, _, _ = ledger.record_sale(state, _sale_draft())
    draft = ReceivableDraft(date=date(2024, 3, 5), customer_id=1, amount=Decimal("5000"))
    state, receivable, receipt_voucher = ledger.record_receivable(state, draft)

    state, _ = ledger.delete_farm(state, 1)

    assert state.farms == {}
    assert state.sales == {}
    assert list(state.receivables) == [receivable.id]
    assert list(state.vouchers) == [receipt_voucher.id]


def test_delete_account_keeps_receipts(state):
    draft = ReceivableDraft(date=date(2024, 3, 5), customer_id=1, amount=Decimal("5000"), account_id=2)
    state, receivable, _ = ledger.record_receivable(state, draft)

    state, account = ledger.delete_account(state, 2)

    assert account.name == "Bank Account"
    assert state.receivables[receivable.id].account_id == 2

    # Rewriting the receipt now books it to cash.
    state, _ = ledger.update_receivable(state, state.receivables[receivable.id])
    assert next(iter(state.vouchers.values())).debit_account == "Cash in Hand"


def test_add_farm_rejects_negative_stock():
    with pytest.raises(ValidationError, match="Initial stock cannot be negative"):
        ledger.add_farm(State.default(), "Farm", -1)


def test_ids_follow_highest_existing(state):
    state, first, _ = ledger.record_sale(state, _sale_draft())
    state, second, _ = ledger.record_sale(state, _sale_draft())
    state, _ = ledger.delete_sale(state, second.id)
    state, third, _ = ledger.record_sale(state, _sale_draft())

    assert (first.id, second.id, third.id) == (1, 2, 2)
