"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from typing import Any

from flockledger.domain import entities as domain
from flockledger.database.models import (
    Customer as ORMCustomer,
    Farm as ORMFarm,
    Account as ORMAccount,
    Sale as ORMSale,
    Receivable as ORMReceivable,
    Voucher as ORMVoucher,
)


def customer_to_domain(orm_customer: ORMCustomer) -> domain.Customer:
    """Convert SQLAlchemy Customer model to domain Customer entity."""
    return domain.Customer(
        id=orm_customer.id,
        name=orm_customer.name,
        phone=orm_customer.phone or "",
        address=orm_customer.address or "",
    )


def farm_to_domain(orm_farm: ORMFarm) -> domain.Farm:
    """Convert SQLAlchemy Farm model to domain Farm entity."""
    return domain.Farm(
        id=orm_farm.id,
        name=orm_farm.name,
        initial_stock=orm_farm.initial_stock,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
        initial_balance=orm_account.initial_balance,
    )


def sale_to_domain(orm_sale: ORMSale) -> domain.Sale:
    """Convert SQLAlchemy Sale model to domain Sale entity."""
    return domain.Sale(
        id=orm_sale.id,
        date=orm_sale.date,
        customer_id=orm_sale.customer_id,
        farm_id=orm_sale.farm_id,
        chickens=orm_sale.chickens,
        weight=orm_sale.weight,
        rate=orm_sale.rate,
        total=orm_sale.total,
        vehicle_number=orm_sale.vehicle_number,
        crates=orm_sale.crates,
    )


def receivable_to_domain(orm_receivable: ORMReceivable) -> domain.Receivable:
    """Convert SQLAlchemy Receivable model to domain Receivable entity."""
    return domain.Receivable(
        id=orm_receivable.id,
        date=orm_receivable.date,
        customer_id=orm_receivable.customer_id,
        amount=orm_receivable.amount,
        account_id=orm_receivable.account_id,
    )


def voucher_to_domain(orm_voucher: ORMVoucher) -> domain.Voucher:
    """Convert SQLAlchemy Voucher model to domain Voucher entity."""
    related_type = orm_voucher.related_type
    return domain.Voucher(
        id=orm_voucher.id,
        date=orm_voucher.date,
        description=orm_voucher.description,
        debit_account=orm_voucher.debit_account,
        credit_account=orm_voucher.credit_account,
        amount=orm_voucher.amount,
        related_id=orm_voucher.related_id,
        related_type=domain.RelatedType(related_type) if related_type else None,
    )


def state_to_rows(state: domain.State) -> list[Any]:
    """Convert a domain State into ORM rows for every collection."""
    rows: list[Any] = []
    for position, c in enumerate(state.customers.values()):
        rows.append(
            ORMCustomer(id=c.id, position=position, name=c.name, phone=c.phone, address=c.address)
        )
    for position, f in enumerate(state.farms.values()):
        rows.append(
            ORMFarm(id=f.id, position=position, name=f.name, initial_stock=f.initial_stock)
        )
    for position, a in enumerate(state.accounts.values()):
        rows.append(
            ORMAccount(
                id=a.id,
                position=position,
                name=a.name,
                type=a.type.value,
                initial_balance=a.initial_balance,
            )
        )
    for position, s in enumerate(state.sales.values()):
        rows.append(
            ORMSale(
                id=s.id,
                position=position,
                date=s.date,
                customer_id=s.customer_id,
                farm_id=s.farm_id,
                vehicle_number=s.vehicle_number,
                crates=s.crates,
                chickens=s.chickens,
                weight=s.weight,
                rate=s.rate,
                total=s.total,
            )
        )
    for position, r in enumerate(state.receivables.values()):
        rows.append(
            ORMReceivable(
                id=r.id,
                position=position,
                date=r.date,
                customer_id=r.customer_id,
                account_id=r.account_id,
                amount=r.amount,
            )
        )
    for position, v in enumerate(state.vouchers.values()):
        rows.append(
            ORMVoucher(
                id=v.id,
                position=position,
                date=v.date,
                description=v.description,
                debit_account=v.debit_account,
                credit_account=v.credit_account,
                amount=v.amount,
                related_id=v.related_id,
                related_type=v.related_type.value if v.related_type else None,
            )
        )
    return rows
