"""CLI helpers for resolving references and parsing options."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import click

from flockledger.domain.book import Book
from flockledger.utils.amount_parser import parse_amount, parse_count
from flockledger.utils.date_parser import parse_date
from flockledger.utils.resolver import resolve_reference


def resolve_or_exit(ctx: click.Context, book: Book, kind: str, value: str) -> int:
    """Resolve a customer, farm or account name or ID, or exit with a CLI error.

    ``kind`` is one of "customer", "farm" or "account".
    """
    records = {
        "customer": book.state.customers,
        "farm": book.state.farms,
        "account": book.state.accounts,
    }[kind]
    try:
        return resolve_reference(records, value, kind.capitalize())
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def date_or_exit(ctx: click.Context, value: str, label: str = "date") -> date:
    try:
        return parse_date(value)
    except ValueError as exc:
        click.echo(f"Error: Invalid {label}: {exc}", err=True)
        ctx.exit(1)


def amount_or_exit(ctx: click.Context, value: str, label: str = "amount") -> Decimal:
    try:
        return parse_amount(value)
    except ValueError as exc:
        click.echo(f"Error: Invalid {label}: {exc}", err=True)
        ctx.exit(1)


def count_or_exit(ctx: click.Context, value: str, label: str = "count") -> int:
    try:
        return parse_count(value)
    except ValueError as exc:
        click.echo(f"Error: Invalid {label}: {exc}", err=True)
        ctx.exit(1)


def money(value: Decimal) -> str:
    """Format an amount for display."""
    return f"{value:,.2f}"
