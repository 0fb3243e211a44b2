"""Receipt commands."""

import click

from flockledger.cli.date_filters import period_options, resolve_cli_date_range
from flockledger.cli.error_handling import handle_domain_error
from flockledger.cli.resolution import amount_or_exit, date_or_exit, money, resolve_or_exit
from flockledger.domain.errors import DomainError
from flockledger.domain.receivable import ReceivableService


@click.group()
def receipt_group():
    """Record and manage customer receipts."""
    pass


@receipt_group.command("add")
@click.option("--date", "date_str", default="today", show_default=True, help="Receipt date")
@click.option("--customer", required=True, help="Customer name or ID")
@click.option("--amount", required=True, help="Amount received")
@click.option("--account", help="Account name or ID (defaults to the first account)")
@click.pass_context
def add_receipt(ctx, date_str: str, customer: str, amount: str, account: str | None):
    """Record money received from a customer.

    Examples:
        flockledger receipt add --customer "Ali Traders" --amount 150000 --account "Bank Account"
    """
    book = ctx.obj["book"]
    service = ReceivableService(book)

    receipt_date = date_or_exit(ctx, date_str)
    customer_id = resolve_or_exit(ctx, book, "customer", customer)
    account_id = resolve_or_exit(ctx, book, "account", account) if account else None

    try:
        receivable, voucher = service.create_receivable(
            date=receipt_date,
            customer_id=customer_id,
            amount=amount_or_exit(ctx, amount),
            account_id=account_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded receipt #{receivable.id}: {money(receivable.amount)}")
    click.echo(f"Voucher #{voucher.id}: Dr {voucher.debit_account} / Cr {voucher.credit_account}")


@receipt_group.command("list")
@period_options
@click.option("--customer", help="Customer name or ID")
@click.option("--account", help="Account name or ID")
@click.pass_context
def list_receipts(
    ctx,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    customer: str | None,
    account: str | None,
):
    """List receipts, newest first."""
    book = ctx.obj["book"]
    service = ReceivableService(book)

    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period=period)
    customer_id = resolve_or_exit(ctx, book, "customer", customer) if customer else None
    account_id = resolve_or_exit(ctx, book, "account", account) if account else None

    receipts = service.list_receivables(
        start_date=start, end_date=end, customer_id=customer_id, account_id=account_id
    )
    if not receipts:
        click.echo("No receipts found.")
        return

    customers = book.state.customers
    accounts = book.state.accounts
    click.echo(f"\n{'ID':>4}  {'Date':10}  {'Customer':20}  {'Account':18}  {'Amount':>14}")
    click.echo("-" * 74)
    for r in receipts:
        customer_name = customers[r.customer_id].name if r.customer_id in customers else "Unknown"
        account_name = accounts[r.account_id].name if r.account_id in accounts else "-"
        click.echo(
            f"{r.id:>4}  {r.date.isoformat():10}  {customer_name[:20]:20}  "
            f"{account_name[:18]:18}  {money(r.amount):>14}"
        )


@receipt_group.command("edit")
@click.argument("receipt_id", type=int)
@click.option("--date", "date_str", help="New date")
@click.option("--customer", help="New customer name or ID")
@click.option("--amount", help="New amount")
@click.option("--account", help="New account name or ID")
@click.pass_context
def edit_receipt(
    ctx,
    receipt_id: int,
    date_str: str | None,
    customer: str | None,
    amount: str | None,
    account: str | None,
):
    """Edit a receipt. Its voucher is updated to match."""
    book = ctx.obj["book"]
    service = ReceivableService(book)

    try:
        updated = service.update_receivable(
            receipt_id,
            date=date_or_exit(ctx, date_str) if date_str else None,
            customer_id=resolve_or_exit(ctx, book, "customer", customer) if customer else None,
            amount=amount_or_exit(ctx, amount) if amount else None,
            account_id=resolve_or_exit(ctx, book, "account", account) if account else None,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated receipt #{updated.id}: {money(updated.amount)}")


@receipt_group.command("delete")
@click.argument("receipt_id", type=int)
@click.pass_context
def delete_receipt(ctx, receipt_id: int):
    """Delete a receipt and its voucher."""
    service = ReceivableService(ctx.obj["book"])

    if service.get_receivable(receipt_id) is None:
        click.echo(f"Error: Receipt {receipt_id} not found", err=True)
        ctx.exit(1)

    if not click.confirm(f"Are you sure you want to delete receipt #{receipt_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_receivable(receipt_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted receipt #{receipt_id}")


def register_commands(cli):
    """Register receipt commands with main CLI."""
    cli.add_command(receipt_group, name="receipt")
