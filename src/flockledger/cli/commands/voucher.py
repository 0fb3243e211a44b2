"""Voucher view commands."""

import click

from flockledger.cli.resolution import money
from flockledger.domain.report import ReportService


@click.group()
def voucher_group():
    """View accounting vouchers."""
    pass


@voucher_group.command("list")
@click.option("--search", help="Match id, description or account name")
@click.pass_context
def list_vouchers(ctx, search: str | None):
    """List vouchers, newest first."""
    service = ReportService(ctx.obj["book"])

    vouchers = service.search_vouchers(search)
    if not vouchers:
        click.echo("No vouchers found.")
        return

    click.echo(f"\n{'ID':>4}  {'Date':10}  {'Description':34}  {'Debit':24}  {'Credit':24}  {'Amount':>14}")
    click.echo("-" * 120)
    for v in vouchers:
        click.echo(
            f"{v.id:>4}  {v.date.isoformat():10}  {v.description[:34]:34}  "
            f"{v.debit_account[:24]:24}  {v.credit_account[:24]:24}  {money(v.amount):>14}"
        )


@voucher_group.command("show")
@click.argument("voucher_id", type=int)
@click.pass_context
def show_voucher(ctx, voucher_id: int):
    """Show one voucher with the transaction it came from."""
    book = ctx.obj["book"]
    service = ReportService(book)

    voucher = service.get_voucher(voucher_id)
    if voucher is None:
        click.echo(f"Error: Voucher {voucher_id} not found", err=True)
        ctx.exit(1)

    click.echo(f"Voucher #{voucher.id}  ({voucher.date.isoformat()})")
    click.echo(f"  {voucher.description}")
    click.echo(f"  Dr  {voucher.debit_account:30s} {money(voucher.amount):>14}")
    click.echo(f"  Cr  {voucher.credit_account:30s} {money(voucher.amount):>14}")

    if voucher.related_type is None:
        click.echo("  Manual entry")
        return

    state = book.state
    if voucher.related_type.value == "sale":
        sale = state.sales.get(voucher.related_id)
        if sale is not None:
            click.echo(
                f"  Sale #{sale.id}: {sale.chickens:,} birds, {sale.weight:,.2f} @ {sale.rate:,.2f}"
                + (f", vehicle {sale.vehicle_number}" if sale.vehicle_number else "")
                + (f", {sale.crates} crates" if sale.crates is not None else "")
            )
    else:
        receipt = state.receivables.get(voucher.related_id)
        if receipt is not None:
            click.echo(f"  Receipt #{receipt.id}")


def register_commands(cli):
    """Register voucher commands with main CLI."""
    cli.add_command(voucher_group, name="voucher")
