"""Sale commands."""

import click

from flockledger.cli.date_filters import period_options, resolve_cli_date_range
from flockledger.cli.error_handling import handle_domain_error
from flockledger.cli.resolution import (
    amount_or_exit,
    count_or_exit,
    date_or_exit,
    money,
    resolve_or_exit,
)
from flockledger.domain.errors import DomainError
from flockledger.domain.sale import SaleService


@click.group()
def sale_group():
    """Record and manage sales."""
    pass


@sale_group.command("add")
@click.option("--date", "date_str", default="today", show_default=True, help="Sale date")
@click.option("--customer", required=True, help="Customer name or ID")
@click.option("--farm", required=True, help="Farm name or ID")
@click.option("--chickens", required=True, help="Number of birds")
@click.option("--weight", required=True, help="Total weight")
@click.option("--rate", required=True, help="Price per unit of weight")
@click.option("--vehicle", help="Vehicle number")
@click.option("--crates", help="Number of crates")
@click.pass_context
def add_sale(
    ctx,
    date_str: str,
    customer: str,
    farm: str,
    chickens: str,
    weight: str,
    rate: str,
    vehicle: str | None,
    crates: str | None,
):
    """Record a sale. The total is weight times rate.

    Examples:
        flockledger sale add --customer "Ali Traders" --farm "North Shed" \\
            --chickens 400 --weight 820.5 --rate 310 --vehicle LES-1234
    """
    book = ctx.obj["book"]
    service = SaleService(book)

    sale_date = date_or_exit(ctx, date_str)
    customer_id = resolve_or_exit(ctx, book, "customer", customer)
    farm_id = resolve_or_exit(ctx, book, "farm", farm)

    try:
        sale, voucher = service.create_sale(
            date=sale_date,
            customer_id=customer_id,
            farm_id=farm_id,
            chickens=count_or_exit(ctx, chickens, "chickens"),
            weight=amount_or_exit(ctx, weight, "weight"),
            rate=amount_or_exit(ctx, rate, "rate"),
            vehicle_number=vehicle,
            crates=count_or_exit(ctx, crates, "crates") if crates is not None else None,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded sale #{sale.id}: {sale.chickens:,} birds, total {money(sale.total)}")
    click.echo(f"Voucher #{voucher.id}: Dr {voucher.debit_account} / Cr {voucher.credit_account}")


@sale_group.command("list")
@period_options
@click.option("--customer", help="Customer name or ID")
@click.option("--farm", help="Farm name or ID")
@click.pass_context
def list_sales(
    ctx,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    customer: str | None,
    farm: str | None,
):
    """List sales, newest first."""
    book = ctx.obj["book"]
    service = SaleService(book)

    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period=period)
    customer_id = resolve_or_exit(ctx, book, "customer", customer) if customer else None
    farm_id = resolve_or_exit(ctx, book, "farm", farm) if farm else None

    sales = service.list_sales(start_date=start, end_date=end, customer_id=customer_id, farm_id=farm_id)
    if not sales:
        click.echo("No sales found.")
        return

    customers = book.state.customers
    farms = book.state.farms
    click.echo(f"\n{'ID':>4}  {'Date':10}  {'Customer':18}  {'Farm':14}  {'Birds':>7}  {'Weight':>10}  {'Rate':>8}  {'Total':>14}")
    click.echo("-" * 100)
    for s in sales:
        customer_name = customers[s.customer_id].name if s.customer_id in customers else "Unknown"
        farm_name = farms[s.farm_id].name if s.farm_id in farms else "Unknown"
        click.echo(
            f"{s.id:>4}  {s.date.isoformat():10}  {customer_name[:18]:18}  {farm_name[:14]:14}  "
            f"{s.chickens:>7,}  {s.weight:>10,.2f}  {s.rate:>8,.2f}  {money(s.total):>14}"
        )


@sale_group.command("edit")
@click.argument("sale_id", type=int)
@click.option("--date", "date_str", help="New date")
@click.option("--customer", help="New customer name or ID")
@click.option("--farm", help="New farm name or ID")
@click.option("--chickens", help="New number of birds")
@click.option("--weight", help="New weight")
@click.option("--rate", help="New rate")
@click.option("--vehicle", help="New vehicle number (empty to clear)")
@click.option("--crates", help="New number of crates (empty to clear)")
@click.pass_context
def edit_sale(
    ctx,
    sale_id: int,
    date_str: str | None,
    customer: str | None,
    farm: str | None,
    chickens: str | None,
    weight: str | None,
    rate: str | None,
    vehicle: str | None,
    crates: str | None,
):
    """Edit a sale. Its voucher is updated to match."""
    book = ctx.obj["book"]
    service = SaleService(book)

    try:
        updated = service.update_sale(
            sale_id,
            date=date_or_exit(ctx, date_str) if date_str else None,
            customer_id=resolve_or_exit(ctx, book, "customer", customer) if customer else None,
            farm_id=resolve_or_exit(ctx, book, "farm", farm) if farm else None,
            chickens=count_or_exit(ctx, chickens, "chickens") if chickens else None,
            weight=amount_or_exit(ctx, weight, "weight") if weight else None,
            rate=amount_or_exit(ctx, rate, "rate") if rate else None,
            vehicle_number=vehicle,
            crates=count_or_exit(ctx, crates, "crates") if crates else None,
            clear_crates=crates == "",
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated sale #{updated.id}: total {money(updated.total)}")


@sale_group.command("delete")
@click.argument("sale_id", type=int)
@click.pass_context
def delete_sale(ctx, sale_id: int):
    """Delete a sale and its voucher."""
    service = SaleService(ctx.obj["book"])

    if service.get_sale(sale_id) is None:
        click.echo(f"Error: Sale {sale_id} not found", err=True)
        ctx.exit(1)

    if not click.confirm(f"Are you sure you want to delete sale #{sale_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_sale(sale_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted sale #{sale_id}")


def register_commands(cli):
    """Register sale commands with main CLI."""
    cli.add_command(sale_group, name="sale")
