"""Farm management commands."""

import click

from flockledger.cli.error_handling import handle_domain_error
from flockledger.cli.resolution import count_or_exit, resolve_or_exit
from flockledger.domain.errors import DomainError
from flockledger.domain.farm import FarmService

LOW_STOCK_PERCENT = 10


@click.group()
def farm_group():
    """Manage farms and bird stock."""
    pass


@farm_group.command("add")
@click.argument("name", metavar="FARM_NAME")
@click.option("--stock", "stock", required=True, help="Initial number of birds")
@click.pass_context
def add_farm(ctx, name: str, stock: str):
    """Add a farm with its starting bird count.

    Examples:
        flockledger farm add "North Shed" --stock 5000
    """
    service = FarmService(ctx.obj["book"])
    initial_stock = count_or_exit(ctx, stock, "stock")
    try:
        farm_id = service.create_farm(name=name, initial_stock=initial_stock)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created farm '{name}' (ID: {farm_id}) with {initial_stock:,} birds")


@farm_group.command("list")
@click.pass_context
def list_farms(ctx):
    """List farms with remaining stock."""
    service = FarmService(ctx.obj["book"])

    farms = service.list_farms()
    if not farms:
        click.echo("No farms found.")
        return

    click.echo("\nFarms:")
    click.echo("-" * 70)
    for f in farms:
        left = service.get_remaining_stock(f.id)
        warning = ""
        if left <= 0 or (f.initial_stock and left * 100 < f.initial_stock * LOW_STOCK_PERCENT):
            warning = "  LOW STOCK"
        click.echo(
            f"ID: {f.id:3d} | {f.name:20s} | Initial: {f.initial_stock:>8,} | Left: {left:>8,}{warning}"
        )


@farm_group.command("edit")
@click.argument("farm", metavar="FARM")
@click.option("--name", help="New name")
@click.option("--stock", help="Corrected initial stock")
@click.pass_context
def edit_farm(ctx, farm: str, name: str | None, stock: str | None):
    """Edit a farm. FARM can be a farm name or ID."""
    book = ctx.obj["book"]
    service = FarmService(book)
    farm_id = resolve_or_exit(ctx, book, "farm", farm)
    initial_stock = count_or_exit(ctx, stock, "stock") if stock is not None else None

    try:
        updated = service.update_farm(farm_id, name=name, initial_stock=initial_stock)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated farm '{updated.name}' (ID: {updated.id})")


@farm_group.command("delete")
@click.argument("farm", metavar="FARM")
@click.pass_context
def delete_farm(ctx, farm: str):
    """Delete a farm and all of its sales.

    FARM can be a farm name or ID.
    """
    book = ctx.obj["book"]
    service = FarmService(book)
    farm_id = resolve_or_exit(ctx, book, "farm", farm)
    farm_obj = service.get_farm(farm_id)

    if not click.confirm(
        f"Delete farm '{farm_obj.name}' (ID: {farm_id})? All sales from this farm will be deleted."
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_farm(farm_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted farm '{farm_obj.name}'")


def register_commands(cli):
    """Register farm commands with main CLI."""
    cli.add_command(farm_group, name="farm")
