"""Customer management commands."""

import click

from flockledger.cli.error_handling import handle_domain_error
from flockledger.cli.resolution import money, resolve_or_exit
from flockledger.domain.customer import CustomerService
from flockledger.domain.errors import DomainError


@click.group()
def customer_group():
    """Manage customers."""
    pass


@customer_group.command("add")
@click.argument("name", metavar="CUSTOMER_NAME")
@click.option("--phone", default="", help="Phone number")
@click.option("--address", default="", help="Address")
@click.pass_context
def add_customer(ctx, name: str, phone: str, address: str):
    """Add a new customer.

    Examples:
        flockledger customer add "Ali Traders" --phone 0300-1234567
    """
    service = CustomerService(ctx.obj["book"])
    try:
        customer_id = service.create_customer(name=name, phone=phone, address=address)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created customer '{name}' (ID: {customer_id})")


@customer_group.command("list")
@click.option("--search", help="Filter by name or phone")
@click.pass_context
def list_customers(ctx, search: str | None):
    """List customers with their outstanding balance."""
    service = CustomerService(ctx.obj["book"])

    customers = service.list_customers(search=search)
    if not customers:
        click.echo("No customers found.")
        return

    click.echo("\nCustomers:")
    click.echo("-" * 78)
    for c in customers:
        balance = service.get_balance(c.id)
        status = "owes" if balance > 0 else "settled"
        click.echo(
            f"ID: {c.id:3d} | {c.name:24s} | {c.phone:14s} | {money(balance):>14s} {status}"
        )


@customer_group.command("edit")
@click.argument("customer", metavar="CUSTOMER")
@click.option("--name", help="New name")
@click.option("--phone", help="New phone number")
@click.option("--address", help="New address")
@click.pass_context
def edit_customer(ctx, customer: str, name: str | None, phone: str | None, address: str | None):
    """Edit a customer's details.

    CUSTOMER can be a customer name or ID.
    """
    book = ctx.obj["book"]
    service = CustomerService(book)
    customer_id = resolve_or_exit(ctx, book, "customer", customer)

    try:
        updated = service.update_customer(customer_id, name=name, phone=phone, address=address)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated customer '{updated.name}' (ID: {updated.id})")


@customer_group.command("delete")
@click.argument("customer", metavar="CUSTOMER")
@click.pass_context
def delete_customer(ctx, customer: str):
    """Delete a customer.

    CUSTOMER can be a customer name or ID. All of the customer's sales and
    receipts, and their vouchers, are deleted too.
    """
    book = ctx.obj["book"]
    service = CustomerService(book)
    customer_id = resolve_or_exit(ctx, book, "customer", customer)
    customer_obj = service.get_customer(customer_id)

    sale_count = sum(1 for s in book.state.sales.values() if s.customer_id == customer_id)
    receipt_count = sum(1 for r in book.state.receivables.values() if r.customer_id == customer_id)
    if sale_count or receipt_count:
        click.echo(
            f"Customer '{customer_obj.name}' has {sale_count} sale(s) and "
            f"{receipt_count} receipt(s); they will be deleted too."
        )

    if not click.confirm(f"Are you sure you want to delete customer '{customer_obj.name}' (ID: {customer_id})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_customer(customer_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted customer '{customer_obj.name}'")


def register_commands(cli):
    """Register customer commands with main CLI."""
    cli.add_command(customer_group, name="customer")
