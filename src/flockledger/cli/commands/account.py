"""Account management commands."""

import click

from flockledger.cli.error_handling import handle_domain_error
from flockledger.cli.resolution import amount_or_exit, money, resolve_or_exit
from flockledger.domain.account import AccountService
from flockledger.domain.entities import AccountType
from flockledger.domain.errors import DomainError

ACCOUNT_TYPES = [t.value for t in AccountType]


@click.group()
def account_group():
    """Manage money accounts."""
    pass


@account_group.command("add")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--type", "account_type", type=click.Choice(ACCOUNT_TYPES), default="cash", show_default=True)
@click.option("--opening", "opening", default="0", help="Opening balance")
@click.pass_context
def add_account(ctx, name: str, account_type: str, opening: str):
    """Create a new account.

    Examples:
        flockledger account add "Meezan Bank" --type bank --opening 25000
    """
    service = AccountService(ctx.obj["book"])
    initial_balance = amount_or_exit(ctx, opening, "opening balance")

    try:
        account_id = service.create_account(
            name=name, type=AccountType(account_type), initial_balance=initial_balance
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{name}' (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts with their balance."""
    service = AccountService(ctx.obj["book"])

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        balance = service.get_balance(acc.id)
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | {acc.type.value:5s} | {money(balance):>14s}")


@account_group.command("edit")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--type", "account_type", type=click.Choice(ACCOUNT_TYPES), help="New account type")
@click.option("--opening", help="New opening balance")
@click.pass_context
def edit_account(ctx, account: str, name: str | None, account_type: str | None, opening: str | None) -> None:
    """Edit an account.

    ACCOUNT can be an account name or ID.

    Examples:
        flockledger account edit "Bank Account" --name "HBL Current"
        flockledger account edit 1 --opening 5000
    """
    book = ctx.obj["book"]
    service = AccountService(book)
    account_id = resolve_or_exit(ctx, book, "account", account)
    initial_balance = amount_or_exit(ctx, opening, "opening balance") if opening is not None else None

    try:
        updated = service.update_account(
            account_id,
            name=name,
            type=AccountType(account_type) if account_type else None,
            initial_balance=initial_balance,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated account '{updated.name}' (ID: {updated.id})")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def delete_account(ctx, account: str) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID. Receipts deposited into the
    account are kept.
    """
    book = ctx.obj["book"]
    service = AccountService(book)
    account_id = resolve_or_exit(ctx, book, "account", account)
    account_obj = service.get_account(account_id)

    receipt_count = service.get_receipt_count(account_id)
    if receipt_count:
        click.echo(
            f"Account '{account_obj.name}' holds {receipt_count} "
            f"receipt{'s' if receipt_count != 1 else ''}."
        )

    if not click.confirm(f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{account_obj.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
