"""Backup, restore and reset commands."""

import click

from flockledger.cli.error_handling import handle_domain_error
from flockledger.domain.backup import BackupService
from flockledger.domain.errors import DomainError


@click.command("export")
@click.option(
    "--dir",
    "directory",
    type=click.Path(file_okay=False, exists=True),
    default=".",
    show_default=True,
    help="Directory to write the backup into",
)
@click.pass_context
def export_cmd(ctx, directory: str):
    """Write a JSON backup of the whole book."""
    service = BackupService(ctx.obj["book"])
    path = service.export_to_file(directory)
    click.echo(f"Backup written to {path}")


@click.command("import")
@click.argument("file", type=click.Path())
@click.option("--yes", is_flag=True, help="Replace existing data without asking")
@click.pass_context
def import_cmd(ctx, file: str, yes: bool):
    """Replace all data with the contents of a backup FILE."""
    service = BackupService(ctx.obj["book"])

    if not yes and not click.confirm("This will replace all current data. Continue?"):
        click.echo("Import cancelled.")
        return

    try:
        state = service.import_from_file(file)
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Data restored: {len(state.customers)} customers, {len(state.farms)} farms, "
        f"{len(state.sales)} sales, {len(state.receivables)} receipts"
    )


@click.command("reset")
@click.pass_context
def reset_cmd(ctx):
    """Delete all data, keeping only the default accounts."""
    if not click.confirm("Are you sure? This will delete ALL data!"):
        click.echo("Reset cancelled.")
        return

    BackupService(ctx.obj["book"]).reset()
    click.echo("All data cleared.")


def register_commands(cli):
    """Register data commands with main CLI."""
    cli.add_command(export_cmd)
    cli.add_command(import_cmd)
    cli.add_command(reset_cmd)
