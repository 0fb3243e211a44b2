"""Report commands."""

from datetime import date

import click

from flockledger.cli.date_filters import period_options, resolve_cli_date_range
from flockledger.cli.error_handling import handle_domain_error
from flockledger.cli.resolution import date_or_exit, money, resolve_or_exit
from flockledger.domain.errors import DomainError
from flockledger.domain.report import ReportService


def _month_to_date() -> tuple[date, date]:
    today = date.today()
    return today.replace(day=1), today


def _period_label(start: date | None, end: date | None) -> str:
    if start is None and end is None:
        return "all dates"
    return f"{start.isoformat() if start else '...'} to {end.isoformat() if end else '...'}"


@click.group()
def report_group():
    """Sales, ledger, farm and aging reports."""
    pass


@report_group.command("sales")
@period_options
@click.pass_context
def sales_report(ctx, start_date: str | None, end_date: str | None, period: str | None):
    """Sales summary for a period (defaults to this month so far)."""
    book = ctx.obj["book"]
    service = ReportService(book)
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period, default_range=_month_to_date()
    )

    summary = service.sales_summary(start, end)
    click.echo(f"\nSales summary ({_period_label(start, end)})")
    click.echo("=" * 60)

    customers = book.state.customers
    for s in summary.sales:
        name = customers[s.customer_id].name if s.customer_id in customers else "Unknown"
        click.echo(
            f"{s.date.isoformat():10}  #{s.id:<4} {name[:20]:20}  {s.chickens:>7,}  "
            f"{s.weight:>10,.2f}  {money(s.total):>14}"
        )

    t = summary.totals
    click.echo("-" * 60)
    click.echo(f"Sales:   {t.count}")
    click.echo(f"Birds:   {t.chickens:,}")
    click.echo(f"Weight:  {t.weight:,.2f}")
    click.echo(f"Revenue: {money(t.total)}")


@report_group.command("ledger")
@click.argument("customer", metavar="CUSTOMER")
@period_options
@click.pass_context
def ledger_report(ctx, customer: str, start_date: str | None, end_date: str | None, period: str | None):
    """Statement of a customer's account with running balance.

    CUSTOMER can be a customer name or ID.
    """
    book = ctx.obj["book"]
    service = ReportService(book)
    customer_id = resolve_or_exit(ctx, book, "customer", customer)
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period=period)

    try:
        ledger = service.customer_ledger(customer_id, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nLedger: {ledger.customer.name} ({_period_label(start, end)})")
    click.echo("=" * 90)
    click.echo(f"{'Date':10}  {'Description':36}  {'Debit':>12}  {'Credit':>12}  {'Balance':>12}")
    click.echo("-" * 90)
    click.echo(f"{'':10}  {'Opening balance':36}  {'':>12}  {'':>12}  {money(ledger.opening_balance):>12}")
    for line in ledger.lines:
        debit = money(line.debit) if line.debit else ""
        credit = money(line.credit) if line.credit else ""
        click.echo(
            f"{line.date.isoformat():10}  {line.description[:36]:36}  "
            f"{debit:>12}  {credit:>12}  {money(line.balance):>12}"
        )
    click.echo("-" * 90)
    click.echo(f"{'':10}  {'Closing balance':36}  {'':>12}  {'':>12}  {money(ledger.closing_balance):>12}")


@report_group.command("farms")
@click.option("--farm", help="Farm name or ID")
@period_options
@click.pass_context
def farms_report(ctx, farm: str | None, start_date: str | None, end_date: str | None, period: str | None):
    """Birds and revenue per farm, with remaining stock."""
    book = ctx.obj["book"]
    service = ReportService(book)
    farm_id = resolve_or_exit(ctx, book, "farm", farm) if farm else None
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period=period)

    try:
        rows = service.farm_performance(start, end, farm_id=farm_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not rows:
        click.echo("No farms found.")
        return

    click.echo(f"\nFarm performance ({_period_label(start, end)})")
    click.echo(f"{'Farm':20}  {'Sales':>6}  {'Birds':>8}  {'Weight':>11}  {'Revenue':>14}  {'Left':>8}")
    click.echo("-" * 76)
    for row in rows:
        p = row.period
        click.echo(
            f"{row.farm.name[:20]:20}  {p.count:>6}  {p.chickens:>8,}  {p.weight:>11,.2f}  "
            f"{money(p.total):>14}  {row.remaining_stock:>8,}"
        )


@report_group.command("aging")
@click.option("--as-of", "as_of", default="today", show_default=True, help="Date to age receivables at")
@click.pass_context
def aging_report(ctx, as_of: str):
    """Outstanding balances split by how long sales have gone unpaid."""
    service = ReportService(ctx.obj["book"])
    as_of_date = date_or_exit(ctx, as_of, "as-of date")

    rows = service.aging(as_of_date)
    if not rows:
        click.echo("No outstanding balances.")
        return

    click.echo(f"\nReceivables aging as of {as_of_date.isoformat()}")
    click.echo(
        f"{'Customer':20}  {'0-15':>12}  {'16-30':>12}  {'31-60':>12}  {'60+':>12}  {'Total':>13}  Last payment"
    )
    click.echo("-" * 110)
    for row in rows:
        b = row.buckets
        last = (
            f"{row.last_payment.date.isoformat()} ({money(row.last_payment.amount)})"
            if row.last_payment
            else "-"
        )
        click.echo(
            f"{row.customer.name[:20]:20}  {money(b.days_0_15):>12}  {money(b.days_16_30):>12}  "
            f"{money(b.days_31_60):>12}  {money(b.days_60_plus):>12}  {money(row.total_due):>13}  {last}"
        )


@report_group.command("dashboard")
@click.pass_context
def dashboard_report(ctx):
    """Headline totals and the month-by-month series."""
    service = ReportService(ctx.obj["book"])
    totals = service.dashboard()

    click.echo("\nDashboard")
    click.echo("=" * 40)
    click.echo(f"Total sales:     {money(totals.total_sales):>20}")
    click.echo(f"Total received:  {money(totals.total_received):>20}")
    click.echo(f"Outstanding:     {money(totals.outstanding):>20}")
    click.echo(f"Customers:       {totals.customer_count:>20}")
    click.echo(f"Farms:           {totals.farm_count:>20}")
    click.echo(f"Birds stocked:   {totals.birds_initial:>20,}")
    click.echo(f"Birds sold:      {totals.birds_sold:>20,}")
    click.echo(f"Birds left:      {totals.birds_left:>20,}")

    months = service.monthly()
    if months:
        click.echo("\nMonth      Sales            Received")
        click.echo("-" * 40)
        for m in months:
            click.echo(f"{m.month:9}  {money(m.sales):>14}  {money(m.received):>14}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
