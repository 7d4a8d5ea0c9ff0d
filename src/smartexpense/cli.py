"""Command-line interface for SmartExpense."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterator, Optional

import click

from .config import BaseConfig
from .constants.categories import TRANSACTION_KINDS
from .domain.errors import LedgerError
from .domain.ledger import Ledger
from .domain.repositories import SnapshotStore
from .infra.stores import create_store
from .logging_config import get_logger, setup_logging
from .models.transaction import Kind
from .services.export_csv import default_export_name, export_transactions_csv
from .services.export_pdf import export_transactions_pdf
from .services.ledger_service import ledger_session, open_ledger
from .services.reports import spending_chart_png

logger = get_logger(__name__)


@dataclass
class CliContext:
    """Configuration, store and owner key shared by all commands."""

    config: BaseConfig
    store: SnapshotStore
    user: str

    @contextmanager
    def ledger(self, *, write: bool = False) -> Iterator[Ledger]:
        """Open the user's ledger, saving it afterwards when ``write`` is set."""

        try:
            if write:
                with ledger_session(self.store, self.user, config=self.config) as ledger:
                    yield ledger
            else:
                yield open_ledger(self.store, self.user, config=self.config)
        except LedgerError as exc:
            logger.warning("Command failed: %s", exc, extra={"user": self.user})
            raise click.ClickException(str(exc)) from exc


pass_cli = click.make_pass_decorator(CliContext)


def _money(value) -> str:
    return f"{value:,.2f}"


@click.group()
@click.option("--user", "-u", default=None, help="Ledger owner (defaults to SMARTEXPENSE_USER or 'guest').")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Echo log messages to the console.")
@click.pass_context
def main(ctx: click.Context, user: Optional[str], verbose: bool) -> None:
    """Track personal income and expenses."""

    config = BaseConfig()
    setup_logging(config, console=verbose)
    owner = (user or config.DEFAULT_USER).strip()
    if not owner:
        raise click.BadParameter("user must not be blank", param_hint="--user")
    ctx.obj = CliContext(config=config, store=create_store(config), user=owner)


@main.command("add")
@click.argument("amount")
@click.argument("category")
@click.option("--kind", "-k", type=click.Choice(TRANSACTION_KINDS), default="expense", show_default=True)
@click.option("--date", "-D", "when", default=None, help="Transaction date, YYYY-MM-DD (default: today).")
@click.option("--description", "-d", default="", help="Free-text note.")
@pass_cli
def add_command(obj: CliContext, amount: str, category: str, kind: str, when: Optional[str], description: str) -> None:
    """Record an income or expense entry."""

    with obj.ledger(write=True) as ledger:
        if category not in ledger.categories:
            raise click.ClickException(
                f"Unknown category {category!r}. Add it first with 'categories add'."
            )
        txn = ledger.add_transaction(
            when or date.today().isoformat(), amount, kind, category, description
        )
    click.echo(f"Added {txn.kind.value} {_money(txn.amount)} to {txn.category} ({txn.id})")


@main.command("remove")
@click.argument("transaction_id")
@pass_cli
def remove_command(obj: CliContext, transaction_id: str) -> None:
    """Delete a transaction by id."""

    with obj.ledger(write=True) as ledger:
        removed = ledger.remove_transaction(transaction_id)
    if removed:
        click.echo(f"Removed {transaction_id}")
    else:
        click.echo(f"No transaction with id {transaction_id}")


@main.command("list")
@click.option("--month", "-m", default=None, help="Only show YYYY-MM.")
@pass_cli
def list_command(obj: CliContext, month: Optional[str]) -> None:
    """List transactions in the order they were recorded."""

    with obj.ledger() as ledger:
        txs = ledger.list_transactions(month)
    if not txs:
        click.echo("No transactions.")
        return
    for txn in txs:
        sign = "+" if txn.kind is Kind.INCOME else "-"
        line = f"{txn.id}  {txn.date.isoformat()}  {txn.category:<12} {sign + _money(txn.amount):>13}"
        if txn.description:
            line += f"  {txn.description}"
        click.echo(line)


@main.command("summary")
@click.option("--month", "-m", default=None, help="Only summarize YYYY-MM.")
@pass_cli
def summary_command(obj: CliContext, month: Optional[str]) -> None:
    """Show income, expense and net balance plus spending by category."""

    with obj.ledger() as ledger:
        balance = ledger.net_balance(month)
        totals = ledger.totals_by_category(month)
    click.echo(f"Income:  {_money(balance.income)}")
    click.echo(f"Expense: {_money(balance.expense)}")
    click.echo(f"Net:     {_money(balance.net)}")
    if totals:
        click.echo("")
        click.echo("Spending by category:")
        for label, amount in totals.items():
            click.echo(f"  {label:<12} {_money(amount):>12}")


@main.command("monthly")
@pass_cli
def monthly_command(obj: CliContext) -> None:
    """Show spending per month and category."""

    with obj.ledger() as ledger:
        by_month = ledger.totals_by_month()
    if not by_month:
        click.echo("No expenses.")
        return
    for month, totals in by_month.items():
        click.echo(f"{month}  total {_money(sum(totals.values()))}")
        for label, amount in totals.items():
            click.echo(f"  {label:<12} {_money(amount):>12}")


@main.command("activity")
@click.option("--limit", "-n", default=20, show_default=True, type=click.IntRange(min=1))
@pass_cli
def activity_command(obj: CliContext, limit: int) -> None:
    """Show recent ledger activity, newest first."""

    with obj.ledger() as ledger:
        entries = ledger.activity[:limit]
    if not entries:
        click.echo("No activity yet.")
        return
    for entry in entries:
        click.echo(f"{entry.timestamp:%Y-%m-%d %H:%M:%S}  {entry.message}")


@main.group("categories")
def categories_group() -> None:
    """Manage the category list."""


@categories_group.command("list")
@pass_cli
def categories_list(obj: CliContext) -> None:
    with obj.ledger() as ledger:
        for index, label in enumerate(ledger.categories):
            click.echo(f"{index}  {label}")


@categories_group.command("add")
@click.argument("label")
@pass_cli
def categories_add(obj: CliContext, label: str) -> None:
    with obj.ledger(write=True) as ledger:
        added = ledger.add_category(label)
    if not added:
        raise click.ClickException(f"Category {label!r} already exists or is blank.")
    click.echo(f"Category added: {label.strip()}")


@categories_group.command("remove")
@click.argument("label")
@click.option("--index", "by_index", is_flag=True, default=False, help="Treat LABEL as a list position.")
@pass_cli
def categories_remove(obj: CliContext, label: str, by_index: bool) -> None:
    """Remove a category; existing transactions keep their label."""

    if by_index:
        try:
            target: int | str = int(label)
        except ValueError as exc:
            raise click.BadParameter("position must be an integer", param_hint="LABEL") from exc
    else:
        target = label
    with obj.ledger(write=True) as ledger:
        removed = ledger.remove_category(target)
    if removed is None:
        raise click.ClickException(f"No category {label!r}.")
    click.echo(f"Category removed: {removed}")


@main.group("export")
def export_group() -> None:
    """Export transactions or charts to files."""


@contextmanager
def _writing(path: Path) -> Iterator[None]:
    """Report an unwritable output path as a one-line CLI error."""

    try:
        yield
    except OSError as exc:
        logger.warning("Export failed: %s", exc, extra={"path": str(path)})
        raise click.ClickException(f"Cannot write {path}: {exc.strerror or exc}") from exc


@export_group.command("csv")
@click.option("--month", "-m", default=None, help="Only export YYYY-MM.")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.option("--with-kind", is_flag=True, default=False, help="Append a Type column.")
@pass_cli
def export_csv_command(obj: CliContext, month: Optional[str], output: Optional[Path], with_kind: bool) -> None:
    """Write transactions to a CSV file."""

    target = output or Path.cwd() / default_export_name()
    with obj.ledger(write=True) as ledger:
        txs = ledger.list_transactions(month)
        with _writing(target):
            path = export_transactions_csv(transactions=txs, output_path=target, include_kind=with_kind)
        ledger.log_activity("Exported CSV")
    click.echo(f"Exported {len(txs)} transactions to {path}")


@export_group.command("pdf")
@click.option("--month", "-m", default=None, help="Only export YYYY-MM.")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None)
@pass_cli
def export_pdf_command(obj: CliContext, month: Optional[str], output: Optional[Path]) -> None:
    """Write a printable transaction listing to a PDF file."""

    target = output or Path.cwd() / default_export_name(extension="pdf")
    with obj.ledger(write=True) as ledger:
        txs = ledger.list_transactions(month)
        title = f"Transactions ({month})" if month else "Transactions"
        with _writing(target):
            path = export_transactions_pdf(transactions=txs, output_path=target, title=title)
        ledger.log_activity("Exported PDF")
    click.echo(f"Exported {len(txs)} transactions to {path}")


@export_group.command("chart")
@click.option("--month", "-m", default=None, help="Only chart YYYY-MM.")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None)
@pass_cli
def export_chart_command(obj: CliContext, month: Optional[str], output: Optional[Path]) -> None:
    """Render spending by category as a doughnut chart PNG."""

    target = output or Path.cwd() / f"spending_{date.today().isoformat()}.png"
    with obj.ledger(write=True) as ledger:
        totals = ledger.totals_by_category(month)
        title = f"Spending by Category ({month})" if month else "Spending by Category"
        with _writing(target):
            path = spending_chart_png(totals, output_path=target, title=title)
        ledger.log_activity("Exported chart")
    click.echo(f"Chart written: {path}")


if __name__ == "__main__":  # pragma: no cover
    main()
