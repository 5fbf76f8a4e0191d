"""finassist-ml CLI using Typer.

Command-line access to the categorizer and the retrieval engine, mainly for
trying out rule tables and knowledge files before wiring them into the app.
"""

import asyncio
import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import TypeVar

import typer
from finassist_ml_contracts import AccountSnapshot, TransactionInput, TransactionSnapshot
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from finassist_ml.categorization import create_categorizer
from finassist_ml.config.categories import CategoryRulesError
from finassist_ml.config.logging_setup import configure_logging
from finassist_ml.config.settings import get_settings
from finassist_ml.retrieval import format_context
from finassist_ml.shared import open_infrastructure

app = typer.Typer(
    name="finassist-ml",
    help="Transaction categorization and financial knowledge retrieval",
    no_args_is_help=True,
)
console = Console()

T = TypeVar("T")


@app.callback()
def main() -> None:
    """Configure logging before any command runs."""
    configure_logging(get_settings())


def _load_records(path: Path | None, model: type[T]) -> list[T]:
    if path is None:
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return TypeAdapter(list[model]).validate_python(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        console.print(f"[red]Cannot load {escape(str(path))}:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e


def _categorizer():
    try:
        return create_categorizer(get_settings())
    except CategoryRulesError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


@app.command("categorize")
def categorize(
    name: str = typer.Argument(..., help="Transaction name as shown on the statement"),
    amount: str = typer.Argument(..., help="Signed amount; negative means money in"),
    merchant: str | None = typer.Option(None, "--merchant", "-m", help="Merchant name"),
    description: str | None = typer.Option(None, "--description", "-d"),
) -> None:
    """Assign a spending category to one transaction.

    Negative amounts need a ``--`` separator, e.g. ``categorize -- Payroll -3500``.
    """
    try:
        value = Decimal(amount)
    except InvalidOperation as e:
        raise typer.BadParameter(f"not a number: {amount}", param_hint="AMOUNT") from e

    txn = TransactionInput(
        name=name, merchant_name=merchant, description=description, amount=value
    )
    console.print(_categorizer().categorize(txn), markup=False, emoji=False)


@app.command("suggest")
def suggest(
    merchant: str = typer.Argument(..., help="Merchant name to look up"),
) -> None:
    """List every category whose keywords match a merchant name."""
    for category in _categorizer().suggest_categories(merchant):
        console.print(category, markup=False, emoji=False)


@app.command("search")
def search(
    query: str = typer.Argument(..., help="Free-text question"),
    top_k: int | None = typer.Option(None, "--top-k", "-k", help="Maximum number of hits"),
    accounts: Path | None = typer.Option(
        None, "--accounts", help="JSON list of account snapshots"
    ),
    transactions: Path | None = typer.Option(
        None, "--transactions", help="JSON list of transaction snapshots"
    ),
    context: bool = typer.Option(
        False, "--context", help="Print hits as a prompt context block"
    ),
) -> None:
    """Search knowledge articles and snapshots for a query."""
    account_records = _load_records(accounts, AccountSnapshot)
    transaction_records = _load_records(transactions, TransactionSnapshot)

    async def run():
        async with open_infrastructure(
            get_settings(), accounts=account_records, transactions=transaction_records
        ) as infra:
            hits = await infra.engine.search(query, top_k)
            return infra.engine.mode, hits

    mode, hits = asyncio.run(run())

    if context:
        console.print(format_context(hits), markup=False, emoji=False, soft_wrap=True)
        return

    console.print(f"[dim]retrieval mode: {mode}[/dim]")
    if not hits:
        console.print("[yellow]No matching documents[/yellow]")
        return
    for rank, hit in enumerate(hits, start=1):
        console.print(f"[bold cyan]{rank}. {escape(hit.title)}[/bold cyan]")
        console.print(f"   {escape(hit.content)}", emoji=False, soft_wrap=True)


@app.command("config")
def show_config() -> None:
    """Show the effective configuration (secrets masked)."""
    settings = get_settings()

    table = Table(title="finassist-ml configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for field_name in type(settings).model_fields:
        value = getattr(settings, field_name)
        if field_name == "embedding_api_key":
            value = "***" if value is not None else None
        elif field_name == "index_database_url" and value is not None:
            value = value.split("@")[-1]
        table.add_row(field_name, escape(str(value)))

    table.add_row("embeddings_enabled", str(settings.embeddings_enabled))
    table.add_row("index_enabled", str(settings.index_enabled))
    console.print(table)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
