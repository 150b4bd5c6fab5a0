# ruff: noqa: I001
"""CLI for the ``receipt_report`` package.

This module exposes callable command handlers (``cmd_report``,
``cmd_delete_receipt``) and a Typer-based console interface. Environment
variables (``RECEIPT_REPORT_CSV_URL``, ``SHEETS_WEBHOOK_URL``, ...) are loaded
from a local ``.env`` using ``python-dotenv`` before any command runs. The
report logic itself lives in :mod:`receipt_report.session` and friends.
"""

from __future__ import annotations

import csv
import json
import os
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer.models import OptionInfo

from .aggregate import format_amount, receipt_amounts
from .filters import parse_filter_spec
from .ingest.source import EmptySourceError, SourceFetchError, load_csv_text
from .logging_setup import configure_logging
from .models import AllFilter, FilterSpec
from .relay import delete_receipt
from .session import ReportSession

_DEFAULT_CURRENCY = "₹"


def _resolve_currency(currency: str | None) -> str:
    if currency is not None:
        return currency
    env_val = os.getenv("RECEIPT_REPORT_CURRENCY")
    return env_val if env_val is not None else _DEFAULT_CURRENCY


def _resolve_filter(day: str | None, month: str | None, year: str | None) -> FilterSpec:
    """Turn the mutually exclusive filter options into a :data:`FilterSpec`."""

    options = (("day", day), ("month", month), ("year", year))
    given = [(kind, value) for kind, value in options if value is not None]
    if len(given) > 1:
        raise ValueError("Use only one of --day, --month or --year")
    if not given:
        return AllFilter()
    kind, value = given[0]
    return parse_filter_spec(kind, value)


def cmd_report(
    *,
    csv_path: str | None = None,
    url: str | None = None,
    day: str | None = None,
    month: str | None = None,
    year: str | None = None,
    list_receipts: bool = False,
    currency: str | None = None,
) -> int:
    """Print receipt totals for the export, optionally filtered by date.

    Output (stdout)
    ---------------
    ``Filter: <label>``, ``Receipts: <matched> of <total>``, then
    ``Total sales``, ``Outstanding`` and ``Paid`` with two decimals. With
    ``list_receipts`` one ``<date>\\t<sales>\\t<paid>\\t<outstanding>`` line
    per matching receipt precedes the totals.

    Errors are written to stderr and the function returns ``1``. On success
    (including an export without receipts) returns ``0``.
    """

    try:
        spec = _resolve_filter(day, month, year)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        csv_text = load_csv_text(csv_path=csv_path, url=url)
    except FileNotFoundError:
        print(f"Error: File not found: {csv_path}", file=sys.stderr)
        return 1
    except PermissionError:
        print(f"Error: Permission denied: {csv_path}", file=sys.stderr)
        return 1
    except (EmptySourceError, SourceFetchError) as e:
        print(f"Error: Failed to load receipts: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        session = ReportSession.from_csv_text(csv_text)
    except EmptySourceError as e:
        print(f"Error: Failed to load receipts: {e}", file=sys.stderr)
        return 1
    except csv.Error as e:
        print(f"Error: Failed to parse receipt data: {e}", file=sys.stderr)
        return 1

    matched = session.apply_filter(spec)
    symbol = _resolve_currency(currency)

    if not session.all_receipts:
        print("No receipts found in export.")

    print(f"Filter: {spec.label}")
    print(f"Receipts: {len(matched)} of {len(session.all_receipts)}")
    if list_receipts:
        for receipt in matched:
            amounts = receipt_amounts(receipt)
            print(
                f"{receipt.date or '-'}\t{format_amount(amounts.sales)}"
                f"\t{format_amount(amounts.paid)}\t{format_amount(amounts.outstanding)}"
            )

    totals = session.totals()
    print(f"Total sales: {symbol}{format_amount(totals.total_sales)}")
    print(f"Outstanding: {symbol}{format_amount(totals.total_outstanding)}")
    print(f"Paid: {symbol}{format_amount(totals.total_paid)}")
    return 0


def cmd_delete_receipt(
    customer: str, index: int, *, webhook_url: str | None = None
) -> int:
    """Relay a delete request and print the webhook's JSON reply to stdout."""

    try:
        result = delete_receipt(customer, index, webhook_url=webhook_url)
    except (ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, ensure_ascii=False))
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Summarize receipts from the customers CSV export (sales, outstanding, paid). "
        "Loads settings from a local .env before running."
    ),
)


# Module-level option object to satisfy ruff B008 (no calls in parameter
# defaults). Typer will inspect this when used as a default value below.
CSV_PATH_OPTION: OptionInfo = typer.Option(
    None,
    "--csv-path",
    help="Path to a customers CSV export (takes precedence over --url).",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the handler reports missing files itself
)


@app.command("report")
def report_cmd(
    csv_path: Path | None = CSV_PATH_OPTION,
    url: str | None = typer.Option(
        None, help="URL of the CSV export (falls back to RECEIPT_REPORT_CSV_URL)."
    ),
    day: str | None = typer.Option(None, help="Only receipts dated on this day (YYYY-MM-DD)."),
    month: str | None = typer.Option(None, help="Only receipts dated in this month (YYYY-MM)."),
    year: str | None = typer.Option(None, help="Only receipts dated in this year (YYYY)."),
    list_receipts: bool = typer.Option(
        False, "--list", help="Print one line per matching receipt before the totals."
    ),
    currency: str | None = typer.Option(
        None, help="Currency prefix for totals (falls back to RECEIPT_REPORT_CURRENCY, then ₹)."
    ),
) -> None:
    """Print sales, outstanding and paid totals for the export."""

    code = cmd_report(
        csv_path=str(csv_path) if csv_path is not None else None,
        url=url,
        day=day,
        month=month,
        year=year,
        list_receipts=list_receipts,
        currency=currency,
    )
    if code:
        raise typer.Exit(code)


@app.command("delete-receipt")
def delete_receipt_cmd(
    customer: str = typer.Option(..., help="Customer name as it appears in the CUSTOMER column."),
    index: int = typer.Option(..., help="Position of the receipt within the customer's row."),
    webhook_url: str | None = typer.Option(
        None, help="Override SHEETS_WEBHOOK_URL (falls back to env var)."
    ),
) -> None:
    """Ask the spreadsheet backend to delete one receipt."""

    code = cmd_delete_receipt(customer, index, webhook_url=webhook_url)
    if code:
        raise typer.Exit(code)


@app.callback()
def _root(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Level for diagnostics on stderr (falls back to RECEIPT_REPORT_LOG_LEVEL, then INFO).",
    ),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    try:
        configure_logging(log_level)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e


if __name__ == "__main__":  # pragma: no cover
    # Running as a module: `python -m receipt_report.cli`
    app()
