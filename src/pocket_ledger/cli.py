import argparse
import logging

from dotenv import load_dotenv

from . import __version__
from .config import load_settings
from .logging_setup import setup_logging


def _print_result(result) -> None:
    print(result.message)
    for w in result.warnings:
        print(w)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pocket-ledger")
    parser.add_argument("--version", action="store_true", help="Print version and exit")

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("health", help="Check that settings load")
    sub.add_parser("status-env", help="Print effective settings")

    p_add = sub.add_parser("add", help="Record an income or expense")
    p_add.add_argument("--kind", choices=["income", "expense"], default="expense")
    p_add.add_argument("--amount", required=True, help="Positive amount, e.g. 120.50")
    p_add.add_argument("--description", default="", help="Optional free text")
    p_add.add_argument("--date", default="", help="YYYY-MM-DD. Default: today")

    p_del = sub.add_parser("delete", help="Delete a transaction by id")
    p_del.add_argument("tx_id")

    p_show = sub.add_parser("show", help="Rows and totals for one month")
    p_show.add_argument("--year", type=int, default=None)
    p_show.add_argument("--month", type=int, default=None, choices=range(1, 13), metavar="1..12")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    load_dotenv()
    settings = load_settings()
    setup_logging(settings.log_level)

    logger = logging.getLogger(__name__)

    command = args.command or "health"

    if command == "health":
        logger.info("Application started successfully.")
        print("ok")
        return 0

    if command == "status-env":
        print("LEDGER_DATA_DIR =", settings.data_dir)
        print("LEDGER_STORAGE_KEY =", settings.storage_key)
        print("LEDGER_TZ =", settings.timezone)
        print("LEDGER_CURRENCY =", settings.currency_symbol)
        print("LOG_LEVEL =", settings.log_level)
        return 0

    from .ui.app import LedgerApp
    from .ui.render import render_text

    app = LedgerApp.from_settings(settings)

    if command == "add":
        result = app.add_transaction(args.kind, args.amount, args.description, args.date)
        _print_result(result)
        if not result.ok:
            return 1
        tx = result.transaction
        app.set_filter(tx.date.year, tx.date.month)
        print(render_text(app.view()))
        return 0

    if command == "delete":
        _print_result(app.delete_transaction(args.tx_id))
        print(render_text(app.view()))
        return 0

    if command == "show":
        year = args.year if args.year is not None else app.selector.year
        month = args.month if args.month is not None else app.selector.month
        if year < 1:
            parser.error("--year must be >= 1")
        app.set_filter(year, month)
        print(render_text(app.view()))
        return 0

    return 1
