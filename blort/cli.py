#!/usr/bin/env python3
"""
blort command line: run the web server, clear the database or show names.
"""

import argparse
import sys
from typing import List, Optional

from dotenv import load_dotenv

from blort.models.visit import OrderBy
from blort.services.errors import RegistryError
from blort.services.logging.logging import get_logger
from blort.services.report import format_names_report

logger = get_logger(logger_name=__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blort",
        description="A name tracking web application",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("run", help="Run the web server")
    subparsers.add_parser("clear", help="Clear all data from the database")

    show = subparsers.add_parser("show", help="Show recent names with their statistics")
    show.add_argument(
        "-l", "--limit",
        type=_positive_int,
        default=10,
        help="Number of names to show (default: 10)",
    )
    show.add_argument(
        "-o", "--order",
        type=OrderBy,
        choices=list(OrderBy),
        default=OrderBy.LAST_SEEN,
        metavar="{" + ",".join(o.value for o in OrderBy) + "}",
        help="Order results by last_seen or visits",
    )
    return parser


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive number: {value!r}")
    return number


def run_server() -> None:
    import uvicorn
    from blort.database.config import get_settings

    settings = get_settings()
    print(f"Server running on http://{settings.HOST}:{settings.PORT}")
    uvicorn.run(
        "blort.api:create_application",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


def clear_database(registry) -> None:
    registry.clear_all()
    print("Database cleared successfully")


def show_names(registry, limit: int, order: OrderBy) -> None:
    records = registry.list_top(limit, order)
    for line in format_names_report(records, limit, order):
        print(line)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    from blort.database.database import get_engine, init_db, get_registry

    try:
        init_db(get_engine())
        if args.command == "run":
            run_server()
        elif args.command == "clear":
            clear_database(get_registry())
        elif args.command == "show":
            show_names(get_registry(), args.limit, args.order)
    except RegistryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.error(f"Command {args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
