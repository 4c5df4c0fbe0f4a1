"""Command line tool for managing plugins in local playground clusters."""

import argparse
import asyncio
import sys
import traceback
from argparse import BooleanOptionalAction
import logging

from playground.exceptions import PlaygroundException
from playground.log import LogConfig
from . import installers


def _make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Command line utility for managing plugins in playground clusters.",
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    )
    parser.add_argument(
        "--color",
        default=None,
        action=BooleanOptionalAction,
        help="Colorize log output (default: when writing to a terminal)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command", required=True)

    installers.InstallersAction.register(subparsers)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Playground command line tool main entry point."""
    parser = _make_parser()
    args = parser.parse_args(argv)

    log_config = LogConfig.from_args(args.log_level, args.color)
    logging.basicConfig(level=log_config.level, handlers=[log_config.handler])
    action = args.cls()
    try:
        asyncio.run(action.run(log_config=log_config, **vars(args)))
    except PlaygroundException as err:
        if log_config.level <= logging.DEBUG:
            traceback.print_exc(file=sys.stderr)
        print("playground error: ", err, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
