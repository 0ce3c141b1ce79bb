from __future__ import annotations

import argparse
import sys
from datetime import datetime
from typing import Sequence

from .analyze import format_report
from .config import config_sha256, load_config
from .errors import ConfigError, FetchError
from .pipeline import run_comparison, run_self_test
from .run_log import RunLogger
from .sources import Listing

_PROG = "crosspost"

_BANNER = (
    "Which stories appear both on Lobsters and on HN, who was first?\n"
    "Compares the Lobsters JSON pages with the Hacker News Firebase API.\n"
)


def _add_common_options(parser: argparse.ArgumentParser, *, default: object) -> None:
    parser.add_argument(
        "--config",
        default=default,
        help="Optional YAML config file (defaults are used without one).",
    )
    parser.add_argument(
        "--run-log",
        default=default,
        help="Write a JSONL event log of the run to this path.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=_PROG,
        description="Find stories posted to both Lobsters and Hacker News.",
    )
    _add_common_options(parser, default=None)

    # Subcommands accept the same options; SUPPRESS keeps values given before the subcommand.
    common = argparse.ArgumentParser(add_help=False)
    _add_common_options(common, default=argparse.SUPPRESS)

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser(
        "help",
        parents=[common],
        help="Show this usage text.",
    ).set_defaults(_handler=_cmd_help)
    subparsers.add_parser(
        "test",
        parents=[common],
        help="Compare a fixed sample offline to check your timezone handling.",
    ).set_defaults(_handler=_cmd_test)
    subparsers.add_parser(
        "top",
        parents=[common],
        help="Analyze the best stories from HN and the front pages of Lobsters.",
    ).set_defaults(_handler=_cmd_top)
    subparsers.add_parser(
        "new",
        parents=[common],
        help="Analyze the newest stories instead of the best.",
    ).set_defaults(_handler=_cmd_new)

    return parser


def _eprint(message: str) -> None:
    print(message, file=sys.stderr)


def _usage() -> str:
    return "\n".join(
        [
            f"Usage: {_PROG} [--config FILE] [--run-log FILE] [help|test|top|new]",
            "Options may also follow the subcommand.",
            f"{_PROG} top: analyze top stories from HN & Lobsters.",
            f"{_PROG} help: this text.",
            f"{_PROG} test: run a test to check your timezones.",
            f"{_PROG} new: get new posts instead of best.",
        ]
    )


def _cmd_help(args: argparse.Namespace, log: RunLogger | None) -> int:
    print(_usage())
    return 0


def _cmd_test(args: argparse.Namespace, log: RunLogger | None) -> int:
    cfg = load_config(args.config)
    print("--- START TEST ---")
    print(
        "Date/time/timezones are hard. Below is a test post comparison, check if your "
        "timezone information is correct. The difference between Lobsters and HN "
        "should be 5 minutes and 36 seconds."
    )
    report = run_self_test(cfg, logger=log)
    print(format_report(report))
    print("--- END TEST ---")
    return 0


def _run_listing(args: argparse.Namespace, log: RunLogger | None, listing: Listing) -> int:
    cfg = load_config(args.config)
    if log is not None:
        log.set_listing(listing)
        log.info("config_loaded", config_path=args.config, config_sha256=config_sha256(cfg))

    kind = "Best" if listing == "top" else "New"
    print(
        f"Fetching HackerNews {kind} Stories async ({cfg.news.max_stories} posts) "
        "(https://github.com/HackerNews/API)"
    )
    print(f"Fetching the first {cfg.forum.pages} Lobsters pages async.")
    print()

    report = run_comparison(cfg, listing, logger=log)
    print(format_report(report))
    return 0


def _cmd_top(args: argparse.Namespace, log: RunLogger | None) -> int:
    return _run_listing(args, log, "top")


def _cmd_new(args: argparse.Namespace, log: RunLogger | None) -> int:
    return _run_listing(args, log, "new")


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    print(_BANNER)
    print(f"Current date/time: {datetime.now().astimezone().strftime('%Y-%m-%dT%H:%M:%S %z')}")
    print()

    handler = getattr(args, "_handler", _cmd_help)

    try:
        log = RunLogger.open(args.run_log) if args.run_log else None
    except OSError as e:
        _eprint(f"Cannot open run log {args.run_log}: {e}")
        return 2

    try:
        if log is not None:
            log.info("command_started", command=args.command or "help")
        return int(handler(args, log))
    except ConfigError as e:
        if log is not None:
            log.exception("command_failed", exc=e)
        _eprint(str(e))
        return 2
    except FetchError as e:
        if log is not None:
            log.exception("command_failed", exc=e, url=e.location)
        _eprint(str(e))
        return 3
    except KeyboardInterrupt:
        _eprint("Interrupted")
        return 130
    except Exception as e:
        if log is not None:
            log.exception("command_failed", exc=e)
        _eprint(f"Unexpected error: {e}")
        return 1
    finally:
        if log is not None:
            log.close()
