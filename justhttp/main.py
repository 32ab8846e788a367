"""
Main module for the justhttp command line.

This module sends a single JSON request through the request pipeline and prints the decoded response. Request arguments can come from a named profile, from flags, or both (flags win).

Functions:
    parse_args(argv=None):
        Parses command-line arguments for justhttp.

    configure_logging(log_file: str | None, verbosity: int):
        Configures logging handlers and verbosity levels.

    log_event(event: str, **fields):
        Logs structured events as JSON records.

    list_profiles(profiles: Dict[str, Profile]):
        Displays available profiles in a formatted table.

    main(argv=None):
        Entry point for the CLI. Resolves request arguments, sends the request and prints the result.

Usage:
    justhttp POST https://example.org/items --data '{"name": "x"}' --timeout-ms 500 -v

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import argparse
import sys
import json
import logging
from pathlib import Path
from typing import Dict, List
from rich.console import Console
from rich.table import Table
from rich import box
from rich.markup import escape

from .config import load_profiles, find_profile, Profile
from . import __version__
from .api import get, post, put, delete
from .errors import JustHttpError
from .options import BasicAuthCredentials, RequestArguments


console = Console()
err_console = Console(stderr=True)

METHODS = ("GET", "POST", "PUT", "DELETE")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="justhttp - Send a JSON request and print the decoded JSON response")
    parser.add_argument("method", nargs="?", type=str.upper, choices=METHODS,
                        help="HTTP method")
    parser.add_argument("url", nargs="?", help="Request URL")
    parser.add_argument("--data", default=None,
                        help="JSON request payload (POST, PUT, DELETE)")
    parser.add_argument("--timeout-ms", type=int, default=None,
                        help="Set deadline for the whole call (in milliseconds; disabled if omitted or 0)")
    parser.add_argument("--size-limit", type=int, default=None,
                        help="Set maximum response size in bytes")
    parser.add_argument("--user", default=None,
                        help="Set basic auth user")
    parser.add_argument("--password", default=None,
                        help="Set basic auth password")
    parser.add_argument("--param", action="append", default=[], metavar="KEY=VALUE",
                        help="Add a query parameter (repeatable)")
    parser.add_argument("--profile", default=None,
                        help="Apply a named profile before flags")
    parser.add_argument("--profiles-dir", default="profiles",
                        help="Set directory containing profile definition files")
    parser.add_argument("--list-profiles", action="store_true",
                        help="List available profiles")
    parser.add_argument("--log-file", default=None,
                        help="Set path to log file")
    parser.add_argument("-v", "--verbose", action="count",
                        default=0, help="Verbose output")
    parser.add_argument("--version", action="version",
                        version=f"justhttp {__version__}")
    return parser.parse_args(argv)


def configure_logging(log_file: str | None, verbosity: int):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        handlers.append(fh)
    logging.basicConfig(level=level, handlers=handlers, format="%(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)


def log_event(event: str, **fields):
    record = {"event": event, **fields}
    logging.getLogger(__name__).info(json.dumps(record, ensure_ascii=False))


def list_profiles(profiles: Dict[str, Profile]):
    table = Table(title="AVAILABLE PROFILES", box=box.SIMPLE_HEAVY)
    table.add_column("NAME")
    table.add_column("TIMEOUT (MS)")
    table.add_column("SIZE LIMIT")
    table.add_column("AUTH USER")
    table.add_column("QUERY PARAMS")
    for p in profiles.values():
        a = p.arguments
        creds = a.basic_auth_credentials
        table.add_row(
            p.name,
            str(a.timeout_in_milliseconds or ""),
            str(a.size_limit or ""),
            creds.user if creds else "",
            ",".join(f"{k}={v}" for k, v in (a.query_params or {}).items()))
    console.print(table)


def parse_params(pairs: List[str]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"expected KEY=VALUE, got {pair!r}")
        params[key] = value
    return params


def arguments_from_flags(args) -> RequestArguments:
    creds = None
    if args.user is not None or args.password is not None:
        creds = BasicAuthCredentials(user=args.user or "", password=args.password or "")
    return RequestArguments(
        timeout_in_milliseconds=args.timeout_ms,
        size_limit=args.size_limit,
        basic_auth_credentials=creds,
        query_params=parse_params(args.param) or None,
    )


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_file, args.verbose)

    profiles: Dict[str, Profile] = {}
    profiles_dir = Path(args.profiles_dir)
    if profiles_dir.exists():
        profiles = load_profiles(profiles_dir)
    elif args.list_profiles or args.profile:
        err_console.print(f"[red]Profiles directory {profiles_dir} does not exist[/red]")
        return 1
    if args.list_profiles:
        list_profiles(profiles)
        return 0

    if not args.method or not args.url:
        err_console.print("[red]METHOD and URL are required[/red]")
        return 1

    overrides: List[RequestArguments] = []
    if args.profile:
        profile = find_profile(profiles, args.profile)
        if profile is None:
            err_console.print(
                f"[red]Profile {args.profile} not found. Available: {list(profiles)}[/red]")
            return 1
        overrides.append(profile.arguments)
    try:
        overrides.append(arguments_from_flags(args))
        data = json.loads(args.data) if args.data is not None else None
    except ValueError as e:
        err_console.print(f"[red]Invalid argument[/red]: {e}")
        return 1

    log_event("request", method=args.method, url=args.url, profile=args.profile)
    try:
        if args.method == "GET":
            result = get(args.url, *overrides)
        elif args.method == "POST":
            result = post(args.url, data, *overrides)
        elif args.method == "PUT":
            result = put(args.url, data, *overrides)
        else:
            result = delete(args.url, data, *overrides)
    except JustHttpError as e:
        err_console.print(
            f"[red]Request failed[/red] ({type(e).__name__}): {escape(str(e))}", highlight=False)
        log_event("error", method=args.method, url=args.url,
                  kind=type(e).__name__, error=str(e))
        return 1

    console.print_json(data=result)
    log_event("received", method=args.method, url=args.url)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
