#!/usr/bin/env python3
"""
arbor-sp — command line access to an Arbor SP leader.

Usage:
    arbor-sp get managed_objects 12                   # Fetch one object
    arbor-sp find managed_objects --field name --search "Transit A"
    arbor-sp find notification_groups --per-page 100
    arbor-sp graph peer 12 "Transit A"                # Save a peer traffic PNG
    arbor-sp graph interface 3421 "xe-0/0/1"
    arbor-sp graph asn 64512 --start "30 days ago"
    arbor-sp --debug find managed_objects             # Verbose, with wire logs

Connection settings come from the .env file (see settings.py). Results are
written to a timestamped folder under OUTPUT_DIR.
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from .client import ArborClient
from .config import ArborConfig
from .models import Result
from .output_manager import OutputManager
from .settings import DEFAULT_PER_PAGE, DEFAULT_SETTINGS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arbor-sp",
        description="Arbor SP client - read configuration objects and fetch traffic graphs",
    )
    parser.add_argument("--env", "-e", default="./.env", help="Path to .env file")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--output-dir", help="Override OUTPUT_DIR")
    parser.add_argument("--no-save", action="store_true", help="Print results only, write nothing to disk")

    commands = parser.add_subparsers(dest="command", required=True)

    get = commands.add_parser("get", help="Fetch one object by ID")
    get.add_argument("endpoint", help="REST endpoint, e.g. managed_objects")
    get.add_argument("id", help="Object ID")

    find = commands.add_parser("find", help="List a collection, optionally filtered on one attribute")
    find.add_argument("endpoint", help="REST endpoint, e.g. managed_objects")
    find.add_argument("--field", help="Attribute to match on")
    find.add_argument("--search", help="Value the attribute must equal")
    find.add_argument("--per-page", type=int, default=DEFAULT_PER_PAGE, help="Records per page")

    graph = commands.add_parser("graph", help="Fetch a traffic graph as PNG")
    graph.add_argument("kind", choices=["peer", "interface", "asn"], help="Graph type")
    graph.add_argument("id", help="Managed object ID, interface ID or AS number")
    graph.add_argument("title", nargs="?", default=None, help="Graph title (peer/interface)")
    graph.add_argument("--start", default="7 days ago", help="Start of the time range")
    graph.add_argument("--end", default="now", help="End of the time range")

    return parser


def _run_get(client: ArborClient, args) -> Result:
    return client.get_by_id(args.endpoint, args.id)


def _run_find(client: ArborClient, args) -> Result:
    if args.search is not None and args.field is None:
        print("  Warning: --search without --field matches every record")
    return client.find(args.endpoint, args.field, args.search, args.per_page)


def _run_graph(client: ArborClient, args) -> Result:
    if args.kind == "asn":
        return client.get_asn_traffic_graph(args.id, args.start, args.end)

    title = args.title or f"{args.kind} {args.id}"
    if args.kind == "peer":
        return client.get_peer_traffic_graph(args.id, title, args.start, args.end)
    return client.get_interface_traffic_graph(args.id, title, args.start, args.end)


def _run_label(args) -> str:
    if args.command == "graph":
        return f"graph_{args.kind}_{args.id}"
    if args.command == "get":
        return f"get_{args.endpoint}_{args.id}"
    return f"find_{args.endpoint}"


def _save(output_manager: OutputManager, args, result: Result) -> None:
    output_manager.create_run_dir(_run_label(args))

    if args.command == "graph":
        if result.value:
            path = output_manager.save_bytes(f"{_run_label(args)}.png", result.value)
            print(f"  Saved graph: {path}")
    elif result.value is not None:
        path = output_manager.save_json("records.json", result.value)
        print(f"  Saved records: {path}")

    summary = {
        "command": args.command,
        "arguments": {k: v for k, v in vars(args).items() if k not in ("env", "command")},
        "success": result.ok,
        "error": result.error_message or None,
    }
    path = output_manager.save_json("run_results.json", summary)
    print(f"  Results saved to: {path}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(name)s - %(levelname)s - %(message)s'
        )
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    config = ArborConfig.from_env(args.env)
    if args.debug:
        config.debug = True

    problems = config.validate(rest=args.command != "graph", web_service=args.command == "graph")
    if problems:
        print("\nConfiguration Errors:")
        for problem in problems:
            print(f"  - {problem}")
        return 1

    output_manager = OutputManager(
        args.output_dir or os.getenv("OUTPUT_DIR", DEFAULT_SETTINGS["OUTPUT_DIR"]),
        int(os.getenv("OUTPUT_RETENTION_DAYS", str(DEFAULT_SETTINGS["OUTPUT_RETENTION_DAYS"]))),
    )
    if not args.no_save and output_manager.retention_days > 0:
        deleted = output_manager.cleanup_old_folders(config.debug)
        if deleted > 0:
            print(f"Cleaned up {deleted} old output folder(s)")

    print(f"\n{'='*60}")
    print(f"ARBOR SP - {args.command.upper()}")
    print("="*60)
    print(f"Leader: {config.ipaddress}" + (f" ({config.hostname})" if config.hostname else ""))

    client = ArborClient(config)
    try:
        if args.command == "get":
            result = _run_get(client, args)
        elif args.command == "find":
            result = _run_find(client, args)
        else:
            result = _run_graph(client, args)
    finally:
        client.close()

    if args.command == "find" and result.value is not None:
        print(f"  Records: {len(result.value)}")
    if args.no_save and args.command != "graph" and result.value is not None:
        print(json.dumps(result.value, indent=2, default=str))
    if not args.no_save:
        _save(output_manager, args, result)

    print(f"\n{'='*60}")
    print(f"Status: {'SUCCESS' if result.ok else 'FAILED'}")
    if result.error:
        print(f"Error: {result.error_message.strip()}")
        if args.command == "find" and result.value:
            print("  Partial results were returned before the error")

    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
