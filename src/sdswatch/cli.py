#!/usr/bin/env python3
"""
SDS Watch CLI tool

Command line interface for the terminal chart and for quick listings of
namespaces and streams.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from sdswatch.client import SdsClient
from sdswatch.config import Settings, get_settings
from sdswatch.exceptions import TransportError
from sdswatch.logger import setup_logger
from sdswatch.matching import find_index_key, is_chartable_type


def build_settings(args: argparse.Namespace) -> Settings:
    """
    Merge command line flags over the environment settings

    Args:
        args: Parsed arguments

    Returns:
        Settings with any flags applied
    """
    overrides = {
        "resource": args.resource,
        "tenant_id": args.tenant,
        "api_version": args.api_version,
        "refresh_ms": getattr(args, "refresh", None),
        "event_count": getattr(args, "events", None),
    }
    updates = {key: value for key, value in overrides.items() if value is not None}
    return Settings.model_validate({**get_settings().model_dump(), **updates})


def run_tui(settings: Settings) -> None:
    """
    Start the terminal chart

    Args:
        settings: Connection settings
    """
    print("Starting SDS Watch TUI...")
    print(f"Namespaces URL: {SdsClient(settings).base_url}")

    from sdswatch.tui import run_tui as _run_tui

    _run_tui(settings=settings)


def list_namespaces(settings: Settings) -> int:
    """
    Print the namespaces of the configured tenant

    Args:
        settings: Connection settings

    Returns:
        Process exit code
    """
    client = SdsClient(settings)
    try:
        namespaces = asyncio.run(client.list_namespaces())
    except TransportError as e:
        print(f"Error: {e.message}")
        return 1
    finally:
        client.close()

    for namespace in namespaces:
        print(namespace.id)
    return 0


def list_streams(settings: Settings, namespace_id: str, query: str | None, show_all: bool = False) -> int:
    """
    Print the streams of a namespace with the index key of chartable ones

    Args:
        settings: Connection settings
        namespace_id: Namespace to list
        query: Stream id prefix
        show_all: Include streams whose type cannot be charted

    Returns:
        Process exit code
    """
    client = SdsClient(settings)

    async def _load():
        namespaces = {ns.id: ns for ns in await client.list_namespaces()}
        namespace = namespaces.get(namespace_id)
        if namespace is None:
            return None, [], []
        types = await client.list_types(namespace)
        streams = await client.list_streams(namespace, query)
        return namespace, types, streams

    try:
        namespace, types, streams = asyncio.run(_load())
    except TransportError as e:
        print(f"Error: {e.message}")
        return 1
    finally:
        client.close()

    if namespace is None:
        print(f"Error: Unknown namespace: {namespace_id}")
        return 1

    types_by_id = {t.id: t for t in types}
    for stream in streams:
        type_schema = types_by_id.get(stream.type_id)
        if is_chartable_type(type_schema):
            key = find_index_key(type_schema)
            print(f"{stream.id}\t{stream.type_id}\tkey={key.id if key else '-'}")
        elif show_all:
            print(f"{stream.id}\t{stream.type_id}\t(not chartable)")
    return 0


def main() -> None:
    """
    CLI main entry point
    """
    parser = argparse.ArgumentParser(description="SDS Watch - live charts of Sequential Data Store streams")
    parser.add_argument("--resource", default=None, help="SDS base URL (default: SDSWATCH_RESOURCE or http://localhost:5590)")
    parser.add_argument("--tenant", default=None, help="Tenant id, 'default' for Edge Data Store (default: SDSWATCH_TENANT_ID)")
    parser.add_argument("--api-version", default=None, help="API version (default: SDSWATCH_API_VERSION or v1)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    tui_parser = subparsers.add_parser("tui", help="Start terminal chart (default)")
    tui_parser.add_argument("--refresh", type=int, default=None, help="Refresh period in milliseconds (default: 5000)")
    tui_parser.add_argument("--events", type=int, default=None, help="Events per stream per refresh (default: 100)")

    subparsers.add_parser("namespaces", help="List namespaces")

    streams_parser = subparsers.add_parser("streams", help="List chartable streams of a namespace")
    streams_parser.add_argument("namespace", help="Namespace id")
    streams_parser.add_argument("--query", default=None, help="Stream id prefix")
    streams_parser.add_argument("--all", action="store_true", help="Include streams that cannot be charted")

    args = parser.parse_args()

    setup_logger(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        settings = build_settings(args)
    except ValueError as e:
        print(f"Error: Invalid settings: {e}")
        sys.exit(1)

    if args.command == "namespaces":
        sys.exit(list_namespaces(settings))
    elif args.command == "streams":
        sys.exit(list_streams(settings, args.namespace, args.query, show_all=args.all))
    else:
        run_tui(settings)


if __name__ == "__main__":
    main()
