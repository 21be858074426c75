"""CLI entry point for indexsync index maintenance and ad-hoc searches."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from indexsync.config.settings import Settings


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    from indexsync.config.settings import Settings
    from indexsync.observability.logging import setup_logging

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    if args.log_level:
        settings.observability.log_level = args.log_level
    setup_logging(settings.observability)

    sys.exit(asyncio.run(_run(args, settings)))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="indexsync",
        description="indexsync — Search index synchronization tools",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"indexsync {_get_version()}",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    search = commands.add_parser("search", help="Search an index and print the raw result")
    search.add_argument("index", help="Index name")
    search.add_argument("query", nargs="?", default="", help="Query string")
    search.add_argument(
        "--where",
        action="append",
        default=[],
        metavar="FIELD=VALUE",
        help="Equality filter (repeatable)",
    )
    search.add_argument("--limit", type=int, default=None, help="Maximum number of hits")
    search.add_argument("--per-page", type=int, default=None, help="Page size (enables pagination)")
    search.add_argument("--page", type=int, default=1, help="1-based page number")

    delete_index = commands.add_parser("delete-index", help="Delete an index")
    delete_index.add_argument("index", help="Index name")

    create_index = commands.add_parser("create-index", help="Create an index")
    create_index.add_argument("index", help="Index name")

    return parser


async def _run(args: argparse.Namespace, settings: Settings) -> int:
    from indexsync.engines.base.exceptions import EngineError
    from indexsync.engines.base.registry import EngineRegistry

    try:
        registry = await EngineRegistry.from_settings(settings)
    except EngineError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    engine = registry.get_default()
    try:
        if args.command == "search":
            result = await _search(engine, args)
            print(json.dumps(result, indent=2, ensure_ascii=False, default=str))
        elif args.command == "delete-index":
            await engine.delete_index(args.index)
            print(f"Deleted index: {args.index}")
        elif args.command == "create-index":
            await engine.create_index(args.index)
            print(f"Created index: {args.index}")
    except EngineError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await registry.shutdown_all()
    return 0


async def _search(engine: Any, args: argparse.Namespace) -> Any:
    from indexsync.models.builder import SearchBuilder

    builder = SearchBuilder(query=args.query).within(args.index)
    for clause in args.where:
        field, sep, value = clause.partition("=")
        if not sep or not field:
            raise SystemExit(f"Error: invalid --where clause {clause!r}, expected FIELD=VALUE")
        builder.where(field, value)
    if args.limit:
        builder.take(args.limit)

    if args.per_page:
        return await engine.paginate(builder, args.per_page, args.page)
    return await engine.search(builder)


def _get_version() -> str:
    """Get the package version."""
    try:
        from indexsync import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
