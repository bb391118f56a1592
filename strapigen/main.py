"""
strapigen command line.

Usage:
    strapigen sync [--force] [--types-only] [--dry-run] [--cwd DIR] [--config FILE]
    strapigen check [--cwd DIR] [--config FILE]
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

import httpx

from strapigen import __version__
from strapigen.core.config import Configuration, Settings, load_config
from strapigen.core.engine import FEATURE_NAMES, SyncEngine, SyncResult
from strapigen.core.errors import SchemaFetchError, StrapiGenError, SyncError
from strapigen.core.logging import configure_logging
from strapigen.generators.writer import remove_paths
from strapigen.schema.fetcher import StrapiSchemaClient

SUMMARY_LIMIT = 10


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="strapigen",
        description="Generate types, schemas, services and actions from a Strapi schema",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_common(p: argparse.ArgumentParser) -> None:
        p.add_argument("--cwd", type=Path, default=None, help="Project directory (default: current)")
        p.add_argument("--config", type=Path, default=None, help="Path to strapi.config.yaml")

    sync = sub.add_parser("sync", help="Fetch the schema and regenerate code")
    add_common(sync)
    sync.add_argument("--force", action="store_true", help="Remove orphaned files without asking")
    sync.add_argument("--dry-run", action="store_true", help="Generate without writing files")
    for name in FEATURE_NAMES:
        sync.add_argument(f"--{name}-only", action="store_true", help=f"Only generate {name}")

    check = sub.add_parser("check", help="Test the connection to Strapi")
    add_common(check)
    return parser


def _only(args: argparse.Namespace) -> Optional[set[str]]:
    selected = {name for name in FEATURE_NAMES if getattr(args, f"{name}_only")}
    return selected or None


def _confirm(question: str, stdin: TextIO, out: TextIO) -> bool:
    out.write(f"{question} [y/N] ")
    out.flush()
    answer = stdin.readline().strip().lower()
    return answer in ("y", "yes")


def print_summary(result: SyncResult, out_dir: Path, dry_run: bool, out: TextIO) -> None:
    verb = "Would generate" if dry_run else "Generated"
    out.write(f"{verb} {len(result.files)} files in {out_dir} (Strapi {result.strapi_version})\n")
    for f in result.files[:SUMMARY_LIMIT]:
        out.write(f"  {f.path}\n")
    if len(result.files) > SUMMARY_LIMIT:
        out.write(f"  ... and {len(result.files) - SUMMARY_LIMIT} more\n")


def handle_orphans(
    orphans: list[Path],
    force: bool,
    stdin: TextIO,
    out: TextIO,
) -> list[Path]:
    """Remove leftovers from the other layout mode. Returns what was removed."""
    if not orphans:
        return []
    out.write("Found files from the previous output structure:\n")
    for path in orphans:
        out.write(f"  {path}\n")
    if not force:
        if not stdin.isatty():
            out.write("Run with --force to remove them.\n")
            return []
        if not _confirm("Remove them?", stdin, out):
            return []
    remove_paths(orphans)
    out.write(f"Removed {len(orphans)} orphaned paths\n")
    return orphans


def _load(args: argparse.Namespace) -> tuple[Path, Configuration]:
    cwd = (args.cwd or Path.cwd()).resolve()
    return cwd, load_config(cwd, args.config)


def run_sync(
    args: argparse.Namespace,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    stdin: TextIO = sys.stdin,
    out: TextIO = sys.stdout,
) -> int:
    cwd, config = _load(args)
    out_dir = cwd / config.output.path
    engine = SyncEngine(config, out_dir, only=_only(args), dry_run=args.dry_run, transport=transport)
    result = engine.run()
    print_summary(result, out_dir, args.dry_run, out)
    if not args.dry_run:
        handle_orphans(result.orphans, args.force, stdin, out)
    return 0


def run_check(
    args: argparse.Namespace,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    out: TextIO = sys.stdout,
) -> int:
    _, config = _load(args)
    client = StrapiSchemaClient(config.url, config.token, config.api_prefix, transport=transport)
    result = asyncio.run(client.test_connection())
    out.write(f"{'OK' if result.success else 'FAILED'}: {result.message}\n")
    return 0 if result.success else 1


def format_error(error: StrapiGenError) -> str:
    cause = error.__cause__
    if isinstance(error, SyncError) and isinstance(cause, SchemaFetchError) and cause.status_code:
        return f"{error} (HTTP {cause.status_code})"
    return str(error)


def main(
    argv: Optional[Sequence[str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    stdin: TextIO = sys.stdin,
    out: TextIO = sys.stdout,
    err: TextIO = sys.stderr,
) -> int:
    args = build_parser().parse_args(argv)
    level = "DEBUG" if args.verbose else Settings().log_level
    configure_logging(level.upper())
    try:
        if args.command == "sync":
            return run_sync(args, transport=transport, stdin=stdin, out=out)
        return run_check(args, transport=transport, out=out)
    except StrapiGenError as e:
        err.write(f"Error: {format_error(e)}\n")
        return 1


if __name__ == "__main__":
    sys.exit(main())
