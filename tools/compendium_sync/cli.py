#!/usr/bin/env python3
"""CLI entry point for compendium pack synchronization.

This module provides the argument parser and main entry point that
wires together all commands from the commands package.

Usage:
    python -m compendium_sync pack
    python -m compendium_sync unpack spells
    python -m compendium_sync clean
    python -m compendium_sync icons
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from compendium_sync.commands import cmd_clean, cmd_icons, cmd_pack, cmd_unpack
from compendium_sync.config import (
    CODEC_FORMATS,
    DEFAULT_CODEC,
    DEFAULT_OWNERSHIP,
    MODULE_MANIFEST,
    PACK_DEST,
    PACK_SRC,
)
from compendium_sync.errors import CliError
from compendium_sync.persistence import PackPaths


def _configure_stdio_utf8() -> None:
    """Ensure document names with any characters can be printed on Windows terminals.

    Windows consoles may default to a code page that can't handle Unicode.
    This reconfigures stdout/stderr to use UTF-8 if possible.
    """
    stdout = getattr(sys, "stdout", None)
    stderr = getattr(sys, "stderr", None)
    if hasattr(stdout, "reconfigure"):
        stdout.reconfigure(encoding="utf-8")  # type: ignore[attr-defined]
    if hasattr(stderr, "reconfigure"):
        stderr.reconfigure(encoding="utf-8")  # type: ignore[attr-defined]


def _add_pack_name(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "pack_name",
        nargs="?",
        help="Name of the pack to process. If omitted, all packs are processed.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the complete argument parser with all subcommands.

    Returns:
        Configured ArgumentParser with subcommands:
        - pack, unpack, clean, icons
    """
    parser = argparse.ArgumentParser(
        prog="compendium-sync",
        description="Synchronize compendium packs with their YAML source files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  compendium-sync pack                  compile every source pack
  compendium-sync pack spells           compile only the spells pack
  compendium-sync unpack --prune        extract every pack listed in module.json
  compendium-sync clean                 clean source YAML files in place
  compendium-sync --format jsonl pack   write line-delimited .db packs
""",
    )
    parser.add_argument(
        "--source-root",
        type=Path,
        default=PACK_SRC,
        help=f"Directory containing one source folder per pack (default: {PACK_SRC}).",
    )
    parser.add_argument(
        "--dest-root",
        type=Path,
        default=PACK_DEST,
        help=f"Directory receiving compiled packs (default: {PACK_DEST}).",
    )
    parser.add_argument(
        "--manifest",
        type=Path,
        default=MODULE_MANIFEST,
        help=f"Module manifest listing the packs to extract (default: {MODULE_MANIFEST}).",
    )
    parser.add_argument(
        "--format",
        choices=sorted(CODEC_FORMATS),
        default=DEFAULT_CODEC,
        help=f"Pack storage format (default: {DEFAULT_CODEC}).",
    )
    parser.add_argument(
        "--ownership",
        type=int,
        default=DEFAULT_OWNERSHIP,
        help="Default ownership level written into documents (default: 0, no access).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # pack
    pack_parser = subparsers.add_parser("pack", help="Compile source YAML files into packs.")
    _add_pack_name(pack_parser)
    pack_parser.set_defaults(handler=cmd_pack)

    # unpack
    unpack_parser = subparsers.add_parser("unpack", help="Extract packs into source YAML files.")
    _add_pack_name(unpack_parser)
    unpack_parser.add_argument(
        "--prune",
        action="store_true",
        help="Delete the pack's existing source files before extracting.",
    )
    unpack_parser.set_defaults(handler=cmd_unpack)

    # clean
    clean_parser = subparsers.add_parser("clean", help="Clean source YAML files.")
    _add_pack_name(clean_parser)
    clean_parser.set_defaults(handler=cmd_clean)

    # icons
    icons_parser = subparsers.add_parser(
        "icons",
        help="List the unique image paths referenced by source YAML files.",
    )
    _add_pack_name(icons_parser)
    icons_parser.set_defaults(handler=cmd_icons)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)

    Handles:
        - CliError: Errors aborting the whole command (missing manifest,
          unknown pack, missing codec library)
        - OSError: File system failures while reading or writing source files
    """
    _configure_stdio_utf8()
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        paths = PackPaths(
            source_root=args.source_root,
            dest_root=args.dest_root,
            manifest=args.manifest,
        )
        handler = getattr(args, "handler", None)
        if handler is None:
            parser.print_help()
            return 1
        return int(handler(paths, args))
    except CliError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    except OSError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
