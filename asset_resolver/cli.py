"""Command-line entry point for the theme asset resolver."""

import argparse
import logging
from pathlib import Path

from asset_resolver.run_resolution import run_resolution


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the `asset-resolver` command."""
    ap = argparse.ArgumentParser(
        prog="asset-resolver",
        description=(
            "Detect the scripts and styles a WordPress theme registers and map "
            "them back to their source files."
        ),
    )
    ap.add_argument(
        "theme_dir",
        type=Path,
        help="WordPress theme directory containing functions.php",
    )
    ap.add_argument(
        "--bundler-root",
        type=Path,
        help="Directory holding the bundler config and .cache/ (default: cwd)",
    )
    ap.add_argument(
        "--config",
        help="Path to a YAML configuration file",
    )
    ap.add_argument(
        "--php-file",
        action="append",
        help="PHP file to scan, relative to the theme (repeatable)",
    )
    ap.add_argument(
        "--build-folder",
        help="Build output folder name, overrides detection",
    )
    ap.add_argument(
        "--force-rebuild",
        action="store_true",
        help="Ignore the memo and the disk cache and rescan",
    )
    ap.add_argument(
        "--invalidate-cache",
        action="store_true",
        help="Delete the disk cache and exit",
    )
    ap.add_argument(
        "--entries",
        action="store_true",
        help="Print the bundler entry points",
    )
    ap.add_argument(
        "--manifest",
        type=Path,
        help="Write the runtime injection manifest to this JSON file",
    )
    ap.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return ap


def main(argv: list[str] | None = None) -> int:
    """Run the asset resolver."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return run_resolution(args)


if __name__ == "__main__":
    raise SystemExit(main())
