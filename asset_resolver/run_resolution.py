"""Orchestration logic for the command-line asset resolution run."""

import argparse
from pathlib import Path
from typing import Any

from asset_resolver.asset_cache import AssetCache
from asset_resolver.entry_points import generate_entry_points
from asset_resolver.injection_manifest import (
    build_injection_manifest,
    write_injection_manifest,
)
from asset_resolver.load_config import CONFIG_FILENAME, load_config
from asset_resolver.registration_record import AssetContext
from asset_resolver.resolution_memo import PROCESS_MEMO, ResolutionMemo
from asset_resolver.resolution_result import ResolutionResult
from asset_resolver.resolver import AssetResolver
from asset_resolver.theme_paths import ThemePaths

EXIT_MISSING_THEME = 2


def run_resolution(
    args: argparse.Namespace, memo: ResolutionMemo = PROCESS_MEMO
) -> int:
    """Resolve the theme's assets and print a report."""
    theme_path: Path = args.theme_dir
    if not theme_path.is_dir():
        print(f"Theme directory not found: {theme_path}")
        return EXIT_MISSING_THEME

    bundler_root: Path = args.bundler_root or Path.cwd()
    config = _init_config(args, bundler_root)
    paths = ThemePaths.from_config(theme_path, bundler_root, config)
    cache = AssetCache(
        paths.cache_file(config), paths.theme_path, config["registration_files"]
    )

    if args.invalidate_cache:
        removed = cache.invalidate()
        memo.clear()
        print("Cache cleared." if removed else "No cache to clear.")
        return 0

    if args.force_rebuild:
        memo.clear()
        cache.invalidate()

    result = AssetResolver(paths, config, memo, cache).detect_assets()
    _print_report(result)

    if args.entries:
        inputs, _missing = generate_entry_points(
            result.assets, paths.theme_path, config["css_output_folder"]
        )
        print("\nEntry points:")
        for name, source in inputs.items():
            print(f"  {name} -> {source}")

    if args.manifest:
        write_injection_manifest(build_injection_manifest(result.assets), args.manifest)
        print(f"\nManifest written to: {args.manifest}")

    return 0


def _init_config(args: argparse.Namespace, bundler_root: Path) -> dict[str, Any]:
    """Load the YAML config and apply command-line overrides on top of it."""
    config_path = args.config or bundler_root / CONFIG_FILENAME
    config = load_config(str(config_path))
    if args.php_file:
        config["registration_files"] = list(args.php_file)
    if args.build_folder:
        config["build_folder"] = args.build_folder
    return config


def _print_report(result: ResolutionResult) -> None:
    assets = result.assets
    print(f"Assets resolved ({result.origin}), build folder: {assets.build_folder}/")
    for context in AssetContext:
        group = assets.for_context(context)
        print(
            f"  {context.value:<7} {len(group.sources)} source(s), "
            f"{len(group.libs)} lib(s)"
        )
        for path in group.sources:
            print(f"    {path}")
        for path in group.libs:
            print(f"    {path} (lib)")

    if result.unresolved:
        print(f"\n{len(result.unresolved)} registered path(s) without a source:")
        for path in result.unresolved:
            print(f"  {path}")
