"""Main orchestration script: resolve a theme's assets and hand them to the bundler."""

import argparse
import json
import logging
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

from asset_resolver.build_structure import (
    BuildStructure,
    detect_build_structure,
    output_file_name,
)
from asset_resolver.entry_points import generate_entry_points
from asset_resolver.load_config import CONFIG_FILENAME, load_config
from asset_resolver.resolution_memo import PROCESS_MEMO
from asset_resolver.resolver import AssetResolver
from asset_resolver.theme_paths import ThemePaths

ENTRIES_FILENAME = "entries.json"
STYLE_SUFFIXES = (".scss", ".css")


def run_command(cmd_list: Sequence[str | Path], cwd: Path | str | None = None) -> None:
    """Run a command and exit if it fails."""
    cmd_str = " ".join(str(x) for x in cmd_list)
    print(f"Running: {cmd_str}")
    try:
        subprocess.run(cmd_list, check=True, cwd=cwd)
    except subprocess.CalledProcessError as e:
        print(f"Error executing command: {cmd_str}")
        sys.exit(e.returncode)


def entries_payload(
    build_folder: str, inputs: dict[str, Path], structure: BuildStructure
) -> dict:
    """Entry points with the file name the bundler writes for each of them."""
    return {
        "buildFolder": build_folder,
        "isFlat": structure.is_flat,
        "inputs": {name: str(path) for name, path in inputs.items()},
        "outputs": {
            name: output_file_name(
                name, structure, is_style=path.suffix in STYLE_SUFFIXES
            )
            for name, path in inputs.items()
        },
    }


def main() -> None:
    """Run the asset resolution pipeline."""
    parser = argparse.ArgumentParser(
        description="Resolve WordPress theme assets and write bundler entry points."
    )
    parser.add_argument("theme_dir", type=Path, help="WordPress theme directory")
    parser.add_argument(
        "--config",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--bundler-cmd",
        nargs=argparse.REMAINDER,
        help="Bundler command to run once the entry points are written",
    )
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    root_dir = Path(__file__).parent
    config = load_config(args.config or str(root_dir / CONFIG_FILENAME))
    paths = ThemePaths.from_config(args.theme_dir, root_dir, config)

    # 1. Detect registered assets
    print("--- Step 1: Resolving theme assets ---")
    result = AssetResolver(paths, config, PROCESS_MEMO).detect_assets()
    build_folder = result.assets.build_folder
    print(f"Build folder: {build_folder}/ ({result.origin})")

    # 2. Write the entry points the bundler reads
    print("\n--- Step 2: Writing bundler entry points ---")
    inputs, missing = generate_entry_points(
        result.assets, paths.theme_path, config["css_output_folder"]
    )
    structure = detect_build_structure(paths.theme_path, build_folder)
    entries_file = root_dir / config["cache"]["dir"] / ENTRIES_FILENAME
    entries_file.parent.mkdir(parents=True, exist_ok=True)
    payload = entries_payload(build_folder, inputs, structure)
    entries_file.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    print(f"{len(inputs)} entry point(s), {len(missing)} missing -> {entries_file}")

    # 3. Optionally build
    if args.bundler_cmd:
        print("\n--- Step 3: Running bundler ---")
        run_command(args.bundler_cmd, cwd=root_dir)

    print("\nSUCCESS: Assets resolved.")


if __name__ == "__main__":
    main()
