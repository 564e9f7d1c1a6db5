"""Logic for turning detected sources into named bundler entry points."""

import logging
import re
from pathlib import Path

from asset_resolver.asset_map import AssetMap

logger = logging.getLogger(__name__)

ENTRY_SEPARATOR = "§"
MAX_NAME_SEGMENTS = 2
SOURCE_EXT_RE = re.compile(r"\.(?:js|ts|scss|css)$")


def entry_name(source: str, css_output_folder: str) -> str:
    """Build the entry name for a source path.

    The extension is dropped and at most the last two path segments are kept,
    joined with `§` so dashes in folder names survive. A Sass source's
    leading folder is replaced by the CSS output folder.
    """
    parts = SOURCE_EXT_RE.sub("", source).split("/")
    name = ENTRY_SEPARATOR.join(parts[-MAX_NAME_SEGMENTS:])
    if source.endswith(".scss"):
        prefix = parts[0] + ENTRY_SEPARATOR
        if name.startswith(prefix):
            name = css_output_folder + ENTRY_SEPARATOR + name[len(prefix) :]
    return name


def generate_entry_points(
    asset_map: AssetMap, theme_path: Path, css_output_folder: str
) -> tuple[dict[str, Path], list[str]]:
    """Map entry names to absolute source files.

    Returns the entry points and the sources that no longer exist on disk.
    """
    inputs: dict[str, Path] = {}
    missing: list[str] = []
    for source in asset_map.all_sources():
        absolute = theme_path / source
        if not absolute.is_file():
            missing.append(source)
            continue
        inputs[entry_name(source, css_output_folder)] = absolute

    for source in missing:
        logger.warning("%s is enqueued but missing, skipped from the build", source)
    return inputs, missing
