"""Logic for probing the layout of the build output folder."""

from dataclasses import dataclass
from pathlib import Path

from asset_resolver.entry_points import ENTRY_SEPARATOR


@dataclass(frozen=True)
class BuildStructure:
    """Whether the build output keeps `js/` and `css/` subfolders."""

    is_flat: bool
    has_js_subfolder: bool
    has_css_subfolder: bool


def detect_build_structure(theme_path: Path, build_folder: str) -> BuildStructure:
    """Inspect an existing build folder; a missing one is assumed nested."""
    build_path = theme_path / build_folder
    if not build_path.is_dir():
        return BuildStructure(
            is_flat=False, has_js_subfolder=True, has_css_subfolder=True
        )

    has_js = (build_path / "js").exists()
    has_css = (build_path / "css").exists()
    return BuildStructure(
        is_flat=not has_js and not has_css,
        has_js_subfolder=has_js,
        has_css_subfolder=has_css,
    )


def output_file_name(name: str, structure: BuildStructure, *, is_style: bool) -> str:
    """Name of the minified file the bundler writes for an entry.

    Flat builds keep only the last segment. Nested builds restore the folders
    for scripts and put every stylesheet under `css/`.
    """
    base = name.split(ENTRY_SEPARATOR)[-1]
    if is_style:
        return f"{base}.min.css" if structure.is_flat else f"css/{base}.min.css"
    if structure.is_flat:
        return f"{base}.min.js"
    return name.replace(ENTRY_SEPARATOR, "/") + ".min.js"
