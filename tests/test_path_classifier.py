"""Tests for build path classification and file discovery."""

from collections.abc import Callable
from pathlib import Path

from asset_resolver.find_files_recursive import find_files_recursive
from asset_resolver.normalize_path import get_base_name
from asset_resolver.path_classifier import (
    is_build_path,
    is_script_path,
    remove_build_prefix,
    strip_type_segment,
)

BUILD_FOLDERS = ["dist", "build", "optimised"]


def test_remove_build_prefix() -> None:
    """Verify one leading build folder is stripped."""
    assert remove_build_prefix("dist/css/a.min.css", BUILD_FOLDERS) == "css/a.min.css"
    assert remove_build_prefix("dist\\js\\a.js", BUILD_FOLDERS) == "js/a.js"
    assert remove_build_prefix("js/dist/a.js", BUILD_FOLDERS) == "js/dist/a.js"


def test_is_build_path() -> None:
    """Verify build folders and the .min. marker flag compiled output."""
    assert is_build_path("optimised/js/main.js", BUILD_FOLDERS)
    assert is_build_path("js/vendor/swiper.min.js", BUILD_FOLDERS)
    assert not is_build_path("js/main.js", BUILD_FOLDERS)
    assert not is_build_path("dist", BUILD_FOLDERS)


def test_is_script_path_and_type_segment() -> None:
    """Verify script detection and js/css segment stripping."""
    assert is_script_path("js/main.min.js")
    assert not is_script_path("css/main.css")
    assert strip_type_segment(["css", "components"]) == ["components"]
    assert strip_type_segment(["blocks", "hero"]) == ["blocks", "hero"]


def test_get_base_name() -> None:
    """Verify the .min marker and extension are removed."""
    assert get_base_name("js/components/slider.min.js") == "slider"
    assert get_base_name("scss/style.scss") == "style"
    assert get_base_name("css\\admin.css") == "admin"


def test_find_files_recursive_sorted_and_filtered(
    tmp_path: Path, write_tree: Callable[[Path, dict[str, str]], Path]
) -> None:
    """Verify sorted traversal, extension filter and ignored folders."""
    write_tree(
        tmp_path,
        {
            "js/b.js": "",
            "js/a/z.js": "",
            "js/a/readme.md": "",
            "js/node_modules/pkg/index.js": "",
            "js/.vite/deps.js": "",
        },
    )
    found = find_files_recursive(tmp_path / "js", tmp_path, (".js",))
    assert found == ["js/a/z.js", "js/b.js"]


def test_find_files_recursive_missing_directory(tmp_path: Path) -> None:
    """Verify a missing root yields no files instead of raising."""
    assert find_files_recursive(tmp_path / "absent", tmp_path) == []
