"""Tests for the content-addressed asset cache."""

import json
import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from asset_resolver.asset_cache import AssetCache
from asset_resolver.asset_map import AssetMap
from asset_resolver.compute_files_hash import compute_files_hash

FUNCTIONS_PHP = "<?php add_action('wp_enqueue_scripts', function () {});\n"


@pytest.fixture
def theme(tmp_path: Path, write_tree: Callable) -> Path:
    """A theme with a single registration file."""
    return write_tree(tmp_path / "theme", {"functions.php": FUNCTIONS_PHP})


@pytest.fixture
def cache(tmp_path: Path, theme: Path) -> AssetCache:
    """A cache stored next to the theme, under the bundler root."""
    return AssetCache(
        tmp_path / "bundler" / ".cache" / "assets-cache.json",
        theme,
        ["functions.php", "inc/enqueue.php"],
    )


def sample_map(build_folder: str = "dist") -> AssetMap:
    """An AssetMap with one source and one library."""
    asset_map = AssetMap(build_folder=build_folder)
    asset_map.front.add_source("js/main.js")
    asset_map.front.add_lib("js/vendor/swiper.min.js")
    return asset_map


def test_hash_changes_on_single_byte(theme: Path) -> None:
    """Any content change produces a different hash."""
    before = compute_files_hash(theme, ["functions.php"])
    (theme / "functions.php").write_text(FUNCTIONS_PHP + " ")
    assert compute_files_hash(theme, ["functions.php"]) != before


def test_hash_changes_when_file_appears(theme: Path, write_tree: Callable) -> None:
    """Adding a previously missing registration file changes the hash."""
    files = ["functions.php", "inc/enqueue.php"]
    before = compute_files_hash(theme, files)
    write_tree(theme, {"inc/enqueue.php": "<?php"})
    assert compute_files_hash(theme, files) != before


def test_unreadable_file_is_left_out_of_the_hash(
    theme: Path,
    write_tree: Callable,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A file that cannot be read is skipped with a warning instead of raising."""
    write_tree(theme, {"inc/enqueue.php": "<?php"})
    without_functions = compute_files_hash(theme, ["inc/enqueue.php"])
    original = Path.read_bytes

    def read_bytes(self: Path) -> bytes:
        if self.name == "functions.php":
            raise PermissionError(13, "Permission denied", str(self))
        return original(self)

    monkeypatch.setattr(Path, "read_bytes", read_bytes)
    with caplog.at_level(logging.WARNING):
        digest = compute_files_hash(theme, ["functions.php", "inc/enqueue.php"])

    assert digest == without_functions
    assert any("functions.php" in r.getMessage() for r in caplog.records)


def test_save_then_hit(cache: AssetCache) -> None:
    """A saved entry is returned while the files are unchanged."""
    cache.save_cached_assets(sample_map())

    data = json.loads(cache.path.read_text())
    assert set(data) == {"hash", "timestamp", "assets"}
    assert data["assets"]["buildFolder"] == "dist"

    lookup = cache.get_cached_assets()
    assert lookup.assets == sample_map()
    assert lookup.previous_build_folder is None


def test_stale_entry_reports_previous_build_folder(
    cache: AssetCache, theme: Path
) -> None:
    """A content change is a miss that remembers the old build folder."""
    cache.save_cached_assets(sample_map("optimised"))
    (theme / "functions.php").write_text(FUNCTIONS_PHP + "// edit\n")

    lookup = cache.get_cached_assets()
    assert lookup.assets is None
    assert lookup.previous_build_folder == "optimised"


@pytest.mark.parametrize("content", ["{not json", "[]", '{"hash": 1}'])
def test_corrupt_cache_is_a_miss(cache: AssetCache, content: str) -> None:
    """Malformed cache files never raise."""
    cache.path.parent.mkdir(parents=True)
    cache.path.write_text(content)
    assert cache.get_cached_assets().assets is None


def test_malformed_assets_with_current_hash_is_a_miss(cache: AssetCache) -> None:
    """A current hash with an unusable payload triggers a rescan."""
    cache.path.parent.mkdir(parents=True)
    cache.path.write_text(json.dumps({"hash": cache.compute_hash(), "assets": []}))
    assert cache.get_cached_assets().assets is None


def test_invalidate(cache: AssetCache) -> None:
    """Invalidation removes the file once."""
    cache.save_cached_assets(sample_map())
    assert cache.invalidate()
    assert not cache.path.exists()
    assert not cache.invalidate()


def test_delete_old_build_folder(
    cache: AssetCache, theme: Path, write_tree: Callable
) -> None:
    """Only a real build folder inside the theme is removed."""
    write_tree(theme, {"dist/js/main.min.js": "", "js/main.js": ""})

    assert not cache.delete_old_build_folder("js", protected=["js", "scss"])
    assert not cache.delete_old_build_folder("../")
    assert not cache.delete_old_build_folder("/")
    assert not cache.delete_old_build_folder("missing")
    assert (theme / "js/main.js").exists()

    assert cache.delete_old_build_folder("dist/")
    assert not (theme / "dist").exists()
    assert (theme / "functions.php").exists()


def test_delete_refuses_parent_of_source_root(
    cache: AssetCache, theme: Path, write_tree: Callable
) -> None:
    """A folder that contains a source root is kept, even when named differently."""
    write_tree(theme, {"assets/js/main.js": "", "assets/scss/style.scss": ""})

    protected = ["assets/js", "assets/scss"]
    assert not cache.delete_old_build_folder("assets", protected=protected)
    assert not cache.delete_old_build_folder("assets/./js/", protected=protected)
    assert (theme / "assets/js/main.js").exists()
    assert (theme / "assets/scss/style.scss").exists()


def test_asset_map_round_trip_keeps_invariant() -> None:
    """A path never appears in both sources and libs after loading."""
    loaded = AssetMap.from_dict(
        {
            "front": {"sources": ["js/a.js"], "libs": ["js/a.js", "js/b.min.js"]},
            "buildFolder": "dist",
        }
    )
    assert loaded.front.sources == ["js/a.js"]
    assert loaded.front.libs == ["js/b.min.js"]
    assert loaded.admin.sources == []
    assert AssetMap.from_dict(loaded.to_dict()) == loaded
