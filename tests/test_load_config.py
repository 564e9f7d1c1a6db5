"""Tests for configuration loading and merging."""

from pathlib import Path

import pytest
import yaml

from asset_resolver.deep_merge import deep_merge
from asset_resolver.load_config import (
    DEFAULT_CONFIG,
    ENV_BUILD_FOLDER,
    ENV_PHP_FILES,
    load_config,
)


def test_deep_merge_scalars() -> None:
    """Verify scalar replacement in deep merge."""
    merged = deep_merge({"a": 1, "b": 2}, {"b": 3, "c": 4})
    assert merged == {"a": 1, "b": 3, "c": 4}


def test_deep_merge_nested() -> None:
    """Verify recursive merging of the matching weights."""
    base = {"matching": {"threshold": 0.3, "weights": {"strings": 0.4}}}
    update = {"matching": {"weights": {"numbers": 0.1}}}
    merged = deep_merge(base, update)
    assert merged == {
        "matching": {"threshold": 0.3, "weights": {"strings": 0.4, "numbers": 0.1}}
    }


def test_deep_merge_arrays_replace() -> None:
    """Verify that ordinary lists are replaced."""
    merged = deep_merge(
        {"registration_files": ["functions.php"]},
        {"registration_files": ["inc/assets.php"]},
    )
    assert merged["registration_files"] == ["inc/assets.php"]


def test_deep_merge_build_folders_additive() -> None:
    """Verify that build folder names extend the defaults in order."""
    merged = deep_merge(
        {"build_folder_names": ["dist", "build"]},
        {"build_folder_names": ["build", "static-out"]},
    )
    assert merged["build_folder_names"] == ["dist", "build", "static-out"]


def test_deep_merge_does_not_mutate_base() -> None:
    """Verify the base dictionary is left untouched."""
    base = {"known_sources": ["main"]}
    deep_merge(base, {"known_sources": ["app"]})
    assert base == {"known_sources": ["main"]}


def test_load_config_defaults(config: dict) -> None:
    """Verify that default config is loaded when no path is provided."""
    assert config["registration_files"] == ["functions.php"]
    assert config["matching"]["threshold"] == 0.3
    assert config["build_folder"] is None


def test_load_config_missing_file(config: dict, tmp_path: Path) -> None:
    """Verify a missing config file yields the defaults."""
    assert load_config(str(tmp_path / "absent.yml")) == config


def test_load_config_with_file(config: dict, tmp_path: Path) -> None:
    """Verify that user config correctly overrides defaults."""
    config_file = tmp_path / "asset-resolver.yml"
    config_file.write_text(
        yaml.dump(
            {
                "matching": {"threshold": 0.5},
                "known_sources": ["app"],
                "hook_contexts": {"my_theme_assets": "front"},
            }
        )
    )

    loaded = load_config(str(config_file))
    assert loaded["matching"]["threshold"] == 0.5
    assert loaded["matching"]["weights"]["strings"] == 0.4
    assert loaded["known_sources"][-1] == "app"
    assert "main" in loaded["known_sources"]
    assert loaded["hook_contexts"] == {"my_theme_assets": "front"}
    assert DEFAULT_CONFIG["hook_contexts"] == {}


def test_load_config_empty_file(config: dict, tmp_path: Path) -> None:
    """Verify an empty YAML file is treated as no overrides."""
    config_file = tmp_path / "asset-resolver.yml"
    config_file.write_text("")
    assert load_config(str(config_file)) == config


def test_load_config_env_overrides(
    config: dict, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Verify environment variables override registration files and build folder."""
    monkeypatch.setenv(ENV_PHP_FILES, "functions.php, inc/enqueue.php,")
    monkeypatch.setenv(ENV_BUILD_FOLDER, "optimised")
    loaded = load_config(None)
    assert loaded["registration_files"] == ["functions.php", "inc/enqueue.php"]
    assert loaded["build_folder"] == "optimised"
