"""Logic for loading and merging configuration files."""

import copy
import os
from pathlib import Path
from typing import Any

import yaml

from asset_resolver.deep_merge import deep_merge

CONFIG_FILENAME = "asset-resolver.yml"
ENV_PHP_FILES = "ASSET_RESOLVER_PHP_FILES"
ENV_BUILD_FOLDER = "ASSET_RESOLVER_BUILD_FOLDER"

DEFAULT_CONFIG: dict[str, Any] = {
    "registration_files": ["functions.php"],
    "source_roots": {
        "scripts": "js",
        "styles": "scss",
        "raw_styles": "css",
        "static": "sources",
    },
    "build_folder": None,
    "default_build_folder": "dist",
    "build_folder_names": [
        "dist",
        "build",
        "optimised",
        "optimized",
        "compiled",
        "bundle",
        "public",
        "assets",
        "output",
    ],
    "build_folder_constants": ["OPTI_PATH", "OPTI_PATH_URI"],
    "css_output_folder": "css",
    "hook_contexts": {},
    "known_sources": ["main", "style", "admin", "editor"],
    "matching": {
        "threshold": 0.3,
        "weights": {
            "strings": 0.4,
            "numbers": 0.2,
            "selectors": 0.3,
            "apis": 0.3,
        },
        "limits": {
            "script_strings": 100,
            "script_numbers": 50,
            "style_selectors": 100,
            "style_strings": 50,
            "style_numbers": 50,
        },
    },
    "cache": {
        "dir": ".cache",
        "file": "assets-cache.json",
    },
    "clean_stale_build_folder": True,
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults.

    Environment overrides are applied last so a CI job can point the scan at
    other registration files without editing the YAML.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            config = deep_merge(config, user_config)

    php_files = os.environ.get(ENV_PHP_FILES)
    if php_files:
        config["registration_files"] = [
            f.strip() for f in php_files.split(",") if f.strip()
        ]

    build_folder = os.environ.get(ENV_BUILD_FOLDER)
    if build_folder:
        config["build_folder"] = build_folder

    return config
