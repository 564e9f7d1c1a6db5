"""Persistent cache of detected assets, keyed by the scanned files' content."""

import json
import logging
import shutil
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from asset_resolver.asset_map import AssetMap
from asset_resolver.compute_files_hash import compute_files_hash

logger = logging.getLogger(__name__)


@dataclass
class CacheLookup:
    """Outcome of a cache read.

    previous_build_folder is only set when a stale entry was found, so the
    caller can remove the now-outdated build output.
    """

    assets: AssetMap | None
    previous_build_folder: str | None = None


class AssetCache:
    """Manages the on-disk `{hash, timestamp, assets}` cache entry."""

    def __init__(
        self, cache_file: Path, theme_path: Path, registration_files: list[str]
    ) -> None:
        """Initialize the cache for a theme and its scanned PHP files."""
        self.path = cache_file
        self.theme_path = theme_path
        self.registration_files = registration_files

    def compute_hash(self) -> str:
        """Hash the current content of the registration files."""
        return compute_files_hash(self.theme_path, self.registration_files)

    def get_cached_assets(self) -> CacheLookup:
        """Return the cached AssetMap when the stored hash is still current."""
        current_hash = self.compute_hash()
        data = self._read()
        if data is None:
            return CacheLookup(assets=None)

        if data.get("hash") != current_hash:
            logger.info("Registration files changed, cache is stale")
            assets = data.get("assets")
            previous = assets.get("buildFolder") if isinstance(assets, dict) else None
            return CacheLookup(assets=None, previous_build_folder=previous or None)

        try:
            return CacheLookup(assets=AssetMap.from_dict(data["assets"]))
        except (KeyError, TypeError, AttributeError):
            logger.warning("Cache entry is malformed, rescanning")
            return CacheLookup(assets=None)

    def save_cached_assets(self, asset_map: AssetMap) -> None:
        """Overwrite the cache entry with a fresh hash and timestamp."""
        entry = {
            "hash": self.compute_hash(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "assets": asset_map.to_dict(),
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(entry, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not write cache %s: %s", self.path, exc)

    def invalidate(self) -> bool:
        """Delete the cache file. Returns True if a file was removed."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            logger.warning("Could not delete cache %s: %s", self.path, exc)
            return False
        logger.info("Cache invalidated")
        return True

    def delete_old_build_folder(
        self, build_folder: str, protected: list[str] | None = None
    ) -> bool:
        """Remove a stale build output directory inside the theme.

        Paths that escape the theme, the theme root itself and any folder
        that is or contains a protected source root are never removed.
        """
        clean = build_folder.strip().strip("/")
        if not clean:
            return False
        theme = self.theme_path.resolve()
        target = (theme / clean).resolve()
        try:
            target.relative_to(theme)
        except ValueError:
            logger.warning("Refusing to delete %s outside the theme", target)
            return False
        if target == theme:
            return False
        for root in protected or []:
            root_path = (theme / root).resolve()
            if root_path == target or target in root_path.parents:
                logger.warning("Refusing to delete %s/, it holds %s/", clean, root)
                return False
        if not target.is_dir():
            return False
        try:
            shutil.rmtree(target)
        except OSError as exc:
            logger.warning("Could not delete %s/: %s", clean, exc)
            return False
        logger.info("Removed old build folder: %s/", clean)
        return True

    def _read(self) -> dict | None:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Cache file %s is corrupt, rescanning", self.path)
            return None
        if not isinstance(data, dict):
            logger.warning("Cache file %s is corrupt, rescanning", self.path)
            return None
        return data
