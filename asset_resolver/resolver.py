"""Orchestration of asset detection: memo, disk cache, then a full scan."""

import logging
from typing import Any

from asset_resolver.asset_cache import AssetCache
from asset_resolver.asset_map import AssetMap
from asset_resolver.library_classifier import LibraryClassifier
from asset_resolver.path_classifier import is_build_path
from asset_resolver.php_constants import detect_build_folder
from asset_resolver.registration_record import RegistrationRecord
from asset_resolver.registration_scanner import extract_registrations
from asset_resolver.resolution_memo import ResolutionMemo
from asset_resolver.resolution_result import ResolutionResult
from asset_resolver.signature_matcher import SignatureMatcher
from asset_resolver.source_locator import LocateResult, SourceLocator
from asset_resolver.theme_paths import ThemePaths

logger = logging.getLogger(__name__)


class AssetResolver:
    """Builds the per-context asset map for a theme.

    Each tier is cheaper than the next: the in-process memo, the on-disk
    cache keyed by the PHP files' hash, and finally a scan of those files.
    """

    def __init__(
        self,
        paths: ThemePaths,
        config: dict[str, Any],
        memo: ResolutionMemo,
        cache: AssetCache | None = None,
    ) -> None:
        """Initialize the resolver; the memo is shared by reference."""
        self.paths = paths
        self.config = config
        self.memo = memo
        self.registration_files: list[str] = list(config["registration_files"])
        self.build_folders: list[str] = list(config["build_folder_names"])
        self.cache = cache or AssetCache(
            paths.cache_file(config), paths.theme_path, self.registration_files
        )
        self.locator = SourceLocator(
            paths, self.build_folders, SignatureMatcher(config["matching"])
        )
        self.classifier = LibraryClassifier(
            paths.theme_path, list(config["known_sources"])
        )

    def detect_assets(self) -> ResolutionResult:
        """Return the asset map, scanning the theme only when both caches miss."""
        memoized = self.memo.get()
        if memoized is not None:
            return ResolutionResult(memoized.assets, "memory", memoized.unresolved)

        lookup = self.cache.get_cached_assets()
        if lookup.assets is not None:
            result = ResolutionResult(self._apply_override(lookup.assets), "disk")
            self.memo.set(result)
            return result

        php_content = self._read_registration_files()
        if php_content is None:
            logger.warning("No registration file found in %s", self.paths.theme_path)
            return ResolutionResult(self.empty_map(), "scan")

        try:
            result = self.scan(php_content)
        except Exception:
            logger.exception("Asset detection failed, continuing without assets")
            return ResolutionResult(self.empty_map(), "scan")

        previous = lookup.previous_build_folder
        if (
            previous
            and previous != result.assets.build_folder
            and self.config.get("clean_stale_build_folder", True)
        ):
            self.cache.delete_old_build_folder(
                previous, protected=self.paths.ordered_roots()
            )

        self.memo.set(result)
        self.cache.save_cached_assets(result.assets)
        return result

    def scan(self, php_content: str) -> ResolutionResult:
        """Resolve every registration in the given PHP text into an AssetMap."""
        records = extract_registrations(php_content, self.config.get("hook_contexts"))

        located: dict[str, LocateResult | None] = {}
        unresolved: list[str] = []
        for record in records:
            path = record.resolved_path
            if path in located:
                continue
            match = self.locator.locate(path)
            located[path] = match
            if match:
                logger.debug("%s -> %s (%s)", path, match.source, match.strategy)
            else:
                logger.warning("Source not found for: %s", path)
                unresolved.append(path)

        asset_map = AssetMap(
            build_folder=self._build_folder(php_content, records, located)
        )
        libraries: dict[str, bool] = {}
        for record in records:
            match = located[record.resolved_path]
            if match is None:
                continue
            source = match.source
            if source not in libraries:
                libraries[source] = self.classifier.is_library(source)

            for context in record.contexts:
                target = asset_map.for_context(context)
                if libraries[source]:
                    target.add_lib(source)
                else:
                    target.add_source(source)

        return ResolutionResult(asset_map, "scan", unresolved)

    def empty_map(self) -> AssetMap:
        """An AssetMap with no assets and the configured build folder."""
        return AssetMap(
            build_folder=self.config.get("build_folder")
            or self.config["default_build_folder"]
        )

    def _read_registration_files(self) -> str | None:
        chunks = []
        for name in self.registration_files:
            path = self.paths.theme_path / name
            try:
                content = path.read_text(encoding="utf-8", errors="replace")
            except OSError:
                logger.warning("%s not found, skipped", name)
                continue
            chunks.append(f"\n/* ===== {name} ===== */\n{content}")
        return "".join(chunks) if chunks else None

    def _build_folder(
        self,
        php_content: str,
        records: list[RegistrationRecord],
        located: dict[str, LocateResult | None],
    ) -> str:
        """Override, then build-folder constant, then first build path, else default.

        A registered path that resolved to itself is a source file, so its
        first segment never names the build folder.
        """
        override = self.config.get("build_folder")
        if override:
            return str(override).strip("/")

        detected = detect_build_folder(
            php_content, list(self.config.get("build_folder_constants") or [])
        )
        if detected:
            return detected

        for record in records:
            path = record.resolved_path
            first_segment = path.split("/", 1)[0]
            if first_segment not in self.build_folders or not is_build_path(
                path, self.build_folders
            ):
                continue
            match = located.get(path)
            if match is None or match.source != path:
                return first_segment

        return self.config["default_build_folder"]

    def _apply_override(self, asset_map: AssetMap) -> AssetMap:
        override = self.config.get("build_folder")
        if override:
            asset_map.build_folder = str(override).strip("/")
        return asset_map
