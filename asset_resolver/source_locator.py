"""Mapping of build paths back to the source files they were compiled from."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from asset_resolver.find_files_recursive import find_files_recursive
from asset_resolver.normalize_path import get_base_name, normalize_path
from asset_resolver.path_classifier import (
    MIN_MARKER,
    is_build_path,
    is_script_path,
    remove_build_prefix,
    strip_type_segment,
)
from asset_resolver.signature_matcher import SignatureMatcher
from asset_resolver.theme_paths import ThemePaths

logger = logging.getLogger(__name__)

SCRIPT_EXTENSIONS = (".js",)
STYLE_EXTENSIONS = (".scss", ".css")


@dataclass
class LocateResult:
    """A located source file and the strategy that found it."""

    source: str
    strategy: str  # direct/structure/signature/first_candidate/filename
    candidates: list[str] = field(default_factory=list)


class SourceLocator:
    """Finds the source counterpart of a registered build path."""

    def __init__(
        self,
        paths: ThemePaths,
        build_folders: list[str],
        matcher: SignatureMatcher,
    ) -> None:
        """Initialize the locator with the theme layout and a matcher."""
        self.paths = paths
        self.build_folders = build_folders
        self.matcher = matcher

    def locate(self, resolved_path: str) -> LocateResult | None:
        """Return the source file for a resolved path, or None if not found.

        Strategies in order: the path itself when it is a raw asset, the
        structure-preserving search, then a filename-only search. Several
        candidates are narrowed down by signature matching, falling back to
        the first one.
        """
        path = normalize_path(resolved_path)
        is_raw = not is_build_path(path, self.build_folders) or self._in_source_root(
            path
        )
        if is_raw and self._exists(path):
            return LocateResult(source=path, strategy="direct", candidates=[path])

        candidates = self.search_with_preserved_path(path)
        if candidates:
            return self._pick(path, candidates, single_strategy="structure")

        candidates = self.search_by_filename(path)
        if candidates:
            return self._pick(path, candidates, single_strategy="filename")

        return None

    def search_with_preserved_path(self, build_path: str) -> list[str]:
        """Recombine the build path's directory tree with each source root.

        dist/css/components/slider.min.css -> scss/components/slider.scss
        """
        parts = remove_build_prefix(build_path, self.build_folders).split("/")
        file_name = parts.pop()
        dir_structure = "/".join(strip_type_segment(parts))
        base_name = get_base_name(file_name)

        candidates: list[str] = []
        for root in self.paths.ordered_roots():
            for ext in self._extensions(file_name):
                prefix = f"{root}/{dir_structure}" if dir_structure else root
                candidate = f"{prefix}/{base_name}{ext}"
                if candidate not in candidates and self._exists(candidate):
                    candidates.append(candidate)
        return candidates

    def search_by_filename(self, build_path: str) -> list[str]:
        """Find files anywhere below the source roots with the same base name."""
        without_build = remove_build_prefix(build_path, self.build_folders)
        base_name = get_base_name(without_build)
        extensions = self._extensions(without_build)

        candidates: list[str] = []
        theme = self.paths.theme_path
        for root in self.paths.ordered_roots():
            for file in find_files_recursive(theme / root, theme, extensions):
                if get_base_name(file) == base_name and file not in candidates:
                    candidates.append(file)
        return candidates

    def _pick(
        self, build_path: str, candidates: list[str], single_strategy: str
    ) -> LocateResult:
        if len(candidates) == 1:
            return LocateResult(candidates[0], single_strategy, candidates)

        theme = self.paths.theme_path
        best = self.matcher.find_best_match(
            theme / build_path, [theme / c for c in candidates]
        )
        if best is not None:
            source = best.relative_to(theme).as_posix()
            return LocateResult(source, "signature", candidates)

        logger.debug(
            "No confident signature match for %s, using %s", build_path, candidates[0]
        )
        return LocateResult(candidates[0], "first_candidate", candidates)

    def _in_source_root(self, path: str) -> bool:
        """Source roots may live under a folder named like a build folder."""
        if MIN_MARKER in path.rsplit("/", 1)[-1]:
            return False
        return any(path.startswith(f"{root}/") for root in self.paths.ordered_roots())

    def _exists(self, relative: str) -> bool:
        try:
            return (self.paths.theme_path / relative).is_file()
        except OSError:
            return False

    @staticmethod
    def _extensions(file_name: str) -> tuple[str, ...]:
        return SCRIPT_EXTENSIONS if is_script_path(file_name) else STYLE_EXTENSIONS
