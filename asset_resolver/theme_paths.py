"""Pre-resolved filesystem locations consumed by the resolution engine."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

SOURCE_ROOT_ORDER = ("scripts", "styles", "raw_styles", "static")


@dataclass(frozen=True)
class ThemePaths:
    """Theme directory, bundler directory and the named source roots."""

    theme_path: Path
    bundler_root: Path
    source_roots: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_config(
        cls, theme_path: Path, bundler_root: Path, config: dict[str, Any]
    ) -> "ThemePaths":
        """Build the paths from the 'source_roots' configuration section."""
        roots = config.get("source_roots") or {}
        return cls(
            theme_path=theme_path.resolve(),
            bundler_root=bundler_root.resolve(),
            source_roots={
                name: str(roots[name]).strip("/")
                for name in SOURCE_ROOT_ORDER
                if roots.get(name)
            },
        )

    def ordered_roots(self) -> list[str]:
        """Source roots in search order, without duplicates."""
        ordered: list[str] = []
        for name in SOURCE_ROOT_ORDER:
            root = self.source_roots.get(name)
            if root and root not in ordered:
                ordered.append(root)
        return ordered

    def cache_file(self, config: dict[str, Any]) -> Path:
        """Location of the persisted resolution cache."""
        cache = config["cache"]
        return self.bundler_root / cache["dir"] / cache["file"]
