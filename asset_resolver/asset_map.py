"""Data model for the per-context map of detected assets."""

from dataclasses import dataclass, field
from typing import Any

from asset_resolver.registration_record import AssetContext


@dataclass
class ContextAssets:
    """Ordered, de-duplicated source and library paths for one context."""

    sources: list[str] = field(default_factory=list)
    libs: list[str] = field(default_factory=list)

    def add_source(self, path: str) -> None:
        """Append a source path unless it is already listed in either set."""
        if path not in self.sources and path not in self.libs:
            self.sources.append(path)

    def add_lib(self, path: str) -> None:
        """Append a library path unless it is already listed in either set."""
        if path not in self.libs and path not in self.sources:
            self.libs.append(path)


@dataclass
class AssetMap:
    """Assets per context plus the build output folder."""

    build_folder: str
    front: ContextAssets = field(default_factory=ContextAssets)
    admin: ContextAssets = field(default_factory=ContextAssets)
    editor: ContextAssets = field(default_factory=ContextAssets)

    def for_context(self, context: AssetContext) -> ContextAssets:
        """Return the asset lists for a context."""
        return getattr(self, context.value)

    def all_sources(self) -> list[str]:
        """Return the unique sources of every context, front first."""
        seen: list[str] = []
        for context in AssetContext:
            for path in self.for_context(context).sources:
                if path not in seen:
                    seen.append(path)
        return seen

    def is_empty(self) -> bool:
        """Check whether no context holds any asset."""
        return not any(
            self.for_context(c).sources or self.for_context(c).libs
            for c in AssetContext
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted cache layout."""
        data: dict[str, Any] = {
            c.value: {
                "sources": list(self.for_context(c).sources),
                "libs": list(self.for_context(c).libs),
            }
            for c in AssetContext
        }
        data["buildFolder"] = self.build_folder
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AssetMap":
        """Rebuild an AssetMap from its persisted layout."""
        asset_map = cls(build_folder=str(data.get("buildFolder") or ""))
        for c in AssetContext:
            raw = data.get(c.value) or {}
            target = asset_map.for_context(c)
            for path in raw.get("sources") or []:
                target.add_source(str(path))
            for path in raw.get("libs") or []:
                target.add_lib(str(path))
        return asset_map
