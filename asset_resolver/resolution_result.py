"""Data model for the outcome of one asset resolution cycle."""

from dataclasses import dataclass, field

from asset_resolver.asset_map import AssetMap


@dataclass
class ResolutionResult:
    """Represents the assets detected for a theme and where they came from."""

    assets: AssetMap
    origin: str  # memory/disk/scan
    unresolved: list[str] = field(default_factory=list)  # only filled by a scan
