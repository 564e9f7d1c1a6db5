"""Logic for describing which build files the dev server replaces at runtime."""

import json
import logging
import re
from pathlib import Path
from typing import Any

from asset_resolver.asset_map import AssetMap
from asset_resolver.registration_record import AssetContext

logger = logging.getLogger(__name__)

# Admin pages keep loading the production build.
INJECTED_CONTEXTS = frozenset({AssetContext.FRONT, AssetContext.EDITOR})

_SCRIPT_EXT_RE = re.compile(r"(?<!\.min)\.js$")
_SASS_EXT_RE = re.compile(r"\.scss$")


def to_build_path(source: str, build_folder: str) -> str:
    """Return the build file that a source compiles to, inside the build folder."""
    path = _SCRIPT_EXT_RE.sub(".min.js", source)
    path = _SASS_EXT_RE.sub(".min.css", path)
    path = path.replace("scss/", "css/")
    return f"{build_folder.strip('/')}/{path}" if build_folder else path


def build_injection_manifest(asset_map: AssetMap) -> dict[str, Any]:
    """Describe, per context, the sources served live and the files they replace."""
    manifest: dict[str, Any] = {"buildFolder": asset_map.build_folder}
    for context in AssetContext:
        assets = asset_map.for_context(context)
        manifest[context.value] = {
            "injected": context in INJECTED_CONTEXTS,
            "sources": list(assets.sources),
            "libs": list(assets.libs),
            "replaces": {
                source: to_build_path(source, asset_map.build_folder)
                for source in assets.sources
            },
        }
    return manifest


def write_injection_manifest(manifest: dict[str, Any], path: Path) -> None:
    """Write the manifest as JSON, creating parent folders as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(manifest, indent=2, ensure_ascii=False)
    path.write_text(text, encoding="utf-8")
    logger.info("Injection manifest written to %s", path)
