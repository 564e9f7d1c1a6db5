"""Data models for registration call sites found in theme PHP files."""

from dataclasses import dataclass
from enum import Enum


class ResourceKind(Enum):
    """Kind of resource declared by a registration call."""

    SCRIPT = "script"
    STYLE = "style"


class AssetContext(Enum):
    """Surface an asset is served to."""

    FRONT = "front"
    ADMIN = "admin"
    EDITOR = "editor"


@dataclass(frozen=True)
class RegistrationRecord:
    """One wp_register_*/wp_enqueue_*/add_editor_style call site."""

    hook: str  # empty for add_editor_style
    kind: ResourceKind
    raw_expression: str
    resolved_path: str
    contexts: tuple[AssetContext, ...]
