"""Mapping of WordPress action hooks to asset contexts."""

import logging
from typing import Any

from asset_resolver.registration_record import AssetContext

logger = logging.getLogger(__name__)

FRONT_HOOK = "wp_enqueue_scripts"
EDITOR_HOOK = "enqueue_block_editor_assets"
HYBRID_HOOK = "enqueue_block_assets"
ADMIN_KEYWORDS = ("admin", "login", "customize")

FRONT = (AssetContext.FRONT,)
ADMIN = (AssetContext.ADMIN,)
EDITOR = (AssetContext.EDITOR,)
HYBRID = (AssetContext.FRONT, AssetContext.EDITOR)


def classify_hook(
    hook: str, overrides: dict[str, Any] | None = None
) -> tuple[tuple[AssetContext, ...], str]:
    """Return the contexts for a hook and the id of the rule that decided.

    Explicit overrides win, then the fixed table (first match wins):
    front hook, editor hook, hybrid block hook, admin keywords, and finally
    the conservative admin default.
    """
    if overrides and hook in overrides:
        contexts = _parse_override(overrides[hook])
        if contexts:
            return contexts, "override"
        logger.warning("Ignoring invalid hook_contexts entry for %r", hook)

    if FRONT_HOOK in hook:
        return FRONT, "front_hook"
    if EDITOR_HOOK in hook:
        return EDITOR, "editor_hook"
    if HYBRID_HOOK in hook:
        return HYBRID, "hybrid_hook"
    if any(keyword in hook for keyword in ADMIN_KEYWORDS):
        return ADMIN, "admin_keyword"
    return ADMIN, "default"


def _parse_override(value: Any) -> tuple[AssetContext, ...]:
    names = [value] if isinstance(value, str) else list(value or [])
    contexts: list[AssetContext] = []
    for name in names:
        try:
            context = AssetContext(str(name).strip().lower())
        except ValueError:
            return ()
        if context not in contexts:
            contexts.append(context)
    return tuple(contexts)
