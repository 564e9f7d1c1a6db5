"""Logic for reducing a PHP path expression to a theme-relative path."""

import re

from asset_resolver.normalize_path import normalize_path
from asset_resolver.php_constants import THEME_ROOT_CALLS

THEME_ROOT_CALL_RE = re.compile(
    r"\b(?:" + "|".join(THEME_ROOT_CALLS) + r")\s*\(\s*\)"
)
CONCAT_RE = re.compile(r"['\"]\s*\.\s*['\"]")
OUTER_QUOTES_RE = re.compile(r"^['\"]|['\"]$")
EXTERNAL_RE = re.compile(r"^(?:[a-z][a-z0-9+.-]*:|//)", re.IGNORECASE)


def resolve_php_expression(
    expression: str,
    constants: dict[str, str],
    variables: dict[str, str],
) -> str:
    """Resolve a registration path expression.

    OPTI_PATH_URI . '/css/' . $suffix . '.css'
    -> 'optimised/css/dark.css' (OPTI_PATH_URI=optimised, $suffix=dark)

    The result is a fixed point: resolving it again returns it unchanged.
    """
    resolved = expression.strip()

    # 1. Constants (bare identifiers)
    for name, value in constants.items():
        literal = f"'{value}'"
        resolved = re.sub(
            rf"(?<!\$)\b{re.escape(name)}\b", lambda _m, s=literal: s, resolved
        )

    # 2. Variables ($name)
    for name, value in variables.items():
        literal = f"'{value}'"
        resolved = re.sub(
            rf"\${re.escape(name)}\b", lambda _m, s=literal: s, resolved
        )

    # 3. Theme root calls resolve to the theme directory itself
    resolved = THEME_ROOT_CALL_RE.sub("''", resolved)

    # 4. Collapse the concatenation operator between literals
    resolved = CONCAT_RE.sub("", resolved).strip()
    resolved = OUTER_QUOTES_RE.sub("", resolved)

    resolved = normalize_path(resolved).split("?", 1)[0]
    if is_external(resolved):
        return resolved
    return resolved.lstrip("/")


def is_external(path: str) -> bool:
    """Check whether a resolved path points at another host."""
    return bool(EXTERNAL_RE.match(path))
