"""Logic for extracting define() path constants from PHP source text."""

import re

from asset_resolver.normalize_path import strip_slashes

THEME_ROOT_CALLS = (
    "get_template_directory_uri",
    "get_template_directory",
    "get_stylesheet_directory_uri",
    "get_stylesheet_directory",
)

_ROOT_CALL_ALT = "|".join(THEME_ROOT_CALLS)

# define('NAME', get_template_directory_uri() . '/path/to/folder')
DEFINE_RE = re.compile(
    r"define\s*\(\s*['\"]([\w]+)['\"]\s*,\s*"
    rf"(?:{_ROOT_CALL_ALT})\s*\(\s*\)\s*\.\s*['\"]([^'\"]+)['\"]\s*\)"
)


def parse_php_constants(php_content: str) -> dict[str, str]:
    """Build the constant table from define() calls.

    Only constants bound to a theme-root call concatenated with a literal are
    kept. A later definition of the same name overwrites an earlier one.
    """
    constants: dict[str, str] = {}
    for match in DEFINE_RE.finditer(php_content):
        constants[match.group(1)] = strip_slashes(match.group(2))
    return constants


def detect_build_folder(
    php_content: str, build_constants: list[str]
) -> str | None:
    """Return the first path segment of the first build-folder constant."""
    if not build_constants:
        return None
    names = "|".join(re.escape(name) for name in build_constants)
    pattern = re.compile(
        rf"define\s*\(\s*['\"](?:{names})['\"]\s*,\s*[^'\"]*['\"]/?([^'\"/]+)"
    )
    match = pattern.search(php_content)
    if match:
        return match.group(1)
    return None
