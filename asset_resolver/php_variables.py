"""Logic for extracting simple $variable literal assignments from PHP text."""

import re

VARIABLE_REF_RE = re.compile(r"\$(\w+)")


def extract_variables_from_expression(expression: str) -> list[str]:
    """List the $variable names referenced by an expression, in order.

    $theme_version . '/css/style.css' -> ['theme_version']
    """
    names: list[str] = []
    for match in VARIABLE_REF_RE.finditer(expression):
        if match.group(1) not in names:
            names.append(match.group(1))
    return names


def parse_php_variables(
    php_content: str, variables_to_find: list[str]
) -> dict[str, str]:
    """Build the variable table for the requested names only.

    The first `$name = 'literal'` assignment in text order wins; names bound
    to anything but a quoted literal are left out.
    """
    variables: dict[str, str] = {}
    for name in variables_to_find:
        pattern = re.compile(rf"\${re.escape(name)}\s*=\s*['\"]([^'\"]+)['\"]")
        match = pattern.search(php_content)
        if match:
            variables[name] = match.group(1)
    return variables
