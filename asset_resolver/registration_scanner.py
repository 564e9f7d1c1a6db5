"""Extraction of script/style registration call sites from theme PHP text.

This is a regex-driven approximation of PHP, not a parser. It finds
`add_action('<hook>', <callback>)` blocks, reads the registration calls in
the callback body and resolves their path argument with the constant and
variable tables. Bodies are matched with one level of nested braces; a body
nested deeper is cut at the first closing brace it reaches.
"""

import logging
import re
from collections.abc import Iterator
from typing import Any

from asset_resolver.hook_contexts import HYBRID, classify_hook
from asset_resolver.php_constants import parse_php_constants
from asset_resolver.php_variables import (
    extract_variables_from_expression,
    parse_php_variables,
)
from asset_resolver.registration_record import (
    AssetContext,
    RegistrationRecord,
    ResourceKind,
)
from asset_resolver.resolve_php_expression import is_external, resolve_php_expression
from asset_resolver.split_php_arguments import split_php_arguments, split_php_array

logger = logging.getLogger(__name__)

ACTION_RE = re.compile(r"\badd_action\s*\(\s*['\"]([^'\"]+)['\"]\s*,\s*")
CLOSURE_HEAD_RE = re.compile(
    r"(?:static\s+)?function\s*\([^)]*\)\s*"
    r"(?:use\s*\([^)]*\)\s*)?(?::\s*\??[\w\\]+\s*)?\{"
)
NAMED_CALLBACK_RE = re.compile(r"['\"]([A-Za-z_]\w*)['\"]")
FUNCTION_HEAD_RE = re.compile(
    r"\bfunction\s+([A-Za-z_]\w*)\s*\([^)]*\)\s*(?::\s*\??[\w\\]+\s*)?\{"
)
BODY_RE = re.compile(r"((?:[^{}]|\{[^{}]*\})*)\}")
CALL_RE = re.compile(r"\bwp_(?:register|enqueue)_(script|style)\s*\(")
EDITOR_STYLE_RE = re.compile(r"\badd_editor_style\s*\(")
GUARD_RE = re.compile(
    r"\bif\s*\(((?:[^(){}]|\([^()]*\))*)\)\s*\{([^{}]*)\}"
)
NEGATED_ADMIN_RE = re.compile(r"!\s*is_admin\s*\(")

PATH_ARG_INDEX = 1
DEFAULT_EDITOR_STYLE = "editor-style.css"
EMPTY_VALUES = frozenset({"", "false", "null", "''", '""'})


def extract_registrations(
    php_content: str, hook_overrides: dict[str, Any] | None = None
) -> list[RegistrationRecord]:
    """Extract and resolve every registration call in the given PHP text.

    Calls inside hooked callbacks come first in text order, followed by the
    hookless add_editor_style() calls. External URLs are dropped.
    """
    constants = parse_php_constants(php_content)
    variables = parse_php_variables(
        php_content, collect_registration_variables(php_content)
    )

    records: list[RegistrationRecord] = []
    warned_hooks: set[str] = set()
    functions = _index_named_functions(php_content)

    for hook, body in _iter_hook_bodies(php_content, functions):
        contexts, rule = classify_hook(hook, hook_overrides)
        guards = _guard_spans(body)
        for match in CALL_RE.finditer(body):
            args, _ = split_php_arguments(body, match.end() - 1)
            if len(args) <= PATH_ARG_INDEX:  # handle-only call
                continue
            record = _make_record(
                hook=hook,
                kind=ResourceKind(match.group(1)),
                expression=args[PATH_ARG_INDEX],
                contexts=_apply_guard(contexts, match.start(), guards),
                constants=constants,
                variables=variables,
            )
            if not record:
                continue
            if rule == "default" and hook not in warned_hooks:
                warned_hooks.add(hook)
                logger.warning(
                    "Hook %r is not recognized; its assets default to the admin "
                    "context. Classify it under hook_contexts to silence this.",
                    hook,
                )
            records.append(record)

    for expression in _iter_editor_style_expressions(php_content):
        record = _make_record(
            hook="",
            kind=ResourceKind.STYLE,
            expression=expression,
            contexts=(AssetContext.EDITOR,),
            constants=constants,
            variables=variables,
        )
        if record:
            records.append(record)

    return records


def collect_registration_variables(php_content: str) -> list[str]:
    """List the $variables referenced by any registration path argument."""
    names: list[str] = []
    expressions = [
        args[PATH_ARG_INDEX]
        for args in _iter_call_arguments(php_content, CALL_RE)
        if len(args) > PATH_ARG_INDEX
    ]
    expressions.extend(_iter_editor_style_expressions(php_content))
    for expression in expressions:
        for name in extract_variables_from_expression(expression):
            if name not in names:
                names.append(name)
    return names


def _make_record(
    *,
    hook: str,
    kind: ResourceKind,
    expression: str,
    contexts: tuple[AssetContext, ...],
    constants: dict[str, str],
    variables: dict[str, str],
) -> RegistrationRecord | None:
    if expression.strip().lower() in EMPTY_VALUES:
        return None
    resolved = resolve_php_expression(expression, constants, variables)
    if not resolved or is_external(resolved):
        return None
    return RegistrationRecord(
        hook=hook,
        kind=kind,
        raw_expression=expression,
        resolved_path=resolved,
        contexts=contexts,
    )


def _iter_hook_bodies(
    php_content: str, functions: dict[str, str]
) -> Iterator[tuple[str, str]]:
    """Yield (hook, callback body) for closures and named callbacks."""
    for action in ACTION_RE.finditer(php_content):
        hook = action.group(1)
        closure = CLOSURE_HEAD_RE.match(php_content, action.end())
        if closure:
            yield hook, _block_body(php_content, closure.end())
            continue
        named = NAMED_CALLBACK_RE.match(php_content, action.end())
        if named and named.group(1) in functions:
            yield hook, functions[named.group(1)]


def _index_named_functions(php_content: str) -> dict[str, str]:
    functions: dict[str, str] = {}
    for head in FUNCTION_HEAD_RE.finditer(php_content):
        functions.setdefault(head.group(1), _block_body(php_content, head.end()))
    return functions


def _block_body(text: str, body_start: int) -> str:
    """Return the body of a block whose '{' ends just before body_start."""
    match = BODY_RE.match(text, body_start)
    if match:
        return match.group(1)
    # Nested deeper than one level: cut at the first closing brace
    end = text.find("}", body_start)
    return text[body_start:] if end == -1 else text[body_start:end]


def _guard_spans(body: str) -> list[tuple[int, int, bool]]:
    """Return (start, end, negated) for `if (...is_admin()...) { }` blocks."""
    spans: list[tuple[int, int, bool]] = []
    for guard in GUARD_RE.finditer(body):
        condition = guard.group(1)
        if "is_admin" not in condition:
            continue
        negated = bool(NEGATED_ADMIN_RE.search(condition))
        spans.append((guard.start(2), guard.end(2), negated))
    return spans


def _apply_guard(
    contexts: tuple[AssetContext, ...],
    position: int,
    guards: list[tuple[int, int, bool]],
) -> tuple[AssetContext, ...]:
    """Narrow a hybrid hook's contexts when the call sits under is_admin()."""
    if contexts != HYBRID:
        return contexts
    for start, end, negated in guards:
        if start <= position < end:
            return (AssetContext.FRONT,) if negated else (AssetContext.EDITOR,)
    return contexts


def _iter_call_arguments(
    php_content: str, call_re: re.Pattern[str]
) -> Iterator[list[str]]:
    for match in call_re.finditer(php_content):
        args, _ = split_php_arguments(php_content, match.end() - 1)
        yield args


def _iter_editor_style_expressions(php_content: str) -> Iterator[str]:
    """Yield each stylesheet expression passed to add_editor_style()."""
    for args in _iter_call_arguments(php_content, EDITOR_STYLE_RE):
        if not args:
            yield f"'{DEFAULT_EDITOR_STYLE}'"
            continue
        elements = split_php_array(args[0])
        if elements is None:
            yield args[0]
        else:
            yield from elements
