"""Quote- and paren-aware splitting of PHP call arguments."""

OPENERS = "([{"
CLOSERS = ")]}"


def split_php_arguments(text: str, start: int) -> tuple[list[str], int]:
    """Split the argument list of a call whose '(' sits at text[start].

    Commas inside string literals or nested calls/arrays do not split.
    Returns the stripped arguments and the index just past the closing ')'.
    If the call is never closed, whatever was collected is returned with
    len(text) as the end index.
    """
    args: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None
    i = start + 1
    n = len(text)

    while i < n:
        ch = text[i]
        if quote:
            current.append(ch)
            if ch == "\\" and i + 1 < n:
                current.append(text[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in "'\"":
            quote = ch
            current.append(ch)
        elif ch in OPENERS:
            depth += 1
            current.append(ch)
        elif ch in CLOSERS:
            if depth == 0:
                _flush(args, current)
                return args, i + 1
            depth -= 1
            current.append(ch)
        elif ch == "," and depth == 0:
            _flush(args, current)
            current = []
        else:
            current.append(ch)
        i += 1

    _flush(args, current)
    return args, n


def _flush(args: list[str], current: list[str]) -> None:
    arg = "".join(current).strip()
    if arg:
        args.append(arg)


def split_php_array(expression: str) -> list[str] | None:
    """Return the elements of an array(...) or [...] literal, else None."""
    expr = expression.strip()
    if expr.lower().startswith("array"):
        open_at = expr.find("(")
        if open_at == -1:
            return None
        body = expr[open_at:]
    elif expr.startswith("[") and expr.endswith("]"):
        # Reuse the call splitter by swapping the outer brackets
        body = "(" + expr[1:-1] + ")"
    else:
        return None
    elements, _ = split_php_arguments(body, 0)
    return elements
