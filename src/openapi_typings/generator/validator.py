"""Sanity checks for generated typings before they are written out."""

from collections import Counter

from openapi_typings.parser.base import OperationIR

_PAIRS = {")": "(", "]": "[", "}": "{"}


def check_delimiters(text: str) -> list[str]:
    """Check that brackets are balanced outside strings and comments.

    Returns a list of error messages, empty when the text is balanced.
    """
    errors = []
    stack: list[tuple[str, int]] = []
    line = 1
    i = 0
    quote = None
    while i < len(text):
        ch = text[i]
        if ch == "\n":
            line += 1

        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            end = len(text) if end == -1 else end + 2
            line += text.count("\n", i, end)
            i = end
            continue
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = len(text) if end == -1 else end
            continue
        elif ch in "'\"`":
            quote = ch
        elif ch in "([{":
            stack.append((ch, line))
        elif ch in _PAIRS:
            if not stack or stack[-1][0] != _PAIRS[ch]:
                errors.append(f"Unexpected '{ch}' (line {line})")
            else:
                stack.pop()
        i += 1

    if quote:
        errors.append(f"Unterminated string literal (quote {quote})")
    for opening, opened_at in stack:
        errors.append(f"Unclosed '{opening}' (line {opened_at})")
    return errors


def check_duplicate_ids(operations: list[OperationIR]) -> list[str]:
    """Report operation ids used more than once; the last one wins in the output."""
    counts = Counter(op.id for op in operations)
    errors = []
    for op_id, count in counts.items():
        if count > 1:
            paths = ", ".join(f"{op.method.upper()} {op.path}" for op in operations if op.id == op_id)
            errors.append(f"Operation id '{op_id}' is used {count} times ({paths})")
    return errors
