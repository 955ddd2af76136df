"""Identifier helpers shared by the parser and both renderers."""

import json
import re

SAFE_IDENTIFIER = re.compile(r"^[$A-Z_][0-9A-Z_$]*$", re.IGNORECASE)

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_]")
_WORDS = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")
_HTML_TAG = re.compile(r"</?[^>]+(>|$)")


def to_safe_name(name: str) -> str:
    """Replace every character that is not a letter, digit or underscore."""
    return _UNSAFE_CHARS.sub("_", name)


def is_safe_identifier(name: str) -> bool:
    return bool(SAFE_IDENTIFIER.fullmatch(name))


def safe_property_name(name: str) -> str:
    """Return the name as-is when it is a bare identifier, quoted otherwise."""
    if is_safe_identifier(name):
        return name
    return json.dumps(name, ensure_ascii=False)


def camel_case(text: str) -> str:
    """Camel-case a phrase: ``"get  pets  id "`` -> ``"getPetsId"``.

    Words are split on non-alphanumerics and on case boundaries, so
    ``"get /userAccounts"`` becomes ``"getUserAccounts"``.
    """
    words = _WORDS.findall(text)
    if not words:
        return ""
    head, *rest = (w.lower() for w in words)
    return head + "".join(w[:1].upper() + w[1:] for w in rest)


def upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def ref_name(ref: str) -> str:
    """Name a ``$ref`` by its last path segment."""
    return ref.split("/")[-1] or "any"


def clean_description(text: str | None) -> str | None:
    """Strip HTML tags and fold a multi-line description into one line."""
    if not text:
        return None
    cleaned = _HTML_TAG.sub("", str(text))
    lines = [line.strip() for line in cleaned.splitlines()]
    return " ".join(line for line in lines if line)


def to_comment(lines: list[str], prefix: str = " * ") -> str:
    """Wrap lines in a JSDoc block."""
    body = []
    for entry in lines:
        for line in entry.split("\n"):
            body.append(prefix + line.replace("*/", "*\\/"))
    return "\n".join(["/**", *body, " */"])
