"""TypeScript rendering of TypeNode values."""

import json

from openapi_typings.parser.base import (
    ArrayNode,
    GenericNode,
    IdentifierNode,
    IntersectionNode,
    LiteralNode,
    ObjectNode,
    UnionNode,
)
from openapi_typings.parser.naming import clean_description, safe_property_name, to_comment


def render_literal(value) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


def is_nullable_union(node) -> bool:
    """True for a union that already admits ``null``."""
    return isinstance(node, UnionNode) and any(
        isinstance(t, LiteralNode) and t.value is None
        or isinstance(t, IdentifierNode) and t.name == "null"
        for t in node.types
    )


def render_type(node) -> str:
    """Render a TypeNode as a TypeScript type expression."""
    if isinstance(node, IdentifierNode):
        return node.name
    if isinstance(node, LiteralNode):
        return render_literal(node.value)
    if isinstance(node, ArrayNode):
        element = render_type(node.element)
        if isinstance(node.element, (UnionNode, IntersectionNode)):
            return f"({element})[]"
        return f"{element}[]"
    if isinstance(node, UnionNode):
        return " | ".join(render_type(t) for t in node.types) or "never"
    if isinstance(node, IntersectionNode):
        operands = [f"({render_type(t)})" if isinstance(t, UnionNode) else render_type(t) for t in node.types]
        return " & ".join(operands) or "unknown"
    if isinstance(node, GenericNode):
        params = ", ".join(render_type(p) for p in node.params)
        return f"{render_type(node.base)}<{params}>"
    if isinstance(node, ObjectNode):
        return _render_object(node)
    raise TypeError(f"Not a TypeNode: {node!r}")


def _render_object(node: ObjectNode) -> str:
    props = []
    for name, prop in node.properties.items():
        optional = "" if name in node.required else "?"
        lines = []
        if prop.description:
            lines.append(clean_description(prop.description))
        if prop.example is not None:
            lines.append("example:")
            if isinstance(prop.example, str):
                lines.append(prop.example)
            else:
                lines.append(json.dumps(prop.example, ensure_ascii=False, default=str))
        lines = [to_comment(lines)] if lines else []

        rendered = render_type(prop)
        if prop.nullable and not is_nullable_union(prop):
            rendered = f"{rendered} | null"
        lines.append(f"    {safe_property_name(name)}{optional}: {rendered};")
        props.append("\n".join(lines))

    return "{\n" + "\n".join(props) + "\n}"


def render_type_with_comment(node) -> str:
    """Render a node preceded by its own description, if it has one."""
    rendered = render_type(node)
    if node.description:
        return f"/** {clean_description(node.description)} */\n{rendered}"
    return rendered
