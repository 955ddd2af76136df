"""Zod rendering of TypeNode values.

Each node renders to a validator that accepts the same values as its
TypeScript rendering. Components are emitted as ``const`` declarations in
dependency order; a reference that leads back into the component's own
cycle gets a ``z.lazy`` reference instead of an eager one.
"""

from openapi_typings.parser.base import (
    ArrayNode,
    ComponentIR,
    GenericNode,
    IdentifierNode,
    IntersectionNode,
    LiteralNode,
    ObjectNode,
    UnionNode,
)
from openapi_typings.parser.schema import COMPONENTS_NAMESPACE, OPEN_MAP

from .typescript import is_nullable_union, render_literal

ZOD_PRIMITIVES = ("string", "number", "boolean", "any", "unknown", "undefined", "null", "never")
SCHEMA_SUFFIX = "Schema"


def _component_name(name: str) -> str:
    prefix = COMPONENTS_NAMESPACE + "."
    return name[len(prefix):] if name.startswith(prefix) else name


def render_zod(node, in_progress: frozenset = frozenset()) -> str:
    """Render a TypeNode as a Zod expression.

    ``in_progress`` holds the component names whose declaration is being
    emitted; references to them are deferred with ``z.lazy``.
    """
    if isinstance(node, IdentifierNode):
        if node.name in ZOD_PRIMITIVES:
            return f"z.{node.name}()"
        if node.name == OPEN_MAP:
            return "z.record(z.string(), z.any())"
        if _component_name(node.name) in in_progress:
            return f"z.lazy(() => {node.name}{SCHEMA_SUFFIX})"
        return f"{node.name}{SCHEMA_SUFFIX}"

    if isinstance(node, LiteralNode):
        return f"z.literal({render_literal(node.value)})"

    if isinstance(node, ArrayNode):
        return f"z.array({render_zod(node.element, in_progress)})"

    if isinstance(node, UnionNode):
        branches = [render_zod(t, in_progress) for t in node.types]
        if not branches:
            return "z.never()"
        if len(branches) == 1:
            return branches[0]
        return f"z.union([{', '.join(branches)}])"

    if isinstance(node, IntersectionNode):
        operands = [render_zod(t, in_progress) for t in node.types]
        if not operands:
            return "z.unknown()"
        merged = operands[0]
        for operand in operands[1:]:
            merged = f"z.intersection({merged}, {operand})"
        return merged

    if isinstance(node, GenericNode):
        # type parameters have no runtime counterpart
        return render_zod(node.base, in_progress)

    if isinstance(node, ObjectNode):
        entries = []
        for name, prop in node.properties.items():
            rendered = render_zod(prop, in_progress)
            if prop.nullable and not is_nullable_union(prop):
                rendered += ".nullable()"
            if name not in node.required:
                rendered += ".optional()"
            entries.append(f"{render_literal(name)}: {rendered}")
        if not entries:
            return "z.object({})"
        return f"z.object({{ {', '.join(entries)} }})"

    raise TypeError(f"Not a TypeNode: {node!r}")


def _references(node) -> set[str]:
    """Names of every identifier a node refers to, at any depth."""
    if isinstance(node, IdentifierNode):
        return {_component_name(node.name)}
    if isinstance(node, ArrayNode):
        return _references(node.element)
    if isinstance(node, (UnionNode, IntersectionNode)):
        children = node.types
    elif isinstance(node, GenericNode):
        children = (node.base, *node.params)
    elif isinstance(node, ObjectNode):
        children = tuple(node.properties.values())
    else:
        return set()
    return set().union(*(_references(child) for child in children))


def _cycle_groups(components: list[ComponentIR]) -> list[list[ComponentIR]]:
    """Group components into reference cycles, dependencies first.

    Strongly connected components of the reference graph (Tarjan), emitted in
    reverse topological order so every group only refers eagerly to groups
    declared before it. Members keep their declaration order.
    """
    by_name = {item.name: item for item in components}
    order = {name: i for i, name in enumerate(by_name)}
    edges = {}
    for name, item in by_name.items():
        refs = _references(item.type)
        edges[name] = [other for other in by_name if other in refs]

    index: dict[str, int] = {}
    low: dict[str, int] = {}
    stack: list[str] = []
    on_stack: set[str] = set()
    groups: list[list[ComponentIR]] = []

    def visit(name: str) -> None:
        index[name] = low[name] = len(index)
        stack.append(name)
        on_stack.add(name)
        for other in edges[name]:
            if other not in index:
                visit(other)
                low[name] = min(low[name], low[other])
            elif other in on_stack:
                low[name] = min(low[name], index[other])
        if low[name] != index[name]:
            return
        members = []
        while True:
            member = stack.pop()
            on_stack.discard(member)
            members.append(member)
            if member == name:
                break
        groups.append([by_name[m] for m in sorted(members, key=order.get)])

    for name in by_name:
        if name not in index:
            visit(name)
    return groups


def render_zod_components(components: list[ComponentIR]) -> str:
    """Declare one ``<Name>Schema`` constant per component.

    Constants are ordered so referenced components come first; references
    inside a cycle group are deferred with ``z.lazy``.
    """
    declarations = []
    for group in _cycle_groups(components):
        in_progress = frozenset(item.name for item in group)
        for item in group:
            body = render_zod(item.type, in_progress)
            declarations.append(f"export const {item.name}{SCHEMA_SUFFIX}: z.ZodType<any> = {body};")
    return "\n\n".join(declarations)
