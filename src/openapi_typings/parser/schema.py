"""Schema -> TypeNode mapping.

Converts (already bundled) OpenAPI schema objects into ``TypeNode`` values.
References are only named, never dereferenced.
"""

import logging

from .base import ComponentIR, array_of, identifier, intersection, literal, object_type, union
from .naming import ref_name, to_safe_name

logger = logging.getLogger(__name__)

COMPONENTS_NAMESPACE = "Components.Schemas"
OPEN_MAP = "{ [key: string]: any }"
MAX_DEPTH = 5

_PRIMITIVES = {
    "string": "string",
    "integer": "number",
    "number": "number",
    "boolean": "boolean",
    "object": OPEN_MAP,
}


def map_schema(schema, ancestors: tuple = (), depth: int = 0):
    """Map a schema or ``$ref`` to a TypeNode. Never raises."""
    if not isinstance(schema, dict):
        return identifier("any")

    ref = schema.get("$ref")
    if isinstance(ref, str):
        return identifier(f"{COMPONENTS_NAMESPACE}.{to_safe_name(ref_name(ref))}")

    kind = schema.get("type")

    # prevent runaway recursion on self-referencing schemas
    if any(schema is seen for seen in ancestors) or depth > MAX_DEPTH:
        logger.debug("Recursion guard hit at depth %d, falling back to %r", depth, kind)
        return identifier(_PRIMITIVES.get(kind, "any") if isinstance(kind, str) else "any", schema)

    lineage = ancestors + (schema,)

    if isinstance(schema.get("enum"), list):
        return union(literal(v) for v in schema["enum"])

    for keyword in ("anyOf", "oneOf"):
        if isinstance(schema.get(keyword), list):
            return union(map_schema(s, lineage, depth + 1) for s in schema[keyword])

    if isinstance(schema.get("allOf"), list):
        return intersection(map_schema(s, lineage, depth + 1) for s in schema["allOf"])

    # OpenAPI 3.1 style `type: [string, "null"]`
    if isinstance(kind, list):
        return union(map_schema({**schema, "type": k}, lineage, depth + 1) for k in kind)

    if kind in ("string", "integer", "number", "boolean"):
        return identifier(_PRIMITIVES[kind], schema)
    if kind == "null":
        return identifier("null", schema)
    if kind == "array":
        return array_of(map_schema(schema.get("items"), lineage, depth + 1))
    if kind == "object":
        properties = schema.get("properties")
        if isinstance(properties, dict):
            props = {str(k): map_schema(v, lineage, depth + 1) for k, v in properties.items()}
            required = schema.get("required")
            if not isinstance(required, list):
                required = []
            return object_type(props, [r for r in required if isinstance(r, str)], schema)
        return identifier(OPEN_MAP, schema)
    return identifier("any", schema)


def build_components(components) -> list[ComponentIR]:
    """Map every schema of ``components.schemas`` to a ComponentIR."""
    if not isinstance(components, dict) or not isinstance(components.get("schemas"), dict):
        return []

    result: dict[str, ComponentIR] = {}
    for name, schema in components["schemas"].items():
        safe = to_safe_name(str(name))
        if safe in result:
            logger.warning("Component %r collides with an earlier component named %r; skipping it", name, safe)
            continue
        description = schema.get("description") if isinstance(schema, dict) else None
        result[safe] = ComponentIR(
            name=safe,
            type=map_schema(schema),
            description=description if isinstance(description, str) else None,
        )
    return list(result.values())
