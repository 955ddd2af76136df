"""Intermediate representation shared by the parser and the generators.

The mapper turns schemas into ``TypeNode`` values and the operation builder
turns the path table into ``OperationIR`` records. Both renderers read
these models and never mutate them.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str | None = None
    example: Any = None
    nullable: bool = False


class IdentifierNode(_Node):
    """A named type reference or a primitive keyword."""

    kind: Literal["identifier"] = "identifier"
    name: str


class LiteralNode(_Node):
    kind: Literal["literal"] = "literal"
    value: Any


class ArrayNode(_Node):
    kind: Literal["array"] = "array"
    element: "TypeNode"


class UnionNode(_Node):
    kind: Literal["union"] = "union"
    types: tuple["TypeNode", ...]


class IntersectionNode(_Node):
    kind: Literal["intersection"] = "intersection"
    types: tuple["TypeNode", ...]


class GenericNode(_Node):
    kind: Literal["generic"] = "generic"
    base: "TypeNode"
    params: tuple["TypeNode", ...]


class ObjectNode(_Node):
    """A record type. Names in ``required`` are always keys of ``properties``."""

    kind: Literal["object"] = "object"
    properties: dict[str, "TypeNode"]
    required: tuple[str, ...] = ()

    @field_validator("required")
    @classmethod
    def _known_properties(cls, value, info):
        properties = info.data.get("properties", {})
        return tuple(name for name in value if name in properties)


TypeNode = Annotated[
    Union[IdentifierNode, LiteralNode, ArrayNode, UnionNode, IntersectionNode, GenericNode, ObjectNode],
    Field(discriminator="kind"),
]

for _model in (ArrayNode, UnionNode, IntersectionNode, GenericNode, ObjectNode):
    _model.model_rebuild()


def _metadata(schema: dict | None) -> dict:
    if not isinstance(schema, dict):
        return {}
    description = schema.get("description")
    return {
        "description": description if isinstance(description, str) else None,
        "example": schema.get("example"),
        "nullable": schema.get("nullable") is True,
    }


def identifier(name: str, schema: dict | None = None) -> IdentifierNode:
    """Build an identifier, copying description/example/nullable from ``schema``."""
    return IdentifierNode(name=name, **_metadata(schema))


def literal(value: Any) -> LiteralNode:
    return LiteralNode(value=value)


def array_of(element) -> ArrayNode:
    return ArrayNode(element=element)


def union(types) -> UnionNode:
    return UnionNode(types=tuple(types))


def intersection(types) -> IntersectionNode:
    return IntersectionNode(types=tuple(types))


def generic(base, params) -> GenericNode:
    return GenericNode(base=base, params=tuple(params))


def object_type(properties: dict, required=(), schema: dict | None = None) -> ObjectNode:
    return ObjectNode(properties=properties, required=tuple(required), **_metadata(schema))


class Parameter(BaseModel):
    """A single operation parameter as declared in the document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    location: str = Field(default="query", alias="in")  # path / query / header / cookie
    required: bool = False
    schema_: Any = Field(default=None, alias="schema")


class TypedParam(BaseModel):
    model_config = ConfigDict(frozen=True)

    param: Parameter
    type_name: str
    type_node: TypeNode


class ComponentIR(BaseModel):
    """One named schema of the component registry."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeNode
    description: str | None = None


class MediaType(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    schema_: Any = Field(default=None, alias="schema")
    example: Any = None
    examples: Any = None
    encoding: Any = None


class ResponseIR(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str | None = None
    headers: Any = None
    content: dict[str, MediaType] | None = None


class RequestBodyIR(BaseModel):
    model_config = ConfigDict(frozen=True)

    content_type: str
    type: TypeNode


class OperationParameters(BaseModel):
    """Typed parameters grouped by location."""

    model_config = ConfigDict(frozen=True)

    path: tuple[TypedParam, ...] = ()
    query: tuple[TypedParam, ...] = ()
    header: tuple[TypedParam, ...] = ()
    cookie: tuple[TypedParam, ...] = ()


class OperationIR(BaseModel):
    """One method bound to one path, normalised for rendering."""

    model_config = ConfigDict(frozen=True)

    id: str
    path: str
    method: str
    summary: str
    description: str | None = None
    parameters: OperationParameters = OperationParameters()
    request_body: RequestBodyIR | None = None
    responses: dict[str, ResponseIR] = {}
