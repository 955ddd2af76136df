"""Top-level declaration blocks built from the component and operation IR.

Each ``render_*`` function is independent and returns one block of
TypeScript source; ``generator.document`` concatenates them.
"""

import json

from openapi_typings.parser.base import ComponentIR, ObjectNode, OperationIR, TypedParam, identifier, union
from openapi_typings.parser.naming import (
    clean_description,
    is_safe_identifier,
    ref_name,
    safe_property_name,
    to_safe_name,
    upper_first,
)
from openapi_typings.parser.schema import COMPONENTS_NAMESPACE, map_schema

from .typescript import render_type, render_type_with_comment
from .zod import SCHEMA_SUFFIX, render_zod_components


def render_components(components: list[ComponentIR], zod: bool = False) -> str:
    """Render ``Components.Schemas`` plus a root alias per component."""
    declarations = []
    for item in components:
        # the node carries its own description unless it is a combinator
        comment = ""
        if item.description and not item.type.description:
            comment = f"/** {clean_description(item.description)} */\n"
        if isinstance(item.type, ObjectNode):
            declarations.append(f"{comment}export interface {item.name} {render_type_with_comment(item.type)}")
        else:
            declarations.append(f"{comment}export type {item.name} = {render_type_with_comment(item.type)};")

    validators = render_zod_components(components) if zod else ""
    aliases = "\n".join(f"export type {item.name} = {COMPONENTS_NAMESPACE}.{item.name};" for item in components)

    return (
        "export namespace Components {\n"
        "export namespace Schemas {\n"
        f"{validators}\n\n"
        + "\n\n".join(declarations)
        + "\n}\n}\n\n"
        + aliases
    )


# -- paths ------------------------------------------------------------------


def _alias_name(p: TypedParam) -> str:
    if is_safe_identifier(p.param.name):
        return p.type_name
    return f"Param_{p.type_name}"


def _param_aliases(params) -> list[str]:
    """One alias per emitted name, in declaration order; the first type wins.

    Unsafe names sharing a ``Param_<TypeName>`` interface each get a quoted
    key in it.
    """
    by_alias: dict[str, dict[str, str]] = {}
    for p in params:
        keys = by_alias.setdefault(_alias_name(p), {})
        keys.setdefault(p.param.name, render_type(p.type_node))

    aliases = []
    for name, keys in by_alias.items():
        first, rendered = next(iter(keys.items()))
        if is_safe_identifier(first):
            aliases.append(f"export type {name} = {rendered};")
            continue
        fields = "\n".join(f"    {json.dumps(key, ensure_ascii=False)}: {value};" for key, value in keys.items())
        aliases.append(f"export interface {name} {{\n{fields}\n}}")
    return aliases


def _param_field(p: TypedParam) -> str:
    ref = f"Parameters.{_alias_name(p)}"
    if not is_safe_identifier(p.param.name):
        # the original name cannot be a bare identifier; keep it as a quoted key
        ref += f"[{json.dumps(p.param.name, ensure_ascii=False)}]"
    optional = "" if p.param.required else "?"
    return f"    {safe_property_name(p.param.name)}{optional}: {ref};"


def _record(name: str, params) -> str:
    fields = "\n".join(_param_field(p) for p in params)
    return f"export interface {name} {{\n{fields}\n}}"


def _response_types(op: OperationIR) -> list[str]:
    lines = []
    for status, resp in op.responses.items():
        if not resp.content:
            lines.append(f"export type ${status} = undefined;")
            continue

        # keyed by rendered type so identical variants collapse, first wins
        variants = {}
        for media in resp.content.values():
            node = map_schema(media.schema_) if media.schema_ is not None else identifier("unknown")
            variants.setdefault(render_type(node), node)

        mimes = ", ".join(resp.content)
        lines.append(f"/** {mimes} */\nexport type ${status} = {render_type(union(variants.values()))};")
    return lines


def _render_path_namespace(op: OperationIR) -> str:
    params = op.parameters
    aliases = _param_aliases((*params.path, *params.query, *params.header, *params.cookie))

    request_body = render_type(op.request_body.type) if op.request_body else "undefined"

    records = [_record("PathParameters", params.path), _record("QueryParameters", params.query)]
    if params.header:
        records.append(_record("HeaderParameters", params.header))
    if params.cookie:
        records.append(_record("CookieParameters", params.cookie))

    parts = [
        f"export type RequestBody = {request_body};",
        "export namespace Parameters {\n" + "\n".join(aliases) + "\n}",
        *records,
        "export namespace Responses {\n" + "\n".join(_response_types(op)) + "\n}",
    ]
    return f"export namespace {upper_first(op.id)} {{\n" + "\n\n".join(parts) + "\n}"


def render_paths(operations: list[OperationIR]) -> str:
    """Render one ``Paths.<OperationId>`` namespace per operation."""
    body = "\n\n".join(_render_path_namespace(op) for op in operations)
    return f"export namespace Paths {{\n{body}\n}}"


# -- call signatures --------------------------------------------------------


def _signature(op: OperationIR) -> str:
    name = upper_first(op.id)
    parts = []
    if op.parameters.path:
        parts.append(f"Paths.{name}.PathParameters")
    if op.parameters.query:
        parts.append(f"Paths.{name}.QueryParameters")
    params = f"Parameters<{' & '.join(parts)}>" if parts else "null | undefined"

    data = f"Paths.{name}.RequestBody" if op.request_body else "undefined"

    # the first declared status stands for the whole call
    first_status = next(iter(op.responses), None)
    response = f"Paths.{name}.Responses.${first_status}" if first_status is not None else "any"

    return (
        f"(parameters?: {params}, data?: {data}, config?: AxiosRequestConfig)"
        f" => OperationResponse<{response}>"
    )


def _with_comment(op: OperationIR, typing: str) -> str:
    parts = [clean_description(p) for p in (op.summary, op.description) if p]
    if not parts:
        return typing
    comment = "\n".join(f" * {line}" for line in parts)
    return f"/**\n{comment}\n */\n{typing}"


def render_operations(operations: list[OperationIR]) -> str:
    """Render the ``OperationMethods`` interface keyed by operation id."""
    members = "\n".join(_with_comment(op, f"{op.id}: {_signature(op)};") for op in operations)
    return f"export interface OperationMethods {{\n{members}\n}}"


def render_paths_dictionary(operations: list[OperationIR]) -> str:
    """Render the ``PathsDictionary`` interface keyed by raw path."""
    grouped: dict[str, list[OperationIR]] = {}
    for op in operations:
        grouped.setdefault(op.path, []).append(op)

    entries = []
    for path, ops in grouped.items():
        methods = "\n".join(f"  {op.method}: {_signature(op)};" for op in ops)
        entries.append(f"  {json.dumps(path, ensure_ascii=False)}: {{\n{methods}\n  }}")
    return "export interface PathsDictionary {\n" + "\n".join(entries) + "\n}"


# -- response validators ----------------------------------------------------


def _success_schema_name(op: OperationIR) -> str | None:
    for status, resp in op.responses.items():
        if not status.startswith("2"):
            continue
        media = next(iter((resp.content or {}).values()), None)
        schema = media.schema_ if media else None
        if isinstance(schema, dict) and isinstance(schema.get("$ref"), str):
            return to_safe_name(ref_name(schema["$ref"]))
        return None
    return None


def render_validator_lookup(operations: list[OperationIR]) -> str:
    """Map each operation id to the validator of its first 2xx response.

    Operations sharing an id collapse to the last one.
    """
    table = {}
    for op in operations:
        name = _success_schema_name(op)
        table[op.id] = f"{COMPONENTS_NAMESPACE}.{name}{SCHEMA_SUFFIX}" if name else "undefined"

    lines = [f"{op_id}: {validator}," for op_id, validator in table.items()]
    return "export const apiResponseValidators = {\n" + "\n".join(lines) + "\n} as const"
