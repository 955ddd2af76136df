"""Operation IR builder.

Walks the path table of a bundled OpenAPI document and produces one
normalised ``OperationIR`` per (path, method) pair.
"""

import logging
import re

from .base import (
    MediaType,
    OperationIR,
    OperationParameters,
    Parameter,
    RequestBodyIR,
    ResponseIR,
    TypedParam,
)
from .naming import camel_case, to_safe_name, upper_first
from .schema import map_schema

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")
LOCATIONS = ("path", "query", "header", "cookie")

# Parameters carrying this suffix are hints for tooling, not real inputs.
TYPE_HINT_SUFFIX = "@TypeHint"

_PATH_SEPARATORS = re.compile(r"[/{}]")


def build_operations(document: dict, keep_unidentified: bool = False) -> list[OperationIR]:
    """Build the operation list of a document.

    Operations without an ``operationId`` are skipped unless
    ``keep_unidentified`` is set, in which case an id is synthesised from
    the method and path. Ids are not de-duplicated: when two operations end
    up with the same id a warning is logged and the later one wins wherever
    operations are keyed by id.
    """
    operations = []
    seen: dict[str, str] = {}
    paths = document.get("paths") or {}

    for path, methods in paths.items():
        if not isinstance(methods, dict):
            continue
        path = str(path)
        for method, op in methods.items():
            if str(method).lower() not in HTTP_METHODS or not isinstance(op, dict):
                continue
            op_id = _declared_id(op.get("operationId"))
            if op_id is None:
                if not keep_unidentified:
                    logger.debug("Skipping %s %s: no operationId", method.upper(), path)
                    continue
                op_id = to_safe_name(camel_case(f"{method} {_PATH_SEPARATORS.sub(' ', path)}"))

            if op_id in seen:
                logger.warning(
                    "Operation id %r of %s %s already used by %s; the later operation wins",
                    op_id, method.upper(), path, seen[op_id],
                )
            seen[op_id] = f"{method.upper()} {path}"

            shared = methods.get("parameters") or []
            operations.append(_build_operation(op_id, path, method, op, shared))

    return operations


def _declared_id(declared) -> str | None:
    if isinstance(declared, str) and declared:
        return to_safe_name(declared)
    return None


def _build_operation(op_id: str, path: str, method: str, op: dict, shared: list) -> OperationIR:
    summary = op.get("summary")
    description = op.get("description")
    return OperationIR(
        id=op_id,
        path=path,
        method=method,
        summary=f"{op_id} - {summary}" if summary else op_id,
        description=description if isinstance(description, str) else None,
        parameters=_parse_parameters(_merge_parameters(shared, op.get("parameters") or [])),
        request_body=_parse_request_body(op.get("requestBody")),
        responses=_parse_responses(op.get("responses") or {}),
    )


def _merge_parameters(shared: list, own: list) -> list:
    """Path-level parameters apply to every method unless the operation
    redeclares the same (name, location) pair."""
    if not isinstance(shared, list) or not shared:
        return own
    if not isinstance(own, list):
        own = []
    declared = {(p.get("name"), p.get("in")) for p in own if isinstance(p, dict)}
    inherited = [
        p for p in shared
        if isinstance(p, dict) and (p.get("name"), p.get("in")) not in declared
    ]
    return inherited + own


def _parse_parameters(params: list) -> OperationParameters:
    grouped: dict[str, list[TypedParam]] = {location: [] for location in LOCATIONS}
    for p in params if isinstance(params, list) else []:
        if not isinstance(p, dict) or not isinstance(p.get("name"), str):
            logger.debug("Ignoring parameter without a name: %r", p)
            continue
        if p["name"].endswith(TYPE_HINT_SUFFIX):
            continue
        location = p.get("in", "query")
        if location not in grouped:
            continue

        param = Parameter(
            name=p["name"],
            location=location,
            required=p.get("required") is True,
            schema_=p.get("schema"),
        )
        grouped[location].append(
            TypedParam(
                param=param,
                type_name=upper_first(to_safe_name(param.name)),
                type_node=map_schema(param.schema_),
            )
        )
    return OperationParameters(**{location: tuple(items) for location, items in grouped.items()})


def _parse_request_body(body) -> RequestBodyIR | None:
    if not isinstance(body, dict) or not isinstance(body.get("content"), dict):
        return None
    # Only the first declared media type is modelled.
    for content_type, media in body["content"].items():
        schema = media.get("schema") if isinstance(media, dict) else None
        return RequestBodyIR(content_type=str(content_type), type=map_schema(schema))
    return None


def _parse_responses(responses: dict) -> dict[str, ResponseIR]:
    result = {}
    if not isinstance(responses, dict):
        return result
    for status_code, resp in responses.items():
        if not isinstance(resp, dict):
            resp = {}
        content = resp.get("content")
        if isinstance(content, dict):
            content = {
                str(mime): MediaType(
                    schema_=media.get("schema"),
                    example=media.get("example"),
                    examples=media.get("examples"),
                    encoding=media.get("encoding"),
                )
                for mime, media in content.items()
                if isinstance(media, dict)
            }
        else:
            content = None
        description = resp.get("description")
        result[str(status_code)] = ResponseIR(
            description=description if isinstance(description, str) else None,
            headers=resp.get("headers"),
            content=content,
        )
    return result
