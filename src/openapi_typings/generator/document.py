"""Assemble the full typings module for one document."""

import logging

from openapi_typings.parser.base import ComponentIR, OperationIR
from openapi_typings.parser.loader import DocumentError
from openapi_typings.parser.operations import build_operations
from openapi_typings.parser.schema import build_components

from .declarations import (
    render_components,
    render_operations,
    render_paths,
    render_paths_dictionary,
    render_validator_lookup,
)

logger = logging.getLogger(__name__)

HEADER = "/* eslint-disable @typescript-eslint/no-namespace */"

ZOD_IMPORT = "import { z } from 'zod'"

CONSTANT_TYPES = """export type ImplicitParamValue = string | number
export interface UnknownParamsObject {
    [parameter: string]: ImplicitParamValue
}
export type SingleParam = ImplicitParamValue
export type Parameters<ParamsObject = UnknownParamsObject> =
    | ParamsObject
    | SingleParam
export type OperationResponse<T = any> = Promise<T>
export type AxiosRequestConfig = any"""


def _check_document(document) -> None:
    if not isinstance(document, dict):
        raise DocumentError("OpenAPI document must be a mapping")
    if document.get("paths") is not None and not isinstance(document["paths"], dict):
        raise DocumentError("'paths' must be a mapping of path -> path item")
    components = document.get("components")
    if components is not None:
        if not isinstance(components, dict):
            raise DocumentError("'components' must be a mapping")
        if components.get("schemas") is not None and not isinstance(components["schemas"], dict):
            raise DocumentError("'components.schemas' must be a mapping of name -> schema")


def build_ir(document: dict, keep_unidentified: bool = False) -> tuple[list[ComponentIR], list[OperationIR]]:
    """Check the document boundary and build both IR lists.

    Operations keep every declaration, duplicates included, so the caller can
    report id collisions.
    """
    _check_document(document)
    operations = build_operations(document, keep_unidentified)
    components = build_components(document.get("components"))
    return components, operations


def last_per_id(operations: list[OperationIR]) -> list[OperationIR]:
    """Collapse operations sharing an id to the last one, in first-seen position."""
    by_id = {}
    for op in operations:
        by_id[op.id] = op
    return list(by_id.values())


def render_typings(components: list[ComponentIR], operations: list[OperationIR], zod: bool = False) -> str:
    operations = last_per_id(operations)
    logger.info("Rendering %d components and %d operations", len(components), len(operations))

    blocks = [
        HEADER,
        ZOD_IMPORT if zod else "",
        "// Automatically generated types",
        render_components(components, zod),
        render_paths(operations),
        render_operations(operations),
        render_paths_dictionary(operations),
        render_validator_lookup(operations) if zod else "",
        CONSTANT_TYPES,
    ]
    return "\n\n".join(block for block in blocks if block) + "\n"


def generate_typings(document: dict, keep_unidentified: bool = False, zod: bool = False) -> str:
    """Generate the typings module text for a bundled OpenAPI document.

    Args:
        document: the parsed, bundled document.
        keep_unidentified: also emit operations without an ``operationId``.
        zod: emit Zod validators and the response validator table.

    The output is not formatted; pipe it through a formatter if needed.
    """
    components, operations = build_ir(document, keep_unidentified)
    return render_typings(components, operations, zod)
