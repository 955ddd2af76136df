"""End-to-end generation from a parsed document."""

from pathlib import Path

import pytest
import yaml

from openapi_typings.generator.document import generate_typings
from openapi_typings.generator.validator import check_delimiters
from openapi_typings.parser.loader import DocumentError

FIXTURES = Path(__file__).parent / "fixtures"


def _petstore() -> dict:
    return yaml.safe_load((FIXTURES / "petstore.yaml").read_text(encoding="utf-8"))


class TestGenerateTypings:
    def test_blocks_in_order(self):
        out = generate_typings(_petstore())
        positions = [
            out.index("/* eslint-disable @typescript-eslint/no-namespace */"),
            out.index("export namespace Components {"),
            out.index("export namespace Paths {"),
            out.index("export interface OperationMethods {"),
            out.index("export interface PathsDictionary {"),
            out.index("export type ImplicitParamValue = string | number"),
        ]
        assert positions == sorted(positions)

    def test_trailer(self):
        out = generate_typings(_petstore())
        assert "export type OperationResponse<T = any> = Promise<T>" in out
        assert "export type AxiosRequestConfig = any" in out
        assert "export interface UnknownParamsObject {" in out

    def test_without_zod(self):
        out = generate_typings(_petstore())
        assert "import { z } from 'zod'" not in out
        assert "apiResponseValidators" not in out
        assert "PetSchema" not in out

    def test_with_zod(self):
        out = generate_typings(_petstore(), zod=True)
        assert out.index("import { z } from 'zod'") < out.index("export namespace Components {")
        assert "export const apiResponseValidators = {" in out
        assert '"tag": z.string().nullable().optional()' in out

    def test_pet_record_and_validator(self):
        doc = {"paths": {}, "components": {"schemas": {"Pet": {
            "type": "object",
            "properties": {"id": {"type": "string"}, "age": {"type": "integer"}},
            "required": ["id"],
        }}}}
        out = generate_typings(doc, zod=True)
        assert "export interface Pet {\n    id: string;\n    age?: number;\n}" in out
        assert 'z.object({ "id": z.string(), "age": z.number().optional() })' in out

    def test_self_referencing_component_is_lazy(self):
        out = generate_typings(_petstore(), zod=True)
        assert (
            'export const NodeSchema: z.ZodType<any> = z.object({ "value": z.string().optional(), '
            '"children": z.array(z.lazy(() => Components.Schemas.NodeSchema)).optional() });'
        ) in out
        assert "z.lazy(() => Components.Schemas.PetSchema)" not in out

    def test_mutually_referencing_components_are_lazy(self):
        doc = {"components": {"schemas": {
            "A": {"type": "object", "properties": {"b": {"$ref": "#/components/schemas/B"}}},
            "B": {"type": "object", "properties": {"a": {"$ref": "#/components/schemas/A"}}},
        }}}
        out = generate_typings(doc, zod=True)
        assert '"b": z.lazy(() => Components.Schemas.BSchema).optional()' in out
        assert '"a": z.lazy(() => Components.Schemas.ASchema).optional()' in out

    def test_validators_follow_references(self):
        doc = {"components": {"schemas": {
            "Pet": {"type": "object", "properties": {"cat": {"$ref": "#/components/schemas/Category"}}},
            "Category": {"type": "object", "properties": {"name": {"type": "string"}}},
        }}}
        out = generate_typings(doc, zod=True)
        assert out.index("export const CategorySchema") < out.index("export const PetSchema")
        # static declarations keep document order
        assert out.index("export interface Pet ") < out.index("export interface Category ")

    def test_duplicate_ids_keep_the_last_operation(self):
        doc = {"paths": {
            "/a": {"get": {"operationId": "dup", "summary": "first"}},
            "/b": {"post": {"operationId": "dup", "summary": "second"}},
        }}
        out = generate_typings(doc, zod=True)
        assert out.count("export namespace Dup {") == 1
        assert out.count("dup: (") == 1
        assert "dup - second" in out
        assert "dup - first" not in out
        assert '"/b": {\n  post: (' in out
        assert '"/a"' not in out
        assert check_delimiters(out) == []

    def test_keep_unidentified(self):
        kept = generate_typings(_petstore(), keep_unidentified=True)
        assert "getPetsId: (parameters?: Parameters<Paths.GetPetsId.PathParameters>" in kept
        assert "export namespace GetPetsId {" in kept

        dropped = generate_typings(_petstore(), keep_unidentified=False)
        assert "getPetsId" not in dropped
        assert "GetPetsId" not in dropped

    def test_deterministic(self):
        assert generate_typings(_petstore(), True, True) == generate_typings(_petstore(), True, True)

    def test_output_is_balanced(self):
        assert check_delimiters(generate_typings(_petstore(), True, True)) == []

    def test_empty_document(self):
        out = generate_typings({})
        assert "export namespace Paths {" in out
        assert "export interface OperationMethods {" in out


class TestDocumentBoundary:
    def test_document_must_be_mapping(self):
        with pytest.raises(DocumentError):
            generate_typings(["not", "a", "document"])

    def test_paths_must_be_mapping(self):
        with pytest.raises(DocumentError, match="paths"):
            generate_typings({"paths": ["/pets"]})

    def test_schemas_must_be_mapping(self):
        with pytest.raises(DocumentError, match="schemas"):
            generate_typings({"components": {"schemas": ["Pet"]}})

    def test_malformed_schema_does_not_abort(self):
        doc = {"components": {"schemas": {"Broken": {"type": "object", "properties": 5}, "Weird": 42}}}
        out = generate_typings(doc, zod=True)
        assert "export type Broken = { [key: string]: any };" in out
        assert "export type Weird = any;" in out
        assert "export const WeirdSchema: z.ZodType<any> = z.any();" in out
