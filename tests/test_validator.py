from openapi_typings.generator.validator import check_delimiters, check_duplicate_ids
from openapi_typings.parser.operations import build_operations


class TestCheckDelimiters:
    def test_balanced(self):
        assert check_delimiters("export interface A {\n    b: (string | number)[];\n}") == []

    def test_unexpected_closer(self):
        errors = check_delimiters("type A = string)\n")
        assert len(errors) == 1
        assert "Unexpected ')'" in errors[0]

    def test_unclosed(self):
        errors = check_delimiters("export namespace A {\n  type B = {\n}\n")
        assert errors == ["Unclosed '{' (line 1)"]

    def test_mismatched(self):
        errors = check_delimiters("type A = (string]")
        assert any("Unexpected ']'" in e for e in errors)

    def test_brackets_in_strings_and_comments_are_ignored(self):
        text = (
            '/** returns { or ( */\n'
            'type A = { "x{": "y)" }\n'
            "// trailing ]\n"
            "import { z } from 'zod'\n"
        )
        assert check_delimiters(text) == []

    def test_escaped_quote_in_string(self):
        assert check_delimiters('type A = "a\\"{"') == []

    def test_unterminated_string(self):
        errors = check_delimiters('type A = "abc')
        assert any("Unterminated" in e for e in errors)


class TestCheckDuplicateIds:
    def test_no_duplicates(self):
        doc = {"paths": {"/a": {"get": {"operationId": "a"}}, "/b": {"get": {"operationId": "b"}}}}
        assert check_duplicate_ids(build_operations(doc)) == []

    def test_duplicates_reported(self):
        doc = {"paths": {"/a": {"get": {"operationId": "dup"}}, "/b": {"post": {"operationId": "dup"}}}}
        errors = check_duplicate_ids(build_operations(doc))
        assert errors == ["Operation id 'dup' is used 2 times (GET /a, POST /b)"]
