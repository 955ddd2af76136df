from openapi_typings.parser.naming import (
    camel_case,
    clean_description,
    is_safe_identifier,
    ref_name,
    safe_property_name,
    to_comment,
    to_safe_name,
    upper_first,
)


class TestSafeNames:
    def test_to_safe_name_replaces_punctuation(self):
        assert to_safe_name("X-Request-Id") == "X_Request_Id"
        assert to_safe_name("pet.v2 model") == "pet_v2_model"

    def test_to_safe_name_keeps_valid_names(self):
        assert to_safe_name("Pet_2") == "Pet_2"

    def test_is_safe_identifier(self):
        assert is_safe_identifier("limit") is True
        assert is_safe_identifier("$top") is True
        assert is_safe_identifier("X-Request-Id") is False
        assert is_safe_identifier("1st") is False
        assert is_safe_identifier("") is False

    def test_safe_property_name_quotes_unsafe(self):
        assert safe_property_name("id") == "id"
        assert safe_property_name("x-id") == '"x-id"'


class TestCamelCase:
    def test_method_and_path_tokens(self):
        assert camel_case("get  pets  id ") == "getPetsId"

    def test_splits_on_case_boundaries(self):
        assert camel_case("get  userAccounts ") == "getUserAccounts"

    def test_upper_case_words_are_lowered(self):
        assert camel_case("GET pets") == "getPets"

    def test_digits_are_words(self):
        assert camel_case("get v2 items") == "getV2Items"

    def test_empty(self):
        assert camel_case(" / ") == ""

    def test_upper_first(self):
        assert upper_first("listPets") == "ListPets"
        assert upper_first("") == ""


class TestRefName:
    def test_last_segment(self):
        assert ref_name("#/components/schemas/Pet") == "Pet"

    def test_empty_segment_is_any(self):
        assert ref_name("#/components/schemas/") == "any"


class TestDescriptions:
    def test_clean_description_strips_html_and_folds_lines(self):
        assert clean_description("<p>Hello</p>\n   world  \n\n") == "Hello world"

    def test_clean_description_empty(self):
        assert clean_description(None) is None
        assert clean_description("") is None

    def test_to_comment(self):
        assert to_comment(["a", "b"]) == "/**\n * a\n * b\n */"

    def test_to_comment_splits_multiline_entries(self):
        assert to_comment(["example:", '{\n  "a": 1\n}']) == '/**\n * example:\n * {\n *   "a": 1\n * }\n */'

    def test_to_comment_escapes_terminator(self):
        assert "*/ x" not in to_comment(["a */ x"])
