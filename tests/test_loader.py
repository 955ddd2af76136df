from pathlib import Path

import pytest

from openapi_typings.parser.loader import DocumentError, detect_format, load_document

FIXTURES = Path(__file__).parent / "fixtures"


class TestDetectFormat:
    def test_detect_by_suffix(self, tmp_path):
        assert detect_format(FIXTURES / "petstore.yaml") == "yaml"
        assert detect_format(tmp_path / "api.json") == "json"

    def test_detect_by_content(self, tmp_path):
        f = tmp_path / "api.txt"
        f.write_text('  {"openapi": "3.0.0"}')
        assert detect_format(f) == "json"

        f.write_text("openapi: 3.0.0\n")
        assert detect_format(f) == "yaml"


class TestLoadDocument:
    def test_load_yaml(self):
        doc = load_document(FIXTURES / "petstore.yaml")
        assert doc["info"]["title"] == "Swagger Petstore"
        assert "/pets" in doc["paths"]

    def test_load_json(self, tmp_path):
        f = tmp_path / "api.json"
        f.write_text('{"openapi": "3.0.0", "paths": {}}')
        assert load_document(f) == {"openapi": "3.0.0", "paths": {}}

    def test_explicit_format(self, tmp_path):
        f = tmp_path / "api.spec"
        f.write_text("paths: {}\n")
        assert load_document(f, fmt="yaml") == {"paths": {}}

    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentError, match="No such file"):
            load_document(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("key: [invalid\n")
        with pytest.raises(DocumentError, match="Could not parse"):
            load_document(f)

    def test_invalid_json(self, tmp_path):
        f = tmp_path / "bad.json"
        f.write_text("{not json")
        with pytest.raises(DocumentError):
            load_document(f)

    def test_top_level_must_be_mapping(self, tmp_path):
        f = tmp_path / "list.yaml"
        f.write_text("- a\n- b\n")
        with pytest.raises(DocumentError, match="mapping"):
            load_document(f)
