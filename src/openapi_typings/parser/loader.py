"""Load an OpenAPI document from disk.

The document is expected to be bundled already: any remaining ``$ref`` is
a local pointer such as ``#/components/schemas/Pet``.
"""

import json
from pathlib import Path

import yaml


class DocumentError(ValueError):
    """The input is not a usable OpenAPI document."""


def detect_format(file_path: Path) -> str:
    """Detect whether a document is JSON or YAML.

    Returns: 'json' or 'yaml'.
    """
    if file_path.suffix.lower() in (".yaml", ".yml"):
        return "yaml"
    if file_path.suffix.lower() == ".json":
        return "json"

    text = file_path.read_text(encoding="utf-8")
    if text.lstrip().startswith(("{", "[")):
        return "json"
    return "yaml"


def load_document(file_path: Path, fmt: str = "auto") -> dict:
    """Read and parse an OpenAPI document into a dict."""
    if not file_path.is_file():
        raise DocumentError(f"No such file: {file_path}")

    if fmt == "auto":
        fmt = detect_format(file_path)

    text = file_path.read_text(encoding="utf-8")
    try:
        if fmt == "json":
            doc = json.loads(text)
        else:
            doc = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DocumentError(f"Could not parse {file_path} as {fmt}: {e}") from e

    if not isinstance(doc, dict):
        raise DocumentError(f"{file_path} does not contain a mapping at the top level")
    return doc
