"""Utility to surface shared JSON schemas and examples."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from jsonschema import Draft7Validator, ValidationError

PROJECT_ROOT = Path(__file__).resolve().parents[3]
SCHEMA_DIR = PROJECT_ROOT / "schemas"
EXAMPLE_DIR = SCHEMA_DIR / "examples"

SchemaValidationError = ValidationError
"""Alias for jsonschema.ValidationError.
Keeps callers unaware of the implementation.
"""

SCHEMA_FILES = {
    "finding_post_input_v0.1": "finding_post_input_schema_v0.1.json",
    "finding_response_v0.1": "finding_response_schema_v0.1.json",
    "findings_list_response_v0.1": "findings_list_response_schema_v0.1.json",
    "locator_implied_input_v0.1": "locator_implied_input_schema_v0.1.json",
    "locator_implied_response_v0.1": "locator_implied_response_schema_v0.1.json",
    "finding_update_v0.1": "finding_update_schema_v0.1.json",
}

EXAMPLE_FILES = {
    "finding_post_input_example_min": "finding_post_input_example_min.json",
    "finding_response_example_min": "finding_response_example_min.json",
    "findings_list_response_example_min": "findings_list_response_example_min.json",
    "locator_implied_input_example_min": "locator_implied_input_example_min.json",
    "locator_implied_response_example_min": (
        "locator_implied_response_example_min.json"
    ),
    "finding_update_example_min": "finding_update_example_min.json",
}

EXAMPLE_SCHEMAS = {
    "finding_post_input_example_min": "finding_post_input_v0.1",
    "finding_response_example_min": "finding_response_v0.1",
    "findings_list_response_example_min": "findings_list_response_v0.1",
    "locator_implied_input_example_min": "locator_implied_input_v0.1",
    "locator_implied_response_example_min": "locator_implied_response_v0.1",
    "finding_update_example_min": "finding_update_v0.1",
}
"""Contract each published example must satisfy when it is loaded."""

_SCHEMAS: dict[str, Mapping[str, Any]] = {}
_EXAMPLES: dict[str, Mapping[str, Any]] = {}


def _load_json_file(path: Path) -> Mapping[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _schema_path(name: str) -> Path:
    return SCHEMA_DIR / SCHEMA_FILES[name]


def _example_path(name: str) -> Path:
    return EXAMPLE_DIR / EXAMPLE_FILES[name]


def get_schema(name: str) -> Mapping[str, Any]:
    """Return the JSON schema with the given registry name."""

    if name not in _SCHEMAS:
        _SCHEMAS[name] = _load_json_file(_schema_path(name))
    return _SCHEMAS[name]


def get_example(name: str) -> Mapping[str, Any]:
    """Return a representative example payload by name.

    The example is checked against its contract in :data:`EXAMPLE_SCHEMAS`
    before it is cached, so a stale example raises
    :data:`SchemaValidationError` instead of leaking into callers.
    """

    if name not in _EXAMPLES:
        example = _load_json_file(_example_path(name))
        validate(EXAMPLE_SCHEMAS[name], example)
        _EXAMPLES[name] = example
    return _EXAMPLES[name]


def clear_cache() -> None:
    """Forget loaded schemas and examples (tests only)."""

    _SCHEMAS.clear()
    _EXAMPLES.clear()


def validate(name: str, instance: Any) -> None:
    """Validate an instance against a named schema."""

    schema = get_schema(name)
    Draft7Validator(schema).validate(instance)
