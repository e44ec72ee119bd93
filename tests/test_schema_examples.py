"""Ensure each JSON schema is exercised by its published example."""

import json
from pathlib import Path

import pytest

from finding_registry.api import schema_registry


@pytest.fixture
def fresh_cache():
    schema_registry.clear_cache()
    yield
    schema_registry.clear_cache()


def test_every_example_has_a_registered_contract() -> None:
    assert set(schema_registry.EXAMPLE_SCHEMAS) == set(schema_registry.EXAMPLE_FILES)
    assert set(schema_registry.EXAMPLE_SCHEMAS.values()) == set(
        schema_registry.SCHEMA_FILES
    )


def test_all_examples_validate_against_their_schemas() -> None:
    """Every example file should match its declared schema contract."""

    for example_name, schema_name in schema_registry.EXAMPLE_SCHEMAS.items():
        example = schema_registry.get_example(example_name)
        schema_registry.validate(schema_name, example)


def test_stale_example_is_rejected_on_load(
    fresh_cache: None, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    filename = schema_registry.EXAMPLE_FILES["finding_update_example_min"]
    (tmp_path / filename).write_text(
        json.dumps({"id": "abc", "organizationId": "seven"}), encoding="utf-8"
    )
    monkeypatch.setattr(schema_registry, "EXAMPLE_DIR", tmp_path)

    with pytest.raises(schema_registry.SchemaValidationError):
        schema_registry.get_example("finding_update_example_min")

    assert "finding_update_example_min" not in schema_registry._EXAMPLES
