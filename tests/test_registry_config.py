"""Environment handling for the registry configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from finding_registry.services.registry_config import (
    DEFAULT_MAX_EVENT_LOG_BYTES,
    DEFAULT_STATE_DIR,
    RegistryConfig,
)

_ENV_NAMES = (
    "FINDING_REGISTRY_STATE_DIR",
    "FINDING_REGISTRY_DATABASE_NAME",
    "FINDING_REGISTRY_FINDING_UPDATES",
    "FINDING_REGISTRY_EVENT_LOG_MAX_BYTES",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = RegistryConfig.from_env()

    assert config.state_dir == DEFAULT_STATE_DIR
    assert config.store_file == DEFAULT_STATE_DIR / "riskRegistry.json"
    assert config.event_log_file == DEFAULT_STATE_DIR / "findingUpdates.jsonl"
    assert config.event_log_max_bytes == DEFAULT_MAX_EVENT_LOG_BYTES


def test_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("FINDING_REGISTRY_STATE_DIR", str(tmp_path))
    monkeypatch.setenv("FINDING_REGISTRY_DATABASE_NAME", "orgFindings")
    monkeypatch.setenv("FINDING_REGISTRY_FINDING_UPDATES", "updates")
    monkeypatch.setenv("FINDING_REGISTRY_EVENT_LOG_MAX_BYTES", "2048")

    config = RegistryConfig.from_env()

    assert config.store_file == tmp_path / "orgFindings.json"
    assert config.event_log_file == tmp_path / "updates.jsonl"
    assert config.event_log_max_bytes == 2048


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("", DEFAULT_MAX_EVENT_LOG_BYTES),
        ("lots", DEFAULT_MAX_EVENT_LOG_BYTES),
        ("0", None),
        ("-5", None),
    ],
)
def test_event_log_max_bytes_parsing(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: int | None
) -> None:
    monkeypatch.setenv("FINDING_REGISTRY_EVENT_LOG_MAX_BYTES", raw)

    assert RegistryConfig.from_env().event_log_max_bytes == expected
