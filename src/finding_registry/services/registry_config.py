"""Environment-driven settings for the finding registry host."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_STATE_DIR = PROJECT_ROOT / "state"

DEFAULT_DATABASE_NAME = "riskRegistry"
"""Name of the JSON document holding stored findings."""

DEFAULT_FINDING_UPDATES = "findingUpdates"
"""Name of the JSONL log receiving finding update notifications."""

DEFAULT_MAX_EVENT_LOG_BYTES = 1_000_000

STATE_DIR_ENV = "FINDING_REGISTRY_STATE_DIR"
DATABASE_NAME_ENV = "FINDING_REGISTRY_DATABASE_NAME"
FINDING_UPDATES_ENV = "FINDING_REGISTRY_FINDING_UPDATES"
EVENT_LOG_MAX_BYTES_ENV = "FINDING_REGISTRY_EVENT_LOG_MAX_BYTES"


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if not raw or not raw.strip():
        return default
    return raw.strip()


def _parse_max_bytes(raw: str | None) -> int | None:
    """Return the rotation threshold; None disables rotation."""

    if not raw or not raw.strip():
        return DEFAULT_MAX_EVENT_LOG_BYTES
    try:
        parsed = int(raw)
    except ValueError:
        return DEFAULT_MAX_EVENT_LOG_BYTES
    if parsed <= 0:
        return None
    return parsed


@dataclass(frozen=True)
class RegistryConfig:
    """Locations of the file-backed collaborators."""

    state_dir: Path
    database_name: str
    finding_updates: str
    event_log_max_bytes: int | None

    @property
    def store_file(self) -> Path:
        return self.state_dir / f"{self.database_name}.json"

    @property
    def event_log_file(self) -> Path:
        return self.state_dir / f"{self.finding_updates}.jsonl"

    @classmethod
    def from_env(cls) -> "RegistryConfig":
        """Create a config using the current environment."""

        return cls(
            state_dir=Path(_env_str(STATE_DIR_ENV, str(DEFAULT_STATE_DIR))),
            database_name=_env_str(DATABASE_NAME_ENV, DEFAULT_DATABASE_NAME),
            finding_updates=_env_str(FINDING_UPDATES_ENV, DEFAULT_FINDING_UPDATES),
            event_log_max_bytes=_parse_max_bytes(os.getenv(EVENT_LOG_MAX_BYTES_ENV)),
        )
