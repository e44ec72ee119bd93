"""Sinks receiving finding update notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import MutableSequence, Protocol

from ..domain.models import FindingUpdate
from .event_log import append_event
from .registry_config import RegistryConfig


class FindingUpdateSink(Protocol):
    """Protocol describing a best-effort, at-most-once notification sink."""

    def emit(self, update: FindingUpdate) -> None:  # pragma: no cover - trivial
        ...


@dataclass
class InMemoryFindingUpdateSink:
    """Simple sink used for tests."""

    updates: MutableSequence[FindingUpdate] = field(default_factory=list)

    def emit(self, update: FindingUpdate) -> None:
        self.updates.append(update)

    def clear(self) -> None:
        del self.updates[:]


class EventLogFindingUpdateSink:
    """Sink that appends each update to the JSONL finding update log."""

    __slots__ = ("log_file", "max_bytes")

    def __init__(self, log_file: Path, max_bytes: int | None = None) -> None:
        self.log_file = log_file
        self.max_bytes = max_bytes

    @classmethod
    def from_config(cls, config: RegistryConfig) -> "EventLogFindingUpdateSink":
        return cls(config.event_log_file, config.event_log_max_bytes)

    def emit(self, update: FindingUpdate) -> None:
        written = append_event(
            update.to_mapping(), log_file=self.log_file, max_bytes=self.max_bytes
        )
        if not written:
            raise OSError(f"finding update {update.id} was not written")
