"""Storage for findings, upserted per organization and locator."""

from __future__ import annotations

import dataclasses
import json
import threading
import uuid
from pathlib import Path
from typing import Any, Mapping, Protocol

from ..domain.models import Finding
from .registry_config import RegistryConfig


class FindingPersistence(Protocol):
    """Storage contract the finding normalizer relies on."""

    def update_finding(self, finding: Finding, organization_id: int) -> Finding: ...

    def get_finding(
        self, identifier: str, organization_id: int
    ) -> Finding | None: ...

    def get_findings(self, organization_id: int) -> list[Finding]: ...


def _upsert_key(record: Mapping[str, Any]) -> tuple[object, ...]:
    distinguisher = record["reportDistinguisher"]
    locator = record["reportLocator"]
    return (
        record["organizationId"],
        distinguisher["type"],
        distinguisher["value"],
        locator["type"],
        locator["value"],
        locator["distinguisher"],
    )


def _upsert_record(
    records: list[dict[str, Any]], finding: Finding, organization_id: int
) -> dict[str, Any]:
    """Insert or replace the record matching the finding's upsert key.

    An existing record keeps its identifier; new records get a fresh one.
    """

    record = dataclasses.replace(finding, organization_id=organization_id).to_mapping()
    key = _upsert_key(record)
    for index, existing in enumerate(records):
        if _upsert_key(existing) == key:
            record["identifier"] = existing["identifier"]
            records[index] = record
            return record
    record["identifier"] = uuid.uuid4().hex
    records.append(record)
    return record


def _find_record(
    records: list[dict[str, Any]], identifier: str, organization_id: int
) -> dict[str, Any] | None:
    for record in records:
        if (
            record.get("identifier") == identifier
            and record.get("organizationId") == organization_id
        ):
            return record
    return None


class InMemoryFindingStore:
    """Process-local store used by tests and dry runs."""

    def __init__(self) -> None:
        self._records: list[dict[str, Any]] = []
        self._lock = threading.Lock()

    def update_finding(self, finding: Finding, organization_id: int) -> Finding:
        with self._lock:
            record = _upsert_record(self._records, finding, organization_id)
            return Finding.from_mapping(record)

    def get_finding(self, identifier: str, organization_id: int) -> Finding | None:
        with self._lock:
            record = _find_record(self._records, identifier, organization_id)
            return None if record is None else Finding.from_mapping(record)

    def get_findings(self, organization_id: int) -> list[Finding]:
        with self._lock:
            return [
                Finding.from_mapping(record)
                for record in self._records
                if record.get("organizationId") == organization_id
            ]


class JsonFileFindingStore:
    """Store keeping every finding in a single JSON document on disk."""

    def __init__(self, record_file: Path) -> None:
        self.record_file = record_file
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: RegistryConfig) -> "JsonFileFindingStore":
        return cls(config.store_file)

    def _load_records(self) -> list[dict[str, Any]]:
        if not self.record_file.exists():
            return []
        return json.loads(self.record_file.read_text(encoding="utf-8"))

    def _save_records(self, records: list[dict[str, Any]]) -> None:
        self.record_file.parent.mkdir(parents=True, exist_ok=True)
        tmp_file = self.record_file.with_name(self.record_file.name + ".tmp")
        tmp_file.write_text(
            json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8"
        )
        tmp_file.replace(self.record_file)

    def update_finding(self, finding: Finding, organization_id: int) -> Finding:
        with self._lock:
            records = self._load_records()
            record = _upsert_record(records, finding, organization_id)
            self._save_records(records)
            return Finding.from_mapping(record)

    def get_finding(self, identifier: str, organization_id: int) -> Finding | None:
        with self._lock:
            record = _find_record(self._load_records(), identifier, organization_id)
        return None if record is None else Finding.from_mapping(record)

    def get_findings(self, organization_id: int) -> list[Finding]:
        with self._lock:
            records = self._load_records()
        return [
            Finding.from_mapping(record)
            for record in records
            if record.get("organizationId") == organization_id
        ]

    def clear(self) -> None:
        """Remove any persisted findings (useful for tests)."""

        with self._lock:
            if self.record_file.exists():
                self.record_file.unlink()
