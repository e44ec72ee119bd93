"""Core entities without I/O for the finding registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

GLOBAL_DISTINGUISHER = "global"
"""Default distinguisher, meaning the locator has no locality."""


class ReportLocatorType(str, Enum):
    """Closed set of locator interpretations."""

    IPV4 = "IPv4"
    HOSTNAME = "Hostname"
    HTTP = "HTTP"
    TCP = "TCP"
    UDP = "UDP"


@dataclass(frozen=True)
class ReportLocator:
    """A value, under one interpretation, scoped by a distinguisher.

    ``type`` is stored as its plain string value so unknown types coming from
    callers can still be represented (and rejected by the validator).
    """

    type: str
    value: str
    distinguisher: str

    def __post_init__(self) -> None:
        if isinstance(self.type, ReportLocatorType):
            object.__setattr__(self, "type", self.type.value)

    def to_mapping(self) -> dict[str, str]:
        return {
            "type": self.type,
            "value": self.value,
            "distinguisher": self.distinguisher,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ReportLocator":
        data = data or {}
        return cls(
            type=data.get("type") or "",
            value=data.get("value") or "",
            distinguisher=data.get("distinguisher") or "",
        )


@dataclass(frozen=True)
class ReportDistinguisher:
    """Opaque tag naming the reporting context (scanner, segment, ...)."""

    type: str
    value: str

    def to_mapping(self) -> dict[str, str]:
        return {"type": self.type, "value": self.value}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ReportDistinguisher":
        data = data or {}
        return cls(type=data.get("type") or "", value=data.get("value") or "")


@dataclass(frozen=True)
class Finding:
    """A recorded observation for one organization and one locator closure."""

    name: str
    report_distinguisher: ReportDistinguisher
    report_locator: ReportLocator
    identifier: str = ""
    organization_id: int = 0
    implied_report_locators: tuple[ReportLocator, ...] = field(default=())

    def to_mapping(self) -> dict[str, object]:
        return {
            "identifier": self.identifier,
            "name": self.name,
            "organizationId": self.organization_id,
            "reportDistinguisher": self.report_distinguisher.to_mapping(),
            "reportLocator": self.report_locator.to_mapping(),
            "impliedReportLocators": [
                locator.to_mapping() for locator in self.implied_report_locators
            ],
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Finding":
        return cls(
            identifier=data.get("identifier") or "",
            name=data.get("name") or "",
            organization_id=int(data.get("organizationId") or 0),
            report_distinguisher=ReportDistinguisher.from_mapping(
                data.get("reportDistinguisher")
            ),
            report_locator=ReportLocator.from_mapping(data.get("reportLocator")),
            implied_report_locators=tuple(
                ReportLocator.from_mapping(item)
                for item in data.get("impliedReportLocators") or ()
            ),
        )


@dataclass(frozen=True)
class FindingUpdate:
    """Notification emitted after a finding has been stored."""

    id: str
    organization_id: int
    report_locator: ReportLocator

    def to_mapping(self) -> dict[str, object]:
        return {
            "id": self.id,
            "organizationId": self.organization_id,
            "reportLocator": self.report_locator.to_mapping(),
        }

    @classmethod
    def from_finding(cls, finding: Finding) -> "FindingUpdate":
        return cls(
            id=finding.identifier,
            organization_id=finding.organization_id,
            report_locator=finding.report_locator,
        )
