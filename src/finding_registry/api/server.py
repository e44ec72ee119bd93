"""Resource registry exposing the finding registry to its host."""

from __future__ import annotations

import dataclasses
import logging
import sys
from typing import Any, Mapping

from ..domain.errors import InternalError, RegistryError
from ..domain.models import GLOBAL_DISTINGUISHER, Finding, ReportLocator
from ..services.finding_events import EventLogFindingUpdateSink
from ..services.finding_normalizer import FindingNormalizer
from ..services.finding_store import JsonFileFindingStore
from ..services.locator_implication import implied_locators
from ..services.registry_config import RegistryConfig
from . import reason_codes, schema_registry
from .schema_registry import SchemaValidationError

_LOG = logging.getLogger(__name__)

POST_INPUT_SCHEMA = "finding_post_input_v0.1"
FINDING_RESPONSE_SCHEMA = "finding_response_v0.1"
LIST_RESPONSE_SCHEMA = "findings_list_response_v0.1"
IMPLIED_INPUT_SCHEMA = "locator_implied_input_v0.1"
IMPLIED_RESPONSE_SCHEMA = "locator_implied_response_v0.1"

INTERNAL_DETAIL = "Internal Server Error"

_NORMALIZER: FindingNormalizer | None = None


def set_finding_normalizer(normalizer: FindingNormalizer | None) -> None:
    """Override the normalizer used by resources (None rebuilds from env)."""

    global _NORMALIZER
    _NORMALIZER = normalizer


def get_finding_normalizer() -> FindingNormalizer:
    """Return the active normalizer, wiring the file-backed collaborators."""

    global _NORMALIZER
    if _NORMALIZER is None:
        config = RegistryConfig.from_env()
        _NORMALIZER = FindingNormalizer(
            JsonFileFindingStore.from_config(config),
            EventLogFindingUpdateSink.from_config(config),
            default_distinguisher=GLOBAL_DISTINGUISHER,
        )
    return _NORMALIZER


def _error(reason: str, detail: str) -> dict[str, Any]:
    """Return an error payload with a stable reason code and status class."""

    return {
        "status": "error",
        "reason": reason,
        "status_code": reason_codes.STATUS_CODES[reason],
        "detail": detail,
    }


def _error_from(exc: RegistryError) -> dict[str, Any]:
    if isinstance(exc, InternalError):
        return _error(reason_codes.INTERNAL, INTERNAL_DETAIL)
    return _error(exc.kind.value, exc.detail)


def _organization_id(request: Mapping[str, Any] | None) -> int | None:
    if not request:
        return None
    value = request.get("organization_id")
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _validated_response(schema_name: str, response: dict[str, Any]) -> dict[str, Any]:
    try:
        schema_registry.validate(schema_name, response)
    except SchemaValidationError:
        _LOG.error("Response for %s violated its schema", schema_name)
        return _error(
            reason_codes.RESPONSE_VALIDATION_FAILED,
            "Service output did not meet the public contract.",
        )
    return response


class HealthResource:
    """Simple wellbeing resource."""

    __slots__ = ()

    def get_status(self) -> Mapping[str, str]:
        return {"status": "ok", "detail": "Finding registry ready"}

    def __call__(self) -> Mapping[str, str]:
        return self.get_status()


class FindingPostResource:
    """Entrypoint that validates, stores and announces one finding."""

    __slots__ = ()

    def __call__(self, request: Mapping[str, Any]) -> Mapping[str, Any]:
        return self.post(request)

    def post(self, request: Mapping[str, Any]) -> Mapping[str, Any]:
        try:
            schema_registry.validate(POST_INPUT_SCHEMA, request)
        except SchemaValidationError:
            return _error(reason_codes.INVALID_INPUT, "Request failed validation.")

        finding = Finding.from_mapping(request["finding"])
        try:
            stored = get_finding_normalizer().post_finding(
                finding, request["organization_id"]
            )
        except RegistryError as exc:
            return _error_from(exc)

        response = {"operation": "finding_post", "finding": stored.to_mapping()}
        return _validated_response(FINDING_RESPONSE_SCHEMA, response)


class FindingsListResource:
    """Resource listing the stored findings of one organization."""

    __slots__ = ()

    def __call__(self, request: Mapping[str, Any] | None = None) -> Mapping[str, Any]:
        organization_id = _organization_id(request)
        if organization_id is None:
            return _error(
                reason_codes.INVALID_INPUT, "An integer organization_id is required."
            )

        try:
            findings = get_finding_normalizer().read_findings(organization_id)
        except RegistryError as exc:
            return _error_from(exc)

        response = {
            "operation": "findings_list",
            "count": len(findings),
            "findings": [finding.to_mapping() for finding in findings],
        }
        return _validated_response(LIST_RESPONSE_SCHEMA, response)


class FindingGetResource:
    """Resource returning a single stored finding."""

    __slots__ = ()

    def __call__(self, request: Mapping[str, Any]) -> Mapping[str, Any]:
        organization_id = _organization_id(request)
        if organization_id is None:
            return _error(
                reason_codes.INVALID_INPUT, "An integer organization_id is required."
            )
        identifier = request.get("identifier")
        if not identifier or not isinstance(identifier, str):
            return _error(reason_codes.INVALID_INPUT, "An identifier is required.")

        try:
            finding = get_finding_normalizer().read_finding(identifier, organization_id)
        except RegistryError as exc:
            return _error_from(exc)
        if finding is None:
            return _error(
                reason_codes.RECORD_NOT_FOUND,
                "The requested finding could not be located.",
            )

        response = {"operation": "finding_get", "finding": finding.to_mapping()}
        return _validated_response(FINDING_RESPONSE_SCHEMA, response)


class LocatorImpliedResource:
    """Resource returning the implied locator closure without storing anything.

    An omitted or empty distinguisher defaults to the global one, as for
    submissions.
    """

    __slots__ = ()

    def __call__(self, request: Mapping[str, Any]) -> Mapping[str, Any]:
        try:
            schema_registry.validate(IMPLIED_INPUT_SCHEMA, request)
        except SchemaValidationError:
            return _error(reason_codes.INVALID_INPUT, "Request failed validation.")

        locator = ReportLocator.from_mapping(request["locator"])
        if not locator.distinguisher:
            locator = dataclasses.replace(locator, distinguisher=GLOBAL_DISTINGUISHER)
        try:
            closure = implied_locators(locator)
        except RegistryError as exc:
            return _error_from(exc)

        response = {
            "operation": "locator_implied",
            "locators": [item.to_mapping() for item in closure],
        }
        return _validated_response(IMPLIED_RESPONSE_SCHEMA, response)


RESOURCE_REGISTRY = {
    "health": HealthResource(),
    "public://findings": FindingPostResource(),
    "public://findings/list": FindingsListResource(),
    "public://findings/{identifier}": FindingGetResource(),
    "public://locators/implied": LocatorImpliedResource(),
}
"""Resource registry for the finding registry host."""


def create_server() -> Mapping[str, Mapping[str, Any]]:
    """Return the configured resources for this host."""

    return {"resources": RESOURCE_REGISTRY}


def main() -> None:
    """Log available resources without launching networking."""

    sys.stdout.write("Finding registry initialized with resources:\n\n")
    for name in RESOURCE_REGISTRY:
        sys.stdout.write(f"- {name}\n")
    sys.stdout.write(f"\nhealth: {RESOURCE_REGISTRY['health']()}\n")


if __name__ == "__main__":
    main()
