"""Derive the ordered closure of locators implied by a report locator."""

from __future__ import annotations

from ..domain.models import ReportLocator, ReportLocatorType
from .locator_validator import parse_ipv4, split_host_port, split_url, validate_locator

DEFAULT_SCHEME_PORTS = {"http": "80", "https": "443"}
"""Ports assumed when a URL does not name one explicitly."""


def implied_locators(locator: ReportLocator) -> tuple[ReportLocator, ...]:
    """Return ``locator`` followed by every more fundamental locator it implies.

    An ``HTTP`` locator implies the ``TCP`` endpoint it connects to, and a
    ``TCP``/``UDP`` endpoint implies its ``IPv4`` or ``Hostname`` host. Each
    derived locator keeps the distinguisher of the input and is validated in
    turn, so the whole call fails if any level is disallowed.

    Raises:
        InvalidInputError, SemanticConflictError: as raised by
            :func:`~finding_registry.services.locator_validator.validate_locator`
            for the input or any derived locator.
    """

    validate_locator(locator)
    derived = _derive(locator)
    if derived is None:
        return (locator,)
    return (locator, *implied_locators(derived))


def _derive(locator: ReportLocator) -> ReportLocator | None:
    if locator.type == ReportLocatorType.HTTP.value:
        return _endpoint_from_url(locator)
    if locator.type in (ReportLocatorType.TCP.value, ReportLocatorType.UDP.value):
        return _host_from_endpoint(locator)
    return None


def _endpoint_from_url(locator: ReportLocator) -> ReportLocator:
    try:
        parts = split_url(locator.value)
        port = parts.port
    except ValueError as exc:
        raise RuntimeError(
            f"validated URL could not be parsed again: {locator.value}"
        ) from exc

    host = parts.netloc.rpartition("@")[2]
    if port is None:
        default_port = DEFAULT_SCHEME_PORTS.get(parts.scheme)
        if default_port is not None:
            host = f"{host}:{default_port}"
    return ReportLocator(
        type=ReportLocatorType.TCP,
        value=host,
        distinguisher=locator.distinguisher,
    )


def _host_from_endpoint(locator: ReportLocator) -> ReportLocator:
    try:
        host, _port = split_host_port(locator.value)
    except ValueError as exc:
        raise RuntimeError(
            f"validated endpoint could not be split again: {locator.value}"
        ) from exc

    locator_type = ReportLocatorType.HOSTNAME
    if parse_ipv4(host) is not None:
        locator_type = ReportLocatorType.IPV4
    return ReportLocator(
        type=locator_type,
        value=host,
        distinguisher=locator.distinguisher,
    )
