"""Syntactic and semantic checks for report locators.

Every check works from the value's syntax alone: hostnames are never resolved
and endpoints are never connected to. The per-type rules are:

1. ``IPv4`` values must be strict dotted quads. Loopback addresses are always
   refused; RFC1918 addresses must carry a distinguisher other than
   :data:`~finding_registry.domain.models.GLOBAL_DISTINGUISHER`, otherwise
   unrelated private networks would collide.
2. ``HTTP`` values must parse as URLs. Host checks happen when the URL is
   expanded into its implied locators.
3. ``TCP``/``UDP`` values must be ``host:port`` endpoints whose port, if
   present, is decimal.
4. ``Hostname`` values may be anything except the literal ``localhost``.
"""

from __future__ import annotations

import ipaddress
import re
from typing import Callable
from urllib.parse import SplitResult, urlsplit

from ..domain.errors import InvalidInputError, SemanticConflictError
from ..domain.models import GLOBAL_DISTINGUISHER, ReportLocator, ReportLocatorType

PRIVATE_IPV4_NETWORKS = (
    ipaddress.IPv4Network("10.0.0.0/8"),
    ipaddress.IPv4Network("172.16.0.0/12"),
    ipaddress.IPv4Network("192.168.0.0/16"),
)
"""RFC1918 address space."""

RESERVED_HOSTNAME = "localhost"
"""Self-reference that can never be reported as a target."""

_PORT_PATTERN = re.compile(r"^[0-9]{1,5}$")
_MAX_PORT = 65535
_URL_CONTROL = re.compile(r"[\x00-\x1f\x7f]")


def parse_ipv4(value: str) -> ipaddress.IPv4Address | None:
    """Return the parsed address, or None when ``value`` is not a dotted quad."""

    try:
        return ipaddress.IPv4Address(value)
    except ValueError:
        return None


def is_private_ipv4(address: ipaddress.IPv4Address) -> bool:
    return any(address in network for network in PRIVATE_IPV4_NETWORKS)


def split_host_port(value: str) -> tuple[str, str]:
    """Split a ``host:port`` endpoint.

    A bracketed host is unwrapped when it holds an IPv4 address. The port may
    be empty. Raises :class:`ValueError` when the separator is missing, the
    port is not a decimal port number, the host is empty, or the host is an
    IPv6 literal.
    """

    host, sep, port = value.rpartition(":")
    if not sep:
        raise ValueError("missing port in address")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
        if parse_ipv4(host) is None:
            raise ValueError("only IPv4 hosts may be bracketed")
    if not host:
        raise ValueError("missing host in address")
    if ":" in host or "[" in host or "]" in host:
        raise ValueError("too many colons in address")
    if port and (not _PORT_PATTERN.match(port) or int(port) > _MAX_PORT):
        raise ValueError("invalid port")
    return host, port


def split_url(value: str) -> SplitResult:
    """Parse ``value`` as a URL, including its port component.

    Whitespace is allowed in the path, query and fragment only. Raises
    :class:`ValueError` for malformed URLs.
    """

    if _URL_CONTROL.search(value) or value != value.strip():
        raise ValueError("URL contains control characters or surrounding spaces")
    parts = urlsplit(value)
    if any(char.isspace() for char in parts.scheme + parts.netloc):
        raise ValueError("URL scheme or host contains whitespace")
    parts.port  # raises ValueError for a malformed or out-of-range port
    return parts


def validate_locator(locator: ReportLocator) -> None:
    """Raise when ``locator`` is not legal for its declared type.

    Raises:
        InvalidInputError: a field is missing, the type is unknown, or the
            value does not parse for its type.
        SemanticConflictError: the value parses but names a disallowed target.
    """

    if not locator.type:
        raise InvalidInputError("missing Type")
    if not locator.value:
        raise InvalidInputError("missing Value")
    if not locator.distinguisher:
        raise InvalidInputError("missing Distinguisher")

    try:
        locator_type = ReportLocatorType(locator.type)
    except ValueError:
        raise InvalidInputError(
            f"invalid ReportLocatorType: {locator.type}"
        ) from None
    _TYPE_CHECKS[locator_type](locator)


def _check_ipv4(locator: ReportLocator) -> None:
    address = parse_ipv4(locator.value)
    if address is None:
        raise InvalidInputError(f"invalid IPv4 address: {locator.value}")
    if address.is_loopback:
        raise SemanticConflictError("loopback IPv4 address not allowed")
    if is_private_ipv4(address):
        if not locator.distinguisher:
            raise SemanticConflictError(
                "private IPv4 address must have a distinguisher"
            )
        if locator.distinguisher == GLOBAL_DISTINGUISHER:
            raise SemanticConflictError(
                "private IPv4 address cannot have a global distinguisher"
            )


def _check_http(locator: ReportLocator) -> None:
    try:
        split_url(locator.value)
    except ValueError:
        raise InvalidInputError(f"invalid URL: {locator.value}") from None


def _check_tcp(locator: ReportLocator) -> None:
    try:
        split_host_port(locator.value)
    except ValueError:
        raise InvalidInputError(f"invalid TCP address: {locator.value}") from None


def _check_udp(locator: ReportLocator) -> None:
    try:
        split_host_port(locator.value)
    except ValueError:
        raise InvalidInputError(f"invalid UDP address: {locator.value}") from None


def _check_hostname(locator: ReportLocator) -> None:
    if locator.value == RESERVED_HOSTNAME:
        raise SemanticConflictError(f"hostname may not be '{locator.value}'")


_TYPE_CHECKS: dict[ReportLocatorType, Callable[[ReportLocator], None]] = {
    ReportLocatorType.IPV4: _check_ipv4,
    ReportLocatorType.HTTP: _check_http,
    ReportLocatorType.TCP: _check_tcp,
    ReportLocatorType.UDP: _check_udp,
    ReportLocatorType.HOSTNAME: _check_hostname,
}
