"""Reason codes used for PUBLIC error responses."""

from __future__ import annotations

from ..domain.errors import ErrorKind

INVALID_INPUT = ErrorKind.INVALID_INPUT.value
"""Input failed schema validation, is missing a field, or does not parse."""

SEMANTIC_CONFLICT = ErrorKind.SEMANTIC_CONFLICT.value
"""Input parses but names a target the registry refuses to record."""

INTERNAL = ErrorKind.INTERNAL.value
"""A storage or notification collaborator failed; details are only logged."""

RECORD_NOT_FOUND = "record_not_found"
"""The requested finding could not be located for the organization."""

RESPONSE_VALIDATION_FAILED = "response_validation_failed"
"""The service produced output that violated the public response schema."""

STATUS_CODES = {
    INVALID_INPUT: 400,
    RECORD_NOT_FOUND: 404,
    SEMANTIC_CONFLICT: 422,
    INTERNAL: 500,
    RESPONSE_VALIDATION_FAILED: 500,
}
"""HTTP-style status class reported alongside each reason code."""
