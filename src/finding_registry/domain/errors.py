"""Error taxonomy shared by the locator engine and its host."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Enumerate the caller-visible error classes."""

    INVALID_INPUT = "invalid_input"
    SEMANTIC_CONFLICT = "semantic_conflict"
    INTERNAL = "internal"


class RegistryError(Exception):
    """Base class for errors raised while handling findings."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InvalidInputError(RegistryError, ValueError):
    """Raised when a value cannot be parsed or a required field is missing."""

    kind = ErrorKind.INVALID_INPUT


class SemanticConflictError(RegistryError, ValueError):
    """Raised when a well-formed value violates a domain rule."""

    kind = ErrorKind.SEMANTIC_CONFLICT


class InternalError(RegistryError):
    """Raised when a storage or notification collaborator fails."""

    kind = ErrorKind.INTERNAL
