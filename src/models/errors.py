"""Error taxonomy and result values for overlay operations (pure Python)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    RESOURCE_UNAVAILABLE = "resource_unavailable"
    RENDER_ISOLATION_FAILURE = "render_isolation_failure"


class OverlayError(Exception):
    """Base class for errors raised inside the overlay core."""

    kind: ErrorKind = ErrorKind.INVALID_INPUT


class NotFoundError(OverlayError):
    """Unknown element, template or animation id."""

    kind = ErrorKind.NOT_FOUND


class InvalidInputError(OverlayError):
    """Malformed parameters, rejected before any state is mutated."""

    kind = ErrorKind.INVALID_INPUT


class ResourceUnavailableError(OverlayError):
    """Font or metrics backend not ready."""

    kind = ErrorKind.RESOURCE_UNAVAILABLE


@dataclass(slots=True)
class OverlayResult:
    """Outcome of a public overlay operation.

    Failures are returned, never raised across the public boundary.
    """

    value: Any = None
    error: ErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, value: Any = None) -> OverlayResult:
        return cls(value=value)

    @classmethod
    def failure(cls, exc: OverlayError) -> OverlayResult:
        return cls(error=exc.kind, message=str(exc))
