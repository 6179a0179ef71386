"""
Handler Result — the closed outcome of one operation invocation.

Every invocation of an operation adapter produces exactly one of four
variants. The value is created once, never mutated, and consumed exactly
once by :func:`handlerkit.operations.dispatch.dispatch_result`.

Manifesto:
    - **Closed set:** Four variants, enumerated by ``HandlerResultKind``
    - **Errors as values:** Failures stop being exceptions at the adapter
    - **Nothing leaks by accident:** ``InternalFailure.to_dict()`` names the
      cause's type, never its message

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                      HandlerResult                           │
        │                      (Type Alias)                            │
        ├──────────────┬──────────────────┬─────────────┬─────────────┤
        │  Success     │ RecoverableFailure│ Validation  │ Internal    │
        │  (output)    │ (error, table)    │ Failure     │ Failure     │
        │              │                   │ (reason)    │ (error)     │
        └──────────────┴──────────────────┴─────────────┴─────────────┘

Examples:
    >>> Success(42).kind
    <HandlerResultKind.SUCCESS: 'SUCCESS'>
    >>> ValidationFailure("missing field x").reason
    'missing field x'

Tags:
    result-pattern, tagged-union, handler-result, handlerkit

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from handlerkit.core.errors import ReturnableError
from handlerkit.operations.allowed_errors import AllowedErrors

T = TypeVar("T")


class HandlerResultKind(str, Enum):
    """Discriminator for the four Handler Result variants."""

    SUCCESS = "SUCCESS"
    RECOVERABLE_ERROR = "RECOVERABLE_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """The business function returned normally.

    ``output`` is the returned value itself, not a copy. ``None`` marks a
    no-output operation.
    """

    output: T

    @property
    def kind(self) -> HandlerResultKind:
        return HandlerResultKind.SUCCESS

    @property
    def has_output(self) -> bool:
        return self.output is not None

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "has_output": self.has_output}


@dataclass(frozen=True, slots=True)
class RecoverableFailure:
    """The business function raised a returnable error.

    Carries the operation's allowed-errors table so the dispatcher can
    resolve the numeric code, or refuse to expose the error.
    """

    error: ReturnableError
    allowed_errors: AllowedErrors

    @property
    def kind(self) -> HandlerResultKind:
        return HandlerResultKind.RECOVERABLE_ERROR

    @property
    def code(self) -> int | None:
        """The whitelisted code, or ``None`` if the identity is not listed."""
        return self.allowed_errors.code_for_error(self.error)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "identity": self.error.description,
            "code": self.code,
        }


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    """The input failed validation, or the business function said so."""

    reason: str

    @property
    def kind(self) -> HandlerResultKind:
        return HandlerResultKind.VALIDATION_ERROR

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "reason": self.reason}


@dataclass(frozen=True, slots=True)
class InternalFailure:
    """Any other failure. The cause is for logs only."""

    error: BaseException

    @property
    def kind(self) -> HandlerResultKind:
        return HandlerResultKind.INTERNAL_ERROR

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "error_type": type(self.error).__name__}


HandlerResult = Success[T] | RecoverableFailure | ValidationFailure | InternalFailure


__all__ = [
    "HandlerResult",
    "HandlerResultKind",
    "InternalFailure",
    "RecoverableFailure",
    "Success",
    "ValidationFailure",
]
