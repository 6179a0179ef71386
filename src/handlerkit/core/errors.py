"""
Structured error types for handlerkit.

Provides the error taxonomy that operation adapters classify against. Business
functions signal *how* they failed by raising one of these types; the adapter
turns the failure into a Handler Result and never lets it escape.

Manifesto:
    - **Explicit capabilities:** A failure is exposed to the caller only when
      it is a ``ReturnableError`` whose identity is whitelisted
    - **Reasons, not stack traces:** ``ValidationError`` carries a reason that
      is returned verbatim; everything else is hidden
    - **Fail at registration:** Bad whitelist tables or duplicate operation
      names raise immediately, never at request time
    - **Error chaining:** Preserve original exceptions as ``cause``

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                      HandlerKitError                             │
        │               (category, context, cause)                         │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  ReturnableError      ValidationError       DecodingError        │
        │  (RETURNABLE)         (VALIDATION, reason)  (DECODING)           │
        │                                                                  │
        │  ConfigError          RegistryError         ResponseError        │
        │  (CONFIG)             (REGISTRY)            (RESPONSE)           │
        │       │                    │                     │               │
        │  InvalidConfigError   OperationNotFound     ResponseAlreadySent  │
        │                       DuplicateOperation                         │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    Declaring a whitelisted business error:

    >>> class NotFound(ReturnableError):
    ...     pass
    >>> NotFound("no such widget").description
    'NotFound'

    Overriding the identity per instance:

    >>> ReturnableError("taken", identity="Conflict").description
    'Conflict'

    Signalling a validation failure:

    >>> err = ValidationError("missing field x")
    >>> err.reason
    'missing field x'

Guardrails:
    ❌ DON'T: Raise ``ReturnableError`` for failures the caller must not see
    ✅ DO: Raise any other exception; it degrades to a generic 500

    ❌ DON'T: Put secrets in a ``ReturnableError`` message
    ✅ DO: Remember the message is returned to the caller verbatim

Tags:
    error-handling, exception-hierarchy, error-identity, handlerkit

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and logging.

    Attributes:
        RETURNABLE: Whitelisted business error, safe to describe to the caller
        VALIDATION: Input or output failed semantic checks
        DECODING: Wire payload could not be decoded into the input type
        CONFIG: Invalid registration-time configuration
        REGISTRY: Operation lookup or registration failure
        RESPONSE: Response handler misuse
        INTERNAL: Bugs, unexpected state
    """

    RETURNABLE = "RETURNABLE"
    VALIDATION = "VALIDATION"
    DECODING = "DECODING"
    CONFIG = "CONFIG"
    REGISTRY = "REGISTRY"
    RESPONSE = "RESPONSE"
    INTERNAL = "INTERNAL"


class HandlerKitError(Exception):
    """
    Base exception for all handlerkit errors.

    Every handlerkit error carries:
    - **message:** Human-readable description
    - **category:** ErrorCategory for classification and log routing
    - **context:** Free-form metadata for structured logging
    - **cause:** Optional underlying exception, also chained as ``__cause__``

    Subclasses set ``default_category`` to provide a sensible default.

    Examples:
        >>> error = HandlerKitError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> try:
        ...     raise ConnectionError("DNS lookup failed")
        ... except ConnectionError as e:
        ...     error = HandlerKitError("Backend unavailable", cause=e)
        >>> error.cause
        ConnectionError('DNS lookup failed')
    """

    default_category: ClassVar[ErrorCategory] = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = dict(context or {})
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.context:
            result["context"] = dict(self.context)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# RETURNABLE (WHITELISTED) ERRORS
# =============================================================================


class ReturnableError(HandlerKitError):
    """
    Business error that may be exposed to the caller.

    Raising a ReturnableError marks the failure as recoverable: the adapter
    classifies it ahead of every other failure kind, and the dispatcher looks
    its ``description`` up in the operation's allowed-errors table. Only a hit
    in that table produces an error response carrying the description; a miss
    is answered exactly like an internal error.

    The identity used as the table key resolves in this order:

    1. the ``identity=`` constructor argument
    2. the ``identity`` class attribute
    3. the class name

    Examples:
        >>> class WidgetNotFound(ReturnableError):
        ...     identity = "NotFound"
        >>> WidgetNotFound("widget 7 does not exist").description
        'NotFound'

        >>> class Conflict(ReturnableError):
        ...     pass
        >>> Conflict().message
        'Conflict'
    """

    default_category = ErrorCategory.RETURNABLE

    identity: ClassVar[str | None] = None

    def __init__(
        self,
        message: str | None = None,
        *,
        identity: str | None = None,
        **kwargs: Any,
    ):
        self._identity = identity
        super().__init__(message if message is not None else self.description, **kwargs)

    @property
    def description(self) -> str:
        """Stable identity used as the allowed-errors lookup key."""
        return self._identity or type(self).identity or type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["identity"] = self.description
        return result


# =============================================================================
# VALIDATION / DECODING ERRORS
# =============================================================================


class ValidationError(HandlerKitError):
    """
    A value failed semantic validation.

    The ``reason`` is returned to the caller verbatim, so it should describe
    the problem in the caller's terms ("missing field x"), not the server's.
    """

    default_category = ErrorCategory.VALIDATION

    def __init__(self, reason: str, *, field: str | None = None, **kwargs: Any):
        super().__init__(reason, **kwargs)
        self.reason = reason
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class DecodingError(HandlerKitError):
    """Wire payload could not be decoded into the operation's input type."""

    default_category = ErrorCategory.DECODING


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(HandlerKitError):
    """
    Registration-time configuration error.

    Raised while building adapters or registries, never while serving a
    request.
    """

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")


# =============================================================================
# REGISTRY ERRORS
# =============================================================================


class RegistryError(HandlerKitError):
    """Operation registry error."""

    default_category = ErrorCategory.REGISTRY


class OperationNotFoundError(RegistryError):
    """Operation not found in registry."""

    def __init__(self, name: str):
        self.operation_name = name
        super().__init__(f"Operation not found: {name}")


class DuplicateOperationError(RegistryError):
    """Operation name registered twice."""

    def __init__(self, name: str):
        self.operation_name = name
        super().__init__(f"Operation '{name}' is already registered")


# =============================================================================
# RESPONSE ERRORS
# =============================================================================


class ResponseError(HandlerKitError):
    """Response handler misuse."""

    default_category = ErrorCategory.RESPONSE


class ResponseAlreadySentError(ResponseError):
    """A single-use response handler was called more than once."""


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def error_identity(descriptor: Any) -> str:
    """
    Resolve an allowed-errors descriptor to its identity string.

    Accepts a plain string, a ``ReturnableError`` subclass, a
    ``ReturnableError`` instance, or any object exposing a non-empty string
    ``description``.

    Raises:
        InvalidConfigError: If the descriptor has no stable identity.
    """
    if isinstance(descriptor, str):
        identity: Any = descriptor
    elif isinstance(descriptor, type) and issubclass(descriptor, ReturnableError):
        identity = descriptor.identity or descriptor.__name__
    else:
        identity = getattr(descriptor, "description", None)

    if not isinstance(identity, str) or not identity.strip():
        raise InvalidConfigError(
            "allowed_errors",
            descriptor,
            f"Error descriptor has no identity: {descriptor!r}",
        )
    return identity
