"""
handlerkit core primitives.

Errors, validation, delegate protocols, logging, and settings shared by the
operations layer and the transport bindings.
"""

from handlerkit.core.errors import (
    ConfigError,
    DecodingError,
    DuplicateOperationError,
    ErrorCategory,
    HandlerKitError,
    InvalidConfigError,
    OperationNotFoundError,
    RegistryError,
    ResponseAlreadySentError,
    ResponseError,
    ReturnableError,
    ValidationError,
    error_identity,
)
from handlerkit.core.protocols import OperationDelegate, ResponseHandler
from handlerkit.core.validation import (
    Validatable,
    ValidatableModel,
    decode_value,
    validate_value,
)

__all__ = [
    # Errors
    "ErrorCategory",
    "HandlerKitError",
    "ReturnableError",
    "ValidationError",
    "DecodingError",
    "ConfigError",
    "InvalidConfigError",
    "RegistryError",
    "OperationNotFoundError",
    "DuplicateOperationError",
    "ResponseError",
    "ResponseAlreadySentError",
    "error_identity",
    # Protocols
    "OperationDelegate",
    "ResponseHandler",
    # Validation
    "Validatable",
    "ValidatableModel",
    "decode_value",
    "validate_value",
]
