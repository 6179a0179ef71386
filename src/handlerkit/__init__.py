"""
handlerkit - Typed operation adapters with whitelist-driven error handling.

Wrap a business function ``(input, context) -> output`` into a handler a
transport can call without knowing its types; every failure is classified
into a closed Handler Result and turned into exactly one response.

    from handlerkit import ReturnableError, make_adapter

    class NotFound(ReturnableError):
        pass

    handler = make_adapter(get_widget, allowed_errors=[(NotFound, 404)])
"""

__version__ = "0.1.0"

from handlerkit.core.errors import (
    HandlerKitError,
    ReturnableError,
    ValidationError,
)
from handlerkit.core.validation import Validatable, ValidatableModel
from handlerkit.delegates.json_payload import JSONPayloadDelegate, ResponseSink
from handlerkit.operations import (
    AllowedErrors,
    HandlerRegistry,
    HandlerResult,
    HandlerResultKind,
    InternalFailure,
    OperationContext,
    RecoverableFailure,
    Success,
    ValidationFailure,
    dispatch_result,
    make_adapter,
    make_async_adapter,
)

__all__ = [
    "__version__",
    "AllowedErrors",
    "HandlerKitError",
    "HandlerRegistry",
    "HandlerResult",
    "HandlerResultKind",
    "InternalFailure",
    "JSONPayloadDelegate",
    "OperationContext",
    "RecoverableFailure",
    "ResponseSink",
    "ReturnableError",
    "Success",
    "Validatable",
    "ValidatableModel",
    "ValidationError",
    "ValidationFailure",
    "dispatch_result",
    "make_adapter",
    "make_async_adapter",
]
