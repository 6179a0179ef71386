"""Operation adapters, handler results, dispatch, and registry."""

from handlerkit.operations.adapter import (
    AsyncOperationHandler,
    OperationHandler,
    classify_failure,
    make_adapter,
    make_async_adapter,
)
from handlerkit.operations.allowed_errors import AllowedErrors
from handlerkit.operations.context import OperationContext
from handlerkit.operations.dispatch import dispatch_result
from handlerkit.operations.registry import HandlerRegistry, RegisteredOperation
from handlerkit.operations.result import (
    HandlerResult,
    HandlerResultKind,
    InternalFailure,
    RecoverableFailure,
    Success,
    ValidationFailure,
)

__all__ = [
    "AllowedErrors",
    "AsyncOperationHandler",
    "HandlerRegistry",
    "HandlerResult",
    "HandlerResultKind",
    "InternalFailure",
    "OperationContext",
    "OperationHandler",
    "RecoverableFailure",
    "RegisteredOperation",
    "Success",
    "ValidationFailure",
    "classify_failure",
    "dispatch_result",
    "make_adapter",
    "make_async_adapter",
]
