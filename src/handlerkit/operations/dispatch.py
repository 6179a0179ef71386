"""
Result dispatcher — translates a Handler Result into one delegate call.

The dispatcher makes no business decisions. It maps each of the four
Handler Result variants onto the matching :class:`OperationDelegate` method
and is the only place an internal failure's cause is written down (to the
log, never to the response).

Translation table:
    ::

        Success(output)              → handle_response_for_operation
        Success(None)                → handle_response_for_operation_with_no_output
        RecoverableFailure, listed   → handle_response_for_returnable_error(code)
        RecoverableFailure, unlisted → handle_response_for_internal_server_error
        ValidationFailure(reason)    → handle_response_for_validation_error(reason)
        InternalFailure(error)       → handle_response_for_internal_server_error
"""

from __future__ import annotations

from typing import Any, assert_never

from handlerkit.core.logging import get_logger
from handlerkit.core.protocols import OperationDelegate, ResponseHandler
from handlerkit.operations.result import (
    HandlerResult,
    InternalFailure,
    RecoverableFailure,
    Success,
    ValidationFailure,
)

log = get_logger(__name__)


def dispatch_result(
    handler_result: HandlerResult[Any],
    delegate: OperationDelegate,
    request: Any,
    response_handler: ResponseHandler,
    *,
    operation: str | None = None,
) -> None:
    """
    Forward ``handler_result`` to ``delegate``.

    Args:
        handler_result: Outcome of one invocation.
        delegate: Delegate that writes the response.
        request: The original transport request, passed through untouched.
        response_handler: Single-use sink handed to the delegate.
        operation: Operation name, for log lines only.
    """
    if isinstance(handler_result, Success):
        log.debug("operation.succeeded", operation=operation, has_output=handler_result.has_output)
        if handler_result.has_output:
            delegate.handle_response_for_operation(request, handler_result.output, response_handler)
        else:
            delegate.handle_response_for_operation_with_no_output(request, response_handler)

    elif isinstance(handler_result, RecoverableFailure):
        error = handler_result.error
        code = handler_result.code
        if code is None:
            # Identity not whitelisted for this operation; never expose it.
            log.error(
                "operation.unlisted_error",
                operation=operation,
                identity=error.description,
                error_message=error.message,
            )
            delegate.handle_response_for_internal_server_error(request, response_handler)
        else:
            log.info(
                "operation.returnable_error",
                operation=operation,
                identity=error.description,
                code=code,
            )
            delegate.handle_response_for_returnable_error(request, code, error, response_handler)

    elif isinstance(handler_result, ValidationFailure):
        log.info("operation.validation_failed", operation=operation, reason=handler_result.reason)
        delegate.handle_response_for_validation_error(request, handler_result.reason, response_handler)

    elif isinstance(handler_result, InternalFailure):
        error = handler_result.error
        log.error(
            "operation.internal_error",
            operation=operation,
            error_type=type(error).__name__,
            error_message=str(error),
            exc_info=error,
        )
        delegate.handle_response_for_internal_server_error(request, response_handler)

    else:
        assert_never(handler_result)
