"""
Operation adapter — wraps a typed business function into a uniform handler.

A business function has the shape ``(input, context) -> output`` and may
raise. The adapter binds it to an allowed-errors table (and optionally a
delegate) and produces a handler the transport can call without knowing any
of the input, output, or error types involved::

    handler(input, request, context, default_delegate, response_handler)

Each call runs the business function at most once, classifies the outcome
into a Handler Result, and passes that result to the dispatcher. The handler
never raises for anything the business function does: classification is
total.

Manifesto:
    - **Total:** Every ``Exception`` maps to exactly one result variant
    - **Ordered:** Returnable beats validation beats internal, so a
      returnable error that also subclasses ``ValidationError`` is still
      treated as returnable
    - **Validated in, validated out:** Inputs are validated before the
      business function runs; outputs after, when enabled
    - **Stateless:** The operation and table are read-only after
      construction, so one handler serves concurrent requests unlocked

Architecture:
    ::

        transport ──► handler(input, request, context, default, sink)
                         │
                         ├─ delegate = operation_delegate or default
                         ├─ validate_value(input) ──✗──► ValidationFailure
                         ├─ operation(input, context)
                         │     ├─ returns ─► validate_value(output)
                         │     │               ├─ ok ─► Success(output)
                         │     │               └─ ✗ ──► InternalFailure
                         │     └─ raises ──► classify_failure()
                         │                     ├─ ReturnableError ─► RecoverableFailure
                         │                     ├─ ValidationError ─► ValidationFailure
                         │                     └─ anything else ───► InternalFailure
                         ▼
                  dispatch_result(result, delegate, request, sink)

Examples:
    >>> handler = make_adapter(lambda value, ctx: value * 2)
    >>> handler.invoke(21, None)
    Success(output=42)

    >>> class NotFound(ReturnableError):
    ...     pass
    >>> def get_widget(widget_id, ctx):
    ...     raise NotFound("widget 7 does not exist")
    >>> handler = make_adapter(get_widget, [(NotFound, 404)])
    >>> handler.invoke(7, None).code
    404

Guardrails:
    ❌ DON'T: Catch and re-raise inside the business function to "help"
    ✅ DO: Raise ReturnableError / ValidationError, let the adapter classify

    ❌ DON'T: Call a blocking handler on the event loop thread
    ✅ DO: Use ``run_in_threadpool`` (the FastAPI binding does) or
       ``make_async_adapter`` for coroutine operations

Tags:
    adapter, operation-handler, error-classification, handlerkit

Doc-Types:
    - API Reference
    - Architecture Decision Record
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from handlerkit.core.errors import ReturnableError, ValidationError
from handlerkit.core.logging import get_logger
from handlerkit.core.protocols import (
    AsyncOperationFn,
    OperationDelegate,
    OperationFn,
    ResponseHandler,
)
from handlerkit.core.settings import get_settings
from handlerkit.core.validation import validate_value
from handlerkit.operations.allowed_errors import AllowedErrors
from handlerkit.operations.dispatch import dispatch_result
from handlerkit.operations.result import (
    HandlerResult,
    InternalFailure,
    RecoverableFailure,
    Success,
    ValidationFailure,
)

log = get_logger(__name__)


def classify_failure(error: Exception, allowed_errors: AllowedErrors) -> HandlerResult[Any]:
    """
    Map a failure raised by a business function onto a Handler Result.

    The checks run in strict priority order; the first match wins.
    """
    if isinstance(error, ReturnableError):
        return RecoverableFailure(error, allowed_errors)
    if isinstance(error, ValidationError):
        return ValidationFailure(error.reason)
    return InternalFailure(error)


@dataclass(frozen=True)
class _AdapterBase:
    operation: Any
    allowed_errors: AllowedErrors
    operation_delegate: OperationDelegate | None
    name: str
    validate_output: bool

    def resolve_delegate(self, default_delegate: OperationDelegate) -> OperationDelegate:
        """Explicit per-operation delegate if supplied, else the per-call default."""
        return self.operation_delegate if self.operation_delegate is not None else default_delegate

    def _check_input(self, input: Any) -> HandlerResult[Any] | None:
        try:
            validate_value(input)
        except ValidationError as e:
            return ValidationFailure(e.reason)
        except Exception as e:
            return InternalFailure(e)
        return None

    def _check_output(self, output: Any) -> HandlerResult[Any]:
        if self.validate_output:
            try:
                validate_value(output)
            except Exception as e:
                # The server produced an invalid response; not the caller's fault.
                log.warning(
                    "operation.output_invalid",
                    operation=self.name,
                    error_type=type(e).__name__,
                )
                return InternalFailure(e)
        return Success(output)


@dataclass(frozen=True)
class OperationHandler(_AdapterBase):
    """
    Blocking operation handler produced by :func:`make_adapter`.

    Attributes:
        operation: The business function, ``(input, context) -> output``.
        allowed_errors: Whitelist of returnable error identities and codes.
        operation_delegate: Optional delegate overriding the per-call default.
        name: Operation name used in log lines.
        validate_output: Whether outputs are validated before dispatch.
    """

    operation: OperationFn[Any, Any, Any]

    def invoke(self, input: Any, context: Any) -> HandlerResult[Any]:
        """Validate, run the business function once, and classify the outcome."""
        rejected = self._check_input(input)
        if rejected is not None:
            return rejected
        try:
            output = self.operation(input, context)
        except Exception as e:
            return classify_failure(e, self.allowed_errors)
        return self._check_output(output)

    def __call__(
        self,
        input: Any,
        request: Any,
        context: Any,
        default_delegate: OperationDelegate,
        response_handler: ResponseHandler,
    ) -> None:
        delegate = self.resolve_delegate(default_delegate)
        handler_result = self.invoke(input, context)
        dispatch_result(handler_result, delegate, request, response_handler, operation=self.name)


@dataclass(frozen=True)
class AsyncOperationHandler(_AdapterBase):
    """Coroutine counterpart of :class:`OperationHandler`."""

    operation: AsyncOperationFn[Any, Any, Any]

    async def invoke(self, input: Any, context: Any) -> HandlerResult[Any]:
        rejected = self._check_input(input)
        if rejected is not None:
            return rejected
        try:
            output = await self.operation(input, context)
        except Exception as e:
            return classify_failure(e, self.allowed_errors)
        return self._check_output(output)

    async def __call__(
        self,
        input: Any,
        request: Any,
        context: Any,
        default_delegate: OperationDelegate,
        response_handler: ResponseHandler,
    ) -> None:
        delegate = self.resolve_delegate(default_delegate)
        handler_result = await self.invoke(input, context)
        dispatch_result(handler_result, delegate, request, response_handler, operation=self.name)


def _adapter_kwargs(
    operation: Any,
    allowed_errors: AllowedErrors | Iterable[tuple[Any, int]] | None,
    operation_delegate: OperationDelegate | None,
    name: str | None,
    validate_output: bool | None,
) -> dict[str, Any]:
    if not callable(operation):
        raise TypeError(f"operation must be callable, got {operation!r}")
    return {
        "operation": operation,
        "allowed_errors": AllowedErrors.of(allowed_errors),
        "operation_delegate": operation_delegate,
        "name": name or getattr(operation, "__name__", type(operation).__name__),
        "validate_output": get_settings().validate_output if validate_output is None else validate_output,
    }


def make_adapter(
    operation: OperationFn[Any, Any, Any],
    allowed_errors: AllowedErrors | Iterable[tuple[Any, int]] | None = (),
    operation_delegate: OperationDelegate | None = None,
    *,
    name: str | None = None,
    validate_output: bool | None = None,
) -> OperationHandler:
    """
    Bind a blocking business function into an :class:`OperationHandler`.

    Args:
        operation: ``(input, context) -> output``; may raise.
        allowed_errors: ``(descriptor, code)`` pairs; descriptors may be
            identity strings or ``ReturnableError`` types/instances.
        operation_delegate: Delegate to use instead of the transport's default.
        name: Operation name for logs (defaults to the function name).
        validate_output: Override ``HandlerKitSettings.validate_output``.

    Raises:
        InvalidConfigError: If the allowed-errors table is malformed.
        TypeError: If ``operation`` is not callable.
    """
    kwargs = _adapter_kwargs(operation, allowed_errors, operation_delegate, name, validate_output)
    log.debug(
        "operation.adapted",
        operation=kwargs["name"],
        allowed_errors=kwargs["allowed_errors"].to_dict(),
        has_delegate=operation_delegate is not None,
    )
    return OperationHandler(**kwargs)


def make_async_adapter(
    operation: AsyncOperationFn[Any, Any, Any],
    allowed_errors: AllowedErrors | Iterable[tuple[Any, int]] | None = (),
    operation_delegate: OperationDelegate | None = None,
    *,
    name: str | None = None,
    validate_output: bool | None = None,
) -> AsyncOperationHandler:
    """Bind a coroutine business function into an :class:`AsyncOperationHandler`."""
    kwargs = _adapter_kwargs(operation, allowed_errors, operation_delegate, name, validate_output)
    log.debug(
        "operation.adapted",
        operation=kwargs["name"],
        allowed_errors=kwargs["allowed_errors"].to_dict(),
        has_delegate=operation_delegate is not None,
        is_async=True,
    )
    return AsyncOperationHandler(**kwargs)
