"""
Canonical protocol definitions for handlerkit.

Every module that needs a delegate, a response handler, or an operation
function signature imports it from here.

Architecture:
    ::

        protocols.py
        ├── ResponseHandler      — single-use sink for one response
        ├── OperationDelegate    — request/response plumbing for one transport
        ├── OperationFn          — blocking business function
        └── AsyncOperationFn     — coroutine business function

    The adapter only ever calls the delegate through the methods declared
    here; it never inspects the request or response types.

Tags:
    protocol, delegate, response-handler, handlerkit, contracts

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from handlerkit.core.errors import ReturnableError

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")
ContextT = TypeVar("ContextT")

# Blocking business function: (input, context) -> output, may raise
OperationFn = Callable[[InputT, ContextT], OutputT]

# Coroutine business function
AsyncOperationFn = Callable[[InputT, ContextT], Awaitable[OutputT]]


@runtime_checkable
class ResponseHandler(Protocol):
    """
    Sink for the single response produced by one invocation.

    The delegate calls it exactly once with whatever response value its
    transport understands.
    """

    def __call__(self, response: Any) -> None:
        ...


@runtime_checkable
class OperationDelegate(Protocol):
    """
    Request/response plumbing for one transport.

    A delegate knows how to turn each outcome of an operation into a
    response for its transport and hand it to the response handler. The
    result dispatcher picks exactly one of these methods per invocation.
    """

    def handle_response_for_operation(
        self,
        request: Any,
        output: Any,
        response_handler: ResponseHandler,
    ) -> None:
        """Serialize ``output`` as a successful response."""
        ...

    def handle_response_for_operation_with_no_output(
        self,
        request: Any,
        response_handler: ResponseHandler,
    ) -> None:
        """Respond to an operation that completed without output."""
        ...

    def handle_response_for_returnable_error(
        self,
        request: Any,
        code: int,
        error: ReturnableError,
        response_handler: ResponseHandler,
    ) -> None:
        """Respond with a whitelisted error and its numeric code."""
        ...

    def handle_response_for_validation_error(
        self,
        request: Any,
        reason: str,
        response_handler: ResponseHandler,
    ) -> None:
        """Respond with a client error carrying ``reason`` verbatim."""
        ...

    def handle_response_for_internal_server_error(
        self,
        request: Any,
        response_handler: ResponseHandler,
    ) -> None:
        """Respond with a generic, detail-free failure."""
        ...

    def handle_response_for_decoding_error(
        self,
        request: Any,
        message: str,
        response_handler: ResponseHandler,
    ) -> None:
        """Respond to a payload the transport could not decode."""
        ...


__all__ = [
    "AsyncOperationFn",
    "OperationDelegate",
    "OperationFn",
    "ResponseHandler",
]
