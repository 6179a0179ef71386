"""Operation registry for registering and looking up adapted handlers.

Manifesto:
    A registry lets a transport binding discover every operation, its input
    type, and its handler at runtime without import-time coupling to the
    business modules.

Tags:
    handlerkit, registry, operation-discovery, lookup

Doc-Types:
    api-reference
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from handlerkit.core.errors import DuplicateOperationError, OperationNotFoundError
from handlerkit.core.logging import get_logger
from handlerkit.core.protocols import OperationDelegate
from handlerkit.operations.adapter import (
    AsyncOperationHandler,
    OperationHandler,
    make_adapter,
    make_async_adapter,
)
from handlerkit.operations.allowed_errors import AllowedErrors

logger = get_logger(__name__)

AnyHandler = OperationHandler | AsyncOperationHandler


@dataclass(frozen=True)
class RegisteredOperation:
    """A handler plus what a transport needs to feed it."""

    name: str
    handler: AnyHandler
    input_type: type[Any]
    description: str = ""

    @property
    def is_async(self) -> bool:
        return isinstance(self.handler, AsyncOperationHandler)


class HandlerRegistry:
    """Named collection of operation handlers."""

    def __init__(self) -> None:
        self._operations: dict[str, RegisteredOperation] = {}

    def register(
        self,
        name: str,
        handler: AnyHandler,
        input_type: type[Any],
        *,
        description: str = "",
    ) -> RegisteredOperation:
        """Register an already-adapted handler under ``name``."""
        if name in self._operations:
            raise DuplicateOperationError(name)
        registered = RegisteredOperation(
            name=name,
            handler=handler,
            input_type=input_type,
            description=description,
        )
        self._operations[name] = registered
        logger.debug(
            "operation_registered",
            name=name,
            input_type=getattr(input_type, "__name__", repr(input_type)),
            is_async=registered.is_async,
        )
        return registered

    def operation(
        self,
        name: str,
        input_type: type[Any],
        *,
        allowed_errors: AllowedErrors | Iterable[tuple[Any, int]] | None = (),
        operation_delegate: OperationDelegate | None = None,
        validate_output: bool | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator that adapts a business function and registers it.

        Coroutine functions get an :class:`AsyncOperationHandler`; everything
        else a blocking :class:`OperationHandler`. The function is returned
        unchanged so it stays directly callable.
        """

        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            factory = make_async_adapter if inspect.iscoroutinefunction(fn) else make_adapter
            handler = factory(
                fn,
                allowed_errors,
                operation_delegate,
                name=name,
                validate_output=validate_output,
            )
            self.register(name, handler, input_type, description=inspect.getdoc(fn) or "")
            return fn

        return decorator

    def get(self, name: str) -> RegisteredOperation:
        """Get a registered operation by name."""
        try:
            return self._operations[name]
        except KeyError:
            raise OperationNotFoundError(name) from None

    def names(self) -> list[str]:
        """List all registered operation names."""
        return sorted(self._operations)

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    def __iter__(self):
        return iter(self._operations.values())

    def __len__(self) -> int:
        return len(self._operations)

    def clear(self) -> None:
        """Clear registry (for testing)."""
        self._operations.clear()
