"""
FastAPI application factory.

``create_app()`` mounts every operation in a :class:`HandlerRegistry` as a
``POST {api_prefix}/{name}`` route. The route decodes the JSON body into the
operation's input type, calls the handler with the default delegate, and
writes whatever :class:`OperationResponse` the delegate produced.

Blocking handlers run through ``run_in_threadpool`` so a slow business
function never stalls the event loop; async handlers are awaited directly.

Manifesto:
    The app factory is the single composition root; the operations layer
    never touches ``FastAPI`` directly.

Tags:
    handlerkit, api, app-factory, composition-root, FastAPI

Doc-Types:
    api-reference
"""

from __future__ import annotations

import uuid
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from starlette.concurrency import run_in_threadpool

from handlerkit.core.errors import DecodingError
from handlerkit.core.logging import LogContext, get_logger
from handlerkit.core.protocols import OperationDelegate
from handlerkit.core.settings import HandlerKitSettings, get_settings
from handlerkit.core.validation import decode_value
from handlerkit.delegates.json_payload import (
    INTERNAL_ERROR_BODY,
    INTERNAL_ERROR_STATUS,
    JSON_CONTENT_TYPE,
    JSONPayloadDelegate,
    OperationRequest,
    OperationResponse,
    ResponseSink,
)
from handlerkit.operations.context import OperationContext
from handlerkit.operations.registry import HandlerRegistry, RegisteredOperation

log = get_logger(__name__)

REQUEST_ID_HEADER = "x-request-id"


def _to_response(response: OperationResponse | None) -> Response:
    if response is None:
        # Delegate never answered; treat like any other internal failure.
        log.error("operation.no_response")
        return Response(
            content=INTERNAL_ERROR_BODY,
            status_code=INTERNAL_ERROR_STATUS,
            media_type=JSON_CONTENT_TYPE,
        )
    return Response(
        content=response.body,
        status_code=response.status,
        media_type=response.content_type,
        headers=response.headers,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    """Catch-all for failures outside the adapter, such as a delegate that raises."""
    request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())
    log.error(
        "operation.unhandled_exception",
        path=request.url.path,
        request_id=request_id,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return Response(
        content=INTERNAL_ERROR_BODY,
        status_code=INTERNAL_ERROR_STATUS,
        media_type=JSON_CONTENT_TYPE,
        headers={REQUEST_ID_HEADER: request_id},
    )


def build_endpoint(
    registered: RegisteredOperation,
    delegate: OperationDelegate,
) -> Callable[[Request], Awaitable[Response]]:
    """Build the route function for one registered operation."""

    async def endpoint(request: Request) -> Response:
        body = await request.body()
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        op_request = OperationRequest(
            operation=registered.name,
            body=body,
            headers=dict(request.headers),
            request_id=request_id,
        )
        context = OperationContext(
            request_id=request_id,
            operation=registered.name,
            caller="api",
            metadata={"path": request.url.path},
        )
        sink = ResponseSink()

        with LogContext(**context.log_fields()):
            try:
                value = decode_value(registered.input_type, body)
            except DecodingError as e:
                log.info("operation.decoding_failed", reason=e.message)
                delegate.handle_response_for_decoding_error(op_request, e.message, sink)
            else:
                if registered.is_async:
                    await registered.handler(value, op_request, context, delegate, sink)
                else:
                    await run_in_threadpool(registered.handler, value, op_request, context, delegate, sink)

        response = _to_response(sink.response)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    endpoint.__name__ = f"operation_{registered.name}"
    return endpoint


def create_app(
    registry: HandlerRegistry,
    *,
    settings: HandlerKitSettings | None = None,
    delegate: OperationDelegate | None = None,
) -> FastAPI:
    """Build a FastAPI application serving every operation in ``registry``.

    Parameters
    ----------
    registry : HandlerRegistry
        Operations to mount. Operations registered after this call are not
        mounted.
    settings : HandlerKitSettings | None
        Override settings (useful for testing). When ``None`` the cached
        singleton from :func:`get_settings` is used.
    delegate : OperationDelegate | None
        Default delegate handed to every handler. Defaults to
        :class:`JSONPayloadDelegate`.
    """
    settings = settings or get_settings()
    delegate = delegate or JSONPayloadDelegate()
    prefix = settings.api_prefix.rstrip("/")

    app = FastAPI(title=settings.api_title)
    app.state.settings = settings
    app.state.registry = registry
    app.add_exception_handler(Exception, unhandled_exception_handler)

    for registered in registry:
        app.add_api_route(
            f"{prefix}/{registered.name}",
            build_endpoint(registered, delegate),
            methods=["POST"],
            name=registered.name,
            description=registered.description or None,
            tags=["operations"],
        )

    @app.get(prefix or "/", tags=["discovery"])
    async def list_operations() -> dict[str, list[str]]:
        """List mounted operation names."""
        return {"operations": registry.names()}

    log.info("api.created", operations=len(registry), prefix=prefix)
    return app
