"""
JSON payload delegate — the default response writer.

Turns each outcome the dispatcher reports into an :class:`OperationResponse`
with a JSON body and an HTTP-style status, and hands it to the response
handler. Responses carry only what the outcome allows: internal failures
always produce the same fixed body.

Response shapes:
    ::

        success             200  <output as JSON>
        success, no output  200  (empty body)
        returnable error    <code>  {"__type": "<identity>", "message": "..."}
        validation error    400  {"__type": "ValidationError", "message": "<reason>"}
        decoding error      400  {"__type": "DecodingError", "message": "..."}
        internal error      500  {"__type": "InternalError"}

Tags:
    delegate, json, response, handlerkit

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field, PydanticSchemaGenerationError, TypeAdapter
from pydantic_core import PydanticSerializationError

from handlerkit.core.errors import ResponseAlreadySentError, ReturnableError
from handlerkit.core.logging import get_logger
from handlerkit.core.protocols import ResponseHandler

log = get_logger(__name__)

JSON_CONTENT_TYPE = "application/json"

VALIDATION_ERROR_STATUS = 400
DECODING_ERROR_STATUS = 400
INTERNAL_ERROR_STATUS = 500


@dataclass(frozen=True, slots=True)
class OperationRequest:
    """Transport-neutral view of an inbound request."""

    operation: str
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)
    request_id: str | None = None


@dataclass(frozen=True, slots=True)
class OperationResponse:
    """A fully serialized response, ready for the transport to write."""

    status: int
    body: bytes = b""
    content_type: str = JSON_CONTENT_TYPE
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300


class ErrorPayload(BaseModel):
    """Wire shape of every error body."""

    type: str = Field(serialization_alias="__type")
    message: str | None = None

    def to_json(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode()


INTERNAL_ERROR_BODY = ErrorPayload(type="InternalError").to_json()


class ResponseSink:
    """
    Single-use response handler that keeps the response it receives.

    A second call raises :class:`ResponseAlreadySentError`, so a delegate or
    dispatcher that answers twice fails loudly in tests and at runtime.
    """

    __slots__ = ("_response", "_called")

    def __init__(self) -> None:
        self._response: Any = None
        self._called = False

    def __call__(self, response: Any) -> None:
        if self._called:
            raise ResponseAlreadySentError("Response handler has already been called")
        self._called = True
        self._response = response

    @property
    def called(self) -> bool:
        return self._called

    @property
    def response(self) -> Any:
        """The response received, or ``None`` if not called yet."""
        return self._response


def encode_json(value: Any) -> bytes:
    """Serialize an operation output with pydantic."""
    if isinstance(value, BaseModel):
        return value.model_dump_json(by_alias=True).encode()
    return TypeAdapter(type(value)).dump_json(value, by_alias=True)


class JSONPayloadDelegate:
    """Delegate that answers with JSON bodies and HTTP-style status codes."""

    def __init__(self, *, success_status: int = 200, headers: dict[str, str] | None = None) -> None:
        self.success_status = success_status
        self.headers = dict(headers or {})

    def _respond(self, response_handler: ResponseHandler, status: int, body: bytes = b"") -> None:
        response_handler(OperationResponse(status=status, body=body, headers=dict(self.headers)))

    def handle_response_for_operation(
        self,
        request: Any,
        output: Any,
        response_handler: ResponseHandler,
    ) -> None:
        try:
            body = encode_json(output)
        except (PydanticSerializationError, PydanticSchemaGenerationError) as e:
            # Output passed the adapter but cannot go on the wire; the server's fault.
            log.error(
                "operation.output_unserializable",
                operation=getattr(request, "operation", None),
                output_type=type(output).__name__,
                error_type=type(e).__name__,
                exc_info=e,
            )
            self._respond(response_handler, INTERNAL_ERROR_STATUS, INTERNAL_ERROR_BODY)
            return
        self._respond(response_handler, self.success_status, body)

    def handle_response_for_operation_with_no_output(
        self,
        request: Any,
        response_handler: ResponseHandler,
    ) -> None:
        self._respond(response_handler, self.success_status)

    def handle_response_for_returnable_error(
        self,
        request: Any,
        code: int,
        error: ReturnableError,
        response_handler: ResponseHandler,
    ) -> None:
        body = ErrorPayload(type=error.description, message=error.message).to_json()
        self._respond(response_handler, code, body)

    def handle_response_for_validation_error(
        self,
        request: Any,
        reason: str,
        response_handler: ResponseHandler,
    ) -> None:
        body = ErrorPayload(type="ValidationError", message=reason).to_json()
        self._respond(response_handler, VALIDATION_ERROR_STATUS, body)

    def handle_response_for_internal_server_error(
        self,
        request: Any,
        response_handler: ResponseHandler,
    ) -> None:
        self._respond(response_handler, INTERNAL_ERROR_STATUS, INTERNAL_ERROR_BODY)

    def handle_response_for_decoding_error(
        self,
        request: Any,
        message: str,
        response_handler: ResponseHandler,
    ) -> None:
        body = ErrorPayload(type="DecodingError", message=message).to_json()
        self._respond(response_handler, DECODING_ERROR_STATUS, body)
