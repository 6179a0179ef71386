"""Bundled operation delegates."""

from handlerkit.delegates.json_payload import (
    DECODING_ERROR_STATUS,
    INTERNAL_ERROR_BODY,
    INTERNAL_ERROR_STATUS,
    VALIDATION_ERROR_STATUS,
    ErrorPayload,
    JSONPayloadDelegate,
    OperationRequest,
    OperationResponse,
    ResponseSink,
    encode_json,
)

__all__ = [
    "DECODING_ERROR_STATUS",
    "INTERNAL_ERROR_BODY",
    "INTERNAL_ERROR_STATUS",
    "VALIDATION_ERROR_STATUS",
    "ErrorPayload",
    "JSONPayloadDelegate",
    "OperationRequest",
    "OperationResponse",
    "ResponseSink",
    "encode_json",
]
