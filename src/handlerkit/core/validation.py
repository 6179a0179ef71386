"""
Validatable values — decode, then validate independently.

Operation inputs and outputs are decoded from (or encoded to) the wire with
pydantic, then validated a second time by their own ``ensure_valid()`` hook.
Decoding checks shape; ``ensure_valid()`` checks meaning (ranges, required
combinations, cross-field consistency).

Manifesto:
    - **Two steps:** Decoding never implies validity
    - **One failure type:** Semantic failures surface as ``ValidationError``
      with a caller-readable reason
    - **Plain values pass:** ``int``, ``str``, ``None`` carry no contract

Examples:
    >>> class Range(ValidatableModel):
    ...     low: int
    ...     high: int
    ...     def ensure_valid(self) -> None:
    ...         if self.low > self.high:
    ...             raise ValidationError("low must not exceed high")
    >>> value = decode_value(Range, b'{"low": 1, "high": 3}')
    >>> validate_value(value)

Tags:
    validation, pydantic, decoding, handlerkit

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, TypeVar, runtime_checkable

import pydantic
from pydantic import BaseModel, ConfigDict, TypeAdapter

from handlerkit.core.errors import DecodingError, ValidationError

T = TypeVar("T")


@runtime_checkable
class Validatable(Protocol):
    """
    Capability contract for self-validating values.

    ``ensure_valid()`` returns ``None`` when the value is acceptable and
    raises :class:`ValidationError` otherwise.
    """

    def ensure_valid(self) -> None:
        """Check semantic constraints."""
        ...


class ValidatableModel(BaseModel):
    """
    Pydantic base class for operation inputs and outputs.

    Models are frozen and reject unknown fields. Override ``ensure_valid()``
    for checks pydantic field constraints cannot express.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    def ensure_valid(self) -> None:  # noqa: B027
        """Validate semantic constraints. Override in subclasses."""
        pass


def describe_pydantic_error(error: pydantic.ValidationError) -> str:
    """Flatten a pydantic error into a single caller-readable reason."""
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        message = item.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or str(error)


def decode_value(value_type: type[T], payload: bytes | str | Mapping[str, Any] | None) -> T:
    """
    Decode a wire payload into ``value_type``.

    ``bytes``/``str`` payloads are parsed as JSON; mappings are validated
    directly. An empty payload decodes as an empty object.

    Raises:
        DecodingError: If the payload does not fit ``value_type``.
    """
    if payload is None or payload == b"" or payload == "":
        payload = {}

    adapter: TypeAdapter[T] = TypeAdapter(value_type)
    try:
        if isinstance(payload, (bytes, str)):
            return adapter.validate_json(payload)
        return adapter.validate_python(payload)
    except pydantic.ValidationError as e:
        raise DecodingError(describe_pydantic_error(e), cause=e) from e


def validate_value(value: Any) -> None:
    """
    Run a value's own validation, if it has any.

    Raises:
        ValidationError: If ``ensure_valid()`` rejects the value. A pydantic
            error raised from inside the hook is converted to one.
    """
    if not isinstance(value, Validatable):
        return
    try:
        value.ensure_valid()
    except pydantic.ValidationError as e:
        raise ValidationError(describe_pydantic_error(e), cause=e) from e
