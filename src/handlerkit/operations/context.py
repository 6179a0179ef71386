"""
Request-scoped context for operations.

Every business function receives a context as its second argument. The
adapter passes it through untouched; :class:`OperationContext` is the
context the bundled transport binding builds, and applications are free to
pass their own type instead.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        request_id: Unique ID for this invocation (auto-generated).
        operation: Name the operation was registered under.
        caller: Origin of the request: ``"api"``, ``"sdk"``, ``"test"``.
        user: Optional caller identifier supplied by the transport.
        metadata: Arbitrary key/value pairs bound into the logging context
            alongside the fields above (see :meth:`log_fields`).
    """

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    operation: str | None = None
    caller: str = "sdk"
    user: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def log_fields(self) -> dict[str, Any]:
        """Key/value pairs to bind into the logging context for this request."""
        fields: dict[str, Any] = dict(self.metadata)
        fields.update(request_id=self.request_id, operation=self.operation, caller=self.caller)
        if self.user is not None:
            fields["user"] = self.user
        return fields
