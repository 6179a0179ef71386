"""Tests for handlerkit.operations.context module."""

from handlerkit.operations import OperationContext


class TestOperationContext:
    def test_defaults(self):
        ctx = OperationContext()
        assert ctx.caller == "sdk"
        assert ctx.operation is None
        assert ctx.user is None
        assert ctx.metadata == {}
        assert len(ctx.request_id) == 36

    def test_request_ids_unique(self):
        assert OperationContext().request_id != OperationContext().request_id

    def test_metadata_not_shared(self):
        a, b = OperationContext(), OperationContext()
        a.metadata["k"] = "v"
        assert b.metadata == {}

    def test_log_fields(self):
        ctx = OperationContext(request_id="req-1", operation="GetWidget", caller="api", metadata={"path": "/x"})
        assert ctx.log_fields() == {
            "path": "/x",
            "request_id": "req-1",
            "operation": "GetWidget",
            "caller": "api",
        }

    def test_log_fields_includes_user_when_set(self):
        assert OperationContext(user="alice").log_fields()["user"] == "alice"

    def test_metadata_cannot_shadow_identity_fields(self):
        ctx = OperationContext(request_id="req-1", metadata={"request_id": "spoofed"})
        assert ctx.log_fields()["request_id"] == "req-1"
