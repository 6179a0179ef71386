"""Tests for handlerkit.core.errors module."""

import pytest

from handlerkit.core.errors import (
    ConfigError,
    DecodingError,
    DuplicateOperationError,
    ErrorCategory,
    HandlerKitError,
    InvalidConfigError,
    OperationNotFoundError,
    ResponseAlreadySentError,
    ReturnableError,
    ValidationError,
    error_identity,
)


class TestHandlerKitError:
    """Test HandlerKitError base class."""

    def test_create_minimal_error(self):
        """Create error with just message."""
        err = HandlerKitError("Something failed")
        assert err.message == "Something failed"
        assert err.category == ErrorCategory.INTERNAL
        assert err.context == {}
        assert err.cause is None

    def test_create_with_cause(self):
        """Underlying cause is kept and chained."""
        cause = ConnectionError("DNS failure")
        err = HandlerKitError("Backend unavailable", cause=cause)
        assert err.cause is cause
        assert err.__cause__ is cause

    def test_to_dict(self):
        """to_dict serializes type, message, category, and cause."""
        err = HandlerKitError("Failed", cause=ValueError("bad"))
        d = err.to_dict()
        assert d["error_type"] == "HandlerKitError"
        assert d["message"] == "Failed"
        assert d["category"] == "INTERNAL"
        assert d["cause"] == "bad"

    def test_repr(self):
        assert repr(HandlerKitError("x")) == "HandlerKitError('x', category=INTERNAL)"


class TestReturnableError:
    """Test the returnable (whitelistable) error capability."""

    def test_identity_defaults_to_class_name(self):
        class NotFound(ReturnableError):
            pass

        assert NotFound("widget 7 missing").description == "NotFound"

    def test_identity_class_attribute(self):
        class WidgetMissing(ReturnableError):
            identity = "NotFound"

        assert WidgetMissing().description == "NotFound"

    def test_identity_argument_wins(self):
        class WidgetMissing(ReturnableError):
            identity = "NotFound"

        assert WidgetMissing(identity="Gone").description == "Gone"

    def test_message_defaults_to_identity(self):
        err = ReturnableError(identity="Conflict")
        assert err.message == "Conflict"

    def test_same_identity_same_key(self):
        """Two distinct classes with one identity resolve to the same key."""

        class A(ReturnableError):
            identity = "NotFound"

        class B(ReturnableError):
            identity = "NotFound"

        assert A().description == B().description

    def test_category(self):
        assert ReturnableError("x").category == ErrorCategory.RETURNABLE

    def test_to_dict_includes_identity(self):
        d = ReturnableError("taken", identity="Conflict").to_dict()
        assert d["identity"] == "Conflict"
        assert d["message"] == "taken"


class TestValidationError:
    def test_reason(self):
        err = ValidationError("missing field x", field="x")
        assert err.reason == "missing field x"
        assert err.message == "missing field x"
        assert err.field == "x"
        assert err.category == ErrorCategory.VALIDATION

    def test_to_dict_includes_field(self):
        assert ValidationError("bad", field="x").to_dict()["field"] == "x"


class TestOtherErrors:
    def test_decoding_error_category(self):
        assert DecodingError("bad json").category == ErrorCategory.DECODING

    def test_invalid_config(self):
        err = InvalidConfigError("allowed_errors", 3.5)
        assert isinstance(err, ConfigError)
        assert err.key == "allowed_errors"
        assert "3.5" in err.message

    def test_registry_errors(self):
        assert OperationNotFoundError("GetWidget").operation_name == "GetWidget"
        assert "already registered" in DuplicateOperationError("GetWidget").message

    def test_response_already_sent(self):
        assert ResponseAlreadySentError("twice").category == ErrorCategory.RESPONSE


class TestErrorIdentity:
    """Resolving allowed-errors descriptors."""

    def test_string(self):
        assert error_identity("NotFound") == "NotFound"

    def test_class(self):
        class NotFound(ReturnableError):
            pass

        assert error_identity(NotFound) == "NotFound"

    def test_class_with_identity_attribute(self):
        class WidgetMissing(ReturnableError):
            identity = "NotFound"

        assert error_identity(WidgetMissing) == "NotFound"

    def test_instance(self):
        assert error_identity(ReturnableError(identity="Conflict")) == "Conflict"

    def test_object_with_description(self):
        class Described:
            description = "Teapot"

        assert error_identity(Described()) == "Teapot"

    @pytest.mark.parametrize("descriptor", [42, None, "", "   ", object(), ValueError])
    def test_unresolvable(self, descriptor):
        with pytest.raises(InvalidConfigError):
            error_identity(descriptor)
