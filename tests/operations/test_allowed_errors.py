"""Tests for handlerkit.operations.allowed_errors module."""

import pytest

from handlerkit.core.errors import InvalidConfigError, ReturnableError
from handlerkit.operations.allowed_errors import AllowedErrors
from tests._support.doubles import Conflict, NotFound


class TestAllowedErrorsOf:
    def test_from_strings(self):
        table = AllowedErrors.of([("NotFound", 404), ("Conflict", 409)])
        assert table.entries == (("NotFound", 404), ("Conflict", 409))

    def test_from_error_types_and_instances(self):
        table = AllowedErrors.of([(NotFound, 404), (Conflict("taken"), 409)])
        assert table.code_for("NotFound") == 404
        assert table.code_for("Conflict") == 409

    def test_empty(self):
        assert len(AllowedErrors.of()) == 0
        assert len(AllowedErrors.of(None)) == 0
        assert AllowedErrors.of([]).code_for("NotFound") is None

    def test_passthrough(self):
        table = AllowedErrors.of([("NotFound", 404)])
        assert AllowedErrors.of(table) is table

    def test_preserves_order(self):
        table = AllowedErrors.of([("B", 2), ("A", 1), ("C", 3)])
        assert [identity for identity, _ in table] == ["B", "A", "C"]

    def test_duplicate_identity_last_wins(self):
        table = AllowedErrors.of([("NotFound", 404), ("NotFound", 410)])
        assert table.code_for("NotFound") == 410
        assert len(table) == 2

    @pytest.mark.parametrize("pair", [("NotFound",), "NotFound", 404, ("NotFound", 404, "extra")])
    def test_malformed_pair(self, pair):
        with pytest.raises(InvalidConfigError):
            AllowedErrors.of([pair])

    @pytest.mark.parametrize("code", ["404", 404.0, None, True])
    def test_non_integer_code(self, code):
        with pytest.raises(InvalidConfigError):
            AllowedErrors.of([("NotFound", code)])

    def test_unresolvable_descriptor(self):
        with pytest.raises(InvalidConfigError):
            AllowedErrors.of([(object(), 500)])


class TestAllowedErrorsLookup:
    @pytest.fixture
    def table(self):
        return AllowedErrors.of([(NotFound, 404)])

    def test_code_for_error(self, table):
        assert table.code_for_error(NotFound("missing")) == 404
        assert table.code_for_error(Conflict("taken")) is None

    def test_identity_not_type_is_the_key(self, table):
        """A different class carrying the same identity hits the same entry."""

        class WidgetMissing(ReturnableError):
            identity = "NotFound"

        assert table.code_for_error(WidgetMissing()) == 404

    def test_contains(self, table):
        assert "NotFound" in table
        assert "Conflict" not in table

    def test_to_dict(self, table):
        assert table.to_dict() == {"NotFound": 404}


class TestAllowedErrorsImmutability:
    def test_frozen(self):
        table = AllowedErrors.of([("NotFound", 404)])
        with pytest.raises(AttributeError):
            table.entries = ()

    def test_mapping_read_only(self):
        table = AllowedErrors.of([("NotFound", 404)])
        with pytest.raises(TypeError):
            table._codes["Conflict"] = 409

    def test_equality_and_hash(self):
        a = AllowedErrors.of([("NotFound", 404)])
        b = AllowedErrors.of([(NotFound, 404)])
        assert a == b
        assert hash(a) == hash(b)
