"""
Allowed-errors table — the whitelist of returnable error identities.

An operation declares, at registration, which returnable errors it may
expose and the numeric code each one maps to. The table is built once,
frozen, and shared read-only by every invocation of that operation.

Examples:
    >>> table = AllowedErrors.of([("NotFound", 404), ("Conflict", 409)])
    >>> table.code_for("NotFound")
    404
    >>> table.code_for("Teapot") is None
    True
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from handlerkit.core.errors import InvalidConfigError, ReturnableError, error_identity


@dataclass(frozen=True, slots=True)
class AllowedErrors:
    """
    Ordered, immutable sequence of ``(identity, code)`` pairs.

    Identities are expected to be unique; when a caller registers the same
    identity twice, the last entry wins the lookup.

    Attributes:
        entries: The pairs in registration order.
    """

    entries: tuple[tuple[str, int], ...] = ()
    _codes: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for identity, code in self.entries:
            if not isinstance(identity, str) or not identity:
                raise InvalidConfigError("allowed_errors", identity, "Error identity must be a non-empty string")
            if isinstance(code, bool) or not isinstance(code, int):
                raise InvalidConfigError("allowed_errors", code, f"Error code for {identity!r} must be an integer")
        object.__setattr__(self, "_codes", MappingProxyType(dict(self.entries)))

    @classmethod
    def of(cls, pairs: AllowedErrors | Iterable[tuple[Any, int]] | None = None) -> AllowedErrors:
        """Build a table from ``(descriptor, code)`` pairs.

        Descriptors may be identity strings, ``ReturnableError`` subclasses or
        instances, or anything with a ``description``.
        """
        if isinstance(pairs, AllowedErrors):
            return pairs
        entries = []
        for pair in pairs or ():
            try:
                descriptor, code = pair
            except (TypeError, ValueError) as e:
                raise InvalidConfigError(
                    "allowed_errors", pair, f"Expected a (descriptor, code) pair, got {pair!r}"
                ) from e
            entries.append((error_identity(descriptor), code))
        return cls(tuple(entries))

    def code_for(self, identity: str) -> int | None:
        """Return the code whitelisted for ``identity``, or ``None``."""
        return self._codes.get(identity)

    def code_for_error(self, error: ReturnableError) -> int | None:
        """Return the code whitelisted for ``error``'s description, or ``None``."""
        return self.code_for(error.description)

    def __contains__(self, identity: object) -> bool:
        return identity in self._codes

    def __iter__(self) -> Iterator[tuple[str, int]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> dict[str, int]:
        return dict(self._codes)
