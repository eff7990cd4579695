"""Provider backed by a mapping of keys to values."""

from typing import Any

from conduit.domain import UNDEFINED
from conduit.errors import ImmutableError
from conduit.keys import normalize_key, normalize_mapping
from conduit.provider import Provider

__all__ = ["MultiValueProvider"]


class MultiValueProvider(Provider):
    """Supplies values for every key of a mapping.

    An entry may hold :data:`~conduit.domain.UNDEFINED`: the key is declared,
    so it is a valid target for :meth:`set`, but it has no value yet and
    :meth:`has` reports false for it. Under the write-once policy such an entry
    accepts exactly one write.

    Args:
        values: Mapping of keys to values. Omit it to create a provider that
            recognises no keys until the whole mapping is replaced.
        **options: Mutability and metadata options, see :class:`~conduit.provider.Provider`.

    Raises:
        TypeError: If ``values`` is not a mapping or has a non-string key.
        ValueError: If a key is blank.

    Example:
        >>> provider = MultiValueProvider({"x": 1, "y": 2})
        >>> provider.get("x")
        1
        >>> provider.has("z")
        False
    """

    def __init__(self, values: Any = UNDEFINED, **options: Any):
        super().__init__(**options)
        self._values: dict[str, Any] = (
            {} if values is UNDEFINED else normalize_mapping(values)
        )

    @property
    def values(self) -> dict[str, Any]:
        """A copy of the mapping, undefined entries included."""
        return dict(self._values)

    @values.setter
    def values(self, values: Any) -> None:
        """Replace the whole mapping.

        Only mutable and write-once providers accept a replacement. Under the
        write-once policy every key that held a value in the current mapping
        stays protected: the replacement may neither restate nor drop it.

        Raises:
            ImmutableError: If the provider is read-only, or the replacement
                would restate or drop a key that has already been written.
        """
        values = normalize_mapping(values)
        if self.read_only:
            raise ImmutableError(
                f"unable to replace immutable values for {type(self).__name__}"
            )

        if self.write_once:
            for key in self._values:
                self._require_mutable(key)

        self._values = values

    def has(self, key: Any, allow_undefined: bool = False) -> bool:
        """Return True if the provider holds a value for ``key``.

        Args:
            key: The key to check.
            allow_undefined: Also return True for keys that are declared but
                currently hold no value.
        """
        key = normalize_key(key)
        if allow_undefined:
            return key in self._values
        return self._has_value(key)

    def _recognizes(self, key: str) -> bool:
        return key in self._values

    def _has_value(self, key: str) -> bool:
        return self._values.get(key, UNDEFINED) is not UNDEFINED

    def _get_value(self, key: str) -> Any:
        return self._values[key]

    def _set_value(self, key: str, value: Any) -> None:
        self._values[key] = value

    def _is_written(self, key: str) -> bool:
        return self._has_value(key)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} keys={list(self._values)!r} {self.mutability.value}>"
