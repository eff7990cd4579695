"""Provider bound to exactly one key."""

from typing import Any

from conduit.domain import UNDEFINED
from conduit.keys import normalize_key
from conduit.provider import Provider

__all__ = ["SingleValueProvider"]


class SingleValueProvider(Provider):
    """Supplies one value under one fixed key.

    Without a construction value the key is recognised but empty: ``has`` is
    false until a value is written. A mutable or write-once instance can
    therefore act as a late-bound binding whose value is supplied after the
    consumers that depend on it have been defined.

    A value passed to the constructor counts as written, so a write-once
    provider built with a value rejects every ``set``.

    Example:
        >>> env = SingleValueProvider("env", value="prod")
        >>> env.get("env")
        'prod'
        >>> env.set("env", "dev")
        Traceback (most recent call last):
        ...
        conduit.errors.ImmutableError: unable to change immutable value for SingleValueProvider with key 'env'
    """

    def __init__(self, key: Any, value: Any = UNDEFINED, **options: Any):
        super().__init__(**options)
        self._key = normalize_key(key)
        self._value = value

    @property
    def key(self) -> str:
        return self._key

    @property
    def value(self) -> Any:
        """The stored value, or ``None`` if no value has been written."""
        return None if self._value is UNDEFINED else self._value

    def _recognizes(self, key: str) -> bool:
        return key == self._key

    def _has_value(self, key: str) -> bool:
        return key == self._key and self._value is not UNDEFINED

    def _get_value(self, key: str) -> Any:
        return self._value

    def _set_value(self, key: str, value: Any) -> None:
        self._value = value

    def _is_written(self, key: str) -> bool:
        return self._value is not UNDEFINED

    def __repr__(self) -> str:
        return f"<{type(self).__name__} key={self._key!r} {self.mutability.value}>"
