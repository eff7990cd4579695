"""The provider contract and its mutability policy.

A provider makes one or more values available to consumers. How values are
stored or computed is left to subclasses, which implement a small set of hooks
operating on canonical (already normalised) keys:

    - ``_recognizes(key)``: whether the key may be written at all.
    - ``_has_value(key)``: whether the key currently holds a value.
    - ``_get_value(key)``: the stored value, only called when ``_has_value`` is true.
    - ``_set_value(key, value)``: store a value for a recognised key.
    - ``_is_written(key)``: whether the key has already been written, for the
      write-once policy.

The public methods validate and normalise keys and enforce the policy, so
subclasses never see raw keys or need to raise the domain errors themselves.
"""

from abc import ABC, abstractmethod
from typing import Any

from conduit.domain import UNDEFINED, Mutability
from conduit.errors import ImmutableError, InvalidKeyError
from conduit.keys import normalize_key

__all__ = ["Provider", "INCOMPATIBLE_OPTIONS_MESSAGE"]


INCOMPATIBLE_OPTIONS_MESSAGE = "incompatible options read_only and write_once"


class Provider(ABC):
    """Abstract base class for all providers.

    Args:
        read_only: If true (the default) every write raises :class:`ImmutableError`.
        write_once: If true each recognised key may be written exactly once.
            Requires ``read_only=False``.
        **options: Arbitrary metadata, returned by :attr:`options` and never
            consulted during resolution.

    Raises:
        ValueError: If both ``read_only`` and ``write_once`` are true.
    """

    def __init__(self, read_only: bool = True, write_once: bool = False, **options: Any):
        if read_only and write_once:
            raise ValueError(INCOMPATIBLE_OPTIONS_MESSAGE)

        self._read_only = bool(read_only)
        self._write_once = bool(write_once)
        self._options = dict(options)

    @property
    def options(self) -> dict[str, Any]:
        return dict(self._options)

    @property
    def read_only(self) -> bool:
        return self._read_only

    @property
    def write_once(self) -> bool:
        return self._write_once

    @property
    def mutability(self) -> Mutability:
        if self._read_only:
            return Mutability.READ_ONLY
        if self._write_once:
            return Mutability.WRITE_ONCE
        return Mutability.MUTABLE

    def get(self, key: Any) -> Any:
        """Return the value for ``key``, or ``UNDEFINED`` if the provider has none.

        A stored ``None`` is returned as ``None``; use :meth:`has` or compare
        against :data:`~conduit.domain.UNDEFINED` to tell the two apart.

        Raises:
            ValueError: If the key is blank.
            TypeError: If the key is not a string.
        """
        key = normalize_key(key)
        if not self._has_value(key):
            return UNDEFINED
        return self._get_value(key)

    def has(self, key: Any) -> bool:
        """Return True if the provider currently holds a value for ``key``."""
        return self._has_value(normalize_key(key))

    def set(self, key: Any, value: Any) -> Any:
        """Store ``value`` under ``key`` and return it.

        Raises:
            InvalidKeyError: If the provider does not recognise the key.
            ImmutableError: If the mutability policy forbids the write.
        """
        key = normalize_key(key)
        if not self._recognizes(key):
            raise InvalidKeyError(f"invalid key {key!r} for {type(self).__name__}")
        self._require_mutable(key)

        self._set_value(key, value)
        return value

    def _require_mutable(self, key: str) -> None:
        if self._is_mutable(key):
            return
        raise ImmutableError(
            f"unable to change immutable value for {type(self).__name__} with key {key!r}"
        )

    def _is_mutable(self, key: str) -> bool:
        if self._read_only:
            return False
        if self._write_once:
            return not self._is_written(key)
        return True

    @abstractmethod
    def _recognizes(self, key: str) -> bool:
        ...

    @abstractmethod
    def _has_value(self, key: str) -> bool:
        ...

    @abstractmethod
    def _get_value(self, key: str) -> Any:
        ...

    @abstractmethod
    def _set_value(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def _is_written(self, key: str) -> bool:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.mutability.value}>"

