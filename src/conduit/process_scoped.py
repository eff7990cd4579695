"""Single-key providers shared across a process, and a registry to hold them.

Neither the providers nor the registry are synchronised. Applications that
write to them from several threads must supply their own locking.
"""

import logging
from typing import Any, Iterator

from conduit.domain import UNDEFINED
from conduit.keys import normalize_key
from conduit.single_value import SingleValueProvider

__all__ = ["ProcessScopedProvider", "ProcessScopedRegistry"]

logger = logging.getLogger(__name__)


class ProcessScopedProvider(SingleValueProvider):
    """A late-bound binding intended to be shared by many consumer classes.

    The provider is typically created at import time without a value and
    registered on the consumer classes that need it; the application then
    supplies the value once during startup. The first write to an empty
    provider always succeeds. After any value has been written, including a
    value (even ``None``) passed to the constructor, further writes succeed only
    when the provider was created with ``mutable=True``.

    Example:
        >>> repository = ProcessScopedProvider("repository")
        >>> repository.value = Repository()
        >>> repository.value = Repository()
        Traceback (most recent call last):
        ...
        conduit.errors.ImmutableError: unable to change immutable value for ProcessScopedProvider with key 'repository'
    """

    def __init__(self, key: Any, value: Any = UNDEFINED, *, mutable: bool = False, **options: Any):
        super().__init__(key, value, read_only=False, write_once=not mutable, **options)

    @property
    def mutable(self) -> bool:
        return not self.write_once

    @SingleValueProvider.value.setter
    def value(self, value: Any) -> None:
        self.set(self.key, value)


class ProcessScopedRegistry:
    """Explicitly constructed collection of shared providers, keyed by their key.

    Example:
        >>> registry = ProcessScopedRegistry()
        >>> registry.register(ProcessScopedProvider("repository"))
        >>> registry.fetch("repository").value = Repository()
    """

    def __init__(self):
        self._providers: dict[str, ProcessScopedProvider] = {}

    def register(self, provider: ProcessScopedProvider) -> ProcessScopedProvider:
        """Add a provider and return it.

        Raises:
            TypeError: If ``provider`` is not a :class:`ProcessScopedProvider`.
            ValueError: If a provider is already registered for the same key.
        """
        if not isinstance(provider, ProcessScopedProvider):
            raise TypeError(
                f"provider must be a ProcessScopedProvider, got {type(provider).__name__}"
            )
        if provider.key in self._providers:
            raise ValueError(f"a provider is already registered with key {provider.key!r}")

        logger.debug("Registered process-scoped provider for %r", provider.key)
        self._providers[provider.key] = provider
        return provider

    def fetch(self, key: Any) -> ProcessScopedProvider:
        """Return the provider registered for ``key``.

        Raises:
            KeyError: If no provider is registered for the key.
        """
        return self._providers[normalize_key(key)]

    def unregister(self, key: Any) -> ProcessScopedProvider:
        return self._providers.pop(normalize_key(key))

    def __contains__(self, key: Any) -> bool:
        return normalize_key(key) in self._providers

    def __iter__(self) -> Iterator[ProcessScopedProvider]:
        return iter(list(self._providers.values()))

    def __len__(self) -> int:
        return len(self._providers)
