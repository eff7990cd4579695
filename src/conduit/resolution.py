"""The dependency resolution algorithm.

Resolution scans an ordered provider chain and returns the value of the first
provider that has the key. The chain is expected to be ordered most specific
first (see :meth:`conduit.consumer.Consumer.provider_chain`), which gives
later registrations precedence over earlier ones.
"""

import logging
from functools import reduce
from typing import Any, Iterable, Sequence

from conduit.domain import UNDEFINED
from conduit.errors import MissingDependencyError
from conduit.keys import normalize_key
from conduit.provider import Provider

__all__ = ["find_dependency", "has_dependency", "resolve_dependency", "dig"]

logger = logging.getLogger(__name__)


def find_dependency(providers: Iterable[Provider], key: Any) -> Any:
    """Return the value from the first provider that has ``key``, else ``UNDEFINED``."""
    key = normalize_key(key)
    for provider in providers:
        if provider.has(key):
            return provider.get(key)
    return UNDEFINED


def has_dependency(providers: Iterable[Provider], key: Any) -> bool:
    """Return True if any provider in the chain has ``key``. Never raises a domain error."""
    key = normalize_key(key)
    return any(provider.has(key) for provider in providers)


def resolve_dependency(
    providers: Iterable[Provider],
    key: Any,
    optional: bool = False,
    path: Sequence[str] = (),
) -> Any:
    """Resolve ``key`` against a provider chain.

    Args:
        providers: The provider chain, most specific first.
        key: The dependency key.
        optional: Return ``UNDEFINED`` instead of raising when nothing provides the key.
        path: Attribute names to read, in order, from the resolved value.

    Returns:
        The resolved (and drilled) value, or ``UNDEFINED`` for a missing
        optional dependency.

    Raises:
        MissingDependencyError: If the dependency is required and not provided.
        AttributeError: If an attribute on ``path`` does not exist. This is not
            translated into a :class:`MissingDependencyError`.
    """
    key = normalize_key(key)
    value = find_dependency(providers, key)

    if value is UNDEFINED:
        if optional:
            logger.debug("Optional dependency %r not provided", key)
            return UNDEFINED
        raise MissingDependencyError(f"dependency not found with key {key!r}")

    return dig(value, path) if path else value


def dig(value: Any, path: Sequence[str]) -> Any:
    """Read a sequence of attributes from ``value``.

    Example:
        >>> dig(application, ["tools", "object_tools"])  # application.tools.object_tools
    """
    return reduce(getattr, path, value)
