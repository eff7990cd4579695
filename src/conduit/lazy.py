"""Providers that compute their values on every lookup.

Useful for values with a stable definition but a changing result, such as a
class looked up by name when code may be reloaded.
"""

import functools
import inspect
from typing import Any

from conduit.multi_value import MultiValueProvider
from conduit.single_value import SingleValueProvider

__all__ = ["LazyProviderMixin", "LazySingleValueProvider", "LazyMultiValueProvider"]


def _is_deferred(value: Any) -> bool:
    return (
        inspect.isfunction(value)
        or inspect.ismethod(value)
        or isinstance(value, functools.partial)
    )


class LazyProviderMixin:
    """Call stored functions on :meth:`get` and return their result.

    Only plain functions, lambdas, bound methods and :func:`functools.partial`
    objects are called. Classes and other callable objects are returned as
    they are, so a provider can still supply a class or a service instance that
    happens to define ``__call__``.

    Must precede the provider class in the bases.
    """

    def get(self, key: Any) -> Any:
        value = super().get(key)
        return value() if _is_deferred(value) else value


class LazySingleValueProvider(LazyProviderMixin, SingleValueProvider):
    pass


class LazyMultiValueProvider(LazyProviderMixin, MultiValueProvider):
    pass
