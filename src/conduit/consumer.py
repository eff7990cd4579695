"""Consumers: classes that declare dependencies and resolve them through providers.

A consumer class declares the dependencies it needs and the providers that
supply them. Both are inherited: a subclass sees every dependency declared by
its bases, and resolves against its own providers first, then those of its
bases in method resolution order.

Example:
    >>> settings = MultiValueProvider({"environment": "test"})
    >>>
    >>> class Service(Consumer):
    ...     environment = dependency()
    ...     logger = dependency("application.logger", optional=True)
    >>>
    >>> Service.register_provider(settings)
    >>> Service().environment
    'test'
    >>> Service(environment="prod").environment
    'prod'
"""

import logging
from typing import Any, Optional

from conduit.domain import UNDEFINED, DependencyDeclaration
from conduit.keys import split_key, validate_name
from conduit.parameters import ParametersProvider, extract_parameters
from conduit.provider import Provider
from conduit.resolution import has_dependency, resolve_dependency

__all__ = ["Consumer", "dependency"]

logger = logging.getLogger(__name__)

# Bumped on every provider registration; cached chains from an older
# generation are recomputed.
_registration_generation = 0


class dependency:
    """Declare a dependency in a consumer class body.

    The attribute becomes a read-only property that resolves the dependency
    through the instance's provider chain.

    Args:
        key: The key to resolve. Defaults to the attribute name. A dotted key
            such as ``"application.tools"`` resolves ``application`` and reads
            its ``tools`` attribute.
        memoize: Cache the resolved value on the instance after the first
            successful lookup.
        optional: Return ``None`` instead of raising
            :class:`~conduit.errors.MissingDependencyError` when nothing
            provides the key.
        predicate: Also define a ``has_<name>`` property reporting whether the
            dependency is currently provided.

    Example:
        >>> class Command(Consumer):
        ...     repository = dependency(predicate=True)
        ...     tools = dependency("application.tools", memoize=False)
    """

    def __init__(
        self,
        key: Optional[str] = None,
        *,
        memoize: bool = True,
        optional: bool = False,
        predicate: bool = False,
    ):
        if key is not None:
            validate_name(key, "key")
        self._key = key
        self._memoize = memoize
        self._optional = optional
        self._predicate = predicate
        self.declaration: Optional[DependencyDeclaration] = None

    def __set_name__(self, owner: type, name: str) -> None:
        if not (isinstance(owner, type) and issubclass(owner, Consumer)):
            raise TypeError(f"dependency {name!r} must be declared on a Consumer subclass")

        key, _, path = split_key(self._key or name, as_=name)
        self.declaration = DependencyDeclaration(
            key, name, self._memoize, self._optional, self._predicate, path
        )
        owner._add_declaration(self.declaration)

    def __get__(self, instance: Optional["Consumer"], owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return instance._resolve_declaration(self.declaration)

    def __set__(self, instance: "Consumer", value: Any) -> None:
        raise AttributeError(
            f"can't set dependency {self.declaration.accessor_name!r}; "
            "pass it to the constructor or write it to a provider"
        )

    def __repr__(self) -> str:
        return f"dependency({self.declaration or self._key!r})"


class _DependencyPredicate:
    """The ``has_<name>`` property generated for ``predicate=True``."""

    def __init__(self, declaration: DependencyDeclaration):
        self.declaration = declaration

    def __get__(self, instance: Optional["Consumer"], owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return instance.has_dependency(self.declaration.key)

    def __set__(self, instance: "Consumer", value: Any) -> None:
        raise AttributeError(f"can't set {self.declaration.predicate_name!r}")


class Consumer:
    """Base class for objects that resolve dependencies from providers.

    Class-level API:
        - :func:`dependency` descriptors in the class body, or :meth:`declare`
          after the class is defined, declare dependencies.
        - :meth:`register_provider` attaches a provider to the class.
        - :meth:`dependency_keys`, :meth:`dependency_declarations` and
          :meth:`provider_chain` introspect the merged declarations and the
          composed provider chain.

    Each instance copies the class's provider chain when it is constructed.
    Keyword arguments whose names are declared dependency keys are taken out
    of the constructor call and supplied by a provider placed ahead of every
    class-level provider; all other arguments are passed on to the next
    ``__init__`` in the MRO.

    Providers and memoised values are not synchronised; see
    :mod:`conduit.process_scoped`.
    """

    def __init__(self, *args, **kwargs):
        kwargs, values = extract_parameters(kwargs, type(self).dependency_keys())
        super().__init__(*args, **kwargs)

        self._providers: list[Provider] = type(self).provider_chain()
        self._resolved_dependencies: dict[str, Any] = {}
        if values:
            self.add_provider(ParametersProvider(values))

    @classmethod
    def declare(
        cls,
        key: str,
        as_: Optional[str] = None,
        memoize: bool = True,
        optional: bool = False,
        predicate: bool = False,
    ) -> str:
        """Declare a dependency on an existing consumer class.

        Equivalent to assigning a :func:`dependency` in the class body.

        Args:
            key: The key to resolve, optionally dotted to read nested attributes.
            as_: Name of the generated property. Defaults to the last segment
                of the key.
            memoize: Cache the resolved value on each instance.
            optional: Return ``None`` instead of raising when nothing provides the key.
            predicate: Also define a ``has_<name>`` property.

        Returns:
            The name of the generated property.

        Raises:
            ValueError: If the key or name is blank, not an identifier, or
                would shadow a :class:`Consumer` attribute.
            TypeError: If the key or name is not a string.

        Example:
            >>> Service.declare("application.tools.object_tools")
            'object_tools'
        """
        validate_name(key, "key")
        if as_ is not None:
            validate_name(as_, "as_")

        _, accessor_name, _ = split_key(key, as_=as_)
        descriptor = dependency(
            key, memoize=memoize, optional=optional, predicate=predicate
        )
        _validate_accessor_name(accessor_name)
        if predicate:
            _validate_accessor_name(f"has_{accessor_name}")
        setattr(cls, accessor_name, descriptor)
        descriptor.__set_name__(cls, accessor_name)
        return accessor_name

    @classmethod
    def _add_declaration(cls, declaration: DependencyDeclaration) -> None:
        _validate_accessor_name(declaration.accessor_name)
        if declaration.predicate:
            _validate_accessor_name(declaration.predicate_name)

        _own_attribute(cls, "_own_dependency_keys", set).add(declaration.key)
        _own_attribute(cls, "_own_declarations", dict)[declaration.accessor_name] = declaration

        if declaration.predicate:
            setattr(cls, declaration.predicate_name, _DependencyPredicate(declaration))

    @classmethod
    def dependency_keys(cls) -> frozenset[str]:
        """Canonical keys declared by this class and all of its bases."""
        return frozenset(
            key
            for klass in cls.__mro__
            for key in vars(klass).get("_own_dependency_keys", ())
        )

    @classmethod
    def dependency_declarations(cls) -> dict[str, DependencyDeclaration]:
        """Declarations keyed by property name, the most specific declaration winning."""
        declarations: dict[str, DependencyDeclaration] = {}
        for klass in reversed(cls.__mro__):
            declarations.update(vars(klass).get("_own_declarations", {}))
        return declarations

    @classmethod
    def register_provider(cls, provider: Provider) -> None:
        """Attach a provider to this class.

        Providers registered later take precedence over earlier ones, and
        providers registered on a subclass take precedence over those of its
        bases.

        Raises:
            TypeError: If ``provider`` is not a :class:`~conduit.provider.Provider`.
        """
        global _registration_generation

        if not isinstance(provider, Provider):
            raise TypeError(f"provider must be a Provider, got {type(provider).__name__}")

        _own_attribute(cls, "_own_providers", list).insert(0, provider)
        _registration_generation += 1
        logger.debug("Registered %r on %s", provider, cls.__qualname__)

    @classmethod
    def provider_chain(cls) -> list[Provider]:
        """Compose the providers of this class and its bases, most specific first.

        The chain follows the method resolution order: a class's own providers
        (most recently registered first) precede those of its bases, and a base
        listed earlier in a class statement precedes bases listed after it. The
        result is cached per class until a provider is registered anywhere.
        """
        generation = _registration_generation
        cached = vars(cls).get("_cached_chain")
        if cached is not None and cached[0] == generation:
            return list(cached[1])

        chain = tuple(
            provider
            for klass in cls.__mro__
            for provider in vars(klass).get("_own_providers", ())
        )
        logger.debug("Composed %d provider(s) for %s", len(chain), cls.__qualname__)
        cls._cached_chain = (generation, chain)
        return list(chain)

    def providers(self) -> list[Provider]:
        """The providers this instance resolves against, in lookup order."""
        return list(self._provider_list())

    def add_provider(self, provider: Provider) -> None:
        """Give this instance a provider that takes precedence over all others.

        Raises:
            TypeError: If ``provider`` is not a :class:`~conduit.provider.Provider`.
        """
        if not isinstance(provider, Provider):
            raise TypeError(f"provider must be a Provider, got {type(provider).__name__}")
        self._provider_list().insert(0, provider)

    def resolve(self, key: str, optional: bool = False) -> Any:
        """Resolve a dependency by key, bypassing any memoised value.

        Args:
            key: The dependency key.
            optional: Return ``None`` instead of raising when nothing provides the key.

        Raises:
            MissingDependencyError: If the key is required and not provided.
        """
        value = resolve_dependency(self._provider_list(), key, optional=optional)
        return None if value is UNDEFINED else value

    def has_dependency(self, key: str) -> bool:
        """Return True if any provider in this instance's chain has ``key``."""
        return has_dependency(self._provider_list(), key)

    def _provider_list(self) -> list[Provider]:
        # Subclasses may skip Consumer.__init__.
        try:
            return self._providers
        except AttributeError:
            self._providers = type(self).provider_chain()
            return self._providers

    def _resolve_declaration(self, declaration: DependencyDeclaration) -> Any:
        if not declaration.memoize:
            value = resolve_dependency(
                self._provider_list(), declaration.key, declaration.optional, declaration.path
            )
            return None if value is UNDEFINED else value

        cache = vars(self).setdefault("_resolved_dependencies", {})
        cache_key = ".".join((declaration.key, *declaration.path))
        if cache_key in cache:
            return cache[cache_key]

        value = resolve_dependency(
            self._provider_list(), declaration.key, declaration.optional, declaration.path
        )
        if value is UNDEFINED:
            return None

        logger.debug("Memoised dependency %r on %s", cache_key, type(self).__qualname__)
        cache[cache_key] = value
        return value


_RESERVED_NAMES = frozenset(dir(Consumer))


def _validate_accessor_name(name: str) -> None:
    if not name.isidentifier():
        raise ValueError(f"{name!r} is not a valid attribute name")
    if name in _RESERVED_NAMES:
        raise ValueError(f"{name!r} would shadow Consumer.{name}")


def _own_attribute(cls: type, name: str, factory: Any) -> Any:
    # Kept in the class's own __dict__ so bases are never mutated.
    if name not in vars(cls):
        setattr(cls, name, factory())
    return vars(cls)[name]
