"""Exceptions raised while providing and resolving dependencies."""

__all__ = [
    "DependencyError",
    "ImmutableError",
    "InvalidKeyError",
    "MissingDependencyError",
]


class DependencyError(Exception):
    """Base class for errors raised by providers and consumers."""

    pass


class MissingDependencyError(DependencyError):
    """Raised when a required dependency is not supplied by any provider."""

    pass


class InvalidKeyError(DependencyError):
    """Raised when writing a key that a provider does not recognise."""

    pass


class ImmutableError(DependencyError):
    """Raised when a provider's mutability policy forbids a write."""

    pass
