"""Conduit dependency resolution framework.

Conduit lets objects declare the named dependencies they need and resolves
those names at access time against an ordered chain of providers. There is no
container and no wiring step: providers are attached to consumer classes
explicitly, inherited along the class hierarchy, and consulted lazily when a
dependency is first read.

Key Features:
    - Declarative dependencies with optional, memoised and predicate variants
    - Dotted keys that read nested attributes from the resolved value
    - Deterministic precedence: subclass and later registrations win
    - Read-only, mutable and write-once providers
    - Constructor keywords that override providers for a single instance

Basic Usage:
    >>> from conduit.consumer import Consumer, dependency
    >>> from conduit.multi_value import MultiValueProvider
    >>>
    >>> class Report(Consumer):
    ...     database = dependency()
    ...     timezone = dependency("settings.timezone")
    >>>
    >>> Report.register_provider(MultiValueProvider({"database": db, "settings": settings}))
    >>> Report().database is db
    True

The framework consists of several core modules:
    - consumer: Dependency declaration, provider registration and chain composition
    - resolution: The lookup algorithm run by every accessor
    - provider: The provider contract and mutability policy
    - single_value, multi_value, process_scoped, lazy, parameters: Provider implementations
    - keys: Key validation and normalisation
    - domain: Core domain models (DependencyDeclaration, Mutability, UNDEFINED)
    - errors: Framework-specific exceptions
"""
