"""Domain models used throughout the framework."""

from dataclasses import dataclass, field
from enum import Enum

__all__ = ["UNDEFINED", "DependencyDeclaration", "Mutability"]


class _Undefined:
    """Marker for "no value stored", distinct from a stored ``None``."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return "UNDEFINED"


UNDEFINED = _Undefined()
"""The absent value.

Providers store ``UNDEFINED`` for keys that are declared but hold no value, and
the resolution algorithm returns it when an optional dependency is not found.
Public accessors report it to callers as ``None``.
"""


class Mutability(Enum):
    """Write policy of a provider, derived from its construction options."""

    READ_ONLY = "read_only"
    MUTABLE = "mutable"
    WRITE_ONCE = "write_once"


@dataclass(frozen=True)
class DependencyDeclaration:
    """Describes a dependency declared by a consumer class.

    Attributes:
        key: The canonical key resolved against the provider chain.
        accessor_name: Name of the generated property on the consumer.
        memoize: Whether a found value is cached on the consumer instance.
        optional: Whether a missing value resolves to ``None`` instead of raising.
        predicate: Whether a ``has_<accessor_name>`` property is generated.
        path: Attribute names read, in order, from the resolved value.
    """

    key: str
    accessor_name: str
    memoize: bool = True
    optional: bool = False
    predicate: bool = False
    path: tuple[str, ...] = field(default_factory=tuple)

    @property
    def predicate_name(self) -> str:
        return f"has_{self.accessor_name}"
