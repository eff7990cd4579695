"""Provider synthesised from the keyword arguments passed to a consumer."""

from typing import Any, Iterable, Mapping, Optional

from conduit.keys import normalize_mapping
from conduit.multi_value import MultiValueProvider

__all__ = ["ParametersProvider", "extract_parameters"]


class ParametersProvider(MultiValueProvider):
    """Read-only provider holding dependency values passed to a constructor.

    It is prepended to a single instance's provider chain, so values passed
    explicitly take precedence over every provider registered on the class.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        super().__init__(values or {}, read_only=True)


def extract_parameters(
    keywords: Mapping[str, Any], dependency_keys: Iterable[str]
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split keyword arguments into ordinary keywords and dependency values.

    Args:
        keywords: The keyword arguments passed to the constructor.
        dependency_keys: Canonical keys declared by the consumer class.

    Returns:
        A ``(keywords, values)`` pair: the keywords to pass on to the next
        ``__init__`` in the MRO and the dependency values to provide.
    """
    dependency_keys = frozenset(dependency_keys)
    remaining: dict[str, Any] = {}
    values: dict[str, Any] = {}
    for key, value in normalize_mapping(keywords, "keywords").items():
        target = values if key in dependency_keys else remaining
        target[key] = value
    return remaining, values
