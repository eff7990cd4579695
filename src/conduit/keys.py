"""Validation and normalisation of dependency keys.

Keys are non-empty strings. Every comparison, lookup and write uses the
canonical form returned by :func:`normalize_key`, so ``StrEnum`` members and
other ``str`` subclasses address the same entries as the equivalent plain
string.
"""

from typing import Any, Mapping, Optional

__all__ = ["validate_name", "normalize_key", "normalize_mapping", "split_key"]


def validate_name(value: Any, as_: str = "key") -> None:
    """Check that a value can be used as a key or accessor name.

    Args:
        value: The candidate name.
        as_: How to refer to the value in the error message.

    Raises:
        ValueError: If the value is ``None`` or empty.
        TypeError: If the value is not a string.
    """
    if value is None or (isinstance(value, str) and not value):
        raise ValueError(f"{as_} can't be blank")
    if not isinstance(value, str):
        raise TypeError(f"{as_} must be a string, got {type(value).__name__}")


def normalize_key(key: Any) -> str:
    """Validate a key and return its canonical string form.

    Example:
        >>> normalize_key("tools")
        'tools'
    """
    validate_name(key, "key")
    return str.__str__(key)


def split_key(
    key: str, as_: Optional[str] = None
) -> tuple[str, str, tuple[str, ...]]:
    """Split a dotted key into its resolution key, accessor name and drill path.

    The first segment is the key looked up in the provider chain, the remaining
    segments are attribute names read from the resolved value. Unless ``as_``
    is given the accessor is named after the last segment.

    Example:
        >>> split_key("application.tools.object_tools")
        ('application', 'object_tools', ('tools', 'object_tools'))
        >>> split_key("repository", as_="repo")
        ('repository', 'repo', ())
    """
    segments = normalize_key(key).split(".")
    if any(not segment for segment in segments):
        raise ValueError(f"key {key!r} contains an empty segment")

    if len(segments) == 1:
        return segments[0], as_ or segments[0], ()
    return segments[0], as_ or segments[-1], tuple(segments[1:])


def normalize_mapping(values: Any, as_: str = "values") -> dict[str, Any]:
    """Validate a mapping of keys to values and return a copy with canonical keys.

    Raises:
        TypeError: If ``values`` is not a mapping, or a key is not a string.
        ValueError: If a key is blank.
    """
    if not isinstance(values, Mapping):
        raise TypeError(f"{as_} must be a mapping, got {type(values).__name__}")

    normalized = {}
    for index, (key, value) in enumerate(values.items()):
        validate_name(key, f"{as_}.keys[{index}]")
        normalized[str.__str__(key)] = value
    return normalized
