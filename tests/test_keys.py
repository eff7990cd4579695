from enum import Enum

import pytest

from conduit.keys import normalize_key, normalize_mapping, split_key, validate_name


class Keys(str, Enum):
    TOOLS = "tools"


def test_normalize_key_returns_plain_string():
    assert normalize_key("tools") == "tools"
    assert normalize_key(Keys.TOOLS) == "tools"
    assert type(normalize_key(Keys.TOOLS)) is str


@pytest.mark.parametrize("value, error, message", [
    (None, ValueError, "as_ can't be blank"),
    ("", ValueError, "as_ can't be blank"),
    (b"tools", TypeError, "as_ must be a string, got bytes"),
])
def test_validate_name_reports_argument(value, error, message):
    with pytest.raises(error, match=message):
        validate_name(value, "as_")


def test_split_key_without_path():
    assert split_key("repository") == ("repository", "repository", ())
    assert split_key("repository", as_="repo") == ("repository", "repo", ())


def test_split_key_with_path():
    assert split_key("application.tools.object_tools") == (
        "application",
        "object_tools",
        ("tools", "object_tools"),
    )
    assert split_key("application.tools", as_="helpers") == (
        "application",
        "helpers",
        ("tools",),
    )


@pytest.mark.parametrize("key", ["application.", ".tools", "application..tools"])
def test_split_key_rejects_empty_segments(key):
    with pytest.raises(ValueError, match="empty segment"):
        split_key(key)


def test_normalize_mapping_copies_values():
    values = {Keys.TOOLS: 1}

    normalized = normalize_mapping(values)

    assert normalized == {"tools": 1}
    assert normalized is not values
