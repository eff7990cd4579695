import pytest

from conduit.errors import ImmutableError, InvalidKeyError
from conduit.process_scoped import ProcessScopedProvider, ProcessScopedRegistry
from conduit.single_value import SingleValueProvider


class Repository:
    pass


@pytest.fixture
def registry():
    return ProcessScopedRegistry()


def test_empty_provider_accepts_first_write():
    provider = ProcessScopedProvider("repository")
    repository = Repository()

    assert not provider.has("repository")
    provider.value = repository

    assert provider.value is repository
    assert provider.get("repository") is repository


def test_immutable_provider_rejects_second_write():
    provider = ProcessScopedProvider("repository")
    provider.value = Repository()

    with pytest.raises(
        ImmutableError,
        match="unable to change immutable value for ProcessScopedProvider with key 'repository'",
    ):
        provider.value = Repository()
    with pytest.raises(ImmutableError):
        provider.set("repository", Repository())


@pytest.mark.parametrize("initial", [None, "constructor value"])
def test_construction_value_counts_as_written(initial):
    provider = ProcessScopedProvider("repository", value=initial)

    assert provider.has("repository")
    with pytest.raises(ImmutableError):
        provider.value = "writer value"


@pytest.mark.parametrize("initial", [None, "constructor value"])
def test_mutable_provider_accepts_every_write(initial):
    provider = ProcessScopedProvider("repository", value=initial, mutable=True)

    provider.value = "writer value"
    provider.set("repository", "second value")

    assert provider.mutable
    assert provider.value == "second value"


def test_set_with_other_key_raises():
    provider = ProcessScopedProvider("repository")

    with pytest.raises(InvalidKeyError):
        provider.set("other", Repository())


def test_provider_keeps_options():
    provider = ProcessScopedProvider("repository", scope="application")

    assert provider.options == {"scope": "application"}
    assert not provider.mutable


def test_registry_fetches_registered_provider(registry):
    provider = registry.register(ProcessScopedProvider("repository"))

    assert "repository" in registry
    assert registry.fetch("repository") is provider
    assert list(registry) == [provider]
    assert len(registry) == 1


def test_registry_rejects_duplicate_keys(registry):
    registry.register(ProcessScopedProvider("repository"))

    with pytest.raises(ValueError, match="already registered with key 'repository'"):
        registry.register(ProcessScopedProvider("repository"))


def test_registry_rejects_other_providers(registry):
    with pytest.raises(TypeError, match="must be a ProcessScopedProvider"):
        registry.register(SingleValueProvider("repository"))


def test_registry_raises_for_unknown_key(registry):
    with pytest.raises(KeyError):
        registry.fetch("repository")


def test_registry_unregisters_provider(registry):
    provider = registry.register(ProcessScopedProvider("repository"))

    assert registry.unregister("repository") is provider
    assert "repository" not in registry
