import functools
from itertools import count

from conduit.domain import UNDEFINED
from conduit.lazy import LazyMultiValueProvider, LazySingleValueProvider


class Clock:
    def __init__(self):
        self._ticks = count()

    def now(self):
        return next(self._ticks)


class Handler:
    def __call__(self):
        return "called"


def test_functions_are_called_on_every_get():
    ticks = count()
    provider = LazySingleValueProvider("tick", value=lambda: next(ticks))

    assert provider.get("tick") == 0
    assert provider.get("tick") == 1


def test_bound_methods_and_partials_are_called():
    clock = Clock()
    provider = LazyMultiValueProvider({
        "now": clock.now,
        "greeting": functools.partial("Hello {}".format, "Alan"),
    })

    assert provider.get("now") == 0
    assert provider.get("now") == 1
    assert provider.get("greeting") == "Hello Alan"


def test_classes_and_callable_objects_are_returned_as_is():
    handler = Handler()
    provider = LazyMultiValueProvider({"cls": Clock, "handler": handler, "plain": 3})

    assert provider.get("cls") is Clock
    assert provider.get("handler") is handler
    assert provider.get("plain") == 3


def test_missing_values_are_not_called():
    provider = LazySingleValueProvider("tick")

    assert provider.get("tick") is UNDEFINED
    assert provider.get("other") is UNDEFINED
