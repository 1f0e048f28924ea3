"""Value matchers usable wherever an expected attribute or output value is accepted."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Tuple

from ..models.values import EqualTo, ValueMatcher, as_matcher, describe_value, values_equal


class Including(ValueMatcher):
    """Match strings containing, lists holding or maps with the given items.

    * string actual: every expected item is a substring;
    * list actual: every expected item equals some element;
    * map actual: every expected mapping's keys are present with matching
      values, and every expected string is a key.
    """

    def __init__(self, *expected: Any) -> None:
        if not expected:
            raise ValueError("including() requires at least one expected item")
        self.expected: Tuple[Any, ...] = expected

    def matches(self, actual: Any) -> bool:
        return all(self._includes(actual, item) for item in self.expected)

    def describe(self) -> str:
        return "including " + " and ".join(describe_value(item) for item in self.expected)

    def _includes(self, actual: Any, item: Any) -> bool:
        if isinstance(actual, str):
            return isinstance(item, str) and item in actual

        if isinstance(actual, (list, tuple)):
            return any(as_matcher(item).matches(element) for element in actual)

        if isinstance(actual, Mapping):
            if isinstance(item, Mapping):
                return all(
                    key in actual and as_matcher(value).matches(actual[key])
                    for key, value in item.items()
                )
            return isinstance(item, str) and item in actual

        return False

    def __repr__(self) -> str:
        return f"Including({', '.join(repr(item) for item in self.expected)})"


class Satisfying(ValueMatcher):
    """Adapt a plain predicate callable into a :class:`ValueMatcher`."""

    def __init__(self, predicate: Callable[[Any], bool], description: str | None = None) -> None:
        self.predicate = predicate
        self.description = description or getattr(predicate, "__name__", "predicate")

    def matches(self, actual: Any) -> bool:
        return bool(self.predicate(actual))

    def describe(self) -> str:
        return self.description


class Matching(ValueMatcher):
    """Adapt a third-party matcher exposing ``matches(actual)``.

    PyHamcrest matchers and similar objects are wrapped explicitly with
    :func:`matching`; their ``str()`` is used as the description.
    """

    def __init__(self, external: Any) -> None:
        if not callable(getattr(external, "matches", None)):
            raise TypeError(f"{external!r} does not provide a matches(actual) method")
        self.external = external

    def matches(self, actual: Any) -> bool:
        return bool(self.external.matches(actual))

    def describe(self) -> str:
        return str(self.external)


def equal_to(expected: Any) -> EqualTo:
    return EqualTo(expected)


def including(*expected: Any) -> Including:
    return Including(*expected)


def satisfying(predicate: Callable[[Any], bool], description: str | None = None) -> Satisfying:
    return Satisfying(predicate, description)


def matching(external: Any) -> Matching:
    return Matching(external)


__all__ = [
    "EqualTo",
    "Including",
    "Matching",
    "Satisfying",
    "ValueMatcher",
    "equal_to",
    "including",
    "matching",
    "satisfying",
    "values_equal",
]
