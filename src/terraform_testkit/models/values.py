"""Boxed plan values and the comparison surface used by the matchers.

Decoded plan values are arbitrarily nested maps, lists and scalars. Boxing
them gives a single traversal and comparison interface that also carries the
plan's "unknown after apply" and "sensitive" markers.

Every comparison follows one convention: the expected side is always a
:class:`ValueMatcher` (plain values are wrapped in :class:`EqualTo`) and the
matcher is always handed the *unboxed* actual value.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Mapping, Sequence, Tuple

PathSegment = str | int
AttributePath = PathSegment | Sequence[PathSegment]


class _Unknown:
    """Sentinel standing in for a value that is only known after apply."""

    _instance: "_Unknown | None" = None

    def __new__(cls) -> "_Unknown":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "(known after apply)"


UNKNOWN = _Unknown()


# ----------------------------------------------------------------------
class ValueMatcher(ABC):
    """A predicate over an unboxed plan value."""

    @abstractmethod
    def matches(self, actual: Any) -> bool:
        """Return ``True`` when ``actual`` satisfies this matcher."""

    @abstractmethod
    def describe(self) -> str:
        """Return a short human readable description of the expectation."""


class EqualTo(ValueMatcher):
    """Literal-value matcher using deep structural equality."""

    def __init__(self, expected: Any) -> None:
        self.expected = unbox(expected)

    def matches(self, actual: Any) -> bool:
        return values_equal(actual, self.expected)

    def describe(self) -> str:
        return f"equal to {describe_value(self.expected)}"

    def __repr__(self) -> str:
        return f"EqualTo({self.expected!r})"


def as_matcher(expected: Any) -> ValueMatcher:
    """Return ``expected`` if it is a matcher, else an :class:`EqualTo` for it."""

    if isinstance(expected, ValueMatcher):
        return expected
    return EqualTo(expected)


def describe_value(value: Any) -> str:
    try:
        return json.dumps(unbox(value))
    except (TypeError, ValueError):
        return repr(value)


def values_equal(left: Any, right: Any) -> bool:
    """Deep structural equality over decoded plan values.

    Booleans only equal booleans, numbers compare numerically, maps compare
    by key set and values, and lists and tuples compare by position.
    """

    left = unbox(left)
    right = unbox(right)

    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right

    if isinstance(left, Mapping) or isinstance(right, Mapping):
        if not (isinstance(left, Mapping) and isinstance(right, Mapping)):
            return False
        if set(left) != set(right):
            return False
        return all(values_equal(left[key], right[key]) for key in left)

    if _is_sequence(left) or _is_sequence(right):
        if not (_is_sequence(left) and _is_sequence(right)):
            return False
        if len(left) != len(right):
            return False
        return all(values_equal(a, b) for a, b in zip(left, right))

    return left == right


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


# ----------------------------------------------------------------------
class BoxedValue(ABC):
    """Uniform wrapper around a decoded plan value."""

    is_absent = False
    is_unknown = False
    is_sensitive = False

    @abstractmethod
    def unbox(self) -> Any:
        """Return the raw value this box wraps."""

    def get(self, path: AttributePath) -> "BoxedValue":
        """Return the boxed value at ``path`` or :data:`ABSENT` if missing."""

        current: BoxedValue = self
        for segment in path_segments(path):
            current = current._child(segment)
            if current.is_absent:
                break
        return current

    def matches(self, expected: Any) -> bool:
        """Compare against a plain value or a :class:`ValueMatcher`."""

        return as_matcher(expected).matches(self.unbox())

    def _child(self, segment: PathSegment) -> "BoxedValue":
        return ABSENT

    def __eq__(self, other: object) -> bool:
        return values_equal(self.unbox(), other)

    __hash__ = None  # type: ignore[assignment]


class ScalarValue(BoxedValue):
    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def unbox(self) -> Any:
        return self.value

    def __repr__(self) -> str:
        return f"ScalarValue({self.value!r})"


class ListValue(BoxedValue):
    __slots__ = ("items",)

    def __init__(self, items: Iterable[BoxedValue]) -> None:
        self.items: Tuple[BoxedValue, ...] = tuple(items)

    def unbox(self) -> list[Any]:
        return [item.unbox() for item in self.items]

    def _child(self, segment: PathSegment) -> BoxedValue:
        if isinstance(segment, bool) or not isinstance(segment, int):
            return ABSENT
        if 0 <= segment < len(self.items):
            return self.items[segment]
        return ABSENT

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f"ListValue({list(self.items)!r})"


class MapValue(BoxedValue):
    __slots__ = ("entries",)

    def __init__(self, entries: Mapping[str, BoxedValue]) -> None:
        self.entries: Dict[str, BoxedValue] = dict(entries)

    def unbox(self) -> dict[str, Any]:
        return {key: value.unbox() for key, value in self.entries.items()}

    def _child(self, segment: PathSegment) -> BoxedValue:
        if not isinstance(segment, str):
            return ABSENT
        return self.entries.get(segment, ABSENT)

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"MapValue({self.entries!r})"


class UnknownValue(BoxedValue):
    is_unknown = True

    def unbox(self) -> Any:
        return UNKNOWN

    def __repr__(self) -> str:
        return "UnknownValue()"


class SensitiveValue(BoxedValue):
    """A value marked sensitive; compared as usual but rendered redacted."""

    __slots__ = ("inner",)
    is_sensitive = True

    def __init__(self, inner: BoxedValue) -> None:
        self.inner = inner

    def unbox(self) -> Any:
        return self.inner.unbox()

    def _child(self, segment: PathSegment) -> BoxedValue:
        child = self.inner._child(segment)
        if child.is_absent or child.is_sensitive:
            return child
        return SensitiveValue(child)

    def __repr__(self) -> str:
        return f"SensitiveValue({self.inner!r})"


class _AbsentValue(BoxedValue):
    is_absent = True

    def unbox(self) -> Any:
        return None

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: BoxedValue = _AbsentValue()


# ----------------------------------------------------------------------
def box(value: Any, unknown: Any = None, sensitive: Any = None) -> BoxedValue:
    """Wrap a decoded value, applying ``after_unknown``/``*_sensitive`` markers."""

    if isinstance(value, BoxedValue):
        return value
    if unknown is True:
        return UnknownValue()
    if sensitive is True:
        return SensitiveValue(box(value, unknown))

    if isinstance(value, Mapping):
        unknown_map = unknown if isinstance(unknown, Mapping) else {}
        sensitive_map = sensitive if isinstance(sensitive, Mapping) else {}
        entries = {
            key: box(item, unknown_map.get(key), sensitive_map.get(key))
            for key, item in value.items()
        }
        for key, marker in unknown_map.items():
            if key not in entries and marker is True:
                entries[key] = UnknownValue()
        return MapValue(entries)

    if _is_sequence(value):
        unknown_list = unknown if _is_sequence(unknown) else ()
        sensitive_list = sensitive if _is_sequence(sensitive) else ()
        items = [
            box(item, _at(unknown_list, index), _at(sensitive_list, index))
            for index, item in enumerate(value)
        ]
        for marker in unknown_list[len(items):]:
            if marker is True:
                items.append(UnknownValue())
        return ListValue(items)

    return ScalarValue(value)


def unbox(value: Any) -> Any:
    if isinstance(value, BoxedValue):
        return value.unbox()
    return value


def path_segments(path: AttributePath) -> Tuple[PathSegment, ...]:
    """Normalise a single key or a sequence of keys/indices to a tuple."""

    if isinstance(path, (str, int)):
        segments: Tuple[PathSegment, ...] = (path,)
    else:
        segments = tuple(path)

    if not segments:
        raise ValueError("Attribute path must contain at least one segment")
    for segment in segments:
        if isinstance(segment, bool) or not isinstance(segment, (str, int)):
            raise TypeError(f"Invalid attribute path segment: {segment!r}")
    return segments


def _at(values: Sequence[Any], index: int) -> Any:
    return values[index] if index < len(values) else None


__all__ = [
    "ABSENT",
    "UNKNOWN",
    "AttributePath",
    "BoxedValue",
    "EqualTo",
    "ListValue",
    "MapValue",
    "ScalarValue",
    "SensitiveValue",
    "UnknownValue",
    "ValueMatcher",
    "as_matcher",
    "box",
    "describe_value",
    "path_segments",
    "unbox",
    "values_equal",
]
