"""HCL-style rendering of plan values for matcher failure messages."""

from __future__ import annotations

import json
from typing import Any, Iterable, List, Mapping, Sequence, Tuple

from ..models.values import (
    UNKNOWN,
    BoxedValue,
    ListValue,
    MapValue,
    PathSegment,
    ValueMatcher,
    path_segments,
)

INDENT = "  "


class _Omitted:
    def __repr__(self) -> str:
        return "..."


OMITTED = _Omitted()


def indent(level: int) -> str:
    return INDENT * level


def render(value: Any, level: int = 0, bare: bool = False) -> str:
    """Render ``value`` as it would appear at nesting ``level``.

    A ``bare`` map renders as its ``key = value`` lines only, each already
    indented to ``level``.
    """

    if isinstance(value, ValueMatcher):
        return f"a value satisfying: {value.describe()}"
    if value is OMITTED:
        return "..."
    if value is UNKNOWN:
        return "(known after apply)"

    if isinstance(value, BoxedValue):
        if value.is_sensitive:
            return "(sensitive value)"
        if value.is_unknown:
            return "(known after apply)"
        if isinstance(value, MapValue):
            return _render_map(value.entries, level, bare)
        if isinstance(value, ListValue):
            return _render_list(value.items, level)
        return _render_scalar(value.unbox())

    if isinstance(value, Mapping):
        return _render_map(value, level, bare)
    if isinstance(value, (list, tuple)):
        return _render_list(value, level)
    return _render_scalar(value)


def _render_map(entries: Mapping[str, Any], level: int, bare: bool) -> str:
    entry_level = level if bare else level + 1
    lines = [
        f"{indent(entry_level)}{key} = {render(item, entry_level)}"
        for key, item in entries.items()
    ]
    if bare:
        return "\n".join(lines)
    if not lines:
        return "{}"
    return "{\n" + "\n".join(lines) + f"\n{indent(level)}}}"


def _render_list(items: Sequence[Any], level: int) -> str:
    if not items:
        return "[]"
    lines = [f"{indent(level + 1)}{render(item, level + 1)}" for item in items]
    return "[\n" + ",\n".join(lines) + f"\n{indent(level)}]"


def _render_scalar(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


# ----------------------------------------------------------------------
def expected_structure(assertions: Iterable[Tuple[Any, Any]]) -> Any:
    """Fold ``(attribute_path, expected)`` pairs into one nested value.

    List positions the paths skip over are filled with :data:`OMITTED`.
    """

    structure: Any = {}
    for path, expected in assertions:
        structure = _merge(structure, _nest(list(path_segments(path)), expected))
    return structure


def _nest(segments: List[PathSegment], value: Any) -> Any:
    if not segments:
        return value
    head, rest = segments[0], segments[1:]
    inner = _nest(rest, value)
    if isinstance(head, int):
        return [OMITTED] * head + [inner]
    return {head: inner}


def _merge(left: Any, right: Any) -> Any:
    if isinstance(left, dict) and isinstance(right, dict):
        merged = dict(left)
        for key, value in right.items():
            merged[key] = _merge(merged[key], value) if key in merged else value
        return merged

    if isinstance(left, list) and isinstance(right, list):
        merged_items = []
        for index in range(max(len(left), len(right))):
            first = left[index] if index < len(left) else OMITTED
            second = right[index] if index < len(right) else OMITTED
            if first is OMITTED:
                merged_items.append(second)
            elif second is OMITTED:
                merged_items.append(first)
            else:
                merged_items.append(_merge(first, second))
        return merged_items

    return right


__all__ = ["OMITTED", "expected_structure", "indent", "render"]
