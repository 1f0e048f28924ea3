"""Merging of Terraform parameter mappings."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Tuple

ACCUMULATING_MAPS: Tuple[str, ...] = ("vars", "backend_config")
ACCUMULATING_LISTS: Tuple[str, ...] = (
    "var_files",
    "targets",
    "replaces",
    "plugin_dirs",
    "platforms",
)


class Merger:
    """Merge two parameter mappings with ``right`` taking precedence.

    Top-level keys are merged shallowly, except that the accumulating maps are
    merged key by key and the accumulating lists are concatenated. Empty
    accumulations are left out of the result.
    """

    def merge(self, left: Mapping[str, Any], right: Mapping[str, Any]) -> Dict[str, Any]:
        merged: Dict[str, Any] = {**left, **right}

        for parameter in ACCUMULATING_MAPS:
            combined = {**(left.get(parameter) or {}), **(right.get(parameter) or {})}
            if combined:
                merged[parameter] = combined
            else:
                merged.pop(parameter, None)

        for parameter in ACCUMULATING_LISTS:
            items = [*(left.get(parameter) or []), *(right.get(parameter) or [])]
            if items:
                merged[parameter] = items
            else:
                merged.pop(parameter, None)

        return merged


__all__ = ["ACCUMULATING_LISTS", "ACCUMULATING_MAPS", "Merger"]
