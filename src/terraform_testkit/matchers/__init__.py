"""Matchers over plan resource changes, output changes and values."""

from __future__ import annotations

from typing import Any, Mapping

from .assertions import assert_not, assert_that
from .base import PlanChangeMatcher
from .include_output_change import IncludeOutputChange
from .include_resource_change import AttributeAssertion, Cardinality, IncludeResourceChange, Stage
from .values import (
    EqualTo,
    Including,
    Matching,
    Satisfying,
    ValueMatcher,
    equal_to,
    including,
    matching,
    satisfying,
)


def include_resource_change(
    definition: Mapping[str, Any] | None = None, **fields: Any
) -> IncludeResourceChange:
    return IncludeResourceChange(definition, **fields)


def include_resource_creation(
    definition: Mapping[str, Any] | None = None, **fields: Any
) -> IncludeResourceChange:
    return IncludeResourceChange(definition, create=True, **fields)


def include_resource_read(
    definition: Mapping[str, Any] | None = None, **fields: Any
) -> IncludeResourceChange:
    return IncludeResourceChange(definition, read=True, **fields)


def include_resource_update(
    definition: Mapping[str, Any] | None = None, **fields: Any
) -> IncludeResourceChange:
    return IncludeResourceChange(definition, update=True, **fields)


def include_resource_replacement(
    definition: Mapping[str, Any] | None = None, **fields: Any
) -> IncludeResourceChange:
    return IncludeResourceChange(definition, replace=True, **fields)


def include_resource_deletion(
    definition: Mapping[str, Any] | None = None, **fields: Any
) -> IncludeResourceChange:
    return IncludeResourceChange(definition, delete=True, **fields)


def include_output_change(
    definition: Mapping[str, Any] | None = None, **fields: Any
) -> IncludeOutputChange:
    return IncludeOutputChange(definition, **fields)


def include_output_creation(
    definition: Mapping[str, Any] | None = None, **fields: Any
) -> IncludeOutputChange:
    return IncludeOutputChange(definition, create=True, **fields)


def include_output_update(
    definition: Mapping[str, Any] | None = None, **fields: Any
) -> IncludeOutputChange:
    return IncludeOutputChange(definition, update=True, **fields)


def include_output_deletion(
    definition: Mapping[str, Any] | None = None, **fields: Any
) -> IncludeOutputChange:
    return IncludeOutputChange(definition, delete=True, **fields)


__all__ = [
    "AttributeAssertion",
    "Cardinality",
    "EqualTo",
    "IncludeOutputChange",
    "IncludeResourceChange",
    "Including",
    "Matching",
    "PlanChangeMatcher",
    "Satisfying",
    "Stage",
    "ValueMatcher",
    "assert_not",
    "assert_that",
    "equal_to",
    "include_output_change",
    "include_output_creation",
    "include_output_deletion",
    "include_output_update",
    "include_resource_change",
    "include_resource_creation",
    "include_resource_deletion",
    "include_resource_read",
    "include_resource_replacement",
    "include_resource_update",
    "including",
    "matching",
    "satisfying",
]
