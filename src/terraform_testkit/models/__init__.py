"""Data models for decoded Terraform plans and the queries run against them."""

from .change import Change, ChangeKind, MalformedChangeError, classify_actions
from .output import OutputChange
from .plan import Plan, PlanFormatError
from .query import OutputChangeQuery, ResourceChangeQuery, UnknownQueryFieldError
from .resource import ResourceChange, derive_address
from .values import (
    ABSENT,
    UNKNOWN,
    BoxedValue,
    EqualTo,
    ValueMatcher,
    as_matcher,
    box,
    unbox,
    values_equal,
)

__all__ = [
    "ABSENT",
    "UNKNOWN",
    "BoxedValue",
    "Change",
    "ChangeKind",
    "EqualTo",
    "MalformedChangeError",
    "OutputChange",
    "OutputChangeQuery",
    "Plan",
    "PlanFormatError",
    "ResourceChange",
    "ResourceChangeQuery",
    "UnknownQueryFieldError",
    "ValueMatcher",
    "as_matcher",
    "box",
    "classify_actions",
    "derive_address",
    "unbox",
    "values_equal",
]
