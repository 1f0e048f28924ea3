"""pytest-friendly assertions over plan change matchers."""

from __future__ import annotations

from ..models import Plan
from .base import PlanChangeMatcher


def assert_that(plan: Plan, matcher: PlanChangeMatcher) -> None:
    """Raise :class:`AssertionError` with the matcher's message unless it matches."""

    __tracebackhide__ = True
    if not matcher.matches(plan):
        raise AssertionError(matcher.failure_message(plan))


def assert_not(plan: Plan, matcher: PlanChangeMatcher) -> None:
    """Raise :class:`AssertionError` with the negated message when the matcher matches."""

    __tracebackhide__ = True
    if matcher.matches(plan):
        raise AssertionError(matcher.failure_message_when_negated(plan))


__all__ = ["assert_not", "assert_that"]
