"""Shared behaviour of the plan change matchers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Sequence

from ..models import BoxedValue, Plan
from ..models.query import ChangeQuery
from ..models.values import MapValue
from .rendering import indent, render

_NUMBER_WORDS = {0: "no", 1: "one", 2: "two", 3: "three"}

LABEL_INDENT = indent(5)
ENTRY_LEVEL = 6
DETAIL_LEVEL = 8


def quantity(count: int, noun: str) -> str:
    """Return e.g. ``"no resource changes"``, ``"one resource change"``, ``"5 resource changes"``."""

    amount = _NUMBER_WORDS.get(count, str(count))
    return f"{amount} {noun}" if count == 1 else f"{amount} {noun}s"


def labelled(label: str, lines: Sequence[str]) -> str:
    return f"\n{LABEL_INDENT}{label}:\n" + "\n".join(lines)


class PlanChangeMatcher(ABC):
    """Base class for matchers evaluated against a :class:`Plan`.

    ``matches`` records the last evaluated plan so that the failure messages
    can be rendered afterwards, following pytest's ``assert x, message`` flow.
    Passing a plan to the message methods renders against that plan instead.
    """

    noun: str = "change"

    def __init__(self, definition: ChangeQuery) -> None:
        self.definition = definition
        self.plan: Plan | None = None

    # ------------------------------------------------------------------
    @abstractmethod
    def matches(self, plan: Plan) -> bool:
        """Return ``True`` when ``plan`` satisfies this matcher."""

    @abstractmethod
    def failure_message(self, plan: Plan | None = None) -> str:
        """Explain why the last (or given) plan did not match."""

    @abstractmethod
    def failure_message_when_negated(self, plan: Plan | None = None) -> str:
        """Explain why the last (or given) plan matched when it should not."""

    def describe(self) -> str:
        return self.expected_line().strip()

    @abstractmethod
    def expected_line(self) -> str:
        ...

    # ------------------------------------------------------------------
    def _resolve_plan(self, plan: Plan | None) -> Plan:
        resolved = plan if plan is not None else self.plan
        if resolved is None:
            raise RuntimeError(f"{type(self).__name__} has not been evaluated against a plan")
        return resolved

    def _message(self, expected: str, got: str) -> str:
        return f"\nexpected: {expected}\n     got: {got}"

    def _with_definition(self, line: str) -> str:
        if not self.definition:
            return line
        return f"{line} matching definition:\n" + _definition_lines(self.definition.fields)

    def _entry_lines(self, changes: Sequence[Any]) -> List[str]:
        return [f"{indent(ENTRY_LEVEL)}- {change.describe()}" for change in changes]


def _definition_lines(fields: Mapping[str, Any]) -> str:
    return "\n".join(
        f"{indent(ENTRY_LEVEL)}{key} = {render(value, ENTRY_LEVEL)}" for key, value in fields.items()
    )


def render_details(value: Any) -> str:
    """Render a value's ``key = value`` lines beneath a listed change, or ``""``."""

    if isinstance(value, BoxedValue):
        if value.is_sensitive or value.is_unknown or not isinstance(value, MapValue):
            return ""
    elif not isinstance(value, Mapping):
        return ""
    rendered = render(value, DETAIL_LEVEL, bare=True)
    return f"\n{rendered}" if rendered else ""


__all__ = ["PlanChangeMatcher", "labelled", "quantity", "render_details"]
