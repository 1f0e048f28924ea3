"""Matcher asserting that a plan includes a particular output change."""

from __future__ import annotations

from typing import Any, List, Mapping, Sequence

from ..models import OutputChange, OutputChangeQuery, Plan
from .base import PlanChangeMatcher, labelled, render_details
from .rendering import render

_NOT_SET = object()


class IncludeOutputChange(PlanChangeMatcher):
    """Assert that a plan includes at least one output change matching a definition.

    An expected value set with :meth:`with_value` is compared against the
    unboxed ``after`` value of each candidate.
    """

    noun = "output change"

    def __init__(
        self,
        definition: OutputChangeQuery | Mapping[str, Any] | None = None,
        **fields: Any,
    ) -> None:
        query = OutputChangeQuery.coerce(definition)
        if fields:
            query = query.merged(**fields)
        super().__init__(query)
        self.expected_value: Any = _NOT_SET

    # ------------------------------------------------------------------
    def with_value(self, expected: Any) -> "IncludeOutputChange":
        """Require the output's value after apply; replaces any earlier expectation."""

        self.expected_value = expected
        return self

    @property
    def has_expected_value(self) -> bool:
        return self.expected_value is not _NOT_SET

    def matches(self, plan: Plan) -> bool:
        self.plan = plan
        return bool(self.matching_changes(plan))

    def definition_matches(self, plan: Plan) -> List[OutputChange]:
        return plan.output_changes_matching(self.definition)

    def matching_changes(self, plan: Plan) -> List[OutputChange]:
        candidates = self.definition_matches(plan)
        if not self.has_expected_value:
            return candidates
        return [
            output_change
            for output_change in candidates
            if output_change.change.after_object.matches(self.expected_value)
        ]

    # ------------------------------------------------------------------
    def expected_line(self) -> str:
        line = self._with_definition(f"a plan including at least one {self.noun}")
        if self.has_expected_value:
            line += (
                f"\n          with value after the {self.noun} is applied of:\n"
                + render({"value": self.expected_value}, 6, bare=True)
            )
        return line

    def failure_message(self, plan: Plan | None = None) -> str:
        plan = self._resolve_plan(plan)
        return self._message(self.expected_line(), self._got_line(plan))

    def failure_message_when_negated(self, plan: Plan | None = None) -> str:
        plan = self._resolve_plan(plan)
        expected = self._with_definition(f"a plan including no {self.noun}s")
        got = f"a plan including at least one {self.noun}"
        matching = self.matching_changes(plan)
        if matching:
            got += labelled("matching output changes are", self._entry_lines(matching))
        return self._message(expected, got)

    # ------------------------------------------------------------------
    def _got_line(self, plan: Plan) -> str:
        if not plan.output_changes:
            return f"a plan including no {self.noun}s."

        line = f"a plan including no matching {self.noun}s."
        if self.has_expected_value:
            relevant = self.definition_matches(plan)
            if relevant:
                line += labelled("relevant output changes are", self._relevant_lines(relevant))
        line += labelled(
            "available output changes are", self._entry_lines(list(plan.output_changes.values()))
        )
        return line

    def _relevant_lines(self, changes: Sequence[OutputChange]) -> List[str]:
        return [
            entry + render_details({"value": output_change.change.after_object})
            for entry, output_change in zip(self._entry_lines(changes), changes)
        ]


__all__ = ["IncludeOutputChange"]
