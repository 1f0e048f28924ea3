"""Matcher asserting that a plan includes particular resource changes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Sequence

from ..models import BoxedValue, Plan, ResourceChange, ResourceChangeQuery
from ..models.values import AttributePath, path_segments
from .base import PlanChangeMatcher, labelled, quantity, render_details
from .rendering import expected_structure, render


class Stage(str, Enum):
    """Side of the change an attribute assertion inspects."""

    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True, slots=True)
class AttributeAssertion:
    stage: Stage
    path: AttributePath
    expected: Any

    def value_in(self, resource_change: ResourceChange) -> BoxedValue:
        change = resource_change.change
        boxed = change.before_object if self.stage is Stage.BEFORE else change.after_object
        return boxed.get(self.path)

    def satisfied_by(self, resource_change: ResourceChange) -> bool:
        return self.value_in(resource_change).matches(self.expected)


class Cardinality:
    """Number of matching resource changes a plan must include."""

    AT_LEAST = "at least"
    AT_MOST = "at most"
    EXACTLY = "exactly"

    def __init__(self, qualifier: str, count: int) -> None:
        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError(f"Cardinality count must be an integer, got {count!r}")
        if count < 0:
            raise ValueError(f"Cardinality count must not be negative, got {count}")
        self.qualifier = qualifier
        self.count = count

    def satisfied_by(self, actual: int) -> bool:
        if self.qualifier == self.AT_LEAST:
            return actual >= self.count
        if self.qualifier == self.AT_MOST:
            return actual <= self.count
        return actual == self.count

    def describe(self, noun: str) -> str:
        if self.count == 0:
            return f"{self.qualifier} 0 {noun}s"
        return f"{self.qualifier} {quantity(self.count, noun)}"

    @property
    def is_default(self) -> bool:
        return self.qualifier == self.AT_LEAST and self.count == 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cardinality):
            return NotImplemented
        return (self.qualifier, self.count) == (other.qualifier, other.count)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Cardinality({self.qualifier!r}, {self.count})"


class IncludeResourceChange(PlanChangeMatcher):
    """Assert that a plan includes resource changes matching a definition.

    The definition selects candidate resource changes, attribute assertions
    added with :meth:`with_attribute_value` narrow them further and the
    cardinality decides how many survivors are required::

        matcher = include_resource_change(type="aws_s3_bucket").once()
        matcher.with_attribute_value("bucket", "logs")
        assert matcher.matches(plan), matcher.failure_message()
    """

    noun = "resource change"

    def __init__(
        self,
        definition: ResourceChangeQuery | Mapping[str, Any] | None = None,
        *,
        count: int | None = None,
        **fields: Any,
    ) -> None:
        query = ResourceChangeQuery.coerce(definition)
        if fields:
            query = query.merged(**fields)
        super().__init__(query)
        self.attributes: List[AttributeAssertion] = []
        self.cardinality = (
            Cardinality(Cardinality.AT_LEAST, 1)
            if count is None
            else Cardinality(Cardinality.EXACTLY, count)
        )

    # ------------------------------------------------------------------
    def with_attribute_value(self, *args: Any) -> "IncludeResourceChange":
        """Require an attribute value: ``([stage,] attribute_path, expected)``.

        ``stage`` is ``"before"`` or ``"after"`` and defaults to ``"after"``.
        Repeated calls accumulate and must all hold for the same change.
        """

        if len(args) == 2:
            stage, (path, expected) = Stage.AFTER, args
        elif len(args) == 3:
            stage, path, expected = Stage(args[0]), args[1], args[2]
        else:
            raise TypeError(
                "with_attribute_value() takes ([stage,] attribute_path, expected), "
                f"got {len(args)} arguments"
            )
        path_segments(path)
        self.attributes.append(AttributeAssertion(stage, path, expected))
        return self

    def once(self) -> "IncludeResourceChange":
        return self.exactly(1)

    def twice(self) -> "IncludeResourceChange":
        return self.exactly(2)

    def thrice(self) -> "IncludeResourceChange":
        return self.exactly(3)

    def exactly(self, count: int) -> "IncludeResourceChange":
        self.cardinality = Cardinality(Cardinality.EXACTLY, count)
        return self

    def at_least(self, count: int) -> "IncludeResourceChange":
        self.cardinality = Cardinality(Cardinality.AT_LEAST, count)
        return self

    def at_most(self, count: int) -> "IncludeResourceChange":
        self.cardinality = Cardinality(Cardinality.AT_MOST, count)
        return self

    @property
    def times(self) -> "IncludeResourceChange":
        return self

    # ------------------------------------------------------------------
    def matches(self, plan: Plan) -> bool:
        self.plan = plan
        return self.cardinality.satisfied_by(len(self.matching_changes(plan)))

    def definition_matches(self, plan: Plan) -> List[ResourceChange]:
        return plan.resource_changes_matching(self.definition)

    def matching_changes(self, plan: Plan) -> List[ResourceChange]:
        return [
            resource_change
            for resource_change in self.definition_matches(plan)
            if all(assertion.satisfied_by(resource_change) for assertion in self.attributes)
        ]

    # ------------------------------------------------------------------
    def expected_line(self) -> str:
        line = self._with_definition(
            f"a plan including {self.cardinality.describe(self.noun)}"
        )
        return line + self._attribute_lines()

    def failure_message(self, plan: Plan | None = None) -> str:
        plan = self._resolve_plan(plan)
        return self._message(self.expected_line(), self._got_line(plan))

    def failure_message_when_negated(self, plan: Plan | None = None) -> str:
        plan = self._resolve_plan(plan)
        matching = self.matching_changes(plan)
        if self.cardinality.is_default:
            expected = self._with_definition(f"a plan including no {self.noun}s")
            expected += self._attribute_lines()
            got = f"a plan including at least one {self.noun}"
        else:
            expected = "a plan not " + self.expected_line()[len("a plan "):]
            got = "a plan including " + quantity(len(matching), f"matching {self.noun}")
        if matching:
            got += labelled("matching resource changes are", self._entry_lines(matching))
        return self._message(expected, got)

    # ------------------------------------------------------------------
    def _stages(self) -> List[Stage]:
        used = {assertion.stage for assertion in self.attributes}
        return [stage for stage in Stage if stage in used]

    def _attribute_lines(self) -> str:
        lines = ""
        for stage in self._stages():
            structure = expected_structure(
                (assertion.path, assertion.expected)
                for assertion in self.attributes
                if assertion.stage is stage
            )
            lines += (
                f"\n          with attribute values {stage.value} "
                f"the {self.noun} is applied of:\n"
                + render(structure, 6, bare=True)
            )
        return lines

    def _got_line(self, plan: Plan) -> str:
        if not plan.resource_changes:
            return f"a plan including no {self.noun}s"

        line = "a plan including " + quantity(
            len(self.matching_changes(plan)), f"matching {self.noun}"
        )
        if self.attributes:
            relevant = self.definition_matches(plan)
            if relevant:
                line += labelled("relevant resource changes are", self._relevant_lines(relevant))
        line += labelled("available resource changes are", self._entry_lines(plan.resource_changes))
        return line

    def _relevant_lines(self, changes: Sequence[ResourceChange]) -> List[str]:
        stages = self._stages()
        lines = []
        for entry, resource_change in zip(self._entry_lines(changes), changes):
            if stages == [Stage.AFTER]:
                details: Any = resource_change.change.after_object
            elif stages == [Stage.BEFORE]:
                details = resource_change.change.before_object
            else:
                details = {
                    "before": resource_change.change.before_object,
                    "after": resource_change.change.after_object,
                }
            lines.append(entry + render_details(details))
        return lines


__all__ = ["AttributeAssertion", "Cardinality", "IncludeResourceChange", "Stage"]
