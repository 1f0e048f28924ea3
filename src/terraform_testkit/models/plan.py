"""Read-only view over a decoded ``terraform show -json`` plan document."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple

from .change import ChangeKind
from .output import OutputChange
from .query import OutputChangeQuery, ResourceChangeQuery
from .resource import ResourceChange


class PlanFormatError(ValueError):
    """Raised when a plan document cannot be decoded into a :class:`Plan`."""


@dataclass(frozen=True, slots=True)
class Plan:
    """Resource and output changes planned by Terraform.

    ``output_changes`` keeps the insertion order of the source document, so
    listings built from it (for example in failure messages) follow the plan.
    """

    resource_changes: Tuple[ResourceChange, ...] = ()
    output_changes: Mapping[str, OutputChange] = field(
        default_factory=lambda: MappingProxyType({})
    )
    format_version: Optional[str] = None
    terraform_version: Optional[str] = None
    variables: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    # ------------------------------------------------------------------
    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Plan":
        """Build a plan from the decoded JSON emitted by ``terraform show -json``."""

        from ..normalization import PlanNormalizer

        return PlanNormalizer().normalize(document)

    @classmethod
    def from_json(cls, content: str) -> "Plan":
        try:
            document = json.loads(content)
        except json.JSONDecodeError as exc:
            raise PlanFormatError("Plan content was not valid JSON") from exc
        return cls.from_document(document)

    # ------------------------------------------------------------------
    def resource_changes_matching(
        self, query: ResourceChangeQuery | Mapping[str, Any] | None = None
    ) -> List[ResourceChange]:
        """Return, in plan order, the resource changes satisfying ``query``."""

        resolved = ResourceChangeQuery.coerce(query)
        return [change for change in self.resource_changes if resolved.matches(change)]

    def output_changes_matching(
        self, query: OutputChangeQuery | Mapping[str, Any] | None = None
    ) -> List[OutputChange]:
        """Return, in plan order, the output changes satisfying ``query``."""

        resolved = OutputChangeQuery.coerce(query)
        return [change for change in self.output_changes.values() if resolved.matches(change)]

    def resource_changes_with_type(self, type: str) -> List[ResourceChange]:
        return self.resource_changes_matching(ResourceChangeQuery(type=type))

    def resource_changes_of_kind(self, kind: ChangeKind) -> List[ResourceChange]:
        return [change for change in self.resource_changes if change.change.is_kind(kind)]

    def output_changes_of_kind(self, kind: ChangeKind) -> List[OutputChange]:
        return [change for change in self.output_changes.values() if change.change.is_kind(kind)]

    def resource_change(self, address: str) -> Optional[ResourceChange]:
        for change in self.resource_changes:
            if change.address == address:
                return change
        return None

    def output_change(self, name: str) -> Optional[OutputChange]:
        return self.output_changes.get(name)


__all__ = ["Plan", "PlanFormatError"]
