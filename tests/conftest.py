from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

import pytest

from terraform_testkit.models import Plan

FIXTURES = Path(__file__).resolve().parent / "fixtures"


class PlanBuilder:
    """Assemble ``terraform show -json`` style documents for tests."""

    def __init__(self) -> None:
        self.resource_changes: List[Dict[str, Any]] = []
        self.output_changes: Dict[str, Dict[str, Any]] = {}

    def resource(
        self,
        type: str = "some_resource_type",
        name: str = "some_name",
        actions: Sequence[str] = ("create",),
        *,
        before: Any = None,
        after: Any = None,
        after_unknown: Any = None,
        before_sensitive: Any = None,
        after_sensitive: Any = None,
        **fields: Any,
    ) -> "PlanBuilder":
        content: Dict[str, Any] = {"type": type, "name": name, "mode": "managed", **fields}
        content["change"] = {
            "actions": list(actions),
            "before": before,
            "after": after,
            "after_unknown": after_unknown if after_unknown is not None else {},
            "before_sensitive": before_sensitive if before_sensitive is not None else {},
            "after_sensitive": after_sensitive if after_sensitive is not None else {},
        }
        self.resource_changes.append(content)
        return self

    def output(
        self,
        name: str,
        actions: Sequence[str] = ("create",),
        *,
        before: Any = None,
        after: Any = None,
        after_unknown: Any = False,
        sensitive: bool = False,
    ) -> "PlanBuilder":
        self.output_changes[name] = {
            "actions": list(actions),
            "before": before,
            "after": after,
            "after_unknown": after_unknown,
            "before_sensitive": sensitive,
            "after_sensitive": sensitive,
        }
        return self

    def document(self) -> Dict[str, Any]:
        return {
            "format_version": "1.2",
            "terraform_version": "1.6.6",
            "resource_changes": list(self.resource_changes),
            "output_changes": dict(self.output_changes),
        }

    def build(self) -> Plan:
        return Plan.from_document(self.document())


@pytest.fixture
def plan_builder() -> PlanBuilder:
    return PlanBuilder()


@pytest.fixture
def storage_plan_document() -> Dict[str, Any]:
    return json.loads((FIXTURES / "plan-storage.json").read_text(encoding="utf-8"))


@pytest.fixture
def storage_plan(storage_plan_document: Dict[str, Any]) -> Plan:
    return Plan.from_document(storage_plan_document)
