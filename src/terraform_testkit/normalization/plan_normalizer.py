"""Conversion helpers that turn raw Terraform plan JSON into plan models."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping

from ..models import Change, OutputChange, Plan, PlanFormatError, ResourceChange, derive_address


class PlanNormalizer:
    """Normalize ``terraform show -json`` output into a :class:`Plan`."""

    def normalize(self, document: Mapping[str, Any]) -> Plan:
        """Return the plan model for the supplied decoded document."""

        if not isinstance(document, Mapping):
            raise PlanFormatError(
                f"Plan document must be a mapping, got {type(document).__name__}"
            )

        resource_changes: Iterable[Dict[str, Any]] = document.get("resource_changes", []) or []
        output_changes: Mapping[str, Dict[str, Any]] = document.get("output_changes", {}) or {}
        variables = document.get("variables", {}) or {}

        return Plan(
            resource_changes=tuple(self._normalize_resource_change(rc) for rc in resource_changes),
            output_changes=MappingProxyType(
                {
                    name: self._normalize_output_change(name, content)
                    for name, content in output_changes.items()
                }
            ),
            format_version=document.get("format_version"),
            terraform_version=document.get("terraform_version"),
            variables=MappingProxyType(
                {name: self._variable_value(value) for name, value in variables.items()}
            ),
        )

    # ------------------------------------------------------------------
    def _normalize_resource_change(self, content: Dict[str, Any]) -> ResourceChange:
        resource_type = content.get("type", "")
        name = content.get("name", "")
        module_address = content.get("module_address")
        mode = content.get("mode", "managed")
        index = content.get("index")

        address = content.get("address") or derive_address(
            type=resource_type,
            name=name,
            module_address=module_address,
            mode=mode,
            index=index,
        )

        return ResourceChange(
            address=address,
            type=resource_type,
            name=name,
            module_address=module_address,
            mode=mode,
            index=index,
            provider_name=content.get("provider_name"),
            deposed=content.get("deposed"),
            action_reason=content.get("action_reason"),
            change=self._normalize_change(content.get("change", {}) or {}),
        )

    def _normalize_output_change(self, name: str, content: Dict[str, Any]) -> OutputChange:
        # Terraform emits the change fields directly; wrapped content is accepted too.
        change_content = content.get("change", content) if isinstance(content, Mapping) else {}
        return OutputChange(name=name, change=self._normalize_change(change_content))

    def _normalize_change(self, content: Mapping[str, Any]) -> Change:
        actions: List[str] = list(content.get("actions", []) or [])
        return Change(
            actions=tuple(actions),
            before=content.get("before"),
            after=content.get("after"),
            after_unknown=content.get("after_unknown"),
            before_sensitive=content.get("before_sensitive"),
            after_sensitive=content.get("after_sensitive"),
        )

    def _variable_value(self, value: Any) -> Any:
        if isinstance(value, Mapping) and "value" in value:
            return value["value"]
        return value
