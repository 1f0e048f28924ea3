"""Helper producing the plan of a Terraform configuration."""

from __future__ import annotations

import secrets
from pathlib import Path
from typing import Any, Mapping, Optional

from ..models import Plan
from .base import TerraformHelper, VarsCallback


def random_plan_file_name() -> str:
    return f"{secrets.token_hex(5)}.tfplan"


class PlanHelper(TerraformHelper):
    """Run ``init``, ``plan`` and ``show -json`` and return the decoded :class:`Plan`.

    The binary plan file is written to the configuration directory and removed
    once it has been shown.
    """

    def execute(
        self,
        overrides: Mapping[str, Any] | None = None,
        vars: Optional[VarsCallback] = None,
    ) -> Plan:
        parameters = self.resolve_parameters(overrides, vars)
        self.validate(parameters)

        self.clean(parameters)
        self.init(parameters)

        plan_file = parameters.get("plan_file_name") or random_plan_file_name()
        try:
            self.cli.plan(self.with_directory(parameters, out=plan_file, input=False))
            contents = self.cli.show(
                self.with_directory(parameters, path=plan_file, json=True, no_color=True)
            )
        finally:
            self.remove(parameters, plan_file)

        return Plan.from_json(contents)

    def remove(self, parameters: Mapping[str, Any], file_name: str) -> None:
        path = Path(parameters["configuration_directory"]) / file_name
        self.logger.debug("Removing plan file %s", path)
        path.unlink(missing_ok=True)


__all__ = ["PlanHelper", "random_plan_file_name"]
