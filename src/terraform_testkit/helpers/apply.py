"""Helpers applying and destroying a Terraform configuration."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .base import TerraformHelper, VarsCallback


class ApplyHelper(TerraformHelper):
    """Run ``init`` then ``apply -auto-approve``, unless ``only_if`` says otherwise."""

    command = "apply"

    def execute(
        self,
        overrides: Mapping[str, Any] | None = None,
        vars: Optional[VarsCallback] = None,
    ) -> bool:
        """Return ``True`` when Terraform ran and ``False`` when it was skipped."""

        parameters = self.resolve_parameters(overrides, vars)
        self.validate(parameters)

        self.logger.info("Checking if execution of %s required...", self.command)
        if not self.should_execute(parameters):
            self.logger.info("Execution not required. Skipping...")
            return False
        self.logger.info("Execution required. Continuing...")

        self.clean(parameters)
        self.init(parameters)
        self.cli.run(
            self.command,
            self.with_directory(parameters, input=False, auto_approve=True),
        )
        return True


class DestroyHelper(ApplyHelper):
    """Run ``init`` then ``destroy -auto-approve``, unless ``only_if`` says otherwise."""

    command = "destroy"


__all__ = ["ApplyHelper", "DestroyHelper"]
