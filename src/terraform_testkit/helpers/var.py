"""Helper resolving the value a Terraform variable would be given."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple

from .base import TerraformHelper, VarsCallback


class VarHelper(TerraformHelper):
    """Resolve parameters as the other helpers do and return var ``name``.

    Terraform is not run.
    """

    def required_parameters(self) -> Tuple[str, ...]:
        return ("name",)

    def execute(
        self,
        overrides: Mapping[str, Any] | None = None,
        vars: Optional[VarsCallback] = None,
    ) -> Any:
        parameters = self.resolve_parameters(overrides, vars)
        self.validate(parameters)
        return (parameters.get("vars") or {}).get(parameters["name"])


__all__ = ["VarHelper"]
