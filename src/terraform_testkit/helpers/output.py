"""Helper reading an output value from Terraform state."""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Tuple

from ..adapters import TerraformCommandError
from .base import TerraformHelper


class OutputHelper(TerraformHelper):
    """Run ``init`` then ``output -json NAME`` and return the decoded value."""

    def required_parameters(self) -> Tuple[str, ...]:
        return ("name", *super().required_parameters())

    def mandatory_parameters(self) -> Dict[str, Any]:
        return {"json": True}

    def execute(self, overrides: Mapping[str, Any] | None = None) -> Any:
        parameters = self.resolve_parameters(overrides)
        self.validate(parameters)

        self.clean(parameters)
        self.init(parameters)
        content = self.cli.output(self.with_directory(parameters))

        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            raise TerraformCommandError(
                f"Output '{parameters['name']}' was not valid JSON"
            ) from exc


__all__ = ["OutputHelper"]
