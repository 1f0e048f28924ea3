"""Lifecycle helpers driving Terraform from tests."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..configuration import ConfigurationProvider, identity_provider
from ..models import Plan
from ..streams import ResolvedStreams
from .apply import ApplyHelper, DestroyHelper
from .base import (
    ExecutionMode,
    MissingParametersError,
    TerraformHelper,
    VarsCallback,
    missing_parameters_message,
)
from .output import OutputHelper
from .plan import PlanHelper, random_plan_file_name
from .var import VarHelper


class TerraformHelpers:
    """Bundle the lifecycle helpers behind one set of shared settings.

    This is the object the ``terraform`` pytest fixture provides::

        def test_creates_bucket(terraform):
            plan = terraform.plan({"configuration_directory": "infra"})
            assert_that(plan, include_resource_creation(type="aws_s3_bucket"))
    """

    def __init__(
        self,
        binary: str = "terraform",
        execution_mode: ExecutionMode | str = ExecutionMode.IN_PLACE,
        configuration_provider: Optional[ConfigurationProvider] = None,
        streams: Optional[ResolvedStreams] = None,
    ) -> None:
        self.binary = binary
        self.execution_mode = ExecutionMode(execution_mode)
        self.configuration_provider = configuration_provider or identity_provider()
        self.streams = streams

    def _helper(self, helper_class: type[TerraformHelper]) -> Any:
        return helper_class(
            binary=self.binary,
            execution_mode=self.execution_mode,
            configuration_provider=self.configuration_provider,
            streams=self.streams,
        )

    # ------------------------------------------------------------------
    def plan(
        self, overrides: Mapping[str, Any] | None = None, vars: Optional[VarsCallback] = None
    ) -> Plan:
        return self._helper(PlanHelper).execute(overrides, vars)

    def apply(
        self, overrides: Mapping[str, Any] | None = None, vars: Optional[VarsCallback] = None
    ) -> bool:
        return self._helper(ApplyHelper).execute(overrides, vars)

    def destroy(
        self, overrides: Mapping[str, Any] | None = None, vars: Optional[VarsCallback] = None
    ) -> bool:
        return self._helper(DestroyHelper).execute(overrides, vars)

    def output(self, overrides: Mapping[str, Any] | None = None) -> Any:
        return self._helper(OutputHelper).execute(overrides)

    def var(
        self, overrides: Mapping[str, Any] | None = None, vars: Optional[VarsCallback] = None
    ) -> Any:
        return self._helper(VarHelper).execute(overrides, vars)

    def reset(self) -> None:
        """Discard state cached by the configuration provider, such as seeds."""

        self.configuration_provider.reset()


__all__ = [
    "ApplyHelper",
    "DestroyHelper",
    "ExecutionMode",
    "MissingParametersError",
    "OutputHelper",
    "PlanHelper",
    "TerraformHelper",
    "TerraformHelpers",
    "VarHelper",
    "VarsCallback",
    "missing_parameters_message",
    "random_plan_file_name",
]
