"""Shared parameter handling and lifecycle steps for the Terraform helpers."""

from __future__ import annotations

import inspect
import logging
import shutil
from enum import Enum
from pathlib import Path
from typing import Any, Callable, ClassVar, Dict, Mapping, Optional, Sequence, Tuple

from ..adapters import TerraformCli
from ..configuration import ConfigurationProvider, VarCaptor, identity_provider
from ..streams import ResolvedStreams

module_logger = logging.getLogger(__name__)

VarsCallback = Callable[[VarCaptor], None]


class MissingParametersError(ValueError):
    """Raised when required helper parameters were not resolved."""

    def __init__(self, parameters: Sequence[str]) -> None:
        self.parameters = list(parameters)
        super().__init__(missing_parameters_message(self.parameters))


def missing_parameters_message(parameters: Sequence[str]) -> str:
    quoted = [f"`{parameter}`" for parameter in parameters]
    if len(quoted) == 1:
        return f"Required parameter: {quoted[0]} missing."
    return f"Required parameters: {', '.join(quoted[:-1])} and {quoted[-1]} missing."


class ExecutionMode(str, Enum):
    """Where Terraform runs relative to the configuration under test.

    ``in_place`` runs in the configuration directory itself; ``isolated``
    copies ``source_directory`` into a freshly cleaned
    ``configuration_directory`` with ``terraform init -from-module``.
    """

    IN_PLACE = "in_place"
    ISOLATED = "isolated"


class TerraformHelper:
    """Base class for the lifecycle helpers.

    Parameters are resolved from the configuration provider, then the
    optional ``vars`` callback, then the helper's mandatory parameters.
    """

    REQUIRED_PARAMETERS: ClassVar[Mapping[ExecutionMode, Tuple[str, ...]]] = {
        ExecutionMode.IN_PLACE: ("configuration_directory",),
        ExecutionMode.ISOLATED: ("source_directory", "configuration_directory"),
    }

    def __init__(
        self,
        binary: str = "terraform",
        execution_mode: ExecutionMode | str = ExecutionMode.IN_PLACE,
        configuration_provider: Optional[ConfigurationProvider] = None,
        streams: Optional[ResolvedStreams] = None,
        cli: Optional[TerraformCli] = None,
    ) -> None:
        self.binary = binary
        self.execution_mode = ExecutionMode(execution_mode)
        self.configuration_provider = configuration_provider or identity_provider()
        self.streams = streams
        self.logger = streams.logger if streams else module_logger
        self.cli = cli or TerraformCli(
            binary,
            stdout=streams.stdout if streams else None,
            stderr=streams.stderr if streams else None,
            logger=self.logger,
        )

    # ------------------------------------------------------------------
    def resolve_parameters(
        self,
        overrides: Mapping[str, Any] | None = None,
        vars: Optional[VarsCallback] = None,
    ) -> Dict[str, Any]:
        """Return the parameters for one execution of this helper."""

        parameters = self.configuration_provider.resolve(dict(overrides or {}))
        if vars is not None:
            captor = VarCaptor(parameters.get("vars") or {})
            vars(captor)
            parameters = {**parameters, "vars": captor.to_dict()}
        parameters = {**parameters, **self.mandatory_parameters()}
        self.logger.debug("Resolved %s parameters: %s", type(self).__name__, sorted(parameters))
        return parameters

    def mandatory_parameters(self) -> Dict[str, Any]:
        return {}

    def required_parameters(self) -> Tuple[str, ...]:
        return self.REQUIRED_PARAMETERS.get(self.execution_mode, ())

    def validate(self, parameters: Mapping[str, Any]) -> None:
        missing = [name for name in self.required_parameters() if parameters.get(name) is None]
        if missing:
            raise MissingParametersError(missing)

    def should_execute(self, parameters: Mapping[str, Any]) -> bool:
        """Evaluate the optional ``only_if`` callable, with or without the parameters."""

        only_if = parameters.get("only_if")
        if only_if is None:
            return True
        if inspect.signature(only_if).parameters:
            return bool(only_if(parameters))
        return bool(only_if())

    # ------------------------------------------------------------------
    def clean(self, parameters: Mapping[str, Any]) -> None:
        if self.execution_mode is not ExecutionMode.ISOLATED:
            return
        directory = Path(parameters["configuration_directory"])
        self.logger.debug("Cleaning configuration directory %s", directory)
        shutil.rmtree(directory, ignore_errors=True)
        directory.mkdir(parents=True, exist_ok=True)

    def init(self, parameters: Mapping[str, Any]) -> None:
        init_parameters: Dict[str, Any] = {
            **parameters,
            "chdir": parameters["configuration_directory"],
            "input": False,
        }
        if self.execution_mode is ExecutionMode.ISOLATED:
            init_parameters["from_module"] = str(Path(parameters["source_directory"]).resolve())
        self.cli.init(init_parameters)

    def with_directory(self, parameters: Mapping[str, Any], **extra: Any) -> Dict[str, Any]:
        """Return ``parameters`` targeting the configuration directory and state file."""

        resolved: Dict[str, Any] = {
            **parameters,
            "chdir": parameters["configuration_directory"],
            **extra,
        }
        if parameters.get("state_file"):
            resolved["state"] = parameters["state_file"]
        return resolved


__all__ = [
    "ExecutionMode",
    "MissingParametersError",
    "TerraformHelper",
    "VarsCallback",
    "missing_parameters_message",
]
