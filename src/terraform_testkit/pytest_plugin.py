"""pytest plugin exposing the Terraform helpers as fixtures.

Registered through the ``pytest11`` entry point. Settings are read from the
ini file::

    [pytest]
    terraform_binary = /usr/local/bin/terraform
    terraform_execution_mode = isolated
    terraform_streams = standard file
    terraform_log_file = build/logs/terraform.log

Override the ``terraform_configuration_provider`` fixture in a ``conftest.py``
to supply parameters, for example from YAML files.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import pytest

from .configuration import ConfigurationProvider, identity_provider
from .helpers import ExecutionMode, TerraformHelpers
from .streams import ResolvedStreams, resolve_streams

DEFAULT_BINARY = "terraform"


@dataclass(frozen=True, slots=True)
class TerraformSettings:
    binary: str = DEFAULT_BINARY
    execution_mode: ExecutionMode = ExecutionMode.IN_PLACE
    streams: Tuple[str, ...] = ()
    log_file: Optional[str] = None


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini("terraform_binary", "Terraform binary used by the helpers", default=DEFAULT_BINARY)
    parser.addini(
        "terraform_execution_mode",
        "Where Terraform runs: in_place or isolated",
        default=ExecutionMode.IN_PLACE.value,
    )
    parser.addini(
        "terraform_streams",
        "Where Terraform output and logs go: standard and/or file",
        type="args",
        default=[],
    )
    parser.addini("terraform_log_file", "Log file used by the file stream", default="")


def settings_from_config(config: pytest.Config) -> TerraformSettings:
    """Build :class:`TerraformSettings` from the ini values of ``config``."""

    mode = str(config.getini("terraform_execution_mode") or ExecutionMode.IN_PLACE.value)
    try:
        execution_mode = ExecutionMode(mode.strip())
    except ValueError as exc:
        raise pytest.UsageError(
            f"terraform_execution_mode must be one of in_place, isolated; got {mode!r}"
        ) from exc

    return TerraformSettings(
        binary=str(config.getini("terraform_binary") or DEFAULT_BINARY),
        execution_mode=execution_mode,
        streams=tuple(config.getini("terraform_streams") or ()),
        log_file=str(config.getini("terraform_log_file") or "") or None,
    )


@pytest.fixture(scope="session")
def terraform_settings(pytestconfig: pytest.Config) -> TerraformSettings:
    return settings_from_config(pytestconfig)


@pytest.fixture(scope="session")
def terraform_streams(terraform_settings: TerraformSettings) -> Iterator[ResolvedStreams]:
    resolved = resolve_streams(
        streams=terraform_settings.streams,
        file_path=terraform_settings.log_file,
    )
    yield resolved
    resolved.close()


@pytest.fixture
def terraform_configuration_provider() -> ConfigurationProvider:
    return identity_provider()


@pytest.fixture
def terraform(
    terraform_settings: TerraformSettings,
    terraform_streams: ResolvedStreams,
    terraform_configuration_provider: ConfigurationProvider,
) -> TerraformHelpers:
    """Lifecycle helpers configured from the ini settings."""

    return TerraformHelpers(
        binary=terraform_settings.binary,
        execution_mode=terraform_settings.execution_mode,
        configuration_provider=terraform_configuration_provider,
        streams=terraform_streams,
    )


__all__ = [
    "TerraformSettings",
    "pytest_addoption",
    "settings_from_config",
    "terraform",
    "terraform_configuration_provider",
    "terraform_settings",
    "terraform_streams",
]
