from __future__ import annotations

import subprocess
from typing import Any, Dict, List

import pytest

from terraform_testkit.adapters import TerraformCli
from terraform_testkit.configuration import in_memory_provider
from terraform_testkit.helpers import (
    ExecutionMode,
    MissingParametersError,
    TerraformHelper,
    missing_parameters_message,
)


class RecordingCli(TerraformCli):
    def __init__(self) -> None:
        super().__init__("terraform")
        self.commands: List[List[str]] = []

    def _run_command(self, args: List[str]) -> subprocess.CompletedProcess[str]:
        self.commands.append(args)
        return subprocess.CompletedProcess(args, 0, stdout="", stderr="")


@pytest.mark.parametrize(
    ("parameters", "message"),
    [
        (["name"], "Required parameter: `name` missing."),
        (["a", "b"], "Required parameters: `a` and `b` missing."),
        (["a", "b", "c"], "Required parameters: `a`, `b` and `c` missing."),
    ],
)
def test_missing_parameters_message(parameters, message) -> None:
    assert missing_parameters_message(parameters) == message


def test_validate_reports_missing_parameters_per_mode() -> None:
    in_place = TerraformHelper(cli=RecordingCli())
    isolated = TerraformHelper(execution_mode="isolated", cli=RecordingCli())

    with pytest.raises(MissingParametersError, match="`configuration_directory` missing"):
        in_place.validate({})
    with pytest.raises(MissingParametersError) as excinfo:
        isolated.validate({"configuration_directory": None})

    assert excinfo.value.parameters == ["source_directory", "configuration_directory"]


def test_resolve_parameters_layers_provider_vars_and_overrides() -> None:
    provider = in_memory_provider(
        {"configuration_directory": "infra", "vars": {"region": "eu-west-2", "size": "small"}}
    )
    helper = TerraformHelper(configuration_provider=provider, cli=RecordingCli())

    def vars(captor: Any) -> None:
        captor.size = f"{captor.size}-plus"
        captor.name = captor.missing or "default"

    parameters = helper.resolve_parameters({"vars": {"size": "medium"}}, vars)

    assert parameters["configuration_directory"] == "infra"
    assert parameters["vars"] == {"region": "eu-west-2", "size": "medium-plus", "name": "default"}


def test_should_execute_without_only_if() -> None:
    assert TerraformHelper(cli=RecordingCli()).should_execute({})


def test_should_execute_calls_only_if_with_or_without_parameters() -> None:
    helper = TerraformHelper(cli=RecordingCli())
    seen: Dict[str, Any] = {}

    def with_parameters(parameters: Dict[str, Any]) -> bool:
        seen.update(parameters)
        return False

    assert helper.should_execute({"only_if": lambda: True})
    assert not helper.should_execute({"only_if": with_parameters, "flag": 1})
    assert seen["flag"] == 1


def test_clean_only_touches_isolated_directories(tmp_path) -> None:
    directory = tmp_path / "work"
    directory.mkdir()
    (directory / "stale.tf").write_text("", encoding="utf-8")

    TerraformHelper(cli=RecordingCli()).clean({"configuration_directory": str(directory)})
    assert (directory / "stale.tf").exists()

    TerraformHelper(execution_mode=ExecutionMode.ISOLATED, cli=RecordingCli()).clean(
        {"configuration_directory": str(directory)}
    )
    assert directory.is_dir()
    assert list(directory.iterdir()) == []


def test_init_copies_source_module_when_isolated(tmp_path) -> None:
    cli = RecordingCli()
    helper = TerraformHelper(execution_mode="isolated", cli=cli)

    helper.init({"source_directory": str(tmp_path), "configuration_directory": "build"})

    assert cli.commands == [
        [
            "terraform",
            "-chdir=build",
            "init",
            "-input=false",
            f"-from-module={tmp_path.resolve()}",
        ]
    ]


def test_with_directory_maps_state_file() -> None:
    helper = TerraformHelper(cli=RecordingCli())

    resolved = helper.with_directory(
        {"configuration_directory": "infra", "state_file": "s.tfstate"}, json=True
    )

    assert resolved["chdir"] == "infra"
    assert resolved["state"] == "s.tfstate"
    assert resolved["json"] is True
