from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Dict, List

import pytest

from terraform_testkit.adapters import TerraformCli, TerraformCommandError
from terraform_testkit.configuration import in_memory_provider
from terraform_testkit.helpers import (
    ApplyHelper,
    DestroyHelper,
    MissingParametersError,
    OutputHelper,
    PlanHelper,
    TerraformHelpers,
    VarHelper,
    random_plan_file_name,
)
from terraform_testkit.models import Plan
from terraform_testkit.streams import FILE, resolve_streams


class RecordingCli(TerraformCli):
    """Record commands and answer them from canned standard output."""

    def __init__(self, responses: Dict[str, str] | None = None, fail_on: str | None = None) -> None:
        super().__init__("terraform")
        self.responses = responses or {}
        self.fail_on = fail_on
        self.commands: List[List[str]] = []

    def _run_command(self, args: List[str]) -> subprocess.CompletedProcess[str]:
        self.commands.append(args)
        subcommand = next(arg for arg in args[1:] if not arg.startswith("-"))
        if subcommand == self.fail_on:
            raise TerraformCommandError(f"{subcommand} failed", returncode=1)
        if subcommand == "plan":
            out = next(arg for arg in args if arg.startswith("-out="))[len("-out=") :]
            chdir = next(arg for arg in args if arg.startswith("-chdir="))[len("-chdir=") :]
            (Path(chdir) / out).write_text("binary", encoding="utf-8")
        return subprocess.CompletedProcess(args, 0, stdout=self.responses.get(subcommand, ""), stderr="")

    def subcommands(self) -> List[str]:
        return [next(arg for arg in command[1:] if not arg.startswith("-")) for command in self.commands]


def test_random_plan_file_name() -> None:
    name = random_plan_file_name()

    assert name.endswith(".tfplan")
    assert len(name) == len("0123456789.tfplan")
    assert name != random_plan_file_name()


def test_plan_helper_returns_plan_and_removes_plan_file(tmp_path, storage_plan_document) -> None:
    cli = RecordingCli({"show": json.dumps(storage_plan_document)})
    helper = PlanHelper(cli=cli)

    plan = helper.execute(
        {"configuration_directory": str(tmp_path), "plan_file_name": "fixed.tfplan"},
        lambda vars: setattr(vars, "region", "eu-west-2"),
    )

    assert isinstance(plan, Plan)
    assert len(plan.resource_changes) == 6
    assert cli.subcommands() == ["init", "plan", "show"]
    assert cli.commands[1] == [
        "terraform",
        f"-chdir={tmp_path}",
        "plan",
        "-input=false",
        "-out=fixed.tfplan",
        "-var",
        "region=eu-west-2",
    ]
    assert cli.commands[2][-3:] == ["-no-color", "-json", "fixed.tfplan"]
    assert not (tmp_path / "fixed.tfplan").exists()


def test_plan_helper_removes_plan_file_when_show_fails(tmp_path) -> None:
    cli = RecordingCli(fail_on="show")

    with pytest.raises(TerraformCommandError):
        PlanHelper(cli=cli).execute(
            {"configuration_directory": str(tmp_path), "plan_file_name": "fixed.tfplan"}
        )

    assert not (tmp_path / "fixed.tfplan").exists()


def test_plan_helper_validates_before_running(tmp_path) -> None:
    cli = RecordingCli()

    with pytest.raises(MissingParametersError):
        PlanHelper(execution_mode="isolated", cli=cli).execute(
            {"configuration_directory": str(tmp_path)}
        )

    assert cli.commands == []


def test_apply_helper_runs_init_and_apply(tmp_path) -> None:
    cli = RecordingCli()

    assert ApplyHelper(cli=cli).execute(
        {"configuration_directory": str(tmp_path), "state_file": "s.tfstate"}
    )

    assert cli.subcommands() == ["init", "apply"]
    assert cli.commands[1] == [
        "terraform",
        f"-chdir={tmp_path}",
        "apply",
        "-input=false",
        "-auto-approve",
        "-state=s.tfstate",
    ]


def test_destroy_helper_runs_destroy(tmp_path) -> None:
    cli = RecordingCli()

    assert DestroyHelper(cli=cli).execute({"configuration_directory": str(tmp_path)})

    assert cli.subcommands() == ["init", "destroy"]


def test_apply_helper_skips_when_only_if_is_false(tmp_path, caplog) -> None:
    cli = RecordingCli()

    with caplog.at_level("INFO", logger="terraform_testkit.helpers.base"):
        executed = ApplyHelper(cli=cli).execute(
            {"configuration_directory": str(tmp_path), "only_if": lambda parameters: False}
        )

    assert executed is False
    assert cli.commands == []
    assert "Execution not required. Skipping..." in caplog.text


def test_output_helper_decodes_json(tmp_path) -> None:
    cli = RecordingCli({"output": '{"name": "logs", "count": 2}'})

    value = OutputHelper(cli=cli).execute(
        {"configuration_directory": str(tmp_path), "name": "bucket"}
    )

    assert value == {"name": "logs", "count": 2}
    assert cli.commands[-1] == ["terraform", f"-chdir={tmp_path}", "output", "-json", "bucket"]


def test_output_helper_requires_name(tmp_path) -> None:
    with pytest.raises(MissingParametersError, match="`name`"):
        OutputHelper(cli=RecordingCli()).execute({"configuration_directory": str(tmp_path)})


def test_output_helper_rejects_invalid_json(tmp_path) -> None:
    cli = RecordingCli({"output": "not json"})

    with pytest.raises(TerraformCommandError, match="not valid JSON"):
        OutputHelper(cli=cli).execute({"configuration_directory": str(tmp_path), "name": "x"})


def test_var_helper_does_not_run_terraform() -> None:
    cli = RecordingCli()
    provider = in_memory_provider({"vars": {"region": "eu-west-2"}})

    value = VarHelper(configuration_provider=provider, cli=cli).execute(
        {"name": "region"}, lambda vars: setattr(vars, "zone", "a")
    )

    assert value == "eu-west-2"
    assert cli.commands == []


def test_facade_uses_shared_settings(monkeypatch, tmp_path) -> None:
    recorded: List[List[str]] = []

    def fake_run(self, args):
        recorded.append(args)
        return subprocess.CompletedProcess(args, 0, stdout='"value"', stderr="")

    monkeypatch.setattr(TerraformCli, "_run_command", fake_run)
    helpers = TerraformHelpers(
        binary="tf",
        configuration_provider=in_memory_provider({"configuration_directory": str(tmp_path)}),
    )

    assert helpers.output({"name": "url"}) == "value"
    assert helpers.var({"name": "missing"}) is None
    assert all(command[0] == "tf" for command in recorded)


def test_helpers_log_to_resolved_streams(monkeypatch, tmp_path) -> None:
    def fake_run(self, args):
        return subprocess.CompletedProcess(args, 0, stdout="applied\n", stderr="")

    monkeypatch.setattr(TerraformCli, "_run_command", fake_run)
    log_file = tmp_path / "terraform.log"
    streams = resolve_streams([FILE], file_path=log_file)
    helpers = TerraformHelpers(
        configuration_provider=in_memory_provider({"configuration_directory": "infra"}),
        streams=streams,
    )
    try:
        assert helpers.apply()
    finally:
        streams.close()

    content = log_file.read_text(encoding="utf-8")
    assert "Checking if execution of apply required..." in content
    assert "Running terraform -chdir=infra init -input=false" in content
    assert "Running terraform -chdir=infra apply -input=false -auto-approve" in content
    assert "applied\n" in content
