from __future__ import annotations

import io
import subprocess
from types import SimpleNamespace

import pytest

from terraform_testkit.adapters import TerraformCli, TerraformCommandError, read_plan_file
from terraform_testkit.adapters import terraform as terraform_module


def test_build_plan_command() -> None:
    cli = TerraformCli("tf")

    command = cli.build_command(
        "plan",
        {
            "chdir": "infra",
            "input": False,
            "out": "abc.tfplan",
            "state": "state.tfstate",
            "vars": {"region": "eu-west-2", "count": 2, "tags": {"Team": "platform"}},
            "var_files": ["a.tfvars", "b.tfvars"],
            "targets": ["aws_instance.web"],
            "replaces": ["aws_instance.db"],
            "configuration_directory": "infra",
            "auto_approve": True,
        },
    )

    assert command == [
        "tf",
        "-chdir=infra",
        "plan",
        "-input=false",
        "-out=abc.tfplan",
        "-state=state.tfstate",
        "-var",
        "region=eu-west-2",
        "-var",
        "count=2",
        "-var",
        'tags={"Team": "platform"}',
        "-var-file=a.tfvars",
        "-var-file=b.tfvars",
        "-target=aws_instance.web",
        "-replace=aws_instance.db",
    ]


def test_build_init_command() -> None:
    command = TerraformCli().build_command(
        "init",
        {
            "chdir": "build",
            "input": False,
            "from_module": "/src",
            "backend_config": {"bucket": "state", "key": "a.tfstate"},
            "plugin_dirs": ["/plugins"],
            "upgrade": True,
            "reconfigure": False,
        },
    )

    assert command == [
        "terraform",
        "-chdir=build",
        "init",
        "-input=false",
        "-upgrade",
        "-from-module=/src",
        "-backend-config=bucket=state",
        "-backend-config=key=a.tfstate",
        "-plugin-dir=/plugins",
    ]


def test_build_commands_with_positionals() -> None:
    cli = TerraformCli()

    assert cli.build_command("show", {"json": True, "no_color": True, "path": "p.tfplan"}) == [
        "terraform",
        "show",
        "-no-color",
        "-json",
        "p.tfplan",
    ]
    assert cli.build_command("output", {"json": True, "name": "url", "state": "s"}) == [
        "terraform",
        "output",
        "-json",
        "-state=s",
        "url",
    ]
    assert cli.build_command("apply", {"input": True, "auto_approve": True}) == [
        "terraform",
        "apply",
        "-input=true",
        "-auto-approve",
    ]


def test_build_command_rejects_unknown_subcommand() -> None:
    with pytest.raises(ValueError):
        TerraformCli().build_command("import", {})


def test_run_forwards_output_to_streams(monkeypatch) -> None:
    recorded = {}

    def fake_run(args, **kwargs):
        recorded["args"] = args
        recorded["kwargs"] = kwargs
        return SimpleNamespace(returncode=0, stdout="planned\n", stderr="warning\n")

    monkeypatch.setattr(terraform_module.subprocess, "run", fake_run)
    stdout, stderr = io.StringIO(), io.StringIO()

    TerraformCli(stdout=stdout, stderr=stderr).validate({"chdir": "infra"})

    assert recorded["args"] == ["terraform", "-chdir=infra", "validate"]
    assert recorded["kwargs"]["capture_output"] is True
    assert recorded["kwargs"]["text"] is True
    assert stdout.getvalue() == "planned\n"
    assert stderr.getvalue() == "warning\n"


def test_show_returns_stdout(monkeypatch) -> None:
    monkeypatch.setattr(
        terraform_module.subprocess,
        "run",
        lambda args, **kwargs: SimpleNamespace(returncode=0, stdout='{"a": 1}', stderr=""),
    )

    assert TerraformCli().show({"json": True, "path": "p"}) == '{"a": 1}'


def test_non_zero_exit_raises(monkeypatch) -> None:
    monkeypatch.setattr(
        terraform_module.subprocess,
        "run",
        lambda args, **kwargs: SimpleNamespace(returncode=1, stdout="", stderr="Error: boom"),
    )
    stderr = io.StringIO()

    with pytest.raises(TerraformCommandError) as excinfo:
        TerraformCli(stderr=stderr).plan({})

    assert excinfo.value.returncode == 1
    assert excinfo.value.stderr == "Error: boom"
    assert "exit code 1" in str(excinfo.value)
    assert stderr.getvalue() == "Error: boom"


def test_missing_binary_raises(monkeypatch) -> None:
    def fake_run(args, **kwargs):
        raise FileNotFoundError(args[0])

    monkeypatch.setattr(terraform_module.subprocess, "run", fake_run)

    with pytest.raises(TerraformCommandError, match="Executable not found: nope"):
        TerraformCli("nope").init({})


def test_environment_is_layered_over_os_environ(monkeypatch) -> None:
    recorded = {}

    def fake_run(args, **kwargs):
        recorded["env"] = kwargs["env"]
        return subprocess.CompletedProcess(args, 0, stdout="", stderr="")

    monkeypatch.setattr(terraform_module.subprocess, "run", fake_run)
    monkeypatch.setenv("PATH", "/usr/bin")

    TerraformCli(env={"TF_LOG": "DEBUG"}).init({})

    assert recorded["env"]["TF_LOG"] == "DEBUG"
    assert recorded["env"]["PATH"] == "/usr/bin"


def test_read_plan_file(monkeypatch, tmp_path) -> None:
    plan_file = tmp_path / "saved.tfplan"
    plan_file.write_text("", encoding="utf-8")
    recorded = {}

    def fake_run(self, args):
        recorded["args"] = args
        return SimpleNamespace(returncode=0, stdout='{"format_version": "1.2"}', stderr="")

    monkeypatch.setattr(TerraformCli, "_run_command", fake_run)

    assert read_plan_file(plan_file, binary="tf") == '{"format_version": "1.2"}'
    assert recorded["args"] == ["tf", "show", "-no-color", "-json", str(plan_file.resolve())]


def test_read_plan_file_requires_existing_file(tmp_path) -> None:
    with pytest.raises(TerraformCommandError, match="not found"):
        read_plan_file(tmp_path / "missing.tfplan")
