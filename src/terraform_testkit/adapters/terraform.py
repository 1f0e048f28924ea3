"""Thin runner for the ``terraform`` command line."""

from __future__ import annotations

import json
import logging
import os
import subprocess
from pathlib import Path
from typing import IO, Any, Callable, Dict, List, Mapping, Optional, Tuple

module_logger = logging.getLogger(__name__)


class TerraformCommandError(RuntimeError):
    """Raised when Terraform cannot be executed or exits unsuccessfully."""

    def __init__(self, message: str, *, returncode: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


def _switch(flag: str) -> Callable[[Any], List[str]]:
    return lambda value: [flag] if value else []


def _assignment(flag: str) -> Callable[[Any], List[str]]:
    return lambda value: [f"{flag}={value}"] if value is not None else []


def _repeated(flag: str) -> Callable[[Any], List[str]]:
    return lambda values: [f"{flag}={value}" for value in values or []]


def _boolean(flag: str) -> Callable[[Any], List[str]]:
    return lambda value: [] if value is None else [f"{flag}={'true' if value else 'false'}"]


def _var_value(value: Any) -> str:
    return value if isinstance(value, str) else json.dumps(value)


def _vars(values: Mapping[str, Any] | None) -> List[str]:
    arguments: List[str] = []
    for name, value in (values or {}).items():
        arguments.extend(["-var", f"{name}={_var_value(value)}"])
    return arguments


def _backend_config(values: Mapping[str, Any] | None) -> List[str]:
    return [f"-backend-config={name}={value}" for name, value in (values or {}).items()]


OPTION_RENDERERS: Dict[str, Callable[[Any], List[str]]] = {
    "input": _boolean("-input"),
    "auto_approve": _switch("-auto-approve"),
    "no_color": _switch("-no-color"),
    "json": _switch("-json"),
    "upgrade": _switch("-upgrade"),
    "reconfigure": _switch("-reconfigure"),
    "destroy": _switch("-destroy"),
    "refresh_only": _switch("-refresh-only"),
    "out": _assignment("-out"),
    "state": _assignment("-state"),
    "from_module": _assignment("-from-module"),
    "vars": _vars,
    "var_files": _repeated("-var-file"),
    "targets": _repeated("-target"),
    "replaces": _repeated("-replace"),
    "backend_config": _backend_config,
    "plugin_dirs": _repeated("-plugin-dir"),
}

SUBCOMMAND_OPTIONS: Dict[str, Tuple[str, ...]] = {
    "init": (
        "input",
        "no_color",
        "upgrade",
        "reconfigure",
        "from_module",
        "backend_config",
        "plugin_dirs",
    ),
    "validate": ("no_color", "json"),
    "plan": (
        "input",
        "no_color",
        "destroy",
        "refresh_only",
        "out",
        "state",
        "vars",
        "var_files",
        "targets",
        "replaces",
    ),
    "show": ("no_color", "json"),
    "apply": (
        "input",
        "auto_approve",
        "no_color",
        "state",
        "vars",
        "var_files",
        "targets",
        "replaces",
    ),
    "destroy": (
        "input",
        "auto_approve",
        "no_color",
        "state",
        "vars",
        "var_files",
        "targets",
    ),
    "output": ("no_color", "json", "state"),
}

POSITIONAL_PARAMETERS: Dict[str, Tuple[str, ...]] = {
    "show": ("path",),
    "apply": ("path",),
    "output": ("name",),
}


class TerraformCli:
    """Build and run ``terraform`` commands from parameter mappings.

    Parameters a subcommand does not accept are ignored, so one resolved
    parameter mapping can drive every step of a helper. Captured output is
    copied to ``stdout``/``stderr`` when those streams are supplied, and the
    commands run are logged to ``logger``.
    """

    def __init__(
        self,
        binary: str = "terraform",
        *,
        stdout: Optional[IO[str]] = None,
        stderr: Optional[IO[str]] = None,
        env: Optional[Mapping[str, str]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.binary = binary
        self.stdout = stdout
        self.stderr = stderr
        self.env = dict(env) if env is not None else None
        self.logger = logger or module_logger

    # ------------------------------------------------------------------
    def init(self, parameters: Mapping[str, Any] | None = None) -> subprocess.CompletedProcess[str]:
        return self.run("init", parameters)

    def validate(
        self, parameters: Mapping[str, Any] | None = None
    ) -> subprocess.CompletedProcess[str]:
        return self.run("validate", parameters)

    def plan(self, parameters: Mapping[str, Any] | None = None) -> subprocess.CompletedProcess[str]:
        return self.run("plan", parameters)

    def show(self, parameters: Mapping[str, Any] | None = None) -> str:
        """Return the standard output of ``terraform show``."""

        return self.run("show", parameters).stdout

    def apply(self, parameters: Mapping[str, Any] | None = None) -> subprocess.CompletedProcess[str]:
        return self.run("apply", parameters)

    def destroy(
        self, parameters: Mapping[str, Any] | None = None
    ) -> subprocess.CompletedProcess[str]:
        return self.run("destroy", parameters)

    def output(self, parameters: Mapping[str, Any] | None = None) -> str:
        """Return the standard output of ``terraform output``."""

        return self.run("output", parameters).stdout

    # ------------------------------------------------------------------
    def build_command(self, subcommand: str, parameters: Mapping[str, Any] | None = None) -> List[str]:
        """Translate ``parameters`` into the argument list for ``subcommand``."""

        if subcommand not in SUBCOMMAND_OPTIONS:
            raise ValueError(f"Unsupported terraform subcommand: {subcommand}")

        parameters = parameters or {}
        command = [self.binary]
        if parameters.get("chdir"):
            command.append(f"-chdir={parameters['chdir']}")
        command.append(subcommand)

        for option in SUBCOMMAND_OPTIONS[subcommand]:
            if option in parameters:
                command.extend(OPTION_RENDERERS[option](parameters[option]))

        for positional in POSITIONAL_PARAMETERS.get(subcommand, ()):
            value = parameters.get(positional)
            if value is not None:
                command.append(str(value))

        return command

    def run(
        self, subcommand: str, parameters: Mapping[str, Any] | None = None
    ) -> subprocess.CompletedProcess[str]:
        command = self.build_command(subcommand, parameters)
        self.logger.info("Running %s", " ".join(command))
        completed = self._run_command(command)
        self._forward(completed)
        return completed

    # ------------------------------------------------------------------
    def _run_command(self, args: List[str]) -> subprocess.CompletedProcess[str]:
        env = None
        if self.env is not None:
            env = {**os.environ, **self.env}

        try:
            completed = subprocess.run(  # noqa: S603 - deliberate invocation of terraform
                args,
                env=env,
                check=False,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as exc:
            raise TerraformCommandError(f"Executable not found: {args[0]}") from exc

        if completed.returncode != 0:
            self._forward(completed)
            raise TerraformCommandError(
                f"Command '{' '.join(args)}' failed with exit code {completed.returncode}",
                returncode=completed.returncode,
                stderr=completed.stderr or "",
            )

        return completed

    def _forward(self, completed: subprocess.CompletedProcess[str]) -> None:
        if self.stdout is not None and completed.stdout:
            self.stdout.write(completed.stdout)
        if self.stderr is not None and completed.stderr:
            self.stderr.write(completed.stderr)


def read_plan_file(
    plan_file: Path | str, *, binary: str = "terraform", chdir: Path | str | None = None
) -> str:
    """Return the JSON rendering of a saved binary plan via ``terraform show -json``."""

    path = Path(plan_file)
    if not path.exists():
        raise TerraformCommandError(f"Terraform plan file not found: {path}")
    parameters: Dict[str, Any] = {"json": True, "no_color": True, "path": str(path.resolve())}
    if chdir is not None:
        parameters["chdir"] = str(chdir)
    return TerraformCli(binary).show(parameters)


__all__ = [
    "OPTION_RENDERERS",
    "POSITIONAL_PARAMETERS",
    "SUBCOMMAND_OPTIONS",
    "TerraformCli",
    "TerraformCommandError",
    "read_plan_file",
]
