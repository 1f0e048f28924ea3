"""Adapter layer package for invoking the Terraform command line."""

from .terraform import TerraformCli, TerraformCommandError, read_plan_file

__all__ = [
    "TerraformCli",
    "TerraformCommandError",
    "read_plan_file",
]
