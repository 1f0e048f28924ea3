"""Testing support for Terraform configurations: plan matchers and lifecycle helpers."""

from .configuration import identity_provider, in_memory_provider
from .helpers import ExecutionMode, MissingParametersError, TerraformHelpers
from .matchers import (
    assert_not,
    assert_that,
    equal_to,
    include_output_change,
    include_output_creation,
    include_output_deletion,
    include_output_update,
    include_resource_change,
    include_resource_creation,
    include_resource_deletion,
    include_resource_read,
    include_resource_replacement,
    include_resource_update,
    including,
    matching,
    satisfying,
)
from .models import (
    ABSENT,
    UNKNOWN,
    ChangeKind,
    MalformedChangeError,
    Plan,
    PlanFormatError,
    UnknownQueryFieldError,
)
from .streams import resolve_streams

__all__ = [
    "ABSENT",
    "UNKNOWN",
    "ChangeKind",
    "ExecutionMode",
    "MalformedChangeError",
    "MissingParametersError",
    "Plan",
    "PlanFormatError",
    "TerraformHelpers",
    "UnknownQueryFieldError",
    "assert_not",
    "assert_that",
    "equal_to",
    "identity_provider",
    "in_memory_provider",
    "include_output_change",
    "include_output_creation",
    "include_output_deletion",
    "include_output_update",
    "include_resource_change",
    "include_resource_creation",
    "include_resource_deletion",
    "include_resource_read",
    "include_resource_replacement",
    "include_resource_update",
    "including",
    "matching",
    "resolve_streams",
    "satisfying",
]
