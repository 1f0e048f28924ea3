"""Resource change model."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Optional

from .change import Change


def derive_address(
    *,
    type: str,
    name: str,
    module_address: Optional[str] = None,
    mode: str = "managed",
    index: Optional[str | int] = None,
) -> str:
    """Return the fully qualified address Terraform uses for a resource instance."""

    address = f"{type}.{name}"
    if mode == "data":
        address = f"data.{address}"
    if module_address:
        address = f"{module_address}.{address}"
    if index is not None:
        rendered = json.dumps(index) if isinstance(index, str) else str(index)
        address = f"{address}[{rendered}]"
    return address


@dataclass(frozen=True, slots=True)
class ResourceChange:
    """A single planned resource mutation."""

    address: str
    type: str = ""
    name: str = ""
    module_address: Optional[str] = None
    mode: str = "managed"
    index: Optional[str | int] = None
    provider_name: Optional[str] = None
    deposed: Optional[str] = None
    action_reason: Optional[str] = None
    change: Change = field(default_factory=Change)

    @property
    def is_module_root(self) -> bool:
        """Return ``True`` when the resource is defined at the root module."""

        return not self.module_address

    def describe(self) -> str:
        return f"{self.address} ({', '.join(self.change.actions)})"


__all__ = ["ResourceChange", "derive_address"]
