"""Attribute-style capture of Terraform variables."""

from __future__ import annotations

from typing import Any, Dict


class VarCaptor:
    """Collect Terraform variables assigned as attributes.

    Used by the helpers' ``vars`` callbacks::

        def configure(vars):
            vars.region = "eu-west-2"

    Reading a variable that was never set returns ``None``.
    """

    __slots__ = ("_vars",)

    def __init__(self, initial: Dict[str, Any] | None = None) -> None:
        object.__setattr__(self, "_vars", dict(initial or {}))

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        return self._vars.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        self._vars[name] = value

    def __delattr__(self, name: str) -> None:
        self._vars.pop(name, None)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._vars)

    def __repr__(self) -> str:
        return f"VarCaptor({self._vars!r})"


__all__ = ["VarCaptor"]
