"""Output change model."""

from __future__ import annotations

from dataclasses import dataclass, field

from .change import Change


@dataclass(frozen=True, slots=True)
class OutputChange:
    """A planned change to a named root module output."""

    name: str
    change: Change = field(default_factory=Change)

    def describe(self) -> str:
        return f"{self.name} ({', '.join(self.change.actions)})"


__all__ = ["OutputChange"]
