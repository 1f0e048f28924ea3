"""Base class for Terraform parameter providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping


class ConfigurationProvider(ABC):
    """Resolve the parameters a helper passes to Terraform.

    ``resolve`` receives the caller's overrides and returns the full parameter
    mapping; ``reset`` discards any state cached between resolutions.
    """

    @abstractmethod
    def resolve(self, overrides: Mapping[str, Any] | None = None) -> Dict[str, Any]:
        """Return the parameters to use given ``overrides``."""

    def reset(self) -> None:
        return None


__all__ = ["ConfigurationProvider"]
