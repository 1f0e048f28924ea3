"""Provider backed by a fixed in-memory configuration."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from .base import ConfigurationProvider


class InMemoryProvider(ConfigurationProvider):
    """Layer overrides on top of a fixed configuration.

    Top-level keys from the overrides win; ``vars`` are merged key by key.
    """

    def __init__(self, configuration: Mapping[str, Any] | None = None) -> None:
        self.configuration: Dict[str, Any] = dict(configuration or {})

    def resolve(self, overrides: Mapping[str, Any] | None = None) -> Dict[str, Any]:
        overrides = overrides or {}
        resolved = {**self.configuration, **overrides}

        left_vars = self.configuration.get("vars") or {}
        right_vars = overrides.get("vars") or {}
        if left_vars or right_vars:
            resolved["vars"] = {**left_vars, **right_vars}
        return resolved


__all__ = ["InMemoryProvider"]
