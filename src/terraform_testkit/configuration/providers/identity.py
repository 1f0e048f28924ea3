"""Provider returning the overrides unchanged."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from .base import ConfigurationProvider


class IdentityProvider(ConfigurationProvider):
    def resolve(self, overrides: Mapping[str, Any] | None = None) -> Dict[str, Any]:
        return dict(overrides or {})


__all__ = ["IdentityProvider"]
