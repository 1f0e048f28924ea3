"""Provider folding several providers left to right."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Sequence

from .base import ConfigurationProvider


class ChainProvider(ConfigurationProvider):
    """Feed the result of each provider into the next as its overrides."""

    def __init__(self, providers: Sequence[ConfigurationProvider] | None = None) -> None:
        self.providers = list(providers or [])

    def resolve(self, overrides: Mapping[str, Any] | None = None) -> Dict[str, Any]:
        resolved: Dict[str, Any] = dict(overrides or {})
        for provider in self.providers:
            resolved = provider.resolve(resolved)
        return resolved

    def reset(self) -> None:
        for provider in self.providers:
            provider.reset()


__all__ = ["ChainProvider"]
