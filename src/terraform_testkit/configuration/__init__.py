"""Parameter configuration for the Terraform helpers."""

from __future__ import annotations

from typing import Any, Mapping

from .merger import Merger
from .providers import (
    ChainProvider,
    ConfigurationError,
    ConfigurationProvider,
    IdentityProvider,
    InMemoryProvider,
    SeedProvider,
    YamlFileProvider,
)
from .var_captor import VarCaptor


def identity_provider() -> IdentityProvider:
    return IdentityProvider()


def in_memory_provider(configuration: Mapping[str, Any] | None = None) -> InMemoryProvider:
    return InMemoryProvider(configuration)


__all__ = [
    "ChainProvider",
    "ConfigurationError",
    "ConfigurationProvider",
    "IdentityProvider",
    "InMemoryProvider",
    "Merger",
    "SeedProvider",
    "VarCaptor",
    "YamlFileProvider",
    "identity_provider",
    "in_memory_provider",
]
