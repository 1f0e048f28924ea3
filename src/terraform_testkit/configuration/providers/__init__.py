"""Providers resolving the parameters passed to Terraform."""

from .base import ConfigurationProvider
from .chain import ChainProvider
from .identity import IdentityProvider
from .in_memory import InMemoryProvider
from .seed import SeedProvider, generate_seed
from .yaml_file import ConfigurationError, YamlFileProvider

__all__ = [
    "ChainProvider",
    "ConfigurationError",
    "ConfigurationProvider",
    "IdentityProvider",
    "InMemoryProvider",
    "SeedProvider",
    "YamlFileProvider",
    "generate_seed",
]
