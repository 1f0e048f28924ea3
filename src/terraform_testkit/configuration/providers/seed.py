"""Provider adding a random seed shared by every resolution until reset."""

from __future__ import annotations

import logging
import secrets
import string
from typing import Any, Callable, Dict, Mapping

from ..merger import Merger
from .base import ConfigurationProvider

logger = logging.getLogger(__name__)

_SEED_ALPHABET = string.ascii_letters + string.digits


def generate_seed(length: int = 10) -> str:
    return "".join(secrets.choice(_SEED_ALPHABET) for _ in range(length))


class SeedProvider(ConfigurationProvider):
    """Add a ``seed`` parameter, stable across resolutions until :meth:`reset`.

    Seeds let a test suite give resources unique names without clashing
    between runs. An explicit ``seed`` in the overrides wins.
    """

    def __init__(
        self,
        generator: Callable[[], str] | None = None,
        merger: Merger | None = None,
    ) -> None:
        self.generator = generator or generate_seed
        self.merger = merger or Merger()
        self._seed: str | None = None

    @property
    def seed(self) -> str:
        if self._seed is None:
            self._seed = self.generator()
            logger.debug("Generated seed %s", self._seed)
        return self._seed

    def resolve(self, overrides: Mapping[str, Any] | None = None) -> Dict[str, Any]:
        return self.merger.merge({"seed": self.seed}, overrides or {})

    def reset(self) -> None:
        self._seed = None


__all__ = ["SeedProvider", "generate_seed"]
