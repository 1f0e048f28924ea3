"""Provider reading parameters from YAML configuration files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import yaml

from ..merger import Merger
from .base import ConfigurationProvider

logger = logging.getLogger(__name__)

DEFAULT_SECTION = "default"

ScopeSelector = Callable[[Mapping[str, Any]], Optional[str]]


class ConfigurationError(RuntimeError):
    """Raised when a configuration file cannot be read or parsed."""


def _no_scope(overrides: Mapping[str, Any]) -> Optional[str]:
    return None


class YamlFileProvider(ConfigurationProvider):
    """Resolve parameters from YAML files layered beneath the overrides.

    Each file holds a ``default`` section and any number of named scope
    sections::

        default:
          region: eu-west-2
          vars:
            environment: test
        production:
          region: us-east-1

    Files are merged in order, the default section first and then the scope
    chosen by ``scope_selector(overrides)``. Only the listed ``parameters``
    are taken from the files (all of them when none are listed) and the
    overrides are merged last.
    """

    def __init__(
        self,
        paths: Sequence[Path | str],
        parameters: Sequence[str] | None = None,
        scope_selector: ScopeSelector | None = None,
        merger: Merger | None = None,
    ) -> None:
        self.paths: List[Path] = [Path(path) for path in paths]
        self.parameters = list(parameters) if parameters is not None else None
        self.scope_selector = scope_selector or _no_scope
        self.merger = merger or Merger()
        self._documents: List[Dict[str, Any]] | None = None

    # ------------------------------------------------------------------
    def resolve(self, overrides: Mapping[str, Any] | None = None) -> Dict[str, Any]:
        overrides = overrides or {}
        scope = self.scope_selector(overrides)

        resolved: Dict[str, Any] = {}
        for document in self._load_documents():
            for section_name in (DEFAULT_SECTION, scope):
                if section_name is None:
                    continue
                section = document.get(section_name) or {}
                if not isinstance(section, Mapping):
                    raise ConfigurationError(
                        f"Configuration section '{section_name}' must be a mapping"
                    )
                resolved = self.merger.merge(resolved, self._select(section))

        logger.debug(
            "Resolved %d parameter(s) from configuration files for scope %s", len(resolved), scope
        )
        return self.merger.merge(resolved, overrides)

    def reset(self) -> None:
        self._documents = None

    # ------------------------------------------------------------------
    def _select(self, section: Mapping[str, Any]) -> Dict[str, Any]:
        if self.parameters is None:
            return {key: value for key, value in section.items() if value is not None}
        return {
            key: section[key]
            for key in self.parameters
            if key in section and section[key] is not None
        }

    def _load_documents(self) -> List[Dict[str, Any]]:
        if self._documents is None:
            self._documents = [self._load_document(path) for path in self.paths]
        return self._documents

    def _load_document(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem errors surfaced to caller
            raise ConfigurationError(f"Failed to read configuration file {path}") from exc

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in configuration file {path}") from exc

        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Configuration file must be a mapping: {path}")

        return dict(data)


__all__ = ["ConfigurationError", "ScopeSelector", "YamlFileProvider"]
