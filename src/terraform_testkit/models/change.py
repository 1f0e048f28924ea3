"""Planned change records and the change-kind classifier."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Tuple

from .values import BoxedValue, box


class MalformedChangeError(ValueError):
    """Raised when a change's actions do not form a recognised lifecycle."""


class ChangeKind(str, Enum):
    """Canonical classification of a planned change."""

    NOOP = "no-op"
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    REPLACE = "replace"


_SINGLE_ACTION_KINDS = {
    "no-op": ChangeKind.NOOP,
    "create": ChangeKind.CREATE,
    "read": ChangeKind.READ,
    "update": ChangeKind.UPDATE,
    "delete": ChangeKind.DELETE,
}

_REPLACE_ACTIONS = {("delete", "create"), ("create", "delete")}

_PRESENT_AFTER_KINDS = frozenset(
    {ChangeKind.CREATE, ChangeKind.READ, ChangeKind.UPDATE, ChangeKind.REPLACE}
)


def classify_actions(actions: Iterable[str]) -> ChangeKind:
    """Return the :class:`ChangeKind` described by an ordered actions list."""

    action_tuple = tuple(actions)

    if len(action_tuple) == 1 and action_tuple[0] in _SINGLE_ACTION_KINDS:
        return _SINGLE_ACTION_KINDS[action_tuple[0]]
    if action_tuple in _REPLACE_ACTIONS:
        return ChangeKind.REPLACE

    raise MalformedChangeError(f"Unrecognised change actions: {list(action_tuple)!r}")


@dataclass(frozen=True, slots=True)
class Change:
    """The before/after states and actions of a single planned change."""

    actions: Tuple[str, ...] = ()
    before: Any = None
    after: Any = None
    after_unknown: Any = None
    before_sensitive: Any = None
    after_sensitive: Any = None

    @property
    def kind(self) -> ChangeKind:
        """Classify the actions, raising :class:`MalformedChangeError` if invalid."""

        return classify_actions(self.actions)

    def is_kind(self, kind: ChangeKind) -> bool:
        return self.kind is kind

    @property
    def present_after(self) -> bool:
        """Return ``True`` when the entity still exists once the change is applied."""

        return self.kind in _PRESENT_AFTER_KINDS

    @property
    def replace_create_before_delete(self) -> bool:
        return self.actions == ("create", "delete")

    @property
    def replace_delete_before_create(self) -> bool:
        return self.actions == ("delete", "create")

    @property
    def before_object(self) -> BoxedValue:
        return box(self.before, sensitive=self.before_sensitive)

    @property
    def after_object(self) -> BoxedValue:
        return box(self.after, unknown=self.after_unknown, sensitive=self.after_sensitive)


__all__ = ["Change", "ChangeKind", "MalformedChangeError", "classify_actions"]
