"""Closed query records used to select resource and output changes."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, ClassVar, Dict, Mapping, Tuple, TypeVar

from .change import ChangeKind
from .output import OutputChange
from .resource import ResourceChange
from .values import as_matcher

logger = logging.getLogger(__name__)

KIND_FLAGS: Mapping[str, ChangeKind] = MappingProxyType(
    {
        "create": ChangeKind.CREATE,
        "read": ChangeKind.READ,
        "update": ChangeKind.UPDATE,
        "replace": ChangeKind.REPLACE,
        "delete": ChangeKind.DELETE,
        "no_op": ChangeKind.NOOP,
    }
)
PRESENT_AFTER = "present_after"
FLAG_FIELDS: Tuple[str, ...] = (*KIND_FLAGS, PRESENT_AFTER)

Q = TypeVar("Q", bound="ChangeQuery")


class UnknownQueryFieldError(ValueError):
    """Raised when a query names a field the change records do not have."""


class ChangeQuery:
    """Base class for field queries over planned changes.

    A query holds the constraints the caller supplied, in the order supplied.
    Fields left out are unconstrained. Change-kind flags are compared against
    the classified change and every other field is compared against the
    attribute of the same name, by structural equality or by a
    :class:`~terraform_testkit.models.values.ValueMatcher`.
    """

    FIELDS: ClassVar[Tuple[str, ...]] = FLAG_FIELDS
    subject: ClassVar[str] = "change"

    def __init__(
        self,
        definition: Mapping[str, Any] | None = None,
        *,
        strict: bool = True,
        **fields: Any,
    ) -> None:
        combined: Dict[str, Any] = dict(definition or {})
        combined.update(fields)

        unknown = [key for key in combined if key not in self.FIELDS]
        if unknown and strict:
            raise UnknownQueryFieldError(
                f"Unknown {self.subject} query field(s): {', '.join(sorted(map(str, unknown)))}"
            )

        accepted: Dict[str, Any] = {}
        for key, value in combined.items():
            if key not in self.FIELDS:
                logger.debug("Ignoring unrecognised %s query field %r", self.subject, key)
                continue
            if key in FLAG_FIELDS and not isinstance(value, bool):
                raise TypeError(f"Query flag '{key}' must be a boolean, got {value!r}")
            accepted[key] = value

        self._fields: Mapping[str, Any] = MappingProxyType(accepted)

    # ------------------------------------------------------------------
    @classmethod
    def coerce(cls: type[Q], query: "Q | Mapping[str, Any] | None") -> Q:
        """Return ``query`` as an instance of this query class."""

        if isinstance(query, cls):
            return query
        if query is None:
            return cls()
        if isinstance(query, ChangeQuery):
            return cls(dict(query.fields))
        return cls(query)

    @property
    def fields(self) -> Mapping[str, Any]:
        return self._fields

    def merged(self: Q, **fields: Any) -> Q:
        """Return a new query with ``fields`` added to (or replacing) these."""

        combined = dict(self._fields)
        combined.update(fields)
        return type(self)(combined)

    def matches(self, candidate: ResourceChange | OutputChange) -> bool:
        """Return ``True`` when ``candidate`` satisfies every constraint."""

        for key, expected in self._fields.items():
            if key == PRESENT_AFTER:
                actual: Any = candidate.change.present_after
            elif key in KIND_FLAGS:
                actual = candidate.change.is_kind(KIND_FLAGS[key])
            else:
                actual = getattr(candidate, key)

            if not as_matcher(expected).matches(actual):
                return False
        return True

    # ------------------------------------------------------------------
    def __bool__(self) -> bool:
        return bool(self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChangeQuery):
            return NotImplemented
        return type(self) is type(other) and dict(self._fields) == dict(other._fields)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rendered = ", ".join(f"{key}={value!r}" for key, value in self._fields.items())
        return f"{type(self).__name__}({rendered})"


class ResourceChangeQuery(ChangeQuery):
    """Query over :class:`ResourceChange` records."""

    FIELDS = (
        "address",
        "module_address",
        "mode",
        "type",
        "name",
        "index",
        "provider_name",
        *FLAG_FIELDS,
    )
    subject = "resource change"


class OutputChangeQuery(ChangeQuery):
    """Query over :class:`OutputChange` records."""

    FIELDS = ("name", *FLAG_FIELDS)
    subject = "output change"


__all__ = [
    "FLAG_FIELDS",
    "KIND_FLAGS",
    "PRESENT_AFTER",
    "ChangeQuery",
    "OutputChangeQuery",
    "ResourceChangeQuery",
    "UnknownQueryFieldError",
]
