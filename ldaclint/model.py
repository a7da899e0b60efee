"""
ldaclint.model — Values, entities and findings shared by every rule.

A crate is a graph of entities. Each entity maps property names to an
ordered list of values, and each value is either a Literal or a
Reference to another entity by @id. Rules read these lists and report
Findings; they never raise.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Iterator, Optional, Protocol, Union


# ─── Values ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Literal:
    value: Any  # normally a str, but any JSON scalar can appear in a crate

    @property
    def is_string(self) -> bool:
        return isinstance(self.value, str)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Reference:
    id: Optional[str]  # None when the input object had no @id

    def __str__(self) -> str:
        return f'{{"@id": "{self.id}"}}' if self.id is not None else "{}"


Value = Union[Literal, Reference]


def value_id(value: Value) -> Optional[str]:
    """The identifier a value points at, or None for literals."""
    if isinstance(value, Reference):
        return value.id
    return None


# ─── Entities ────────────────────────────────────────────────────────


@dataclass(eq=False)
class Entity:
    id: Optional[str]
    types: list[str] = field(default_factory=list)
    properties: dict[str, list[Value]] = field(default_factory=dict)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def values(self, name: str) -> list[Value]:
        """Value list for a property; @id and @type are synthesised."""
        if name == "@id":
            return [Literal(self.id)] if self.id is not None else []
        if name == "@type":
            return [Literal(t) for t in self.types]
        return list(self.properties.get(name) or [])

    def has(self, name: str) -> bool:
        return bool(self.values(name))

    def fill_missing(self, name: str, values: list[Value]) -> bool:
        """Set a property only if it is absent or empty.

        Returns True when the property was filled. Filling an already
        filled property is a no-op, so repeated runs leave the entity
        unchanged after the first one.
        """
        if self.properties.get(name) or not values:
            return False
        self.properties[name] = list(values)
        return True


class EntityGraph(Protocol):
    """What the validator needs from whatever holds the crate."""

    def get_entity(self, id: str) -> Optional[Entity]:
        ...

    def get_item(self, id: str) -> bool:
        ...

    def get_graph(self) -> list[Entity]:
        ...

    def resolve_term(self, name: str) -> Optional[str]:
        ...


# ─── Findings ────────────────────────────────────────────────────────


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class Finding:
    severity: Severity
    message: str
    entity_id: Optional[str]
    property: Optional[str]
    clause: str = ""

    def to_dict(self) -> dict:
        d = asdict(self)
        d["severity"] = self.severity.value
        return d


class Findings:
    """Append-only record of everything one validation run reported."""

    def __init__(self):
        self._items: list[Finding] = []

    def add(self, finding: Finding) -> None:
        self._items.append(finding)

    def __iter__(self) -> Iterator[Finding]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def of(self, severity: Severity) -> list[Finding]:
        return [f for f in self._items if f.severity == severity]

    @property
    def errors(self) -> list[Finding]:
        return self.of(Severity.ERROR)

    @property
    def warnings(self) -> list[Finding]:
        return self.of(Severity.WARNING)

    @property
    def infos(self) -> list[Finding]:
        return self.of(Severity.INFO)

    @property
    def conforms(self) -> bool:
        return not self.errors

    def for_entity(self, entity_id: Optional[str], property: Optional[str] = None) -> list[Finding]:
        return [
            f for f in self._items
            if f.entity_id == entity_id and (property is None or f.property == property)
        ]

    def by_entity(self) -> dict[Optional[str], list[Finding]]:
        grouped: dict[Optional[str], list[Finding]] = {}
        for f in self._items:
            grouped.setdefault(f.entity_id, []).append(f)
        return grouped
