"""
ldaclint.engine — Walk a crate and apply the profile's rule tables.

validate_profile() is the entry point: it validates the root dataset
against the Dataset table, and the rules recurse into referenced
entities through Context.validate(). One top-level call shares a single
Findings collection and a single recursion path of entity identifiers,
which is how cycles between entities are caught. The root dataset moves
on to the collection or object table through Context.redispatch(), the
only re-entry of an identifier already on the path.
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Optional, Union

from ldaclint.model import (
    Entity,
    EntityGraph,
    Finding,
    Findings,
    Severity,
    Value,
    value_id,
)
from ldaclint.rules import Rule
from ldaclint.rules.common import ID
from ldaclint.rules.registry import FALLBACK_TYPE, RULES, TYPE_PRIORITY
from ldaclint.vocab import DEFAULT_CONFIG, ProfileConfig

logger = logging.getLogger(__name__)


# ─── Type resolution ─────────────────────────────────────────────────


class Resolution(NamedTuple):
    type_name: str
    matched: tuple[str, ...]

    @property
    def ambiguous(self) -> bool:
        return len(self.matched) > 1


def resolve_type(candidates, types) -> Resolution:
    """Pick the first candidate present in `types`, or the Common fallback.

    Pure: when several candidates match the first one wins, and the
    caller decides whether that is worth reporting.
    """
    present = set(types)
    matched = tuple(c for c in candidates if c in present)
    return Resolution(matched[0] if matched else FALLBACK_TYPE, matched)


# ─── Check context ───────────────────────────────────────────────────


class _Run:
    """State shared by every check in one top-level validation."""

    def __init__(self, graph: EntityGraph, findings: Findings, config: ProfileConfig):
        self.graph = graph
        self.findings = findings
        self.config = config
        self.path: set[str] = set()


class Context:
    """Handed to every check, bound to one entity and property."""

    def __init__(self, run: _Run, entity: Entity, property: str, rule: Rule):
        self._run = run
        self.entity = entity
        self.property = property
        self.rule = rule

    @property
    def findings(self) -> Findings:
        return self._run.findings

    @property
    def config(self) -> ProfileConfig:
        return self._run.config

    @property
    def graph(self) -> EntityGraph:
        return self._run.graph

    def _emit(self, severity: Severity, message: Optional[str]) -> None:
        self._run.findings.add(Finding(
            severity=severity,
            message=message or self.rule.clause,
            entity_id=self.entity.id,
            property=self.property,
            clause=self.rule.clause,
        ))

    def error(self, message: Optional[str] = None) -> None:
        self._emit(Severity.ERROR, message)

    def warn(self, message: Optional[str] = None) -> None:
        self._emit(Severity.WARNING, message)

    def info(self, message: Optional[str] = None) -> None:
        self._emit(Severity.INFO, message)

    def violation(self, message: Optional[str] = None) -> None:
        """Report at the severity implied by the rule's modality."""
        self._emit(self.rule.severity, message)

    def resolve_type(self, candidates, entity: Optional[Entity]) -> Resolution:
        return resolve_type(candidates, entity.types if entity is not None else ())

    def validate(self, type_name: str, value: Union[Entity, Value]) -> None:
        """Validate a referenced or nested entity against another table.

        References that do not resolve in the crate are checked as an
        identifier-only entity, so an external language IRI still has
        its @id checked.
        """
        if isinstance(value, Entity):
            target = value
        else:
            target_id = value_id(value)
            if not target_id:
                self.warn(f"Value is not a reference to another entity: {value}")
                return
            target = self._run.graph.get_entity(target_id) or Entity(id=target_id)
        _validate(self._run, target, type_name)

    def redispatch(self, type_name: str) -> None:
        """Validate the current entity again against another table.

        This is the one re-entry the cycle guard allows: the entity is
        already on the recursion path under the table that dispatched it.
        Entities without an @id have already been reported and are not
        re-dispatched.
        """
        if self.entity.id is None:
            return
        _validate(self._run, self.entity, type_name, redispatch=True)

    def inherit(self, part: Entity, name: str) -> bool:
        return fill_missing_property(self, part, self.entity, name)

    def apply(self, rule: Rule, property: str, values: Optional[list] = None,
              entity: Optional[Entity] = None) -> None:
        """Run a rule that is not in the current table, e.g. a crate-wide audit."""
        target = entity if entity is not None else self.entity
        _apply(self._run, rule, property, values if values is not None else [], target)


# ─── Inheritance ─────────────────────────────────────────────────────


def fill_missing_property(ctx: Context, part: Entity, parent: Entity, name: str) -> bool:
    """Copy `name` from parent to part when the part has none.

    This is the only place validation changes an entity. It is
    idempotent: once filled, later calls do nothing and report nothing.
    """
    if not part.fill_missing(name, parent.values(name)):
        return False
    ctx.info(
        f"{name} property not present on hasPart entity {part.id} - inheriting from {parent.id}"
    )
    return True


# ─── Engine ──────────────────────────────────────────────────────────


def _apply(run: _Run, rule: Rule, property: str, values: list, entity: Entity) -> None:
    ctx = Context(run, entity, property, rule)
    try:
        rule.check(ctx, values, entity, run.graph)
    except Exception as e:
        logger.debug("Check for %s on %s raised", property, entity.id, exc_info=True)
        ctx.error(f"Rule check failed: {type(e).__name__}: {e}")


def _validate(
    run: _Run,
    entity: Entity,
    type_name: Optional[str] = None,
    redispatch: bool = False,
) -> None:
    if type_name is None:
        type_name = resolve_type(TYPE_PRIORITY, entity.types).type_name
    table = RULES[type_name]

    if entity.id is None:
        id_rule = table.get("@id", ID)
        run.findings.add(Finding(
            severity=Severity.ERROR,
            message="There is no @id property",
            entity_id=None,
            property="@id",
            clause=id_rule.clause,
        ))
        for name, rule in table.items():
            if name != "@id" and not rule.requires_id:
                _apply(run, rule, name, entity.values(name), entity)
        return

    entered = entity.id not in run.path
    if not entered and not redispatch:
        logger.debug("Cycle at %s as %s", entity.id, type_name)
        run.findings.add(Finding(
            severity=Severity.INFO,
            message=f"cycle detected, skipping re-validation of {entity.id}",
            entity_id=entity.id,
            property=None,
        ))
        return

    logger.debug("Validating %s as %s", entity.id, type_name)
    if entered:
        run.path.add(entity.id)
    try:
        for name, rule in table.items():
            _apply(run, rule, name, entity.values(name), entity)
    finally:
        if entered:
            run.path.discard(entity.id)


def validate(
    entity: Entity,
    graph: EntityGraph,
    findings: Findings,
    type_name: Optional[str] = None,
    config: Optional[ProfileConfig] = None,
) -> None:
    """Validate one entity (and everything its rules reach) into `findings`.

    Without a type_name the entity's own @type values pick the table,
    falling back to Common.
    """
    run = _Run(graph, findings, config or DEFAULT_CONFIG)
    _validate(run, entity, type_name)


def validate_profile(
    root: Union[Entity, str],
    graph: EntityGraph,
    config: Optional[ProfileConfig] = None,
) -> Findings:
    """Validate a crate's root dataset and return every finding."""
    findings = Findings()
    entity = root if isinstance(root, Entity) else graph.get_entity(root)
    if entity is None:
        findings.add(Finding(
            severity=Severity.ERROR,
            message=f"Root entity {root} is not in the crate",
            entity_id=str(root),
            property=None,
        ))
        return findings
    validate(entity, graph, findings, type_name="Dataset", config=config)
    return findings
