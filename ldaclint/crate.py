"""
ldaclint.crate — Load a JSON-LD crate into entities the validator can walk.

Takes an RO-Crate metadata document (flattened JSON-LD with an @graph),
indexes its entities by @id, and resolves property names against the
document's @context using rdflib's JSON-LD context processor.

Remote contexts are never fetched. Supply their documents through
`local_contexts` (URL -> context document); anything else is skipped.
"""

from __future__ import annotations

import json
import logging
import warnings
from pathlib import Path
from typing import Optional, Union

from rdflib.plugins.shared.jsonld.context import Context as JsonLdContext

from ldaclint.model import Entity, Literal, Reference, Value

logger = logging.getLogger(__name__)

METADATA_DESCRIPTOR_IDS = ("ro-crate-metadata.json", "ro-crate-metadata.jsonld")
ROOT_ID = "./"


class CrateError(ValueError):
    """The document cannot be turned into a crate at all."""


# ─── Value conversion ────────────────────────────────────────────────


def to_values(raw) -> list[Value]:
    """Convert a JSON-LD property value (scalar, object or list) to Values."""
    items = raw if isinstance(raw, list) else [raw]
    values: list[Value] = []
    for item in items:
        if item is None:
            continue
        if isinstance(item, dict):
            if "@id" in item:
                values.append(Reference(str(item["@id"])))
            elif "@value" in item:
                values.append(Literal(item["@value"]))
            else:
                # Inline object without an identifier
                values.append(Reference(None))
        else:
            values.append(Literal(item))
    return values


def to_entity(node: dict) -> Entity:
    raw_types = node.get("@type", [])
    types = raw_types if isinstance(raw_types, list) else [raw_types]
    node_id = node.get("@id")
    return Entity(
        id=str(node_id) if node_id is not None else None,
        types=[str(t) for t in types],
        properties={
            k: to_values(v) for k, v in node.items() if k not in ("@id", "@type")
        },
    )


# ─── Context ─────────────────────────────────────────────────────────


def _build_context(raw, local_contexts: dict) -> JsonLdContext:
    sources = raw if isinstance(raw, list) else [raw]
    resolved = []
    for source in sources:
        if isinstance(source, str):
            doc = local_contexts.get(source)
            if doc is None:
                warnings.warn(
                    f"Context {source} is not available locally, skipping."
                )
                continue
            resolved.append(doc)
        elif isinstance(source, dict):
            resolved.append(source)
    return JsonLdContext(resolved) if resolved else JsonLdContext()


# ─── Crate ───────────────────────────────────────────────────────────


class Crate:
    """In-memory entity graph with term resolution."""

    def __init__(
        self,
        entities: list[Entity],
        context=None,
        local_contexts: Optional[dict] = None,
        source: str = "<string>",
    ):
        self.source = source
        self._entities = list(entities)
        self._by_id: dict[str, Entity] = {}
        for entity in self._entities:
            if entity.id is None:
                continue
            if entity.id in self._by_id:
                raise CrateError(f"Duplicate @id in crate: {entity.id}")
            self._by_id[entity.id] = entity
        self._context = _build_context(context, local_contexts or {})

    @classmethod
    def from_jsonld(
        cls,
        document: Union[dict, str],
        local_contexts: Optional[dict] = None,
        source: str = "<string>",
    ) -> "Crate":
        if isinstance(document, str):
            try:
                document = json.loads(document)
            except json.JSONDecodeError as e:
                raise CrateError(f"Crate is not valid JSON: {e}") from e
        if not isinstance(document, dict):
            raise CrateError("Crate document must be a JSON object")
        graph = document.get("@graph")
        if not isinstance(graph, list):
            raise CrateError("Crate document has no @graph array")

        entities = [to_entity(node) for node in graph if isinstance(node, dict)]
        crate = cls(
            entities,
            context=document.get("@context"),
            local_contexts=local_contexts,
            source=source,
        )
        logger.info("Loaded %d entities from %s", len(entities), source)
        return crate

    @classmethod
    def load(cls, path: Union[str, Path], local_contexts: Optional[dict] = None) -> "Crate":
        path = Path(path)
        return cls.from_jsonld(path.read_text(encoding="utf-8"), local_contexts, source=str(path))

    # ── Graph interface ──────────────────────────────────────────

    def get_entity(self, id: str) -> Optional[Entity]:
        return self._by_id.get(id)

    def get_item(self, id: str) -> bool:
        return id in self._by_id

    def get_graph(self) -> list[Entity]:
        return list(self._entities)

    def resolve_term(self, name: str) -> Optional[str]:
        return self._context.expand(name)

    @property
    def root(self) -> Optional[Entity]:
        """The dataset the metadata descriptor is about, else the ./ entity."""
        for descriptor_id in METADATA_DESCRIPTOR_IDS:
            descriptor = self.get_entity(descriptor_id)
            if descriptor is None:
                continue
            for about in descriptor.values("about"):
                if isinstance(about, Reference) and about.id in self._by_id:
                    return self._by_id[about.id]
        return self.get_entity(ROOT_ID)
