"""
ldaclint.rules.materials — Languages and the files a RepositoryObject holds.
"""

from __future__ import annotations

from types import MappingProxyType

from ldaclint.model import value_id
from ldaclint.rules import Modality, Rule, reference_ids, text_of, type_rule
from ldaclint.rules.dataset import COMMUNICATION_MODE


# ── Language ─────────────────────────────────────────────────────


def _check_language_id(ctx, values, entity, graph):
    if not values:
        ctx.error("There is no @id property")
        return
    identifier = text_of(values[0]) or ""
    if not identifier.startswith(tuple(ctx.config.language_authorities)):
        ctx.error(f"The value of @id does not start with the right URL: {identifier}")


LANGUAGE = MappingProxyType({
    "@id": Rule(
        clause=(
            "MUST have an @id property and the value must start with "
            "`https://collection.aiatsis.gov.au/austlang/language/` or `https://glottolog.org/resource/`"
        ),
        check=_check_language_id,
    ),
})


# ── Shared material rules ────────────────────────────────────────


def _check_material_language(ctx, values, entity, graph):
    if not values:
        ctx.error("There is no language property")
        return
    for value in values:
        ctx.validate("Language", value)


MATERIAL_LANGUAGE = Rule(
    clause=(
        "MUST have a inLanguage property, or the RepositoryObject that is `partOf` MUST have a "
        "inLanguage property, referencing a Language item (language may be inherited from the parent RepositoryObject)"
    ),
    check=_check_material_language,
)


def _unresolved_reference(ctx, value):
    ctx.info(f"Property value does not resolve to another entity in this crate: {value}")


# ── PrimaryMaterial ──────────────────────────────────────────────


PRIMARY_MATERIAL_TYPE = type_rule("PrimaryMaterial")

PRIMARY_MATERIAL = MappingProxyType({
    "@type": PRIMARY_MATERIAL_TYPE,
    "communicationMode": COMMUNICATION_MODE,
    "inLanguage": MATERIAL_LANGUAGE,
})


# ── DerivedMaterial ──────────────────────────────────────────────


def _check_derived_from(ctx, values, entity, graph):
    if not values:
        ctx.violation("Does not have a derivedFrom property")
        return
    for value in values:
        source_id = value_id(value)
        if not source_id:
            ctx.warn(f"Property value is not a reference to another entity: {value}")
            continue
        source = graph.get_entity(source_id)
        if source is None:
            _unresolved_reference(ctx, value)
        else:
            PRIMARY_MATERIAL_TYPE.check(ctx, source.values("@type"), source, graph)


DERIVED_MATERIAL = MappingProxyType({
    "@type": type_rule("DerivedMaterial"),
    "communicationMode": COMMUNICATION_MODE,
    "inLanguage": MATERIAL_LANGUAGE,
    "derivedFrom": Rule(
        clause="SHOULD have a derivedFrom property which references a PrimaryMaterial entity",
        check=_check_derived_from,
        modality=Modality.SHOULD,
    ),
})


# ── Annotation ───────────────────────────────────────────────────


def _check_annotation_type(ctx, values, entity, graph):
    if not values:
        ctx.info("Does not have an `annotationType` property")
        return
    ctx.info("DOES have an `annotationType` property")
    for value in values:
        if value_id(value) not in ctx.config.annotation_types:
            ctx.warn(f"annotationType value is not expected: {value}")


def _check_table_schema(ctx, values, entity, graph):
    if not values:
        ctx.info("Does not have a `conformsTo` property")
        return
    formats = {text_of(v) for v in entity.values("encodingFormat")}
    if "text/csv" not in formats:
        return
    for schema_id in reference_ids(values):
        schema = graph.get_entity(schema_id)
        if schema is None or "File" not in schema.types:
            continue
        if ctx.config.table_schema_url in reference_ids(schema.values("conformsTo")):
            ctx.info(
                "DOES have a `conformsTo` property that indicates this is a frictionless data table schema"
            )


def _check_annotation_of(ctx, values, entity, graph):
    if not values:
        ctx.violation("Does not have an `annotationOf` property")
        return
    ctx.info("Does have an `annotationOf` property")
    for value in values:
        target_id = value_id(value)
        if not target_id:
            ctx.warn(f"Property value is not a reference to another entity: {value}")
        elif graph.get_entity(target_id) is None:
            _unresolved_reference(ctx, value)
        else:
            ctx.info(f"Property value does resolve to another entity in this crate: {value}")


ANNOTATION = MappingProxyType({
    "@type": type_rule("Annotation"),
    "annotationType": Rule(
        clause=(
            "MAY have an `annotationType` property which SHOULD be a reference to one or more of the "
            "Language Data Commons Annotation Type Terms: Phonemic, Phonetic, Phonological, Syntactic, "
            "Translation, Semantic, Transcription, Prosodic"
        ),
        check=_check_annotation_type,
        modality=Modality.MAY,
    ),
    "conformsTo": Rule(
        clause=(
            "MAY have a `conformsTo` property which references a schema file which in turn MUST have "
            '`conformsTo` property of {"@id": "https://specs.frictionlessdata.io/table-schema/"}'
        ),
        check=_check_table_schema,
        modality=Modality.MAY,
    ),
    "annotationOf": Rule(
        clause="SHOULD have an `annotationOf` property which references another entity",
        check=_check_annotation_of,
        modality=Modality.SHOULD,
    ),
})
