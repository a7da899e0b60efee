"""
ldaclint.rules.dataset — Root dataset, collection and object rules.

The root of a crate is validated against DATASET. Its @type rule decides
whether the root is a RepositoryCollection or a RepositoryObject and
re-validates the same entity against that table.
"""

from __future__ import annotations

import re
from datetime import date, time
from types import MappingProxyType

from ldaclint.model import Literal, value_id
from ldaclint.rules import Modality, Rule, is_valid_url, reference_ids, type_names
from ldaclint.rules.common import (
    CONTENT_LOCATION,
    ID,
    IN_LANGUAGE,
    LICENSE,
    NAME,
    SUBJECT_LANGUAGE,
)
from ldaclint.vocab import COLLECTION_PROFILE_URL, OBJECT_PROFILE_URL


REPOSITORY_TYPES = ("RepositoryCollection", "RepositoryObject")

# Material categories a RepositoryObject's parts are sorted into
MATERIAL_TYPES = ("PrimaryMaterial", "DerivedMaterial", "Annotation")


# ── Property name audit ──────────────────────────────────────────


def _check_property_names(ctx, values, entity, graph):
    seen: set[str] = set()
    for item in graph.get_graph():
        for prop in item.properties:
            if prop in seen or prop in ("@id", "@type"):
                continue
            seen.add(prop)
            if not graph.resolve_term(prop):
                ctx.warn(f"Property `{prop}` is not defined in the crate's context")


PROPERTY_NAMES = Rule(
    clause="SHOULD have property names which resolve using the supplied context",
    check=_check_property_names,
    modality=Modality.SHOULD,
)


# ── Dataset ──────────────────────────────────────────────────────


def _check_dataset_type(ctx, values, entity, graph):
    if "Dataset" not in type_names(values):
        ctx.error('MUST include a "Dataset"')
    resolution = ctx.resolve_type(REPOSITORY_TYPES, entity)
    if resolution.ambiguous:
        ctx.error(
            "MUST NOT have both `RepositoryCollection` and `RepositoryObject` as values in `@type`"
        )
    elif not resolution.matched:
        ctx.error(
            "MUST have `RepositoryCollection` or `RepositoryObject` as values in `@type`"
        )

    ctx.apply(PROPERTY_NAMES, "@context")
    ctx.redispatch(resolution.type_name)


DATASET_TYPE = Rule(
    clause=(
        "MUST have a `@type` attribute that includes in its values `Dataset` "
        "and either `RepositoryCollection` or `RepositoryObject`"
    ),
    check=_check_dataset_type,
)


def _check_dataset_conforms_to(ctx, values, entity, graph):
    if not values:
        ctx.error("Does not have conformsTo")
        return
    urls = set(reference_ids(values))
    collection = ctx.config.collection_profile_url in urls
    obj = ctx.config.object_profile_url in urls
    if collection and obj:
        ctx.error("Cannot have both Collection and Object profiles")
    elif not collection and not obj:
        ctx.error("Does not conform to this profile")


DATASET_CONFORMS_TO = Rule(
    clause=(
        "MUST have a conformsTo which references the profile URL for either a Collection "
        f"({COLLECTION_PROFILE_URL}) or an Object ({OBJECT_PROFILE_URL}) but not both"
    ),
    check=_check_dataset_conforms_to,
)


_ISO_DATE = re.compile(
    r"^(?P<year>\d{4})"
    r"(?:-(?P<month>\d{2})"
    r"(?:-(?P<day>\d{2})"
    r"(?:[T ](?P<hour>\d{2}):(?P<minute>\d{2})(?::(?P<second>\d{2})(?:\.\d+)?)?"
    r"(?:Z|[+-](?P<tz_hour>\d{2})(?::?(?P<tz_minute>\d{2}))?)?)?"
    r")?)?$"
)


def parse_iso_date(text) -> bool:
    """True if text is an ISO-8601 date to at least year precision."""
    if not isinstance(text, str):
        return False
    m = _ISO_DATE.match(text.strip())
    if m is None:
        return False
    try:
        date(int(m["year"]), int(m["month"] or 1), int(m["day"] or 1))
        time(int(m["hour"] or 0), int(m["minute"] or 0), int(m["second"] or 0))
        time(int(m["tz_hour"] or 0), int(m["tz_minute"] or 0))
    except ValueError:
        return False
    return True


def _check_date_published(ctx, values, entity, graph):
    if not values:
        ctx.error("Does not have a datePublished property")
        return
    if len(values) > 1:
        ctx.error("There is more than one datePublished value")
        return
    value = values[0]
    if not isinstance(value, Literal) or not parse_iso_date(value.value):
        ctx.error(f"datePublished value does not parse as an ISO-8601 date: {value}")


DATE_PUBLISHED = Rule(
    clause=(
        "MUST have a `datePublished` property (per RO-Crate) exactly one value which is a string "
        "that parses as ISO-8601 to the level of at least a year. E.g.: 2000, 2000-10, 2000-10-01T12:34:56+10"
    ),
    check=_check_date_published,
)


def _check_publisher(ctx, values, entity, graph):
    if not values:
        ctx.error("Does not have a Publisher")
        return
    for value in values:
        if not is_valid_url(value_id(value)):
            ctx.error(f"Publisher @id is not a URL: {value}")


PUBLISHER = Rule(
    clause="MUST have a `publisher` property (per RO-Crate) which MUST have an ID which is a URL",
    check=_check_publisher,
)


DATASET = MappingProxyType({
    "@type": DATASET_TYPE,
    "conformsTo": DATASET_CONFORMS_TO,
    "license": LICENSE,
    "datePublished": DATE_PUBLISHED,
    "publisher": PUBLISHER,
})


# ── Shared repository rules ──────────────────────────────────────


def _vocabulary_rule(prop: str, article: str, allowed: str, clause: str) -> Rule:
    """MAY-have rule whose values SHOULD come from a controlled vocabulary.

    `allowed` names the ProfileConfig field holding the vocabulary.
    """

    def check(ctx, values, entity, graph):
        if not values:
            ctx.info(f"Does not have {article} `{prop}` property")
            return
        ctx.info(f"DOES have {article} `{prop}` property")
        vocabulary = getattr(ctx.config, allowed)
        for value in values:
            if value_id(value) not in vocabulary:
                ctx.warn(f"{prop} value is not expected: {value}")

    return Rule(clause=clause, check=check, modality=Modality.MAY)


COMMUNICATION_MODE = _vocabulary_rule(
    "communicationMode", "a", "communication_modes",
    "MAY have a `communicationMode` property which SHOULD be a reference to one or more of the "
    "Language Data Commons Communication Mode Terms: SpokenLanguage, WrittenLanguage, Song, "
    "Gesture, SignedLanguage, WhistledLanguage",
)

LINGUISTIC_GENRE = _vocabulary_rule(
    "linguisticGenre", "a", "linguistic_genres",
    "MAY have a `linguisticGenre` property which is a reference to one or more of the Language "
    "Data Commons LinguisticGenre Terms: Formulaic, Thesaurus, Dialogue, Oratory, Report, Ludic, "
    "Procedural, Narrative, Interview, Drama, Informational",
)


def _profile_rule(own: str, other: str, own_label: str, other_label: str) -> Rule:
    def check(ctx, values, entity, graph):
        if not values:
            ctx.error("Does not have conformsTo")
            return
        urls = set(reference_ids(values))
        if getattr(ctx.config, own) not in urls:
            ctx.error(f"conformsTo does not reference the {own_label} profile")
        if getattr(ctx.config, other) in urls:
            ctx.error(f"MUST NOT have {other_label} profile")

    return Rule(
        clause=f"MUST have a conformsTo which references the {own_label} profile URL",
        check=check,
    )


def _exclusive_type_rule(own: str, other: str) -> Rule:
    def check(ctx, values, entity, graph):
        types = type_names(values)
        if own not in types:
            ctx.error(f"@type MUST include “{own}”")
        if other in types:
            ctx.error(f"@type MUST NOT include “{other}”")

    return Rule(
        clause=f"MUST have a type value of “{own}” and MUST NOT have a type of “{other}”",
        check=check,
    )


# ── RepositoryCollection ─────────────────────────────────────────


def _check_description(ctx, values, entity, graph):
    if not any(isinstance(v, Literal) and v.is_string and v.value for v in values):
        ctx.violation("Does not have a description which is a string with one or more characters")


DESCRIPTION = Rule(
    clause="MUST have at least one `description` value which is a string with one or more characters",
    check=_check_description,
)


def _check_has_member(ctx, values, entity, graph):
    if not values:
        ctx.info("Does not have a `hasMember` property")
        return
    for member in values:
        member_id = value_id(member)
        if not member_id:
            ctx.error(f"hasMember value is not a reference with an @id: {member}")
            continue
        if graph.get_item(member_id):
            target = graph.get_entity(member_id)
            if target is None:
                continue
            resolution = ctx.resolve_type(REPOSITORY_TYPES, target)
            if not resolution.matched:
                ctx.error(
                    "Embedded entities in hasMember MUST include either one of "
                    f"“RepositoryCollection” or “RepositoryObject” ({member_id} does not)"
                )
            ctx.validate(resolution.type_name, target)
        elif not is_valid_url(member_id):
            ctx.error(f"hasMember @id is not in this crate and is not a URL ({member_id})")


HAS_MEMBER = Rule(
    clause=(
        "MAY have one or more references to Collection or Object entities, which may be included "
        "in the crate or MUST have @id properties which are URIs"
    ),
    check=_check_has_member,
    modality=Modality.MAY,
    requires_id=True,
)


def _check_date_free_text(ctx, values, entity, graph):
    if not values:
        ctx.info("Does not have a dateFreeText")
        return
    ctx.info("Does have a dateFreeText")
    for value in values:
        if not isinstance(value, Literal) or not value.is_string:
            ctx.warn(f"dateFreeText value is not a string: {value}")


DATE_FREE_TEXT = Rule(
    clause="MAY have a `dateFreeText` property",
    check=_check_date_free_text,
    modality=Modality.MAY,
)


REPOSITORY_COLLECTION = MappingProxyType({
    "@id": ID,
    "@type": _exclusive_type_rule("RepositoryCollection", "RepositoryObject"),
    "name": NAME,
    "conformsTo": _profile_rule("collection_profile_url", "object_profile_url", "Collection", "Object"),
    "description": DESCRIPTION,
    "hasMember": HAS_MEMBER,
    "communicationMode": COMMUNICATION_MODE,
    "linguisticGenre": LINGUISTIC_GENRE,
    "inLanguage": IN_LANGUAGE,
    "subjectLanguage": SUBJECT_LANGUAGE,
    "contentLocation": CONTENT_LOCATION,
    "dateFreeText": DATE_FREE_TEXT,
})


# ── RepositoryObject ─────────────────────────────────────────────


CATEGORY_CLAUSES = MappingProxyType({
    "PrimaryMaterial": (
        "SHOULD have a hasPart referencing an item of @type File with an additional @type value of PrimaryMaterial"
    ),
    "Annotation": (
        "MAY have a hasPart referencing an item of @type File with an additional @type value of Annotation"
    ),
    "DerivedMaterial": (
        "MAY have a hasPart referencing an item of @type File with an additional @type value of DerivedMaterial"
    ),
})


def _check_has_part(ctx, values, entity, graph):
    if not values:
        ctx.info("Does not have a `hasPart` property")
        return

    # A part may land in several buckets, e.g. a video with subtitles
    buckets: dict[str, list] = {t: [] for t in MATERIAL_TYPES}
    for value in values:
        part_id = value_id(value)
        if not part_id:
            ctx.warn(f"hasPart value is not a reference to another entity: {value}")
            continue
        part = graph.get_entity(part_id)
        if part is None:
            ctx.info(f"hasPart value does not resolve to an entity in this crate: {value}")
            continue
        ctx.inherit(part, "inLanguage")
        for material in MATERIAL_TYPES:
            if material in part.types:
                buckets[material].append(part)

    for material in ("PrimaryMaterial", "Annotation", "DerivedMaterial"):
        if not buckets[material]:
            ctx.info(CATEGORY_CLAUSES[material])

    for material in MATERIAL_TYPES:
        for part in buckets[material]:
            ctx.validate(material, part)


HAS_PART = Rule(
    clause=(
        "SHOULD have a hasPart property referencing at least one item of type [File, PrimaryMaterial] "
        "and MAY have [File, Annotation] and [File, DerivedMaterial] items which are inter-related "
        "using annotationOf, derivedFrom properties."
    ),
    check=_check_has_part,
    modality=Modality.SHOULD,
    requires_id=True,
)


REPOSITORY_OBJECT = MappingProxyType({
    "@id": ID,
    "@type": _exclusive_type_rule("RepositoryObject", "RepositoryCollection"),
    "name": NAME,
    "conformsTo": _profile_rule("object_profile_url", "collection_profile_url", "Object", "Collection"),
    "inLanguage": IN_LANGUAGE,
    "subjectLanguage": SUBJECT_LANGUAGE,
    "contentLocation": CONTENT_LOCATION,
    "hasPart": HAS_PART,
})
