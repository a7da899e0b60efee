"""
ldaclint.rules.common — Rules shared by every entity type.
"""

from __future__ import annotations

from types import MappingProxyType

from ldaclint.model import Literal, Reference
from ldaclint.rules import Modality, Rule, is_valid_url, text_of


# ── @id and name ─────────────────────────────────────────────────


def _check_id(ctx, values, entity, graph):
    if not values:
        ctx.error("There is no @id property")
        return
    identifier = text_of(values[0])
    if identifier != "./" and not is_valid_url(identifier):
        ctx.error("The value of @id is not a valid URI")


ID = Rule(
    clause='MUST have an @id property and the value must be a valid URI or "./"',
    check=_check_id,
)


def _check_name(ctx, values, entity, graph):
    if not values:
        ctx.error("There is no name property")
        return
    if len(values) > 1:
        ctx.error("There is more than one name")
        return
    value = values[0]
    if not isinstance(value, Literal) or not value.is_string:
        ctx.error("Value is not a string")
    elif len(value.value) == 0:
        ctx.error("Value must have one or more characters")


NAME = Rule(
    clause="MUST have a single name value which is a string with one or more characters",
    check=_check_name,
)


# ── References validated as another type ─────────────────────────


def _reference_rule(prop: str, article: str, target: str, clause: str) -> Rule:
    def check(ctx, values, entity, graph):
        if not values:
            ctx.info(f"Does not have {article} `{prop}` property")
            return
        ctx.info(f"Does have {article} `{prop}` property")
        for value in values:
            ctx.validate(target, value)

    return Rule(clause=clause, check=check, modality=Modality.MAY)


IN_LANGUAGE = _reference_rule(
    "inLanguage", "an", "Language",
    "MAY have an `inLanguage` property which is a reference to one or more Language items",
)

SUBJECT_LANGUAGE = _reference_rule(
    "subjectLanguage", "a", "Language",
    "MAY have a `subjectLanguage` property which is a reference to one or more Language items",
)

CONTENT_LOCATION = _reference_rule(
    "contentLocation", "a", "Place",
    "MAY have a `contentLocation` property which is a reference to one or more `Place` items",
)


# ── License ──────────────────────────────────────────────────────


def _check_license(ctx, values, entity, graph):
    if not values:
        ctx.error("Does not have a license property")
        return
    prefix = ctx.config.license_prefix
    for value in values:
        if not isinstance(value, Reference) or not value.id:
            ctx.error(f"License value is not a reference to a license entity: {value}")
            continue
        if not value.id.startswith(prefix):
            ctx.error(f"License @id does not start with {prefix}")
        licence = graph.get_entity(value.id)
        if licence is None:
            ctx.error("License property does not reference a licence file")
            continue
        # Each missing piece is its own finding
        if "File" not in licence.types:
            ctx.error(
                f'There is a reference to a LICENSE entity but it does not have "File" as a type value: {value}'
            )
        if "DataReuseLicense" not in licence.types:
            ctx.error(
                f'There is a reference to a LICENSE entity but it does not have "DataReuseLicense" as a @type value: {value}'
            )
        if not any(is_valid_url(text_of(u)) for u in licence.values("URL")):
            ctx.error(
                f"There is a reference to a LICENSE entity but it does not have a `URL` property which is a well-formed URL: {value}"
            )


LICENSE = Rule(
    clause=(
        "MUST have a `license` property with reference to an entity of type [File, DataReuseLicense] "
        "with an `@id` property that starts with `LICENSE` and a `URL` property that is a valid URL"
    ),
    check=_check_license,
)


COMMON = MappingProxyType({
    "@id": ID,
    "name": NAME,
    "inLanguage": IN_LANGUAGE,
    "subjectLanguage": SUBJECT_LANGUAGE,
    "contentLocation": CONTENT_LOCATION,
})
