"""
ldaclint.rules.place — Places referenced by contentLocation and their geometry.
"""

from __future__ import annotations

from types import MappingProxyType

from ldaclint.rules import Rule, type_rule


def _check_geo(ctx, values, entity, graph):
    if not values:
        ctx.error("There is no geo property")
        return
    for value in values:
        ctx.validate("Geometry", value)


def _check_as_wkt(ctx, values, entity, graph):
    if not values:
        ctx.error("There is no asWKT property")


PLACE = MappingProxyType({
    "@type": type_rule("Place", '"', '"'),
    "geo": Rule(
        clause="MUST have a geo property, which is a reference to one or more Geometry entities",
        check=_check_geo,
    ),
})

GEOMETRY = MappingProxyType({
    "@type": type_rule("Geometry", '"', '"'),
    "asWKT": Rule(
        clause="MUST have one or more asWKT property, which is text encoding the location coordinates",
        check=_check_as_wkt,
    ),
})
