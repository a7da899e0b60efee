"""
ldaclint.rules.registry — Type name to RuleTable lookup.
"""

from __future__ import annotations

from types import MappingProxyType

from ldaclint.rules.common import COMMON
from ldaclint.rules.dataset import DATASET, REPOSITORY_COLLECTION, REPOSITORY_OBJECT
from ldaclint.rules.materials import ANNOTATION, DERIVED_MATERIAL, LANGUAGE, PRIMARY_MATERIAL
from ldaclint.rules.place import GEOMETRY, PLACE


FALLBACK_TYPE = "Common"

RULES = MappingProxyType({
    "Common": COMMON,
    "Dataset": DATASET,
    "RepositoryCollection": REPOSITORY_COLLECTION,
    "RepositoryObject": REPOSITORY_OBJECT,
    "Language": LANGUAGE,
    "PrimaryMaterial": PRIMARY_MATERIAL,
    "DerivedMaterial": DERIVED_MATERIAL,
    "Annotation": ANNOTATION,
    "Place": PLACE,
    "Geometry": GEOMETRY,
})

# Order used when an entity is validated without an explicit type
TYPE_PRIORITY = (
    "Dataset",
    "RepositoryCollection",
    "RepositoryObject",
    "PrimaryMaterial",
    "DerivedMaterial",
    "Annotation",
    "Language",
    "Place",
    "Geometry",
)
