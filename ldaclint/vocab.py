"""
ldaclint.vocab — Profile URLs and controlled vocabularies.

These are configuration data, not logic. The defaults describe the
Language Data Commons profile; pass a ProfileConfig with different
values to validate_profile() to check against another release.
"""

from __future__ import annotations

from dataclasses import dataclass


LDAC_TERMS = "http://purl.archive.org/language-data-commons/terms#"

COLLECTION_PROFILE_URL = "https://purl.archive.org/language-data-commons/profile#Collection"
OBJECT_PROFILE_URL = "https://purl.archive.org/language-data-commons/profile#Object"

LANGUAGE_AUTHORITIES = (
    "https://collection.aiatsis.gov.au/austlang/language/",
    "https://glottolog.org/resource/",
)

COMMUNICATION_MODES = tuple(
    LDAC_TERMS + term
    for term in (
        "SpokenLanguage",
        "WrittenLanguage",
        "Song",
        "Gesture",
        "SignedLanguage",
        "WhistledLanguage",
    )
)

LINGUISTIC_GENRES = tuple(
    LDAC_TERMS + term
    for term in (
        "Formulaic",
        "Thesaurus",
        "Dialogue",
        "Oratory",
        "Report",
        "Ludic",
        "Procedural",
        "Narrative",
        "Interview",
        "Drama",
        "Informational",
    )
)

ANNOTATION_TYPES = tuple(
    LDAC_TERMS + term
    for term in (
        "Phonemic",
        "Phonetic",
        "Phonological",
        "Syntactic",
        "Translation",
        "Semantic",
        "Transcription",
        "Prosodic",
    )
)

LICENSE_PREFIX = "LICENSE"
TABLE_SCHEMA_URL = "https://specs.frictionlessdata.io/table-schema/"


@dataclass(frozen=True)
class ProfileConfig:
    """Lookup tables the rules consult.

    Every field defaults to the published profile; override only what
    differs, e.g. ProfileConfig(linguistic_genres=(...)).
    """

    collection_profile_url: str = COLLECTION_PROFILE_URL
    object_profile_url: str = OBJECT_PROFILE_URL
    language_authorities: tuple[str, ...] = LANGUAGE_AUTHORITIES
    communication_modes: tuple[str, ...] = COMMUNICATION_MODES
    linguistic_genres: tuple[str, ...] = LINGUISTIC_GENRES
    annotation_types: tuple[str, ...] = ANNOTATION_TYPES
    license_prefix: str = LICENSE_PREFIX
    table_schema_url: str = TABLE_SCHEMA_URL


DEFAULT_CONFIG = ProfileConfig()
