"""
Test loading JSON-LD crates into entities and resolving property names.
"""

import json

import pytest

from ldaclint.crate import Crate, CrateError, to_values
from ldaclint.model import Entity, Literal, Reference


def test_to_values():
    assert to_values("x") == [Literal("x")]
    assert to_values(["a", 2]) == [Literal("a"), Literal(2)]
    assert to_values({"@id": "#a"}) == [Reference("#a")]
    assert to_values({"@value": "hello", "@language": "en"}) == [Literal("hello")]
    assert to_values({"name": "inline"}) == [Reference(None)]
    assert to_values(None) == []


def test_load_example(object_crate):
    entity = object_crate.get_entity("audio.wav")
    assert entity.types == ["File", "PrimaryMaterial"]
    assert entity.values("name") == [Literal("Session audio")]
    assert entity.values("@id") == [Literal("audio.wav")]
    assert object_crate.get_item("audio.wav")
    assert not object_crate.get_item("video.mp4")
    assert object_crate.get_entity("video.mp4") is None
    assert len(object_crate.get_graph()) == 9


def test_root_from_descriptor(object_crate):
    assert object_crate.root.id == "./"


def test_root_falls_back_to_self_reference():
    crate = Crate.from_jsonld({"@graph": [{"@id": "./", "@type": "Dataset"}]})
    assert crate.root.id == "./"
    assert Crate.from_jsonld({"@graph": []}).root is None


def test_load_from_path(examples_dir):
    crate = Crate.load(examples_dir / "collection-crate.json")
    assert crate.source.endswith("collection-crate.json")
    assert crate.root.types == ["Dataset", "RepositoryCollection"]


def test_load_from_json_text(object_doc):
    crate = Crate.from_jsonld(json.dumps(object_doc))
    assert crate.get_item("transcript.eaf")


@pytest.mark.parametrize("document, message", [
    ("{not json", "not valid JSON"),
    ("[]", "must be a JSON object"),
    ({"@context": {}}, "no @graph"),
    ({"@graph": [{"@id": "a"}, {"@id": "a"}]}, "Duplicate @id"),
])
def test_unusable_documents(document, message):
    with pytest.raises(CrateError, match=message):
        Crate.from_jsonld(document)


def test_entities_without_id_are_kept_but_not_indexed():
    crate = Crate.from_jsonld({"@graph": [{"name": "anonymous"}]})
    assert len(crate.get_graph()) == 1
    assert crate.get_graph()[0].id is None


def test_entity_identity_is_identifier():
    assert Entity("a", ["File"]) == Entity("a", ["Dataset"])
    assert Entity("a") != Entity("b")
    assert len({Entity("a"), Entity("a")}) == 1


def test_fill_missing_is_idempotent():
    entity = Entity("a")
    assert entity.fill_missing("inLanguage", [Literal("en")])
    assert not entity.fill_missing("inLanguage", [Literal("fr")])
    assert entity.values("inLanguage") == [Literal("en")]
    assert not entity.fill_missing("subjectLanguage", [])


# ── Term resolution ──────────────────────────────────────────────────


def test_resolve_term_with_vocab(object_crate):
    assert object_crate.resolve_term("name") == "http://schema.org/name"
    assert object_crate.resolve_term("conformsTo") == "http://purl.org/dc/terms/conformsTo"


def test_resolve_term_with_explicit_terms():
    crate = Crate.from_jsonld({
        "@context": {"name": "http://schema.org/name"},
        "@graph": [],
    })
    assert crate.resolve_term("name") == "http://schema.org/name"
    assert not crate.resolve_term("mystery")


def test_remote_context_is_not_fetched():
    with pytest.warns(UserWarning, match="not available locally"):
        crate = Crate.from_jsonld({
            "@context": "https://w3id.org/ro/crate/1.1/context",
            "@graph": [],
        })
    assert not crate.resolve_term("name")


def test_remote_context_from_local_copy():
    url = "https://w3id.org/ro/crate/1.1/context"
    crate = Crate.from_jsonld(
        {"@context": [url, {"extra": "http://example.org/extra"}], "@graph": []},
        local_contexts={url: {"@context": {"name": "http://schema.org/name"}}},
    )
    assert crate.resolve_term("name") == "http://schema.org/name"
    assert crate.resolve_term("extra") == "http://example.org/extra"
