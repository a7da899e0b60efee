import json

import pytest

from ldaclint.crate import Crate


@pytest.fixture
def examples_dir(request):
    return request.config.rootpath / "examples"


@pytest.fixture
def object_doc(examples_dir):
    return json.loads((examples_dir / "object-crate.json").read_text())


@pytest.fixture
def collection_doc(examples_dir):
    return json.loads((examples_dir / "collection-crate.json").read_text())


@pytest.fixture
def object_crate(object_doc):
    return Crate.from_jsonld(object_doc, source="object-crate.json")


@pytest.fixture
def collection_crate(collection_doc):
    return Crate.from_jsonld(collection_doc, source="collection-crate.json")


VOCAB_CONTEXT = {"@vocab": "http://schema.org/"}


@pytest.fixture
def make_crate():
    """Build a small crate from node dicts; every property resolves via @vocab."""

    def _make(*nodes, context=None):
        return Crate.from_jsonld({
            "@context": VOCAB_CONTEXT if context is None else context,
            "@graph": list(nodes),
        })

    return _make
