from __future__ import annotations

import json
from io import StringIO

from pkgbump_core.projector import MetadataProjector, emit, to_json
from pkgbump_core.recipe.base import Recipe
from pkgbump_core.resolve import SourceResolver
from pkgbump_core.types import SKIP, Metadata, SourceEntry


def _project(recipe: Recipe, **kw) -> dict:
    md = MetadataProjector(**kw).project(recipe)
    return json.loads(to_json(md))


def test_empty_sources():
    doc = _project(Recipe(source=[], checksums={"sha256": []}))
    assert doc == {"sources": [], "hashes": []}


def test_no_checksums_gives_empty_hashes():
    doc = _project(Recipe(source=["https://example.com/a.tar.gz"]))
    assert doc["hashes"] == []
    assert doc["sources"] == [{"filename": "a.tar.gz", "url": "https://example.com/a.tar.gz"}]


def test_sources_keep_declaration_order():
    specs = [
        "foo-1.0.tar.gz::https://example.com/foo.tar.gz",
        "https://example.com/bar-2.0.tar.gz",
        "local.patch",
    ]
    doc = _project(Recipe(source=specs))
    assert len(doc["sources"]) == 3
    assert doc["sources"][0] == {"filename": "foo-1.0.tar.gz", "url": "https://example.com/foo.tar.gz"}
    assert doc["sources"][1]["filename"] == "bar-2.0.tar.gz"
    assert doc["sources"][2] == {"filename": "local.patch", "url": ""}


def test_hash_order_is_algorithm_then_declaration():
    recipe = Recipe(
        source=["a", "b"],
        checksums={"sha256": ["s1", SKIP], "md5": ["m1", "m2"], "sha1": ["h1", "h2"]},
    )
    doc = _project(recipe)
    assert doc["hashes"] == ["m1", "m2", "h1", "h2", "s1", SKIP]


def test_single_sha256():
    doc = _project(Recipe(source=["x.tar.gz"], checksums={"sha256": ["abcdef"]}))
    assert doc["hashes"] == ["abcdef"]


def test_arch_arrays_follow_generic_ones():
    recipe = Recipe(
        source=["common.tar.gz"],
        checksums={"sha256": ["c"]},
        arch=["x86_64", "aarch64"],
        arch_source={"x86_64": ["https://example.com/bin-x86_64.tar.gz"]},
        arch_checksums={"x86_64": {"sha256": ["x"]}},
    )
    assert _project(recipe)["hashes"] == ["c"]
    doc = _project(recipe, carch="x86_64")
    assert [s["filename"] for s in doc["sources"]] == ["common.tar.gz", "bin-x86_64.tar.gz"]
    assert doc["hashes"] == ["c", "x"]
    assert len(_project(recipe, carch="aarch64")["sources"]) == 1


def test_strings_are_escaped():
    buf = StringIO()
    emit([SourceEntry(filename='we"ird\\name', url="https://example.com/?q=\n")], ["ab\tc"], buf)
    doc = json.loads(buf.getvalue())
    assert doc["sources"][0]["filename"] == 'we"ird\\name'
    assert doc["sources"][0]["url"] == "https://example.com/?q=\n"
    assert doc["hashes"] == ["ab\tc"]


def test_compact_shape_and_idempotence():
    recipe = Recipe(source=["n::https://e.org/x"], checksums={"md5": ["d"]})
    first = to_json(MetadataProjector().project(recipe))
    second = to_json(MetadataProjector().project(recipe))
    assert first == second
    assert first == '{"sources":[{"filename":"n","url":"https://e.org/x"}],"hashes":["d"]}\n'


def test_injected_resolver_is_used():
    resolver = SourceResolver(
        filename=lambda s: s.upper(),
        url=lambda s: "mirror://" + s,
        integrity=lambda recipe, carch: ["fixed"],
    )
    md = MetadataProjector(resolver=resolver).project(Recipe(source=["pkg"]))
    assert md == Metadata(sources=[SourceEntry(filename="PKG", url="mirror://pkg")], hashes=["fixed"])


def test_metadata_dict_round_trip():
    md = Metadata(sources=[SourceEntry("a", "u")], hashes=["h"])
    assert Metadata.from_dict(json.loads(to_json(md))) == md
