from __future__ import annotations

from dataclasses import dataclass, field
from io import StringIO
from typing import Iterable, List, Optional, TextIO
import json
import logging

from .recipe.base import Recipe
from .resolve import SourceResolver, default_resolver
from .types import Metadata, SourceEntry


def _json_str(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


@dataclass
class MetadataProjector:
    """Projects a recipe onto its source list and checksum values."""

    resolver: SourceResolver = field(default_factory=default_resolver)
    carch: Optional[str] = None

    def resolve_filename(self, spec: str) -> str:
        return self.resolver.filename(spec)

    def resolve_url(self, spec: str) -> str:
        return self.resolver.url(spec)

    def resolve_sources(self, recipe: Recipe) -> List[SourceEntry]:
        return [
            SourceEntry(filename=self.resolve_filename(s), url=self.resolve_url(s))
            for s in recipe.sources_for(self.carch)
        ]

    def collect_hashes(self, recipe: Recipe) -> List[str]:
        return list(self.resolver.integrity(recipe, self.carch))

    def project(self, recipe: Recipe) -> Metadata:
        md = Metadata(sources=self.resolve_sources(recipe), hashes=self.collect_hashes(recipe))
        logging.getLogger(__name__).debug(
            "Projected recipe: sources=%d hashes=%d", len(md.sources), len(md.hashes)
        )
        return md


def emit(sources: Iterable[SourceEntry], hashes: Iterable[str], out: TextIO) -> None:
    # written element by element; sources always precede hashes
    out.write('{"sources":[')
    for i, src in enumerate(sources):
        if i:
            out.write(",")
        out.write(f'{{"filename":{_json_str(src.filename)},"url":{_json_str(src.url)}}}')
    out.write('],"hashes":[')
    for i, h in enumerate(hashes):
        if i:
            out.write(",")
        out.write(_json_str(h))
    out.write("]}\n")


def to_json(metadata: Metadata) -> str:
    buf = StringIO()
    emit(metadata.sources, metadata.hashes, buf)
    return buf.getvalue()
