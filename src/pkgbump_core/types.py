from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


KNOWN_HASH_ALGOS = ("md5", "sha1", "sha224", "sha256", "sha384", "sha512")

# makepkg sentinel for sources that are not checksummed (VCS checkouts etc.)
SKIP = "SKIP"


@dataclass(frozen=True)
class SourceEntry:
    filename: str
    url: str

    def to_dict(self) -> Dict[str, str]:
        return {"filename": self.filename, "url": self.url}


@dataclass
class Metadata:
    sources: List[SourceEntry] = field(default_factory=list)
    hashes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "sources": [s.to_dict() for s in self.sources],
            "hashes": list(self.hashes),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Metadata":
        sources = [
            SourceEntry(filename=str(it["filename"]), url=str(it.get("url") or ""))
            for it in data.get("sources", [])  # type: ignore[union-attr]
        ]
        hashes = [str(h) for h in data.get("hashes", [])]  # type: ignore[union-attr]
        return cls(sources=sources, hashes=hashes)
