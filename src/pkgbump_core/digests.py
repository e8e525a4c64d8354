from __future__ import annotations

from typing import List, Sequence
import hashlib

from .errors import UnsupportedDigestError
from .types import KNOWN_HASH_ALGOS


class MultiDigest:
    """Feeds the same byte stream into one hashlib object per algorithm."""

    def __init__(self, algorithms: Sequence[str]) -> None:
        for algo in algorithms:
            if algo not in KNOWN_HASH_ALGOS:
                raise UnsupportedDigestError(f"Unsupported hash algorithm: {algo}")
        self.algorithms = list(algorithms)
        self._reset()

    def _reset(self) -> None:
        self._hashes = [hashlib.new(a) for a in self.algorithms]

    def update(self, chunk: bytes) -> None:
        for h in self._hashes:
            h.update(chunk)

    def hexdigests(self) -> List[str]:
        out = [h.hexdigest() for h in self._hashes]
        self._reset()
        return out
