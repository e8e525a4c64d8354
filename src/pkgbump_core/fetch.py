from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging

import requests

from .digests import MultiDigest
from .errors import FetchError


DEFAULT_CHUNK_SIZE = 8 * 1024


@dataclass
class SourceFetcher:
    session: requests.Session = field(default_factory=requests.Session)
    timeout: float = 60.0
    chunk_size: int = DEFAULT_CHUNK_SIZE
    user_agent: Optional[str] = None

    def download(self, url: str, dest: Path, digest: MultiDigest) -> Path:
        """Stream ``url`` into ``dest`` while feeding every chunk to ``digest``."""
        log = logging.getLogger(__name__)
        headers = {"User-Agent": self.user_agent} if self.user_agent else None
        try:
            resp = self.session.get(url, stream=True, timeout=self.timeout, headers=headers)
        except requests.RequestException as e:
            raise FetchError(f"Failed to fetch {url}: {e}") from e
        try:
            try:
                resp.raise_for_status()
            except requests.HTTPError as e:
                raise FetchError(f"Failed to fetch {url}: HTTP {resp.status_code}") from e
            dest.parent.mkdir(parents=True, exist_ok=True)
            size = 0
            try:
                with dest.open("wb") as f:
                    for chunk in resp.iter_content(chunk_size=self.chunk_size):
                        if not chunk:
                            continue
                        f.write(chunk)
                        digest.update(chunk)
                        size += len(chunk)
            except requests.RequestException:
                # no partial downloads left behind
                dest.unlink(missing_ok=True)
                raise
        except requests.RequestException as e:
            raise FetchError(f"Failed to fetch {url}: {e}") from e
        finally:
            resp.close()
        log.debug("Downloaded %s (%d bytes) to %s", url, size, dest)
        return dest

    def hash_local(self, path: Path, digest: MultiDigest) -> Path:
        if not path.is_file():
            raise FetchError(f"Local source not found: {path}")
        with path.open("rb") as f:
            while True:
                chunk = f.read(self.chunk_size)
                if not chunk:
                    break
                digest.update(chunk)
        return path
