from __future__ import annotations

import hashlib

import pytest

from fakes import FakeSession
from pkgbump_core.digests import MultiDigest
from pkgbump_core.errors import FetchError, PkgbumpError
from pkgbump_core.fetch import SourceFetcher


BODY = b"widget source tarball contents" * 1000


def test_multidigest_matches_hashlib_and_resets():
    d = MultiDigest(["md5", "sha256"])
    d.update(b"hel")
    d.update(b"lo")
    assert d.hexdigests() == [hashlib.md5(b"hello").hexdigest(), hashlib.sha256(b"hello").hexdigest()]
    assert d.hexdigests() == [hashlib.md5(b"").hexdigest(), hashlib.sha256(b"").hexdigest()]


def test_multidigest_rejects_unknown():
    with pytest.raises(PkgbumpError):
        MultiDigest(["b2"])


def test_download_writes_file_and_digests(tmp_path):
    url = "https://example.com/w.tar.gz"
    session = FakeSession({url: BODY})
    fetcher = SourceFetcher(session=session, chunk_size=4096, user_agent="pkgbump/test")
    d = MultiDigest(["sha512"])
    dest = fetcher.download(url, tmp_path / "out" / "w.tar.gz", d)
    assert dest.read_bytes() == BODY
    assert d.hexdigests() == [hashlib.sha512(BODY).hexdigest()]
    assert session.headers_seen == [{"User-Agent": "pkgbump/test"}]


def test_download_http_error(tmp_path):
    url = "https://example.com/missing"
    fetcher = SourceFetcher(session=FakeSession({url: b""}, status={url: 404}))
    with pytest.raises(FetchError, match="HTTP 404"):
        fetcher.download(url, tmp_path / "missing", MultiDigest(["md5"]))
    assert not (tmp_path / "missing").exists()


def test_download_connection_error(tmp_path):
    fetcher = SourceFetcher(session=FakeSession({}))
    with pytest.raises(FetchError):
        fetcher.download("https://unreachable.example/x", tmp_path / "x", MultiDigest(["md5"]))


def test_hash_local(tmp_path):
    p = tmp_path / "fix.patch"
    p.write_bytes(b"patch")
    d = MultiDigest(["sha1"])
    SourceFetcher(session=FakeSession({})).hash_local(p, d)
    assert d.hexdigests() == [hashlib.sha1(b"patch").hexdigest()]
    with pytest.raises(FetchError):
        SourceFetcher(session=FakeSession({})).hash_local(tmp_path / "nope", d)


def test_download_interrupted_removes_partial_file(tmp_path):
    url = "https://example.com/big.tar.gz"
    session = FakeSession({url: BODY}, fail_after={url: 2})
    fetcher = SourceFetcher(session=session, chunk_size=1024)
    dest = tmp_path / "big.tar.gz"
    with pytest.raises(FetchError, match="connection reset"):
        fetcher.download(url, dest, MultiDigest(["sha256"]))
    assert not dest.exists()
