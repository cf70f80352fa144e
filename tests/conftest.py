"""Shared test fixtures."""

import io
import zipfile
from typing import Dict, Iterator, List, Optional, Tuple

import pytest
import requests


def make_archive(font_name: str, payload: bytes = b"font-bytes", folder: str = "") -> bytes:
    """Zip shaped like a Nerd Fonts release: regular, bold, license."""
    buf = io.BytesIO()
    prefix = f"{folder}/" if folder else ""
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr(f"{prefix}{font_name}NerdFont-Regular.ttf", payload)
        zf.writestr(f"{prefix}{font_name}NerdFont-Bold.ttf", b"bold-" + payload)
        zf.writestr(f"{prefix}LICENSE", b"OFL")
    return buf.getvalue()


class FakeResponse:
    def __init__(self, status_code: int, body: bytes, fail_midway: bool = False):
        self.status_code = status_code
        self.body = body
        self.fail_midway = fail_midway
        self.closed = False

    def iter_content(self, chunk_size: int = 1) -> Iterator[bytes]:
        for start in range(0, len(self.body), chunk_size):
            if self.fail_midway and start > 0:
                raise requests.ConnectionError("connection reset")
            yield self.body[start:start + chunk_size]

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class FakeRemote:
    """Stands in for the release endpoint, keyed by font name."""

    def __init__(self) -> None:
        self.archives: Dict[str, Tuple[int, bytes, bool]] = {}
        self.requested: List[str] = []

    def serve(self, font_name: str, body: bytes, status: int = 200, fail_midway: bool = False) -> None:
        self.archives[font_name] = (status, body, fail_midway)

    def get(self, url: str, stream: bool = False, timeout: Optional[float] = None, headers=None):
        self.requested.append(url)
        assert stream
        name = url.rsplit("/", 1)[-1][: -len(".zip")]
        if name not in self.archives:
            return FakeResponse(404, b"Not Found")
        status, body, fail_midway = self.archives[name]
        return FakeResponse(status, body, fail_midway)


@pytest.fixture
def prefix(tmp_path):
    d = tmp_path / ".termux"
    d.mkdir()
    return d


@pytest.fixture
def remote(monkeypatch):
    fake = FakeRemote()
    monkeypatch.setattr(requests, "get", fake.get)
    return fake


@pytest.fixture
def make_zip():
    return make_archive
