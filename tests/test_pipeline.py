"""End-to-end installation transactions against a fake release endpoint."""

import pytest

from termfont.config.settings import FontSettings
from termfont.fetching.fetcher import ArchiveFetcher
from termfont.installation.pipeline import download_fonts
from termfont.utils.exceptions import (
    FailedZipExtractionError,
    FlushTemporaryZipFileError,
    FontNotFoundError,
    InvalidHttpResponseError,
    OpenPrefixDirectoryError,
    SaveFontFileError,
)


def assert_no_scratch(prefix):
    assert not (prefix / "tmp").exists()
    assert not (prefix / "tmp.zip").exists()


def test_download_installs_each_font(prefix, remote, make_zip):
    remote.serve("0xProto", make_zip("0xProto", b"proto"))
    remote.serve("3270", make_zip("3270", b"ibm", folder="3270"))

    installed = download_fonts(["0xProto", "3270"], prefix)

    assert installed == [prefix / "fonts" / "0xProto.ttf", prefix / "fonts" / "3270.ttf"]
    assert (prefix / "fonts" / "0xProto.ttf").read_bytes() == b"proto"
    assert (prefix / "fonts" / "3270.ttf").read_bytes() == b"ibm"
    assert_no_scratch(prefix)


def test_download_twice_keeps_latest_bytes(prefix, remote, make_zip):
    remote.serve("Hack", make_zip("Hack", b"first"))
    download_fonts(["Hack"], prefix)
    remote.serve("Hack", make_zip("Hack", b"second"))
    download_fonts(["Hack"], prefix)

    assert sorted(p.name for p in (prefix / "fonts").iterdir()) == ["Hack.ttf"]
    assert (prefix / "fonts" / "Hack.ttf").read_bytes() == b"second"
    assert_no_scratch(prefix)


def test_failed_font_does_not_block_separate_download(prefix, remote, make_zip):
    remote.serve("B", make_zip("B"))

    with pytest.raises(InvalidHttpResponseError):
        download_fonts(["A"], prefix)
    download_fonts(["B"], prefix)

    assert (prefix / "fonts" / "B.ttf").exists()
    assert not (prefix / "fonts" / "A.ttf").exists()
    assert_no_scratch(prefix)


def test_batch_stops_at_first_failure(prefix, remote, make_zip):
    remote.serve("A", make_zip("A"))
    remote.serve("C", make_zip("C"))

    with pytest.raises(InvalidHttpResponseError):
        download_fonts(["A", "B", "C"], prefix)

    assert (prefix / "fonts" / "A.ttf").exists()
    assert not (prefix / "fonts" / "C.ttf").exists()
    assert remote.requested[-1].endswith("/B.zip")


def test_corrupt_archive_leaves_no_scratch(prefix, remote):
    remote.serve("Hack", b"PK\x03\x04 definitely not a zip")

    with pytest.raises(FailedZipExtractionError):
        download_fonts(["Hack"], prefix)

    assert_no_scratch(prefix)
    assert not (prefix / "fonts" / "Hack.ttf").exists()


def test_archive_without_member_leaves_no_scratch(prefix, remote, make_zip):
    remote.serve("Hack", make_zip("Other"))

    with pytest.raises(FontNotFoundError):
        download_fonts(["Hack"], prefix)

    assert_no_scratch(prefix)


def test_http_error_leaves_no_scratch(prefix, remote):
    remote.serve("Hack", b"", status=503)

    with pytest.raises(InvalidHttpResponseError):
        download_fonts(["Hack"], prefix)

    assert_no_scratch(prefix)


def test_leftover_scratch_is_cleared(prefix, remote, make_zip):
    (prefix / "tmp").mkdir()
    (prefix / "tmp" / "HackNerdFont-Regular.ttf").write_bytes(b"stale")
    (prefix / "tmp.zip").write_bytes(b"stale")
    remote.serve("Hack", make_zip("Hack", b"fresh"))

    download_fonts(["Hack"], prefix)

    assert (prefix / "fonts" / "Hack.ttf").read_bytes() == b"fresh"
    assert_no_scratch(prefix)


def test_missing_prefix_fails_before_network(tmp_path, remote):
    with pytest.raises(OpenPrefixDirectoryError):
        download_fonts(["Hack"], tmp_path / "missing")
    assert remote.requested == []
    assert not (tmp_path / "missing").exists()


def test_custom_settings_are_used(prefix, remote, make_zip):
    remote.serve("Hack", make_zip("Hack"))
    settings = FontSettings(base_url="https://mirror.example/nf", buffer_size=16)
    seen = []

    download_fonts(["Hack"], prefix, settings, callback=lambda name, path: seen.append((name, path)))

    assert remote.requested == ["https://mirror.example/nf/Hack.zip"]
    assert seen == [("Hack", prefix / "fonts" / "Hack.ttf")]


def test_path_like_name_is_rejected_before_network(prefix, remote, make_zip):
    remote.serve("../Hack", make_zip("Hack"))

    with pytest.raises(SaveFontFileError):
        download_fonts(["../Hack"], prefix)

    assert remote.requested == []
    assert not (prefix / "Hack.ttf").exists()
    assert_no_scratch(prefix)


def test_write_failure_into_scratch_archive(prefix, remote, make_zip, monkeypatch):
    remote.serve("Hack", make_zip("Hack"))

    def full_disk(self, font_name, sink):
        sink.write(b"PK")
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(ArchiveFetcher, "fetch", full_disk)

    with pytest.raises(FlushTemporaryZipFileError) as exc_info:
        download_fonts(["Hack"], prefix)

    assert isinstance(exc_info.value.__cause__, OSError)
    assert_no_scratch(prefix)
    assert not (prefix / "fonts" / "Hack.ttf").exists()
