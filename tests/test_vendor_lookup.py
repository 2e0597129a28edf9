"""Tests for the MAC vendor database."""

import threading

import pytest
import requests

from vargo.utils import vendor_lookup
from vargo.utils.error_handler import ErrorHandler, ErrorType
from vargo.utils.vendor_lookup import UNKNOWN_DEVICE, UNKNOWN_VENDOR, VendorDatabase

MANUF = """\
# This file is generated from IEEE data
00:00:0C\tCisco\tCisco Systems, Inc
00:11:22\tCimsys\tCIMSYS Inc

AA:BB:CC\tExampleCo
3c:52:82\tHP\tHewlett Packard
00:1B:C5:00:00/36\tConverging\tConverging Systems Inc.
broken-line-without-vendor
"""


@pytest.fixture
def manuf_file(tmp_path):
    path = tmp_path / "manuf.txt"
    path.write_text(MANUF, encoding="utf-8")
    return path


def test_lookup_uses_first_three_octets(manuf_file):
    vendors = VendorDatabase(database_file=manuf_file)

    assert vendors.lookup("00:11:22:33:44:55") == "Cimsys"
    assert vendors.lookup("00-00-0c-12-34-56") == "Cisco"
    assert vendors.lookup("3C:52:82:0A:BB:01") == "HP"
    assert vendors.lookup("aa:bb:cc:00:00:00") == "ExampleCo"


def test_comments_blank_and_long_prefixes_are_ignored(manuf_file):
    vendors = VendorDatabase(database_file=manuf_file)
    vendors.load()

    assert len(vendors) == 4


def test_unknown_prefix(manuf_file):
    assert VendorDatabase(database_file=manuf_file).lookup("FE:ED:FA:CE:00:01") == UNKNOWN_VENDOR


def test_short_address_is_unknown_device(manuf_file):
    assert VendorDatabase(database_file=manuf_file).lookup("00:11") == UNKNOWN_DEVICE


def test_missing_database_degrades_to_unknown(tmp_path):
    vendors = VendorDatabase(database_file=tmp_path / "absent.txt")

    assert vendors.lookup("00:11:22:33:44:55") == UNKNOWN_VENDOR
    assert vendors.loaded
    assert len(vendors) == 0


def test_database_is_parsed_once_under_concurrent_lookups(manuf_file, monkeypatch):
    opened = []
    real_open = open

    def counting_open(path, *args, **kwargs):
        opened.append(path)
        return real_open(path, *args, **kwargs)

    monkeypatch.setattr("builtins.open", counting_open)
    vendors = VendorDatabase(database_file=manuf_file)
    answers = []
    barrier = threading.Barrier(8)

    def look():
        barrier.wait()
        answers.append(vendors.lookup("00:11:22:33:44:55"))

    threads = [threading.Thread(target=look) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert answers == ["Cimsys"] * 8
    assert opened.count(manuf_file) == 1


class _Response:
    def __init__(self, chunks, status_error=None):
        self.chunks = chunks
        self.status_error = status_error

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self):
        if self.status_error:
            raise self.status_error

    def iter_content(self, chunk_size=1):
        return iter(self.chunks)


def test_download_writes_the_file(tmp_path, monkeypatch):
    target = tmp_path / "manuf.txt"
    requested = {}

    def fake_get(url, **kwargs):
        requested["url"] = url
        requested.update(kwargs)
        return _Response([b"00:11:22\tCimsys\n", b"AA:BB:CC\tExampleCo\n"])

    monkeypatch.setattr(vendor_lookup.requests, "get", fake_get)
    vendors = VendorDatabase(database_file=target, database_url="http://mirror/manuf", timeout=5)

    assert vendors.download() is True
    assert requested["url"] == "http://mirror/manuf"
    assert requested["timeout"] == 5
    assert vendors.lookup("AA:BB:CC:01:02:03") == "ExampleCo"


def test_download_failure_is_reported_not_raised(tmp_path, monkeypatch):
    def fake_get(url, **kwargs):
        raise requests.exceptions.ConnectionError("no route to host")

    monkeypatch.setattr(vendor_lookup.requests, "get", fake_get)
    handler = ErrorHandler()
    vendors = VendorDatabase(database_file=tmp_path / "manuf.txt", error_handler=handler)

    assert vendors.download() is False
    assert handler.error_statistics[ErrorType.NETWORK_ERROR] == 1
    assert not (tmp_path / "manuf.txt").exists()


def test_download_http_error(tmp_path, monkeypatch):
    monkeypatch.setattr(
        vendor_lookup.requests, "get",
        lambda url, **kw: _Response([], status_error=requests.exceptions.HTTPError("404")),
    )

    assert VendorDatabase(database_file=tmp_path / "manuf.txt").download() is False


class _BrokenResponse(_Response):
    def iter_content(self, chunk_size=1):
        yield b"AA:BB"
        raise requests.exceptions.ChunkedEncodingError("connection dropped")


def test_interrupted_download_keeps_the_previous_database(manuf_file, monkeypatch):
    monkeypatch.setattr(vendor_lookup.requests, "get", lambda url, **kw: _BrokenResponse([]))
    handler = ErrorHandler()
    vendors = VendorDatabase(database_file=manuf_file, error_handler=handler)

    assert vendors.download() is False
    assert manuf_file.read_text(encoding="utf-8") == MANUF
    assert vendors.lookup("00:11:22:33:44:55") == "Cimsys"
    assert handler.error_statistics[ErrorType.NETWORK_ERROR] == 1
    assert [p.name for p in manuf_file.parent.iterdir()] == ["manuf.txt"]


def test_successful_download_leaves_no_temporary_file(tmp_path, monkeypatch):
    monkeypatch.setattr(
        vendor_lookup.requests, "get", lambda url, **kw: _Response([b"00:11:22\tCimsys\n"])
    )
    target = tmp_path / "manuf.txt"

    assert VendorDatabase(database_file=target).download() is True
    assert [p.name for p in tmp_path.iterdir()] == ["manuf.txt"]
