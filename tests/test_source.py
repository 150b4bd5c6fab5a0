import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path

import pytest

from receipt_report import (
    EmptySourceError,
    SourceFetchError,
    fetch_csv_text,
    load_csv_text,
    read_csv_text,
)
from tests.helpers.http_stub import UrlopenStub

CSV_TEXT = 'CUSTOMER,R1\nAlice,"{""grandTotal"":1}"\n'


def _install(monkeypatch: pytest.MonkeyPatch, stub: UrlopenStub) -> UrlopenStub:
    monkeypatch.setattr(urllib.request, "urlopen", stub)
    return stub


def test_fetch_returns_body_and_busts_caches(monkeypatch: pytest.MonkeyPatch):
    stub = _install(monkeypatch, UrlopenStub(CSV_TEXT))

    text = fetch_csv_text("https://example.test/api/customers?sheet=main", timeout=5.0)

    assert text == CSV_TEXT
    (req,) = stub.requests
    assert req.get_method() == "GET"
    parts = urllib.parse.urlsplit(req.full_url)
    query = dict(urllib.parse.parse_qsl(parts.query))
    assert parts.path == "/api/customers"
    assert query["sheet"] == "main"
    assert query["t"].isdigit()
    assert stub.timeouts == [5.0]


def test_fetch_decodes_declared_charset(monkeypatch: pytest.MonkeyPatch):
    body = "CUSTOMER,R1\nJosé,\n".encode("latin-1")
    _install(monkeypatch, UrlopenStub(body, content_type="text/csv; charset=latin-1"))
    assert "José" in fetch_csv_text("https://example.test/export.csv")


def test_fetch_http_error(monkeypatch: pytest.MonkeyPatch):
    err = urllib.error.HTTPError(
        "https://example.test/export.csv", 503, "Service Unavailable", None, None
    )
    _install(monkeypatch, UrlopenStub(error=err))
    with pytest.raises(SourceFetchError, match="503 Service Unavailable"):
        fetch_csv_text("https://example.test/export.csv")


def test_fetch_transport_error(monkeypatch: pytest.MonkeyPatch):
    _install(monkeypatch, UrlopenStub(error=urllib.error.URLError("connection refused")))
    with pytest.raises(SourceFetchError, match="connection refused"):
        fetch_csv_text("https://example.test/export.csv")


def test_fetch_empty_body(monkeypatch: pytest.MonkeyPatch):
    _install(monkeypatch, UrlopenStub("  \n"))
    with pytest.raises(EmptySourceError):
        fetch_csv_text("https://example.test/export.csv")


def test_read_local_export(tmp_path: Path):
    p = tmp_path / "customers.csv"
    p.write_text(CSV_TEXT, encoding="utf-8")
    assert read_csv_text(p) == CSV_TEXT

    blank = tmp_path / "blank.csv"
    blank.write_text("", encoding="utf-8")
    with pytest.raises(EmptySourceError):
        read_csv_text(blank)


def test_load_prefers_path_then_url_then_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    p = tmp_path / "customers.csv"
    p.write_text(CSV_TEXT, encoding="utf-8")
    stub = _install(monkeypatch, UrlopenStub("CUSTOMER\nfrom-url\n"))

    assert load_csv_text(csv_path=p, url="https://example.test/x") == CSV_TEXT
    assert stub.requests == []

    assert load_csv_text(url="https://example.test/x") == "CUSTOMER\nfrom-url\n"

    monkeypatch.setenv("RECEIPT_REPORT_CSV_URL", "https://example.test/from-env")
    load_csv_text()
    assert urllib.parse.urlsplit(stub.requests[-1].full_url).path == "/from-env"


def test_load_without_any_source():
    with pytest.raises(ValueError, match="No receipts source"):
        load_csv_text()
