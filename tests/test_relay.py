import json
import urllib.error
import urllib.request

import pytest

from receipt_report import delete_receipt
from tests.helpers.http_stub import UrlopenStub

WEBHOOK = "https://script.example.test/macros/s/abc/exec"


def test_forwards_delete_action_and_returns_reply(monkeypatch: pytest.MonkeyPatch):
    stub = UrlopenStub(json.dumps({"success": True, "deleted": 2}), content_type="application/json")
    monkeypatch.setattr(urllib.request, "urlopen", stub)
    monkeypatch.setenv("SHEETS_WEBHOOK_URL", WEBHOOK)

    result = delete_receipt("Alice", 2)

    assert result == {"success": True, "deleted": 2}
    (req,) = stub.requests
    assert req.full_url == WEBHOOK
    assert req.get_method() == "POST"
    assert req.get_header("Content-type") == "application/json"
    assert json.loads(req.data) == {
        "action": "deleteReceipt",
        "customerName": "Alice",
        "receiptIndex": 2,
    }


def test_explicit_webhook_overrides_env(monkeypatch: pytest.MonkeyPatch):
    stub = UrlopenStub("[]")
    monkeypatch.setattr(urllib.request, "urlopen", stub)
    monkeypatch.setenv("SHEETS_WEBHOOK_URL", "https://elsewhere.test/")

    assert delete_receipt("Bob", 0, webhook_url=WEBHOOK) == []
    assert stub.requests[0].full_url == WEBHOOK


@pytest.mark.parametrize(("customer", "index"), [("", 1), ("   ", 1), (None, 1), ("Alice", None)])
def test_missing_fields(customer, index, monkeypatch: pytest.MonkeyPatch):
    stub = UrlopenStub("{}")
    monkeypatch.setattr(urllib.request, "urlopen", stub)
    with pytest.raises(ValueError, match="Missing required fields"):
        delete_receipt(customer, index, webhook_url=WEBHOOK)
    assert stub.requests == []


def test_unconfigured_webhook():
    with pytest.raises(RuntimeError, match="SHEETS_WEBHOOK_URL not configured"):
        delete_receipt("Alice", 1)


def test_webhook_http_error(monkeypatch: pytest.MonkeyPatch):
    err = urllib.error.HTTPError(WEBHOOK, 500, "Internal Server Error", None, None)
    monkeypatch.setattr(urllib.request, "urlopen", UrlopenStub(error=err))
    with pytest.raises(RuntimeError, match="500 Internal Server Error"):
        delete_receipt("Alice", 1, webhook_url=WEBHOOK)


def test_webhook_non_json_reply(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(urllib.request, "urlopen", UrlopenStub("<html>oops</html>"))
    with pytest.raises(RuntimeError, match="non-JSON"):
        delete_receipt("Alice", 1, webhook_url=WEBHOOK)
