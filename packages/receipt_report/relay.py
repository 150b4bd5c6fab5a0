"""Forward delete-receipt requests to the spreadsheet webhook.

The webhook (a spreadsheet script endpoint) owns the receipt data; this
module only checks that the required fields are present, POSTs a
``deleteReceipt`` action and hands back the webhook's JSON reply verbatim.
"""

from __future__ import annotations

import json
import os
import urllib.error
import urllib.request
from typing import Any

from .logging_setup import get_logger

_logger = get_logger("receipt_report.relay")


def delete_receipt(
    customer_name: str | None,
    receipt_index: int | None,
    *,
    webhook_url: str | None = None,
    timeout: float = 30.0,
) -> Any:
    """Ask the spreadsheet backend to delete one of a customer's receipts.

    Parameters
    ----------
    customer_name:
        Value of the customer's ``CUSTOMER`` cell.
    receipt_index:
        Position of the receipt within that customer's row, as understood by
        the backend.
    webhook_url:
        Override for the ``SHEETS_WEBHOOK_URL`` environment variable.

    Raises ``ValueError`` when a required field is missing and
    ``RuntimeError`` when the webhook is not configured, answers with a
    non-2xx status, or returns something other than JSON.
    """

    if not customer_name or not customer_name.strip() or receipt_index is None:
        raise ValueError("Missing required fields: customer name and receipt index")

    url = webhook_url or (os.getenv("SHEETS_WEBHOOK_URL") or "").strip()
    if not url:
        raise RuntimeError("SHEETS_WEBHOOK_URL not configured")

    payload = {
        "action": "deleteReceipt",
        "customerName": customer_name,
        "receiptIndex": receipt_index,
    }
    req = urllib.request.Request(url, data=json.dumps(payload).encode("utf-8"), method="POST")
    req.add_header("Content-Type", "application/json")

    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            body = resp.read()
    except urllib.error.HTTPError as e:
        raise RuntimeError(f"Failed to delete receipt: {e.code} {e.reason}") from e
    except urllib.error.URLError as e:
        raise RuntimeError(f"Failed to delete receipt: {e.reason}") from e

    try:
        result = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise RuntimeError("Failed to delete receipt: webhook returned non-JSON body") from e

    _logger.info(
        "delete_receipt:done customer=%s receipt_index=%s", customer_name, receipt_index
    )
    return result


__all__ = ["delete_receipt"]
