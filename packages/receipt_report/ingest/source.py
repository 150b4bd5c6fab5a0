"""Retrieve the raw customers/receipts CSV export.

The export is read from a local file or fetched with a plain GET. Empty text
is refused outright so that "no data available" is never confused with "no
receipts recorded". There is no retry or caching layer here.
"""

from __future__ import annotations

import os
import time
import urllib.error
import urllib.parse
import urllib.request
from os import PathLike
from pathlib import Path

from ..logging_setup import get_logger

_logger = get_logger("receipt_report.ingest.source")


class EmptySourceError(ValueError):
    """The export source returned no text to parse."""


class SourceFetchError(RuntimeError):
    """The export could not be retrieved (HTTP or transport failure)."""


def _require_text(text: str | None, origin: str) -> str:
    if text is None or not text.strip():
        raise EmptySourceError(f"Received empty receipts export from {origin}")
    return text


def _with_cache_buster(url: str) -> str:
    parts = urllib.parse.urlsplit(url)
    query = urllib.parse.parse_qsl(parts.query, keep_blank_values=True)
    query.append(("t", str(int(time.time() * 1000))))
    return urllib.parse.urlunsplit(parts._replace(query=urllib.parse.urlencode(query)))


def fetch_csv_text(url: str, *, timeout: float = 30.0) -> str:
    """GET the export at ``url`` and return its body as text.

    A ``t=<epoch millis>`` query parameter is appended so intermediaries do
    not serve a stale copy. Raises :class:`SourceFetchError` for non-2xx
    responses and transport failures, :class:`EmptySourceError` for an empty
    body.
    """

    req = urllib.request.Request(_with_cache_buster(url), method="GET")
    t0 = time.perf_counter()
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            body = resp.read()
            charset = resp.headers.get_content_charset() or "utf-8"
    except urllib.error.HTTPError as e:
        raise SourceFetchError(f"Failed to fetch receipts: {e.code} {e.reason}") from e
    except urllib.error.URLError as e:
        raise SourceFetchError(f"Failed to fetch receipts: {e.reason}") from e
    except TimeoutError as e:
        raise SourceFetchError(f"Failed to fetch receipts: timed out after {timeout}s") from e

    text = body.decode(charset, errors="replace")
    _logger.info(
        "fetch_csv_text:done bytes=%d latency_ms=%.2f",
        len(body),
        (time.perf_counter() - t0) * 1000.0,
    )
    return _require_text(text, url)


def read_csv_text(path: str | PathLike[str]) -> str:
    """Read a local export (UTF-8). Raises :class:`EmptySourceError` when blank."""

    p = Path(path)
    text = p.read_text(encoding="utf-8")
    return _require_text(text, str(p))


def load_csv_text(
    *, csv_path: str | PathLike[str] | None = None, url: str | None = None
) -> str:
    """Load export text from the first available source.

    Precedence: ``csv_path``, then ``url``, then the ``RECEIPT_REPORT_CSV_URL``
    environment variable. Raises ``ValueError`` when none is given.
    """

    if csv_path is not None:
        return read_csv_text(csv_path)
    resolved = url or (os.getenv("RECEIPT_REPORT_CSV_URL") or "").strip()
    if not resolved:
        raise ValueError(
            "No receipts source given: pass --csv-path or --url, "
            "or set RECEIPT_REPORT_CSV_URL."
        )
    return fetch_csv_text(resolved)


__all__ = [
    "EmptySourceError",
    "SourceFetchError",
    "fetch_csv_text",
    "load_csv_text",
    "read_csv_text",
]
